"""Data models for fitness log entries and the dashboard snapshot.

Entries are transient: built from user input, sent once to the backend and
discarded. The backend assigns every ``id``. Wire payloads use camelCase keys
and ISO dates; Python attributes are snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional


def _parse_date(value: Any) -> date:
    """Parse a wire date (``YYYY-MM-DD`` or a full ISO timestamp)."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _parse_bool(value: Any) -> bool:
    """Parse a checkbox cell; Sheets may return booleans, numbers or strings."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "x")
    return bool(value)


def _compact(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: v for k, v in payload.items() if v is not None}


@dataclass
class WeightEntry:
    """A body weight measurement, optionally with body fat percentage."""

    date: date
    weight: float
    body_fat: Optional[float] = None
    notes: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id": self.id,
            "date": self.date.isoformat(),
            "weight": self.weight,
            "bodyFat": self.body_fat,
            "notes": self.notes,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeightEntry":
        return cls(
            id=_optional_str(data.get("id")),
            date=_parse_date(data["date"]),
            weight=float(data["weight"]),
            body_fat=_optional_float(data.get("bodyFat")),
            notes=_optional_str(data.get("notes")),
        )


@dataclass
class WorkoutEntry:
    """A single exercise set logged with load and repetitions."""

    date: date
    exercise: str
    weight: float
    reps: int
    sets: Optional[int] = None
    notes: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id": self.id,
            "date": self.date.isoformat(),
            "exercise": self.exercise,
            "weight": self.weight,
            "reps": self.reps,
            "sets": self.sets,
            "notes": self.notes,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkoutEntry":
        sets = data.get("sets")
        return cls(
            id=_optional_str(data.get("id")),
            date=_parse_date(data["date"]),
            exercise=str(data["exercise"]),
            weight=float(data["weight"]),
            reps=int(data["reps"]),
            sets=int(sets) if sets not in (None, "") else None,
            notes=_optional_str(data.get("notes")),
        )


@dataclass
class HabitEntry:
    """Daily habit checklist. The backend keeps one entry per date."""

    date: date
    sleep: bool = False
    water: bool = False
    cardio: bool = False
    notes: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id": self.id,
            "date": self.date.isoformat(),
            "sleep": self.sleep,
            "water": self.water,
            "cardio": self.cardio,
            "notes": self.notes,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HabitEntry":
        return cls(
            id=_optional_str(data.get("id")),
            date=_parse_date(data["date"]),
            sleep=_parse_bool(data.get("sleep")),
            water=_parse_bool(data.get("water")),
            cardio=_parse_bool(data.get("cardio")),
            notes=_optional_str(data.get("notes")),
        )


@dataclass
class ProgressPhoto:
    """Metadata for a hosted progress photo."""

    date: date
    url: str
    description: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id": self.id,
            "date": self.date.isoformat(),
            "url": self.url,
            "description": self.description,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProgressPhoto":
        return cls(
            id=_optional_str(data.get("id")),
            date=_parse_date(data["date"]),
            url=str(data["url"]),
            description=_optional_str(data.get("description")),
        )


@dataclass
class PersonalRecord:
    """Best logged set for one exercise."""

    exercise: str
    weight: float
    reps: int
    date: date

    def to_dict(self) -> dict[str, Any]:
        return {
            "exercise": self.exercise,
            "weight": self.weight,
            "reps": self.reps,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PersonalRecord":
        return cls(
            exercise=str(data["exercise"]),
            weight=float(data["weight"]),
            reps=int(data["reps"]),
            date=_parse_date(data["date"]),
        )


@dataclass
class OneRepMax:
    """Estimated one-rep maximums for the three main lifts, in kg."""

    bench: float = 0.0
    squat: float = 0.0
    deadlift: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"bench": self.bench, "squat": self.squat, "deadlift": self.deadlift}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OneRepMax":
        return cls(
            bench=float(data.get("bench", 0)),
            squat=float(data.get("squat", 0)),
            deadlift=float(data.get("deadlift", 0)),
        )


@dataclass
class DashboardData:
    """Read-only summary computed by the backend.

    BMI, progress percentage and compliance are passed through unmodified.
    """

    current_weight: float
    bmi: float
    progress_percentage: float
    target_weight: float
    one_rep_max: OneRepMax
    habits_compliance: float
    current_body_fat: Optional[float] = None
    personal_records: list[PersonalRecord] = field(default_factory=list)
    recent_photos: list[ProgressPhoto] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "currentWeight": self.current_weight,
            "currentBodyFat": self.current_body_fat,
            "bmi": self.bmi,
            "progressPercentage": self.progress_percentage,
            "targetWeight": self.target_weight,
            "oneRepMax": self.one_rep_max.to_dict(),
            "personalRecords": [pr.to_dict() for pr in self.personal_records],
            "habitsCompliance": self.habits_compliance,
            "recentPhotos": [p.to_dict() for p in self.recent_photos],
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DashboardData":
        return cls(
            current_weight=float(data["currentWeight"]),
            current_body_fat=_optional_float(data.get("currentBodyFat")),
            bmi=float(data["bmi"]),
            progress_percentage=float(data["progressPercentage"]),
            target_weight=float(data["targetWeight"]),
            one_rep_max=OneRepMax.from_dict(data.get("oneRepMax") or {}),
            personal_records=[
                PersonalRecord.from_dict(pr) for pr in data.get("personalRecords") or []
            ],
            habits_compliance=float(data.get("habitsCompliance", 0)),
            recent_photos=[
                ProgressPhoto.from_dict(p) for p in data.get("recentPhotos") or []
            ],
        )
