"""Workout logging page."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from fittrack.api.services import WorkoutService
from fittrack.pages.base import FormMessage, FormPage, ValidationError
from fittrack.tracking.calculations import (
    can_estimate_one_rep_max,
    estimate_one_rep_max,
)
from fittrack.tracking.models import WorkoutEntry

COMMON_EXERCISES = (
    "Press de Banca",
    "Sentadilla",
    "Peso Muerto",
    "Press Militar",
    "Remo con Barra",
    "Dominadas",
    "Flexiones",
    "Plancha",
    "Curl de Bíceps",
    "Extensión de Tríceps",
    "Prensa de Piernas",
    "Peso Muerto Rumano",
)


@dataclass
class WorkoutForm:
    date: date = field(default_factory=date.today)
    exercise: str = ""
    weight: float = 0.0
    reps: int = 0
    sets: int = 1
    notes: str = ""

    def to_entry(self) -> WorkoutEntry:
        return WorkoutEntry(
            date=self.date,
            exercise=self.exercise.strip(),
            weight=self.weight,
            reps=self.reps,
            sets=self.sets,
            notes=self.notes.strip() or None,
        )


class WorkoutsPage(FormPage):
    """Log a set and preview its estimated one-rep max."""

    success_text = "Entrenamiento registrado correctamente"
    failure_text = "Error al registrar entrenamiento"

    def __init__(self, service: WorkoutService):
        super().__init__()
        self.service = service
        self.form = WorkoutForm()

    @property
    def estimated_one_rep_max(self) -> Optional[int]:
        if not can_estimate_one_rep_max(self.form.weight, self.form.reps):
            return None
        return estimate_one_rep_max(self.form.weight, self.form.reps)

    def validate(self) -> None:
        if self.form.weight <= 0 or self.form.reps <= 0:
            raise ValidationError("El peso y las repeticiones deben ser mayores a 0")
        if not self.form.exercise.strip():
            raise ValidationError("Debes seleccionar un ejercicio")

    def submit(self) -> FormMessage:
        if not self._check():
            return self.message  # type: ignore[return-value]

        with self._submitting():
            response = self.service.add(self.form.to_entry())
            return self._finish(response)

    def on_success(self) -> None:
        # Date and exercise stay selected for the next set
        self.form = WorkoutForm(date=self.form.date, exercise=self.form.exercise)
