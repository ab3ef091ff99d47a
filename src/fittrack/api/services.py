"""Domain services binding the generic client to resource paths.

Services do no validation, aggregation or caching; the backend owns all of
that. Each method is a fixed (verb, path) pair. Writes return whatever the
backend echoes back in ``data`` without decoding it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

import httpx

from fittrack.api.client import SheetsClient
from fittrack.api.images import ImageUploader, ImageUploadError
from fittrack.api.response import ApiResponse
from fittrack.config.settings import Settings
from fittrack.tracking.models import (
    DashboardData,
    HabitEntry,
    PersonalRecord,
    ProgressPhoto,
    WeightEntry,
    WorkoutEntry,
)

logger = logging.getLogger(__name__)


def _list_of(model):
    def decode(data: Any) -> list:
        if data is None:
            return []
        if not isinstance(data, list):
            raise TypeError(f"expected a list, got {type(data).__name__}")
        return [model.from_dict(item) for item in data]

    return decode


def _optional(model):
    def decode(data: Any):
        return None if data is None else model.from_dict(data)

    return decode


def _number(data: Any) -> float:
    return float(data)


class WeightService:
    """Weight and body measurement records."""

    def __init__(self, client: SheetsClient):
        self.client = client

    def get_all(self) -> ApiResponse[list[WeightEntry]]:
        return self.client.get_data("weight", _list_of(WeightEntry))

    def get_current(self) -> ApiResponse[Optional[WeightEntry]]:
        return self.client.get_data("weight/current", _optional(WeightEntry))

    def add(self, entry: WeightEntry) -> ApiResponse[Any]:
        return self.client.post_data("weight", entry.to_dict())

    def get_dashboard(self) -> ApiResponse[DashboardData]:
        return self.client.get_data("dashboard", DashboardData.from_dict)


class WorkoutService:
    """Workout set records and strength aggregates."""

    def __init__(self, client: SheetsClient):
        self.client = client

    def get_all(self) -> ApiResponse[list[WorkoutEntry]]:
        return self.client.get_data("workouts", _list_of(WorkoutEntry))

    def get_by_exercise(self, exercise: str) -> ApiResponse[list[WorkoutEntry]]:
        return self.client.get_data(f"workouts/{exercise}", _list_of(WorkoutEntry))

    def add(self, entry: WorkoutEntry) -> ApiResponse[Any]:
        return self.client.post_data("workouts", entry.to_dict())

    def get_personal_records(self) -> ApiResponse[list[PersonalRecord]]:
        return self.client.get_data("workouts/prs", _list_of(PersonalRecord))


class HabitService:
    """Daily habit checklists. Writes are upserts keyed by date."""

    def __init__(self, client: SheetsClient):
        self.client = client

    def get_all(self) -> ApiResponse[list[HabitEntry]]:
        return self.client.get_data("habits", _list_of(HabitEntry))

    def get_by_date(self, day: date) -> ApiResponse[Optional[HabitEntry]]:
        return self.client.get_data(f"habits/{day.isoformat()}", _optional(HabitEntry))

    def update(self, entry: HabitEntry) -> ApiResponse[Any]:
        return self.client.post_data("habits", entry.to_dict())

    def get_weekly_compliance(self) -> ApiResponse[float]:
        return self.client.get_data("habits/compliance", _number)


class PhotoService:
    """Progress photo metadata."""

    def __init__(self, client: SheetsClient):
        self.client = client

    def get_all(self) -> ApiResponse[list[ProgressPhoto]]:
        return self.client.get_data("photos", _list_of(ProgressPhoto))

    def get_recent(self, limit: int = 5) -> ApiResponse[list[ProgressPhoto]]:
        return self.client.get_data(
            f"photos/recent?limit={limit}", _list_of(ProgressPhoto)
        )

    def add(self, photo: ProgressPhoto) -> ApiResponse[Any]:
        return self.client.post_data("photos", photo.to_dict())

    def save_with_upload(
        self,
        uploader: ImageUploader,
        day: date,
        content: bytes,
        filename: str,
        content_type: str,
        description: Optional[str] = None,
    ) -> ApiResponse[Any]:
        """
        Upload an image, then record its metadata.

        The two writes go to different services and are not atomic. If the
        metadata write fails, the upload is deleted with its delete token;
        without a token the hosted image is left orphaned and logged.

        Raises:
            ImageUploadError: If the upload itself fails
        """
        uploaded = uploader.upload(content, filename, content_type)

        photo = ProgressPhoto(date=day, url=uploaded.url, description=description)
        response = self.add(photo)
        if response.success:
            return response

        if uploaded.delete_token:
            try:
                uploader.delete(uploaded.delete_token)
                logger.info("Deleted orphaned upload %s", uploaded.url)
            except ImageUploadError as e:
                logger.warning("Could not delete orphaned upload %s: %s", uploaded.url, e)
        else:
            logger.warning(
                "Photo metadata write failed; hosted image left orphaned: %s",
                uploaded.url,
            )
        return response


@dataclass
class Services:
    """All services bound to one client and one image uploader."""

    client: SheetsClient
    uploader: ImageUploader
    weight: WeightService = field(init=False)
    workouts: WorkoutService = field(init=False)
    habits: HabitService = field(init=False)
    photos: PhotoService = field(init=False)

    def __post_init__(self) -> None:
        self.weight = WeightService(self.client)
        self.workouts = WorkoutService(self.client)
        self.habits = HabitService(self.client)
        self.photos = PhotoService(self.client)

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: Optional[httpx.Client] = None
    ) -> "Services":
        """Build the client and uploader, optionally sharing one HTTP client."""
        return cls(
            client=SheetsClient(settings, http_client),
            uploader=ImageUploader(settings, http_client),
        )

    def close(self) -> None:
        self.client.close()
        self.uploader.close()
