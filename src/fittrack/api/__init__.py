"""Access to the spreadsheet backend and the image host."""

from __future__ import annotations

from fittrack.api.client import SheetsClient
from fittrack.api.images import ImageUploader, ImageUploadError, UploadedImage
from fittrack.api.response import ApiError, ApiResponse, ErrorKind
from fittrack.api.services import (
    HabitService,
    PhotoService,
    Services,
    WeightService,
    WorkoutService,
)

__all__ = [
    "ApiError",
    "ApiResponse",
    "ErrorKind",
    "HabitService",
    "ImageUploadError",
    "ImageUploader",
    "PhotoService",
    "Services",
    "SheetsClient",
    "UploadedImage",
    "WeightService",
    "WorkoutService",
]
