"""Page controllers: form state, validation and feedback for each screen."""

from __future__ import annotations

from fittrack.pages.base import FormMessage, SubmitInProgress, ValidationError
from fittrack.pages.dashboard import DashboardPage
from fittrack.pages.habits import HabitsPage
from fittrack.pages.navigation import NAVIGATION_ITEMS, Navigation, build_page
from fittrack.pages.photos import PhotosPage
from fittrack.pages.weight import WeightPage
from fittrack.pages.workouts import COMMON_EXERCISES, WorkoutsPage

__all__ = [
    "COMMON_EXERCISES",
    "DashboardPage",
    "FormMessage",
    "HabitsPage",
    "NAVIGATION_ITEMS",
    "Navigation",
    "PhotosPage",
    "SubmitInProgress",
    "ValidationError",
    "WeightPage",
    "WorkoutsPage",
    "build_page",
]
