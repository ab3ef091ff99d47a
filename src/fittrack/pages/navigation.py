"""Current-page selection for the interactive shell."""

from __future__ import annotations

from typing import Union

from fittrack.api.services import Services
from fittrack.pages.dashboard import DashboardPage
from fittrack.pages.habits import HabitsPage
from fittrack.pages.photos import PhotosPage
from fittrack.pages.weight import WeightPage
from fittrack.pages.workouts import WorkoutsPage

Page = Union[DashboardPage, WeightPage, WorkoutsPage, HabitsPage, PhotosPage]

DEFAULT_PAGE = "dashboard"

# (id, label) in menu order
NAVIGATION_ITEMS = (
    ("dashboard", "Dashboard"),
    ("weight", "Peso"),
    ("workouts", "Entrenamientos"),
    ("habits", "Hábitos"),
    ("photos", "Fotos"),
)


def build_page(page_id: str, services: Services) -> Page:
    """Create a fresh page controller. Unknown ids get the dashboard."""
    if page_id == "weight":
        return WeightPage(services.weight)
    if page_id == "workouts":
        return WorkoutsPage(services.workouts)
    if page_id == "habits":
        return HabitsPage(services.habits)
    if page_id == "photos":
        return PhotosPage(services.photos, services.uploader)
    return DashboardPage(services.weight)


class Navigation:
    """Holds the selected page; each selection starts from empty state."""

    def __init__(self, services: Services):
        self.services = services
        self.current_page = DEFAULT_PAGE
        self.page: Page = build_page(self.current_page, services)

    @property
    def page_ids(self) -> list[str]:
        return [page_id for page_id, _ in NAVIGATION_ITEMS]

    def label(self, page_id: str) -> str:
        return dict(NAVIGATION_ITEMS).get(page_id, page_id)

    def select(self, page_id: str) -> Page:
        if page_id not in self.page_ids:
            page_id = DEFAULT_PAGE
        self.current_page = page_id
        self.page = build_page(page_id, self.services)
        return self.page
