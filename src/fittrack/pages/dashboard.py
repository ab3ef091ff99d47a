"""Dashboard page: read-only summary computed by the backend."""

from __future__ import annotations

from typing import Optional

from fittrack.api.response import ApiResponse
from fittrack.api.services import WeightService
from fittrack.tracking.calculations import remaining_to_goal
from fittrack.tracking.models import DashboardData, PersonalRecord

MAX_RECORDS_SHOWN = 5


class DashboardPage:
    def __init__(self, service: WeightService):
        self.service = service
        self.loading = False
        self.data: Optional[DashboardData] = None
        self.error: Optional[str] = None
        self.last_response: Optional[ApiResponse[DashboardData]] = None

    def load(self) -> Optional[DashboardData]:
        """Fetch the dashboard snapshot. Sets ``error`` on failure."""
        self.loading = True
        try:
            response = self.service.get_dashboard()
        finally:
            self.loading = False
        self.last_response = response

        if response.success and response.data is not None:
            self.data = response.data
            self.error = None
        else:
            self.error = response.error_message or "Error al cargar datos"
        return self.data

    @property
    def top_records(self) -> list[PersonalRecord]:
        if self.data is None:
            return []
        return self.data.personal_records[:MAX_RECORDS_SHOWN]

    @property
    def remaining_kg(self) -> Optional[float]:
        if self.data is None:
            return None
        return remaining_to_goal(self.data.current_weight, self.data.target_weight)
