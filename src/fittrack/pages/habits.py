"""Daily habits page."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from fittrack.api.services import HabitService
from fittrack.pages.base import FormMessage, FormPage
from fittrack.tracking.calculations import (
    HABIT_NAMES,
    completed_habits,
    habit_completion_percentage,
)
from fittrack.tracking.models import HabitEntry


@dataclass
class HabitForm:
    date: date = field(default_factory=date.today)
    sleep: bool = False
    water: bool = False
    cardio: bool = False
    notes: str = ""

    def to_entry(self) -> HabitEntry:
        return HabitEntry(
            date=self.date,
            sleep=self.sleep,
            water=self.water,
            cardio=self.cardio,
            notes=self.notes.strip() or None,
        )


class HabitsPage(FormPage):
    """Check off sleep, water and cardio for a day.

    Saving the same date twice updates that day's entry on the backend.
    """

    success_text = "Hábitos registrados correctamente"
    failure_text = "Error al registrar hábitos"

    def __init__(self, service: HabitService):
        super().__init__()
        self.service = service
        self.form = HabitForm()

    def toggle(self, habit: str) -> bool:
        """Flip one habit and return its new value."""
        if habit not in HABIT_NAMES:
            raise ValueError(f"habit must be one of {HABIT_NAMES}, got '{habit}'")
        value = not getattr(self.form, habit)
        setattr(self.form, habit, value)
        return value

    @property
    def completed_count(self) -> int:
        return completed_habits(self.form.to_entry())

    @property
    def completion_percentage(self) -> int:
        return habit_completion_percentage(self.form.to_entry())

    def submit(self) -> FormMessage:
        with self._submitting():
            response = self.service.update(self.form.to_entry())
            return self._finish(response)
