"""Body weight logging page."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from fittrack.api.services import WeightService
from fittrack.pages.base import FormMessage, FormPage, ValidationError
from fittrack.tracking.models import WeightEntry


@dataclass
class WeightForm:
    """Current values of the weight form. Zero means "not entered"."""

    date: date = field(default_factory=date.today)
    weight: float = 0.0
    body_fat: float = 0.0
    notes: str = ""

    def to_entry(self) -> WeightEntry:
        return WeightEntry(
            date=self.date,
            weight=self.weight,
            body_fat=self.body_fat or None,
            notes=self.notes.strip() or None,
        )


class WeightPage(FormPage):
    """Log a weight measurement."""

    success_text = "Peso registrado correctamente"
    failure_text = "Error al registrar peso"

    def __init__(self, service: WeightService):
        super().__init__()
        self.service = service
        self.form = WeightForm()

    def validate(self) -> None:
        if self.form.weight <= 0:
            raise ValidationError("El peso debe ser mayor a 0")

    def submit(self) -> FormMessage:
        """Validate and send the form; returns the message shown to the user."""
        if not self._check():
            return self.message  # type: ignore[return-value]

        with self._submitting():
            response = self.service.add(self.form.to_entry())
            return self._finish(response)

    def on_success(self) -> None:
        self.form = WeightForm()
