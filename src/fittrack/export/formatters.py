"""Output formatters for pages and backend records."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from fittrack.api.response import ApiResponse
from fittrack.pages.base import FormMessage
from fittrack.pages.dashboard import MAX_RECORDS_SHOWN
from fittrack.tracking.calculations import remaining_to_goal
from fittrack.tracking.models import (
    DashboardData,
    HabitEntry,
    PersonalRecord,
    ProgressPhoto,
    WeightEntry,
    WorkoutEntry,
)


class TableFormatter:
    """Format records as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def message(self, message: FormMessage) -> None:
        color = "red" if message.is_error else "green"
        self.console.print(f"[{color}]{message.text}[/{color}]")

    def dashboard(self, data: DashboardData) -> None:
        """Print the dashboard summary panels and tables."""
        lines = [
            f"[bold]Peso actual:[/bold] {data.current_weight:.1f} kg",
        ]
        if data.current_body_fat:
            lines.append(f"{data.current_body_fat}% grasa corporal")
        lines.append(f"[bold]IMC:[/bold] {data.bmi:.1f}")
        lines.append(
            f"[bold]Objetivo:[/bold] {data.target_weight:.1f} kg "
            f"(Faltan {remaining_to_goal(data.current_weight, data.target_weight):.1f} kg)"
        )
        lines.append(f"Progreso: {data.progress_percentage:.1f}%")
        lines.append(f"[bold]Hábitos:[/bold] {data.habits_compliance:.0f}% cumplimiento semanal")
        self.console.print(
            Panel(
                "\n".join(lines),
                title=f"Dashboard - {datetime.now().strftime('%Y-%m-%d')}",
            )
        )
        self.console.print(
            ProgressBar(total=100, completed=max(0.0, min(data.progress_percentage, 100.0)))
        )

        orm_table = Table(title="Máximos (1RM)", caption="Cálculo estimado con fórmula de Epley")
        orm_table.add_column("Ejercicio", style="cyan")
        orm_table.add_column("1RM", justify="right")
        orm_table.add_row("Press de Banca", f"{data.one_rep_max.bench:.0f} kg")
        orm_table.add_row("Sentadilla", f"{data.one_rep_max.squat:.0f} kg")
        orm_table.add_row("Peso Muerto", f"{data.one_rep_max.deadlift:.0f} kg")
        self.console.print(orm_table)

        if data.personal_records:
            self.personal_records(data.personal_records[:MAX_RECORDS_SHOWN])

        if data.recent_photos:
            self.photos(data.recent_photos, title="Fotos Recientes")

    def personal_records(self, records: Sequence[PersonalRecord]) -> None:
        table = Table(title="Records Personales")
        table.add_column("Ejercicio", style="cyan")
        table.add_column("Marca", justify="right")
        table.add_column("Fecha", justify="right")
        for pr in records:
            table.add_row(pr.exercise, f"{pr.weight:g} kg × {pr.reps} reps", pr.date.isoformat())
        self.console.print(table)

    def weights(self, entries: Sequence[WeightEntry]) -> None:
        table = Table(title="Registros de Peso")
        table.add_column("Fecha", style="cyan")
        table.add_column("Peso", justify="right")
        table.add_column("Grasa", justify="right")
        table.add_column("Notas")
        for e in entries:
            table.add_row(
                e.date.isoformat(),
                f"{e.weight:.1f} kg",
                f"{e.body_fat:.1f}%" if e.body_fat else "-",
                e.notes or "",
            )
        self.console.print(table)

    def workouts(self, entries: Sequence[WorkoutEntry]) -> None:
        table = Table(title="Entrenamientos")
        table.add_column("Fecha", style="cyan")
        table.add_column("Ejercicio")
        table.add_column("Peso", justify="right")
        table.add_column("Reps", justify="right")
        table.add_column("Series", justify="right")
        table.add_column("Notas")
        for e in entries:
            table.add_row(
                e.date.isoformat(),
                e.exercise,
                f"{e.weight:g} kg",
                str(e.reps),
                str(e.sets) if e.sets else "-",
                e.notes or "",
            )
        self.console.print(table)

    def habits(self, entry: HabitEntry, percentage: int) -> None:
        def mark(done: bool) -> str:
            return "[green]✓[/green]" if done else "[dim]·[/dim]"

        table = Table(title=f"Hábitos {entry.date.isoformat()}")
        table.add_column("Hábito")
        table.add_column("", justify="center")
        table.add_row("Dormir 7-8 horas", mark(entry.sleep))
        table.add_row("Beber 2-3 litros de agua", mark(entry.water))
        table.add_row("Cardio", mark(entry.cardio))
        self.console.print(table)
        self.console.print(f"{percentage}% completado")

    def photos(self, photos: Sequence[ProgressPhoto], title: str = "Fotos de Progreso") -> None:
        if not photos:
            self.console.print("Aún no hay fotos de progreso")
            return
        table = Table(title=title)
        table.add_column("Fecha", style="cyan")
        table.add_column("Descripción")
        table.add_column("URL", overflow="fold")
        for p in photos:
            table.add_row(p.date.isoformat(), p.description or "", p.url)
        self.console.print(table)


class JSONFormatter:
    """Format command results as a JSON envelope for programmatic use."""

    def format(
        self,
        command: str,
        response: ApiResponse[Any],
        human_summary: str = "",
    ) -> str:
        """Return JSON string.

        Args:
            command: Command that produced the response, e.g. "weight add"
            response: Backend response
            human_summary: One-line description for humans

        Returns:
            JSON string
        """
        envelope = response.to_dict()
        data = {
            "success": response.success,
            "command": command,
            "data": envelope.get("data"),
            "errors": [] if response.success else [response.error_message],
            "error_kind": response.error.kind.value if response.error else None,
            "human_summary": human_summary,
            "timestamp": datetime.now().isoformat(),
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    def error(self, command: str, message: str) -> str:
        """Return a JSON error envelope for failures that never reached the backend."""
        data = {
            "success": False,
            "command": command,
            "data": None,
            "errors": [message],
            "error_kind": "validation",
            "human_summary": f"Error: {message}",
            "timestamp": datetime.now().isoformat(),
        }
        return json.dumps(data, indent=2, ensure_ascii=False)
