"""Fitness log entries and derived calculations.

Key components:
- Log entry records (weight, workouts, habits, progress photos)
- Dashboard snapshot returned by the backend
- Epley one-rep-max estimate and habit completion percentage
"""

from __future__ import annotations

from fittrack.tracking.calculations import (
    can_estimate_one_rep_max,
    completed_habits,
    estimate_one_rep_max,
    habit_completion_percentage,
    remaining_to_goal,
)
from fittrack.tracking.models import (
    DashboardData,
    HabitEntry,
    OneRepMax,
    PersonalRecord,
    ProgressPhoto,
    WeightEntry,
    WorkoutEntry,
)

__all__ = [
    "DashboardData",
    "HabitEntry",
    "OneRepMax",
    "PersonalRecord",
    "ProgressPhoto",
    "WeightEntry",
    "WorkoutEntry",
    "can_estimate_one_rep_max",
    "completed_habits",
    "estimate_one_rep_max",
    "habit_completion_percentage",
    "remaining_to_goal",
]
