"""Derived numbers shown next to the logging forms.

The one-rep max uses the Epley formula:
    1RM = weight × (1 + reps / 30)

It is only meaningful for a positive load and at least one repetition, so
callers gate display on ``can_estimate_one_rep_max``.

Rounding is half away from zero for positive values, so 100.5 becomes 101
rather than Python's banker's-rounded 100.
"""

from __future__ import annotations

import math

from fittrack.tracking.models import HabitEntry

# Habits tracked per day
HABIT_NAMES = ("sleep", "water", "cardio")

# Epley denominator
EPLEY_REPS_DIVISOR = 30


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going toward +infinity."""
    return int(math.floor(value + 0.5))


def can_estimate_one_rep_max(weight: float, reps: int) -> bool:
    """Return True when both load and repetitions are positive."""
    return weight > 0 and reps > 0


def estimate_one_rep_max(weight: float, reps: int) -> int:
    """
    Estimate a one-repetition maximum from a sub-maximal set.

    Args:
        weight: Load lifted (kg)
        reps: Repetitions completed, at least 1

    Returns:
        Estimated 1RM rounded to a whole number

    Raises:
        ValueError: If weight is not positive or reps < 1

    Example:
        >>> estimate_one_rep_max(80, 8)
        101
    """
    if reps < 1:
        raise ValueError(f"reps must be at least 1, got {reps}")
    if weight <= 0:
        raise ValueError(f"weight must be positive, got {weight}")
    return round_half_up(weight * (1 + reps / EPLEY_REPS_DIVISOR))


def completed_habits(entry: HabitEntry) -> int:
    """Count how many of the daily habits were met."""
    return sum(1 for name in HABIT_NAMES if getattr(entry, name))


def habit_completion_percentage(entry: HabitEntry) -> int:
    """Percentage of daily habits met, rounded to a whole number."""
    return round_half_up(completed_habits(entry) / len(HABIT_NAMES) * 100)


def remaining_to_goal(current_weight: float, target_weight: float) -> float:
    """Kilograms left between the current and target weight."""
    return current_weight - target_weight
