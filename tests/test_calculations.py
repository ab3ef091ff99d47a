"""Tests for one-rep-max and habit completion calculations."""

from __future__ import annotations

from datetime import date
from itertools import product

import pytest

from fittrack.tracking.calculations import (
    can_estimate_one_rep_max,
    completed_habits,
    estimate_one_rep_max,
    habit_completion_percentage,
    remaining_to_goal,
    round_half_up,
)
from fittrack.tracking.models import HabitEntry


class TestEstimateOneRepMax:
    """Tests for the Epley estimate."""

    def test_reference_example(self) -> None:
        """80 kg for 8 reps estimates 101 kg."""
        assert estimate_one_rep_max(80, 8) == 101

    def test_single_rep(self) -> None:
        """One rep adds a thirtieth of the load."""
        assert estimate_one_rep_max(90, 1) == 93

    def test_thirty_reps_doubles(self) -> None:
        assert estimate_one_rep_max(50, 30) == 100

    def test_fractional_load(self) -> None:
        # 62.5 * (1 + 5/30) = 72.916...
        assert estimate_one_rep_max(62.5, 5) == 73

    def test_half_rounds_up(self) -> None:
        """A result of exactly .5 rounds up, not to even."""
        # 7 * (1 + 15/30) = 10.5
        assert estimate_one_rep_max(7, 15) == 11

    @pytest.mark.parametrize("weight, reps", [(40, 3), (100, 5), (142.5, 12), (20, 20)])
    def test_matches_formula(self, weight: float, reps: int) -> None:
        expected = int(weight * (1 + reps / 30) + 0.5)
        assert estimate_one_rep_max(weight, reps) == expected

    def test_zero_reps_rejected(self) -> None:
        with pytest.raises(ValueError, match="reps"):
            estimate_one_rep_max(80, 0)

    def test_non_positive_weight_rejected(self) -> None:
        with pytest.raises(ValueError, match="weight"):
            estimate_one_rep_max(0, 5)


class TestCanEstimate:
    def test_requires_both_positive(self) -> None:
        assert can_estimate_one_rep_max(80, 8)
        assert not can_estimate_one_rep_max(0, 8)
        assert not can_estimate_one_rep_max(80, 0)
        assert not can_estimate_one_rep_max(-5, 3)


class TestHabitCompletion:
    """Tests for habit completion percentage."""

    def test_two_of_three(self) -> None:
        """sleep + water without cardio is 67%."""
        entry = HabitEntry(date=date(2024, 1, 1), sleep=True, water=True, cardio=False)
        assert completed_habits(entry) == 2
        assert habit_completion_percentage(entry) == 67

    @pytest.mark.parametrize("sleep, water, cardio", list(product([False, True], repeat=3)))
    def test_all_combinations(self, sleep: bool, water: bool, cardio: bool) -> None:
        entry = HabitEntry(date=date(2024, 1, 1), sleep=sleep, water=water, cardio=cardio)
        count = sum([sleep, water, cardio])
        assert habit_completion_percentage(entry) == {0: 0, 1: 33, 2: 67, 3: 100}[count]


class TestHelpers:
    def test_round_half_up(self) -> None:
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2

    def test_remaining_to_goal(self) -> None:
        assert remaining_to_goal(82.0, 75.0) == pytest.approx(7.0)
