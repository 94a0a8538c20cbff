"""
calorie_service.py — Energy expenditure estimates
Step-based and MET-based calorie formulas, plus the small helpers the
dashboard uses to describe activity levels and goal progress.
"""

import math
from typing import NamedTuple

from config import DEFAULT_WEIGHT_KG

CALORIES_PER_STEP = 0.04
REFERENCE_WEIGHT_KG = 70.0
REFERENCE_PACE = 100  # steps per minute
DEFAULT_MET = 5.0

# MET (Metabolic Equivalent of Task) by workout type, then intensity
MET_VALUES: dict[str, dict[str, float]] = {
    "cardio": {"low": 3.5, "medium": 7.0, "high": 10.0},      # walking / jogging / running
    "strength": {"low": 3.0, "medium": 5.0, "high": 8.0},     # light weights -> circuits
    "yoga": {"low": 2.5, "medium": 3.0, "high": 4.0},
    "sports": {"low": 4.0, "medium": 6.0, "high": 8.0},
    "other": {"low": 3.0, "medium": 5.0, "high": 7.0},
}

WORKOUT_TYPES = tuple(MET_VALUES)
INTENSITIES = ("low", "medium", "high")


class ActivityLevel(NamedTuple):
    level: str
    description: str


# (exclusive upper bound, level, description)
ACTIVITY_LEVELS = [
    (5000, "Sedentary", "Try to get more active!"),
    (7500, "Lightly Active", "Good start, keep it up!"),
    (10000, "Moderately Active", "Great progress!"),
    (12500, "Very Active", "Excellent work!"),
]
TOP_ACTIVITY_LEVEL = ActivityLevel("Highly Active", "Outstanding!")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_steps_calories(steps, weight=DEFAULT_WEIGHT_KG, duration=None) -> int:
    """steps * 0.04 kcal scaled by body mass, adjusted by a bounded pace multiplier."""
    if not steps or steps <= 0:
        return 0
    weight = weight or DEFAULT_WEIGHT_KG

    calories = steps * CALORIES_PER_STEP * (weight / REFERENCE_WEIGHT_KG)

    if duration and duration > 0:
        pace = steps / duration
        multiplier = 1 + (pace - REFERENCE_PACE) / 500
        calories *= max(0.8, min(1.3, multiplier))

    return round_half_up(calories)


def get_met_value(workout_type: str, intensity: str) -> float:
    return MET_VALUES.get(workout_type, {}).get(intensity, DEFAULT_MET)


def calculate_workout_calories(workout_type, intensity, duration, weight=DEFAULT_WEIGHT_KG) -> int:
    """kcal = MET * weight(kg) * hours"""
    if not duration or duration <= 0:
        return 0
    weight = weight or DEFAULT_WEIGHT_KG
    met = get_met_value(workout_type, intensity)
    return round_half_up(met * weight * (duration / 60))


def get_activity_level(steps) -> ActivityLevel:
    for upper, level, description in ACTIVITY_LEVELS:
        if steps < upper:
            return ActivityLevel(level, description)
    return TOP_ACTIVITY_LEVEL


def calculate_progress(current, goal) -> int:
    """Percent toward a goal, capped at 100."""
    if not goal or goal <= 0:
        return 0
    return min(100, round_half_up(current / goal * 100))


def percent_change(current, previous) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def format_weekly_change(current, previous) -> str:
    if previous == 0:
        return "+100%" if current > 0 else "0%"
    change = percent_change(current, previous)
    return f"+{change:.1f}%" if change >= 0 else f"{change:.1f}%"
