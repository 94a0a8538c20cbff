"""
progress_service.py — Dashboard & progress aggregation
Reduces a user's raw step entries and workouts into today's snapshot,
trailing-week totals, a fixed-window chart series, streaks, best days and
week-over-week comparisons.

The module-level functions are pure: they take records (anything with
`date`, `calories_burned` and, for step entries, `steps`) and an explicit
`today`, so "today" is decided once at the HTTP boundary.
"""

from datetime import date, timedelta
from typing import Iterable, Sequence

from sqlalchemy.orm import Session

from models.user import User
from services.calorie_service import (
    calculate_progress, format_weekly_change, get_activity_level, percent_change, round_half_up,
)
from services.dates import SUNDAY, day_key, days_back, to_day, week_start
from services.steps_service import StepsService
from services.workout_service import WorkoutService

LOOKBACK_DAYS = 30
CHART_DAYS = 14
WEEK_DAYS = 7


def _in_range(record, start: date, end: date) -> bool:
    return start <= to_day(record.date) <= end


def _range_totals(steps: Iterable, workouts: Iterable, start: date, end: date) -> dict:
    day_steps = [s for s in steps if _in_range(s, start, end)]
    day_workouts = [w for w in workouts if _in_range(w, start, end)]
    return {
        "steps": sum(s.steps for s in day_steps),
        "calories": sum(s.calories_burned for s in day_steps) + sum(w.calories_burned for w in day_workouts),
        "workoutCount": len(day_workouts),
    }


def daily_snapshot(steps: Sequence, workouts: Sequence, today: date) -> dict:
    entry = next((s for s in steps if to_day(s.date) == today), None)
    todays_workouts = [w for w in workouts if to_day(w.date) == today]
    step_calories = entry.calories_burned if entry else 0
    return {
        "date": today.isoformat(),
        "steps": entry.steps if entry else 0,
        "calories": step_calories + sum(w.calories_burned for w in todays_workouts),
        "workoutCount": len(todays_workouts),
    }


def weekly_totals(steps: Sequence, workouts: Sequence, today: date, days: int = WEEK_DAYS) -> dict:
    """Totals over the trailing `days` days, today included."""
    start = today - timedelta(days=days - 1)
    return {
        "startDate": start.isoformat(),
        "endDate": today.isoformat(),
        **_range_totals(steps, workouts, start, today),
    }


def chart_series(steps: Sequence, workouts: Sequence, today: date, days: int = CHART_DAYS) -> list[dict]:
    by_day = {}
    for s in steps:
        by_day.setdefault(to_day(s.date), s)
    workouts_by_day: dict[date, list] = {}
    for w in workouts:
        workouts_by_day.setdefault(to_day(w.date), []).append(w)

    series = []
    for day in days_back(today, days):
        entry = by_day.get(day)
        day_workouts = workouts_by_day.get(day, [])
        series.append({
            "date": day.isoformat(),
            "steps": entry.steps if entry else 0,
            "calories": (entry.calories_burned if entry else 0) + sum(w.calories_burned for w in day_workouts),
            "workoutCount": len(day_workouts),
        })
    return series


def calculate_streak(steps: Iterable, workouts: Iterable, today: date) -> int:
    """Consecutive days ending today with at least one step entry or workout."""
    active = {to_day(r.date) for r in steps} | {to_day(r.date) for r in workouts}
    streak = 0
    day = today
    while day in active:
        streak += 1
        day -= timedelta(days=1)
    return streak


def best_step_day(steps: Iterable) -> dict:
    best = {"date": None, "steps": 0}
    for s in steps:
        if s.steps > best["steps"]:
            best = {"date": day_key(s.date), "steps": s.steps}
    return best


def best_calorie_day(series: Iterable[dict]) -> dict:
    best = {"date": None, "calories": 0}
    for point in series:
        if point["calories"] > best["calories"]:
            best = {"date": point["date"], "calories": point["calories"]}
    return best


def week_over_week(steps: Sequence, workouts: Sequence, today: date, first_weekday: int = SUNDAY) -> dict:
    this_start = week_start(today, first_weekday)
    last_start = this_start - timedelta(days=7)
    last_end = this_start - timedelta(days=1)

    this_week = {"startDate": this_start.isoformat(), **_range_totals(steps, workouts, this_start, today)}
    last_week = {"startDate": last_start.isoformat(), **_range_totals(steps, workouts, last_start, last_end)}

    return {
        "thisWeek": this_week,
        "lastWeek": last_week,
        "stepsChange": round(percent_change(this_week["steps"], last_week["steps"]), 1),
        "caloriesChange": round(percent_change(this_week["calories"], last_week["calories"]), 1),
        "stepsChangeLabel": format_weekly_change(this_week["steps"], last_week["steps"]),
        "caloriesChangeLabel": format_weekly_change(this_week["calories"], last_week["calories"]),
    }


def overall_stats(steps: Sequence, workouts: Sequence) -> dict:
    total_steps = sum(s.steps for s in steps)
    total_calories = sum(s.calories_burned for s in steps) + sum(w.calories_burned for w in workouts)
    entry_days = max(len(steps), len(workouts))
    return {
        "totalSteps": total_steps,
        "totalCalories": total_calories,
        "totalWorkouts": len(workouts),
        "averageSteps": round_half_up(total_steps / len(steps)) if steps else 0,
        "averageCalories": round_half_up(total_calories / entry_days) if steps else 0,
    }


def goal_progress(snapshot: dict, weekly: dict, goals: dict | None) -> dict:
    if not goals:
        return {}
    return {
        "steps": calculate_progress(snapshot["steps"], goals["steps"]),
        "calories": calculate_progress(snapshot["calories"], goals["calories"]),
        "workouts": calculate_progress(weekly["workoutCount"], goals["workouts"]),
    }


def recent_activities(steps: Sequence, workouts: Sequence, limit: int = 5) -> list[dict]:
    newest_steps = sorted(steps, key=lambda s: to_day(s.date), reverse=True)[:3]
    newest_workouts = sorted(workouts, key=lambda w: (to_day(w.date), w.id or 0), reverse=True)[:2]

    items = [{
        "id": s.id,
        "type": "steps",
        "title": f"{s.steps:,} steps",
        "subtitle": f"{s.duration} minutes active",
        "calories": s.calories_burned,
        "date": day_key(s.date),
    } for s in newest_steps]
    items += [{
        "id": w.id,
        "type": "workout",
        "title": w.name,
        "subtitle": f"{w.duration} min • {w.intensity} intensity",
        "calories": w.calories_burned,
        "date": day_key(w.date),
    } for w in newest_workouts]

    items.sort(key=lambda item: item["date"], reverse=True)
    return items[:limit]


class ProgressService:
    @staticmethod
    def _records(db: Session, user_id: int, today: date) -> tuple[list, list]:
        steps = StepsService.list_entries(db, user_id, today, days=LOOKBACK_DAYS)
        workouts = WorkoutService.list_workouts(db, user_id, today, days=LOOKBACK_DAYS)
        return steps, workouts

    @staticmethod
    def build_dashboard(db: Session, user: User, today: date) -> dict:
        steps, workouts = ProgressService._records(db, user.id, today)
        snapshot = daily_snapshot(steps, workouts, today)
        weekly = weekly_totals(steps, workouts, today)
        goals = {
            "steps": user.daily_steps,
            "calories": user.daily_calories,
            "workouts": user.weekly_workouts,
        } if user.has_goals else None
        level = get_activity_level(snapshot["steps"])

        return {
            "today": snapshot,
            "weekly": weekly,
            "goals": goals,
            "goalProgress": goal_progress(snapshot, weekly, goals),
            "activityLevel": {"level": level.level, "description": level.description},
            "streak": calculate_streak(steps, workouts, today),
            "recentActivities": recent_activities(steps, workouts),
        }

    @staticmethod
    def build_progress(db: Session, user: User, today: date) -> dict:
        steps, workouts = ProgressService._records(db, user.id, today)
        series = chart_series(steps, workouts, today)
        return {
            "chart": series,
            "stats": overall_stats(steps, workouts),
            "bestStepDay": best_step_day(steps),
            "bestCalorieDay": best_calorie_day(series),
            "streak": calculate_streak(steps, workouts, today),
            "weekComparison": week_over_week(steps, workouts, today),
        }
