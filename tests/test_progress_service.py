from __future__ import annotations

import unittest
from datetime import date, timedelta
from types import SimpleNamespace

from services.progress_service import (
    best_calorie_day,
    best_step_day,
    calculate_streak,
    chart_series,
    daily_snapshot,
    goal_progress,
    overall_stats,
    recent_activities,
    week_over_week,
    weekly_totals,
)

TODAY = date(2026, 10, 21)  # a Wednesday


def steps_entry(days_ago: int, steps: int, calories: int, entry_id: int = 1):
    return SimpleNamespace(id=entry_id, date=TODAY - timedelta(days=days_ago), steps=steps,
                           duration=60, calories_burned=calories)


def workout(days_ago: int, calories: int, workout_id: int = 1, name: str = "Run"):
    return SimpleNamespace(id=workout_id, date=TODAY - timedelta(days=days_ago), name=name,
                           duration=30, intensity="medium", calories_burned=calories)


class ProgressAggregationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.steps = [
            steps_entry(0, 8000, 320, 1),
            steps_entry(1, 5000, 200, 2),
            steps_entry(2, 12000, 480, 3),
            steps_entry(4, 3000, 120, 4),
        ]
        self.workouts = [workout(0, 300, 1), workout(3, 150, 2, "Yoga")]

    def test_daily_snapshot(self) -> None:
        snap = daily_snapshot(self.steps, self.workouts, TODAY)
        self.assertEqual(snap, {"date": "2026-10-21", "steps": 8000, "calories": 620, "workoutCount": 1})

    def test_daily_snapshot_without_steps_still_counts_workouts(self) -> None:
        snap = daily_snapshot([], self.workouts, TODAY)
        self.assertEqual(snap["steps"], 0)
        self.assertEqual(snap["calories"], 300)

    def test_weekly_totals_include_today(self) -> None:
        weekly = weekly_totals(self.steps, self.workouts, TODAY)
        self.assertEqual(weekly["startDate"], "2026-10-15")
        self.assertEqual(weekly["steps"], 28000)
        self.assertEqual(weekly["calories"], 1570)
        self.assertEqual(weekly["workoutCount"], 2)

    def test_weekly_totals_skip_older_records(self) -> None:
        old = self.steps + [steps_entry(7, 9999, 999, 9)]
        self.assertEqual(weekly_totals(old, [], TODAY)["steps"], 28000)

    def test_chart_series_has_fixed_window(self) -> None:
        series = chart_series(self.steps, self.workouts, TODAY)
        self.assertEqual(len(series), 14)
        self.assertEqual(series[0]["date"], "2026-10-08")
        self.assertEqual(series[-1], {"date": "2026-10-21", "steps": 8000, "calories": 620, "workoutCount": 1})
        workout_only = series[-4]
        self.assertEqual(workout_only, {"date": "2026-10-18", "steps": 0, "calories": 150, "workoutCount": 1})
        self.assertEqual(series[1]["calories"], 0)

    def test_streak_counts_back_from_today(self) -> None:
        self.assertEqual(calculate_streak(self.steps, self.workouts, TODAY), 5)

    def test_streak_breaks_on_first_gap(self) -> None:
        steps = [steps_entry(0, 100, 4), steps_entry(1, 100, 4), steps_entry(2, 100, 4), steps_entry(4, 100, 4)]
        self.assertEqual(calculate_streak(steps, [], TODAY), 3)

    def test_streak_is_zero_without_activity_today(self) -> None:
        steps = [steps_entry(1, 100, 4), steps_entry(2, 100, 4)]
        self.assertEqual(calculate_streak(steps, [], TODAY), 0)

    def test_best_step_day_prefers_first_on_ties(self) -> None:
        self.assertEqual(best_step_day(self.steps), {"date": "2026-10-19", "steps": 12000})
        tied = [steps_entry(3, 7000, 1, 1), steps_entry(1, 7000, 1, 2)]
        self.assertEqual(best_step_day(tied)["date"], "2026-10-18")
        self.assertEqual(best_step_day([]), {"date": None, "steps": 0})

    def test_best_calorie_day_uses_series(self) -> None:
        series = chart_series(self.steps, self.workouts, TODAY)
        self.assertEqual(best_calorie_day(series), {"date": "2026-10-21", "calories": 620})
        self.assertEqual(best_calorie_day(chart_series([], [], TODAY)), {"date": None, "calories": 0})

    def test_week_over_week(self) -> None:
        result = week_over_week(self.steps, self.workouts, TODAY)
        self.assertEqual(result["thisWeek"]["startDate"], "2026-10-18")
        self.assertEqual(result["thisWeek"]["steps"], 25000)
        self.assertEqual(result["thisWeek"]["calories"], 1450)
        self.assertEqual(result["lastWeek"]["startDate"], "2026-10-11")
        self.assertEqual(result["lastWeek"]["steps"], 3000)
        self.assertEqual(result["stepsChange"], 733.3)
        self.assertEqual(result["stepsChangeLabel"], "+733.3%")

    def test_week_over_week_with_empty_previous_week(self) -> None:
        empty = week_over_week([], [], TODAY)
        self.assertEqual(empty["stepsChangeLabel"], "0%")
        self.assertEqual(empty["stepsChange"], 0.0)

        only_now = week_over_week([steps_entry(0, 100, 4)], [], TODAY)
        self.assertEqual(only_now["stepsChangeLabel"], "+100%")
        self.assertEqual(only_now["stepsChange"], 100.0)

    def test_overall_stats(self) -> None:
        stats = overall_stats(self.steps, self.workouts)
        self.assertEqual(stats["totalSteps"], 28000)
        self.assertEqual(stats["totalCalories"], 1570)
        self.assertEqual(stats["totalWorkouts"], 2)
        self.assertEqual(stats["averageSteps"], 7000)
        self.assertEqual(stats["averageCalories"], 393)
        self.assertEqual(overall_stats([], [])["averageSteps"], 0)

    def test_average_calories_needs_step_entries(self) -> None:
        stats = overall_stats([], self.workouts)
        self.assertEqual(stats["totalCalories"], 450)
        self.assertEqual(stats["averageCalories"], 0)

    def test_goal_progress(self) -> None:
        snap = daily_snapshot(self.steps, self.workouts, TODAY)
        weekly = weekly_totals(self.steps, self.workouts, TODAY)
        progress = goal_progress(snap, weekly, {"steps": 10000, "calories": 500, "workouts": 3})
        self.assertEqual(progress, {"steps": 80, "calories": 100, "workouts": 67})
        self.assertEqual(goal_progress(snap, weekly, None), {})

    def test_recent_activities_newest_first(self) -> None:
        items = recent_activities(self.steps, self.workouts)
        self.assertEqual(len(items), 5)
        self.assertEqual(items[0]["date"], "2026-10-21")
        dates = [i["date"] for i in items]
        self.assertEqual(dates, sorted(dates, reverse=True))
        self.assertEqual(items[0]["title"] if items[0]["type"] == "steps" else items[1]["title"], "8,000 steps")


if __name__ == "__main__":
    unittest.main()
