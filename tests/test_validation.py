from __future__ import annotations

import unittest
from datetime import date

from errors import ValidationError
from services.validation import (
    GoalsInput,
    ProfileInput,
    RegisterInput,
    StepsInput,
    StepsRecord,
    WorkoutInput,
    WorkoutRecord,
    check_record,
    password_errors,
    validate_input,
)


class ValidateInputTests(unittest.TestCase):
    def assertRejected(self, model, data, message, partial=False) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_input(model, data, partial=partial)
        self.assertEqual(ctx.exception.message, message)

    def test_missing_required_fields(self) -> None:
        self.assertRejected(StepsInput, {"date": "2026-10-19", "steps": 100},
                            "Date, steps, and duration are required")
        self.assertRejected(GoalsInput, {"steps": 8000}, "Steps, calories, and workouts goals are required")
        self.assertRejected(WorkoutInput, {"date": "2026-10-19", "type": "yoga", "name": "  ",
                                           "duration": 30, "intensity": "low"},
                            "Date, type, name, duration, and intensity are required")

    def test_first_violation_wins(self) -> None:
        self.assertRejected(StepsInput, {"date": "2026-10-19", "steps": 100001, "duration": 0},
                            "Steps must be between 0 and 100,000")
        self.assertRejected(StepsInput, {"date": "2026-10-19", "steps": 100, "duration": 1441},
                            "Duration must be between 1 and 1440 minutes")

    def test_bounds_are_inclusive(self) -> None:
        clean = validate_input(StepsInput, {"date": "2026-10-19", "steps": 0, "duration": 1440})
        self.assertEqual(clean["steps"], 0)
        clean = validate_input(GoalsInput, {"steps": 50000, "calories": 100, "workouts": 14})
        self.assertEqual(clean, {"steps": 50000, "calories": 100, "workouts": 14})

    def test_normalizes_and_ignores_client_calories(self) -> None:
        clean = validate_input(StepsInput, {
            "date": "2026-10-19T08:00:00Z", "steps": 1000, "duration": 10, "caloriesBurned": 9999,
        })
        self.assertEqual(clean, {"date": date(2026, 10, 19), "steps": 1000, "duration": 10})

    def test_workout_choices(self) -> None:
        base = {"date": "2026-10-19", "type": "Cardio", "name": " Run ", "duration": 30, "intensity": "HIGH"}
        clean = validate_input(WorkoutInput, base)
        self.assertEqual(clean["type"], "cardio")
        self.assertEqual(clean["name"], "Run")
        self.assertEqual(clean["intensity"], "high")
        self.assertRejected(WorkoutInput, {**base, "type": "swimming"}, "Invalid workout type")
        self.assertRejected(WorkoutInput, {**base, "intensity": "max"}, "Invalid intensity level")
        self.assertRejected(WorkoutInput, {**base, "duration": 4}, "Duration must be between 5 and 480 minutes")
        self.assertRejected(WorkoutInput, {**base, "notes": "x" * 501}, "Notes cannot exceed 500 characters")

    def test_partial_profile_keeps_explicit_nulls(self) -> None:
        clean = validate_input(ProfileInput, {"weight": None, "gender": "Female"}, partial=True)
        self.assertEqual(clean, {"weight": None, "gender": "female"})
        self.assertRejected(ProfileInput, {"age": 12}, "Age must be between 13 and 120 years", partial=True)
        self.assertRejected(ProfileInput, {"name": " A "}, "Name must be at least 2 characters long", partial=True)

    def test_null_is_rejected_for_required_columns(self) -> None:
        self.assertRejected(StepsInput, {"steps": None}, "Steps must be between 0 and 100,000", partial=True)
        self.assertRejected(ProfileInput, {"name": None}, "Name must be at least 2 characters long", partial=True)

    def test_registration_rules(self) -> None:
        base = {"name": "Alex", "email": " Alex@Example.COM ", "password": "secret1"}
        clean = validate_input(RegisterInput, base)
        self.assertEqual(clean["email"], "alex@example.com")
        self.assertRejected(RegisterInput, {**base, "email": "not-an-email"}, "Please provide a valid email address")
        self.assertRejected(RegisterInput, {**base, "password": "abc"},
                            "Password must be at least 6 characters long")
        self.assertRejected(RegisterInput, {**base, "weight": 19}, "Weight must be between 20 and 300 kg")
        self.assertRejected(RegisterInput, {**base, "gender": "other"}, 'Gender must be either "male" or "female"')

    def test_type_mismatch_is_rejected(self) -> None:
        self.assertRejected(StepsInput, {"date": "2026-10-19", "steps": "many", "duration": 5},
                            "Steps must be between 0 and 100,000")
        self.assertRejected(StepsInput, {"date": "2026-10-19", "steps": 10.5, "duration": 5},
                            "Steps must be between 0 and 100,000")
        self.assertRejected(StepsInput, {"date": "19/10/2026", "steps": 10, "duration": 5},
                            "Please provide a valid date (YYYY-MM-DD)")


class PasswordTests(unittest.TestCase):
    def test_password_errors_are_collected(self) -> None:
        self.assertEqual(password_errors("secret1"), [])
        self.assertEqual(password_errors("123456"), ["Password must contain at least one letter"])
        self.assertEqual(password_errors("12"), [
            "Password must be at least 6 characters long",
            "Password must contain at least one letter",
        ])

    def test_joined_in_one_message(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_input(RegisterInput, {"name": "Alex", "email": "a@b.co", "password": "12"})
        self.assertEqual(
            ctx.exception.message,
            "Password must be at least 6 characters long, Password must contain at least one letter",
        )


class CheckRecordTests(unittest.TestCase):
    def test_reports_every_violation(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            check_record(StepsRecord, {"date": date(2026, 10, 19), "steps": -1, "duration": 30,
                                       "caloriesBurned": 6000})
        self.assertEqual(
            ctx.exception.message,
            "Steps must be between 0 and 100,000, Calories burned seems unrealistic (max 5000)",
        )

    def test_valid_record_passes(self) -> None:
        check_record(WorkoutRecord, {"date": date(2026, 10, 19), "type": "yoga", "name": "Flow",
                                     "duration": 45, "intensity": "low", "notes": None,
                                     "caloriesBurned": 131})

    def test_workout_calorie_ceiling(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            check_record(WorkoutRecord, {"date": date(2026, 10, 19), "type": "cardio", "name": "Ultra",
                                         "duration": 480, "intensity": "high", "caloriesBurned": 2001})
        self.assertEqual(ctx.exception.message, "Calories burned seems unrealistic (max 2000 per workout)")


if __name__ == "__main__":
    unittest.main()
