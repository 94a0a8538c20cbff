"""
workout_service.py — Workout log
Any number of workouts per day. Calories come from the MET table and are
recomputed whenever type, intensity or duration change.
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from errors import NotFoundError
from models.workout import Workout
from services.calorie_service import calculate_workout_calories
from services.steps_service import DEFAULT_DAYS, MAX_RESULTS, list_window
from services.validation import WorkoutInput, WorkoutRecord, check_record, validate_input

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("date", "type", "name", "duration", "intensity", "notes")


class WorkoutService:
    @staticmethod
    def _derive(workout: Workout, weight: float) -> None:
        workout.calories_burned = calculate_workout_calories(
            workout.type, workout.intensity, workout.duration, weight
        )
        check_record(WorkoutRecord, {
            "date": workout.date,
            "type": workout.type,
            "name": workout.name,
            "duration": workout.duration,
            "intensity": workout.intensity,
            "notes": workout.notes,
            "caloriesBurned": workout.calories_burned,
        })

    @staticmethod
    def get_owned(db: Session, user_id: int, workout_id: int) -> Workout:
        workout = db.query(Workout).filter_by(id=workout_id, user_id=user_id).first()
        if not workout:
            raise NotFoundError("Workout not found")
        return workout

    @staticmethod
    def list_workouts(db: Session, user_id: int, today: date, days: int | None = DEFAULT_DAYS,
                      start_date=None, end_date=None) -> list[Workout]:
        query = db.query(Workout).filter(Workout.user_id == user_id)
        query = list_window(query, Workout.date, today, days, start_date, end_date)
        return query.order_by(Workout.date.desc(), Workout.id.desc()).limit(MAX_RESULTS).all()

    @staticmethod
    def create(db: Session, user_id: int, data: dict, weight: float) -> Workout:
        clean = validate_input(WorkoutInput, data)
        workout = Workout(user_id=user_id, **{k: clean.get(k) for k in EDITABLE_FIELDS})
        workout.notes = workout.notes or None
        try:
            WorkoutService._derive(workout, weight)
            db.add(workout)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(workout)
        logger.info(f"Created workout {workout.id} for user {user_id}")
        return workout

    @staticmethod
    def update(db: Session, user_id: int, workout_id: int, data: dict, weight: float) -> Workout:
        workout = WorkoutService.get_owned(db, user_id, workout_id)
        clean = validate_input(WorkoutInput, data, partial=True)
        if "notes" in clean:
            clean["notes"] = clean["notes"] or None
        for key, value in clean.items():
            setattr(workout, key, value)
        try:
            WorkoutService._derive(workout, weight)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(workout)
        return workout

    @staticmethod
    def delete(db: Session, user_id: int, workout_id: int) -> None:
        workout = WorkoutService.get_owned(db, user_id, workout_id)
        db.delete(workout)
        db.commit()
        logger.info(f"Deleted workout {workout_id} for user {user_id}")
