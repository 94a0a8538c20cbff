"""
steps_service.py — Daily step entries
One entry per (user, day): logging a day that already exists updates it
in place. Calories are always re-derived from steps, duration and weight.
"""

import logging
from datetime import date, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import NotFoundError, ValidationError
from models.steps_entry import StepsEntry
from services.calorie_service import calculate_steps_calories
from services.dates import to_day
from services.validation import StepsInput, StepsRecord, check_record, validate_input

logger = logging.getLogger(__name__)

MAX_RESULTS = 365
DEFAULT_DAYS = 30
MAX_DAYS = 36500  # ~100 years; keeps today - days inside the date range


def list_window(query, column, today: date, days: int | None, start_date, end_date):
    """Apply the shared GET filters: an explicit start/end range wins over `days`."""
    if start_date and end_date:
        return query.filter(column >= to_day(start_date), column <= to_day(end_date))
    if days:
        if days < 0 or days > MAX_DAYS:
            raise ValidationError("Days must be between 0 and 36,500")
        try:
            since = today - timedelta(days=days)
        except OverflowError:
            since = date.min
        return query.filter(column >= since)
    return query


class StepsService:
    @staticmethod
    def _derive(entry: StepsEntry, weight: float) -> None:
        entry.calories_burned = calculate_steps_calories(entry.steps, weight, entry.duration)
        check_record(StepsRecord, {
            "date": entry.date,
            "steps": entry.steps,
            "duration": entry.duration,
            "caloriesBurned": entry.calories_burned,
        })

    @staticmethod
    def get_owned(db: Session, user_id: int, entry_id: int) -> StepsEntry:
        entry = db.query(StepsEntry).filter_by(id=entry_id, user_id=user_id).first()
        if not entry:
            raise NotFoundError("Steps entry not found")
        return entry

    @staticmethod
    def list_entries(db: Session, user_id: int, today: date, days: int | None = DEFAULT_DAYS,
                     start_date=None, end_date=None) -> list[StepsEntry]:
        query = db.query(StepsEntry).filter(StepsEntry.user_id == user_id)
        query = list_window(query, StepsEntry.date, today, days, start_date, end_date)
        return query.order_by(StepsEntry.date.desc()).limit(MAX_RESULTS).all()

    @staticmethod
    def upsert(db: Session, user_id: int, data: dict, weight: float) -> tuple[StepsEntry, bool]:
        """Create the day's entry or overwrite it. Returns (entry, created)."""
        clean = validate_input(StepsInput, data)

        entry = db.query(StepsEntry).filter_by(user_id=user_id, date=clean["date"]).first()
        created = entry is None
        if created:
            entry = StepsEntry(user_id=user_id, date=clean["date"])
            db.add(entry)
        entry.steps = clean["steps"]
        entry.duration = clean["duration"]

        try:
            StepsService._derive(entry, weight)
            db.commit()
        except IntegrityError:
            # Another request created the same day first; retry as an update
            db.rollback()
            entry = db.query(StepsEntry).filter_by(user_id=user_id, date=clean["date"]).one()
            entry.steps = clean["steps"]
            entry.duration = clean["duration"]
            StepsService._derive(entry, weight)
            db.commit()
            created = False
        except Exception:
            db.rollback()
            raise
        db.refresh(entry)
        logger.info(f"{'Created' if created else 'Updated'} steps entry {entry.id} for user {user_id}")
        return entry, created

    @staticmethod
    def update(db: Session, user_id: int, entry_id: int, data: dict, weight: float) -> StepsEntry:
        entry = StepsService.get_owned(db, user_id, entry_id)
        clean = validate_input(StepsInput, data, partial=True)
        clean.pop("date", None)  # the day is the entry's identity

        if not clean:
            return entry
        for key, value in clean.items():
            setattr(entry, key, value)
        try:
            StepsService._derive(entry, weight)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(entry)
        return entry

    @staticmethod
    def delete(db: Session, user_id: int, entry_id: int) -> None:
        entry = StepsService.get_owned(db, user_id, entry_id)
        db.delete(entry)
        db.commit()
        logger.info(f"Deleted steps entry {entry_id} for user {user_id}")
