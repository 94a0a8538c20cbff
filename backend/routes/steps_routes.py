import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from errors import FitTrackerError, InternalError, ValidationError
from responses import success_response
from services.dates import resolve_today
from services.steps_service import StepsService, DEFAULT_DAYS
from services.user_service import UserService
from services.validation import StepsInput

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/steps", tags=["Steps"])


class StepsUpdate(StepsInput):
    MESSAGES = {**StepsInput.MESSAGES, "id": "Steps entry ID is required"}

    id: Optional[int] = None


@router.get("")
def list_steps(
    days: Optional[int] = Query(DEFAULT_DAYS),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    today: Optional[str] = Query(None),
    tz: Optional[str] = Query(None),
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        entries = StepsService.list_entries(
            db, user_id, resolve_today(today, tz), days=days, start_date=start_date, end_date=end_date
        )
        return success_response([e.to_dict() for e in entries])
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Get steps error")
        raise InternalError("Failed to retrieve steps data")


@router.post("")
def add_steps(body: StepsInput, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Log a day's steps; a second post for the same day overwrites it."""
    try:
        weight = UserService.weight_for(UserService.get_by_id(db, user_id))
        entry, created = StepsService.upsert(db, user_id, body.model_dump(exclude_unset=True), weight)
        if created:
            return success_response(entry.to_dict(), "Steps added successfully", 201)
        return success_response(entry.to_dict(), "Steps updated successfully")
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Add steps error")
        raise InternalError("Failed to add steps data")


@router.put("")
def update_steps(body: StepsUpdate, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    if body.id is None:
        raise ValidationError("Steps entry ID is required")
    try:
        data = body.model_dump(exclude_unset=True)
        data.pop("id")
        weight = UserService.weight_for(UserService.get_by_id(db, user_id))
        entry = StepsService.update(db, user_id, body.id, data, weight)
        return success_response(entry.to_dict(), "Steps updated successfully")
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Update steps error")
        raise InternalError("Failed to update steps data")


@router.delete("")
def delete_steps(
    id: Optional[int] = Query(None),
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if id is None:
        raise ValidationError("Steps entry ID is required")
    try:
        StepsService.delete(db, user_id, id)
        return success_response(None, "Steps entry deleted successfully")
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Delete steps error")
        raise InternalError("Failed to delete steps entry")
