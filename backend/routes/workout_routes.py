import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from errors import FitTrackerError, InternalError, ValidationError
from responses import success_response
from services.dates import resolve_today
from services.steps_service import DEFAULT_DAYS
from services.user_service import UserService
from services.validation import WorkoutInput
from services.workout_service import WorkoutService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workouts", tags=["Workouts"])


class WorkoutUpdate(WorkoutInput):
    MESSAGES = {**WorkoutInput.MESSAGES, "id": "Workout ID is required"}

    id: Optional[int] = None


@router.get("")
def list_workouts(
    days: Optional[int] = Query(DEFAULT_DAYS),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    today: Optional[str] = Query(None),
    tz: Optional[str] = Query(None),
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        workouts = WorkoutService.list_workouts(
            db, user_id, resolve_today(today, tz), days=days, start_date=start_date, end_date=end_date
        )
        return success_response([w.to_dict() for w in workouts])
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Get workouts error")
        raise InternalError("Failed to retrieve workout data")


@router.post("")
def add_workout(body: WorkoutInput, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        weight = UserService.weight_for(UserService.get_by_id(db, user_id))
        workout = WorkoutService.create(db, user_id, body.model_dump(exclude_unset=True), weight)
        return success_response(workout.to_dict(), "Workout added successfully", 201)
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Add workout error")
        raise InternalError("Failed to add workout data")


@router.put("")
def update_workout(body: WorkoutUpdate, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    if body.id is None:
        raise ValidationError("Workout ID is required")
    try:
        data = body.model_dump(exclude_unset=True)
        data.pop("id")
        weight = UserService.weight_for(UserService.get_by_id(db, user_id))
        workout = WorkoutService.update(db, user_id, body.id, data, weight)
        return success_response(workout.to_dict(), "Workout updated successfully")
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Update workout error")
        raise InternalError("Failed to update workout data")


@router.delete("")
def delete_workout(
    id: Optional[int] = Query(None),
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if id is None:
        raise ValidationError("Workout ID is required")
    try:
        WorkoutService.delete(db, user_id, id)
        return success_response(None, "Workout deleted successfully")
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Delete workout error")
        raise InternalError("Failed to delete workout")
