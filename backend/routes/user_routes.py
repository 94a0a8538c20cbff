import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from errors import FitTrackerError, InternalError, NotFoundError
from responses import success_response
from services.user_service import UserService
from services.validation import GoalsInput, ProfileInput

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["User"])


# ── Goals ─────────────────────────────────────────────────────────
@router.get("/goals")
def get_goals(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """404 tells the client this is a new user who still has to pick goals."""
    try:
        goals = UserService.get_goals(db, user_id)
        if goals is None:
            raise NotFoundError("Goals not found")
        return success_response(goals)
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Get goals error")
        raise InternalError("Failed to retrieve goals")


@router.post("/goals")
def set_goals(body: GoalsInput, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        goals = UserService.set_goals(db, user_id, body.model_dump(exclude_unset=True))
        return success_response(goals, "Goals set successfully", 201)
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Set goals error")
        raise InternalError("Failed to set goals")


@router.put("/goals")
def update_goals(body: GoalsInput, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        goals = UserService.update_goals(db, user_id, body.model_dump(exclude_unset=True))
        return success_response(goals, "Goals updated successfully")
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Update goals error")
        raise InternalError("Failed to update goals")


# ── Profile ───────────────────────────────────────────────────────
@router.get("/profile")
def get_profile(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        return success_response(UserService.get_profile(db, user_id))
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Get profile error")
        raise InternalError("Failed to retrieve profile")


@router.put("/profile")
def update_profile(body: ProfileInput, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Partial update: omitted fields stay, explicit null clears."""
    try:
        user = UserService.update_profile(db, user_id, body.model_dump(exclude_unset=True))
        return success_response(user.to_dict(), "Profile updated successfully")
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Update profile error")
        raise InternalError("Failed to update profile")
