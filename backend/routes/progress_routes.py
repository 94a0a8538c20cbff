import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from errors import FitTrackerError, InternalError
from responses import success_response
from services.dates import resolve_today
from services.progress_service import ProgressService
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Progress"])


@router.get("/dashboard")
def dashboard(
    today: Optional[str] = Query(None, description="Client's local calendar day, YYYY-MM-DD"),
    tz: Optional[str] = Query(None, description="IANA timezone used when `today` is omitted"),
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        user = UserService.get_or_404(db, user_id)
        return success_response(ProgressService.build_dashboard(db, user, resolve_today(today, tz)))
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Dashboard error")
        raise InternalError("Failed to load dashboard")


@router.get("/progress")
def progress(
    today: Optional[str] = Query(None, description="Client's local calendar day, YYYY-MM-DD"),
    tz: Optional[str] = Query(None, description="IANA timezone used when `today` is omitted"),
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        user = UserService.get_or_404(db, user_id)
        return success_response(ProgressService.build_progress(db, user, resolve_today(today, tz)))
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Progress error")
        raise InternalError("Failed to load progress data")
