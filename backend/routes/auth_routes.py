"""
Auth routes — registration, login and logout.
Both credential endpoints are throttled per client address by a route
dependency, so the limit applies before any body or credential check.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from auth import create_token, set_auth_cookie, clear_auth_cookie
from database import get_db
from errors import FitTrackerError, InternalError
from responses import success_response
from services.rate_limiter import rate_limit
from services.user_service import UserService
from services.validation import LoginInput, RegisterInput

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _auth_payload(user, message: str, status_code: int):
    token = create_token(user)
    response = success_response({"user": user.to_dict(), "token": token}, message, status_code)
    set_auth_cookie(response, token)
    return response


# ── Routes ────────────────────────────────────────────────────────
@router.post("/register", dependencies=[Depends(rate_limit("register"))])
def register(body: RegisterInput, db: Session = Depends(get_db)):
    """Create an account with default goals and sign the user in."""
    try:
        user = UserService.register(db, body.model_dump(exclude_unset=True))
        return _auth_payload(user, "Account created successfully", 201)
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Registration error")
        raise InternalError("Internal server error. Please try again.")


@router.post("/login", dependencies=[Depends(rate_limit("login"))])
def login(body: LoginInput, db: Session = Depends(get_db)):
    """Authenticate with email + password."""
    try:
        user = UserService.authenticate(db, body.model_dump(exclude_unset=True))
        return _auth_payload(user, "Login successful", 200)
    except FitTrackerError:
        raise
    except Exception:
        logger.exception("Login error")
        raise InternalError("Internal server error. Please try again.")


@router.post("/logout")
def logout():
    """Drop the auth cookie; bearer-token clients simply discard their token."""
    response = success_response(None, "Logged out")
    clear_auth_cookie(response)
    return response
