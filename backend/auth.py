import logging
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
from fastapi import Request, Response
from jose import jwt, JWTError

from config import (
    JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRY_HOURS, JWT_ISSUER, JWT_AUDIENCE,
    AUTH_COOKIE_NAME, AUTH_COOKIE_MAX_AGE, IS_PRODUCTION, TRUST_PROXY_HEADERS,
)
from errors import AuthenticationError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a plain-text password using bcrypt."""
    # Ensure it doesn't exceed 72 bytes to prevent bcrypt ValueError
    pw_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=12))
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    try:
        pw_bytes = plain_password.encode('utf-8')[:72]
        hash_bytes = hashed_password.encode('utf-8')
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except ValueError as e:
        logger.warning(f"Bcrypt verification error: {e}")
        return False


def create_token(user) -> str:
    """Create a JWT for a user with expiry, issuer/audience and a unique JTI."""
    now = datetime.now(timezone.utc)
    to_encode = {
        "userId": user.id,
        "email": user.email,
        "name": user.name,
        "iat": now,
        "exp": now + timedelta(hours=JWT_EXPIRY_HOURS),
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Decode and verify a JWT token. Returns the payload or None on failure."""
    try:
        return jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except JWTError:
        return None


def get_token_from_request(request: Request) -> str | None:
    """Bearer header first, then the auth cookie."""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return request.cookies.get(AUTH_COOKIE_NAME) or None


async def get_current_user(request: Request) -> int:
    """
    FastAPI dependency — resolves the caller's identity from the bearer
    token (or auth cookie) and returns the user id.
    Raises AuthenticationError before any validation or storage access.
    """
    token = get_token_from_request(request)
    if not token:
        raise AuthenticationError("Authentication required")

    payload = verify_token(token)
    if payload is None:
        raise AuthenticationError("Authentication required")

    user_id = payload.get("userId")
    if not isinstance(user_id, int):
        raise AuthenticationError("Authentication required")
    return user_id


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=AUTH_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=IS_PRODUCTION,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=IS_PRODUCTION,
    )


def get_client_ip(request: Request) -> str:
    """Client address for throttling; proxy headers only when TRUST_PROXY_HEADERS is on."""
    if TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip.strip()
    return request.client.host if request.client else "unknown"
