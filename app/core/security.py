"""
Password hashing & JWT helpers.

- Passwords are hashed with bcrypt directly (passlib is unmaintained
  and broken with bcrypt>=4.1).
- JWTs carry the student id (``sub``) and the per-device
  ``session_token`` that occupies one of the student's device slots.
- Protected routes validate the token against the in-memory device
  registry on EVERY request, so a signed-out (or restarted-away)
  device is rejected even while its JWT is still unexpired.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from app.core.config import settings

# ── Password hashing ────────────────────────────────────────────────


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash (hand-edited roster entry)
        return False


# ── JWT ──────────────────────────────────────────────────────────────
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode & validate a JWT.  Raises HTTPException on failure."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise _unauthorized("Invalid or expired token")

    if not payload.get("sub") or not payload.get("session_token"):
        raise _unauthorized("Invalid token payload — missing session fields")
    return payload


# ── Per-request session validation ──────────────────────────────────


async def get_token_payload(token: str = Depends(oauth2_scheme)) -> dict[str, Any]:
    """
    FastAPI dependency — signature, expiry and required claims only.

    Used by sign-out, which must keep working after the device slot has
    already been freed.
    """
    return decode_access_token(token)


async def get_current_user_token(
    request: Request,
    payload: dict[str, Any] = Depends(get_token_payload),
) -> dict[str, Any]:
    """
    FastAPI dependency for protected routes.

    Checks performed on every request:
      1. JWT signature & expiry.
      2. ``sub`` and ``session_token`` claims are present.
      3. The session token still holds a live device slot.
    """
    tracker = request.app.state.session_tracker
    live_tokens = {s.session_token for s in tracker.sessions(payload["sub"])}
    if payload["session_token"] not in live_tokens:
        raise _unauthorized("Session expired or revoked")
    return payload
