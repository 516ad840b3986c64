"""
Authentication service.

Handles:
- Login with per-student device-limit enforcement
- Sign-out of the current device, or of every device
- Building the "who am I" / "my devices" views

Concurrency rules:
- Each successful login occupies one device slot in the
  ``DeviceSessionTracker``; at most ``max_devices`` at a time.
- A login beyond the limit is rejected with 409 ``DEVICE_LIMIT`` —
  distinct from 401 bad credentials — and no other device is signed
  out to make room.

All business logic lives here — controllers call service functions
and return the result.
"""

import logging
import secrets
import time
from typing import Any

from fastapi import HTTPException, status

from app.core.security import create_access_token
from app.schemas import DeviceLimitError, DeviceSessionOut, StudentOut
from app.services.session_service import DeviceSessionTracker
from app.services.student_service import StudentDirectory

logger = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────

def new_session_token(student_id: str) -> str:
    """One token per login attempt, so every device gets its own slot."""
    return f"{student_id}-{int(time.time() * 1000)}-{secrets.token_urlsafe(8)}"


# ── Login ────────────────────────────────────────────────────────────

def authenticate_student(
    email: str,
    password: str,
    user_agent: str,
    directory: StudentDirectory,
    tracker: DeviceSessionTracker,
) -> dict[str, Any]:
    """
    Validate credentials, claim a device slot, and return an access token
    carrying the slot's session token.
    """
    student = directory.find_student(email, password)
    if student is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    session_token = new_session_token(student.id)
    result = tracker.register(student.id, session_token, user_agent)
    if not result.allowed:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DeviceLimitError(
                message=(
                    f"This account is already signed in on {tracker.max_devices} devices. "
                    "Sign out on another device and try again."
                ),
                max_devices=tracker.max_devices,
            ).model_dump(),
        )

    access_token = create_access_token({
        "sub": student.id,
        "session_token": session_token,
        "name": student.name,
        "email": student.email,
    })
    logger.info("Student %s logged in", student.id)

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user_id": student.id,
        "name": student.name,
    }


# ── Sign-out ─────────────────────────────────────────────────────────

def sign_out(token_payload: dict[str, Any], tracker: DeviceSessionTracker) -> None:
    tracker.remove(token_payload["sub"], token_payload["session_token"])
    logger.info("Student %s signed out", token_payload["sub"])


def sign_out_everywhere(token_payload: dict[str, Any], tracker: DeviceSessionTracker) -> int:
    return tracker.remove_all(token_payload["sub"])


# ── Views ────────────────────────────────────────────────────────────

def get_profile(
    token_payload: dict[str, Any],
    directory: StudentDirectory,
    tracker: DeviceSessionTracker,
) -> StudentOut:
    student = directory.get(token_payload["sub"])
    if student is None:
        # Removed from the roster after logging in
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Student not found")
    return StudentOut(
        id=student.id,
        name=student.name,
        email=student.email,
        year=student.year,
        avatar=student.avatar,
        active_devices=tracker.active_count(student.id),
        max_devices=tracker.max_devices,
    )


def list_devices(
    token_payload: dict[str, Any],
    tracker: DeviceSessionTracker,
) -> list[DeviceSessionOut]:
    current = token_payload["session_token"]
    return [
        DeviceSessionOut(
            user_agent=s.user_agent,
            created_at=s.created_at,
            current=s.session_token == current,
        )
        for s in tracker.sessions(token_payload["sub"])
    ]
