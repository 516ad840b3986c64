"""
Auth controller — login, logout & device management.

Login is PUBLIC.  Logout only needs a correctly signed token (it must
stay idempotent); the remaining routes need a live device session.
"""

from typing import Any

from fastapi import APIRouter, Depends, Header

from app.core.dependencies import get_session_tracker, get_student_directory
from app.core.security import get_current_user_token, get_token_payload
from app.schemas import (
    DeviceSessionOut,
    LoginRequest,
    MessageResponse,
    SignOutAllResponse,
    StudentOut,
    TokenResponse,
)
from app.services import auth_service
from app.services.session_service import DeviceSessionTracker
from app.services.student_service import StudentDirectory

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={409: {"description": "Device limit reached"}},
)
def login(
    body: LoginRequest,
    user_agent: str = Header(default=""),
    directory: StudentDirectory = Depends(get_student_directory),
    tracker: DeviceSessionTracker = Depends(get_session_tracker),
):
    """Authenticate with email + password → receive a device-bound JWT."""
    # Sync route: bcrypt runs in the threadpool, not on the event loop.
    return auth_service.authenticate_student(
        body.email, body.password, user_agent, directory, tracker,
    )


@router.delete("/logout", response_model=MessageResponse)
async def logout(
    token_payload: dict[str, Any] = Depends(get_token_payload),
    tracker: DeviceSessionTracker = Depends(get_session_tracker),
):
    """Free this device's slot (server-side logout)."""
    auth_service.sign_out(token_payload, tracker)
    return MessageResponse(detail="Logged out successfully")


@router.get("/me", response_model=StudentOut)
async def me(
    token_payload: dict[str, Any] = Depends(get_current_user_token),
    directory: StudentDirectory = Depends(get_student_directory),
    tracker: DeviceSessionTracker = Depends(get_session_tracker),
):
    return auth_service.get_profile(token_payload, directory, tracker)


@router.get("/sessions", response_model=list[DeviceSessionOut])
async def list_sessions(
    token_payload: dict[str, Any] = Depends(get_current_user_token),
    tracker: DeviceSessionTracker = Depends(get_session_tracker),
):
    """Devices currently signed in to this account, oldest first."""
    return auth_service.list_devices(token_payload, tracker)


@router.delete("/sessions", response_model=SignOutAllResponse)
async def sign_out_everywhere(
    token_payload: dict[str, Any] = Depends(get_current_user_token),
    tracker: DeviceSessionTracker = Depends(get_session_tracker),
):
    """Sign this account out of every device, including this one."""
    count = auth_service.sign_out_everywhere(token_payload, tracker)
    return SignOutAllResponse(detail="Signed out of all devices", signed_out=count)
