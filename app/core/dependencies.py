"""
Shared FastAPI dependencies.

The session tracker and the student directory are created once by
``create_app`` and stored on ``app.state``; routes receive them through
these dependencies instead of importing module-level globals, so every
app instance (and every test) gets its own registry.
"""

from fastapi import Request

from app.services.session_service import DeviceSessionTracker
from app.services.student_service import StudentDirectory


def get_session_tracker(request: Request) -> DeviceSessionTracker:
    return request.app.state.session_tracker


def get_student_directory(request: Request) -> StudentDirectory:
    return request.app.state.student_directory
