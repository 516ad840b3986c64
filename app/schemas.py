"""
Pydantic schemas for request / response serialization.

Kept in a single file for now — split per-domain when it grows.
Schemas are deliberately decoupled from the domain models so the
API surface can evolve independently of the in-memory registry.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ── Auth ─────────────────────────────────────────────────────────────
class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    name: str


class DeviceLimitError(BaseModel):
    code: str = "DEVICE_LIMIT"
    message: str
    max_devices: int


# ── Student ──────────────────────────────────────────────────────────
class StudentOut(BaseModel):
    id: str
    name: str
    email: str
    year: str
    avatar: str
    active_devices: int
    max_devices: int


# ── Device sessions ──────────────────────────────────────────────────
class DeviceSessionOut(BaseModel):
    user_agent: str
    created_at: datetime
    current: bool = False


class SignOutAllResponse(BaseModel):
    detail: str
    signed_out: int


# ── Generic ──────────────────────────────────────────────────────────
class MessageResponse(BaseModel):
    detail: str
