"""
Application configuration.

All settings are loaded from environment variables (or a .env file).
Pydantic-settings validates and types every value at startup, so
misconfiguration fails fast instead of at runtime.
"""

from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────────────────
    APP_NAME: str = "Lumina LMS"
    DEBUG: bool = False

    # ── JWT / Auth ───────────────────────────────────────────────────
    SECRET_KEY: str = "CHANGE-ME-in-production-use-a-real-secret"
    JWT_ALGORITHM: str = "HS256"
    # 8 h — one hour below the device-slot TTL, so a slot always
    # outlives the token that references it.
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 8

    # ── Device limit ─────────────────────────────────────────────────
    MAX_DEVICES: int = Field(default=2, ge=1)
    SESSION_TTL_HOURS: float = Field(default=9, gt=0)

    @property
    def SESSION_TTL(self) -> timedelta:
        return timedelta(hours=self.SESSION_TTL_HOURS)

    # ── Roster ───────────────────────────────────────────────────────
    STUDENTS_FILE: str = "students.json"

    # ── Frontend ─────────────────────────────────────────────────────
    FRONTEND_URL: str = "http://localhost:3000"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
