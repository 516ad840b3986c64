"""
Device session model — one admitted login slot.

A student may hold a limited number of these at once.  Each login
attempt gets its own ``session_token``; re-registering the same token
refreshes ``created_at`` instead of occupying a second slot.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DeviceSession:
    session_token: str
    created_at: datetime = field(default_factory=utc_now)
    user_agent: str = ""  # informational only

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.created_at >= ttl

    def copy(self) -> "DeviceSession":
        return replace(self)

    def __repr__(self) -> str:
        return f"<DeviceSession token={self.session_token[:8]}… created={self.created_at.isoformat()}>"
