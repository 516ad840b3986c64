"""
Models package — in-memory domain objects.

Nothing here is persisted by a database: the roster is read from a
JSON file and device sessions live only as long as the process.
"""

from app.models.session import DeviceSession, utc_now
from app.models.student import Student

__all__ = [
    "DeviceSession",
    "Student",
    "utc_now",
]
