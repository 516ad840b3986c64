"""
Session service — per-student device limit.

Handles:
- Admission control at login (is another device slot free?)
- Refreshing a slot when the same login token registers again
- Freeing a slot on sign-out, or every slot on force sign-out
- Counting / listing the devices a student currently has

Concurrency rules:
- Every operation on a student runs under that student's own lock, so
  the read-filter-decide-write sequence of ``register`` is atomic per
  user and two logins can never both take the last free slot.
- Different students never contend on the same lock.

Expired slots (older than the TTL) are dropped lazily by ``register``;
nothing runs in the background.  The limit is enforced *before* a
session is created — an existing device is never evicted to make room.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from app.models.session import DeviceSession, utc_now

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEVICES = 2
DEFAULT_SESSION_TTL = timedelta(hours=9)


@dataclass(frozen=True)
class RegistrationResult:
    allowed: bool


class DeviceSessionTracker:
    """In-memory registry of active device sessions, keyed by user id."""

    def __init__(
        self,
        max_devices: int = DEFAULT_MAX_DEVICES,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        if max_devices < 1:
            raise ValueError("max_devices must be at least 1")
        if session_ttl <= timedelta(0):
            raise ValueError("session_ttl must be positive")
        self.max_devices = max_devices
        self.session_ttl = session_ttl
        self._clock = clock
        self._sessions: dict[str, list[DeviceSession]] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # ── Locking ──────────────────────────────────────────────────────

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = self._locks[user_id] = threading.Lock()
            return lock

    def _live(self, user_id: str, now: datetime) -> list[DeviceSession]:
        return [
            s for s in self._sessions.get(user_id, [])
            if not s.is_expired(now, self.session_ttl)
        ]

    # ── Lifecycle ────────────────────────────────────────────────────

    def register(
        self,
        user_id: str,
        session_token: str,
        user_agent: str = "",
    ) -> RegistrationResult:
        """
        Try to occupy a device slot for ``session_token``.

        Returns ``allowed=True`` when the token already holds a slot
        (its timestamp is refreshed) or a slot is free (a new session
        is appended).  Returns ``allowed=False`` when the student is at
        the limit; stored sessions are left untouched in that case.
        """
        with self._lock_for(user_id):
            now = self._clock()
            live = self._live(user_id, now)
            self._sessions[user_id] = live

            for sess in live:
                if sess.session_token == session_token:
                    sess.created_at = now
                    logger.debug("Refreshed device session for user %s", user_id)
                    return RegistrationResult(allowed=True)

            if len(live) >= self.max_devices:
                logger.warning(
                    "Device limit reached for user %s (%d/%d active)",
                    user_id,
                    len(live),
                    self.max_devices,
                )
                return RegistrationResult(allowed=False)

            live.append(
                DeviceSession(session_token=session_token, created_at=now, user_agent=user_agent)
            )
            logger.debug(
                "Registered device session for user %s (%d/%d active)",
                user_id,
                len(live),
                self.max_devices,
            )
            return RegistrationResult(allowed=True)

    def remove(self, user_id: str, session_token: str) -> None:
        """Free the slot held by ``session_token``.  Unknown user / token is a no-op."""
        with self._lock_for(user_id):
            existing = self._sessions.get(user_id)
            if not existing:
                return
            remaining = [s for s in existing if s.session_token != session_token]
            if len(remaining) != len(existing):
                logger.debug("Removed device session for user %s", user_id)
            self._sessions[user_id] = remaining

    def remove_all(self, user_id: str) -> int:
        """
        Drop every session of a user (force sign-out on all devices).

        Returns the number of non-expired sessions that were freed.
        """
        with self._lock_for(user_id):
            freed = len(self._live(user_id, self._clock()))
            self._sessions.pop(user_id, None)
        if freed:
            logger.info("Signed user %s out of %d device(s)", user_id, freed)
        return freed

    # ── Queries (read-only, never purge) ─────────────────────────────

    def active_count(self, user_id: str) -> int:
        with self._lock_for(user_id):
            return len(self._live(user_id, self._clock()))

    def sessions(self, user_id: str) -> list[DeviceSession]:
        """Snapshot of the user's non-expired sessions, in login order."""
        with self._lock_for(user_id):
            return [s.copy() for s in self._live(user_id, self._clock())]
