from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.security import hash_password
from app.main import create_app
from app.models.student import Student
from app.services.session_service import DeviceSessionTracker
from app.services.student_service import StudentDirectory

PASSWORDS = {
    "amna@lumina.lk": "amna_342",
    "hamna@lumina.lk": "hamna.564",
}


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tracker(clock):
    return DeviceSessionTracker(max_devices=2, session_ttl=timedelta(hours=9), clock=clock)


@pytest.fixture(scope="session")
def students():
    # bcrypt is deliberately slow; hash once per test run
    return [
        Student(
            id="Amna Inthikab",
            name="Amna Inthikab",
            email="amna@lumina.lk",
            password_hash=hash_password(PASSWORDS["amna@lumina.lk"]),
            year="Year 13 · Sri Lanka A/L",
            avatar="AI",
        ),
        Student(
            id="Hamna Inaam",
            name="Hamna Inaam",
            email="hamna@lumina.lk",
            password_hash=hash_password(PASSWORDS["hamna@lumina.lk"]),
            year="Year 13 · Sri Lanka A/L",
            avatar="HI",
        ),
    ]


@pytest.fixture
def directory(students):
    return StudentDirectory(students)


@pytest.fixture
def client(tracker, directory):
    return TestClient(create_app(tracker=tracker, directory=directory))
