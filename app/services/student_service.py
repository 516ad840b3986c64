"""
Student service — the roster of authorised students.

The roster is a JSON list of student objects (see ``Student``).  It is
read once at startup; edit it with ``python -m app.scripts.create_student``
and restart the server.
"""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from app.core.security import verify_password
from app.models.student import Student

logger = logging.getLogger(__name__)

_roster_adapter = TypeAdapter(list[Student])


def _normalise_email(email: str) -> str:
    return email.strip().lower()


class StudentDirectory:
    def __init__(self, students: list[Student] | None = None):
        self._by_email: dict[str, Student] = {}
        self._by_id: dict[str, Student] = {}
        for student in students or []:
            self.add(student)

    @classmethod
    def from_file(cls, path: str | Path) -> "StudentDirectory":
        """
        Load the roster.  A missing file gives an empty directory; a
        malformed one raises ``ValueError`` so startup fails fast.
        """
        path = Path(path)
        if not path.exists():
            logger.warning("Student roster %s not found — nobody can log in", path)
            return cls()
        students = _roster_adapter.validate_json(path.read_bytes())
        logger.info("Loaded %d student(s) from %s", len(students), path)
        return cls(students)

    def save(self, path: str | Path) -> None:
        data = [s.model_dump() for s in self._by_id.values()]
        Path(path).write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    def add(self, student: Student) -> None:
        email = _normalise_email(student.email)
        if email in self._by_email:
            raise ValueError(f"Student with email '{student.email}' already exists")
        if student.id in self._by_id:
            raise ValueError(f"Student with id '{student.id}' already exists")
        self._by_email[email] = student
        self._by_id[student.id] = student

    def get(self, student_id: str) -> Student | None:
        return self._by_id.get(student_id)

    def find_student(self, email: str, password: str) -> Student | None:
        """Return the matching student, or None on unknown email / wrong password."""
        student = self._by_email.get(_normalise_email(email))
        if student is None or not verify_password(password, student.password_hash):
            return None
        return student

    def __len__(self) -> int:
        return len(self._by_id)
