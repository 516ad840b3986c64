"""
Roster script — adds an authorised student to ``STUDENTS_FILE``.

Usage:
    uv run python -m app.scripts.create_student

Only the bcrypt hash of the password is written.  Restart the server
afterwards; the roster is read once at startup.
"""

import getpass

from app.core.config import settings
from app.core.security import hash_password
from app.models.student import Student
from app.services.student_service import StudentDirectory


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split()[:2]).upper()


def create_student() -> None:
    directory = StudentDirectory.from_file(settings.STUDENTS_FILE)

    # ── Collect input ────────────────────────────────────────────────
    print(f"\n🔧  {settings.APP_NAME} — Add Student\n")
    name = input("  Full name: ").strip()
    email = input("  Email:     ").strip()
    year = input("  Year:      ").strip()
    password = getpass.getpass("  Password:  ")
    confirm = getpass.getpass("  Confirm:   ")

    if password != confirm:
        print("\n❌  Passwords do not match.")
        return

    if not email or not name or not password:
        print("\n❌  Name, email and password are required.")
        return

    if len(password.encode("utf-8")) > 72:
        print("\n❌  Password is too long (bcrypt accepts at most 72 bytes).")
        return

    student = Student(
        id=name,
        name=name,
        email=email,
        password_hash=hash_password(password),
        year=year,
        avatar=initials(name),
    )
    try:
        directory.add(student)
    except ValueError as exc:
        print(f"\n❌  {exc}")
        return

    directory.save(settings.STUDENTS_FILE)

    print("\n✅  Student added successfully!")
    print(f"    ID:    {student.id}")
    print(f"    Email: {student.email}")
    print("\n   Restart the server, then log in via POST /api/auth/login\n")


if __name__ == "__main__":
    create_student()
