from __future__ import annotations

import pytest

from app.models.student import Student
from app.services.student_service import StudentDirectory
from tests.conftest import PASSWORDS


def test_find_student(directory):
    student = directory.find_student("amna@lumina.lk", PASSWORDS["amna@lumina.lk"])
    assert student is not None
    assert student.id == "Amna Inthikab"


def test_find_student_wrong_password(directory):
    assert directory.find_student("amna@lumina.lk", PASSWORDS["hamna@lumina.lk"]) is None
    assert directory.find_student("ghost@lumina.lk", "x") is None


def test_non_bcrypt_hash_never_matches():
    directory = StudentDirectory([
        Student(id="s1", name="S One", email="s1@lumina.lk", password_hash="plaintext"),
    ])
    assert directory.find_student("s1@lumina.lk", "plaintext") is None


def test_duplicate_email_is_rejected(directory, students):
    clash = students[0].model_copy(update={"id": "someone-else", "email": "AMNA@lumina.lk"})
    with pytest.raises(ValueError):
        directory.add(clash)


def test_missing_roster_file_gives_empty_directory(tmp_path):
    assert len(StudentDirectory.from_file(tmp_path / "students.json")) == 0


def test_malformed_roster_fails_fast(tmp_path):
    path = tmp_path / "students.json"
    path.write_text('[{"id": "x"}]')
    with pytest.raises(ValueError):
        StudentDirectory.from_file(path)


def test_save_and_reload(tmp_path, directory):
    path = tmp_path / "students.json"
    directory.save(path)
    reloaded = StudentDirectory.from_file(path)
    assert len(reloaded) == 2
    assert reloaded.find_student("hamna@lumina.lk", PASSWORDS["hamna@lumina.lk"]).name == "Hamna Inaam"
