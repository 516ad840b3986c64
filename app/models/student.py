"""
Student model.

Students are not self-registered: the roster is a JSON file maintained
by staff (see ``app.scripts.create_student``).  Only the bcrypt hash of
each password is stored.
"""

from pydantic import BaseModel, Field


class Student(BaseModel):
    id: str = Field(min_length=1)
    name: str
    email: str
    password_hash: str
    year: str = ""
    avatar: str = ""  # initials shown in the top bar

    def __repr__(self) -> str:
        return f"<Student {self.email}>"
