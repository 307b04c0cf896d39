from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: Student.

    Note: a student has no identity of its own; the admission number is unique across the registry.
    """

    name: str
    admission_number: str
    class_name: str


@dataclass(frozen=True)
class FamilyData:
    """Field values of a family before the store has assigned an id."""

    guardian_nic: str
    guardian_name: str
    primary_student: Student
    siblings: tuple[Student, ...] = ()
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class FamilyRecord:
    """Domain entity: a guardian with one primary student and any siblings."""

    id: str
    guardian_nic: str
    guardian_name: str
    primary_student: Student
    created_at: datetime
    siblings: tuple[Student, ...] = field(default_factory=tuple)

    @property
    def students(self) -> tuple[Student, ...]:
        return (self.primary_student, *self.siblings)

    @property
    def admission_numbers(self) -> tuple[str, ...]:
        return tuple(s.admission_number for s in self.students)
