"""Field-level validation of the family registration form.

Validation never raises: every problem is collected into a mapping keyed by
the field it belongs to, so the form can show all messages at once.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..common.validators import check_min_length, check_required, clean, is_admission_number, is_class_option
from ..core.constants import NIC_MIN_LENGTH
from .model import FamilyData, Student
from .repository import FamilyRepository


@dataclass(frozen=True)
class RecordField:
    """A field of the family itself or of its primary student."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SiblingField:
    """A field of the sibling at `index` in the submitted sibling list."""

    index: int
    name: str

    def __str__(self) -> str:
        return f"siblings-{self.index}-{self.name}"


FieldLocator = Union[RecordField, SiblingField]
FieldErrors = dict[FieldLocator, str]

GUARDIAN_NIC = RecordField("guardian_nic")
GUARDIAN_NAME = RecordField("guardian_name")
PRIMARY_NAME = RecordField("primary_student-name")
PRIMARY_ADMISSION_NUMBER = RecordField("primary_student-admission_number")
PRIMARY_CLASS = RecordField("primary_student-class_name")


@dataclass(frozen=True)
class FamilyForm:
    """Raw values as submitted; nothing is trimmed yet."""

    guardian_nic: str
    guardian_name: str
    primary_student: Student
    siblings: list[Student] = field(default_factory=list)

    def to_family_data(self) -> FamilyData:
        return FamilyData(
            guardian_nic=clean(self.guardian_nic),
            guardian_name=clean(self.guardian_name),
            primary_student=_clean_student(self.primary_student),
            siblings=tuple(_clean_student(s) for s in self.siblings),
        )


def _clean_student(student: Student) -> Student:
    return Student(
        name=clean(student.name),
        admission_number=clean(student.admission_number),
        class_name=clean(student.class_name),
    )


def _check_admission_number(
    value: str,
    repo: FamilyRepository,
    exclude_id: Optional[str],
    seen: set[str],
) -> Optional[str]:
    if not value:
        return "Admission number is required"
    if not is_admission_number(value):
        return "Admission number must be exactly 5 digits"
    if repo.admission_number_exists(value, exclude_id):
        return "This admission number already exists"
    if value in seen:
        return "This admission number is used twice in this form"
    return None


def _check_class(value: str) -> Optional[str]:
    if not value:
        return "Class is required"
    if not is_class_option(value):
        return "Please select a valid class"
    return None


def validate_family(
    form: FamilyForm,
    repo: FamilyRepository,
    exclude_id: Optional[str] = None,
) -> FieldErrors:
    """Collect field errors for `form`.

    `exclude_id` is the id of the family being edited, so its own NIC and
    admission numbers do not count as duplicates.
    """
    data = form.to_family_data()
    errors: FieldErrors = {}

    def put(locator: FieldLocator, message: Optional[str]) -> None:
        if message:
            errors[locator] = message

    nic = data.guardian_nic
    put(
        GUARDIAN_NIC,
        check_required(nic, "NIC number is required")
        or check_min_length(nic, NIC_MIN_LENGTH, f"NIC number must be at least {NIC_MIN_LENGTH} characters")
        or ("This NIC number already exists in the system" if repo.nic_exists(nic, exclude_id) else None),
    )
    put(GUARDIAN_NAME, check_required(data.guardian_name, "Guardian name is required"))

    seen: set[str] = set()
    primary = data.primary_student
    put(PRIMARY_NAME, check_required(primary.name, "Student name is required"))
    put(PRIMARY_ADMISSION_NUMBER, _check_admission_number(primary.admission_number, repo, exclude_id, seen))
    put(PRIMARY_CLASS, _check_class(primary.class_name))
    seen.add(primary.admission_number)

    for index, sibling in enumerate(data.siblings):
        put(SiblingField(index, "name"), check_required(sibling.name, "Sibling name is required"))
        put(
            SiblingField(index, "admission_number"),
            _check_admission_number(sibling.admission_number, repo, exclude_id, seen),
        )
        put(SiblingField(index, "class_name"), _check_class(sibling.class_name))
        seen.add(sibling.admission_number)

    return errors
