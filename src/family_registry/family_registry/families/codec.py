"""Mapping between family entities and their JSON shape.

The JSON shape uses the field names of the browser-era exports
(`guardianNic`, `primaryStudent`, `admissionNumber`, `class`, ...) so old
backup files stay importable.
"""
from __future__ import annotations

from typing import Any

from ..common.datetime_utils import format_timestamp, parse_timestamp
from .model import FamilyRecord, Student


def student_to_dict(student: Student) -> dict[str, str]:
    return {
        "name": student.name,
        "admissionNumber": student.admission_number,
        "class": student.class_name,
    }


def student_from_dict(raw: dict[str, Any]) -> Student:
    return Student(
        name=str(raw.get("name") or ""),
        admission_number=str(raw.get("admissionNumber") or ""),
        class_name=str(raw.get("class") or ""),
    )


def family_to_dict(family: FamilyRecord) -> dict[str, Any]:
    return {
        "id": family.id,
        "guardianNic": family.guardian_nic,
        "guardianName": family.guardian_name,
        "primaryStudent": student_to_dict(family.primary_student),
        "siblings": [student_to_dict(s) for s in family.siblings],
        "createdAt": format_timestamp(family.created_at),
    }


def family_from_dict(raw: dict[str, Any]) -> FamilyRecord:
    return FamilyRecord(
        id=str(raw["id"]),
        guardian_nic=str(raw["guardianNic"]),
        guardian_name=str(raw["guardianName"]),
        primary_student=student_from_dict(raw["primaryStudent"]),
        siblings=tuple(student_from_dict(s) for s in raw.get("siblings") or []),
        created_at=parse_timestamp(str(raw["createdAt"])),
    )
