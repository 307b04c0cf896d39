from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import format_date, now_local, parse_timestamp
from ..core.enums import ExportFormat, ImportStatus
from ..core.exceptions import ImportFormatError
from ..families.codec import family_to_dict, student_from_dict
from ..families.model import FamilyData, FamilyRecord, Student
from ..families.repository import FamilyRepository

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Family ID", "Guardian NIC", "Guardian Name", "Students", "Total Children", "Created Date"]


@dataclass(frozen=True)
class ImportPlan:
    """What an import file would do to the registry, computed before any change."""

    valid: list[FamilyData] = field(default_factory=list)
    clean: list[FamilyData] = field(default_factory=list)
    dropped: int = 0
    nic_duplicates: int = 0
    admission_duplicates: int = 0
    batch_duplicates: int = 0

    @property
    def duplicate_count(self) -> int:
        return len(self.valid) - len(self.clean)

    @property
    def requires_confirmation(self) -> bool:
        return self.duplicate_count > 0 and bool(self.clean)

    def duplicate_summary(self) -> list[str]:
        lines = []
        if self.nic_duplicates:
            lines.append(f"{self.nic_duplicates} families with existing NIC numbers")
        if self.admission_duplicates:
            lines.append(f"{self.admission_duplicates} families with existing admission numbers")
        if self.batch_duplicates:
            lines.append(f"{self.batch_duplicates} families repeating another entry of the same file")
        return lines


@dataclass(frozen=True)
class ImportResult:
    status: ImportStatus
    imported: int = 0
    skipped: int = 0

    @property
    def message(self) -> str:
        if self.status == ImportStatus.NO_VALID_RECORDS:
            return "No valid family data found in the imported file."
        if self.status == ImportStatus.ALL_DUPLICATES:
            return "All data in the import file already exists in the system."
        if self.status == ImportStatus.NEEDS_CONFIRMATION:
            return "Import contains duplicate data. Confirm to skip duplicates and import the rest."
        return f"Successfully imported {self.imported} family records."


def _text(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return ""
    return str(value)


def _raw_student(raw: dict) -> Student:
    return student_from_dict({k: _text(raw.get(k)) for k in ("name", "admissionNumber", "class")})


def _student(raw: Any) -> Optional[Student]:
    if not isinstance(raw, dict):
        return None
    student = _raw_student(raw)
    if not (student.name and student.admission_number and student.class_name):
        return None
    return student


def _created_at(raw: Any) -> datetime:
    if isinstance(raw, str) and raw.strip():
        try:
            return parse_timestamp(raw)
        except ValueError:
            logger.warning("Unreadable createdAt %r in import, using current time", raw)
    return now_local()


def _family_data(raw: Any) -> Optional[FamilyData]:
    """Turn one imported element into family data, or None if it lacks required fields.

    The imported `id` must be present but is discarded; the store mints a fresh one.
    """
    if not isinstance(raw, dict):
        return None
    if not (_text(raw.get("id")) and _text(raw.get("guardianNic")) and _text(raw.get("guardianName"))):
        return None

    primary = _student(raw.get("primaryStudent"))
    if primary is None:
        return None

    raw_siblings = raw.get("siblings")
    if not isinstance(raw_siblings, list):
        raw_siblings = []
    siblings = [_raw_student(item) for item in raw_siblings if isinstance(item, dict)]

    return FamilyData(
        guardian_nic=_text(raw["guardianNic"]),
        guardian_name=_text(raw["guardianName"]),
        primary_student=primary,
        siblings=tuple(siblings),
        created_at=_created_at(raw.get("createdAt")),
    )


def _admission_numbers(students: Iterable[Student]) -> list[str]:
    # Imported siblings may carry no admission number; blanks never collide.
    return [s.admission_number for s in students if s.admission_number]


class TransferService:
    """Use case: export the registry for backup and import it back."""

    def __init__(self, families: FamilyRepository):
        self._families = families

    # -------- Export --------
    def export_csv(self, families: Optional[Sequence[FamilyRecord]] = None) -> str:
        families = self._families.list_all() if families is None else families

        out = io.StringIO()
        writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for f in families:
            writer.writerow(
                [
                    f.id,
                    f.guardian_nic,
                    f.guardian_name,
                    "; ".join(f"{s.name} ({s.admission_number} - {s.class_name})" for s in f.students),
                    len(f.students),
                    format_date(f.created_at),
                ]
            )
        return out.getvalue()

    def export_json(self, families: Optional[Sequence[FamilyRecord]] = None) -> str:
        families = self._families.list_all() if families is None else families
        return json.dumps([family_to_dict(f) for f in families], indent=2, ensure_ascii=False)

    @staticmethod
    def export_filename(fmt: ExportFormat, today: Optional[date] = None) -> str:
        today = today or now_local().date()
        return f"family-data-{format_date(today)}.{fmt.value}"

    # -------- Import --------
    def prepare_import(self, payload: str | bytes) -> ImportPlan:
        try:
            items = json.loads(payload)
        except (ValueError, UnicodeDecodeError) as e:
            raise ImportFormatError("Error parsing JSON file. Please ensure it contains valid JSON data.") from e
        if not isinstance(items, list):
            raise ImportFormatError("Invalid JSON format. Expected an array of family records.")

        valid = [d for d in (_family_data(item) for item in items) if d is not None]

        existing = self._families.list_all()
        existing_nics = {f.guardian_nic for f in existing}
        existing_admissions = {n for f in existing for n in _admission_numbers(f.students)}

        batch_nics: set[str] = set()
        batch_admissions: set[str] = set()
        clean: list[FamilyData] = []
        nic_dups = admission_dups = batch_dups = 0

        for data in valid:
            numbers = _admission_numbers([data.primary_student, *data.siblings])
            nic_dup = data.guardian_nic in existing_nics
            admission_dup = any(n in existing_admissions for n in numbers)
            nic_dups += nic_dup
            admission_dups += admission_dup
            if nic_dup or admission_dup:
                continue

            if data.guardian_nic in batch_nics or any(n in batch_admissions for n in numbers):
                batch_dups += 1
                continue

            batch_nics.add(data.guardian_nic)
            batch_admissions.update(numbers)
            clean.append(data)

        return ImportPlan(
            valid=valid,
            clean=clean,
            dropped=len(items) - len(valid),
            nic_duplicates=nic_dups,
            admission_duplicates=admission_dups,
            batch_duplicates=batch_dups,
        )

    def apply_import(self, plan: ImportPlan, *, confirmed: bool = False) -> ImportResult:
        if not plan.valid:
            return ImportResult(ImportStatus.NO_VALID_RECORDS, skipped=plan.dropped)
        if not plan.clean:
            logger.info("Import aborted: all %d records are duplicates", len(plan.valid))
            return ImportResult(ImportStatus.ALL_DUPLICATES, skipped=len(plan.valid))
        if plan.duplicate_count and not confirmed:
            return ImportResult(ImportStatus.NEEDS_CONFIRMATION, skipped=plan.duplicate_count)

        for data in plan.clean:
            self._families.add(data)

        logger.info("Imported %d families (%d duplicates skipped)", len(plan.clean), plan.duplicate_count)
        return ImportResult(ImportStatus.IMPORTED, imported=len(plan.clean), skipped=plan.duplicate_count)

    def import_payload(self, payload: str | bytes, *, confirmed: bool = False) -> ImportResult:
        return self.apply_import(self.prepare_import(payload), confirmed=confirmed)
