from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import clean
from ..core.constants import CLASS_OPTIONS
from ..families.repository import FamilyRepository


@dataclass(frozen=True)
class OverviewStats:
    single_child_families: int
    multi_child_families: int
    total_families: int
    total_students: int
    total_siblings: int


@dataclass(frozen=True)
class ClassCount:
    class_name: str
    student_count: int


@dataclass(frozen=True)
class StudentRow:
    name: str
    admission_number: str
    class_name: str
    family_id: str
    guardian_name: str


@dataclass(frozen=True)
class ClassTotals:
    active_classes: int
    total_students: int
    average_per_class: int


class ReportService:
    """Read-only views over the registry: dashboard counters and per-class listings."""

    def __init__(self, families: FamilyRepository):
        self._families = families

    def overview(self) -> OverviewStats:
        families = self._families.list_all()
        single = sum(1 for f in families if not f.siblings)
        siblings = sum(len(f.siblings) for f in families)
        return OverviewStats(
            single_child_families=single,
            multi_child_families=len(families) - single,
            total_families=len(families),
            total_students=len(families) + siblings,
            total_siblings=siblings,
        )

    def all_students(self) -> list[StudentRow]:
        rows: list[StudentRow] = []
        for f in self._families.list_all():
            for s in f.students:
                rows.append(
                    StudentRow(
                        name=s.name,
                        admission_number=s.admission_number,
                        class_name=s.class_name,
                        family_id=f.id,
                        guardian_name=f.guardian_name,
                    )
                )
        return rows

    def class_summary(self, search: str = "") -> list[ClassCount]:
        counts = {cls: 0 for cls in CLASS_OPTIONS}
        for row in self.all_students():
            if row.class_name in counts:
                counts[row.class_name] += 1

        needle = clean(search).lower()
        return [ClassCount(cls, n) for cls, n in counts.items() if needle in cls.lower()]

    def students_in_class(self, class_name: str) -> list[StudentRow]:
        rows = [r for r in self.all_students() if r.class_name == class_name]
        rows.sort(key=lambda r: r.name.lower())
        return rows

    def class_totals(self) -> ClassTotals:
        summary = self.class_summary()
        active = sum(1 for c in summary if c.student_count > 0)
        total = len(self.all_students())
        # Halves round up.
        average = int(total / active + 0.5) if active else 0
        return ClassTotals(active_classes=active, total_students=total, average_per_class=average)
