from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from src.family_registry.family_registry.families.model import FamilyRecord, Student
from src.family_registry.family_registry.reports.service import ReportService


@dataclass
class InMemoryFamilies:
    families: list[FamilyRecord] = field(default_factory=list)

    def list_all(self):
        return list(self.families)


def _family(fid, guardian, primary, siblings=()):
    return FamilyRecord(
        id=fid,
        guardian_nic=f"NIC-{fid}",
        guardian_name=guardian,
        primary_student=primary,
        siblings=tuple(siblings),
        created_at=datetime(2025, 1, 1),
    )


def _service():
    return ReportService(
        InMemoryFamilies(
            [
                _family("F1", "Rahman", Student("zara", "10001", "6A"), [Student("Adam", "10002", "6A")]),
                _family("F2", "Perera", Student("Kasun", "10003", "10B")),
                _family(
                    "F3",
                    "Silva",
                    Student("Nimal", "10004", "6A"),
                    [Student("Amal", "10005", "12 Bio"), Student("Sunil", "10006", "12 Bio")],
                ),
            ]
        )
    )


def test_overview_counts():
    stats = _service().overview()
    assert stats.total_families == 3
    assert stats.single_child_families == 1
    assert stats.multi_child_families == 2
    assert stats.total_siblings == 3
    assert stats.total_students == 6


def test_overview_of_empty_registry():
    stats = ReportService(InMemoryFamilies()).overview()
    assert (stats.total_families, stats.total_students, stats.single_child_families) == (0, 0, 0)


def test_class_summary_counts_and_search():
    summary = {c.class_name: c.student_count for c in _service().class_summary()}
    assert summary["6A"] == 3
    assert summary["12 Bio"] == 2
    assert summary["1A"] == 0

    searched = [c.class_name for c in _service().class_summary("bio")]
    assert searched == ["12 Bio", "13 Bio"]


def test_students_in_class_sorted_by_name_with_family():
    rows = _service().students_in_class("6A")
    assert [r.name for r in rows] == ["Adam", "Nimal", "zara"]
    assert rows[0].family_id == "F1"
    assert rows[0].guardian_name == "Rahman"


def test_class_totals_average_rounds_half_up():
    totals = _service().class_totals()
    assert totals.active_classes == 3
    assert totals.total_students == 6
    assert totals.average_per_class == 2

    one_more = ReportService(
        InMemoryFamilies([_family("F1", "A", Student("x", "10001", "1A"), [Student("y", "10002", "1B"), Student("z", "10003", "1B")])])
    )
    # 3 students over 2 classes -> 1.5 -> 2
    assert one_more.class_totals().average_per_class == 2
