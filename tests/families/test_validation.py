from __future__ import annotations

from datetime import datetime

from src.family_registry.family_registry.families.model import FamilyData, Student
from src.family_registry.family_registry.families.snapshot_repository import SnapshotFamilyRepository
from src.family_registry.family_registry.families.validation import (
    GUARDIAN_NAME,
    GUARDIAN_NIC,
    PRIMARY_ADMISSION_NUMBER,
    PRIMARY_CLASS,
    PRIMARY_NAME,
    FamilyForm,
    RecordField,
    SiblingField,
    validate_family,
)
from src.family_registry.family_registry.storage.memory_storage import InMemoryKeyValueStorage


def _repo_with_one_family():
    repo = SnapshotFamilyRepository(InMemoryKeyValueStorage())
    repo.load()
    family = repo.add(
        FamilyData(
            guardian_nic="198812345678",
            guardian_name="Existing",
            primary_student=Student("Existing Kid", "10001", "5A"),
            siblings=(Student("Existing Sib", "10002", "2B"),),
            created_at=datetime(2025, 1, 1),
        )
    )
    return repo, family


def _form(**overrides):
    values = dict(
        guardian_nic="200012345678",
        guardian_name="Fathima",
        primary_student=Student("Ali", "20001", "6A"),
        siblings=[],
    )
    values.update(overrides)
    return FamilyForm(**values)


def test_valid_form_has_no_errors():
    repo, _ = _repo_with_one_family()
    assert validate_family(_form(siblings=[Student("Sara", "20002", "12 Bio")]), repo) == {}


def test_required_fields():
    repo, _ = _repo_with_one_family()
    errors = validate_family(
        _form(guardian_nic="  ", guardian_name="", primary_student=Student(" ", "", "")),
        repo,
    )
    assert errors == {
        GUARDIAN_NIC: "NIC number is required",
        GUARDIAN_NAME: "Guardian name is required",
        PRIMARY_NAME: "Student name is required",
        PRIMARY_ADMISSION_NUMBER: "Admission number is required",
        PRIMARY_CLASS: "Class is required",
    }


def test_short_nic_and_malformed_admission_number():
    repo, _ = _repo_with_one_family()
    errors = validate_family(_form(guardian_nic="12345", primary_student=Student("Ali", "1234a", "6A")), repo)
    assert errors[GUARDIAN_NIC] == "NIC number must be at least 10 characters"
    assert errors[PRIMARY_ADMISSION_NUMBER] == "Admission number must be exactly 5 digits"


def test_non_ascii_digits_are_rejected():
    repo, _ = _repo_with_one_family()
    errors = validate_family(_form(primary_student=Student("Ali", "١٢٣٤٥", "6A")), repo)
    assert errors[PRIMARY_ADMISSION_NUMBER] == "Admission number must be exactly 5 digits"


def test_duplicate_primary_admission_number_is_rejected():
    repo, _ = _repo_with_one_family()
    errors = validate_family(_form(primary_student=Student("Ali", "10001", "6A")), repo)
    assert errors == {PRIMARY_ADMISSION_NUMBER: "This admission number already exists"}


def test_duplicate_nic_is_rejected():
    repo, _ = _repo_with_one_family()
    errors = validate_family(_form(guardian_nic="198812345678"), repo)
    assert errors == {GUARDIAN_NIC: "This NIC number already exists in the system"}


def test_editing_excludes_own_record():
    repo, family = _repo_with_one_family()
    form = _form(
        guardian_nic="198812345678",
        primary_student=Student("Existing Kid", "10001", "5A"),
        siblings=[Student("Existing Sib", "10002", "2B")],
    )
    assert validate_family(form, repo, exclude_id=family.id) == {}


def test_sibling_errors_are_keyed_by_index():
    repo, _ = _repo_with_one_family()
    errors = validate_family(
        _form(siblings=[Student("Ok", "20002", "1A"), Student("", "10002", "99Z")]),
        repo,
    )
    assert errors == {
        SiblingField(1, "name"): "Sibling name is required",
        SiblingField(1, "admission_number"): "This admission number already exists",
        SiblingField(1, "class_name"): "Please select a valid class",
    }


def test_admission_number_repeated_within_form():
    repo, _ = _repo_with_one_family()
    errors = validate_family(_form(siblings=[Student("Twin", "20001", "6A")]), repo)
    assert errors == {SiblingField(0, "admission_number"): "This admission number is used twice in this form"}


def test_locators_do_not_collide():
    assert RecordField("name") != SiblingField(0, "name")
    assert str(SiblingField(0, "name")) == "siblings-0-name"
    assert str(PRIMARY_NAME) == "primary_student-name"


def test_to_family_data_trims_values():
    data = _form(guardian_nic=" 200012345678 ", primary_student=Student(" Ali ", " 20001 ", "6A")).to_family_data()
    assert data.guardian_nic == "200012345678"
    assert data.primary_student == Student("Ali", "20001", "6A")
