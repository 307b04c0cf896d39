from __future__ import annotations

import json
from datetime import datetime

import pytest

from src.family_registry.family_registry.core.constants import FAMILIES_KEY, NEXT_FAMILY_ID_KEY
from src.family_registry.family_registry.families import snapshot_repository
from src.family_registry.family_registry.families.model import FamilyData, Student
from src.family_registry.family_registry.families.snapshot_repository import SnapshotFamilyRepository
from src.family_registry.family_registry.storage.memory_storage import InMemoryKeyValueStorage


def _family(nic="123456789V", primary="10001", siblings=()):
    return FamilyData(
        guardian_nic=nic,
        guardian_name="Guardian",
        primary_student=Student("Kid", primary, "6A"),
        siblings=tuple(Student(f"Sib {n}", n, "3B") for n in siblings),
        created_at=datetime(2025, 1, 10, 9, 0),
    )


def _repo(storage=None):
    repo = SnapshotFamilyRepository(storage or InMemoryKeyValueStorage())
    repo.load()
    return repo


def test_ids_are_sequential_and_zero_padded():
    repo = _repo()
    ids = [repo.add(_family(nic=f"NIC000000{i}", primary=f"1000{i}")).id for i in range(1, 4)]
    assert ids == ["BCC/24344/00001", "BCC/24344/00002", "BCC/24344/00003"]


def test_ids_are_not_reused_after_delete():
    repo = _repo()
    first = repo.add(_family())
    repo.delete(first.id)
    second = repo.add(_family())
    assert second.id == "BCC/24344/00002"
    assert repo.next_sequence == 3


def test_add_stamps_created_at_when_missing(monkeypatch):
    monkeypatch.setattr(snapshot_repository, "now_local", lambda: datetime(2026, 3, 1, 12, 0))
    repo = _repo()
    data = FamilyData(guardian_nic="123456789V", guardian_name="G", primary_student=Student("K", "10001", "1A"))
    assert repo.add(data).created_at == datetime(2026, 3, 1, 12, 0)


def test_nic_exists_follows_add_and_delete():
    repo = _repo()
    family = repo.add(_family(nic="987654321V"))
    assert repo.nic_exists("987654321V")
    assert not repo.nic_exists("987654321V", exclude_id=family.id)

    repo.delete(family.id)
    assert not repo.nic_exists("987654321V")


def test_admission_number_exists_checks_primary_and_siblings():
    repo = _repo()
    family = repo.add(_family(primary="10001", siblings=("10002", "10003")))
    repo.add(_family(nic="OTHER00000", primary="20001"))

    assert repo.admission_number_exists("10001")
    assert repo.admission_number_exists("10003")
    assert repo.admission_number_exists("20001")
    assert not repo.admission_number_exists("10003", exclude_id=family.id)
    assert not repo.admission_number_exists("99999")


def test_update_merges_only_supplied_fields():
    repo = _repo()
    family = repo.add(_family(siblings=("10002",)))

    repo.update(family.id, guardian_name="New Name")
    updated = repo.get(family.id)
    assert updated.guardian_name == "New Name"
    assert updated.guardian_nic == family.guardian_nic
    assert updated.primary_student == family.primary_student
    assert updated.siblings == family.siblings
    assert updated.created_at == family.created_at


def test_update_replaces_siblings_wholesale():
    repo = _repo()
    family = repo.add(_family(siblings=("10002", "10003")))

    repo.update(family.id, siblings=[Student("Only", "10009", "2A")])
    assert repo.get(family.id).siblings == (Student("Only", "10009", "2A"),)

    repo.update(family.id, siblings=[])
    assert repo.get(family.id).siblings == ()


def test_update_and_delete_unknown_id_are_noops():
    storage = InMemoryKeyValueStorage()
    repo = _repo(storage)
    repo.add(_family())
    before = storage.get(FAMILIES_KEY)

    repo.update("BCC/24344/09999", guardian_name="x")
    repo.delete("BCC/24344/09999")

    assert storage.get(FAMILIES_KEY) == before
    assert len(repo.list_all()) == 1


def test_snapshot_is_saved_and_reloaded():
    storage = InMemoryKeyValueStorage()
    repo = _repo(storage)
    family = repo.add(_family(siblings=("10002",)))

    assert storage.get(NEXT_FAMILY_ID_KEY) == "2"
    saved = json.loads(storage.get(FAMILIES_KEY))
    assert saved[0]["id"] == "BCC/24344/00001"
    assert saved[0]["primaryStudent"] == {"name": "Kid", "admissionNumber": "10001", "class": "6A"}

    reloaded = _repo(storage)
    assert reloaded.list_all() == [family]
    assert reloaded.add(_family(nic="OTHER00000", primary="20001")).id == "BCC/24344/00002"


def test_missing_counter_resumes_after_highest_id():
    storage = InMemoryKeyValueStorage()
    repo = _repo(storage)
    repo.add(_family())
    repo.add(_family(nic="OTHER00000", primary="20001"))
    storage.remove(NEXT_FAMILY_ID_KEY)

    assert _repo(storage).next_sequence == 3


def test_custom_prefix():
    repo = SnapshotFamilyRepository(InMemoryKeyValueStorage(), id_prefix="XYZ/1/")
    repo.load()
    assert repo.add(_family()).id == "XYZ/1/00001"


class FailingStorage(InMemoryKeyValueStorage):
    """Storage whose writes can be switched off to simulate a full or unavailable backend."""

    def __init__(self):
        super().__init__()
        self.broken = False

    def set_many(self, items):
        if self.broken:
            raise OSError("storage quota exceeded")
        super().set_many(items)


def test_failed_save_leaves_add_unapplied():
    storage = FailingStorage()
    repo = _repo(storage)
    storage.broken = True

    with pytest.raises(OSError):
        repo.add(_family(nic="200012345678", primary="10001"))

    assert repo.list_all() == []
    assert not repo.nic_exists("200012345678")
    assert not repo.admission_number_exists("10001")
    assert repo.next_sequence == 1
    assert storage.get(FAMILIES_KEY) is None

    storage.broken = False
    assert repo.add(_family(nic="200012345678", primary="10001")).id == "BCC/24344/00001"


def test_failed_save_leaves_update_and_delete_unapplied():
    storage = FailingStorage()
    repo = _repo(storage)
    family = repo.add(_family(primary="10001"))
    storage.broken = True

    with pytest.raises(OSError):
        repo.update(family.id, guardian_name="Changed")
    with pytest.raises(OSError):
        repo.delete(family.id)

    assert repo.get(family.id) == family
    assert repo.next_sequence == 2
    assert json.loads(storage.get(FAMILIES_KEY))[0]["guardianName"] == "Guardian"
