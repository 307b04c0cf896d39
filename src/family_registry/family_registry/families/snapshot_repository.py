from __future__ import annotations

import dataclasses
import json
import logging
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import (
    DEFAULT_FAMILY_ID_PREFIX,
    FAMILIES_KEY,
    FAMILY_ID_DIGITS,
    NEXT_FAMILY_ID_KEY,
)
from ..storage.repository import KeyValueStorage
from .codec import family_from_dict, family_to_dict
from .model import FamilyData, FamilyRecord, Student
from .repository import FamilyRepository

logger = logging.getLogger(__name__)


def _sequence_of(family_id: str) -> int:
    tail = family_id.rsplit("/", 1)[-1]
    return int(tail) if tail.isdigit() else 0


class SnapshotFamilyRepository(FamilyRepository):
    """In-memory family collection persisted as a whole snapshot.

    The full list and the next-id counter are loaded once with `load()` and
    rewritten to the storage after every mutation.
    """

    def __init__(self, storage: KeyValueStorage, *, id_prefix: str = DEFAULT_FAMILY_ID_PREFIX):
        self._storage = storage
        self._id_prefix = id_prefix
        self._families: list[FamilyRecord] = []
        self._next_sequence = 1

    @property
    def next_sequence(self) -> int:
        return self._next_sequence

    # -------- Snapshot lifecycle --------
    def load(self) -> None:
        raw_families = self._storage.get(FAMILIES_KEY)
        raw_next = self._storage.get(NEXT_FAMILY_ID_KEY)

        families = [family_from_dict(item) for item in json.loads(raw_families)] if raw_families else []
        highest = max((_sequence_of(f.id) for f in families), default=0)

        next_sequence = int(raw_next) if raw_next and raw_next.strip().isdigit() else 1
        if next_sequence <= highest:
            logger.warning(
                "Stored family id counter %s is behind existing records; resuming at %s",
                next_sequence,
                highest + 1,
            )
            next_sequence = highest + 1

        self._families = families
        self._next_sequence = next_sequence
        logger.info("Loaded %d families (next id sequence %d)", len(families), next_sequence)

    def save(self) -> None:
        self._commit(self._families, self._next_sequence)

    def _commit(self, families: list[FamilyRecord], next_sequence: int) -> None:
        """Persist both snapshot keys together, then adopt the new state.

        If the storage write fails the in-memory state is left untouched.
        """
        self._storage.set_many(
            {
                FAMILIES_KEY: json.dumps([family_to_dict(f) for f in families]),
                NEXT_FAMILY_ID_KEY: str(next_sequence),
            }
        )
        self._families = families
        self._next_sequence = next_sequence

    def _format_id(self, sequence: int) -> str:
        return f"{self._id_prefix}{sequence:0{FAMILY_ID_DIGITS}d}"

    # -------- Mutations --------
    def add(self, data: FamilyData) -> FamilyRecord:
        family = FamilyRecord(
            id=self._format_id(self._next_sequence),
            guardian_nic=data.guardian_nic,
            guardian_name=data.guardian_name,
            primary_student=data.primary_student,
            siblings=tuple(data.siblings),
            created_at=data.created_at or now_local(),
        )
        self._commit([*self._families, family], self._next_sequence + 1)
        logger.info("Added family %s", family.id)
        return family

    def update(
        self,
        family_id: str,
        *,
        guardian_nic: Optional[str] = None,
        guardian_name: Optional[str] = None,
        primary_student: Optional[Student] = None,
        siblings: Optional[Sequence[Student]] = None,
    ) -> None:
        changes: dict[str, object] = {}
        if guardian_nic is not None:
            changes["guardian_nic"] = guardian_nic
        if guardian_name is not None:
            changes["guardian_name"] = guardian_name
        if primary_student is not None:
            changes["primary_student"] = primary_student
        if siblings is not None:
            changes["siblings"] = tuple(siblings)

        for i, family in enumerate(self._families):
            if family.id == family_id:
                families = list(self._families)
                families[i] = dataclasses.replace(family, **changes)
                self._commit(families, self._next_sequence)
                logger.info("Updated family %s (%s)", family_id, ", ".join(sorted(changes)) or "no fields")
                return

    def delete(self, family_id: str) -> None:
        remaining = [f for f in self._families if f.id != family_id]
        if len(remaining) == len(self._families):
            return
        self._commit(remaining, self._next_sequence)
        logger.info("Deleted family %s", family_id)

    # -------- Queries --------
    def get(self, family_id: str) -> Optional[FamilyRecord]:
        for family in self._families:
            if family.id == family_id:
                return family
        return None

    def list_all(self) -> Sequence[FamilyRecord]:
        return list(self._families)

    def nic_exists(self, nic: str, exclude_id: Optional[str] = None) -> bool:
        return any(f.guardian_nic == nic and f.id != exclude_id for f in self._families)

    def admission_number_exists(self, admission_number: str, exclude_id: Optional[str] = None) -> bool:
        if not admission_number:
            return False
        return any(
            admission_number in f.admission_numbers and f.id != exclude_id
            for f in self._families
        )
