from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import FamilyData, FamilyRecord, Student


class FamilyRepository(Protocol):
    """Repository interface for family records.

    Note: the repository performs no validation; callers check uniqueness before `add`/`update`.
    """

    def add(self, data: FamilyData) -> FamilyRecord:
        raise NotImplementedError

    def update(
        self,
        family_id: str,
        *,
        guardian_nic: Optional[str] = None,
        guardian_name: Optional[str] = None,
        primary_student: Optional[Student] = None,
        siblings: Optional[Sequence[Student]] = None,
    ) -> None:
        raise NotImplementedError

    def delete(self, family_id: str) -> None:
        raise NotImplementedError

    def get(self, family_id: str) -> Optional[FamilyRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[FamilyRecord]:
        raise NotImplementedError

    def nic_exists(self, nic: str, exclude_id: Optional[str] = None) -> bool:
        raise NotImplementedError

    def admission_number_exists(self, admission_number: str, exclude_id: Optional[str] = None) -> bool:
        raise NotImplementedError
