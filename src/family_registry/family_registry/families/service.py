from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import clean
from ..core.exceptions import FormValidationError, ValidationError
from .model import FamilyRecord
from .repository import FamilyRepository
from .validation import FamilyForm, validate_family

logger = logging.getLogger(__name__)


class FamilyService:
    """Use case: register, edit and browse families."""

    def __init__(self, families: FamilyRepository):
        self._families = families

    def register(self, form: FamilyForm) -> FamilyRecord:
        errors = validate_family(form, self._families)
        if errors:
            logger.debug("Rejected new family: %s", ", ".join(str(k) for k in errors))
            raise FormValidationError(errors)
        return self._families.add(form.to_family_data())

    def update_family(self, family_id: str, form: FamilyForm) -> FamilyRecord:
        if not self._families.get(family_id):
            raise ValidationError("Family record not found")

        errors = validate_family(form, self._families, exclude_id=family_id)
        if errors:
            raise FormValidationError(errors)

        data = form.to_family_data()
        self._families.update(
            family_id,
            guardian_nic=data.guardian_nic,
            guardian_name=data.guardian_name,
            primary_student=data.primary_student,
            siblings=data.siblings,
        )
        return self.get_family(family_id)

    def delete_family(self, family_id: str) -> None:
        if not self._families.get(family_id):
            raise ValidationError("Family record not found")
        self._families.delete(family_id)

    def get_family(self, family_id: str) -> FamilyRecord:
        family = self._families.get(family_id)
        if not family:
            raise ValidationError("Family record not found")
        return family

    def list_families(self) -> Sequence[FamilyRecord]:
        return self._families.list_all()

    def search(self, term: str) -> list[FamilyRecord]:
        """Match guardian name, NIC, family id, or any student name (case-insensitive)."""
        needle = clean(term).lower()
        families = self._families.list_all()
        if not needle:
            return list(families)

        def matches(f: FamilyRecord) -> bool:
            haystack = [f.guardian_name, f.guardian_nic, f.id, *(s.name for s in f.students)]
            return any(needle in value.lower() for value in haystack)

        return [f for f in families if matches(f)]
