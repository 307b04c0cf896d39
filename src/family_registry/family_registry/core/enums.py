from __future__ import annotations

from enum import Enum


class StorageBackend(str, Enum):
    """Where the family snapshot is kept."""

    MYSQL = "mysql"
    MEMORY = "memory"


class ImportStatus(str, Enum):
    """Outcome of applying an import plan."""

    IMPORTED = "IMPORTED"
    NEEDS_CONFIRMATION = "NEEDS_CONFIRMATION"
    ALL_DUPLICATES = "ALL_DUPLICATES"
    NO_VALID_RECORDS = "NO_VALID_RECORDS"


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
