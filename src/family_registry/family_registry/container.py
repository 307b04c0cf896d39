from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_FAMILY_ID_PREFIX
from .core.enums import StorageBackend
from .database.connection import DBConfig, DatabaseConnection
from .families.service import FamilyService
from .families.snapshot_repository import SnapshotFamilyRepository
from .reports.service import ReportService
from .storage.memory_storage import InMemoryKeyValueStorage
from .storage.mysql_kv_storage import MySQLKeyValueStorage
from .storage.repository import KeyValueStorage
from .transfer.service import TransferService
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    storage: KeyValueStorage
    families_repo: SnapshotFamilyRepository

    auth_service: AuthService
    family_service: FamilyService
    transfer_service: TransferService
    report_service: ReportService


def build_storage(*, backend: StorageBackend, db_config: Optional[dict] = None) -> KeyValueStorage:
    if backend == StorageBackend.MEMORY:
        return InMemoryKeyValueStorage()
    if not db_config:
        raise ValueError("DB_CONFIG is required for the mysql storage backend")
    return MySQLKeyValueStorage(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))


def build_container(
    *,
    storage: KeyValueStorage,
    admin_username: str,
    admin_password_hash: str,
    id_prefix: str = DEFAULT_FAMILY_ID_PREFIX,
) -> Container:
    families_repo = SnapshotFamilyRepository(storage, id_prefix=id_prefix)
    families_repo.load()

    auth_service = AuthService(username=admin_username, password_hash=admin_password_hash)
    family_service = FamilyService(families_repo)
    transfer_service = TransferService(families_repo)
    report_service = ReportService(families_repo)

    return Container(
        storage=storage,
        families_repo=families_repo,
        auth_service=auth_service,
        family_service=family_service,
        transfer_service=transfer_service,
        report_service=report_service,
    )
