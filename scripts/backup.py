"""Backup the family registry.

Note: Writes the same JSON as the "Export JSON" button, so the file can be
restored through the import screen.
"""

from __future__ import annotations

import importlib
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.family_registry.family_registry.container import build_container, build_storage
from src.family_registry.family_registry.core.enums import StorageBackend


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    backend = StorageBackend(getattr(settings, "STORAGE_BACKEND", "mysql"))
    if backend == StorageBackend.MEMORY:
        raise SystemExit("Nothing to back up: STORAGE_BACKEND=memory keeps no data between runs.")

    storage = build_storage(backend=backend, db_config=dict(settings.DB_CONFIG))
    container = build_container(
        storage=storage,
        admin_username=settings.ADMIN_USERNAME,
        admin_password_hash=settings.ADMIN_PASSWORD_HASH,
        id_prefix=settings.FAMILY_ID_PREFIX,
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"family-data-{ts}.json"
    out_file.write_text(container.transfer_service.export_json(), encoding="utf-8")

    count = len(container.families_repo.list_all())
    print(f"OK: Backup created: {out_file} ({count} families)")


if __name__ == "__main__":
    main()
