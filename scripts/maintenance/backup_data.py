# scripts/maintenance/backup_data.py
"""
Write the stored parking document to a timestamped JSON file and prune old backups.
Usage:
  python scripts/maintenance/backup_data.py
  python scripts/maintenance/backup_data.py --dir /mnt/backups --keep 30
  python scripts/maintenance/backup_data.py --restore backups/app-data-2024-01-15T10-00-00.json
"""

import sys
import os
import argparse
import asyncio
import json
from datetime import datetime
from pathlib import Path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from parking_manager.config import settings
from parking_manager.database import SessionLocal, create_tables
from parking_manager.services.storage_service import StorageService, parse_document
from parking_manager.utils.errors import InvalidDocumentError

BACKUP_PREFIX = "app-data-"


def backup(storage: StorageService, backup_dir: Path) -> Path:
    document = asyncio.run(storage.load())
    data = document.to_json_dict()
    data["backupInfo"] = {
        "createdAt": datetime.utcnow().isoformat(),
        "type": "application-data",
        "storageKey": storage.key,
    }

    backup_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    path = backup_dir / f"{BACKUP_PREFIX}{stamp}.json"
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Backed up {len(document.employees)} employees, {len(document.parking_spaces)} spaces, "
          f"{len(document.assignments)} assignments → {path}")
    return path


def prune(backup_dir: Path, keep: int) -> list[Path]:
    backups = sorted(backup_dir.glob(f"{BACKUP_PREFIX}*.json"), reverse=True)
    removed = backups[keep:]
    for path in removed:
        path.unlink()
        print(f"Removed old backup {path.name}")
    return removed


def restore(storage: StorageService, path: Path):
    data = json.loads(path.read_text(encoding="utf-8"))
    data.pop("backupInfo", None)
    data.pop("exportedAt", None)
    document = parse_document(data)
    asyncio.run(storage.save(document))
    print(f"Restored {path.name} into storage key '{storage.key}'")


def main():
    parser = argparse.ArgumentParser(description="Back up or restore the parking data document")
    parser.add_argument("--dir", default=settings.BACKUP_DIR, help="Backup directory")
    parser.add_argument("--keep", type=int, default=settings.BACKUP_KEEP,
                        help="Number of backups to keep")
    parser.add_argument("--restore", help="Backup file to load back into storage")
    args = parser.parse_args()

    create_tables()
    storage = StorageService(SessionLocal)

    if args.restore:
        try:
            restore(storage, Path(args.restore))
        except (OSError, json.JSONDecodeError, InvalidDocumentError) as e:
            print(f"Restore failed: {e}")
            sys.exit(1)
        return

    backup_dir = Path(args.dir)
    backup(storage, backup_dir)
    prune(backup_dir, args.keep)


if __name__ == "__main__":
    main()
