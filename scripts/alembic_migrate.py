#!/usr/bin/env python3
"""Run Alembic migrations for the launch database.

Usage:
    python scripts/alembic_migrate.py upgrade [target]    # default: head
    python scripts/alembic_migrate.py downgrade [target]  # default: -1
    python scripts/alembic_migrate.py current
    python scripts/alembic_migrate.py history

A local SQLite database is copied to data/backups/ before any upgrade or
downgrade. Postgres databases are expected to be backed up by the host.
"""

import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).parent.parent
BACKUP_DIR = PROJECT_ROOT / "data" / "backups"
SQLITE_PREFIXES = ("sqlite+aiosqlite:///", "sqlite:///")


def sqlite_path() -> Optional[Path]:
    """Path of the configured SQLite database, None for other backends."""
    sys.path.insert(0, str(PROJECT_ROOT / "src"))
    from parity.config import get_settings

    url = get_settings().database_url
    for prefix in SQLITE_PREFIXES:
        if url.startswith(prefix):
            path = Path(url[len(prefix):])
            return path if path.is_absolute() else PROJECT_ROOT / path
    return None


def backup_database() -> Optional[Path]:
    """Copy the SQLite file aside. Returns the backup path if one was made."""
    db_path = sqlite_path()
    if db_path is None or not db_path.exists():
        return None

    BACKUP_DIR.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = BACKUP_DIR / f"{db_path.stem}_{stamp}.db"
    shutil.copy2(db_path, backup_path)
    return backup_path


def run_alembic(*args: str) -> int:
    cmd = ["alembic", *args]
    print(f"Running: {' '.join(cmd)}")
    return subprocess.run(cmd, cwd=PROJECT_ROOT).returncode


def main() -> int:
    if len(sys.argv) < 2:
        print(__doc__)
        return 1

    command, args = sys.argv[1], sys.argv[2:]

    if command in ("upgrade", "downgrade"):
        backup = backup_database()
        print(f"Backup created: {backup}" if backup else "No local database to back up")
        default = "head" if command == "upgrade" else "-1"
        return run_alembic(command, args[0] if args else default)

    if command == "history":
        return run_alembic("history", "--verbose")

    return run_alembic(command, *args)


if __name__ == "__main__":
    sys.exit(main())
