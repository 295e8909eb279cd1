"""Create the GeoAttend database and its session/attendance tables.

Usage: APP_ENV=production python scripts/init_db.py
Re-running is harmless; every statement in database/schema.sql is IF NOT EXISTS.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.geoattend.geoattend.database.bootstrap import apply_schema, list_tables

EXPECTED_TABLES = {"class_sessions", "attendance_records"}


def main() -> int:
    settings_module = get_settings_module()
    db_config = dict(importlib.import_module(settings_module).DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    tables = set(list_tables(db_config))
    missing = EXPECTED_TABLES - tables
    target = f"{db_config.get('database')} on {db_config.get('host')}:{db_config.get('port', 3306)}"
    if missing:
        print(f"[geoattend] schema incomplete in {target}: missing {', '.join(sorted(missing))}")
        return 1

    print(f"[geoattend] {settings_module}: {target} ready ({', '.join(sorted(EXPECTED_TABLES))})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
