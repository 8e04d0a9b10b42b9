from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.worklog_payroll.worklog_payroll.database.bootstrap import apply_schema, list_tables

REQUIRED_TABLES = ("users", "work_logs")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    missing = [t for t in REQUIRED_TABLES if t not in set(list_tables(db_config))]
    if missing:
        raise SystemExit(f"Schema applied to {target} but tables are missing: {', '.join(missing)}")

    print(f"OK: users and work_logs ready on {target}")


if __name__ == "__main__":
    main()
