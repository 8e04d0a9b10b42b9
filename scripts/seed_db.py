from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.worklog_payroll.worklog_payroll.database.bootstrap import ensure_admin_user


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    email = getattr(settings, "ADMIN_EMAIL", None)
    password = getattr(settings, "ADMIN_PASSWORD", None)
    if not email or not password:
        raise SystemExit("Set ADMIN_EMAIL and ADMIN_PASSWORD to seed the administrator account")

    created = ensure_admin_user(
        db_config,
        email=email,
        password=password,
        name=getattr(settings, "ADMIN_NAME", "Administrator"),
    )

    print(
        ("OK: Created admin " if created else "OK: Admin already present ")
        + f"{email} -> {db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
