from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from minisuper.core.constants import DEFAULT_ADMIN_EMAIL
from minisuper.database.bootstrap import ensure_admin_account, ensure_demo_employees


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    admin_email = getattr(settings, "ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL)

    ensure_admin_account(db_config, email=admin_email)
    ensure_demo_employees(db_config)

    print(
        "OK: Seeded admin + demo employees -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
