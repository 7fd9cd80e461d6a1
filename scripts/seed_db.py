from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.work_hours.work_hours.database.bootstrap import ensure_seed_admin
from src.work_hours.work_hours.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))

    ensure_seed_admin(conn, username=settings.SEED_ADMIN_USERNAME, password=settings.SEED_ADMIN_PASSWORD)
    cfg = conn.config
    print(f"OK: Seed admin {settings.SEED_ADMIN_USERNAME!r} ready -> {cfg.user}@{cfg.host}:{cfg.port}/{cfg.database}")


if __name__ == "__main__":
    main()
