"""Example: use the service layer directly (no Flask).

Controllers stay thin; the report logic lives in services and the aggregator.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.work_hours.work_hours.container import build_container
from src.work_hours.work_hours.reports.export import report_to_dict


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    admin = container.auth_service.authenticate(settings.SEED_ADMIN_USERNAME, settings.SEED_ADMIN_PASSWORD)

    today = date.today()
    report = container.report_service.build(admin, start=today.replace(day=1), end=today)
    print(report_to_dict(report))


if __name__ == "__main__":
    main()
