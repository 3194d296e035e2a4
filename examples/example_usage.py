"""Example: use the service layer directly (no Flask).

Prints the payroll report over all recorded days in the configured database.
"""

import importlib

from timekeeper.container import build_container
from timekeeper.settings import get_settings_module


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    report = container.payroll_service.build_report()
    for entry in report.entries:
        print(f"{entry.user_name:<24} {entry.days_worked:>3} days  {entry.total_pay:>12.2f}")
    print(report.summary.advice.message)


if __name__ == "__main__":
    main()
