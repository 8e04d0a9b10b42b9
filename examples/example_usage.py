"""Example: drive the service layer directly (no Flask).

Records a shift for the first administrator and prints this month's slip.
"""

import importlib
from datetime import time

from config import get_settings_module

from src.worklog_payroll.worklog_payroll.auth.identity import Identity
from src.worklog_payroll.worklog_payroll.common.datetime_utils import today_local
from src.worklog_payroll.worklog_payroll.container import build_container
from src.worklog_payroll.worklog_payroll.worklogs.model import ShiftInput


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)
    try:
        admin = next(u for u in container.users_repo.list_all() if u.is_admin)
        actor = Identity(user_id=admin.user_id, role=admin.role)

        log = container.work_log_service.record_shift(
            actor=actor,
            shift=ShiftInput(
                user_id=admin.user_id,
                work_date=today_local(),
                start_time=time(9, 0),
                end_time=time(12, 30),
                hourly_rate=10000,
                memo="example",
            ),
        )
        print(log)

        slip = container.payroll_report_service.salary_slip(actor=actor, month=today_local().strftime("%Y-%m"))
        print(slip.summary)
    finally:
        container.close()


if __name__ == "__main__":
    main()
