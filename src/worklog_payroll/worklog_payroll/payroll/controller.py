from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import auth_guards, current_identity
from ..container import Container
from ..core.constants import MONTH_FORMAT
from ..worklogs.mapper import parse_user_id

_CSV_FIELDS = ["user_id", "user_name", "work_days", "total_hours", "hourly_rate", "total_payment"]


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = auth_guards(container.identity_resolver, cookie_name=container.cookie_name)

    def _month() -> str:
        return request.args.get("month") or today_local().strftime(MONTH_FORMAT)

    @app.route("/api/reports/salary", methods=["GET"], endpoint="salary_report")
    @admin_required
    def salary_report():
        data = container.payroll_report_service.monthly_report(actor=current_identity(), month=_month())
        return jsonify({"month": data.month, "rows": data.rows, "summary": data.summary})

    @app.route("/api/reports/salary.csv", methods=["GET"], endpoint="salary_report_csv")
    @admin_required
    def salary_report_csv():
        data = container.payroll_report_service.monthly_report(actor=current_identity(), month=_month())

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=_CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=salary_{data.month}.csv"},
        )

    @app.route("/api/reports/salary-slip", methods=["GET"], endpoint="salary_slip")
    @login_required
    def salary_slip():
        slip = container.payroll_report_service.salary_slip(
            actor=current_identity(),
            month=_month(),
            user_id=parse_user_id(request.args.get("user_id")),
        )
        return jsonify(
            {
                "month": slip.month,
                "employee": slip.employee,
                "work_logs": slip.work_logs,
                "summary": slip.summary,
            }
        )
