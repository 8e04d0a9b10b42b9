from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import month_bounds, today_local
from ..common.http import auth_guards, current_identity, json_body
from ..container import Container
from ..core.constants import MONTH_FORMAT
from .mapper import (
    parse_date,
    parse_user_id,
    shift_changes_from_payload,
    shift_input_from_payload,
    work_log_to_dict,
)


def register(app: Flask, container: Container) -> None:
    login_required, _ = auth_guards(container.identity_resolver, cookie_name=container.cookie_name)

    @app.route("/api/work-logs", methods=["GET"], endpoint="list_work_logs")
    @login_required
    def list_work_logs():
        # Defaults to the current month
        first, last = month_bounds(today_local().strftime(MONTH_FORMAT))
        start = parse_date(request.args.get("start_date"), "start_date") or first
        end = parse_date(request.args.get("end_date"), "end_date") or last

        logs = container.work_log_service.list_shifts(
            actor=current_identity(),
            start_date=start,
            end_date=end,
            user_id=parse_user_id(request.args.get("user_id")),
        )
        return jsonify({"work_logs": [work_log_to_dict(log) for log in logs]})

    @app.route("/api/work-logs", methods=["POST"], endpoint="create_work_log")
    @login_required
    def create_work_log():
        identity = current_identity()
        shift = shift_input_from_payload(json_body(), default_user_id=identity.user_id)
        log = container.work_log_service.record_shift(actor=identity, shift=shift)
        return jsonify({"work_log": work_log_to_dict(log)}), 201

    @app.route("/api/work-logs/<int:work_log_id>", methods=["GET"], endpoint="get_work_log")
    @login_required
    def get_work_log(work_log_id: int):
        log = container.work_log_service.get_shift(actor=current_identity(), work_log_id=work_log_id)
        return jsonify({"work_log": work_log_to_dict(log)})

    @app.route("/api/work-logs/<int:work_log_id>", methods=["PUT"], endpoint="update_work_log")
    @login_required
    def update_work_log(work_log_id: int):
        changes = shift_changes_from_payload(json_body())
        log = container.work_log_service.update_shift(
            actor=current_identity(), work_log_id=work_log_id, changes=changes
        )
        return jsonify({"work_log": work_log_to_dict(log)})

    @app.route("/api/work-logs/<int:work_log_id>", methods=["DELETE"], endpoint="delete_work_log")
    @login_required
    def delete_work_log(work_log_id: int):
        container.work_log_service.delete_shift(actor=current_identity(), work_log_id=work_log_id)
        return jsonify({"message": "Work log deleted"})

    @app.route("/api/work-logs/<int:work_log_id>/copy", methods=["POST"], endpoint="copy_work_log")
    @login_required
    def copy_work_log(work_log_id: int):
        target = parse_date(json_body().get("work_date"))
        log = container.work_log_service.copy_shift(
            actor=current_identity(), work_log_id=work_log_id, target_date=target
        )
        return jsonify({"work_log": work_log_to_dict(log)}), 201
