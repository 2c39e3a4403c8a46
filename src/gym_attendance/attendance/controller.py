from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..common.validators import optional_attendance_type, optional_iso_date, require_attendance_type
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/checkin/<user_id>", methods=["POST"], endpoint="attendance_checkin")
    def checkin(user_id: str):
        attendance_type = require_attendance_type(json_body().get("type"))
        record = container.attendance_service.check_in(user_id, attendance_type)
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/checkout/<user_id>", methods=["POST"], endpoint="attendance_checkout")
    def checkout(user_id: str):
        record = container.attendance_service.check_out(user_id)
        return jsonify(record.to_dict()), 200

    @app.route("/api/attendance/status/<user_id>", methods=["GET"], endpoint="attendance_status")
    def status(user_id: str):
        view = container.attendance_service.get_status(user_id)
        return jsonify(view.to_dict()), 200

    @app.route("/api/attendance/history/<user_id>", methods=["GET"], endpoint="attendance_history")
    def history(user_id: str):
        start = optional_iso_date(request.args.get("from"), "from")
        end = optional_iso_date(request.args.get("to"), "to")
        attendance_type = optional_attendance_type(request.args.get("type"))

        rows = container.attendance_service.history(user_id, start=start, end=end, attendance_type=attendance_type)
        return jsonify([r.to_dict() for r in rows]), 200

    @app.route("/api/attendance/active", methods=["GET"], endpoint="attendance_active")
    def active():
        rows = container.attendance_service.list_active()
        return jsonify([r.to_dict() for r in rows]), 200

    @app.route("/api/attendance/stats/<user_id>", methods=["GET"], endpoint="attendance_stats")
    def stats(user_id: str):
        data = container.stats_service.yearly_stats(user_id)
        return jsonify(data.to_dict()), 200
