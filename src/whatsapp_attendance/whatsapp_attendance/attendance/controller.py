from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceEvent


def _event_to_dict(e: AttendanceEvent) -> dict:
    return {
        "event_id": e.event_id,
        "employee_id": e.employee_id,
        "kind": e.kind.value,
        "timestamp": e.timestamp.isoformat(),
        "message_id": e.message_id,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_status_all")
    def attendance_status_all():
        rows = container.attendance_service.list_employees_with_status()
        return jsonify([row.to_dict() for row in rows])

    @app.route("/api/attendance/status/<int:employee_id>", methods=["GET"], endpoint="attendance_status_one")
    def attendance_status_one(employee_id: int):
        return jsonify(container.attendance_service.get_employee_status(employee_id).to_dict())

    @app.route("/api/attendance/records", methods=["GET"], endpoint="attendance_records")
    def attendance_records():
        employee_id_s = request.args.get("employee_id")
        date_s = request.args.get("date")

        if employee_id_s and not employee_id_s.isdigit():
            raise ValidationError("employee_id inválido")
        try:
            day = parse_iso_date(date_s) if date_s else None
        except ValueError:
            raise ValidationError("Data inválida, use YYYY-MM-DD") from None

        events = container.attendance_service.list_records(
            employee_id=int(employee_id_s) if employee_id_s else None,
            day=day,
        )
        return jsonify([_event_to_dict(e) for e in events])

    @app.route("/api/stats", methods=["GET"], endpoint="stats")
    def stats():
        s = container.attendance_service.get_stats()
        return jsonify(
            {
                "active_employees": s.active_employees,
                "present_today": s.present_today,
                "on_break": s.on_break,
                "messages_processed": s.messages_processed,
            }
        )
