from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .model import Employee


def employee_to_dict(e: Employee) -> dict:
    return {
        "employee_id": e.employee_id,
        "name": e.name,
        "phone": e.phone,
        "department": e.department,
        "is_active": e.is_active,
        "created_at": e.created_at.isoformat() if e.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        return jsonify([employee_to_dict(e) for e in container.employee_service.list_all()])

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    def employees_create():
        data = request.get_json(silent=True) or {}
        employee = container.employee_service.create(
            name=str(data.get("name", "")),
            phone=str(data.get("phone", "")),
            department=str(data.get("department", "")),
            is_active=bool(data.get("is_active", True)),
        )
        return jsonify(employee_to_dict(employee)), 201

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    def employees_get(employee_id: int):
        return jsonify(employee_to_dict(container.employee_service.get(employee_id)))

    @app.route("/api/employees/<int:employee_id>", methods=["PATCH"], endpoint="employees_update")
    def employees_update(employee_id: int):
        data = request.get_json(silent=True) or {}
        employee = container.employee_service.update(
            employee_id,
            name=data.get("name"),
            phone=data.get("phone"),
            department=data.get("department"),
            is_active=bool(data["is_active"]) if "is_active" in data else None,
        )
        return jsonify(employee_to_dict(employee))
