from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import staff_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    require_staff = staff_required(container.auth_guard)
    service = container.register_service

    @app.post("/api/registers", endpoint="registers_create")
    def create_register():
        form = service.submit(request.get_json(silent=True) or {})
        return jsonify(form.to_json()), 201

    @app.get("/api/registers", endpoint="registers_list")
    @require_staff
    def get_registers():
        return jsonify([f.to_json() for f in service.list_all()]), 200

    @app.get("/api/registers/<register_id>", endpoint="registers_get")
    @require_staff
    def get_register(register_id: str):
        return jsonify(service.get(register_id).to_json()), 200

    @app.delete("/api/registers/<register_id>", endpoint="registers_delete")
    @require_staff
    def delete_register_without_email(register_id: str):
        service.delete(register_id)
        return "", 204

    @app.delete("/api/registers/<register_id>/email", endpoint="registers_deny")
    @require_staff
    def delete_register_with_email(register_id: str):
        service.delete(register_id, notify=True)
        return "", 204
