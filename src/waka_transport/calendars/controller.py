from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import staff_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    require_staff = staff_required(container.auth_guard)
    service = container.calendar_service

    @app.post("/api/calendars/month", endpoint="calendars_month")
    @require_staff
    def get_month_calendars():
        body = request.get_json(silent=True) or {}
        return jsonify(service.month_counts(body.get("dateArr"))), 200

    @app.get("/api/calendars", endpoint="calendars_list")
    @require_staff
    def get_calendars():
        return jsonify([c.to_json() for c in service.list_all()]), 200

    @app.get("/api/calendars/<calendar_id>", endpoint="calendars_get")
    @require_staff
    def get_calendar(calendar_id: str):
        return jsonify(service.get(calendar_id).to_json()), 200

    @app.post("/api/calendars", endpoint="calendars_create")
    @require_staff
    def create_calendar():
        entry = service.create(request.get_json(silent=True) or {})
        return jsonify(entry.to_json()), 201

    @app.patch("/api/calendars/<calendar_id>", endpoint="calendars_update")
    @require_staff
    def update_calendar(calendar_id: str):
        entry = service.update(calendar_id, request.get_json(silent=True) or {})
        return jsonify(entry.to_json()), 200

    @app.delete("/api/calendars/<calendar_id>", endpoint="calendars_delete")
    @require_staff
    def delete_calendar(calendar_id: str):
        service.delete(calendar_id)
        return "", 204
