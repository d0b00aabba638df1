from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import staff_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    # Every roster route is staff-only.
    require_staff = staff_required(container.auth_guard)
    service = container.roster_service

    @app.get("/api/rosters", endpoint="rosters_list")
    @require_staff
    def get_rosters():
        return jsonify([r.to_json() for r in service.list_all()]), 200

    @app.get("/api/rosters/<roster_id>", endpoint="rosters_get")
    @require_staff
    def get_roster(roster_id: str):
        return jsonify(service.get(roster_id).to_json()), 200

    @app.post("/api/rosters", endpoint="rosters_create")
    @require_staff
    def create_roster():
        roster = service.create(request.get_json(silent=True) or {})
        return jsonify(roster.to_json()), 201

    @app.patch("/api/rosters/<roster_id>", endpoint="rosters_update")
    @require_staff
    def update_roster(roster_id: str):
        roster = service.update(roster_id, request.get_json(silent=True) or {})
        return jsonify(roster.to_json()), 200

    @app.delete("/api/rosters/<roster_id>", endpoint="rosters_delete")
    @require_staff
    def delete_roster(roster_id: str):
        service.delete(roster_id)
        return "", 204
