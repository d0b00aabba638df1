from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.decorators import staff_required
from ..container import Container
from ..sessions.interface import destroy_current, establish


def register(app: Flask, container: Container) -> None:
    require_staff = staff_required(container.auth_guard)

    @app.get("/api/staffs", endpoint="staffs_me")
    @require_staff
    def get_authenticated_staff():
        staff = container.staff_service.get(g.staff.staff_id)
        return jsonify(staff.to_json()), 200

    @app.post("/api/staffs/signup", endpoint="staffs_signup")
    def staff_sign_up():
        body = request.get_json(silent=True) or {}
        staff = container.staff_service.sign_up(email=body.get("email"))
        establish(staff_id=staff.staff_id)
        return jsonify(staff.to_json()), 201

    @app.post("/api/staffs/login", endpoint="staffs_login")
    def staff_login():
        body = request.get_json(silent=True) or {}
        staff = container.staff_service.login(email=body.get("email"))
        establish(staff_id=staff.staff_id)
        return jsonify(staff.to_json()), 201

    @app.post("/api/staffs/logout", endpoint="staffs_logout")
    def staff_logout():
        destroy_current(container.session_store)
        return "", 200
