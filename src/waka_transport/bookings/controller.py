from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.decorators import staff_required, user_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    require_user = user_required(container.auth_guard)
    require_staff = staff_required(container.auth_guard)
    service = container.booking_service

    @app.get("/api/bookings", endpoint="bookings_list")
    @require_user
    def get_bookings():
        bookings = service.list_for_user(user_id=g.user.user_id)
        return jsonify([b.to_json() for b in bookings]), 200

    @app.post("/api/bookings", endpoint="bookings_create")
    @require_user
    def create_booking():
        booking = service.create(user_id=g.user.user_id, data=request.get_json(silent=True) or {})
        return jsonify(booking.to_json()), 201

    @app.post("/api/bookings/all", endpoint="bookings_search")
    @require_staff
    def get_all_bookings():
        page = service.search(request.get_json(silent=True) or {})
        return jsonify(page.to_json()), 200

    @app.get("/api/bookings/suggest", endpoint="bookings_suggest")
    @require_staff
    def suggest_booking():
        rosters = service.suggest(date=request.args.get("date"))
        return jsonify([r.to_json() for r in rosters]), 200

    @app.delete("/api/bookings/staff/<booking_id>", endpoint="bookings_staff_delete")
    @require_staff
    def delete_staff_booking(booking_id: str):
        service.delete_any(booking_id=booking_id)
        return "", 204

    @app.get("/api/bookings/<booking_id>", endpoint="bookings_get")
    @require_user
    def get_booking(booking_id: str):
        booking = service.get_for_user(user_id=g.user.user_id, booking_id=booking_id)
        return jsonify(booking.to_json()), 200

    @app.delete("/api/bookings/<booking_id>", endpoint="bookings_delete")
    @require_user
    def delete_user_booking(booking_id: str):
        service.delete_for_user(user_id=g.user.user_id, booking_id=booking_id)
        return "", 204
