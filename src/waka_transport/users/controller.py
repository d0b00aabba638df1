from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.decorators import user_required
from ..container import Container
from ..sessions.interface import destroy_current, establish


def register(app: Flask, container: Container) -> None:
    require_user = user_required(container.auth_guard)
    service = container.user_service

    @app.get("/api/users", endpoint="users_me")
    @require_user
    def get_authenticated_user():
        return jsonify(service.get(g.user.user_id).to_json()), 200

    @app.post("/api/users/signup", endpoint="users_signup")
    def user_sign_up():
        result = service.sign_up(request.get_json(silent=True) or {})
        return jsonify({"user": result.user.to_json(), "activationToken": result.activation_token}), 201

    @app.post("/api/users/login", endpoint="users_login")
    def user_login():
        body = request.get_json(silent=True) or {}
        user = service.login(username=body.get("username"), password=body.get("password"))
        establish(user_id=user.user_id)
        return jsonify(user.to_json()), 201

    @app.post("/api/users/logout", endpoint="users_logout")
    def user_logout():
        destroy_current(container.session_store)
        return "", 200

    @app.post("/api/users/forgotpassword", endpoint="users_forgot_password")
    def forgot_password():
        body = request.get_json(silent=True) or {}
        receipt = service.forgot_password(email=body.get("email"))
        return jsonify({"message": receipt.response}), 200

    @app.patch("/api/users/changepassword/<user_id>/<token>", endpoint="users_change_password")
    def change_password(user_id: str, token: str):
        body = request.get_json(silent=True) or {}
        user = service.change_password(user_id=user_id, token=token, password=body.get("password"))
        return jsonify(user.to_json()), 200
