from __future__ import annotations

from datetime import timedelta

from flask import Flask, request, session

from ..common.http import json_endpoint, login_required, ok
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    @json_endpoint
    def login():
        payload = request.get_json(silent=True) or request.form.to_dict()
        s_user = container.auth_service.authenticate(payload.get("username", ""), payload.get("password", ""))

        session.clear()
        session.permanent = bool(payload.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return ok({"message": "Login berhasil", "user": {"full_name": s_user.full_name, "role": s_user.role.value}})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok({"message": "Anda telah keluar"})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok({"user": {"user_id": session["user_id"], "full_name": session.get("name"), "role": session.get("role")}})
