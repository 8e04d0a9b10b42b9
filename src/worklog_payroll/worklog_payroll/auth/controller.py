from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import auth_guards, current_identity, json_body
from ..container import Container
from ..users.mapper import user_to_dict


def register(app: Flask, container: Container) -> None:
    login_required, _ = auth_guards(container.identity_resolver, cookie_name=container.cookie_name)

    @app.route("/api/auth/signup", methods=["POST"], endpoint="auth_signup")
    def signup():
        payload = json_body()
        user = container.user_service.signup(
            name=payload.get("name", ""),
            email=payload.get("email", ""),
            password=payload.get("password", ""),
        )
        return jsonify({"user": user_to_dict(user)}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        payload = json_body()
        result = container.auth_service.authenticate(payload.get("email", ""), payload.get("password", ""))

        resp = jsonify({"user": user_to_dict(result.user), "token": result.token})
        resp.set_cookie(
            container.cookie_name,
            result.token,
            max_age=int(container.token_service.ttl.total_seconds()),
            httponly=True,
            secure=container.cookie_secure,
            samesite="Lax",
        )
        return resp

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        resp = jsonify({"message": "Logged out"})
        resp.delete_cookie(container.cookie_name)
        return resp

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        identity = current_identity()
        user = container.user_service.get_user(actor=identity, user_id=identity.user_id)
        return jsonify({"user": user_to_dict(user)})
