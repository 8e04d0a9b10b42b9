from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import auth_guards, current_identity, json_body
from ..container import Container
from ..core.enums import Role
from .mapper import parse_role, user_changes_from_payload, user_to_dict


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = auth_guards(container.identity_resolver, cookie_name=container.cookie_name)

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        users = container.user_service.list_users(actor=current_identity())
        return jsonify({"users": [user_to_dict(u) for u in users]})

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_required
    def create_user():
        payload = json_body()
        user = container.user_service.create_account(
            actor=current_identity(),
            name=payload.get("name", ""),
            email=payload.get("email", ""),
            password=payload.get("password", ""),
            role=parse_role(payload["role"]) if payload.get("role") else Role.USER,
            hourly_rate=payload.get("hourly_rate"),
            phone_number=payload.get("phone_number"),
        )
        return jsonify({"user": user_to_dict(user)}), 201

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="get_user")
    @login_required
    def get_user(user_id: int):
        user = container.user_service.get_user(actor=current_identity(), user_id=user_id)
        return jsonify({"user": user_to_dict(user)})

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @login_required
    def update_user(user_id: int):
        changes = user_changes_from_payload(json_body())
        user = container.user_service.update_user(actor=current_identity(), user_id=user_id, changes=changes)
        return jsonify({"user": user_to_dict(user)})

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        container.user_service.delete_user(actor=current_identity(), user_id=user_id)
        return jsonify({"message": "User deleted"})
