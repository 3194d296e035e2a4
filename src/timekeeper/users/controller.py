from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_text, require_json_object
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    def list_users():
        users = container.user_service.list_users()
        return jsonify([u.to_public_dict() for u in users])

    @app.route("/api/users", methods=["POST"], endpoint="save_user")
    def save_user():
        data = require_json_object(request.get_json(silent=True))
        try:
            role = Role(data.get("role") or Role.USER.value)
        except ValueError:
            raise ValidationError("Unknown role") from None

        user = container.user_service.save_user(
            user_id=optional_text(data.get("id"), "id") or None,
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password") or None,
            pin=str(data.get("pin", "")),
            hourly_rate=data.get("hourlyRate", 0),
            overtime_rate=data.get("overtimeRate", 0),
            role=role,
            birthday=optional_text(data.get("birthday"), "Birthday") or None,
        )
        return jsonify({"message": "User saved", "id": user.user_id})

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    def delete_user(user_id: str):
        container.user_service.delete_user(user_id)
        return jsonify({"message": "User deleted"})

    @app.route("/api/login/pin", methods=["POST"], endpoint="login_pin")
    def login_pin():
        data = require_json_object(request.get_json(silent=True))
        user = container.auth_service.login_pin(str(data.get("pin", "")))
        return jsonify(user.to_public_dict())

    @app.route("/api/login/email", methods=["POST"], endpoint="login_email")
    def login_email():
        data = require_json_object(request.get_json(silent=True))
        user = container.auth_service.login_email(
            optional_text(data.get("email"), "Email") or "",
            optional_text(data.get("password"), "Password") or "",
        )
        return jsonify(user.to_public_dict())
