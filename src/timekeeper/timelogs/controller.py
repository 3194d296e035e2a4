from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_json_object
from ..container import Container
from ..core.exceptions import ValidationError
from .model import TimeLog
from .service import SLOT_LABELS, parse_slot


def register(app: Flask, container: Container) -> None:
    @app.route("/api/logs", methods=["GET"], endpoint="list_logs")
    def list_logs():
        logs = container.clock_service.list_logs(
            user_id=request.args.get("userId") or None,
            sort=request.args.get("sort", "date-desc"),
        )
        return jsonify([log.to_dict() for log in logs])

    @app.route("/api/logs", methods=["POST"], endpoint="save_log")
    def save_log():
        data = require_json_object(request.get_json(silent=True))
        log = container.clock_service.save_log(TimeLog.from_dict(data))
        return jsonify({"message": "Log saved", "id": log.log_id})

    @app.route("/api/logs/<log_id>", methods=["DELETE"], endpoint="delete_log")
    def delete_log(log_id: str):
        container.clock_service.delete_log(log_id)
        return jsonify({"message": "Log deleted"})

    @app.route("/api/logs/today/<user_id>", methods=["GET"], endpoint="today_log")
    def today_log(user_id: str):
        return jsonify(container.clock_service.get_today_log(user_id).to_dict())

    @app.route("/api/clock", methods=["POST"], endpoint="clock")
    def clock():
        data = require_json_object(request.get_json(silent=True))
        user_id = str(data.get("userId") or "")
        if not user_id:
            raise ValidationError("userId is required")
        slot = parse_slot(data.get("slot"))

        log = container.clock_service.clock(user_id, slot)
        body = log.to_dict()
        body["action"] = SLOT_LABELS[slot]
        return jsonify(body)
