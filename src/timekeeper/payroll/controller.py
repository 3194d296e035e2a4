from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_json_object
from ..container import Container
from ..core.constants import PAYROLL_EXPORT_FILENAME
from ..core.exceptions import ValidationError
from .analytics import attendance_shares
from .service import parse_extras


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/report", methods=["GET"], endpoint="payroll_report")
    def payroll_report():
        report = container.payroll_service.build_report()
        return jsonify([e.to_dict() for e in report.entries])

    @app.route("/api/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    def payroll_summary():
        report = container.payroll_service.build_report()
        body = report.summary.to_dict()
        body["attendanceShares"] = {c.value: v for c, v in attendance_shares(report.summary.attendance).items()}
        return jsonify(body)

    @app.route("/api/payroll/export.csv", methods=["GET"], endpoint="payroll_export")
    def payroll_export():
        csv_bytes = container.payroll_service.export_csv()
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={PAYROLL_EXPORT_FILENAME}"},
        )

    @app.route("/api/payroll/extras/<user_id>", methods=["GET"], endpoint="get_payroll_extras")
    def get_payroll_extras(user_id: str):
        return jsonify(container.payroll_service.get_extras(user_id).to_dict())

    @app.route("/api/payroll/extras", methods=["POST"], endpoint="save_payroll_extras")
    def save_payroll_extras():
        data = require_json_object(request.get_json(silent=True))
        user_id = str(data.get("userId") or "")
        if not user_id:
            raise ValidationError("userId is required")
        container.payroll_service.save_extras(parse_extras(user_id, data))
        return jsonify({"message": "Extras saved"})

    @app.route(
        "/api/payroll/extras/<user_id>/thirty-percent",
        methods=["POST"],
        endpoint="suggest_thirty_percent",
    )
    def suggest_thirty_percent(user_id: str):
        data = require_json_object(request.get_json(silent=True) or {})
        value = container.payroll_service.suggest_thirty_percent(user_id, parse_extras(user_id, data))
        return jsonify({"userId": user_id, "thirtyPercent": value})
