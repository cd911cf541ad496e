from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.http import api_errors, current_tenant, json_body
from ..common.serialization import to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.advance_service

    @app.route("/api/workers/<worker_id>/advances", methods=["POST"], endpoint="api_issue_advance")
    @api_errors
    def api_issue_advance(worker_id: str):
        data = json_body()
        advance = service.issue(
            current_tenant(),
            worker_id,
            amount=data.get("amount"),
            advance_date=parse_iso_date(data.get("date")),
            reason=data.get("reason") or "",
        )
        return jsonify({"success": True, "advance": to_jsonable(advance)}), 201

    @app.route("/api/workers/<worker_id>/advances/balance/<month>", methods=["GET"], endpoint="api_advance_balance")
    @api_errors
    def api_advance_balance(worker_id: str, month: str):
        balance = service.available_balance(current_tenant(), worker_id, parse_month(month))
        return jsonify({"success": True, "month": month, "available": balance}), 200
