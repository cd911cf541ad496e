from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_month
from ..common.http import api_errors, current_tenant
from ..common.serialization import to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    def _payroll_json(payroll) -> dict:
        data = to_jsonable(payroll)
        data["payroll_id"] = payroll.payroll_id
        return data

    @app.route("/api/workers/<worker_id>/wages/<month>", methods=["GET"], endpoint="api_daily_wages")
    @api_errors
    def api_daily_wages(worker_id: str, month: str):
        wages = service.daily_wages_for_month(current_tenant(), worker_id, parse_month(month))
        total = round(sum(w.breakdown.total for w in wages), 2)
        return jsonify({"success": True, "wages": to_jsonable(wages), "total": total}), 200

    @app.route("/api/workers/<worker_id>/payroll/<month>", methods=["POST"], endpoint="api_generate_payroll")
    @api_errors
    def api_generate_payroll(worker_id: str, month: str):
        payroll = service.generate(current_tenant(), worker_id, parse_month(month))
        return jsonify({"success": True, "payroll": _payroll_json(payroll)}), 200

    @app.route("/api/payroll/<month>", methods=["POST"], endpoint="api_generate_payroll_sheet")
    @api_errors
    def api_generate_payroll_sheet(month: str):
        sheet = service.generate_for_tenant(current_tenant(), parse_month(month))
        total = round(sum(p.net_payable for p in sheet), 2)
        return jsonify({"success": True, "payrolls": [_payroll_json(p) for p in sheet], "total_net": total}), 200

    @app.route("/api/workers/<worker_id>/payroll/<month>/lock", methods=["POST"], endpoint="api_lock_payroll")
    @api_errors
    def api_lock_payroll(worker_id: str, month: str):
        payroll = service.lock(current_tenant(), worker_id, parse_month(month))
        return jsonify({"success": True, "payroll": _payroll_json(payroll)}), 200

    @app.route("/api/workers/<worker_id>/payroll/<month>/paid", methods=["POST"], endpoint="api_pay_payroll")
    @api_errors
    def api_pay_payroll(worker_id: str, month: str):
        payroll = service.mark_paid(current_tenant(), worker_id, parse_month(month))
        return jsonify({"success": True, "payroll": _payroll_json(payroll)}), 200

    @app.route("/api/workers/<worker_id>/compliance/<month>", methods=["GET"], endpoint="api_compliance")
    @api_errors
    def api_compliance(worker_id: str, month: str):
        report = service.compliance(current_tenant(), worker_id, parse_month(month))
        return jsonify({"success": True, "report": to_jsonable(report)}), 200
