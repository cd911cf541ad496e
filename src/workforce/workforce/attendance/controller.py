from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_hhmm, parse_iso_date, parse_month
from ..common.http import api_errors, current_tenant, json_body
from ..common.serialization import to_jsonable
from ..common.validators import require_non_empty
from ..core.constants import KIOSK_DEVICE
from ..core.enums import PunchType
from ..core.exceptions import ValidationError
from ..container import Container
from .model import GeoPoint


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _record_json(record) -> dict:
        data = to_jsonable(record)
        data["record_id"] = record.record_id
        data["display_status"] = service.display_status(record).value
        return data

    def _punch_type(value) -> PunchType:
        try:
            return PunchType(str(value or "").upper())
        except ValueError:
            raise ValidationError("type must be IN or OUT")

    @app.route("/api/attendance/punch", methods=["POST"], endpoint="api_punch")
    @api_errors
    def api_punch():
        """Kiosk punch: IN/OUT is decided from the worker's last punch today."""
        data = json_body()
        location = data.get("location")
        record = service.record_punch(
            current_tenant(),
            require_non_empty(data.get("worker_id"), "worker_id"),
            device=data.get("device") or KIOSK_DEVICE,
            location=GeoPoint(lat=float(location["lat"]), lng=float(location["lng"])) if location else None,
            is_out_of_geofence=bool(data.get("is_out_of_geofence", False)),
        )
        return jsonify({"success": True, "record": _record_json(record)}), 200

    @app.route("/api/attendance/regulate", methods=["POST"], endpoint="api_regulate")
    @api_errors
    def api_regulate():
        data = json_body()
        record = service.regulate(
            current_tenant(),
            require_non_empty(data.get("worker_id"), "worker_id"),
            parse_iso_date(data.get("date")),
            _punch_type(data.get("type")),
            parse_hhmm(data.get("time")),
        )
        return jsonify({"success": True, "record": _record_json(record)}), 200

    @app.route("/api/attendance/leave", methods=["POST"], endpoint="api_leave")
    @api_errors
    def api_leave():
        data = json_body()
        record = service.mark_on_leave(
            current_tenant(),
            require_non_empty(data.get("worker_id"), "worker_id"),
            parse_iso_date(data.get("date")),
        )
        return jsonify({"success": True, "record": _record_json(record)}), 200

    @app.route("/api/workers/<worker_id>/attendance/<month>", methods=["GET"], endpoint="api_attendance_month")
    @api_errors
    def api_attendance_month(worker_id: str, month: str):
        records = service.month_records(current_tenant(), worker_id, parse_month(month))
        return jsonify({"success": True, "records": [_record_json(r) for r in records]}), 200
