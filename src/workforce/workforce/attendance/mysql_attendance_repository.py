from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..common.serialization import to_jsonable
from ..core.enums import AttendanceStatus, PunchType
from ..core.exceptions import ConcurrencyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import AttendanceRecord, GeoPoint, LateStatus, Punch, WorkedHours
from .repository import AttendanceRepository

_COLUMNS = """
    tenant_id, worker_id, work_date, shift_id, worker_name, timeline, status,
    is_late, late_by_mins, penalty_applied, hours_gross, hours_net, hours_overtime, version
"""


def punch_from_dict(data: Dict[str, Any]) -> Punch:
    location = data.get("location")
    return Punch(
        timestamp=datetime.fromisoformat(data["timestamp"]),
        type=PunchType(data["type"]),
        device=data.get("device") or "",
        location=GeoPoint(lat=float(location["lat"]), lng=float(location["lng"])) if location else None,
        is_out_of_geofence=bool(data.get("is_out_of_geofence", False)),
    )


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    timeline = load_json(r["timeline"]) or []
    return AttendanceRecord(
        tenant_id=str(r["tenant_id"]),
        worker_id=str(r["worker_id"]),
        work_date=r["work_date"],
        shift_id=r.get("shift_id") or "",
        timeline=tuple(punch_from_dict(p) for p in timeline),
        status=AttendanceStatus(r["status"]),
        late_status=LateStatus(
            is_late=bool(r["is_late"]),
            late_by_mins=int(r["late_by_mins"]),
            penalty_applied=bool(r["penalty_applied"]),
        ),
        hours=WorkedHours(
            gross=float(r["hours_gross"]),
            net=float(r["hours_net"]),
            overtime=float(r["hours_overtime"]),
        ),
        worker_name=r.get("worker_name") or "",
        version=int(r["version"]),
    )


def _values(record: AttendanceRecord) -> tuple:
    return (
        record.shift_id,
        record.worker_name,
        dump_json(to_jsonable(list(record.timeline))),
        record.status.value,
        int(record.late_status.is_late),
        int(record.late_status.late_by_mins),
        int(record.late_status.penalty_applied),
        float(record.hours.gross),
        float(record.hours.net),
        float(record.hours.overtime),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Attendance records keyed by (tenant, worker, date) with a version column."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, tenant_id: str, worker_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE tenant_id=%s AND worker_id=%s AND work_date=%s
                """,
                (tenant_id, worker_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_worker_month(self, tenant_id: str, worker_id: str, month: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE tenant_id=%s AND worker_id=%s AND DATE_FORMAT(work_date, '%%Y-%%m')=%s
                ORDER BY work_date
                """,
                (tenant_id, worker_id, month),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def save(self, record: AttendanceRecord, *, expected_version: int) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            if expected_version == 0:
                try:
                    cur.execute(
                        """
                        INSERT INTO attendance_records(
                            record_id, tenant_id, worker_id, work_date,
                            shift_id, worker_name, timeline, status,
                            is_late, late_by_mins, penalty_applied,
                            hours_gross, hours_net, hours_overtime, version
                        )
                        VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                        """,
                        (record.record_id, record.tenant_id, record.worker_id, record.work_date) + _values(record),
                    )
                except mysql.connector.errors.IntegrityError:
                    raise ConcurrencyError(f"{record.record_id} was created by another device")
                return replace(record, version=1)

            cur.execute(
                """
                UPDATE attendance_records
                SET shift_id=%s, worker_name=%s, timeline=%s, status=%s,
                    is_late=%s, late_by_mins=%s, penalty_applied=%s,
                    hours_gross=%s, hours_net=%s, hours_overtime=%s,
                    version=version+1
                WHERE record_id=%s AND version=%s
                """,
                _values(record) + (record.record_id, int(expected_version)),
            )
            if cur.rowcount == 0:
                raise ConcurrencyError(f"{record.record_id} changed since version {expected_version}")
            return replace(record, version=int(expected_version) + 1)
