from __future__ import annotations

import json
import uuid
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..attendance.model import AttendanceEntry
from ..attendance.payload import parse_entries, serialize_entry
from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json, to_decimal
from .model import PayrollRecord, PayrollTotals
from .repository import PayrollRepository

_COLUMNS = """
    payroll_id, employee_id, company_id, from_date, to_date,
    attendance_list, total_minutes, total_amount, status
"""


def _dump_entries(entries: Sequence[AttendanceEntry]) -> str:
    return json.dumps([serialize_entry(e) for e in entries])


def _to_record(r: Dict[str, Any]) -> PayrollRecord:
    return PayrollRecord(
        record_id=str(r["payroll_id"]),
        employee_id=str(r["employee_id"]),
        company_id=r.get("company_id"),
        from_date=r["from_date"],
        to_date=r["to_date"],
        attendance_list=tuple(parse_entries(load_json(r["attendance_list"]) or [])),
        totals=PayrollTotals(
            total_minutes=int(r.get("total_minutes") or 0),
            total_amount=to_decimal(r.get("total_amount")),
        ),
        status=PayrollStatus(r["status"]),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, record_id: str) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records WHERE payroll_id=%s", (record_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(
        self,
        *,
        employee_id: str,
        company_id: Optional[str],
        from_date: date,
        to_date: date,
        attendance_list: Sequence[AttendanceEntry],
        totals: PayrollTotals,
    ) -> str:
        record_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_records(
                    payroll_id, employee_id, company_id, from_date, to_date,
                    attendance_list, total_minutes, total_amount, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record_id,
                    employee_id,
                    company_id,
                    from_date,
                    to_date,
                    _dump_entries(attendance_list),
                    int(totals.total_minutes),
                    totals.total_amount,
                    PayrollStatus.PENDING.value,
                ),
            )
        return record_id

    def save(self, record: PayrollRecord, *, expected_status: PayrollStatus = PayrollStatus.PENDING) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET attendance_list=%s, total_minutes=%s, total_amount=%s, status=%s
                WHERE payroll_id=%s AND status=%s
                """,
                (
                    _dump_entries(record.attendance_list),
                    int(record.total_minutes),
                    record.total_amount,
                    record.status.value,
                    record.record_id,
                    expected_status.value,
                ),
            )
            return cur.rowcount == 1

    def list_records(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[PayrollStatus] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[PayrollRecord]:
        where = ["1=1"]
        params: list = []
        if employee_id:
            where.append("employee_id=%s")
            params.append(employee_id)
        if status:
            where.append("status=%s")
            params.append(status.value)
        if period_start:
            where.append("to_date>=%s")
            params.append(period_start)
        if period_end:
            where.append("from_date<=%s")
            params.append(period_end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll_records
                WHERE {' AND '.join(where)}
                ORDER BY from_date DESC, created_at DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_to_record(r) for r in fetchall(cur)]
