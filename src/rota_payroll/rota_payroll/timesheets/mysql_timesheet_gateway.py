from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..attendance.model import AttendanceEntry
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .gateway import TimesheetGateway

logger = logging.getLogger(__name__)


class MySQLTimesheetGateway(TimesheetGateway):
    """Builds entries from closed attendance logs joined with the rota."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_attendance(self, *, employee_id: str, from_date: date, to_date: date) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.attendance_id, a.check_in_time, a.check_out_time, a.note, r.shift_id
                FROM attendance_logs a
                LEFT JOIN rota_assignments r
                    ON r.employee_id = a.employee_id AND r.work_date = DATE(a.check_in_time)
                WHERE a.employee_id=%s
                  AND DATE(a.check_in_time) BETWEEN %s AND %s
                ORDER BY a.check_in_time
                """,
                (employee_id, from_date, to_date),
            )
            rows = fetchall(cur)

        entries: list[AttendanceEntry] = []
        open_logs = 0
        for r in rows:
            check_in = r["check_in_time"]
            check_out = r.get("check_out_time")
            if not check_out:
                open_logs += 1
                continue
            entries.append(
                AttendanceEntry(
                    entry_id=str(r["attendance_id"]),
                    shift_id=str(r["shift_id"]) if r.get("shift_id") else None,
                    start_date=check_in.date(),
                    start_time=check_in.time().replace(second=0, microsecond=0),
                    end_date=check_out.date(),
                    end_time=check_out.time().replace(second=0, microsecond=0),
                    note=r.get("note") or "",
                )
            )

        if open_logs:
            logger.info("Skipped %d open attendance logs for employee %s", open_logs, employee_id)
        return entries
