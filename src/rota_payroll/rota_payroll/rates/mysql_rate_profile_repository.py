from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time, to_decimal
from ..shifts.model import ShiftTemplate
from .model import RateProfile, WeeklyRateTable
from .repository import RateProfileRepository


class MySQLRateProfileRepository(RateProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: str) -> Sequence[RateProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT profile_id, employee_id
                FROM rate_profiles
                WHERE employee_id=%s
                ORDER BY created_at, profile_id
                """,
                (employee_id,),
            )
            profile_rows = fetchall(cur)
            if not profile_rows:
                return []

            ids = [r["profile_id"] for r in profile_rows]
            placeholders = ",".join(["%s"] * len(ids))

            cur.execute(
                f"""
                SELECT shift_id, profile_id, shift_name, start_time, end_time
                FROM shift_templates
                WHERE profile_id IN ({placeholders})
                ORDER BY start_time, shift_id
                """,
                tuple(ids),
            )
            shifts_by_profile: dict[str, list[ShiftTemplate]] = {}
            for r in fetchall(cur):
                shifts_by_profile.setdefault(r["profile_id"], []).append(
                    ShiftTemplate(
                        shift_id=str(r["shift_id"]),
                        name=r["shift_name"],
                        start_clock=normalize_mysql_time(r["start_time"]),
                        end_clock=normalize_mysql_time(r["end_time"]),
                    )
                )

            cur.execute(
                f"""
                SELECT profile_id, weekday, rate
                FROM rate_profile_rates
                WHERE profile_id IN ({placeholders})
                """,
                tuple(ids),
            )
            rates_by_profile: dict[str, dict] = {}
            for r in fetchall(cur):
                rates_by_profile.setdefault(r["profile_id"], {})[r["weekday"]] = to_decimal(r["rate"])

            return [
                RateProfile(
                    profile_id=str(r["profile_id"]),
                    employee_id=str(r["employee_id"]),
                    shifts=tuple(shifts_by_profile.get(r["profile_id"], [])),
                    rates=WeeklyRateTable(rates=rates_by_profile.get(r["profile_id"], {})),
                )
                for r in profile_rows
            ]
