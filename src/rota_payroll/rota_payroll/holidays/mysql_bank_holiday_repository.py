from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import BankHoliday
from .repository import BankHolidayRepository


class MySQLBankHolidayRepository(BankHolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_company_year(self, *, company_id: str, year: int) -> Sequence[BankHoliday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, title, holiday_date
                FROM bank_holidays
                WHERE company_id=%s AND YEAR(holiday_date)=%s
                ORDER BY holiday_date
                """,
                (company_id, int(year)),
            )
            return [
                BankHoliday(holiday_id=str(r["holiday_id"]), title=r["title"], date=r["holiday_date"])
                for r in fetchall(cur)
            ]
