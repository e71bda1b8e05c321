from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.http import json_errors, ok
from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import ValidationError
from .model import BankHoliday


def serialize_holiday(holiday: BankHoliday) -> dict:
    return {"_id": holiday.holiday_id, "title": holiday.title, "date": holiday.date.isoformat()}


def register(app: Flask, container: Container) -> None:
    @app.route("/hr/bank-holiday", methods=["GET"], endpoint="bank_holidays")
    @json_errors
    def bank_holidays():
        company_id = require_non_empty(request.args.get("companyId", ""), "companyId")
        year_s = request.args.get("year") or str(date.today().year)
        if not year_s.isdigit():
            raise ValidationError("year must be a number")

        holidays = container.bank_holidays_repo.list_for_company_year(company_id=company_id, year=int(year_s))
        return ok({"result": [serialize_holiday(h) for h in holidays]})
