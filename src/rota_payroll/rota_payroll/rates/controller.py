from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import format_clock
from ..common.http import json_errors, ok
from ..common.validators import require_non_empty
from ..container import Container
from .model import RateProfile


def serialize_profile(profile: RateProfile) -> dict:
    return {
        "_id": profile.profile_id,
        "employeeId": profile.employee_id,
        "shiftId": [
            {
                "_id": s.shift_id,
                "name": s.name,
                "startTime": format_clock(s.start_clock),
                "endTime": format_clock(s.end_clock),
            }
            for s in profile.shifts
        ],
        "rates": {day: {"rate": float(rate)} for day, rate in profile.rates.rates.items()},
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/hr/employeerate", methods=["GET"], endpoint="employee_rates")
    @json_errors
    def employee_rates():
        employee_id = require_non_empty(request.args.get("employeeId", ""), "employeeId")
        profiles = container.rate_profiles_repo.list_for_employee(employee_id)
        return ok({"result": [serialize_profile(p) for p in profiles]})
