from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_errors, ok
from ..container import Container
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError
from ..holidays.controller import serialize_holiday
from ..holidays.service import BankHolidayService


def _status(value: Optional[str], *, default: Optional[PayrollStatus] = None) -> Optional[PayrollStatus]:
    if not value:
        return default
    try:
        return PayrollStatus(str(value).lower())
    except ValueError:
        raise ValidationError(f"Unknown status: {value}")


def _date(value, field_name: str):
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value!r}")


def _int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    value = request.args.get(name)
    if not value:
        return default
    if not value.isdigit():
        raise ValidationError(f"{name} must be a number")
    return int(value)


def register(app: Flask, container: Container) -> None:
    payrolls = container.payroll_service
    reports = container.payroll_report_service

    def _detail_payload(record_id: str) -> dict:
        detail = payrolls.get_detail(record_id)
        report = reports.build_payslip(detail.record, detail.lines)
        data = reports.serialize_record(detail.record)
        for row, line in zip(report.rows, detail.lines):
            row["holidayOptions"] = [
                serialize_holiday(h) for h in BankHolidayService.options_for(line.entry, detail.holidays)
            ]
        data["lines"] = report.rows
        data["summary"] = report.summary
        return data

    @app.route("/hr/payroll", methods=["GET"], endpoint="payroll_list")
    @json_errors
    def payroll_list():
        records = payrolls.list_records(
            employee_id=request.args.get("userId") or None,
            status=_status(request.args.get("status")),
            month=_int_arg("month"),
            year=_int_arg("year"),
            page=_int_arg("page", 1),
            limit=_int_arg("limit", DEFAULT_LIST_LIMIT),
        )
        return ok({"result": [reports.serialize_record(r) for r in records]})

    @app.route("/hr/payroll", methods=["POST"], endpoint="payroll_generate")
    @json_errors
    def payroll_generate():
        body = request.get_json(silent=True) or {}
        user_ids = body.get("userIds")
        if user_ids is None and body.get("userId"):
            user_ids = [body["userId"]]
        created = payrolls.generate(
            employee_ids=user_ids or [],
            company_id=body.get("companyId") or None,
            from_date=_date(body.get("fromDate"), "fromDate"),
            to_date=_date(body.get("toDate"), "toDate"),
        )
        return ok({"created": created}, 201)

    @app.route("/hr/payroll/<record_id>", methods=["GET"], endpoint="payroll_detail")
    @json_errors
    def payroll_detail(record_id: str):
        return ok(_detail_payload(record_id))

    @app.route("/hr/payroll/<record_id>", methods=["PATCH"], endpoint="payroll_update")
    @json_errors
    def payroll_update(record_id: str):
        body = request.get_json(silent=True) or {}
        status = _status(body.get("status"), default=PayrollStatus.PENDING)

        if "attendanceList" not in body:
            # Status-only payloads: approve/reject without resubmitting rows.
            if status is PayrollStatus.REJECTED:
                payrolls.reject(record_id)
            elif status is PayrollStatus.APPROVED:
                payrolls.approve(record_id)
            else:
                raise ValidationError("attendanceList is required")
        else:
            # Client totals are ignored; both are recomputed from the list.
            payrolls.save(record_id, attendance_list=body.get("attendanceList"), status=status)
        return ok(_detail_payload(record_id))

    @app.route("/hr/payroll/<record_id>/entries/<int:position>", methods=["PATCH"], endpoint="payroll_entry_update")
    @json_errors
    def payroll_entry_update(record_id: str, position: int):
        body = request.get_json(silent=True) or {}
        payrolls.update_entry(record_id, position, body)
        return ok(_detail_payload(record_id))

    @app.route("/hr/payroll/<record_id>/regenerate", methods=["POST"], endpoint="payroll_regenerate")
    @json_errors
    def payroll_regenerate(record_id: str):
        payrolls.regenerate(record_id)
        return ok(_detail_payload(record_id))

    @app.route("/hr/payroll/<record_id>/approve", methods=["POST"], endpoint="payroll_approve")
    @json_errors
    def payroll_approve(record_id: str):
        payrolls.approve(record_id)
        return ok(_detail_payload(record_id))

    @app.route("/hr/payroll/<record_id>/reject", methods=["POST"], endpoint="payroll_reject")
    @json_errors
    def payroll_reject(record_id: str):
        payrolls.reject(record_id)
        return ok(_detail_payload(record_id))
