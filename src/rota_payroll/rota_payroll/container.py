from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_CURRENCY
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_bank_holiday_repository import MySQLBankHolidayRepository
from .holidays.service import BankHolidayService
from .payroll.calculator.standard_calculator import calculator_for
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.report import PayrollReportService
from .payroll.service import PayrollService
from .rates.mysql_rate_profile_repository import MySQLRateProfileRepository
from .timesheets.mysql_timesheet_gateway import MySQLTimesheetGateway


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    rate_profiles_repo: MySQLRateProfileRepository
    bank_holidays_repo: MySQLBankHolidayRepository
    payrolls_repo: MySQLPayrollRepository
    timesheet_gateway: MySQLTimesheetGateway

    bank_holiday_service: BankHolidayService
    payroll_service: PayrollService
    payroll_report_service: PayrollReportService


def build_container(
    *, db_config: dict, currency: str = DEFAULT_CURRENCY, calculator: Optional[str] = None
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    rate_profiles_repo = MySQLRateProfileRepository(conn)
    bank_holidays_repo = MySQLBankHolidayRepository(conn)
    payrolls_repo = MySQLPayrollRepository(conn)
    timesheet_gateway = MySQLTimesheetGateway(conn)

    bank_holiday_service = BankHolidayService(bank_holidays_repo)
    payroll_service = PayrollService(
        payrolls_repo,
        rate_profiles_repo,
        bank_holiday_service,
        timesheet_gateway,
        calculator=calculator_for(calculator),
    )
    payroll_report_service = PayrollReportService(currency=currency)

    return Container(
        conn=conn,
        rate_profiles_repo=rate_profiles_repo,
        bank_holidays_repo=bank_holidays_repo,
        payrolls_repo=payrolls_repo,
        timesheet_gateway=timesheet_gateway,
        bank_holiday_service=bank_holiday_service,
        payroll_service=payroll_service,
        payroll_report_service=payroll_report_service,
    )
