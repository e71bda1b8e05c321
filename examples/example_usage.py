"""Example: compute a payroll preview with the pure core (no Flask, no DB)."""

from datetime import date, time
from decimal import Decimal

from src.rota_payroll.rota_payroll.attendance.model import AttendanceEntry
from src.rota_payroll.rota_payroll.payroll.aggregator import aggregate
from src.rota_payroll.rota_payroll.rates.model import RateProfile, WeeklyRateTable
from src.rota_payroll.rota_payroll.rates.resolver import RateProfileIndex
from src.rota_payroll.rota_payroll.shifts.model import ShiftTemplate


def main():
    night = ShiftTemplate(shift_id="night", name="Night", start_clock=time(22, 0), end_clock=time(6, 0))
    profile = RateProfile(
        profile_id="p1",
        employee_id="e1",
        shifts=(night,),
        rates=WeeklyRateTable(rates={"Monday": Decimal("14.50"), "Tuesday": Decimal("14.50")}),
    )
    index = RateProfileIndex([profile])
    entries = [
        AttendanceEntry(
            shift_id="night",
            start_date=date(2025, 3, 3),
            start_time=time(21, 30),
            end_date=date(2025, 3, 4),
            end_time=time(6, 15),
        ),
    ]
    print(aggregate(entries, index.shift, index))


if __name__ == "__main__":
    main()
