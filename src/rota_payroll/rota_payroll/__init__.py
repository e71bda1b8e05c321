"""Rota Payroll package.

Feature modules (shifts, rates, holidays, attendance, payroll, timesheets)
with a thin Flask controller layer over service/repository layers. The
payroll core (overlap, rate resolution, aggregation, lifecycle) is pure and
performs no I/O.
"""
