"""Payroll preview aggregation: salary, loan and leave deductions."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from decimal import Decimal

from staffops_engine.calculators.dates import PayPeriod
from staffops_engine.calculators.line_builder import DeductionLineBuilder
from staffops_engine.calculators.types import (
    DeductionLine,
    EmployeeLoan,
    EmployeePayrollLine,
    LoanDeduction,
    LoanStatus,
    PayrollPreview,
    SalaryStructure,
)

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"

# (member_id, year, month, daily_rate) -> deduction lines
LeaveDeductionProvider = Callable[[str, int, int, Decimal], Awaitable[list[DeductionLine]]]


class PayrollPreviewBuilder:
    """Projects a payroll run without persisting anything.

    Pipeline (stable order per employee):
    1) Gross from the six salary components
    2) Daily rate = gross / 30
    3) Loan installments, capped at each remaining balance
    4) Unpaid-leave deductions (failures isolated per employee)
    5) Net = gross - deductions

    Employees are sorted by display name so output is deterministic.
    """

    def __init__(self, leave_deductions: LeaveDeductionProvider):
        self.leave_deductions = leave_deductions

    async def build(
        self,
        year: int,
        month: int,
        salary_structures: list[SalaryStructure],
        loans: list[EmployeeLoan],
    ) -> PayrollPreview:
        """Build the preview for every salary structure given."""
        period = PayPeriod(year, month)
        preview = PayrollPreview(
            year=year,
            month=month,
            period_start=period.period_start,
            period_end=period.period_end,
        )

        loans_by_member: dict[str, list[EmployeeLoan]] = {}
        for loan in loans:
            loans_by_member.setdefault(loan.member_id, []).append(loan)

        for salary in salary_structures:
            line = await self._build_employee(
                salary, loans_by_member.get(salary.member_id, []), year, month
            )
            preview.employees.append(line)

        preview.employees.sort(key=lambda e: (e.member_name, e.member_id))
        return preview

    async def _build_employee(
        self,
        salary: SalaryStructure,
        loans: list[EmployeeLoan],
        year: int,
        month: int,
    ) -> EmployeePayrollLine:
        gross = salary.gross_salary
        daily_rate = DeductionLineBuilder.daily_rate(gross)

        line = EmployeePayrollLine(
            member_id=salary.member_id,
            member_name=salary.member_name or UNKNOWN_NAME,
            employee_code=salary.employee_code,
            designation=salary.designation,
            basic_salary=salary.basic_salary,
            housing_allowance=salary.housing_allowance,
            transport_allowance=salary.transport_allowance,
            food_allowance=salary.food_allowance,
            phone_allowance=salary.phone_allowance,
            other_allowances=salary.other_allowances,
            gross_salary=gross,
            daily_rate=daily_rate,
        )

        line.loan_deductions = self._loan_deductions(loans)

        try:
            line.leave_deductions = await self.leave_deductions(
                salary.member_id, year, month, daily_rate
            )
        except Exception as e:
            logger.exception(
                "Leave deduction failed for member %s (%04d-%02d); continuing without it",
                salary.member_id,
                year,
                month,
            )
            line.leave_deductions = []
            line.errors.append(f"Leave deductions unavailable: {e}")

        if line.net_salary < 0:
            logger.warning(
                "Member %s has negative projected net salary %s for %04d-%02d",
                salary.member_id,
                line.net_salary,
                year,
                month,
            )

        return line

    @staticmethod
    def _loan_deductions(loans: list[EmployeeLoan]) -> list[LoanDeduction]:
        deductions: list[LoanDeduction] = []
        for loan in loans:
            if loan.status != LoanStatus.ACTIVE:
                continue
            deduction = DeductionLineBuilder.create_loan_line(loan)
            if deduction:
                deductions.append(deduction)
        return deductions
