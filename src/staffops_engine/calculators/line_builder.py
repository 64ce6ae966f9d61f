"""Deduction line builder and money rounding."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from staffops_engine.calculators.types import (
    DeductionLine,
    EmployeeLoan,
    LoanDeduction,
    LoanStatus,
    UnpaidLeaveRequest,
)


class DeductionLineBuilder:
    """Builds payroll deduction lines.

    Rounding:
    - Currency to 2 decimals, ROUND_HALF_UP, only on final amounts
    - Day counts and daily rates keep full precision (0.5-day leave)

    Daily rate:
    - Always gross / 30, regardless of the actual month length
    """

    OUTPUT_PRECISION = Decimal("0.01")  # 2 decimal places for money
    DAYS_PER_MONTH = Decimal("30")

    @staticmethod
    def round_to_cents(amount: Decimal) -> Decimal:
        """Round amount to 2 decimal places (cents)."""
        return amount.quantize(DeductionLineBuilder.OUTPUT_PRECISION, rounding=ROUND_HALF_UP)

    @staticmethod
    def daily_rate(gross_salary: Decimal) -> Decimal:
        """Per-day salary under the fixed 30-day month convention."""
        return gross_salary / DeductionLineBuilder.DAYS_PER_MONTH

    @staticmethod
    def create_leave_line(
        leave: UnpaidLeaveRequest,
        effective_start: date,
        effective_end: date,
        days: Decimal,
        daily_rate: Decimal,
    ) -> DeductionLine:
        """Create an unpaid-leave deduction line (positive amount)."""
        return DeductionLine(
            source_id=leave.id,
            label=f"{leave.leave_type_name} ({days.normalize():f} days)",
            effective_start=effective_start,
            effective_end=effective_end,
            days_deducted=days,
            daily_rate=daily_rate,
            amount=DeductionLineBuilder.round_to_cents(days * daily_rate),
            request_number=leave.request_number,
            leave_type_name=leave.leave_type_name,
        )

    @staticmethod
    def create_loan_line(loan: EmployeeLoan) -> LoanDeduction | None:
        """Create the installment for one loan, or None if nothing is owed.

        The installment never exceeds the remaining balance.
        """
        amount = min(loan.monthly_deduction, loan.remaining_amount)
        if amount <= 0:
            return None

        return LoanDeduction(
            loan_id=loan.id,
            loan_number=loan.loan_number,
            label=f"{loan.loan_type} - {loan.loan_number}",
            monthly_deduction=loan.monthly_deduction,
            remaining_amount=loan.remaining_amount,
            amount=DeductionLineBuilder.round_to_cents(amount),
        )

    @staticmethod
    def settle_loan(loan: EmployeeLoan, amount: Decimal) -> EmployeeLoan:
        """Return the loan as it stands after one repayment of ``amount``."""
        remaining = loan.remaining_amount - amount
        return replace(
            loan,
            total_paid=loan.total_paid + amount,
            remaining_amount=max(Decimal("0"), remaining),
            installments_paid=loan.installments_paid + 1,
            status=LoanStatus.COMPLETED if remaining <= 0 else loan.status,
        )

    @staticmethod
    def sum_amounts(lines: list[DeductionLine] | list[LoanDeduction]) -> Decimal:
        """Sum line amounts."""
        total = Decimal("0")
        for line in lines:
            total += line.amount
        return total
