"""Tests for deduction line builder."""

from datetime import date
from decimal import Decimal

from staffops_engine.calculators.line_builder import DeductionLineBuilder
from staffops_engine.calculators.types import EmployeeLoan, LoanStatus
from tests.conftest import unpaid_leave


def make_loan(monthly="500", remaining="300", status=LoanStatus.ACTIVE, **kwargs):
    return EmployeeLoan(
        id=kwargs.get("id", "loan-1"),
        member_id=kwargs.get("member_id", "emp-1"),
        loan_number=kwargs.get("loan_number", "LN-0001"),
        loan_type=kwargs.get("loan_type", "LOAN"),
        status=status,
        monthly_deduction=Decimal(monthly),
        remaining_amount=Decimal(remaining),
        start_date=kwargs.get("start_date", date(2024, 1, 1)),
    )


class TestDeductionLineBuilder:
    """Test deduction line builder functionality."""

    def test_round_to_cents(self):
        """Test rounding to 2 decimal places."""
        assert DeductionLineBuilder.round_to_cents(Decimal("10.125")) == Decimal("10.13")
        assert DeductionLineBuilder.round_to_cents(Decimal("10.124")) == Decimal("10.12")
        assert DeductionLineBuilder.round_to_cents(Decimal("10.135")) == Decimal("10.14")

    def test_daily_rate_uses_thirty_days(self):
        """Daily rate is gross / 30 whatever the month length."""
        assert DeductionLineBuilder.daily_rate(Decimal("3000")) == Decimal("100")

        # Not rounded until the final amount
        rate = DeductionLineBuilder.daily_rate(Decimal("1000"))
        assert rate != Decimal("33.33")
        assert DeductionLineBuilder.round_to_cents(rate) == Decimal("33.33")

    def test_create_leave_line(self):
        leave = unpaid_leave(date(2024, 3, 11), date(2024, 3, 12), "2")

        line = DeductionLineBuilder.create_leave_line(
            leave,
            effective_start=date(2024, 3, 11),
            effective_end=date(2024, 3, 12),
            days=Decimal("2"),
            daily_rate=Decimal("150.255"),
        )

        assert line.amount == Decimal("300.51")
        assert line.label == "Unpaid Leave (2 days)"
        assert line.leave_type_name == "Unpaid Leave"
        assert line.amount > 0  # Deductions are positive amounts subtracted from gross


class TestLoanLines:
    """Test loan installments."""

    def test_installment_capped_at_remaining(self):
        """Monthly 500 against a 300 balance deducts 300."""
        deduction = DeductionLineBuilder.create_loan_line(make_loan("500", "300"))

        assert deduction.amount == Decimal("300.00")
        assert deduction.label == "LOAN - LN-0001"

    def test_full_installment(self):
        deduction = DeductionLineBuilder.create_loan_line(make_loan("500", "2000"))

        assert deduction.amount == Decimal("500.00")

    def test_nothing_owed(self):
        assert DeductionLineBuilder.create_loan_line(make_loan("500", "0")) is None

    def test_settle_loan_pays_off(self):
        """Paying the remaining balance completes the loan."""
        loan = make_loan("500", "300")

        settled = DeductionLineBuilder.settle_loan(loan, Decimal("300"))

        assert settled.remaining_amount == Decimal("0")
        assert settled.total_paid == Decimal("300")
        assert settled.installments_paid == 1
        assert settled.status == LoanStatus.COMPLETED
        assert loan.status == LoanStatus.ACTIVE

    def test_settle_loan_partial(self):
        settled = DeductionLineBuilder.settle_loan(make_loan("500", "2000"), Decimal("500"))

        assert settled.remaining_amount == Decimal("1500")
        assert settled.status == LoanStatus.ACTIVE

    def test_sum_amounts(self):
        lines = [
            DeductionLineBuilder.create_loan_line(make_loan("500", "300")),
            DeductionLineBuilder.create_loan_line(make_loan("250", "1000", id="loan-2")),
        ]

        assert DeductionLineBuilder.sum_amounts(lines) == Decimal("550.00")
