"""Tests for unpaid-leave deductions."""

from datetime import date
from decimal import Decimal

from staffops_engine.calculators.dates import PayPeriod
from staffops_engine.calculators.leave_deduction import LeaveDeductionCalculator
from staffops_engine.calculators.line_builder import DeductionLineBuilder
from staffops_engine.calculators.types import LeaveStatus
from tests.conftest import unpaid_leave


class TestCalculateDeductions:
    """Test deduction lines for one member and month."""

    def setup_method(self):
        self.calculator = LeaveDeductionCalculator()

    def test_half_day_uses_stored_total(self):
        """A 0.5-day leave inside the month deducts exactly half a day."""
        leave = unpaid_leave(date(2024, 3, 10), date(2024, 3, 10), "0.5")

        lines = self.calculator.calculate_deductions(
            "emp-1", 2024, 3, Decimal("100"), [leave]
        )

        assert len(lines) == 1
        line = lines[0]
        assert line.days_deducted == Decimal("0.5")
        assert line.amount == Decimal("50.00")
        assert line.label == "Unpaid Leave (0.5 days)"
        assert line.request_number == "LR-leave-1"

    def test_cross_month_counts_calendar_days(self):
        """Leave over a month boundary is clamped and counted by calendar."""
        leave = unpaid_leave(date(2024, 1, 28), date(2024, 2, 3), "7")

        january = self.calculator.calculate_deductions(
            "emp-1", 2024, 1, Decimal("100"), [leave]
        )
        february = self.calculator.calculate_deductions(
            "emp-1", 2024, 2, Decimal("100"), [leave]
        )

        assert january[0].effective_start == date(2024, 1, 28)
        assert january[0].effective_end == date(2024, 1, 31)
        assert january[0].days_deducted == Decimal("4")
        assert january[0].amount == Decimal("400.00")
        assert february[0].effective_start == date(2024, 2, 1)
        assert february[0].days_deducted == Decimal("3")

    def test_leave_outside_period_ignored(self):
        leaves = [
            unpaid_leave(date(2024, 2, 26), date(2024, 2, 29), "4", leave_id="before"),
            unpaid_leave(date(2024, 4, 1), date(2024, 4, 2), "2", leave_id="after"),
        ]

        assert self.calculator.calculate_deductions(
            "emp-1", 2024, 3, Decimal("100"), leaves
        ) == []

    def test_only_approved_unpaid_for_member(self):
        leaves = [
            unpaid_leave(date(2024, 3, 4), date(2024, 3, 4), "1", leave_id="ok"),
            unpaid_leave(
                date(2024, 3, 5), date(2024, 3, 5), "1",
                leave_id="pending", status=LeaveStatus.PENDING,
            ),
            unpaid_leave(date(2024, 3, 6), date(2024, 3, 6), "1", leave_id="paid", is_paid=True),
            unpaid_leave(
                date(2024, 3, 7), date(2024, 3, 7), "1", leave_id="other", member_id="emp-2"
            ),
        ]

        lines = self.calculator.calculate_deductions("emp-1", 2024, 3, Decimal("100"), leaves)

        assert [line.source_id for line in lines] == ["ok"]

    def test_amount_rounded_half_up(self):
        """333.33 x 3 days is 999.99."""
        leave = unpaid_leave(date(2024, 5, 6), date(2024, 5, 8), "3")

        lines = self.calculator.calculate_deductions(
            "emp-1", 2024, 5, Decimal("333.33"), [leave]
        )

        assert lines[0].amount == Decimal("999.99")

    def test_unrounded_daily_rate(self):
        """Rounding happens once, on the final amount."""
        daily_rate = DeductionLineBuilder.daily_rate(Decimal("1000"))
        leave = unpaid_leave(date(2024, 5, 6), date(2024, 5, 8), "3")

        lines = self.calculator.calculate_deductions("emp-1", 2024, 5, daily_rate, [leave])

        assert lines[0].daily_rate == daily_rate
        assert lines[0].amount == Decimal("100.00")

    def test_zero_daily_rate(self):
        leave = unpaid_leave(date(2024, 5, 6), date(2024, 5, 6), "1")

        lines = self.calculator.calculate_deductions("emp-1", 2024, 5, Decimal("0"), [leave])

        assert lines[0].amount == Decimal("0.00")

    def test_leap_february_boundary(self):
        leave = unpaid_leave(date(2024, 2, 28), date(2024, 3, 2), "4")

        lines = self.calculator.calculate_deductions(
            "emp-1", 2024, 2, Decimal("100"), [leave]
        )

        assert lines[0].effective_end == date(2024, 2, 29)
        assert lines[0].days_deducted == Decimal("2")

    def test_leave_spanning_whole_month(self):
        leave = unpaid_leave(date(2024, 3, 25), date(2024, 5, 5), "42")

        lines = self.calculator.calculate_deductions(
            "emp-1", 2024, 4, Decimal("10"), [leave]
        )

        assert lines[0].days_deducted == Decimal("30")
        assert lines[0].amount == Decimal("300.00")


class TestLeaveDayQueries:
    """Test day totals without line detail."""

    def setup_method(self):
        self.calculator = LeaveDeductionCalculator()

    def test_days_in_period(self):
        leaves = [
            unpaid_leave(date(2024, 1, 28), date(2024, 2, 3), "7", leave_id="a"),
            unpaid_leave(date(2024, 1, 10), date(2024, 1, 10), "0.5", leave_id="b"),
        ]

        assert self.calculator.days_in_period("emp-1", 2024, 1, leaves) == Decimal("4.5")

    def test_has_unpaid_leave(self):
        leaves = [unpaid_leave(date(2024, 1, 10), date(2024, 1, 10), "1")]

        assert self.calculator.has_unpaid_leave("emp-1", 2024, 1, leaves)
        assert not self.calculator.has_unpaid_leave("emp-1", 2024, 2, leaves)

    def test_days_to_deduct(self):
        leave = unpaid_leave(date(2024, 1, 30), date(2024, 2, 1), "3")

        assert LeaveDeductionCalculator.days_to_deduct(leave, PayPeriod(2024, 1)) == Decimal("2")
        assert LeaveDeductionCalculator.days_to_deduct(leave, PayPeriod(2024, 2)) == Decimal("1")
