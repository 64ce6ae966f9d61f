"""Unpaid-leave salary deductions for a calendar pay period."""

from __future__ import annotations

import logging
from decimal import Decimal

from staffops_engine.calculators.dates import PayPeriod, inclusive_calendar_days
from staffops_engine.calculators.line_builder import DeductionLineBuilder
from staffops_engine.calculators.types import DeductionLine, LeaveStatus, UnpaidLeaveRequest

logger = logging.getLogger(__name__)


class LeaveDeductionCalculator:
    """Computes deductions from approved unpaid leave.

    Day counting:
    - Leave fully inside the period: the request's stored total_days,
      which already encodes half days
    - Leave crossing a period boundary: calendar days of the clamped range
      (half-day requests are single-day, so never reach this branch)
    """

    @staticmethod
    def select_leaves(
        member_id: str,
        period: PayPeriod,
        leaves: list[UnpaidLeaveRequest],
    ) -> list[UnpaidLeaveRequest]:
        """Approved unpaid requests of ``member_id`` that touch the period."""
        return [
            leave
            for leave in leaves
            if leave.member_id == member_id
            and leave.status == LeaveStatus.APPROVED
            and not leave.is_paid
            and period.overlaps(leave.start_date, leave.end_date)
        ]

    @staticmethod
    def days_to_deduct(leave: UnpaidLeaveRequest, period: PayPeriod) -> Decimal:
        """Days of ``leave`` chargeable to ``period``."""
        if period.contains(leave.start_date, leave.end_date):
            return leave.total_days

        effective_start = max(leave.start_date, period.period_start)
        effective_end = min(leave.end_date, period.period_end)
        return Decimal(inclusive_calendar_days(effective_start, effective_end))

    def calculate_deductions(
        self,
        member_id: str,
        year: int,
        month: int,
        daily_rate: Decimal,
        leaves: list[UnpaidLeaveRequest],
    ) -> list[DeductionLine]:
        """One deduction line per qualifying leave request."""
        period = PayPeriod(year, month)
        lines: list[DeductionLine] = []

        for leave in self.select_leaves(member_id, period, leaves):
            days = self.days_to_deduct(leave, period)
            line = DeductionLineBuilder.create_leave_line(
                leave,
                effective_start=max(leave.start_date, period.period_start),
                effective_end=min(leave.end_date, period.period_end),
                days=days,
                daily_rate=daily_rate,
            )
            logger.debug(
                "Leave %s for member %s: %s days x %s = %s",
                leave.id,
                member_id,
                days,
                daily_rate,
                line.amount,
            )
            lines.append(line)

        return lines

    def days_in_period(
        self,
        member_id: str,
        year: int,
        month: int,
        leaves: list[UnpaidLeaveRequest],
    ) -> Decimal:
        """Total unpaid days in the period, without line detail."""
        period = PayPeriod(year, month)
        total = Decimal("0")
        for leave in self.select_leaves(member_id, period, leaves):
            total += self.days_to_deduct(leave, period)
        return total

    def has_unpaid_leave(
        self,
        member_id: str,
        year: int,
        month: int,
        leaves: list[UnpaidLeaveRequest],
    ) -> bool:
        """True when any unpaid leave falls in the period."""
        return self.days_in_period(member_id, year, month, leaves) > 0
