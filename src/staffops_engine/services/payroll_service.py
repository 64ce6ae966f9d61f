"""Payroll service - unpaid leave deductions and payroll preview."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from staffops_engine.calculators.dates import PayPeriod
from staffops_engine.calculators.leave_deduction import LeaveDeductionCalculator
from staffops_engine.calculators.payroll_preview import PayrollPreviewBuilder
from staffops_engine.calculators.types import DeductionLine, PayrollPreview, UnpaidLeaveRequest
from staffops_engine.repositories.base import OperationsRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Service for projecting a month's payroll.

    Nothing is persisted; every figure is derived from the repository on
    each call. Per-employee work runs sequentially because the repository
    may share a single session.
    """

    def __init__(self, repository: OperationsRepository):
        self.repository = repository
        self.leave_calculator = LeaveDeductionCalculator()

    async def calculate_unpaid_leave_deductions(
        self,
        member_id: str,
        year: int,
        month: int,
        daily_rate: Decimal,
        tenant_id: str,
    ) -> list[DeductionLine]:
        """Deduction lines for the member's approved unpaid leave in the month."""
        leaves = await self._leaves_in_period(member_id, year, month, tenant_id)
        return self.leave_calculator.calculate_deductions(
            member_id, year, month, daily_rate, leaves
        )

    async def get_unpaid_leave_days_in_period(
        self,
        member_id: str,
        year: int,
        month: int,
        tenant_id: str,
    ) -> Decimal:
        leaves = await self._leaves_in_period(member_id, year, month, tenant_id)
        return self.leave_calculator.days_in_period(member_id, year, month, leaves)

    async def has_unpaid_leave_in_period(
        self,
        member_id: str,
        year: int,
        month: int,
        tenant_id: str,
    ) -> bool:
        leaves = await self._leaves_in_period(member_id, year, month, tenant_id)
        return self.leave_calculator.has_unpaid_leave(member_id, year, month, leaves)

    async def calculate_payroll_preview(
        self,
        year: int,
        month: int,
        period_end: date | None,
        tenant_id: str,
    ) -> PayrollPreview:
        """Preview every active employee's payroll for the month.

        ``period_end`` bounds which loans have started; it defaults to the
        last day of the month.
        """
        period = PayPeriod(year, month)
        loans_cutoff = period_end or period.period_end

        salaries = list(await self.repository.list_active_salary_structures(tenant_id))
        loans = list(await self.repository.list_active_loans(tenant_id, loans_cutoff))
        logger.info(
            "Building payroll preview for tenant %s %04d-%02d: %d employees, %d active loans",
            tenant_id,
            year,
            month,
            len(salaries),
            len(loans),
        )

        async def leave_deductions(
            member_id: str, year: int, month: int, daily_rate: Decimal
        ) -> list[DeductionLine]:
            return await self.calculate_unpaid_leave_deductions(
                member_id, year, month, daily_rate, tenant_id
            )

        builder = PayrollPreviewBuilder(leave_deductions)
        return await builder.build(year, month, salaries, loans)

    async def _leaves_in_period(
        self, member_id: str, year: int, month: int, tenant_id: str
    ) -> list[UnpaidLeaveRequest]:
        period = PayPeriod(year, month)
        return list(
            await self.repository.list_approved_unpaid_leaves(
                tenant_id, member_id, period.period_start, period.period_end
            )
        )
