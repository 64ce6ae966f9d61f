"""SQLAlchemy implementation of the operations repository."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from staffops_engine.calculators.dates import ensure_utc
from staffops_engine.calculators.types import (
    AssetRecord,
    EmployeeLoan,
    EventAction,
    LeaveStatus,
    LifecycleEvent,
    LoanStatus,
    SalaryStructure,
    UnpaidLeaveRequest,
)
from staffops_engine.models import (
    Asset,
    AssetHistory,
    EmployeeLoan as EmployeeLoanRow,
    LeaveRequest,
    LeaveType,
    Member,
    SalaryStructure as SalaryStructureRow,
)

LIFECYCLE_ACTIONS = (EventAction.ASSIGNED.value, EventAction.UNASSIGNED.value)


class SqlAlchemyOperationsRepository:
    """Reads engine inputs through an ``AsyncSession``.

    Rows are mapped to the calculators' frozen dataclasses so nothing
    downstream holds a live ORM object.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # === Assets ===

    async def get_asset(self, tenant_id: str, asset_id: str) -> AssetRecord | None:
        result = await self.session.execute(
            select(Asset)
            .where(Asset.tenant_id == tenant_id, Asset.asset_id == asset_id)
            .options(selectinload(Asset.assigned_member))
        )
        asset = result.scalar_one_or_none()
        return self._to_asset_record(asset) if asset else None

    async def list_lifecycle_events(
        self, tenant_id: str, asset_id: str
    ) -> list[LifecycleEvent]:
        result = await self.session.execute(
            select(AssetHistory)
            .where(
                AssetHistory.tenant_id == tenant_id,
                AssetHistory.asset_id == asset_id,
                AssetHistory.action.in_(LIFECYCLE_ACTIONS),
            )
            .options(
                selectinload(AssetHistory.to_member),
                selectinload(AssetHistory.from_member),
            )
            .order_by(AssetHistory.created_at.asc())
        )
        return [self._to_event(row) for row in result.scalars().all()]

    async def find_latest_assignment(
        self, tenant_id: str, asset_id: str, member_id: str
    ) -> LifecycleEvent | None:
        result = await self.session.execute(
            select(AssetHistory)
            .where(
                AssetHistory.tenant_id == tenant_id,
                AssetHistory.asset_id == asset_id,
                AssetHistory.action == EventAction.ASSIGNED.value,
                AssetHistory.to_member_id == member_id,
            )
            .options(selectinload(AssetHistory.to_member))
            .order_by(AssetHistory.created_at.desc())
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return self._to_event(row) if row else None

    async def list_assets_for_member(
        self, tenant_id: str, member_id: str
    ) -> list[AssetRecord]:
        touched = select(AssetHistory.asset_id).where(
            AssetHistory.tenant_id == tenant_id,
            AssetHistory.action.in_(LIFECYCLE_ACTIONS),
            or_(
                AssetHistory.to_member_id == member_id,
                AssetHistory.from_member_id == member_id,
            ),
        )
        result = await self.session.execute(
            select(Asset)
            .where(
                Asset.tenant_id == tenant_id,
                or_(Asset.assigned_member_id == member_id, Asset.asset_id.in_(touched)),
            )
            .options(selectinload(Asset.assigned_member))
            .order_by(Asset.created_at.asc())
        )
        return [self._to_asset_record(asset) for asset in result.scalars().all()]

    # === Payroll inputs ===

    async def list_active_salary_structures(self, tenant_id: str) -> list[SalaryStructure]:
        result = await self.session.execute(
            select(SalaryStructureRow)
            .join(Member, Member.member_id == SalaryStructureRow.member_id)
            .where(
                SalaryStructureRow.tenant_id == tenant_id,
                SalaryStructureRow.is_active.is_(True),
                Member.is_employee.is_(True),
            )
            .options(selectinload(SalaryStructureRow.member))
        )
        return [self._to_salary_structure(row) for row in result.scalars().all()]

    async def list_active_loans(
        self, tenant_id: str, started_on_or_before: date
    ) -> list[EmployeeLoan]:
        result = await self.session.execute(
            select(EmployeeLoanRow).where(
                EmployeeLoanRow.tenant_id == tenant_id,
                EmployeeLoanRow.status == LoanStatus.ACTIVE.value,
                EmployeeLoanRow.start_date <= started_on_or_before,
            )
        )
        return [self._to_loan(row) for row in result.scalars().all()]

    async def list_approved_unpaid_leaves(
        self,
        tenant_id: str,
        member_id: str,
        start_date: date,
        end_date: date,
    ) -> list[UnpaidLeaveRequest]:
        result = await self.session.execute(
            select(LeaveRequest)
            .join(LeaveType, LeaveType.leave_type_id == LeaveRequest.leave_type_id)
            .where(
                LeaveRequest.tenant_id == tenant_id,
                LeaveRequest.member_id == member_id,
                LeaveRequest.status == LeaveStatus.APPROVED.value,
                LeaveType.is_paid.is_(False),
                LeaveRequest.start_date <= end_date,
                LeaveRequest.end_date >= start_date,
            )
            .options(selectinload(LeaveRequest.leave_type))
            .order_by(LeaveRequest.start_date.asc())
        )
        return [self._to_leave(row) for row in result.scalars().all()]

    # === Row mapping ===

    @staticmethod
    def _to_asset_record(asset: Asset) -> AssetRecord:
        return AssetRecord(
            asset_id=asset.asset_id,
            tenant_id=asset.tenant_id,
            created_at=ensure_utc(asset.created_at),
            asset_tag=asset.asset_tag,
            model=asset.model,
            purchase_date=asset.purchase_date,
            assigned_member_id=asset.assigned_member_id,
            assigned_member_name=asset.assigned_member.name if asset.assigned_member else None,
        )

    @staticmethod
    def _to_event(row: AssetHistory) -> LifecycleEvent:
        if row.action == EventAction.ASSIGNED.value:
            counterparty = row.to_member
            counterparty_id = row.to_member_id
            effective_date = row.assignment_date
        else:
            counterparty = row.from_member
            counterparty_id = row.from_member_id
            effective_date = row.return_date

        return LifecycleEvent(
            subject_id=row.asset_id,
            action=EventAction(row.action),
            counterparty_id=counterparty_id,
            recorded_date=ensure_utc(row.created_at),
            effective_date=ensure_utc(effective_date) if effective_date else None,
            counterparty_name=counterparty.name if counterparty else None,
            notes=row.notes,
        )

    @staticmethod
    def _to_salary_structure(row: SalaryStructureRow) -> SalaryStructure:
        return SalaryStructure(
            member_id=row.member_id,
            member_name=row.member.name,
            basic_salary=Decimal(row.basic_salary),
            housing_allowance=Decimal(row.housing_allowance),
            transport_allowance=Decimal(row.transport_allowance),
            food_allowance=Decimal(row.food_allowance),
            phone_allowance=Decimal(row.phone_allowance),
            other_allowances=Decimal(row.other_allowances),
            employee_code=row.member.employee_code,
            designation=row.member.designation,
        )

    @staticmethod
    def _to_loan(row: EmployeeLoanRow) -> EmployeeLoan:
        return EmployeeLoan(
            id=row.loan_id,
            member_id=row.member_id,
            loan_number=row.loan_number,
            loan_type=row.loan_type,
            status=LoanStatus(row.status),
            monthly_deduction=Decimal(row.monthly_deduction),
            remaining_amount=Decimal(row.remaining_amount),
            start_date=row.start_date,
            total_paid=Decimal(row.total_paid),
            installments_paid=row.installments_paid,
            description=row.description,
        )

    @staticmethod
    def _to_leave(row: LeaveRequest) -> UnpaidLeaveRequest:
        return UnpaidLeaveRequest(
            id=row.leave_request_id,
            member_id=row.member_id,
            status=LeaveStatus(row.status),
            leave_type_id=row.leave_type_id,
            is_paid=row.leave_type.is_paid,
            start_date=row.start_date,
            end_date=row.end_date,
            total_days=Decimal(row.total_days),
            leave_type_name=row.leave_type.name,
            request_number=row.request_number,
        )
