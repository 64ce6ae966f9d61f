"""Repository protocol consumed by the services.

Every query is scoped by ``tenant_id``; implementations must never return
rows belonging to another tenant.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from staffops_engine.calculators.types import (
    AssetRecord,
    EmployeeLoan,
    LifecycleEvent,
    SalaryStructure,
    UnpaidLeaveRequest,
)


class SubjectNotFoundError(LookupError):
    """Raised when a subject does not exist within the tenant scope."""

    def __init__(self, subject_id: str, tenant_id: str, kind: str = "Asset"):
        self.subject_id = subject_id
        self.tenant_id = tenant_id
        self.kind = kind
        super().__init__(f"{kind} {subject_id} not found in tenant {tenant_id}")


class OperationsRepository(Protocol):
    async def get_asset(self, tenant_id: str, asset_id: str) -> AssetRecord | None:
        raise NotImplementedError

    async def list_lifecycle_events(
        self, tenant_id: str, asset_id: str
    ) -> Sequence[LifecycleEvent]:
        """ASSIGNED/UNASSIGNED entries, oldest recorded first."""

        raise NotImplementedError

    async def find_latest_assignment(
        self, tenant_id: str, asset_id: str, member_id: str
    ) -> LifecycleEvent | None:
        raise NotImplementedError

    async def list_assets_for_member(
        self, tenant_id: str, member_id: str
    ) -> Sequence[AssetRecord]:
        """Assets currently held by, or ever assigned to/from, the member."""

        raise NotImplementedError

    async def list_active_salary_structures(
        self, tenant_id: str
    ) -> Sequence[SalaryStructure]:
        raise NotImplementedError

    async def list_active_loans(
        self, tenant_id: str, started_on_or_before: date
    ) -> Sequence[EmployeeLoan]:
        raise NotImplementedError

    async def list_approved_unpaid_leaves(
        self,
        tenant_id: str,
        member_id: str,
        start_date: date,
        end_date: date,
    ) -> Sequence[UnpaidLeaveRequest]:
        """Approved unpaid-type requests overlapping ``[start_date, end_date]``."""

        raise NotImplementedError
