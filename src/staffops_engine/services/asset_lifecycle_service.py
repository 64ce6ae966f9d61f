"""Asset lifecycle service - assignment periods, utilization and member history."""

from __future__ import annotations

import logging

from staffops_engine.calculators.dates import start_of_day
from staffops_engine.calculators.period_reconstructor import PeriodReconstructor
from staffops_engine.calculators.types import (
    AssetRecord,
    MemberAssetHistory,
    Period,
    UtilizationResult,
)
from staffops_engine.calculators.utilization import calculate_utilization
from staffops_engine.clock import Clock, SystemClock
from staffops_engine.repositories.base import OperationsRepository, SubjectNotFoundError

logger = logging.getLogger(__name__)


class AssetLifecycleService:
    """Service for deriving asset assignment history.

    Operations:
    - reconstruct_periods: Rebuild who held an asset and when
    - compute_utilization: Share of the asset's lifetime spent assigned
    - get_member_asset_history: Every asset a member has held
    """

    def __init__(self, repository: OperationsRepository, clock: Clock | None = None):
        self.repository = repository
        self.clock = clock or SystemClock()
        self.reconstructor = PeriodReconstructor(self.clock)

    async def reconstruct_periods(self, subject_id: str, tenant_id: str) -> list[Period]:
        """Assignment periods for one asset.

        Raises SubjectNotFoundError if the asset is not in the tenant.
        """
        asset = await self._get_asset(subject_id, tenant_id)
        return await self._periods_for(asset)

    async def compute_utilization(self, subject_id: str, tenant_id: str) -> UtilizationResult:
        """Utilization since purchase (or creation when no purchase date).

        Raises SubjectNotFoundError if the asset is not in the tenant.
        """
        asset = await self._get_asset(subject_id, tenant_id)
        periods = await self._periods_for(asset)

        if asset.purchase_date is not None:
            birth_date = start_of_day(asset.purchase_date)
        else:
            birth_date = asset.created_at

        return calculate_utilization(
            birth_date, periods, self.clock.now(), subject_id=asset.asset_id
        )

    async def get_member_asset_history(
        self, member_id: str, tenant_id: str
    ) -> list[MemberAssetHistory]:
        """Assets the member holds or has held, currently assigned first."""
        assets = await self.repository.list_assets_for_member(tenant_id, member_id)

        history: list[MemberAssetHistory] = []
        for asset in assets:
            periods = await self._periods_for(asset)
            member_periods = [p for p in periods if p.owner_id == member_id]
            current = next((p for p in member_periods if p.is_open), None)

            history.append(
                MemberAssetHistory(
                    asset_id=asset.asset_id,
                    asset_tag=asset.asset_tag,
                    periods=member_periods,
                    total_days=sum(p.days for p in member_periods),
                    current_period=current,
                )
            )

        # Stable: relative order within each group is preserved
        history.sort(key=lambda h: not h.is_currently_assigned)
        return history

    # === Helpers ===

    async def _get_asset(self, asset_id: str, tenant_id: str) -> AssetRecord:
        asset = await self.repository.get_asset(tenant_id, asset_id)
        if asset is None:
            raise SubjectNotFoundError(asset_id, tenant_id)
        return asset

    async def _periods_for(self, asset: AssetRecord) -> list[Period]:
        events = list(
            await self.repository.list_lifecycle_events(asset.tenant_id, asset.asset_id)
        )
        state = self.reconstructor.replay(asset.asset_id, events)

        fallback_event = None
        if asset.assigned_member_id is not None and state.open_assignment is None:
            fallback_event = await self.repository.find_latest_assignment(
                asset.tenant_id, asset.asset_id, asset.assigned_member_id
            )
            logger.debug(
                "Asset %s: fallback lookup for %s found %s",
                asset.asset_id,
                asset.assigned_member_id,
                "an assignment" if fallback_event else "nothing",
            )

        return self.reconstructor.finalize(
            state,
            current_owner_id=asset.assigned_member_id,
            subject_created_at=asset.created_at,
            fallback_event=fallback_event,
            current_owner_name=asset.assigned_member_name,
        )
