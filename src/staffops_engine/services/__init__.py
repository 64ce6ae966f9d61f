"""Staffops engine services."""

from staffops_engine.services.asset_lifecycle_service import AssetLifecycleService
from staffops_engine.services.payroll_service import PayrollService

__all__ = [
    "AssetLifecycleService",
    "PayrollService",
]
