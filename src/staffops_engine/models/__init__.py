"""SQLAlchemy ORM models."""

from staffops_engine.models.assets import Asset, AssetHistory
from staffops_engine.models.base import Base, TimestampMixin
from staffops_engine.models.hr import EmployeeLoan, LeaveRequest, LeaveType, SalaryStructure
from staffops_engine.models.organization import Member, Tenant

__all__ = [
    "Asset",
    "AssetHistory",
    "Base",
    "EmployeeLoan",
    "LeaveRequest",
    "LeaveType",
    "Member",
    "SalaryStructure",
    "Tenant",
    "TimestampMixin",
]
