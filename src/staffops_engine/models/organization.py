"""Tenant and member models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staffops_engine.models.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from staffops_engine.models.hr import SalaryStructure


class Tenant(Base, TimestampMixin):
    """Multi-tenant container (organization)."""

    __tablename__ = "tenant"

    tenant_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")

    __table_args__ = (
        CheckConstraint("status IN ('active', 'suspended', 'closed')", name="tenant_status_check"),
    )

    # Relationships
    members: Mapped[list[Member]] = relationship(back_populates="tenant")


class Member(Base, TimestampMixin):
    """Person belonging to a tenant; employees are members with is_employee set."""

    __tablename__ = "member"

    member_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenant.tenant_id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    email: Mapped[str] = mapped_column(String, nullable=False)
    is_employee: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    employee_code: Mapped[str | None] = mapped_column(String, nullable=True)
    designation: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="member_tenant_email_unique"),
    )

    # Relationships
    tenant: Mapped[Tenant] = relationship(back_populates="members")
    salary_structures: Mapped[list[SalaryStructure]] = relationship(back_populates="member")
