"""Leave, salary structure and loan models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staffops_engine.models.base import Base, TimestampMixin, new_id
from staffops_engine.models.organization import Member


class LeaveType(Base, TimestampMixin):
    """Leave category; unpaid types drive payroll deductions."""

    __tablename__ = "leave_type"

    leave_type_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenant.tenant_id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="leave_type_tenant_name_unique"),
    )


class LeaveRequest(Base, TimestampMixin):
    """Leave request; total_days supports half days (0.5)."""

    __tablename__ = "leave_request"

    leave_request_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenant.tenant_id", ondelete="CASCADE"),
        nullable=False,
    )
    member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member.member_id", ondelete="CASCADE"),
        nullable=False,
    )
    leave_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("leave_type.leave_type_id"),
        nullable=False,
    )
    request_number: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="PENDING")
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_days: Mapped[Decimal] = mapped_column(Numeric(6, 1), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED', 'CANCELLED')",
            name="leave_request_status_check",
        ),
        CheckConstraint("end_date >= start_date", name="leave_request_dates_check"),
    )

    # Relationships
    leave_type: Mapped[LeaveType] = relationship()
    member: Mapped[Member] = relationship()


class SalaryStructure(Base, TimestampMixin):
    """Monthly salary components for a member."""

    __tablename__ = "salary_structure"

    salary_structure_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_id
    )
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenant.tenant_id", ondelete="CASCADE"),
        nullable=False,
    )
    member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member.member_id", ondelete="CASCADE"),
        nullable=False,
    )
    basic_salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    housing_allowance: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    transport_allowance: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    food_allowance: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    phone_allowance: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    other_allowances: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    member: Mapped[Member] = relationship(back_populates="salary_structures")


class EmployeeLoan(Base, TimestampMixin):
    """Loan or advance repaid by monthly salary deduction."""

    __tablename__ = "employee_loan"

    loan_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenant.tenant_id", ondelete="CASCADE"),
        nullable=False,
    )
    member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member.member_id", ondelete="CASCADE"),
        nullable=False,
    )
    loan_number: Mapped[str] = mapped_column(String, nullable=False)
    loan_type: Mapped[str] = mapped_column(String, nullable=False, default="LOAN")
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="ACTIVE")
    monthly_deduction: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    remaining_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_paid: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    installments_paid: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        UniqueConstraint("tenant_id", "loan_number", name="employee_loan_tenant_number_unique"),
        CheckConstraint(
            "status IN ('ACTIVE', 'PAUSED', 'COMPLETED', 'WRITTEN_OFF')",
            name="employee_loan_status_check",
        ),
        CheckConstraint("remaining_amount >= 0", name="employee_loan_remaining_check"),
    )
