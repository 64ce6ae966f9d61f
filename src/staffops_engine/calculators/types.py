"""Type definitions for the period and payroll pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class EventAction(str, Enum):
    """Asset history actions that drive assignment periods."""

    ASSIGNED = "ASSIGNED"
    UNASSIGNED = "UNASSIGNED"


class PeriodAnomaly(str, Enum):
    """Data-quality tags attached to derived periods."""

    AUTO_CLOSED_REASSIGNED = "auto-closed: reassigned"
    ESTIMATED_NO_HISTORY = "estimated: no history record"
    START_DATE_ADJUSTED = "start date adjusted"


class LeaveStatus(str, Enum):
    """Leave request status values."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class LoanStatus(str, Enum):
    """Employee loan status values."""

    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    WRITTEN_OFF = "WRITTEN_OFF"


@dataclass(frozen=True)
class LifecycleEvent:
    """One immutable entry of a subject's history log.

    ``effective_date`` is the business date (assignment or return date) and
    may be missing; ``recorded_date`` is when the entry was logged.
    """

    subject_id: str
    action: EventAction
    counterparty_id: str | None
    recorded_date: datetime
    effective_date: datetime | None = None
    counterparty_name: str | None = None
    notes: str | None = None

    @property
    def boundary_date(self) -> datetime:
        """Date used for period boundaries."""
        return self.effective_date or self.recorded_date


@dataclass(frozen=True)
class Period:
    """A derived, continuous span of one owner holding one subject."""

    owner_id: str
    subject_id: str
    start_date: datetime
    end_date: datetime | None  # None = open (ongoing)
    days: int
    owner_name: str | None = None
    notes: tuple[str, ...] = ()
    anomalies: tuple[PeriodAnomaly, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.end_date is None

    def describe_notes(self) -> str | None:
        """Render notes and anomaly tags as one human-readable string."""
        parts = list(self.notes) + [a.value for a in self.anomalies]
        return "; ".join(parts) if parts else None


@dataclass(frozen=True)
class AssetRecord:
    """The subject side of assignment tracking."""

    asset_id: str
    tenant_id: str
    created_at: datetime
    asset_tag: str | None = None
    model: str | None = None
    purchase_date: date | None = None
    assigned_member_id: str | None = None
    assigned_member_name: str | None = None


@dataclass(frozen=True)
class UtilizationResult:
    """Utilization metrics for one subject."""

    total_owned_days: int
    total_assigned_days: int
    utilization_percentage: Decimal  # clamped to [0, 100], 2 decimals
    raw_utilization: Decimal
    periods: list[Period] = field(default_factory=list)

    @property
    def exceeds_ownership(self) -> bool:
        return self.raw_utilization > Decimal("100")


@dataclass(frozen=True)
class MemberAssetHistory:
    """One asset a member has held, with that member's periods only."""

    asset_id: str
    asset_tag: str | None
    periods: list[Period]
    total_days: int
    current_period: Period | None

    @property
    def is_currently_assigned(self) -> bool:
        return self.current_period is not None


@dataclass(frozen=True)
class UnpaidLeaveRequest:
    """Leave request as seen by the deduction calculator."""

    id: str
    member_id: str
    status: LeaveStatus
    leave_type_id: str
    is_paid: bool
    start_date: date
    end_date: date
    total_days: Decimal  # 0.5 for half-day requests
    leave_type_name: str = "Unpaid Leave"
    request_number: str | None = None


@dataclass(frozen=True)
class DeductionLine:
    """Unpaid-leave deduction for one request within one pay period."""

    source_id: str
    label: str
    effective_start: date
    effective_end: date
    days_deducted: Decimal
    daily_rate: Decimal
    amount: Decimal
    request_number: str | None = None
    leave_type_name: str | None = None


@dataclass(frozen=True)
class SalaryStructure:
    """Active monthly salary components for one member."""

    member_id: str
    member_name: str | None
    basic_salary: Decimal
    housing_allowance: Decimal = Decimal("0")
    transport_allowance: Decimal = Decimal("0")
    food_allowance: Decimal = Decimal("0")
    phone_allowance: Decimal = Decimal("0")
    other_allowances: Decimal = Decimal("0")
    employee_code: str | None = None
    designation: str | None = None

    @property
    def gross_salary(self) -> Decimal:
        return (
            self.basic_salary
            + self.housing_allowance
            + self.transport_allowance
            + self.food_allowance
            + self.phone_allowance
            + self.other_allowances
        )


@dataclass(frozen=True)
class EmployeeLoan:
    """Loan or salary advance repaid through payroll."""

    id: str
    member_id: str
    loan_number: str
    loan_type: str
    status: LoanStatus
    monthly_deduction: Decimal
    remaining_amount: Decimal
    start_date: date
    total_paid: Decimal = Decimal("0")
    installments_paid: int = 0
    description: str | None = None


@dataclass(frozen=True)
class LoanDeduction:
    """Installment taken from one loan in one pay period."""

    loan_id: str
    loan_number: str
    label: str
    monthly_deduction: Decimal
    remaining_amount: Decimal
    amount: Decimal


@dataclass
class EmployeePayrollLine:
    """Projected payroll figures for one employee."""

    member_id: str
    member_name: str
    employee_code: str | None
    designation: str | None
    basic_salary: Decimal
    housing_allowance: Decimal
    transport_allowance: Decimal
    food_allowance: Decimal
    phone_allowance: Decimal
    other_allowances: Decimal
    gross_salary: Decimal
    daily_rate: Decimal
    loan_deductions: list[LoanDeduction] = field(default_factory=list)
    leave_deductions: list[DeductionLine] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def total_loan_deductions(self) -> Decimal:
        return sum((d.amount for d in self.loan_deductions), Decimal("0"))

    @property
    def total_leave_deductions(self) -> Decimal:
        return sum((d.amount for d in self.leave_deductions), Decimal("0"))

    @property
    def total_deductions(self) -> Decimal:
        return self.total_loan_deductions + self.total_leave_deductions

    @property
    def net_salary(self) -> Decimal:
        return self.gross_salary - self.total_deductions


@dataclass
class PayrollPreview:
    """Projection of a full payroll run for one tenant and month."""

    year: int
    month: int
    period_start: date
    period_end: date
    employees: list[EmployeePayrollLine] = field(default_factory=list)

    @property
    def total_employees(self) -> int:
        return len(self.employees)

    @property
    def total_gross(self) -> Decimal:
        return sum((e.gross_salary for e in self.employees), Decimal("0"))

    @property
    def total_loan_deductions(self) -> Decimal:
        return sum((e.total_loan_deductions for e in self.employees), Decimal("0"))

    @property
    def total_leave_deductions(self) -> Decimal:
        return sum((e.total_leave_deductions for e in self.employees), Decimal("0"))

    @property
    def total_deductions(self) -> Decimal:
        return self.total_loan_deductions + self.total_leave_deductions

    @property
    def total_net(self) -> Decimal:
        return self.total_gross - self.total_deductions
