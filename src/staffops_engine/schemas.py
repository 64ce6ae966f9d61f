"""Pydantic schemas for handing engine results to a presentation layer."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, computed_field

from staffops_engine.calculators.types import PeriodAnomaly


# ============================================================================
# Asset lifecycle schemas
# ============================================================================


class PeriodSchema(BaseModel):
    """Schema for one assignment period."""

    model_config = ConfigDict(from_attributes=True)

    owner_id: str
    owner_name: str | None = None
    subject_id: str
    start_date: datetime
    end_date: datetime | None = None
    days: int
    notes: list[str] = []
    anomalies: list[PeriodAnomaly] = []

    @computed_field  # type: ignore[misc]
    @property
    def description(self) -> str | None:
        """Notes and anomaly tags as one display string."""
        parts = list(self.notes) + [a.value for a in self.anomalies]
        return "; ".join(parts) if parts else None


class UtilizationSchema(BaseModel):
    """Schema for asset utilization."""

    model_config = ConfigDict(from_attributes=True)

    total_owned_days: int
    total_assigned_days: int
    utilization_percentage: Decimal
    exceeds_ownership: bool
    periods: list[PeriodSchema] = []


class MemberAssetHistorySchema(BaseModel):
    """Schema for one asset in a member's history."""

    model_config = ConfigDict(from_attributes=True)

    asset_id: str
    asset_tag: str | None = None
    periods: list[PeriodSchema]
    total_days: int
    current_period: PeriodSchema | None = None
    is_currently_assigned: bool


# ============================================================================
# Payroll schemas
# ============================================================================


class DeductionLineSchema(BaseModel):
    """Schema for an unpaid-leave deduction line."""

    model_config = ConfigDict(from_attributes=True)

    source_id: str
    label: str
    request_number: str | None = None
    leave_type_name: str | None = None
    effective_start: date
    effective_end: date
    days_deducted: Decimal
    daily_rate: Decimal
    amount: Decimal


class LoanDeductionSchema(BaseModel):
    """Schema for a loan installment."""

    model_config = ConfigDict(from_attributes=True)

    loan_id: str
    loan_number: str
    label: str
    monthly_deduction: Decimal
    remaining_amount: Decimal
    amount: Decimal


class EmployeePayrollLineSchema(BaseModel):
    """Schema for one employee in a payroll preview."""

    model_config = ConfigDict(from_attributes=True)

    member_id: str
    member_name: str
    employee_code: str | None = None
    designation: str | None = None
    basic_salary: Decimal
    housing_allowance: Decimal
    transport_allowance: Decimal
    food_allowance: Decimal
    phone_allowance: Decimal
    other_allowances: Decimal
    gross_salary: Decimal
    daily_rate: Decimal
    loan_deductions: list[LoanDeductionSchema] = []
    leave_deductions: list[DeductionLineSchema] = []
    total_loan_deductions: Decimal
    total_leave_deductions: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    errors: list[str] = []


class PayrollPreviewSchema(BaseModel):
    """Schema for a payroll preview."""

    model_config = ConfigDict(from_attributes=True)

    year: int
    month: int
    period_start: date
    period_end: date
    employees: list[EmployeePayrollLineSchema]
    total_employees: int
    total_gross: Decimal
    total_loan_deductions: Decimal
    total_leave_deductions: Decimal
    total_deductions: Decimal
    total_net: Decimal

    @computed_field  # type: ignore[misc]
    @property
    def has_errors(self) -> bool:
        return any(e.errors for e in self.employees)
