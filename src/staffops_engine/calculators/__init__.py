"""Period reconstruction and payroll deduction calculators."""

from staffops_engine.calculators.interval_merge import merge_periods
from staffops_engine.calculators.leave_deduction import LeaveDeductionCalculator
from staffops_engine.calculators.line_builder import DeductionLineBuilder
from staffops_engine.calculators.payroll_preview import PayrollPreviewBuilder
from staffops_engine.calculators.period_reconstructor import PeriodReconstructor
from staffops_engine.calculators.utilization import calculate_utilization

__all__ = [
    "merge_periods",
    "LeaveDeductionCalculator",
    "DeductionLineBuilder",
    "PayrollPreviewBuilder",
    "PeriodReconstructor",
    "calculate_utilization",
]
