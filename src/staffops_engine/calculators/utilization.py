"""Utilization metrics derived from assignment periods."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from staffops_engine.calculators.dates import days_between, ensure_utc
from staffops_engine.calculators.types import Period, PeriodAnomaly, UtilizationResult

logger = logging.getLogger(__name__)

PERCENT_PRECISION = Decimal("0.01")
FULL_UTILIZATION = Decimal("100")


def clamp_to_birth(periods: list[Period], birth_date: datetime, now: datetime) -> list[Period]:
    """Raise period starts that precede the subject's existence.

    A period that ended on or before birth collapses to a zero-day span at
    the birth date.
    """
    clamped: list[Period] = []
    for period in periods:
        if period.start_date < birth_date:
            end_date = period.end_date
            if end_date is not None and end_date <= birth_date:
                logger.warning(
                    "Subject %s: period for %s ended %s, before the subject existed",
                    period.subject_id,
                    period.owner_id,
                    end_date.isoformat(),
                )
                end_date = birth_date
            period = replace(
                period,
                start_date=birth_date,
                end_date=end_date,
                days=days_between(birth_date, end_date or now),
                anomalies=period.anomalies + (PeriodAnomaly.START_DATE_ADJUSTED,),
            )
        clamped.append(period)
    return clamped


def calculate_utilization(
    birth_date: datetime,
    periods: list[Period],
    now: datetime,
    subject_id: str | None = None,
) -> UtilizationResult:
    """Share of the subject's lifetime spent assigned, in percent.

    ``birth_date`` is the purchase date when known, else the creation
    timestamp. The displayed percentage is capped at 100; a raw ratio above
    that means overlapping assignments and is logged, not raised.
    """
    birth_date = ensure_utc(birth_date)
    total_owned_days = days_between(birth_date, now)

    validated = clamp_to_birth(periods, birth_date, now)
    total_assigned_days = sum(p.days for p in validated)

    if total_owned_days > 0:
        raw = Decimal(total_assigned_days) / Decimal(total_owned_days) * FULL_UTILIZATION
    else:
        raw = Decimal("0")

    if raw > FULL_UTILIZATION:
        logger.warning(
            "Subject %s utilization exceeds 100%%: %s%% (%d assigned / %d owned days); "
            "check for overlapping assignments",
            subject_id,
            raw.quantize(PERCENT_PRECISION, rounding=ROUND_HALF_UP),
            total_assigned_days,
            total_owned_days,
        )

    percentage = min(raw, FULL_UTILIZATION).quantize(PERCENT_PRECISION, rounding=ROUND_HALF_UP)

    return UtilizationResult(
        total_owned_days=total_owned_days,
        total_assigned_days=total_assigned_days,
        utilization_percentage=percentage,
        raw_utilization=raw,
        periods=validated,
    )
