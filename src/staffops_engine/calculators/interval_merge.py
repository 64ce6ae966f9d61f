"""Merge overlapping or adjacent periods held by the same owner."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from staffops_engine.calculators.dates import days_between
from staffops_engine.calculators.types import Period


def _later_end(a: datetime | None, b: datetime | None) -> datetime | None:
    """Later of two end dates; None (open) is greater than any date."""
    if a is None or b is None:
        return None
    return max(a, b)


def _union(first: tuple, second: tuple) -> tuple:
    """Concatenate keeping first-seen order and dropping duplicates."""
    return tuple(dict.fromkeys(first + second))


def merge_periods(periods: list[Period], now: datetime) -> list[Period]:
    """Collapse overlapping and adjacent periods per (owner, subject).

    Within a group periods are walked in start order. A period starting on
    or before the running period's end (``now`` when open) is folded into
    it. Input periods are not modified, so merging is idempotent.

    Groups are emitted in first-seen order; each group is chronological
    and non-overlapping.
    """
    if not periods:
        return []

    groups: dict[tuple[str, str], list[Period]] = {}
    for period in periods:
        groups.setdefault((period.owner_id, period.subject_id), []).append(period)

    merged: list[Period] = []

    for group in groups.values():
        ordered = sorted(group, key=lambda p: p.start_date)
        current = ordered[0]

        for nxt in ordered[1:]:
            current_end = current.end_date or now

            if nxt.start_date <= current_end:
                end_date = _later_end(current.end_date, nxt.end_date)
                current = replace(
                    current,
                    end_date=end_date,
                    days=days_between(current.start_date, end_date or now),
                    owner_name=current.owner_name or nxt.owner_name,
                    notes=_union(current.notes, nxt.notes),
                    anomalies=_union(current.anomalies, nxt.anomalies),
                )
            else:
                merged.append(current)
                current = nxt

        merged.append(current)

    return merged
