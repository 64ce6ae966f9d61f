"""Rebuild assignment periods from an append-only history log."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from staffops_engine.calculators.dates import days_between, ensure_utc
from staffops_engine.calculators.interval_merge import merge_periods
from staffops_engine.calculators.types import (
    EventAction,
    LifecycleEvent,
    Period,
    PeriodAnomaly,
)
from staffops_engine.clock import Clock

logger = logging.getLogger(__name__)


@dataclass
class OpenAssignment:
    """An assignment that has started but not yet been closed."""

    owner_id: str
    owner_name: str | None
    start_date: datetime
    notes: tuple[str, ...] = ()


@dataclass
class ReplayState:
    """Result of replaying the log, before the current owner is applied."""

    subject_id: str
    closed: list[Period] = field(default_factory=list)
    open_assignment: OpenAssignment | None = None


class PeriodReconstructor:
    """Derives non-overlapping ownership periods for one subject.

    Replay order is the log's ``recorded_date``; period boundaries use each
    event's ``effective_date`` when present. A malformed log never raises:
    the result degrades to estimated or auto-closed periods tagged with
    ``PeriodAnomaly`` values.

    Steps:
    1) Keep ASSIGNED/UNASSIGNED events, ordered by recorded_date
    2) Replay start/stop pairs into closed periods
    3) Apply the subject's current owner (open period or fallback)
    4) Merge overlapping periods per owner
    """

    def __init__(self, clock: Clock):
        self.clock = clock

    def reconstruct(
        self,
        subject_id: str,
        events: list[LifecycleEvent],
        current_owner_id: str | None,
        subject_created_at: datetime,
        current_owner_name: str | None = None,
    ) -> list[Period]:
        """Reconstruct periods using only the supplied log.

        The latest-assignment fallback searches ``events`` itself. Callers
        backed by a store should use ``replay`` + ``finalize`` and look the
        fallback event up there instead.
        """
        state = self.replay(subject_id, events)

        fallback_event = None
        if current_owner_id is not None and state.open_assignment is None:
            fallback_event = self.latest_assignment_in_log(events, current_owner_id)

        return self.finalize(
            state,
            current_owner_id=current_owner_id,
            subject_created_at=subject_created_at,
            fallback_event=fallback_event,
            current_owner_name=current_owner_name,
        )

    def replay(self, subject_id: str, events: list[LifecycleEvent]) -> ReplayState:
        """Walk the log in recorded order and collect closed periods."""
        state = ReplayState(subject_id=subject_id)

        for event in self._ordered(events):
            if event.action == EventAction.ASSIGNED and event.counterparty_id:
                self._start(state, event)
            elif event.action == EventAction.UNASSIGNED:
                self._stop(state, event)

        return state

    def finalize(
        self,
        state: ReplayState,
        current_owner_id: str | None,
        subject_created_at: datetime,
        fallback_event: LifecycleEvent | None = None,
        current_owner_name: str | None = None,
    ) -> list[Period]:
        """Apply the current owner and merge.

        ``fallback_event`` is the most recent ASSIGNED event for the current
        owner; it is only consulted when replay left no open assignment.
        """
        now = self.clock.now()
        periods = list(state.closed)

        if current_owner_id is not None:
            periods.append(
                self._current_period(
                    state,
                    current_owner_id,
                    current_owner_name,
                    ensure_utc(subject_created_at),
                    fallback_event,
                    now,
                )
            )
        elif state.open_assignment is not None:
            logger.warning(
                "Subject %s has an open assignment to %s in its history "
                "but no current owner; dropping the open period",
                state.subject_id,
                state.open_assignment.owner_id,
            )

        return merge_periods(periods, now)

    @staticmethod
    def latest_assignment_in_log(
        events: list[LifecycleEvent], owner_id: str
    ) -> LifecycleEvent | None:
        """Most recently recorded ASSIGNED event for ``owner_id``."""
        matches = [
            e
            for e in events
            if e.action == EventAction.ASSIGNED and e.counterparty_id == owner_id
        ]
        if not matches:
            return None
        return max(matches, key=lambda e: ensure_utc(e.recorded_date))

    # === Replay steps ===

    @staticmethod
    def _ordered(events: list[LifecycleEvent]) -> list[LifecycleEvent]:
        relevant = [
            e for e in events if e.action in (EventAction.ASSIGNED, EventAction.UNASSIGNED)
        ]
        # sorted() is stable: entries logged at the same instant keep log order
        return sorted(relevant, key=lambda e: ensure_utc(e.recorded_date))

    def _start(self, state: ReplayState, event: LifecycleEvent) -> None:
        if state.open_assignment is not None:
            # Two starts without a stop: close the first at the reassignment
            opened = state.open_assignment
            end_date = self._not_before_start(
                state, opened, ensure_utc(event.recorded_date)
            )
            logger.warning(
                "Subject %s reassigned to %s while assigned to %s; auto-closing",
                state.subject_id,
                event.counterparty_id,
                opened.owner_id,
            )
            state.closed.append(
                Period(
                    owner_id=opened.owner_id,
                    subject_id=state.subject_id,
                    start_date=opened.start_date,
                    end_date=end_date,
                    days=days_between(opened.start_date, end_date),
                    owner_name=opened.owner_name,
                    notes=opened.notes,
                    anomalies=(PeriodAnomaly.AUTO_CLOSED_REASSIGNED,),
                )
            )

        state.open_assignment = OpenAssignment(
            owner_id=event.counterparty_id,
            owner_name=event.counterparty_name,
            start_date=ensure_utc(event.boundary_date),
            notes=(event.notes,) if event.notes else (),
        )

    def _stop(self, state: ReplayState, event: LifecycleEvent) -> None:
        opened = state.open_assignment
        if opened is None:
            logger.debug(
                "Ignoring UNASSIGNED for subject %s with no open assignment",
                state.subject_id,
            )
            return

        end_date = self._not_before_start(state, opened, ensure_utc(event.boundary_date))
        state.closed.append(
            Period(
                owner_id=opened.owner_id,
                subject_id=state.subject_id,
                start_date=opened.start_date,
                end_date=end_date,
                days=days_between(opened.start_date, end_date),
                owner_name=opened.owner_name,
                notes=opened.notes,
            )
        )
        state.open_assignment = None

    @staticmethod
    def _not_before_start(
        state: ReplayState, opened: OpenAssignment, end_date: datetime
    ) -> datetime:
        """Pin an end that precedes its period's start to a zero-day span."""
        if end_date >= opened.start_date:
            return end_date
        logger.warning(
            "Subject %s: period for %s ends %s before it starts %s; closing at start",
            state.subject_id,
            opened.owner_id,
            end_date.isoformat(),
            opened.start_date.isoformat(),
        )
        return opened.start_date

    # === Current owner ===

    def _current_period(
        self,
        state: ReplayState,
        owner_id: str,
        owner_name: str | None,
        subject_created_at: datetime,
        fallback_event: LifecycleEvent | None,
        now: datetime,
    ) -> Period:
        opened = state.open_assignment

        if opened is not None:
            if opened.owner_id != owner_id:
                logger.warning(
                    "Subject %s: history shows %s as holder but current owner is %s",
                    state.subject_id,
                    opened.owner_id,
                    owner_id,
                )
            return Period(
                owner_id=owner_id,
                subject_id=state.subject_id,
                start_date=opened.start_date,
                end_date=None,
                days=days_between(opened.start_date, now),
                owner_name=owner_name or opened.owner_name,
                notes=opened.notes,
            )

        if fallback_event is not None:
            start_date = ensure_utc(fallback_event.boundary_date)
            logger.warning(
                "Subject %s: no open assignment in replay for current owner %s; "
                "using latest assignment recorded %s",
                state.subject_id,
                owner_id,
                fallback_event.recorded_date.isoformat(),
            )
            return Period(
                owner_id=owner_id,
                subject_id=state.subject_id,
                start_date=start_date,
                end_date=None,
                days=days_between(start_date, now),
                owner_name=owner_name or fallback_event.counterparty_name,
                notes=(fallback_event.notes,) if fallback_event.notes else (),
            )

        logger.warning(
            "Subject %s is assigned to %s but has no assignment history; "
            "estimating start from creation date",
            state.subject_id,
            owner_id,
        )
        return Period(
            owner_id=owner_id,
            subject_id=state.subject_id,
            start_date=subject_created_at,
            end_date=None,
            days=days_between(subject_created_at, now),
            owner_name=owner_name,
            anomalies=(PeriodAnomaly.ESTIMATED_NO_HISTORY,),
        )
