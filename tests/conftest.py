"""Pytest fixtures for staffops engine tests."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from staffops_engine.calculators.types import (
    AssetRecord,
    EventAction,
    LeaveStatus,
    LifecycleEvent,
    UnpaidLeaveRequest,
)
from staffops_engine.clock import FixedClock
from staffops_engine.models import Base
from tests.fakes import InMemoryOperationsRepository

# Use in-memory SQLite for tests (with async support)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TENANT_ID = "tenant-1"
NOW = datetime(2024, 9, 1, tzinfo=timezone.utc)


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    """Timezone-aware UTC datetime."""
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def assigned(
    member_id: str,
    effective: datetime | None,
    recorded: datetime | None = None,
    subject_id: str = "asset-1",
    name: str | None = None,
    notes: str | None = None,
) -> LifecycleEvent:
    """ASSIGNED event; recorded defaults to the effective date."""
    return LifecycleEvent(
        subject_id=subject_id,
        action=EventAction.ASSIGNED,
        counterparty_id=member_id,
        recorded_date=recorded or effective,
        effective_date=effective,
        counterparty_name=name,
        notes=notes,
    )


def unassigned(
    member_id: str | None,
    effective: datetime | None,
    recorded: datetime | None = None,
    subject_id: str = "asset-1",
) -> LifecycleEvent:
    """UNASSIGNED event; recorded defaults to the effective date."""
    return LifecycleEvent(
        subject_id=subject_id,
        action=EventAction.UNASSIGNED,
        counterparty_id=member_id,
        recorded_date=recorded or effective,
        effective_date=effective,
    )


def unpaid_leave(
    start: date,
    end: date,
    total_days: str,
    member_id: str = "emp-1",
    leave_id: str = "leave-1",
    status: LeaveStatus = LeaveStatus.APPROVED,
    is_paid: bool = False,
) -> UnpaidLeaveRequest:
    return UnpaidLeaveRequest(
        id=leave_id,
        member_id=member_id,
        status=status,
        leave_type_id="lt-unpaid",
        is_paid=is_paid,
        start_date=start,
        end_date=end,
        total_days=Decimal(total_days),
        request_number=f"LR-{leave_id}",
    )


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to 2024-09-01T00:00Z."""
    return FixedClock(NOW)


@pytest.fixture
def repository() -> InMemoryOperationsRepository:
    return InMemoryOperationsRepository()


@pytest.fixture
def asset(repository: InMemoryOperationsRepository) -> AssetRecord:
    """Asset created 2024-01-01, no purchase date, currently unassigned."""
    return repository.add_asset(
        AssetRecord(
            asset_id="asset-1",
            tenant_id=TENANT_ID,
            created_at=utc(2024, 1, 1),
            asset_tag="LAP-001",
        )
    )


@pytest.fixture
async def engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()
