"""Asset and asset history models."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staffops_engine.models.base import Base, TimestampMixin, new_id
from staffops_engine.models.organization import Member


class Asset(Base, TimestampMixin):
    """Tracked asset; the subject of assignment periods."""

    __tablename__ = "asset"

    asset_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenant.tenant_id", ondelete="CASCADE"),
        nullable=False,
    )
    asset_tag: Mapped[str | None] = mapped_column(String, nullable=True)
    model: Mapped[str | None] = mapped_column(String, nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    assigned_member_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("member.member_id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    assigned_member: Mapped[Member | None] = relationship()
    history: Mapped[list[AssetHistory]] = relationship(
        back_populates="asset",
        order_by="AssetHistory.created_at",
    )


class AssetHistory(Base):
    """Append-only asset history entry.

    ``assignment_date`` / ``return_date`` carry the business date of an
    ASSIGNED / UNASSIGNED entry; ``created_at`` is when it was logged.
    """

    __tablename__ = "asset_history"

    history_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenant.tenant_id", ondelete="CASCADE"),
        nullable=False,
    )
    asset_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("asset.asset_id", ondelete="CASCADE"),
        nullable=False,
    )
    action: Mapped[str] = mapped_column(String, nullable=False)
    to_member_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("member.member_id"), nullable=True
    )
    from_member_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("member.member_id"), nullable=True
    )
    assignment_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    return_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "action IN ('CREATED', 'UPDATED', 'ASSIGNED', 'UNASSIGNED', 'STATUS_CHANGED', 'DISPOSED')",
            name="asset_history_action_check",
        ),
        Index("ix_asset_history_tenant_asset", "tenant_id", "asset_id"),
    )

    # Relationships
    asset: Mapped[Asset] = relationship(back_populates="history")
    to_member: Mapped[Member | None] = relationship(foreign_keys=[to_member_id])
    from_member: Mapped[Member | None] = relationship(foreign_keys=[from_member_id])
