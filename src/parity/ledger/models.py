"""SQLAlchemy models for launch records."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class LaunchStatus(str, Enum):
    """Lifecycle status of a launch."""

    PENDING = "pending"      # Created, not deployed (or deploy in flight)
    ACTIVE = "active"        # Pool live on the bonding curve
    MIGRATED = "migrated"    # Curve completed, liquidity migrated
    FAILED = "failed"        # Prepared deploy expired without a pool


class CurvePreset(str, Enum):
    """Curve presets a launch can be created with."""

    COMMUNITY = "community"
    STANDARD = "standard"
    SCARCE = "scarce"


class Launch(Base):
    """One user's token-creation request."""

    __tablename__ = "launches"
    __table_args__ = (
        Index("ix_launches_creator_created", "creator_id", "created_at"),
        Index("ix_launches_status", "status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    creator_id: Mapped[str] = mapped_column(String(255), nullable=False)

    # Token definition
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    symbol: Mapped[str] = mapped_column(String(10), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    curve_preset: Mapped[str] = mapped_column(String(20), nullable=False)

    # Charity receiving its share of trading fees
    charity_wallet: Mapped[str] = mapped_column(String(44), nullable=False)
    charity_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20), default=LaunchStatus.PENDING.value, nullable=False
    )

    # On-chain deployment (set at prepare, confirmed at deploy)
    pool_address: Mapped[Optional[str]] = mapped_column(String(44), nullable=True, index=True)
    token_mint: Mapped[Optional[str]] = mapped_column(String(44), nullable=True, index=True)
    deploy_signature: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    last_valid_block_height: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
    prepared_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    deployed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def is_pending(self) -> bool:
        return self.status == LaunchStatus.PENDING.value

    @property
    def is_deployed(self) -> bool:
        """Pool exists on-chain for this launch."""
        return self.status in (LaunchStatus.ACTIVE.value, LaunchStatus.MIGRATED.value)
