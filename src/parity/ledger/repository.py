"""Repository for launch record operations."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parity.ledger.models import Launch, LaunchStatus

# Columns a creator may edit while a launch is still pending
EDITABLE_FIELDS = frozenset(
    {
        "name",
        "symbol",
        "description",
        "image",
        "curve_preset",
        "charity_wallet",
        "charity_name",
    }
)


class LaunchRepository:
    """Repository for all launch-related database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_launch(
        self,
        creator_id: str,
        name: str,
        symbol: str,
        curve_preset: str,
        charity_wallet: str,
        description: Optional[str] = None,
        image: Optional[str] = None,
        charity_name: Optional[str] = None,
    ) -> Launch:
        """Insert a new pending launch."""
        launch = Launch(
            id=str(uuid.uuid4()),
            creator_id=creator_id,
            name=name,
            symbol=symbol,
            description=description,
            image=image,
            curve_preset=curve_preset,
            charity_wallet=charity_wallet,
            charity_name=charity_name,
            status=LaunchStatus.PENDING.value,
        )
        self.session.add(launch)
        await self.session.flush()
        return launch

    async def get_launch(self, launch_id: str) -> Optional[Launch]:
        """Get launch by ID regardless of owner."""
        stmt = select(Launch).where(Launch.id == launch_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_launch_for_owner(self, launch_id: str, creator_id: str) -> Optional[Launch]:
        """Get launch by ID only if it belongs to the creator."""
        stmt = (
            select(Launch)
            .where(Launch.id == launch_id, Launch.creator_id == creator_id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_launches(self, creator_id: str) -> list[Launch]:
        """All launches of a creator, newest first."""
        stmt = (
            select(Launch)
            .where(Launch.creator_id == creator_id)
            .order_by(Launch.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_public_launches(
        self,
        limit: int = 50,
        status: Optional[LaunchStatus] = None,
    ) -> list[Launch]:
        """Launches across all creators, newest first.

        Without a status only deployed (active or migrated) launches are listed.
        """
        if status is None:
            statuses = [LaunchStatus.ACTIVE.value, LaunchStatus.MIGRATED.value]
        else:
            statuses = [status.value]

        stmt = (
            select(Launch)
            .where(Launch.status.in_(statuses))
            .order_by(Launch.deployed_at.desc(), Launch.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update_launch(self, launch: Launch, **fields) -> Launch:
        """Apply editable field changes. Unknown fields raise ValueError."""
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {', '.join(sorted(unknown))}")

        for key, value in fields.items():
            setattr(launch, key, value)
        await self.session.flush()
        return launch

    async def delete_launch(self, launch: Launch) -> None:
        await self.session.delete(launch)
        await self.session.flush()

    # Deploy lifecycle
    async def record_prepared_deploy(
        self,
        launch: Launch,
        pool_address: str,
        token_mint: str,
        last_valid_block_height: Optional[int],
    ) -> Launch:
        """Remember the pool a prepared transaction will create.

        A failed launch goes back to pending since a new attempt is in flight.
        """
        launch.pool_address = pool_address
        launch.token_mint = token_mint
        launch.last_valid_block_height = last_valid_block_height
        launch.prepared_at = datetime.now(timezone.utc)
        launch.status = LaunchStatus.PENDING.value
        launch.error_message = None
        await self.session.flush()
        return launch

    async def mark_active(
        self,
        launch: Launch,
        pool_address: str,
        token_mint: str,
        signature: Optional[str] = None,
    ) -> Launch:
        """Record a confirmed pool and move the launch to active."""
        launch.pool_address = pool_address
        launch.token_mint = token_mint
        if signature:
            launch.deploy_signature = signature
        launch.status = LaunchStatus.ACTIVE.value
        launch.deployed_at = datetime.now(timezone.utc)
        launch.error_message = None
        await self.session.flush()
        return launch

    async def mark_migrated(self, launch: Launch) -> Launch:
        launch.status = LaunchStatus.MIGRATED.value
        await self.session.flush()
        return launch

    async def mark_failed(self, launch: Launch, error_message: str) -> Launch:
        launch.status = LaunchStatus.FAILED.value
        launch.error_message = error_message
        await self.session.flush()
        return launch
