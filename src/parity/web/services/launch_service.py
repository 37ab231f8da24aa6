"""Launch service: record management and the deploy lifecycle.

Lifecycle:
    pending --prepare--> pending (pool address recorded)
    pending --confirm/recover--> active (pool found on-chain)
    active --sync--> migrated (curve completed)
    pending --sync--> failed (prepared transaction expired, no pool)
    failed --prepare--> pending (new attempt)

The server never signs for the creator. Every transition is checked against
the chain through the curve client before it is written.
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from parity.charities import resolve_charity
from parity.config import get_settings
from parity.curve.base import CreatePoolParams, CurveClient
from parity.errors import (
    CurveClientError,
    LaunchNotFoundError,
    LaunchStateError,
    PoolNotFoundError,
)
from parity.ledger.models import Launch, LaunchStatus
from parity.ledger.repository import LaunchRepository
from parity.solana.addresses import short_address
from parity.utils.locks import LaunchLock, release_launch_lock
from parity.web.contracts.launches import (
    ConfirmDeployRequest,
    ConfirmDeployResponse,
    LaunchCreateRequest,
    LaunchUpdateRequest,
    PrepareDeployResponse,
    RecoverDeployRequest,
    RecoverDeployResponse,
    SyncStatusResponse,
    TickerItemResponse,
)

logger = logging.getLogger(__name__)

# Launch columns that cannot be cleared by an update
REQUIRED_FIELDS = ("name", "symbol", "curve_preset", "charity_wallet")


def _matches_prepared(launch: Launch, pool_address: str, token_mint: str) -> bool:
    """Whether a reported pool is the one prepared for the launch."""
    return launch.pool_address == pool_address and launch.token_mint == token_mint


class LaunchService:
    """Launch operations scoped to one authenticated creator."""

    def __init__(self, session: AsyncSession, curve_client: CurveClient):
        self.session = session
        self.repo = LaunchRepository(session)
        self.curve = curve_client
        self.settings = get_settings()

    async def _get_owned(self, launch_id: str, user_id: str) -> Launch:
        launch = await self.repo.get_launch_for_owner(launch_id, user_id)
        if launch is None:
            raise LaunchNotFoundError()
        return launch

    def metadata_uri(self, launch: Launch) -> str:
        """Token URI: the image when given, else our metadata endpoint."""
        if launch.image:
            return launch.image
        base_url = self.settings.public_base_url.rstrip("/")
        return f"{base_url}/api/metadata/{launch.id}.json"

    # ----------------------------------------------------------------------
    # Records
    # ----------------------------------------------------------------------

    async def list_launches(self, user_id: str) -> list[Launch]:
        return await self.repo.list_launches(user_id)

    async def list_public_launches(
        self, limit: int = 50, status: Optional[LaunchStatus] = None
    ) -> list[Launch]:
        return await self.repo.list_public_launches(limit, status)

    async def ticker(self, limit: int = 20) -> list[TickerItemResponse]:
        """Active launches with their live pool price.

        Launches whose pool cannot be read right now are left out.
        """
        launches = [
            launch
            for launch in await self.repo.list_public_launches(limit, LaunchStatus.ACTIVE)
            if launch.pool_address
        ]
        prices = await asyncio.gather(
            *(self.curve.get_pool_price(launch.pool_address) for launch in launches),
            return_exceptions=True,
        )

        items = []
        for launch, price in zip(launches, prices):
            if isinstance(price, CurveClientError):
                logger.warning(f"Ticker price failed for launch {launch.id}: {price}")
                continue
            if isinstance(price, BaseException):
                raise price
            if price is None:
                continue
            items.append(
                TickerItemResponse(
                    id=launch.id,
                    name=launch.name,
                    symbol=launch.symbol,
                    image=launch.image,
                    pool_address=launch.pool_address,
                    token_mint=launch.token_mint,
                    spot_price=price.spot_price,
                    pool_liquidity_sol=price.pool_liquidity_sol,
                    curve_progress_pct=price.curve_progress_pct,
                )
            )
        return items

    async def get_launch(self, launch_id: str, user_id: str) -> Launch:
        return await self._get_owned(launch_id, user_id)

    async def create_launch(self, user_id: str, request: LaunchCreateRequest) -> Launch:
        charity_wallet, charity_name = resolve_charity(
            request.charity_wallet, request.charity_name
        )
        launch = await self.repo.create_launch(
            creator_id=user_id,
            name=request.name,
            symbol=request.symbol,
            description=request.description,
            image=str(request.image) if request.image else None,
            curve_preset=request.curve_preset.value,
            charity_wallet=charity_wallet,
            charity_name=charity_name,
        )
        logger.info(f"Launch {launch.id} created by {user_id}: {launch.symbol}")
        return launch

    async def update_launch(
        self, launch_id: str, user_id: str, request: LaunchUpdateRequest
    ) -> Launch:
        launch = await self._get_owned(launch_id, user_id)
        if not launch.is_pending:
            raise LaunchStateError("Cannot update deployed launch")

        # Explicit nulls clear optional fields; required columns ignore them
        updates = request.model_dump(exclude_unset=True)
        for field in REQUIRED_FIELDS:
            if updates.get(field, "") is None:
                del updates[field]

        if "image" in updates:
            updates["image"] = str(request.image) if request.image else None
        if "curve_preset" in updates:
            updates["curve_preset"] = request.curve_preset.value
        if "charity_wallet" in updates:
            wallet, name = resolve_charity(updates["charity_wallet"], updates.get("charity_name"))
            updates["charity_wallet"] = wallet
            updates["charity_name"] = name

        return await self.repo.update_launch(launch, **updates)

    async def delete_launch(self, launch_id: str, user_id: str) -> None:
        launch = await self._get_owned(launch_id, user_id)
        if not launch.is_pending:
            raise LaunchStateError("Cannot delete deployed launch")

        await self.repo.delete_launch(launch)
        release_launch_lock(launch_id)
        logger.info(f"Launch {launch_id} deleted by {user_id}")

    # ----------------------------------------------------------------------
    # Deploy lifecycle
    # ----------------------------------------------------------------------

    async def prepare_deploy(
        self, launch_id: str, user_id: str, creator_wallet: str
    ) -> PrepareDeployResponse:
        """Build the pool-creation transaction for the creator to sign.

        A launch that is already live returns its pool instead, so a client
        retrying after a lost response does not create a second pool.
        """
        async with LaunchLock(launch_id, operation="prepare_deploy"):
            launch = await self._get_owned(launch_id, user_id)

            if launch.is_deployed:
                return PrepareDeployResponse(
                    launch_id=launch.id,
                    already_deployed=True,
                    pool_address=launch.pool_address,
                    base_mint=launch.token_mint,
                )

            prepared = await self.curve.build_create_pool_transaction(
                CreatePoolParams(
                    name=launch.name,
                    symbol=launch.symbol,
                    uri=self.metadata_uri(launch),
                    curve_preset=launch.curve_preset,
                    creator_public_key=creator_wallet,
                )
            )

            await self.repo.record_prepared_deploy(
                launch,
                pool_address=prepared.pool_address,
                token_mint=prepared.base_mint,
                last_valid_block_height=prepared.last_valid_block_height,
            )
            await self.session.commit()

        logger.info(
            f"Launch {launch_id} prepared: pool {short_address(prepared.pool_address)}"
        )
        return PrepareDeployResponse(
            launch_id=launch_id,
            already_deployed=False,
            transaction=prepared.transaction,
            base_mint=prepared.base_mint,
            pool_address=prepared.pool_address,
            last_valid_block_height=prepared.last_valid_block_height,
        )

    async def confirm_deploy(
        self, launch_id: str, user_id: str, request: ConfirmDeployRequest
    ) -> ConfirmDeployResponse:
        """Mark the launch active once its pool is visible on-chain."""
        async with LaunchLock(launch_id, operation="confirm_deploy"):
            launch = await self._get_owned(launch_id, user_id)
            if launch.is_deployed:
                raise LaunchStateError("Launch already deployed")
            if not launch.is_pending:
                raise LaunchStateError("Launch deploy failed, prepare it again")
            if launch.pool_address is None:
                raise LaunchStateError("Launch has no prepared deploy")
            if not _matches_prepared(launch, request.pool_address, request.token_mint):
                raise LaunchStateError("Pool does not match the prepared deploy")

            pool = await self.curve.wait_for_pool(
                request.pool_address,
                max_retries=self.settings.confirm_max_retries,
                delay=self.settings.confirm_retry_delay,
            )
            if pool is None:
                raise PoolNotFoundError()
            if pool.base_mint != request.token_mint:
                raise LaunchStateError("Token mint does not match the pool")

            await self.repo.mark_active(
                launch,
                pool_address=request.pool_address,
                token_mint=request.token_mint,
                signature=request.signature,
            )
            await self.session.commit()

        logger.info(f"Launch {launch_id} active: pool {short_address(request.pool_address)}")
        return ConfirmDeployResponse(
            success=True,
            pool_address=request.pool_address,
            token_mint=request.token_mint,
        )

    async def recover_deploy(
        self, launch_id: str, user_id: str, request: RecoverDeployRequest
    ) -> RecoverDeployResponse:
        """Single on-chain check for a pool whose submission state was lost.

        Used before signing (an earlier attempt may have landed) and after an
        "already processed" send error. Never raises for a missing pool.
        """
        async with LaunchLock(launch_id, operation="recover_deploy"):
            launch = await self._get_owned(launch_id, user_id)

            if launch.is_deployed:
                return RecoverDeployResponse(
                    success=launch.pool_address == request.pool_address,
                    status=launch.status,
                    pool_address=launch.pool_address,
                    token_mint=launch.token_mint,
                )

            if not _matches_prepared(launch, request.pool_address, request.token_mint):
                logger.warning(f"Launch {launch_id} recover with a pool it did not prepare")
                return RecoverDeployResponse(success=False, status=launch.status)

            pool = await self.curve.get_pool(request.pool_address)
            if pool is None or pool.base_mint != request.token_mint:
                return RecoverDeployResponse(success=False, status=launch.status)

            await self.repo.mark_active(
                launch,
                pool_address=request.pool_address,
                token_mint=request.token_mint,
            )
            await self.session.commit()

        logger.info(f"Launch {launch_id} recovered: pool {short_address(request.pool_address)}")
        return RecoverDeployResponse(
            success=True,
            status=LaunchStatus.ACTIVE.value,
            pool_address=request.pool_address,
            token_mint=request.token_mint,
        )

    async def sync_status(self, launch_id: str, user_id: str) -> SyncStatusResponse:
        """Reconcile the stored status with the chain."""
        async with LaunchLock(launch_id, operation="sync_status"):
            launch = await self._get_owned(launch_id, user_id)
            new_status = await self._reconcile(launch)
            if new_status is not None:
                await self.session.commit()

        return SyncStatusResponse(
            id=launch.id,
            status=launch.status,
            changed=new_status is not None,
        )

    async def _reconcile(self, launch: Launch) -> Optional[LaunchStatus]:
        """Apply at most one chain-driven transition. Returns the new status."""
        if launch.status == LaunchStatus.ACTIVE.value and launch.pool_address:
            pool = await self.curve.get_pool(launch.pool_address)
            if pool is not None and pool.is_migrated:
                await self.repo.mark_migrated(launch)
                logger.info(f"Launch {launch.id} migrated")
                return LaunchStatus.MIGRATED
            return None

        if (
            launch.status == LaunchStatus.PENDING.value
            and launch.pool_address
            and launch.last_valid_block_height is not None
        ):
            block_height = await self.curve.get_block_height()
            if block_height <= launch.last_valid_block_height:
                return None

            # Expired; the pool may still have landed before expiry
            pool = await self.curve.get_pool(launch.pool_address)
            if pool is not None and pool.base_mint == launch.token_mint:
                await self.repo.mark_active(
                    launch, pool_address=launch.pool_address, token_mint=launch.token_mint
                )
                logger.info(f"Launch {launch.id} active after sync")
                return LaunchStatus.ACTIVE

            await self.repo.mark_failed(
                launch,
                f"Deploy transaction expired at block height {launch.last_valid_block_height}",
            )
            logger.info(f"Launch {launch.id} failed: prepared transaction expired")
            return LaunchStatus.FAILED

        return None
