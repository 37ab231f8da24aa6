"""Bonding curve client base interface.

The bonding curve itself lives in an external on-chain program. Clients only
prepare pool-creation transactions for the creator to sign and read back
pool state; they never hold the creator's key.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from parity.solana.addresses import short_address
from parity.solana.units import LAMPORTS_PER_SOL, SOL_DECIMALS

logger = logging.getLogger(__name__)

# Quote reserve at which a pool graduates and migrates (85 SOL)
GRADUATION_THRESHOLD_LAMPORTS = 85 * LAMPORTS_PER_SOL

Q64 = 2**64


@dataclass
class CreatePoolParams:
    """What the creator asked for."""

    name: str
    symbol: str
    uri: str
    curve_preset: str
    creator_public_key: str


@dataclass
class PreparedPool:
    """A partially signed pool-creation transaction."""

    transaction: str  # base64, signed by the base mint keypair only
    base_mint: str
    pool_address: str
    last_valid_block_height: Optional[int] = None


@dataclass
class PoolState:
    """Decoded on-chain pool account."""

    pool_address: str
    config: str
    creator: str
    base_mint: str
    base_reserve: int
    quote_reserve: int
    sqrt_price: int
    is_migrated: bool


@dataclass
class PoolConfigState:
    """Decoded fields of a DBC pool config account."""

    quote_mint: str
    token_decimal: int


@dataclass
class PoolPriceData:
    """Price snapshot of a pool."""

    pool_address: str
    base_mint: str
    base_reserve: str
    quote_reserve: str
    spot_price: Decimal  # SOL per token
    pool_liquidity_sol: Decimal
    curve_progress_pct: Decimal
    is_migrated: bool


def price_from_sqrt_price(sqrt_price: int, base_decimals: int, quote_decimals: int = SOL_DECIMALS) -> Decimal:
    """Convert a Q64.64 square-root price into quote tokens per base token."""
    raw = (Decimal(sqrt_price) / Decimal(Q64)) ** 2
    return raw * (Decimal(10) ** (base_decimals - quote_decimals))


def curve_progress_pct(quote_reserve: int) -> Decimal:
    """Progress toward graduation, capped at 100."""
    if quote_reserve <= 0:
        return Decimal("0")
    progress = Decimal(quote_reserve * 100) / Decimal(GRADUATION_THRESHOLD_LAMPORTS)
    return min(progress, Decimal("100"))


class CurveClient(ABC):
    """Abstract base class for bonding curve backends."""

    def __init__(self, token_decimals: int = 6):
        self.token_decimals = token_decimals

    @property
    @abstractmethod
    def name(self) -> str:
        """Client name."""
        raise NotImplementedError()

    @abstractmethod
    async def build_create_pool_transaction(self, params: CreatePoolParams) -> PreparedPool:
        """Build a pool-creation transaction for the creator to sign.

        Raises:
            CurveNotConfiguredError: no pool config address configured
            ConfigNotFoundError: config account missing on-chain
        """
        raise NotImplementedError()

    @abstractmethod
    async def get_pool(self, pool_address: str) -> Optional[PoolState]:
        """Read a pool account, or None if it does not exist."""
        raise NotImplementedError()

    @abstractmethod
    async def get_block_height(self) -> int:
        """Current block height, used to tell when a prepared transaction expired."""
        raise NotImplementedError()

    async def close(self) -> None:
        """Release network resources."""
        return None

    async def pool_token_decimals(self, pool: PoolState) -> Optional[int]:
        """Decimals of the pool's base token, or None when unknown."""
        return self.token_decimals

    async def wait_for_pool(
        self,
        pool_address: str,
        max_retries: int = 5,
        delay: float = 2.0,
    ) -> Optional[PoolState]:
        """Poll for a pool account, waiting ``delay`` seconds between attempts."""
        for attempt in range(max_retries):
            try:
                pool = await self.get_pool(pool_address)
                if pool is not None:
                    return pool
            except Exception as e:
                logger.debug(
                    f"Pool lookup failed for {short_address(pool_address)} "
                    f"(attempt {attempt + 1}/{max_retries}): {e}"
                )

            if attempt < max_retries - 1:
                await asyncio.sleep(delay)

        logger.info(f"Pool {short_address(pool_address)} not found after {max_retries} attempts")
        return None

    async def verify_pool_created(
        self,
        pool_address: str,
        max_retries: int = 5,
        delay: float = 2.0,
    ) -> bool:
        return await self.wait_for_pool(pool_address, max_retries, delay) is not None

    async def get_pool_price(self, pool_address: str) -> Optional[PoolPriceData]:
        """Spot price and liquidity of a pool, or None when it does not exist."""
        pool = await self.get_pool(pool_address)
        if pool is None:
            return None

        decimals = await self.pool_token_decimals(pool)
        if decimals is None:
            return None

        return PoolPriceData(
            pool_address=pool_address,
            base_mint=pool.base_mint,
            base_reserve=str(pool.base_reserve),
            quote_reserve=str(pool.quote_reserve),
            spot_price=price_from_sqrt_price(pool.sqrt_price, decimals),
            pool_liquidity_sol=Decimal(pool.quote_reserve) / LAMPORTS_PER_SOL,
            curve_progress_pct=curve_progress_pct(pool.quote_reserve),
            is_migrated=pool.is_migrated,
        )
