"""Dry-run curve client for development and tests (no chain access)."""

import base64
import hashlib
from typing import Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from parity.curve.accounts import derive_pool_address
from parity.curve.base import Q64, CreatePoolParams, CurveClient, PoolState, PreparedPool
from parity.curve.constants import WSOL_MINT

# Dry-run transactions stay valid for this many blocks
BLOCKHASH_VALIDITY = 150

# Placeholder config account used when none is configured
DRYRUN_CONFIG = Pubkey.from_string("11111111111111111111111111111112")


class DryRunCurveClient(CurveClient):
    """Simulated curve client that keeps pools in memory.

    With ``auto_create`` the pool appears as soon as it is prepared, as if
    the creator had signed and submitted immediately.
    """

    def __init__(
        self,
        config_address: Optional[str] = None,
        token_decimals: int = 6,
        auto_create: bool = True,
    ):
        super().__init__(token_decimals=token_decimals)
        self.config = Pubkey.from_string(config_address) if config_address else DRYRUN_CONFIG
        self.auto_create = auto_create
        self.block_height = 1_000
        self.pools: dict[str, PoolState] = {}
        self.prepared: dict[str, CreatePoolParams] = {}

    @property
    def name(self) -> str:
        return "dryrun"

    async def build_create_pool_transaction(self, params: CreatePoolParams) -> PreparedPool:
        base_mint = Keypair().pubkey()
        pool = str(derive_pool_address(self.config, base_mint, WSOL_MINT))
        self.prepared[pool] = params

        # Opaque stand-in for a serialized transaction
        digest = hashlib.sha256(f"{pool}:{params.creator_public_key}".encode()).digest()
        transaction = base64.b64encode(digest).decode("ascii")

        if self.auto_create:
            self.create_pool(pool, str(base_mint), params.creator_public_key)

        return PreparedPool(
            transaction=transaction,
            base_mint=str(base_mint),
            pool_address=pool,
            last_valid_block_height=self.block_height + BLOCKHASH_VALIDITY,
        )

    def create_pool(
        self,
        pool_address: str,
        base_mint: str,
        creator: str,
        quote_reserve: int = 0,
        base_reserve: int = 1_000_000_000 * 10**6,
        sqrt_price: int = Q64 // 1000,
    ) -> PoolState:
        """Register a pool as if the creation transaction had landed."""
        pool = PoolState(
            pool_address=pool_address,
            config=str(self.config),
            creator=creator,
            base_mint=base_mint,
            base_reserve=base_reserve,
            quote_reserve=quote_reserve,
            sqrt_price=sqrt_price,
            is_migrated=False,
        )
        self.pools[pool_address] = pool
        return pool

    def migrate_pool(self, pool_address: str) -> None:
        self.pools[pool_address].is_migrated = True

    def advance_blocks(self, count: int) -> None:
        self.block_height += count

    async def get_pool(self, pool_address: str) -> Optional[PoolState]:
        return self.pools.get(pool_address)

    async def get_block_height(self) -> int:
        return self.block_height
