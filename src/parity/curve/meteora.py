"""Meteora Dynamic Bonding Curve client.

Talks to the DBC program through plain Solana RPC: reads config and pool
accounts, and builds pool-creation transactions that the creator signs in
their wallet. The base mint keypair is generated here, used for its one
partial signature and then dropped.
"""

import base64
import logging
from typing import Optional

from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from parity.curve.accounts import decode_pool_config, decode_virtual_pool
from parity.curve.base import (
    CreatePoolParams,
    CurveClient,
    PoolConfigState,
    PoolState,
    PreparedPool,
)
from parity.curve.constants import DBC_PROGRAM_ID
from parity.curve.instructions import build_initialize_pool_instruction
from parity.curve.presets import get_preset
from parity.errors import ConfigNotFoundError, CurveClientError, CurveNotConfiguredError
from parity.solana.addresses import short_address
from parity.solana.rpc import SolanaRpcClient

logger = logging.getLogger(__name__)


class MeteoraCurveClient(CurveClient):
    """Curve client backed by the on-chain DBC program."""

    def __init__(
        self,
        rpc: SolanaRpcClient,
        config_address: Optional[str],
        token_decimals: int = 6,
    ):
        super().__init__(token_decimals=token_decimals)
        self.rpc = rpc
        self.config_address = config_address
        # Pool configs are immutable once created
        self._configs: dict[str, PoolConfigState] = {}

    @property
    def name(self) -> str:
        return "meteora"

    async def _load_config(self, config: str) -> PoolConfigState:
        """Read a pool config, failing if it is not a DBC config account."""
        cached = self._configs.get(config)
        if cached is not None:
            return cached

        account = await self.rpc.get_account_info(config)
        if account is None or account["owner"] != str(DBC_PROGRAM_ID):
            raise ConfigNotFoundError(
                f"Meteora config {config} not found on-chain. Create it first."
            )

        state = decode_pool_config(account["data"])
        if state is None:
            raise ConfigNotFoundError(f"Account {config} is not a DBC pool config")
        self._configs[config] = state
        return state

    async def build_create_pool_transaction(self, params: CreatePoolParams) -> PreparedPool:
        if not self.config_address:
            raise CurveNotConfiguredError(
                "METEORA_CONFIG_ADDRESS not set. Create a config at "
                "app.meteora.ag/launchpad and add the address to .env"
            )

        try:
            preset = get_preset(params.curve_preset)
        except ValueError as e:
            raise CurveClientError(str(e)) from e

        config = Pubkey.from_string(self.config_address)
        config_state = await self._load_config(self.config_address)
        quote_mint = Pubkey.from_string(config_state.quote_mint)

        try:
            creator = Pubkey.from_string(params.creator_public_key)
        except ValueError as e:
            raise CurveClientError(f"Invalid creator wallet: {e}") from e

        base_mint_keypair = Keypair()
        instruction, pool = build_initialize_pool_instruction(
            config=config,
            base_mint=base_mint_keypair.pubkey(),
            quote_mint=quote_mint,
            creator=creator,
            payer=creator,
            name=params.name,
            symbol=params.symbol,
            uri=params.uri,
        )

        blockhash, last_valid_block_height = await self.rpc.get_latest_blockhash()
        recent_blockhash = Hash.from_string(blockhash)

        message = Message.new_with_blockhash([instruction], creator, recent_blockhash)
        transaction = Transaction.new_unsigned(message)
        # The creator's signature is added client-side
        transaction.partial_sign([base_mint_keypair], recent_blockhash)

        logger.info(
            f"Prepared {preset.name} pool {short_address(str(pool))} for {params.symbol} "
            f"(mint {short_address(str(base_mint_keypair.pubkey()))})"
        )

        return PreparedPool(
            transaction=base64.b64encode(bytes(transaction)).decode("ascii"),
            base_mint=str(base_mint_keypair.pubkey()),
            pool_address=str(pool),
            last_valid_block_height=last_valid_block_height,
        )

    async def get_pool(self, pool_address: str) -> Optional[PoolState]:
        account = await self.rpc.get_account_info(pool_address)
        if account is None:
            return None
        if account["owner"] != str(DBC_PROGRAM_ID):
            logger.warning(f"Account {short_address(pool_address)} is not owned by the DBC program")
            return None
        return decode_virtual_pool(pool_address, account["data"])

    async def pool_token_decimals(self, pool: PoolState) -> Optional[int]:
        """Base token decimals from the pool's own config account."""
        try:
            config = await self._load_config(pool.config)
        except ConfigNotFoundError as e:
            logger.warning(f"No config for pool {short_address(pool.pool_address)}: {e}")
            return None
        return config.token_decimal

    async def get_block_height(self) -> int:
        return await self.rpc.get_block_height()

    async def close(self) -> None:
        await self.rpc.close()
