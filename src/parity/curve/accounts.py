"""DBC account addresses and decoding.

VirtualPool layout (8 byte discriminator, then the repr(C) struct):

  72:104  config (Pubkey)
  104:136 creator (Pubkey)
  136:168 base_mint (Pubkey)
  232:240 base_reserve (u64 LE)
  240:248 quote_reserve (u64 LE)
  280:296 sqrt_price (u128 LE, Q64.64)
  305     is_migrated (u8 bool)

PoolConfig (8 byte discriminator, then):

  8:40    quote_mint (Pubkey)
  40:104  fee_claimer, leftover_receiver (Pubkey)
  104:232 pool_fees (PoolFeesConfig)
  232:235 collect_fee_mode, migration_option, activation_type (u8)
  235     token_decimal (u8)
"""

import logging
import struct
from typing import Optional

from solders.pubkey import Pubkey

from parity.curve.base import PoolConfigState, PoolState
from parity.curve.constants import (
    DBC_PROGRAM_ID,
    EVENT_AUTHORITY_SEED,
    METADATA_SEED,
    METAPLEX_PROGRAM_ID,
    POOL_AUTHORITY_SEED,
    POOL_CONFIG_DISCRIMINATOR,
    POOL_SEED,
    TOKEN_VAULT_SEED,
    VIRTUAL_POOL_DISCRIMINATOR,
)
from parity.solana.addresses import short_address

logger = logging.getLogger(__name__)

VIRTUAL_POOL_SIZE = 424
POOL_CONFIG_MIN_SIZE = 236
POOL_CONFIG_TOKEN_DECIMAL_OFFSET = 235


def derive_pool_address(config: Pubkey, base_mint: Pubkey, quote_mint: Pubkey) -> Pubkey:
    """Pool PDA. Mints are ordered with the larger key first."""
    first, second = sorted((bytes(base_mint), bytes(quote_mint)), reverse=True)
    pool, _ = Pubkey.find_program_address(
        [POOL_SEED, bytes(config), first, second], DBC_PROGRAM_ID
    )
    return pool


def derive_token_vault(mint: Pubkey, pool: Pubkey) -> Pubkey:
    vault, _ = Pubkey.find_program_address(
        [TOKEN_VAULT_SEED, bytes(mint), bytes(pool)], DBC_PROGRAM_ID
    )
    return vault


def derive_pool_authority() -> Pubkey:
    authority, _ = Pubkey.find_program_address([POOL_AUTHORITY_SEED], DBC_PROGRAM_ID)
    return authority


def derive_event_authority() -> Pubkey:
    authority, _ = Pubkey.find_program_address([EVENT_AUTHORITY_SEED], DBC_PROGRAM_ID)
    return authority


def derive_metadata_address(mint: Pubkey) -> Pubkey:
    """Metaplex metadata account of a mint."""
    metadata, _ = Pubkey.find_program_address(
        [METADATA_SEED, bytes(METAPLEX_PROGRAM_ID), bytes(mint)], METAPLEX_PROGRAM_ID
    )
    return metadata


def decode_virtual_pool(pool_address: str, data: bytes) -> Optional[PoolState]:
    """Decode VirtualPool account data. Returns None on invalid data."""
    if len(data) < VIRTUAL_POOL_SIZE:
        logger.debug(
            f"Pool data too short: {len(data)} < {VIRTUAL_POOL_SIZE} "
            f"for {short_address(pool_address)}"
        )
        return None

    if data[:8] != VIRTUAL_POOL_DISCRIMINATOR:
        logger.debug(f"Wrong discriminator for pool {short_address(pool_address)}")
        return None

    base_reserve, quote_reserve = struct.unpack_from("<2Q", data, 232)
    sqrt_low, sqrt_high = struct.unpack_from("<2Q", data, 280)

    return PoolState(
        pool_address=pool_address,
        config=str(Pubkey.from_bytes(data[72:104])),
        creator=str(Pubkey.from_bytes(data[104:136])),
        base_mint=str(Pubkey.from_bytes(data[136:168])),
        base_reserve=base_reserve,
        quote_reserve=quote_reserve,
        sqrt_price=(sqrt_high << 64) | sqrt_low,
        is_migrated=data[305] != 0,
    )


def decode_pool_config(data: bytes) -> Optional[PoolConfigState]:
    """Decode the PoolConfig fields we use, or None if the data is not one."""
    if len(data) < POOL_CONFIG_MIN_SIZE or data[:8] != POOL_CONFIG_DISCRIMINATOR:
        return None
    return PoolConfigState(
        quote_mint=str(Pubkey.from_bytes(data[8:40])),
        token_decimal=data[POOL_CONFIG_TOKEN_DECIMAL_OFFSET],
    )
