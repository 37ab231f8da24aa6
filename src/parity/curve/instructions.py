"""Instruction builders for the DBC program."""

import struct

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from parity.curve.accounts import (
    derive_event_authority,
    derive_metadata_address,
    derive_pool_address,
    derive_pool_authority,
    derive_token_vault,
)
from parity.curve.constants import (
    DBC_PROGRAM_ID,
    INIT_POOL_SPL_DISCRIMINATOR,
    METAPLEX_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)


def encode_borsh_string(value: str) -> bytes:
    """Borsh string: u32 LE byte length followed by UTF-8 bytes."""
    encoded = value.encode("utf-8")
    return struct.pack("<I", len(encoded)) + encoded


def build_initialize_pool_instruction(
    config: Pubkey,
    base_mint: Pubkey,
    quote_mint: Pubkey,
    creator: Pubkey,
    payer: Pubkey,
    name: str,
    symbol: str,
    uri: str,
) -> tuple[Instruction, Pubkey]:
    """Build ``initialize_virtual_pool_with_spl_token``.

    Returns the instruction and the pool address it creates.
    """
    pool = derive_pool_address(config, base_mint, quote_mint)
    data = (
        INIT_POOL_SPL_DISCRIMINATOR
        + encode_borsh_string(name)
        + encode_borsh_string(symbol)
        + encode_borsh_string(uri)
    )

    accounts = [
        AccountMeta(config, is_signer=False, is_writable=False),
        AccountMeta(derive_pool_authority(), is_signer=False, is_writable=False),
        AccountMeta(creator, is_signer=True, is_writable=False),
        AccountMeta(base_mint, is_signer=True, is_writable=True),
        AccountMeta(quote_mint, is_signer=False, is_writable=False),
        AccountMeta(pool, is_signer=False, is_writable=True),
        AccountMeta(derive_token_vault(base_mint, pool), is_signer=False, is_writable=True),
        AccountMeta(derive_token_vault(quote_mint, pool), is_signer=False, is_writable=True),
        AccountMeta(derive_metadata_address(base_mint), is_signer=False, is_writable=True),
        AccountMeta(METAPLEX_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),  # quote token program
        AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),  # base token program
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(derive_event_authority(), is_signer=False, is_writable=False),
        AccountMeta(DBC_PROGRAM_ID, is_signer=False, is_writable=False),
    ]
    return Instruction(DBC_PROGRAM_ID, data, accounts), pool
