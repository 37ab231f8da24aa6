"""Meteora Dynamic Bonding Curve (DBC) program constants."""

import hashlib

from solders.pubkey import Pubkey

DBC_PROGRAM_ID = Pubkey.from_string("dbcij3LWUppWqq96dh6gJWwBifmcGfLSB5D4DuSMaqN")
TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")
METAPLEX_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")
WSOL_MINT = Pubkey.from_string("So11111111111111111111111111111111111111112")

# PDA seeds
POOL_SEED = b"pool"
TOKEN_VAULT_SEED = b"token_vault"
POOL_AUTHORITY_SEED = b"pool_authority"
EVENT_AUTHORITY_SEED = b"__event_authority"
METADATA_SEED = b"metadata"


def anchor_discriminator(namespace: str, name: str) -> bytes:
    """First 8 bytes of sha256("<namespace>:<name>")."""
    return hashlib.sha256(f"{namespace}:{name}".encode()).digest()[:8]


# Account discriminators
VIRTUAL_POOL_DISCRIMINATOR = bytes([213, 224, 5, 209, 98, 69, 119, 92])
POOL_CONFIG_DISCRIMINATOR = anchor_discriminator("account", "PoolConfig")

# Instruction discriminators
INIT_POOL_SPL_DISCRIMINATOR = anchor_discriminator(
    "global", "initialize_virtual_pool_with_spl_token"
)
