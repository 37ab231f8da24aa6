"""Solana address helpers."""

from solders.pubkey import Pubkey

# Substring in the RPC URL -> provider display name
_RPC_PROVIDERS = (
    ("helius", "Helius"),
    ("quicknode", "QuickNode"),
    ("genesysgo", "GenesysGo"),
    ("triton", "Triton"),
)


def is_valid_address(value: str) -> bool:
    """Check that a string is a base58-encoded 32-byte public key."""
    if not value or not isinstance(value, str):
        return False
    try:
        Pubkey.from_string(value)
    except ValueError:
        return False
    return True


def short_address(address: str) -> str:
    """Abbreviate an address for logs, e.g. ``66pJhh...39KV``."""
    if len(address) <= 12:
        return address
    return f"{address[:6]}...{address[-4:]}"


def rpc_provider_name(url: str) -> str:
    """Human-readable name of the RPC provider behind a URL."""
    lowered = url.lower()
    for marker, name in _RPC_PROVIDERS:
        if marker in lowered:
            return name
    return "Public RPC"
