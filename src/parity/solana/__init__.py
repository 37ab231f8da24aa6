"""Solana helpers: units, addresses and a JSON-RPC client."""

from parity.solana.addresses import is_valid_address, rpc_provider_name, short_address
from parity.solana.rpc import SolanaRpcClient
from parity.solana.units import (
    LAMPORTS_PER_SOL,
    format_price,
    format_sol,
    lamports_to_sol,
    sol_to_lamports,
)

__all__ = [
    "LAMPORTS_PER_SOL",
    "SolanaRpcClient",
    "format_price",
    "format_sol",
    "is_valid_address",
    "lamports_to_sol",
    "rpc_provider_name",
    "short_address",
    "sol_to_lamports",
]
