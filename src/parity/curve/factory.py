"""Curve client factory."""

from parity.config import get_settings
from parity.curve.base import CurveClient
from parity.curve.dryrun import DryRunCurveClient
from parity.curve.meteora import MeteoraCurveClient
from parity.solana.rpc import SolanaRpcClient

# Singleton instance
_client_instance: CurveClient | None = None


def get_curve_client() -> CurveClient:
    """Get the configured curve client.

    Selected by the CURVE_CLIENT environment variable:
    - dryrun (default): in-memory pools for development and tests
    - meteora: Meteora DBC program over Solana RPC
    """
    global _client_instance

    if _client_instance is not None:
        return _client_instance

    settings = get_settings()
    client_name = settings.curve_client.lower()

    if client_name == "meteora":
        rpc = SolanaRpcClient(settings.solana_rpc_url, commitment=settings.rpc_commitment)
        _client_instance = MeteoraCurveClient(
            rpc=rpc,
            config_address=settings.meteora_config_address,
            token_decimals=settings.base_token_decimals,
        )
    else:
        _client_instance = DryRunCurveClient(
            config_address=settings.meteora_config_address,
            token_decimals=settings.base_token_decimals,
        )

    return _client_instance


async def close_curve_client() -> None:
    """Close and forget the client instance."""
    global _client_instance
    if _client_instance is not None:
        await _client_instance.close()
        _client_instance = None


def reset_curve_client() -> None:
    """Reset client instance (useful for testing)."""
    global _client_instance
    _client_instance = None
