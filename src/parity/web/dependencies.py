"""Shared network clients used by the web controllers."""

from parity.config import get_settings
from parity.market.geckoterminal import GeckoTerminalClient
from parity.solana.rpc import SolanaRpcClient

_rpc_client: SolanaRpcClient | None = None
_market_client: GeckoTerminalClient | None = None


def get_rpc_client() -> SolanaRpcClient:
    """Get or create the Solana RPC client."""
    global _rpc_client
    if _rpc_client is None:
        settings = get_settings()
        _rpc_client = SolanaRpcClient(settings.solana_rpc_url, commitment=settings.rpc_commitment)
    return _rpc_client


def get_market_client() -> GeckoTerminalClient:
    """Get or create the GeckoTerminal client."""
    global _market_client
    if _market_client is None:
        _market_client = GeckoTerminalClient(base_url=get_settings().geckoterminal_api_url)
    return _market_client


async def close_clients() -> None:
    """Close shared clients on shutdown."""
    global _rpc_client, _market_client
    if _rpc_client is not None:
        await _rpc_client.close()
        _rpc_client = None
    if _market_client is not None:
        await _market_client.close()
        _market_client = None
