"""Web services.

These services never hold or use a creator's key. Deploys are prepared here
and signed in the creator's wallet.
"""

from parity.web.services.chain_service import ChainService
from parity.web.services.launch_service import LaunchService
from parity.web.services.pool_service import PoolService

__all__ = [
    "ChainService",
    "LaunchService",
    "PoolService",
]
