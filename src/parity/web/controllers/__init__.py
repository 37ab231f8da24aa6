"""HTTP controllers for web API endpoints.

No controller signs or submits transactions; deploys are signed in the
creator's wallet.
"""

from parity.web.controllers.chain import router as chain_router
from parity.web.controllers.config import router as config_router
from parity.web.controllers.explore import router as explore_router
from parity.web.controllers.launches import router as launches_router
from parity.web.controllers.pools import router as pools_router

__all__ = [
    "chain_router",
    "config_router",
    "explore_router",
    "launches_router",
    "pools_router",
]
