"""Request and response contracts for the web layer."""

from parity.web.contracts.chain import BalanceResponse, ChainStatusResponse, SupplyResponse
from parity.web.contracts.launches import (
    ConfirmDeployRequest,
    ConfirmDeployResponse,
    LaunchCreateRequest,
    LaunchCreatedResponse,
    LaunchResponse,
    LaunchUpdateRequest,
    PrepareDeployRequest,
    PrepareDeployResponse,
    RecoverDeployRequest,
    RecoverDeployResponse,
    SuccessResponse,
    SyncStatusResponse,
    TickerItemResponse,
)
from parity.web.contracts.pools import CandleResponse, OHLCVResponse, PoolInfoResponse

__all__ = [
    # Launch contracts
    "LaunchCreateRequest",
    "LaunchCreatedResponse",
    "LaunchResponse",
    "LaunchUpdateRequest",
    "SuccessResponse",
    # Deploy contracts
    "PrepareDeployRequest",
    "PrepareDeployResponse",
    "ConfirmDeployRequest",
    "ConfirmDeployResponse",
    "RecoverDeployRequest",
    "RecoverDeployResponse",
    "SyncStatusResponse",
    "TickerItemResponse",
    # Pool contracts
    "PoolInfoResponse",
    "CandleResponse",
    "OHLCVResponse",
    # Chain contracts
    "ChainStatusResponse",
    "SupplyResponse",
    "BalanceResponse",
]
