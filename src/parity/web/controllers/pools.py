"""Pool API endpoints (read-only)."""

from fastapi import APIRouter, HTTPException, Query

from parity.curve.factory import get_curve_client
from parity.solana.addresses import is_valid_address
from parity.web.contracts.pools import OHLCVResponse, PoolInfoResponse
from parity.web.dependencies import get_market_client
from parity.web.services.pool_service import PoolService

router = APIRouter(prefix="/pools", tags=["pools"])


def _service() -> PoolService:
    return PoolService(get_curve_client(), get_market_client())


def _check_address(pool_address: str) -> None:
    if not is_valid_address(pool_address):
        raise HTTPException(status_code=422, detail="Invalid Solana address")


@router.get("/{pool_address}", response_model=PoolInfoResponse)
async def get_pool_info(pool_address: str) -> PoolInfoResponse:
    """Spot price, liquidity and curve progress of a pool."""
    _check_address(pool_address)
    return await _service().get_pool_info(pool_address)


@router.get("/{pool_address}/ohlcv", response_model=OHLCVResponse)
async def get_pool_ohlcv(
    pool_address: str,
    timeframe: str = Query("hour", pattern="^(minute|hour|day)$"),
    aggregate: int = Query(1, ge=1, le=60),
    limit: int = Query(100, ge=1, le=1000),
) -> OHLCVResponse:
    """Candlestick data for a pool. Empty when market data is unavailable."""
    _check_address(pool_address)
    try:
        return await _service().get_ohlcv(pool_address, timeframe, aggregate, limit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
