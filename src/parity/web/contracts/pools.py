"""Pool data contracts."""

from decimal import Decimal

from pydantic import BaseModel, Field


class PoolInfoResponse(BaseModel):
    """Price snapshot of a bonding curve pool."""

    pool_address: str
    base_mint: str
    base_reserve: str = Field(..., description="Base token reserve in base units")
    quote_reserve: str = Field(..., description="Quote reserve in lamports")
    spot_price: Decimal = Field(..., description="Spot price in SOL per token")
    pool_liquidity_sol: Decimal
    curve_progress_pct: Decimal = Field(..., description="Progress toward graduation")
    is_migrated: bool


class CandleResponse(BaseModel):
    time: int = Field(..., description="Unix timestamp in seconds")
    open: float
    high: float
    low: float
    close: float
    volume: float


class OHLCVResponse(BaseModel):
    pool_address: str
    timeframe: str
    aggregate: int
    candles: list[CandleResponse] = Field(default_factory=list)
