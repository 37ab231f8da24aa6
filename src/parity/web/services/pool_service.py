"""Pool service: on-chain price data and market candles."""

from parity.curve.base import CurveClient
from parity.errors import PoolNotFoundError
from parity.market.geckoterminal import GeckoTerminalClient
from parity.web.contracts.pools import CandleResponse, OHLCVResponse, PoolInfoResponse


class PoolService:
    """Read-only access to pools created by launches."""

    def __init__(self, curve_client: CurveClient, market_client: GeckoTerminalClient):
        self.curve = curve_client
        self.market = market_client

    async def get_pool_info(self, pool_address: str) -> PoolInfoResponse:
        """Current price snapshot.

        Raises:
            PoolNotFoundError: no pool account at the address
        """
        price = await self.curve.get_pool_price(pool_address)
        if price is None:
            raise PoolNotFoundError()

        return PoolInfoResponse(
            pool_address=price.pool_address,
            base_mint=price.base_mint,
            base_reserve=price.base_reserve,
            quote_reserve=price.quote_reserve,
            spot_price=price.spot_price,
            pool_liquidity_sol=price.pool_liquidity_sol,
            curve_progress_pct=price.curve_progress_pct,
            is_migrated=price.is_migrated,
        )

    async def get_ohlcv(
        self,
        pool_address: str,
        timeframe: str = "hour",
        aggregate: int = 1,
        limit: int = 100,
    ) -> OHLCVResponse:
        candles = await self.market.get_ohlcv(pool_address, timeframe, aggregate, limit)
        return OHLCVResponse(
            pool_address=pool_address,
            timeframe=timeframe,
            aggregate=aggregate,
            candles=[
                CandleResponse(
                    time=c.time,
                    open=c.open,
                    high=c.high,
                    low=c.low,
                    close=c.close,
                    volume=c.volume,
                )
                for c in candles
            ],
        )
