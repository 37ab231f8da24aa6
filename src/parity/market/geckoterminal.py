"""GeckoTerminal OHLCV client.

API docs: https://www.geckoterminal.com/dex-api
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from parity.solana.addresses import short_address

logger = logging.getLogger(__name__)

TIMEFRAMES = ("minute", "hour", "day")
MAX_LIMIT = 1000


@dataclass
class Candle:
    """One OHLCV candle; ``time`` is a unix timestamp in seconds."""

    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float


class GeckoTerminalClient:
    """Fetches candlestick data for Solana pools."""

    def __init__(
        self,
        base_url: str = "https://api.geckoterminal.com/api/v2",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def get_ohlcv(
        self,
        pool_address: str,
        timeframe: str = "hour",
        aggregate: int = 1,
        limit: int = 100,
    ) -> list[Candle]:
        """Candles for a pool in chronological order.

        Args:
            pool_address: Solana pool address
            timeframe: minute, hour or day
            aggregate: Time units per candle (e.g. 5 for 5-minute candles)
            limit: Number of candles (capped at 1000)

        Returns:
            Candles sorted by time; empty when the API fails or has no data.
        """
        if timeframe not in TIMEFRAMES:
            raise ValueError(f"Unsupported timeframe: {timeframe}")

        params = {
            "aggregate": aggregate,
            "limit": min(limit, MAX_LIMIT),
            "currency": "usd",
            "token": "base",
        }
        try:
            response = await self._client.get(
                f"/networks/solana/pools/{pool_address}/ohlcv/{timeframe}", params=params
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"GeckoTerminal API error: {e.response.status_code} "
                f"for {short_address(pool_address)}"
            )
            return []
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch OHLCV data for {short_address(pool_address)}: {e}")
            return []

        rows = ((data.get("data") or {}).get("attributes") or {}).get("ohlcv_list")
        if not rows:
            return []

        # Rows are [timestamp, open, high, low, close, volume]
        candles = [
            Candle(
                time=int(row[0]),
                open=float(row[1]),
                high=float(row[2]),
                low=float(row[3]),
                close=float(row[4]),
                volume=float(row[5]),
            )
            for row in rows
        ]
        candles.sort(key=lambda c: c.time)
        return candles

    async def close(self) -> None:
        await self._client.aclose()
