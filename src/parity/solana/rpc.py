"""Minimal async Solana JSON-RPC client over httpx."""

import base64
import itertools
import logging
from typing import Any, Optional

import httpx

from parity.errors import RpcError

logger = logging.getLogger(__name__)


class SolanaRpcClient:
    """Async client for the handful of RPC methods Parity needs."""

    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rpc_url = rpc_url
        self.commitment = commitment
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._ids = itertools.count(1)

    async def _call(self, method: str, params: Optional[list] = None) -> Any:
        """Send one JSON-RPC request and return its ``result``."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        try:
            response = await self._client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"RPC {method} failed: {e}")
            raise RpcError(f"RPC {method} failed: {e}") from e

        error = data.get("error")
        if error:
            raise RpcError(
                f"RPC {method} error: {error.get('message', error)}",
                code=error.get("code"),
            )
        return data.get("result")

    def _config(self, **extra) -> dict:
        return {"commitment": self.commitment, **extra}

    async def get_slot(self) -> int:
        return await self._call("getSlot", [self._config()])

    async def get_block_height(self) -> int:
        return await self._call("getBlockHeight", [self._config()])

    async def get_epoch_info(self) -> dict:
        return await self._call("getEpochInfo", [self._config()])

    async def get_version(self) -> dict:
        return await self._call("getVersion")

    async def get_supply(self) -> dict:
        """Supply in lamports: ``total``, ``circulating``, ``nonCirculating``."""
        result = await self._call(
            "getSupply", [self._config(excludeNonCirculatingAccountsList=True)]
        )
        return result["value"]

    async def get_balance(self, address: str) -> int:
        """Balance in lamports."""
        result = await self._call("getBalance", [address, self._config()])
        return int(result["value"])

    async def get_latest_blockhash(self) -> tuple[str, int]:
        """Return (blockhash, last valid block height)."""
        result = await self._call("getLatestBlockhash", [self._config()])
        value = result["value"]
        return value["blockhash"], int(value["lastValidBlockHeight"])

    async def get_account_info(self, address: str) -> Optional[dict]:
        """Fetch an account with its data decoded to bytes.

        Returns None when the account does not exist.
        """
        result = await self._call(
            "getAccountInfo", [address, self._config(encoding="base64")]
        )
        value = (result or {}).get("value")
        if not value:
            return None

        raw = value["data"]
        b64_data = raw[0] if isinstance(raw, list) else raw
        return {
            "owner": value.get("owner"),
            "lamports": value.get("lamports", 0),
            "executable": value.get("executable", False),
            "data": base64.b64decode(b64_data),
        }

    async def close(self) -> None:
        await self._client.aclose()
