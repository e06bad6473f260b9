"""EVM JSON-RPC provider backed by web3's AsyncWeb3."""

import asyncio
import logging
from typing import Any

import aiohttp
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import TransactionNotFound

from bridgeagg.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

# Transport failures worth retrying, HTTP 429/5xx included; RPC errors (reverts etc.) surface unchanged
_TRANSIENT = (asyncio.TimeoutError, ConnectionError, OSError, aiohttp.ClientError)


class EvmProvider:
    """One chain's RPC endpoint. Returns plain dicts so callers never depend on web3 types."""

    def __init__(self, name: str, chain_id: int, rpc_url: str, w3: AsyncWeb3 | None = None) -> None:
        self.name = name
        self.chain_id = chain_id
        self.rpc_url = rpc_url
        self._w3 = w3 or AsyncWeb3(AsyncHTTPProvider(rpc_url))

    def __repr__(self) -> str:
        return f"EvmProvider({self.name!r}, chain_id={self.chain_id})"

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
    )
    async def _request(self, method: str, *args: Any) -> Any:
        try:
            return await getattr(self._w3.eth, method)(*args)
        except _TRANSIENT as e:
            raise ExternalServiceError(f"{self.name} RPC {method} failed: {e}") from e

    async def get_logs(
        self,
        from_block: int,
        to_block: int,
        topics: list[str | None],
        address: str | None = None,
    ) -> list[dict]:
        params: dict[str, Any] = {"fromBlock": from_block, "toBlock": to_block, "topics": topics}
        if address is not None:
            params["address"] = address
        logs = await self._request("get_logs", params)
        return [dict(log) for log in logs]

    async def get_transaction_receipt(self, tx_hash: str) -> dict | None:
        """Receipt for tx_hash, or None when the node does not know the transaction."""
        try:
            receipt = await self._request("get_transaction_receipt", tx_hash)
        except TransactionNotFound:
            return None
        if receipt is None:
            return None
        return {**receipt, "logs": [dict(log) for log in receipt["logs"]]}

    async def get_transaction(self, tx_hash: str) -> dict | None:
        try:
            tx = await self._request("get_transaction", tx_hash)
        except TransactionNotFound:
            return None
        return dict(tx) if tx is not None else None

    async def get_block_timestamp(self, block_number: int) -> int:
        """Block timestamp in Unix seconds."""
        block = await self._request("get_block", block_number)
        return int(block["timestamp"])

    async def call(self, to: str, data: str) -> bytes:
        result = await self._request("call", {"to": to, "data": data})
        return bytes(result)
