"""
EVM JSON-RPC client.

Read-only chain-A access for top-up verification.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from editeur.domain.exceptions import ChainUnavailableError
from editeur.domain.services.i_chain_reader import (
    ChainReceipt,
    ChainTransaction,
    IChainReader,
)
from editeur.infrastructure.monitoring import metrics

logger = logging.getLogger(__name__)


def _to_int(value: Optional[str]) -> Optional[int]:
    """Decode a JSON-RPC quantity ("0x..."), passing None through."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    return int(value, 16)


class RPCError(Exception):
    """JSON-RPC node returned an error object."""

    def __init__(self, method: str, error: Any):
        self.method = method
        self.error = error
        super().__init__(f"RPC error on {method}: {error}")


class EvmRpcClient(IChainReader):
    """
    Chain-A JSON-RPC reader.

    All calls are idempotent reads, retried with exponential backoff on
    connection errors and timeouts. Exhausted retries surface as
    ChainUnavailableError.
    """

    def __init__(
        self,
        rpc_url: str,
        total_timeout: float = 10.0,
        connect_timeout: float = 3.0,
        max_retries: int = 3,
    ):
        """
        Initialize EVM RPC client.

        Args:
            rpc_url: Chain-A JSON-RPC endpoint URL
            total_timeout: Total request timeout in seconds (default: 10s)
            connect_timeout: Connection timeout in seconds (default: 3s)
            max_retries: Max attempts for transient failures (default: 3)
        """
        self.rpc_url = rpc_url
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
        )
        self.max_retries = max_retries
        self._session: Optional[aiohttp.ClientSession] = None
        self._request_id = 0

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=aiohttp.TCPConnector(
                    limit=50,
                    limit_per_host=20,
                    ttl_dns_cache=300,
                ),
            )
        return self._session

    async def call(self, method: str, params: Optional[list] = None) -> Any:
        """
        Call a JSON-RPC method with retries.

        Args:
            method: RPC method name
            params: Method parameters

        Returns:
            The "result" member of the response (may be None)

        Raises:
            ChainUnavailableError: If the node is unreachable or answers
                with an error
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
                retry=retry_if_exception_type(
                    (aiohttp.ClientError, asyncio.TimeoutError)
                ),
                reraise=True,
            ):
                with attempt:
                    result = await self._call_once(method, params or [])
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            metrics.external_calls_total.labels(
                target="evm", operation=method, status="unavailable"
            ).inc()
            logger.warning(
                f"Chain A unreachable after {self.max_retries} attempts "
                f"({method}): {e}"
            )
            raise ChainUnavailableError(
                f"Chain A RPC unreachable after {self.max_retries} attempts: "
                f"{e or type(e).__name__}",
                method=method,
            ) from e
        except RPCError as e:
            metrics.external_calls_total.labels(
                target="evm", operation=method, status="error"
            ).inc()
            raise ChainUnavailableError(str(e), method=method) from e

        metrics.external_calls_total.labels(
            target="evm", operation=method, status="success"
        ).inc()
        return result

    async def _call_once(self, method: str, params: list) -> Any:
        """
        Single JSON-RPC attempt.

        Raises:
            RPCError: If the node returned an error object or an unreadable body
            aiohttp.ClientError: Network errors and 5xx (will be retried)
        """
        session = await self._get_session()
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        async with session.post(self.rpc_url, json=payload) as response:
            if response.status >= 500:
                raise aiohttp.ClientError(f"Server error {response.status}")
            response.raise_for_status()
            try:
                data = await response.json(content_type=None)
            except ValueError as e:
                raise RPCError(method, f"unreadable response body: {e}") from e

        if not isinstance(data, dict):
            raise RPCError(method, f"unexpected response: {data!r:.100}")

        if data.get("error"):
            raise RPCError(method, data["error"])

        return data.get("result")

    async def get_transaction(self, tx_hash: str) -> Optional[ChainTransaction]:
        result = await self.call("eth_getTransactionByHash", [tx_hash])
        if not result:
            return None

        return ChainTransaction(
            tx_hash=result.get("hash", tx_hash),
            from_address=result.get("from"),
            to_address=result.get("to"),
            value=_to_int(result.get("value")) or 0,
            block_number=_to_int(result.get("blockNumber")),
        )

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[ChainReceipt]:
        result = await self.call("eth_getTransactionReceipt", [tx_hash])
        if not result:
            return None

        return ChainReceipt(
            tx_hash=result.get("transactionHash", tx_hash),
            status=_to_int(result.get("status")),
            block_number=_to_int(result.get("blockNumber")),
        )

    async def get_block_number(self) -> int:
        return _to_int(await self.call("eth_blockNumber"))

    async def get_chain_id(self) -> int:
        return _to_int(await self.call("eth_chainId"))

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
