"""
Walrus storage bridge client.

HTTP client for the Node.js storage bridge that wraps the Walrus SDK
write-files flow. The bridge keeps each flow's encoded state between
calls; transactions it builds come back unsigned.

Bridge contract:
    POST /flows                  {files: [{contents, identifier, tags}]} -> {flowId}
    POST /flows/{id}/encode      -> {blobId}
    POST /flows/{id}/register    {epochs, owner, deletable} -> {transaction}
    POST /flows/{id}/upload      {digest} -> {}
    POST /flows/{id}/certify     -> {transaction}
    GET  /flows/{id}/files       -> {files, blobId}
"""

import asyncio
import base64
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from editeur.domain.exceptions import (
    StorageBridgeException,
    StorageTimeoutException,
)
from editeur.domain.services.i_storage_network import (
    IStorageNetwork,
    IWriteFlow,
    StorageFile,
)
from editeur.infrastructure.monitoring import metrics

logger = logging.getLogger(__name__)


class WalrusBridgeClient(IStorageNetwork):
    """
    Storage bridge HTTP client.

    Retries only when the connection could not be established; a request
    that reached the bridge is never repeated because flows are stateful.
    """

    def __init__(
        self,
        bridge_url: str,
        total_timeout: float = 60.0,
        connect_timeout: float = 5.0,
        max_retries: int = 3,
    ):
        """
        Initialize storage bridge client.

        Args:
            bridge_url: Storage bridge base URL
            total_timeout: Total request timeout (default: 60s)
            connect_timeout: Connection timeout (default: 5s)
            max_retries: Max connection attempts (default: 3)
        """
        self.bridge_url = bridge_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
        )
        self.max_retries = max_retries
        self._session: Optional[aiohttp.ClientSession] = None

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

    async def request(
        self,
        method: str,
        endpoint: str,
        operation: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Call a bridge endpoint.

        Args:
            method: HTTP method
            endpoint: Endpoint path (e.g., "/flows")
            operation: Operation name for metrics and errors
            data: Optional JSON body

        Returns:
            Response JSON

        Raises:
            StorageTimeoutException: On timeout
            StorageBridgeException: On connection or bridge errors
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
                retry=retry_if_exception_type(aiohttp.ClientConnectorError),
                reraise=True,
            ):
                with attempt:
                    result = await self._request_once(method, endpoint, data)
        except asyncio.TimeoutError as e:
            metrics.external_calls_total.labels(
                target="storage", operation=operation, status="timeout"
            ).inc()
            raise StorageTimeoutException(
                f"Storage bridge timeout: {operation}",
                details={"endpoint": endpoint, "timeout": self.timeout.total},
            ) from e
        except aiohttp.ClientError as e:
            metrics.external_calls_total.labels(
                target="storage", operation=operation, status="error"
            ).inc()
            raise StorageBridgeException(
                f"Storage bridge connection error: {e}",
                details={"endpoint": endpoint, "operation": operation},
            ) from e
        except StorageBridgeException:
            metrics.external_calls_total.labels(
                target="storage", operation=operation, status="error"
            ).inc()
            raise

        metrics.external_calls_total.labels(
            target="storage", operation=operation, status="success"
        ).inc()
        return result

    async def _request_once(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """Single HTTP attempt."""
        session = await self._get_session()
        url = f"{self.bridge_url}{endpoint}"

        async with session.request(method, url, json=data) as response:
            if response.status >= 400:
                error_text = await response.text()
                raise StorageBridgeException(
                    f"Storage bridge returned {response.status}: {error_text}",
                    details={"endpoint": endpoint, "status": response.status},
                )
            return await response.json(content_type=None) or {}

    async def open_write_flow(self, files: List[StorageFile]) -> IWriteFlow:
        """
        Start a write flow for the given files.

        Args:
            files: Files to store together as one blob

        Returns:
            WalrusWriteFlow bound to the bridge-side flow
        """
        payload = {
            "files": [
                {
                    "contents": base64.b64encode(f.contents).decode(),
                    "identifier": f.identifier,
                    "tags": f.tags,
                }
                for f in files
            ]
        }
        data = await self.request("POST", "/flows", "open_flow", payload)

        flow_id = data.get("flowId")
        if not flow_id:
            raise StorageBridgeException(
                "Storage bridge did not return a flow id", details=data
            )

        logger.debug(f"Opened storage write flow {flow_id}")
        return WalrusWriteFlow(self, flow_id)

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()


class WalrusWriteFlow(IWriteFlow):
    """One bridge-side write flow."""

    def __init__(self, client: WalrusBridgeClient, flow_id: str):
        self.client = client
        self.flow_id = flow_id
        self._blob_id: Optional[str] = None

    @property
    def blob_id(self) -> Optional[str]:
        return self._blob_id

    async def encode(self) -> None:
        data = await self._post("encode")
        self._blob_id = data.get("blobId") or self._blob_id

    async def register(self, epochs: int, owner: str, deletable: bool) -> str:
        data = await self._post(
            "register",
            {"epochs": epochs, "owner": owner, "deletable": deletable},
        )
        return self._transaction(data, "register")

    async def upload(self, digest: str) -> None:
        await self._post("upload", {"digest": digest})

    async def certify(self) -> str:
        data = await self._post("certify")
        return self._transaction(data, "certify")

    async def list_files(self) -> List[Dict[str, Any]]:
        data = await self.client.request(
            "GET", f"/flows/{self.flow_id}/files", "list_files"
        )
        self._blob_id = data.get("blobId") or self._blob_id
        return data.get("files", [])

    async def _post(
        self, action: str, payload: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self.client.request(
            "POST", f"/flows/{self.flow_id}/{action}", action, payload or {}
        )

    def _transaction(self, data: Dict[str, Any], action: str) -> str:
        transaction = data.get("transaction")
        if not transaction:
            raise StorageBridgeException(
                f"Storage bridge returned no {action} transaction",
                details={"flowId": self.flow_id},
            )
        return transaction
