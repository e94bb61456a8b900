"""
Sui ledger client.

Signs and submits storage transactions on chain B via JSON-RPC.
"""

import asyncio
import base64
import logging
import re
from typing import Any, Optional

import aiohttp

from editeur.domain.exceptions import (
    LedgerException,
    LedgerTimeoutException,
    LedgerTransactionException,
)
from editeur.domain.services.i_ledger_client import ILedgerClient
from editeur.infrastructure.blockchain.sui_keypair import (
    SuiKeypair,
    transaction_digest,
)
from editeur.infrastructure.monitoring import metrics

logger = logging.getLogger(__name__)

SUI_FULLNODES = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "localnet": "http://127.0.0.1:9000",
}

# Node-side errors after which the transaction may still land
_FINALITY_TIMEOUT = re.compile(r"time[sd]?[ _-]?out|finality", re.IGNORECASE)


class SuiLedgerClient(ILedgerClient):
    """
    Chain-B transaction submitter.

    Every submission waits for local execution so the returned digest is
    final. Submissions are sent exactly once. Anything short of an answer
    from the node after the request went out (timeout, dropped connection,
    gateway 5xx) leaves the outcome unknown and is reported as
    LedgerTimeoutException with the digest.
    """

    def __init__(
        self,
        keypair: SuiKeypair,
        network: str = "testnet",
        fullnode_url: Optional[str] = None,
        finality_timeout: float = 60.0,
        connect_timeout: float = 10.0,
    ):
        """
        Initialize Sui ledger client.

        Args:
            keypair: Custodial Ed25519 keypair
            network: Network name (mainnet, testnet, devnet, localnet)
            fullnode_url: JSON-RPC endpoint (default derived from network)
            finality_timeout: Max wait for execution result in seconds
            connect_timeout: Connection timeout in seconds
        """
        if fullnode_url is None:
            if network not in SUI_FULLNODES:
                raise ValueError(f"Unknown Sui network: {network}")
            fullnode_url = SUI_FULLNODES[network]

        self.keypair = keypair
        self._network = network
        self.fullnode_url = fullnode_url
        self.timeout = aiohttp.ClientTimeout(
            total=finality_timeout,
            connect=connect_timeout,
        )
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def owner_address(self) -> str:
        return self.keypair.address

    @property
    def network(self) -> str:
        return self._network

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def transaction_digest(self, tx_bytes: str) -> str:
        return transaction_digest(base64.b64decode(tx_bytes))

    async def sign_and_execute(self, tx_bytes: str) -> str:
        raw = base64.b64decode(tx_bytes)
        digest = transaction_digest(raw)
        signature = self.keypair.sign_transaction(raw)

        logger.info(f"Submitting chain-B transaction {digest}")

        result = await self._rpc(
            "sui_executeTransactionBlock",
            [
                tx_bytes,
                [signature],
                {"showEffects": True},
                "WaitForLocalExecution",
            ],
            digest,
        )

        status = (result.get("effects") or {}).get("status") or {}
        if status.get("status") != "success":
            metrics.external_calls_total.labels(
                target="sui", operation="execute", status="failed"
            ).inc()
            raise LedgerTransactionException(
                f"Transaction {digest} failed: {status.get('error', 'unknown')}",
                details={"digest": digest, "status": status},
            )

        metrics.external_calls_total.labels(
            target="sui", operation="execute", status="success"
        ).inc()
        return result.get("digest", digest)

    async def _rpc(self, method: str, params: list, digest: str) -> Any:
        """
        Single JSON-RPC call; never retried.

        Once the request may have reached the node, any missing or unusable
        answer leaves the execution outcome unknown.

        Raises:
            LedgerTimeoutException: If the outcome is unknown (timeout, dropped
                connection, gateway error, node-side finality timeout)
            LedgerTransactionException: If the node rejected the transaction
            LedgerException: If the request could not be sent
        """
        session = await self._get_session()
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        try:
            async with session.post(self.fullnode_url, json=payload) as response:
                if response.status >= 500:
                    raise self._unknown_outcome(
                        digest, f"fullnode answered HTTP {response.status}"
                    )
                response.raise_for_status()
                data = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise self._unknown_outcome(
                digest, f"no execution result within {self.timeout.total}s"
            ) from e
        except aiohttp.ClientConnectorError as e:
            metrics.external_calls_total.labels(
                target="sui", operation="execute", status="error"
            ).inc()
            raise LedgerException(
                f"Chain-B RPC connection error: {e}",
                details={"digest": digest, "method": method},
            ) from e
        except (aiohttp.ClientConnectionError, aiohttp.ClientPayloadError) as e:
            raise self._unknown_outcome(
                digest, f"connection lost before an answer: {e}"
            ) from e
        except aiohttp.ClientError as e:
            metrics.external_calls_total.labels(
                target="sui", operation="execute", status="error"
            ).inc()
            raise LedgerException(
                f"Chain-B RPC error: {e}",
                details={"digest": digest, "method": method},
            ) from e
        except ValueError as e:
            raise self._unknown_outcome(
                digest, f"unreadable fullnode answer: {e}"
            ) from e

        if not isinstance(data, dict):
            raise self._unknown_outcome(digest, "unreadable fullnode answer")

        error = data.get("error")
        if error:
            message = error.get("message", "") if isinstance(error, dict) else error
            if _FINALITY_TIMEOUT.search(str(message)):
                raise self._unknown_outcome(digest, f"fullnode reported: {message}")
            raise LedgerTransactionException(
                f"Chain-B RPC error: {error}",
                details={"digest": digest, "error": error},
            )

        return data.get("result") or {}

    def _unknown_outcome(self, digest: str, reason: str) -> LedgerTimeoutException:
        metrics.external_calls_total.labels(
            target="sui", operation="execute", status="timeout"
        ).inc()
        logger.warning(f"Outcome of chain-B transaction {digest} unknown: {reason}")
        return LedgerTimeoutException(
            f"Outcome of {digest} unknown: {reason}", digest=digest
        )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
