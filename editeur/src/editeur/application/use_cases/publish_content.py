"""
Publish Content use case.

Charges the publish fee and drives the storage write protocol on chain B.
CRITICAL: The fee is committed before any network call and is not refunded
on failure. Register and certify transactions are never resubmitted.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, List, Optional

from editeur.domain.entities.publication import (
    ContentMetadata,
    PublishRequest,
    PublishStep,
    StorageReceipt,
)
from editeur.domain.exceptions import (
    AmbiguousOutcomeError,
    InsufficientBalanceError,
    InsufficientFundsError,
    LedgerTimeoutException,
    LedgerTransactionException,
    MalformedInputError,
    PublishFailedError,
    StorageTimeoutException,
)
from editeur.domain.repositories.i_credit_ledger import ICreditLedger
from editeur.domain.services.i_ledger_client import ILedgerClient
from editeur.domain.services.i_storage_network import (
    IStorageNetwork,
    IWriteFlow,
    StorageFile,
)
from editeur.domain.value_objects import normalize_identity
from editeur.infrastructure.monitoring import metrics

logger = logging.getLogger(__name__)


class PublishContent:
    """
    Publish content on behalf of a prepaid payer.

    Sequence (strict):
    1. Fee check against balance (no mutation, no network)
    2. Debit fee - the fee commitment point
    3. encode
    4. register (build, sign, submit, await finality)
    5. upload (addressed by the register digest)
    6. certify (build, sign, submit, await finality)
    7. list_files

    Failure policy after step 2:
    - Any failure -> PublishFailedError(step), fee stays charged
    - Finality timeout in register/certify -> AmbiguousOutcomeError(step, digest)
    - Timeout in encode/upload/list_files -> PublishFailedError(step, retryable)
    """

    def __init__(
        self,
        ledger: ICreditLedger,
        storage_network: IStorageNetwork,
        ledger_client: ILedgerClient,
        store_fee: int,
        storage_timeout: float = 60.0,
        finality_timeout: float = 60.0,
    ):
        """
        Initialize use case with dependencies.

        Args:
            ledger: Credit ledger
            storage_network: Content-storage network client
            ledger_client: Chain-B signer and submitter
            store_fee: Fee per publish in wei
            storage_timeout: Bound for each storage network step (seconds)
            finality_timeout: Bound for each chain-B finality wait (seconds)
        """
        if store_fee <= 0:
            raise ValueError(f"Store fee must be positive: {store_fee}")

        self.ledger = ledger
        self.storage_network = storage_network
        self.ledger_client = ledger_client
        self.store_fee = store_fee
        self.storage_timeout = storage_timeout
        self.finality_timeout = finality_timeout

    async def execute(
        self,
        identity: str,
        content: bytes,
        metadata: Optional[ContentMetadata] = None,
    ) -> StorageReceipt:
        """
        Execute publish.

        Args:
            identity: Payer address, any letter case
            content: Raw content bytes
            metadata: Content metadata (defaults applied when None)

        Returns:
            StorageReceipt with content id and remaining balance

        Raises:
            MalformedInputError: If identity or content is invalid
            UnknownAccountError: If payer was never registered
            InsufficientFundsError: If balance does not cover the fee
            PublishFailedError: If a step after the debit failed
            AmbiguousOutcomeError: If a chain-B finality wait timed out
        """
        identity = normalize_identity(identity)

        try:
            request = PublishRequest(
                identity=identity,
                content=content,
                metadata=metadata or ContentMetadata(),
            )
        except ValueError as e:
            raise MalformedInputError("content", str(e)) from e

        fee = self.store_fee

        # 1. Fee check (raises UnknownAccountError)
        balance = self.ledger.balance_of(identity)
        if balance < fee:
            metrics.publish_total.labels(
                result="insufficient_funds", step="fee_check"
            ).inc()
            raise InsufficientFundsError(identity, balance, fee)

        # 2. Fee commitment point
        try:
            account = self.ledger.debit(identity, fee)
        except InsufficientBalanceError as e:
            # A concurrent publish won the race for the same balance
            metrics.publish_total.labels(
                result="insufficient_funds", step="fee_check"
            ).inc()
            raise InsufficientFundsError(identity, e.balance, fee) from e

        logger.info(
            f"Fee {fee} charged to {identity}, publishing {request.size} bytes",
            extra={"identity": identity, "fee": str(fee)},
        )

        started = time.monotonic()
        try:
            receipt = await self._run_steps(request, fee, account.balance)
        except PublishFailedError as e:
            metrics.publish_total.labels(result="failed", step=e.step).inc()
            logger.error(
                f"Publish failed for {identity} at step {e.step} after fee "
                f"{fee} was charged: {e.reason}",
                extra={
                    "identity": identity,
                    "step": e.step,
                    "fee": str(fee),
                    "retryable": e.retryable,
                },
            )
            raise
        except AmbiguousOutcomeError as e:
            metrics.publish_total.labels(result="ambiguous", step=e.step).inc()
            logger.error(
                f"Publish outcome unknown for {identity} at step {e.step} "
                f"(digest {e.digest}) after fee {fee} was charged",
                extra={
                    "identity": identity,
                    "step": e.step,
                    "digest": e.digest,
                    "fee": str(fee),
                },
            )
            raise
        finally:
            metrics.publish_duration_seconds.observe(time.monotonic() - started)

        metrics.publish_total.labels(result="success", step="").inc()
        logger.info(
            f"Published {receipt.content_id} for {identity}",
            extra={"identity": identity, "content_id": receipt.content_id},
        )
        return receipt

    async def _run_steps(
        self, request: PublishRequest, fee: int, remaining_balance: int
    ) -> StorageReceipt:
        """Steps 3-7. Every exception leaving here is a publish error."""
        metadata = request.metadata
        files = [
            StorageFile(
                contents=request.content,
                identifier=metadata.filename,
                tags={"content-type": metadata.content_type},
            )
        ]

        # 3. Encode
        flow: IWriteFlow = await self._storage_step(
            PublishStep.ENCODE, self._open_and_encode(files), fee
        )

        # 4. Register
        register_tx = await self._storage_step(
            PublishStep.REGISTER,
            flow.register(
                epochs=metadata.storage_epochs,
                owner=self.ledger_client.owner_address,
                deletable=metadata.deletable,
            ),
            fee,
        )
        register_digest = await self._finalize(PublishStep.REGISTER, register_tx, fee)

        # 5. Upload
        await self._storage_step(
            PublishStep.UPLOAD, flow.upload(register_digest), fee
        )

        # 6. Certify
        certify_tx = await self._storage_step(PublishStep.CERTIFY, flow.certify(), fee)
        certify_digest = await self._finalize(PublishStep.CERTIFY, certify_tx, fee)

        # 7. Read back
        stored_files: List[dict] = await self._storage_step(
            PublishStep.LIST_FILES, flow.list_files(), fee
        )

        content_id = flow.blob_id
        if not content_id:
            raise PublishFailedError(
                PublishStep.LIST_FILES.value,
                "storage network returned no content id",
                fee_charged=fee,
            )

        return StorageReceipt(
            content_id=content_id,
            files=stored_files,
            metadata=metadata,
            fee_charged=fee,
            remaining_balance=remaining_balance,
            register_digest=register_digest,
            certify_digest=certify_digest,
        )

    async def _open_and_encode(self, files: List[StorageFile]) -> IWriteFlow:
        flow = await self.storage_network.open_write_flow(files)
        await flow.encode()
        return flow

    async def _storage_step(
        self, step: PublishStep, call: Awaitable[Any], fee: int
    ) -> Any:
        """Run one storage network call under the step timeout."""
        try:
            return await asyncio.wait_for(call, timeout=self.storage_timeout)
        except (asyncio.TimeoutError, StorageTimeoutException) as e:
            raise PublishFailedError(
                step.value,
                f"storage network timed out: {e}",
                retryable=True,
                fee_charged=fee,
            ) from e
        except Exception as e:
            raise PublishFailedError(step.value, str(e), fee_charged=fee) from e

    async def _finalize(self, step: PublishStep, tx_bytes: str, fee: int) -> str:
        """Sign and submit a chain-B transaction exactly once."""
        try:
            digest = self.ledger_client.transaction_digest(tx_bytes)
        except Exception as e:
            raise PublishFailedError(
                step.value, f"unusable transaction: {e}", fee_charged=fee
            ) from e

        try:
            return await asyncio.wait_for(
                self.ledger_client.sign_and_execute(tx_bytes),
                timeout=self.finality_timeout,
            )
        except asyncio.TimeoutError as e:
            raise AmbiguousOutcomeError(step.value, digest, fee_charged=fee) from e
        except LedgerTimeoutException as e:
            raise AmbiguousOutcomeError(
                step.value, e.digest or digest, fee_charged=fee
            ) from e
        except LedgerTransactionException as e:
            raise PublishFailedError(step.value, e.message, fee_charged=fee) from e
        except Exception as e:
            raise PublishFailedError(step.value, str(e), fee_charged=fee) from e
