"""
Unit tests for PublishContent use case.

Covers the fee gate, the fee commitment point, the strict step order and
the failure policy after the debit.

Usage:
    pytest editeur/tests/unit/application/test_publish_content.py
"""

import asyncio
import base64
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from conftest import PAYER, PAYER_CHECKSUM, SUI_OWNER, SUI_TEST_KEY, TX_A
from editeur.application.use_cases import PublishContent
from editeur.domain.entities.publication import ContentMetadata
from editeur.domain.exceptions import (
    AmbiguousOutcomeError,
    InsufficientFundsError,
    LedgerTimeoutException,
    LedgerTransactionException,
    MalformedInputError,
    PublishFailedError,
    StorageBridgeException,
    StorageTimeoutException,
    UnknownAccountError,
)
from editeur.infrastructure.blockchain import SuiKeypair, SuiLedgerClient

FEE = 10
FULL_SEQUENCE = ["encode", "register", "upload", "certify", "list_files"]


@pytest.fixture
def publish(ledger, storage_network, ledger_client) -> PublishContent:
    return PublishContent(
        ledger=ledger,
        storage_network=storage_network,
        ledger_client=ledger_client,
        store_fee=FEE,
        storage_timeout=1.0,
        finality_timeout=1.0,
    )


@pytest.fixture
def funded(ledger):
    """Register PAYER with exactly one fee worth of balance."""
    ledger.register(PAYER)
    ledger.credit(PAYER, TX_A, FEE)
    return ledger


class TestPublishContent:
    """Unit tests for PublishContent."""

    # ================================================================
    # Construction
    # ================================================================

    @pytest.mark.parametrize("fee", [0, -1])
    def test_fee_must_be_positive(self, ledger, storage_network, ledger_client, fee):
        """Test a non-positive fee is refused at construction."""
        with pytest.raises(ValueError):
            PublishContent(ledger, storage_network, ledger_client, store_fee=fee)

    # ================================================================
    # Success
    # ================================================================

    async def test_publish_success(self, funded, storage_network, publish):
        """Test full step order, debit and receipt contents."""
        receipt = await publish.execute(
            PAYER_CHECKSUM,
            b"hello",
            ContentMetadata(filename="hello.txt", storage_epochs=5),
        )

        assert storage_network.calls == FULL_SEQUENCE
        assert receipt.content_id == "blob-xyz"
        assert receipt.fee_charged == FEE
        assert receipt.remaining_balance == 0
        assert receipt.register_digest == "digest-register-tx"
        assert receipt.certify_digest == "digest-certify-tx"
        assert receipt.files[0]["identifier"] == "hello.txt"
        assert funded.balance_of(PAYER) == 0

    async def test_register_arguments(self, funded, storage_network, publish):
        """Test register uses the chain-B owner, epochs and deletable flag."""
        await publish.execute(
            PAYER,
            b"data",
            ContentMetadata(storage_epochs=7, immutable=False),
        )

        assert storage_network.register_args == {
            "epochs": 7,
            "owner": SUI_OWNER,
            "deletable": True,
        }

    async def test_upload_uses_register_digest(self, funded, storage_network, publish):
        """Test upload is addressed by the finalized register digest."""
        await publish.execute(PAYER, b"data")

        assert storage_network.upload_digest == "digest-register-tx"

    async def test_both_transactions_submitted_once(
        self, funded, ledger_client, publish
    ):
        """Test register and certify are each submitted exactly once."""
        await publish.execute(PAYER, b"data")

        assert ledger_client.submitted == ["register", "certify"]

    async def test_file_tagged_with_content_type(
        self, funded, storage_network, publish
    ):
        """Test the file carries its content type as a tag."""
        await publish.execute(
            PAYER, b"text", ContentMetadata(content_type="text/plain")
        )

        flow = storage_network.flows[0]
        assert flow.files[0].tags == {"content-type": "text/plain"}
        assert flow.files[0].contents == b"text"

    # ================================================================
    # Before the fee commitment point
    # ================================================================

    async def test_insufficient_funds_no_network(
        self, ledger, storage_network, ledger_client, publish
    ):
        """Test low balance: nothing debited, no network call."""
        ledger.register(PAYER)
        ledger.credit(PAYER, TX_A, FEE - 1)

        with pytest.raises(InsufficientFundsError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.details["balance"] == str(FEE - 1)
        assert exc_info.value.details["required"] == str(FEE)
        assert ledger.balance_of(PAYER) == FEE - 1
        assert storage_network.calls == []
        assert storage_network.flows == []
        assert ledger_client.submitted == []

    async def test_unknown_account(self, storage_network, publish):
        """Test unregistered payer is rejected without a network call."""
        with pytest.raises(UnknownAccountError):
            await publish.execute(PAYER, b"data")

        assert storage_network.calls == []

    async def test_empty_content(self, funded, storage_network, publish):
        """Test empty content is malformed and nothing is charged."""
        with pytest.raises(MalformedInputError) as exc_info:
            await publish.execute(PAYER, b"")

        assert exc_info.value.field == "content"
        assert funded.balance_of(PAYER) == FEE
        assert storage_network.calls == []

    async def test_malformed_identity(self, storage_network, publish):
        """Test malformed identity is rejected first."""
        with pytest.raises(MalformedInputError):
            await publish.execute("not-an-address", b"data")

    # ================================================================
    # After the fee commitment point
    # ================================================================

    async def test_upload_failure_keeps_fee(
        self, funded, storage_network, ledger_client, publish
    ):
        """Test upload failure: PublishFailed(upload), fee stays charged."""
        storage_network.failures["upload"] = StorageBridgeException("bridge 500")

        with pytest.raises(PublishFailedError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.step == "upload"
        assert exc_info.value.retryable is False
        assert exc_info.value.fee_charged == FEE
        assert funded.balance_of(PAYER) == 0
        assert storage_network.calls == ["encode", "register", "upload"]
        assert ledger_client.submitted == ["register"]

    async def test_open_failure_reported_as_encode(
        self, funded, storage_network, publish
    ):
        """Test failing to open the write flow fails the encode step."""
        storage_network.failures["open"] = StorageBridgeException("refused")

        with pytest.raises(PublishFailedError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.step == "encode"
        assert funded.balance_of(PAYER) == 0

    @pytest.mark.parametrize("step", FULL_SEQUENCE)
    async def test_failure_stops_sequence(
        self, funded, storage_network, publish, step
    ):
        """Test no step after the failing one is attempted."""
        storage_network.failures[step] = RuntimeError("boom")

        with pytest.raises(PublishFailedError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.step == step
        index = FULL_SEQUENCE.index(step)
        assert storage_network.calls == FULL_SEQUENCE[: index + 1]

    async def test_storage_timeout_is_retryable(
        self, funded, storage_network, ledger_client
    ):
        """Test a storage step over its time bound is retryable."""
        publish = PublishContent(
            ledger=funded,
            storage_network=storage_network,
            ledger_client=ledger_client,
            store_fee=FEE,
            storage_timeout=0.05,
        )
        storage_network.delays["encode"] = 1.0

        with pytest.raises(PublishFailedError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.step == "encode"
        assert exc_info.value.retryable is True

    async def test_bridge_timeout_exception_is_retryable(
        self, funded, storage_network, publish
    ):
        """Test a bridge-reported timeout is retryable too."""
        storage_network.failures["list_files"] = StorageTimeoutException("slow")

        with pytest.raises(PublishFailedError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.step == "list_files"
        assert exc_info.value.retryable is True

    async def test_register_finality_timeout_is_ambiguous(
        self, funded, storage_network, ledger_client
    ):
        """Test finality wait timeout: ambiguous with digest, no resubmit."""
        ledger_client.delays["register"] = 1.0
        publish = PublishContent(
            ledger=funded,
            storage_network=storage_network,
            ledger_client=ledger_client,
            store_fee=FEE,
            finality_timeout=0.05,
        )

        with pytest.raises(AmbiguousOutcomeError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.step == "register"
        assert exc_info.value.digest == "digest-register-tx"
        assert ledger_client.submitted == ["register"]
        assert "upload" not in storage_network.calls
        assert funded.balance_of(PAYER) == 0

    async def test_ledger_timeout_exception_is_ambiguous(
        self, funded, ledger_client, publish
    ):
        """Test client-reported finality timeout keeps its digest."""
        ledger_client.failures["certify"] = LedgerTimeoutException(
            "no finality", digest="digest-from-node"
        )

        with pytest.raises(AmbiguousOutcomeError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.step == "certify"
        assert exc_info.value.digest == "digest-from-node"
        assert ledger_client.submitted == ["register", "certify"]

    async def test_rejected_certify_fails(
        self, funded, storage_network, ledger_client, publish
    ):
        """Test an executed-but-failed certify transaction fails the publish."""
        ledger_client.failures["certify"] = LedgerTransactionException(
            "effects status failure"
        )

        with pytest.raises(PublishFailedError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.step == "certify"
        assert "list_files" not in storage_network.calls

    async def test_missing_content_id_fails(self, funded, storage_network, publish):
        """Test a flow that never yields a content id fails at list_files."""
        storage_network.blob_id = None

        with pytest.raises(PublishFailedError) as exc_info:
            await publish.execute(PAYER, b"data")

        assert exc_info.value.step == "list_files"

    # ================================================================
    # Chain-B answers that leave the outcome unknown
    # ================================================================

    @pytest.mark.parametrize(
        "post_effect",
        [
            aiohttp.ServerDisconnectedError(),
            "node_finality_timeout",
            "gateway_timeout",
        ],
    )
    async def test_register_unknown_outcome_is_ambiguous(
        self, funded, storage_network, post_effect
    ):
        """Test lost answers from the fullnode surface the register digest."""
        sui_client = SuiLedgerClient(
            SuiKeypair.from_secret(SUI_TEST_KEY), network="localnet"
        )
        session = _fullnode_session(post_effect)
        publish = PublishContent(
            ledger=funded,
            storage_network=storage_network,
            ledger_client=sui_client,
            store_fee=FEE,
            finality_timeout=1.0,
        )

        with patch.object(
            sui_client, "_get_session", AsyncMock(return_value=session)
        ):
            with pytest.raises(AmbiguousOutcomeError) as exc_info:
                await publish.execute(PAYER, b"data")

        register_tx = base64.b64encode(b"register-tx").decode()
        assert exc_info.value.step == "register"
        assert exc_info.value.digest == sui_client.transaction_digest(register_tx)
        assert exc_info.value.details["digest"] == exc_info.value.digest
        assert session.post.call_count == 1
        assert "upload" not in storage_network.calls
        assert funded.balance_of(PAYER) == 0

    # ================================================================
    # Concurrency
    # ================================================================

    async def test_concurrent_publishes_single_fee(
        self, funded, storage_network, ledger_client, publish
    ):
        """Test two publishes racing for one fee: exactly one proceeds."""
        storage_network.delays["encode"] = 0.01

        results = await asyncio.gather(
            publish.execute(PAYER, b"one"),
            publish.execute(PAYER, b"two"),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, InsufficientFundsError)]
        assert len(failures) == 1
        assert len(storage_network.flows) == 1
        assert ledger_client.submitted == ["register", "certify"]
        assert funded.balance_of(PAYER) == 0


def _fullnode_session(post_effect) -> MagicMock:
    """Fullnode session that never returns a usable execution result."""
    session = MagicMock()
    if isinstance(post_effect, Exception):
        session.post.side_effect = post_effect
        return session

    response = MagicMock()
    response.status = 200
    response.json = AsyncMock(
        return_value={
            "jsonrpc": "2.0",
            "id": 1,
            "error": {
                "code": -32050,
                "message": "Transaction timed out before reaching finality",
            },
        }
    )
    if post_effect == "gateway_timeout":
        response.status = 504

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    session.post.return_value = context
    return session
