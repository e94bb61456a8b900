"""
Unit tests for ReceiptVerifier.

Tests each verification step in order and the purity of verify.

Usage:
    pytest editeur/tests/unit/domain/test_receipt_verifier.py
"""

import pytest

from conftest import PAYER, PAYER_CHECKSUM, PUBLISHER, STRANGER, TX_A, FakeChainReader
from editeur.domain.exceptions import (
    AddressMismatchError,
    InsufficientConfirmationsError,
    MalformedInputError,
    TransactionFailedError,
    TransactionNotFoundError,
    TransactionNotMinedError,
    ZeroValueError,
)
from editeur.domain.services import ReceiptVerifier


@pytest.fixture
def verifier(chain_reader: FakeChainReader) -> ReceiptVerifier:
    return ReceiptVerifier(chain_reader)


class TestReceiptVerifier:
    """Unit tests for ReceiptVerifier."""

    # ================================================================
    # Success
    # ================================================================

    async def test_verify_success(self, verifier, chain_reader):
        """Test a valid transfer returns value and confirmations."""
        chain_reader.head = 104
        chain_reader.add_transfer(TX_A, value=100, block=100)

        result = await verifier.verify(TX_A, PAYER, PUBLISHER, min_confirmations=1)

        assert result.value == 100
        assert result.confirmations == 5
        assert result.tx_id == TX_A

    async def test_addresses_compared_case_insensitively(self, verifier, chain_reader):
        """Test checksummed chain data matches lower-cased expectations."""
        chain_reader.add_transfer(
            TX_A,
            value=1,
            sender=PAYER_CHECKSUM,
            recipient=PUBLISHER.upper().replace("0X", "0x"),
        )

        result = await verifier.verify(TX_A, PAYER, PUBLISHER)

        assert result.value == 1

    async def test_uppercase_hash_is_normalized(self, verifier, chain_reader):
        """Test tx hash casing does not matter."""
        chain_reader.add_transfer(TX_A, value=1)

        upper = TX_A.upper().replace("0X", "0x")
        result = await verifier.verify(upper, PAYER, PUBLISHER)

        assert result.tx_id == TX_A

    # ================================================================
    # Step 1: shape
    # ================================================================

    async def test_malformed_hash(self, verifier, chain_reader):
        """Test malformed hash fails before any chain read."""
        with pytest.raises(MalformedInputError):
            await verifier.verify("0x1234", PAYER, PUBLISHER)

        assert chain_reader.calls == []

    @pytest.mark.parametrize("depth", [-1, True, "1", 1.0])
    async def test_malformed_min_confirmations(self, verifier, chain_reader, depth):
        """Test confirmation depth must be a non-negative integer."""
        with pytest.raises(MalformedInputError):
            await verifier.verify(TX_A, PAYER, PUBLISHER, min_confirmations=depth)

        assert chain_reader.calls == []

    # ================================================================
    # Step 2: existence
    # ================================================================

    async def test_not_found(self, verifier):
        """Test unknown transaction."""
        with pytest.raises(TransactionNotFoundError) as exc_info:
            await verifier.verify(TX_A, PAYER, PUBLISHER)

        assert exc_info.value.code == "NOT_FOUND"

    # ================================================================
    # Step 3: parties
    # ================================================================

    async def test_to_mismatch(self, verifier, chain_reader):
        """Test transfer to another address reports the 'to' field."""
        chain_reader.add_transfer(TX_A, value=100, recipient=STRANGER)

        with pytest.raises(AddressMismatchError) as exc_info:
            await verifier.verify(TX_A, PAYER, PUBLISHER)

        details = exc_info.value.details
        assert details["field"] == "to"
        assert details["expected"] == PUBLISHER
        assert details["observed"] == STRANGER

    async def test_from_mismatch(self, verifier, chain_reader):
        """Test transfer from another payer reports the 'from' field."""
        chain_reader.add_transfer(TX_A, value=100, sender=STRANGER)

        with pytest.raises(AddressMismatchError) as exc_info:
            await verifier.verify(TX_A, PAYER, PUBLISHER)

        assert exc_info.value.details["field"] == "from"

    async def test_missing_recipient_is_mismatch(self, verifier, chain_reader):
        """Test contract creation (no 'to') is a mismatch."""
        chain_reader.add_transfer(TX_A, value=100, recipient=None)

        with pytest.raises(AddressMismatchError) as exc_info:
            await verifier.verify(TX_A, PAYER, PUBLISHER)

        assert exc_info.value.details["observed"] is None

    # ================================================================
    # Step 4-5: receipt
    # ================================================================

    async def test_not_mined(self, verifier, chain_reader):
        """Test pending transaction is recoverable NOT_MINED."""
        chain_reader.add_transfer(TX_A, value=100, mined=False)

        with pytest.raises(TransactionNotMinedError) as exc_info:
            await verifier.verify(TX_A, PAYER, PUBLISHER)

        assert exc_info.value.details["retryable"] is True

    async def test_reverted(self, verifier, chain_reader):
        """Test status 0 fails."""
        chain_reader.add_transfer(TX_A, value=100, status=0)

        with pytest.raises(TransactionFailedError):
            await verifier.verify(TX_A, PAYER, PUBLISHER)

    async def test_missing_status_fails_closed(self, verifier, chain_reader):
        """Test a receipt without status is not treated as success."""
        chain_reader.add_transfer(TX_A, value=100, status=None)

        with pytest.raises(TransactionFailedError):
            await verifier.verify(TX_A, PAYER, PUBLISHER)

    # ================================================================
    # Step 6: depth
    # ================================================================

    async def test_insufficient_confirmations(self, verifier, chain_reader):
        """Test observed < required reports both values."""
        chain_reader.head = 101
        chain_reader.add_transfer(TX_A, value=100, block=100)

        with pytest.raises(InsufficientConfirmationsError) as exc_info:
            await verifier.verify(TX_A, PAYER, PUBLISHER, min_confirmations=3)

        assert exc_info.value.details["confirmations"] == 2
        assert exc_info.value.details["required"] == 3

    async def test_exactly_required_confirmations(self, verifier, chain_reader):
        """Test success at exactly N confirmations."""
        chain_reader.head = 102
        chain_reader.add_transfer(TX_A, value=100, block=100)

        result = await verifier.verify(TX_A, PAYER, PUBLISHER, min_confirmations=3)

        assert result.confirmations == 3

    async def test_zero_confirmations_required(self, verifier, chain_reader):
        """Test depth 0 accepts a head that lags the receipt block."""
        chain_reader.head = 99
        chain_reader.add_transfer(TX_A, value=100, block=100)

        result = await verifier.verify(TX_A, PAYER, PUBLISHER, min_confirmations=0)

        assert result.confirmations == 0

    # ================================================================
    # Step 7: value
    # ================================================================

    async def test_zero_value(self, verifier, chain_reader):
        """Test zero-value transfer is rejected."""
        chain_reader.add_transfer(TX_A, value=0)

        with pytest.raises(ZeroValueError):
            await verifier.verify(TX_A, PAYER, PUBLISHER)

    async def test_failure_order_address_before_status(self, verifier, chain_reader):
        """Test steps fail fast in order: mismatch wins over reverted."""
        chain_reader.add_transfer(TX_A, value=0, recipient=STRANGER, status=0)

        with pytest.raises(AddressMismatchError):
            await verifier.verify(TX_A, PAYER, PUBLISHER)

    # ================================================================
    # Purity
    # ================================================================

    async def test_verify_is_repeatable(self, verifier, chain_reader):
        """Test identical chain state gives identical results."""
        chain_reader.add_transfer(TX_A, value=42)

        first = await verifier.verify(TX_A, PAYER, PUBLISHER)
        second = await verifier.verify(TX_A, PAYER, PUBLISHER)

        assert first == second
