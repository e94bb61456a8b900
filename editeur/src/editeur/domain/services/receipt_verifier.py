"""
Chain-A receipt verifier.

Checks that a claimed top-up transaction really paid the custodial
address. Read-only: it never touches the credit ledger, so callers can
retry it freely.
"""

import logging
from dataclasses import dataclass

from editeur.domain.exceptions import (
    AddressMismatchError,
    InsufficientConfirmationsError,
    MalformedInputError,
    TransactionFailedError,
    TransactionNotFoundError,
    TransactionNotMinedError,
    ZeroValueError,
)
from editeur.domain.services.i_chain_reader import IChainReader
from editeur.domain.value_objects import TxHash

logger = logging.getLogger(__name__)

RECEIPT_STATUS_SUCCESS = 1


@dataclass(frozen=True)
class VerifiedTopUp:
    """A transaction that passed every verification step."""

    tx_id: str
    value: int
    confirmations: int
    from_address: str
    to_address: str


class ReceiptVerifier:
    """
    Deterministic validation of a chain-A value transfer.

    Validation sequence (each step fails fast):
    1. Well-formed transaction hash
    2. Transaction exists
    3. from/to match expected payer/payee
    4. Receipt exists (mined)
    5. Receipt status is explicit success
    6. Confirmation depth >= min_confirmations
    7. Transferred value > 0
    """

    def __init__(self, chain_reader: IChainReader):
        """
        Initialize verifier.

        Args:
            chain_reader: Chain-A RPC reader
        """
        self.chain_reader = chain_reader

    async def verify(
        self,
        tx_id: str,
        expected_from: str,
        expected_to: str,
        min_confirmations: int = 1,
    ) -> VerifiedTopUp:
        """
        Verify a top-up transaction.

        Args:
            tx_id: Claimed transaction hash
            expected_from: Payer address
            expected_to: Custodial publisher address
            min_confirmations: Required confirmation depth

        Returns:
            VerifiedTopUp with value and observed confirmations

        Raises:
            MalformedInputError: If tx_id or min_confirmations is malformed
            TransactionNotFoundError: If transaction is unknown
            AddressMismatchError: If from/to differ from expected
            TransactionNotMinedError: If no receipt yet
            TransactionFailedError: If receipt status is not success
            InsufficientConfirmationsError: If not deep enough yet
            ZeroValueError: If no value was transferred
            ChainUnavailableError: If chain A cannot be reached
        """
        # 1. Shape of the hash
        tx_hash = TxHash.parse(tx_id).value

        if (
            not isinstance(min_confirmations, int)
            or isinstance(min_confirmations, bool)
            or min_confirmations < 0
        ):
            raise MalformedInputError(
                "minConfirmations", "must be a non-negative integer"
            )

        # 2. Existence
        tx = await self.chain_reader.get_transaction(tx_hash)
        if tx is None:
            raise TransactionNotFoundError(tx_hash)

        # 3. Parties
        self._check_party(tx_hash, "from", expected_from, tx.from_address)
        self._check_party(tx_hash, "to", expected_to, tx.to_address)

        # 4. Mined
        receipt = await self.chain_reader.get_transaction_receipt(tx_hash)
        if receipt is None or receipt.block_number is None:
            raise TransactionNotMinedError(tx_hash)

        # 5. Status (absent status fails closed)
        if receipt.status != RECEIPT_STATUS_SUCCESS:
            raise TransactionFailedError(tx_hash, receipt.status)

        # 6. Depth
        head = await self.chain_reader.get_block_number()
        confirmations = max(head - receipt.block_number + 1, 0)
        if confirmations < min_confirmations:
            raise InsufficientConfirmationsError(
                tx_hash, observed=confirmations, required=min_confirmations
            )

        # 7. Value
        if tx.value <= 0:
            raise ZeroValueError(tx_hash)

        logger.debug(
            f"Verified {tx_hash}: value={tx.value} confirmations={confirmations}"
        )

        return VerifiedTopUp(
            tx_id=tx_hash,
            value=tx.value,
            confirmations=confirmations,
            from_address=tx.from_address,
            to_address=tx.to_address,
        )

    @staticmethod
    def _check_party(tx_hash: str, field: str, expected: str, observed) -> None:
        """Case-insensitive address comparison; missing counts as mismatch."""
        if not observed or observed.lower() != expected.lower():
            raise AddressMismatchError(
                tx_hash,
                field=field,
                expected=expected.lower(),
                observed=observed.lower() if observed else None,
            )
