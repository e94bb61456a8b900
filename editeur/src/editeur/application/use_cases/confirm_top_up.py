"""
Confirm Top-Up use case.

Verifies a chain-A transfer to the custodial address and credits it.
CRITICAL: Idempotent per transaction id to prevent double crediting.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from editeur.domain.exceptions import MalformedInputError, VerificationError
from editeur.domain.repositories.i_credit_ledger import ICreditLedger
from editeur.domain.services.receipt_verifier import ReceiptVerifier
from editeur.domain.value_objects import TxHash, normalize_identity
from editeur.infrastructure.monitoring import metrics

logger = logging.getLogger(__name__)


@dataclass
class TopUpResult:
    """
    Result of a top-up confirmation.

    Attributes:
        tx_id: Normalized transaction hash
        balance: Balance after this call
        already_credited: True when the transaction had been applied before
        credited_amount: Amount credited by this call (None if already credited)
        confirmations: Observed confirmation depth (None if already credited)
        from_address: Observed sender
        to_address: Observed recipient
    """

    tx_id: str
    balance: int
    already_credited: bool = False
    credited_amount: Optional[int] = None
    confirmations: Optional[int] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None


class ConfirmTopUp:
    """
    Confirm a chain-A top-up and credit the payer.

    Business rules:
    - Payer must be registered
    - Transaction must pay the custodial address from the payer
    - Transaction must be successful, deep enough and carry value
    - A transaction id is credited at most once per account

    Architecture:
    - Verification is read-only and happens before any ledger mutation
    - An already-credited transaction short-circuits without chain reads
    - Concurrent confirmations of one transaction: the ledger decides
      which call applies it, the others report already credited
    """

    def __init__(
        self,
        ledger: ICreditLedger,
        verifier: ReceiptVerifier,
        publisher_address: str,
        default_min_confirmations: int = 1,
    ):
        """
        Initialize use case with dependencies.

        Args:
            ledger: Credit ledger
            verifier: Chain-A receipt verifier
            publisher_address: Custodial chain-A address
            default_min_confirmations: Depth used when the caller gives none
        """
        self.ledger = ledger
        self.verifier = verifier
        self.publisher_address = publisher_address
        self.default_min_confirmations = default_min_confirmations

    async def execute(
        self,
        identity: str,
        tx_id: str,
        min_confirmations: Optional[int] = None,
    ) -> TopUpResult:
        """
        Execute top-up confirmation.

        Args:
            identity: Payer address, any letter case
            tx_id: Chain-A transaction hash
            min_confirmations: Required depth (default from settings)

        Returns:
            TopUpResult

        Raises:
            MalformedInputError: If identity, tx_id or depth is malformed
            UnknownAccountError: If payer was never registered
            VerificationError: If the transaction does not qualify
            ChainUnavailableError: If chain A cannot be reached
            BalanceOverflowError: If the credit would overflow
        """
        # 1. Validate input before any external call
        identity = normalize_identity(identity)
        tx_hash = TxHash.parse(tx_id).value

        if min_confirmations is None:
            min_confirmations = self.default_min_confirmations
        if (
            not isinstance(min_confirmations, int)
            or isinstance(min_confirmations, bool)
            or min_confirmations < 0
        ):
            raise MalformedInputError(
                "minConfirmations", "must be a non-negative integer"
            )

        # 2. Registered + already credited? (raises UnknownAccountError)
        if self.ledger.is_credited(identity, tx_hash):
            metrics.topup_confirmations_total.labels(result="already_credited").inc()
            return TopUpResult(
                tx_id=tx_hash,
                balance=self.ledger.balance_of(identity),
                already_credited=True,
            )

        # 3. Verify on chain A
        try:
            verified = await self.verifier.verify(
                tx_hash,
                expected_from=identity,
                expected_to=self.publisher_address,
                min_confirmations=min_confirmations,
            )
        except VerificationError as e:
            metrics.topup_confirmations_total.labels(result=e.code.lower()).inc()
            logger.warning(
                f"Top-up {tx_hash} for {identity} rejected: {e.message}",
                extra={"identity": identity, "tx_id": tx_hash, "code": e.code},
            )
            raise

        # 4. Credit (the ledger re-checks the transaction id atomically)
        account, applied = self.ledger.apply_credit(
            identity, verified.tx_id, verified.value
        )

        if not applied:
            metrics.topup_confirmations_total.labels(result="already_credited").inc()
            return TopUpResult(
                tx_id=tx_hash,
                balance=account.balance,
                already_credited=True,
            )

        metrics.topup_confirmations_total.labels(result="credited").inc()

        return TopUpResult(
            tx_id=tx_hash,
            balance=account.balance,
            credited_amount=verified.value,
            confirmations=verified.confirmations,
            from_address=verified.from_address,
            to_address=verified.to_address,
        )
