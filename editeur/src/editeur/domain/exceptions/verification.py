"""
Chain-A top-up verification exceptions.

Raised by the receipt verifier. None of them mutate the ledger.
"""

from typing import Optional

from editeur.domain.exceptions.base import EditeurException


class VerificationError(EditeurException):
    """Base exception for chain-A transaction verification."""

    def __init__(self, message: str, tx_id: str, code: str, details=None):
        super().__init__(
            message,
            code=code,
            details={"txId": tx_id, **(details or {})},
        )
        self.tx_id = tx_id


class TransactionNotFoundError(VerificationError):
    """Raised when the transaction is not known to chain A."""

    def __init__(self, tx_id: str):
        super().__init__(f"Transaction not found: {tx_id}", tx_id, "NOT_FOUND")


class AddressMismatchError(VerificationError):
    """Raised when the transaction sender or recipient is not the expected one."""

    def __init__(self, tx_id: str, field: str, expected: str, observed):
        super().__init__(
            f"Transaction '{field}' does not match: expected {expected}, "
            f"observed {observed}",
            tx_id,
            "ADDRESS_MISMATCH",
            details={"field": field, "expected": expected, "observed": observed},
        )
        self.field = field
        self.expected = expected
        self.observed = observed


class TransactionNotMinedError(VerificationError):
    """Raised when no receipt exists yet. Retry later."""

    def __init__(self, tx_id: str):
        super().__init__(
            f"Transaction not yet mined: {tx_id}",
            tx_id,
            "NOT_MINED",
            details={"retryable": True},
        )


class TransactionFailedError(VerificationError):
    """Raised when the receipt does not carry an explicit success status."""

    def __init__(self, tx_id: str, status):
        super().__init__(
            f"Transaction failed (status {status!r})",
            tx_id,
            "TRANSACTION_FAILED",
            details={"status": status},
        )
        self.status = status


class InsufficientConfirmationsError(VerificationError):
    """Raised when the transaction is not buried deep enough yet."""

    def __init__(self, tx_id: str, observed: int, required: int):
        super().__init__(
            f"Insufficient confirmations: observed {observed}, required {required}",
            tx_id,
            "INSUFFICIENT_CONFIRMATIONS",
            details={
                "confirmations": observed,
                "required": required,
                "retryable": True,
            },
        )
        self.observed = observed
        self.required = required


class ZeroValueError(VerificationError):
    """Raised when the transaction transferred no value."""

    def __init__(self, tx_id: str):
        super().__init__("Transaction value is zero", tx_id, "ZERO_VALUE")


class ChainUnavailableError(EditeurException):
    """Raised when chain A cannot be reached after bounded retries."""

    def __init__(self, message: str, method: Optional[str] = None):
        super().__init__(
            message,
            code="CHAIN_UNAVAILABLE",
            details={"method": method, "retryable": True},
        )
        self.method = method
