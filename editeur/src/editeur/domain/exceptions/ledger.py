"""
Credit ledger exceptions.

Precondition errors raised by the ledger and by the fee check.
"""

from editeur.domain.exceptions.base import EditeurException


class LedgerError(EditeurException):
    """Base exception for credit ledger operations."""


class UnknownAccountError(LedgerError):
    """Raised when an identity was never registered."""

    def __init__(self, identity: str):
        super().__init__(
            f"Account {identity} is not registered. Call /evm/register first.",
            code="UNKNOWN_ACCOUNT",
            details={"identity": identity},
        )
        self.identity = identity


class InvalidAmountError(LedgerError):
    """Raised when a credit or debit amount is not a positive integer."""

    def __init__(self, amount: object):
        super().__init__(
            f"Amount must be a strictly positive integer, got {amount!r}",
            code="INVALID_AMOUNT",
            details={"amount": str(amount)},
        )
        self.amount = amount


class InsufficientBalanceError(LedgerError):
    """Raised when a debit would take the balance below zero."""

    def __init__(self, identity: str, balance: int, required: int):
        super().__init__(
            f"Insufficient balance: required {required}, available {balance}",
            code="INSUFFICIENT_BALANCE",
            details={
                "identity": identity,
                "balance": str(balance),
                "required": str(required),
            },
        )
        self.identity = identity
        self.balance = balance
        self.required = required


class InsufficientFundsError(LedgerError):
    """Raised when the prepaid balance does not cover the publish fee."""

    def __init__(self, identity: str, balance: int, required: int):
        super().__init__(
            "Insufficient top-up. Send native tokens to the publisher "
            "address and confirm via /evm/topup/confirm.",
            code="INSUFFICIENT_FUNDS",
            details={
                "identity": identity,
                "balance": str(balance),
                "required": str(required),
            },
        )
        self.identity = identity
        self.balance = balance
        self.required = required


class BalanceOverflowError(LedgerError):
    """Raised when a credit would exceed the chain-A word size."""

    def __init__(self, identity: str, balance: int, amount: int):
        super().__init__(
            f"Balance overflow for {identity}: {balance} + {amount}",
            code="BALANCE_OVERFLOW",
            details={
                "identity": identity,
                "balance": str(balance),
                "amount": str(amount),
            },
        )
        self.identity = identity
