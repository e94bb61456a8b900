"""
Domain exceptions package.
"""

# Base exceptions
from editeur.domain.exceptions.base import EditeurException, MalformedInputError

# Collaborator exceptions
from editeur.domain.exceptions.collaborator_exceptions import (
    CollaboratorException,
    LedgerException,
    LedgerTimeoutException,
    LedgerTransactionException,
    StorageBridgeException,
    StorageTimeoutException,
)

# Ledger exceptions
from editeur.domain.exceptions.ledger import (
    BalanceOverflowError,
    InsufficientBalanceError,
    InsufficientFundsError,
    InvalidAmountError,
    LedgerError,
    UnknownAccountError,
)

# Publishing exceptions
from editeur.domain.exceptions.publishing import (
    AmbiguousOutcomeError,
    PublishFailedError,
)

# Verification exceptions
from editeur.domain.exceptions.verification import (
    AddressMismatchError,
    ChainUnavailableError,
    InsufficientConfirmationsError,
    TransactionFailedError,
    TransactionNotFoundError,
    TransactionNotMinedError,
    VerificationError,
    ZeroValueError,
)

__all__ = [
    # Base
    "EditeurException",
    "MalformedInputError",
    # Ledger
    "LedgerError",
    "UnknownAccountError",
    "InvalidAmountError",
    "InsufficientBalanceError",
    "InsufficientFundsError",
    "BalanceOverflowError",
    # Verification
    "VerificationError",
    "TransactionNotFoundError",
    "AddressMismatchError",
    "TransactionNotMinedError",
    "TransactionFailedError",
    "InsufficientConfirmationsError",
    "ZeroValueError",
    "ChainUnavailableError",
    # Collaborators
    "CollaboratorException",
    "StorageBridgeException",
    "StorageTimeoutException",
    "LedgerException",
    "LedgerTransactionException",
    "LedgerTimeoutException",
    # Publishing
    "PublishFailedError",
    "AmbiguousOutcomeError",
]
