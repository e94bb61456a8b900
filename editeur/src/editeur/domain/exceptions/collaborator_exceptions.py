"""
Exceptions raised by external collaborator clients.

Translated into domain errors by the application layer.
"""

from typing import Optional


class CollaboratorException(Exception):
    """Base exception for storage network and chain-B clients."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class StorageBridgeException(CollaboratorException):
    """Storage bridge call failed."""


class StorageTimeoutException(StorageBridgeException):
    """Storage bridge call timed out."""


class LedgerException(CollaboratorException):
    """Chain-B RPC call failed."""


class LedgerTransactionException(LedgerException):
    """Chain-B transaction was rejected or executed with a failure status."""


class LedgerTimeoutException(LedgerException):
    """Chain-B finality could not be observed in time."""

    def __init__(self, message: str, digest: Optional[str] = None, details=None):
        super().__init__(message, details={"digest": digest, **(details or {})})
        self.digest = digest
