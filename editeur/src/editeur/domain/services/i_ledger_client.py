"""
Chain-B ledger client interface.

Signs and submits transactions built by the storage network.
"""

from abc import ABC, abstractmethod


class ILedgerClient(ABC):
    """
    Abstract interface for chain-B transaction submission.

    Submissions are irrevocable: implementations must never retry
    sign_and_execute on their own.
    """

    @property
    @abstractmethod
    def owner_address(self) -> str:
        """Chain-B address of the custodial signer."""

    @property
    @abstractmethod
    def network(self) -> str:
        """Chain-B network name."""

    @abstractmethod
    def transaction_digest(self, tx_bytes: str) -> str:
        """Compute the digest a transaction will have once executed."""

    @abstractmethod
    async def sign_and_execute(self, tx_bytes: str) -> str:
        """
        Sign, submit and wait for the transaction to finalize.

        Args:
            tx_bytes: Unsigned transaction bytes (base64)

        Returns:
            Transaction digest

        Raises:
            LedgerTransactionException: If the transaction definitely failed
            LedgerTimeoutException: If finality could not be observed in time
        """

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
