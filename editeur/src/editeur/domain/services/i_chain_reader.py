"""
Chain-A reader interface.

Read-only access to EVM transactions, receipts and chain head.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ChainTransaction:
    """Transaction fields the verifier relies on."""

    tx_hash: str
    from_address: Optional[str]
    to_address: Optional[str]
    value: int
    block_number: Optional[int] = None


@dataclass(frozen=True)
class ChainReceipt:
    """
    Receipt fields the verifier relies on.

    status is None when the node omitted it (pre-Byzantium style receipts).
    """

    tx_hash: str
    status: Optional[int]
    block_number: Optional[int]


class IChainReader(ABC):
    """
    Abstract interface for chain-A JSON-RPC reads.

    Implementations must be stateless with respect to requests and
    safe to share across concurrent callers.
    """

    @abstractmethod
    async def get_transaction(self, tx_hash: str) -> Optional[ChainTransaction]:
        """
        Fetch a transaction by hash.

        Returns:
            ChainTransaction or None if the node does not know it

        Raises:
            ChainUnavailableError: If chain A cannot be reached
        """

    @abstractmethod
    async def get_transaction_receipt(self, tx_hash: str) -> Optional[ChainReceipt]:
        """
        Fetch a transaction receipt.

        Returns:
            ChainReceipt or None if not mined yet

        Raises:
            ChainUnavailableError: If chain A cannot be reached
        """

    @abstractmethod
    async def get_block_number(self) -> int:
        """Get current chain head height."""

    @abstractmethod
    async def get_chain_id(self) -> int:
        """Get EIP-155 chain id."""

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
