"""
Storage network interface.

Drives the content-addressed storage write protocol. Transactions it
builds are returned unsigned; submitting them to chain B is the job of
the ledger client.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class StorageFile:
    """A file to be stored, with its identifier and tags."""

    contents: bytes
    identifier: str
    tags: Dict[str, str] = field(default_factory=dict)


class IWriteFlow(ABC):
    """
    One multi-step write of a set of files.

    Methods must be called in order:
    encode -> register -> upload -> certify -> list_files
    """

    @property
    @abstractmethod
    def blob_id(self) -> Optional[str]:
        """Content identifier, known once encoding finished."""

    @abstractmethod
    async def encode(self) -> None:
        """Encode files into the network's transport unit."""

    @abstractmethod
    async def register(self, epochs: int, owner: str, deletable: bool) -> str:
        """
        Build the register transaction.

        Args:
            epochs: Storage duration in epochs
            owner: Chain-B address owning the stored blob
            deletable: Whether the blob can be deleted before expiry

        Returns:
            Unsigned transaction bytes (base64)
        """

    @abstractmethod
    async def upload(self, digest: str) -> None:
        """
        Upload encoded data to storage nodes.

        Args:
            digest: Digest of the finalized register transaction
        """

    @abstractmethod
    async def certify(self) -> str:
        """
        Build the certify transaction.

        Returns:
            Unsigned transaction bytes (base64)
        """

    @abstractmethod
    async def list_files(self) -> List[Dict[str, Any]]:
        """List stored file descriptors."""


class IStorageNetwork(ABC):
    """Abstract interface for the content-storage network."""

    @abstractmethod
    async def open_write_flow(self, files: List[StorageFile]) -> IWriteFlow:
        """Start a write flow for the given files."""

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
