"""
Publication entities - ephemeral request and receipt of a publish call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class PublishStep(str, Enum):
    """Steps of the publish saga after the fee commitment point."""

    ENCODE = "encode"
    REGISTER = "register"
    UPLOAD = "upload"
    CERTIFY = "certify"
    LIST_FILES = "list_files"


@dataclass(frozen=True)
class ContentMetadata:
    """Descriptive metadata attached to published content."""

    filename: str = "file.txt"
    storage_epochs: int = 3
    immutable: bool = True
    content_type: str = "application/octet-stream"

    def __post_init__(self):
        """Validate metadata."""
        if not self.filename:
            raise ValueError("Filename is required")

        if self.storage_epochs < 1:
            raise ValueError(
                f"Storage duration must be at least 1 epoch: {self.storage_epochs}"
            )

    @property
    def deletable(self) -> bool:
        """Storage-network flag: mutable content is registered deletable."""
        return not self.immutable


@dataclass(frozen=True)
class PublishRequest:
    """
    A single publish call.

    Holds no state across calls; discarded once the response is produced.
    """

    identity: str
    content: bytes
    metadata: ContentMetadata

    def __post_init__(self):
        """Validate request."""
        if not self.content:
            raise ValueError("Content must not be empty")

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class StorageReceipt:
    """Result of a successful publish, returned to the caller and not retained."""

    content_id: str
    files: List[Dict[str, Any]]
    metadata: ContentMetadata
    fee_charged: int
    remaining_balance: int
    register_digest: Optional[str] = None
    certify_digest: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert receipt to dictionary representation."""
        return {
            "contentId": self.content_id,
            "files": self.files,
            "filename": self.metadata.filename,
            "storageDuration": self.metadata.storage_epochs,
            "immutable": self.metadata.immutable,
            "feeCharged": str(self.fee_charged),
            "remainingBalance": str(self.remaining_balance),
            "registerDigest": self.register_digest,
            "certifyDigest": self.certify_digest,
        }
