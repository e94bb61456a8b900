"""Domain entities."""

from editeur.domain.entities.publication import (
    ContentMetadata,
    PublishRequest,
    PublishStep,
    StorageReceipt,
)
from editeur.domain.entities.user_account import MAX_BALANCE, UserAccount

__all__ = [
    "UserAccount",
    "MAX_BALANCE",
    "ContentMetadata",
    "PublishRequest",
    "PublishStep",
    "StorageReceipt",
]
