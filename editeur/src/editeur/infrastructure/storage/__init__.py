"""
Storage infrastructure.
"""

from editeur.infrastructure.storage.walrus_bridge_client import (
    WalrusBridgeClient,
    WalrusWriteFlow,
)

__all__ = ["WalrusBridgeClient", "WalrusWriteFlow"]
