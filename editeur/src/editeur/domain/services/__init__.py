"""Domain service interfaces and pure domain services."""

from editeur.domain.services.i_chain_reader import (
    ChainReceipt,
    ChainTransaction,
    IChainReader,
)
from editeur.domain.services.i_ledger_client import ILedgerClient
from editeur.domain.services.i_storage_network import (
    IStorageNetwork,
    IWriteFlow,
    StorageFile,
)
from editeur.domain.services.receipt_verifier import ReceiptVerifier, VerifiedTopUp

__all__ = [
    "IChainReader",
    "ChainTransaction",
    "ChainReceipt",
    "ILedgerClient",
    "IStorageNetwork",
    "IWriteFlow",
    "StorageFile",
    "ReceiptVerifier",
    "VerifiedTopUp",
]
