"""
Blockchain infrastructure - chain A reads, chain B submissions.
"""

from editeur.infrastructure.blockchain.evm_custody import derive_publisher_address
from editeur.infrastructure.blockchain.evm_rpc_client import EvmRpcClient, RPCError
from editeur.infrastructure.blockchain.sui_keypair import SuiKeypair
from editeur.infrastructure.blockchain.sui_ledger_client import SuiLedgerClient

__all__ = [
    "EvmRpcClient",
    "RPCError",
    "SuiKeypair",
    "SuiLedgerClient",
    "derive_publisher_address",
]
