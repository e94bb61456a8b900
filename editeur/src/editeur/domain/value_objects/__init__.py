"""Domain value objects."""

from editeur.domain.value_objects.evm_address import EvmAddress, normalize_identity
from editeur.domain.value_objects.tx_hash import TxHash

__all__ = [
    "EvmAddress",
    "TxHash",
    "normalize_identity",
]
