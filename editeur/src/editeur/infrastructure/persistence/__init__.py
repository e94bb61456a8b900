"""
Persistence infrastructure.
"""

from editeur.infrastructure.persistence.in_memory_credit_ledger import (
    InMemoryCreditLedger,
)

__all__ = ["InMemoryCreditLedger"]
