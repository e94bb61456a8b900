"""
UserAccount entity - Prepaid balance of a chain-A payer.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import AbstractSet

# Largest value a chain-A balance can hold (uint256).
MAX_BALANCE = 2**256 - 1


@dataclass
class UserAccount:
    """
    UserAccount entity.

    Created once on registration with a zero balance and never deleted.
    Only the credit ledger mutates it; everyone else receives snapshots.
    """

    identity: str
    balance: int = 0
    credited_transactions: AbstractSet[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate account data after initialization."""
        if not self.identity:
            raise ValueError("Identity is required")

        if self.identity != self.identity.lower():
            raise ValueError("Identity must be in canonical lower-case form")

        if not isinstance(self.balance, int) or self.balance < 0:
            raise ValueError(f"Invalid balance: {self.balance!r}")

        if self.balance > MAX_BALANCE:
            raise ValueError("Balance exceeds uint256 range")

    def has_credited(self, tx_id: str) -> bool:
        """Check whether a transaction was already applied."""
        return tx_id in self.credited_transactions

    def snapshot(self) -> "UserAccount":
        """Return a detached, read-only copy of the account."""
        return replace(
            self,
            credited_transactions=frozenset(self.credited_transactions),
        )

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "identity": self.identity,
            "balance": str(self.balance),
            "credited_transactions": sorted(self.credited_transactions),
            "created_at": self.created_at.isoformat(),
        }
