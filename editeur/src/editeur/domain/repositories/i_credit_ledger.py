"""
Credit ledger interface.

Defines the contract for per-payer prepaid balances.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from editeur.domain.entities.user_account import UserAccount


class ICreditLedger(ABC):
    """
    Abstract interface for the credit ledger.

    Single writer of UserAccount balances. All operations on one identity
    are linearizable with respect to each other. Returned accounts are
    snapshots; mutating them has no effect on the ledger.
    """

    @abstractmethod
    def register(self, identity: str) -> UserAccount:
        """
        Create the account if absent (idempotent).

        Args:
            identity: Normalized payer address

        Returns:
            Current account state
        """

    @abstractmethod
    def credit(self, identity: str, tx_id: str, amount: int) -> UserAccount:
        """
        Apply a verified top-up once.

        A tx_id that was already credited returns the unchanged account.

        Raises:
            UnknownAccountError: If identity was never registered
            InvalidAmountError: If amount is not a positive integer
            BalanceOverflowError: If the balance would exceed uint256
        """

    @abstractmethod
    def apply_credit(
        self, identity: str, tx_id: str, amount: int
    ) -> Tuple[UserAccount, bool]:
        """
        Same as credit, also reporting whether this call applied it.

        Returns:
            Tuple of (account, applied)
        """

    @abstractmethod
    def debit(self, identity: str, amount: int) -> UserAccount:
        """
        Subtract amount from the balance.

        Raises:
            UnknownAccountError: If identity was never registered
            InvalidAmountError: If amount is not a positive integer
            InsufficientBalanceError: If balance < amount
        """

    @abstractmethod
    def balance_of(self, identity: str) -> int:
        """
        Get current balance.

        Raises:
            UnknownAccountError: If identity was never registered
        """

    @abstractmethod
    def get(self, identity: str) -> UserAccount:
        """
        Get account snapshot.

        Raises:
            UnknownAccountError: If identity was never registered
        """

    @abstractmethod
    def is_credited(self, identity: str, tx_id: str) -> bool:
        """
        Check whether tx_id was already applied to identity.

        Raises:
            UnknownAccountError: If identity was never registered
        """
