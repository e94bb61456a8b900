"""
In-memory credit ledger.

Process-local store of prepaid balances. State is lost on restart.
"""

import logging
import threading
from typing import Dict, Tuple

from editeur.domain.entities.user_account import MAX_BALANCE, UserAccount
from editeur.domain.exceptions import (
    BalanceOverflowError,
    InsufficientBalanceError,
    InvalidAmountError,
    UnknownAccountError,
)
from editeur.domain.repositories.i_credit_ledger import ICreditLedger
from editeur.infrastructure.monitoring import metrics

logger = logging.getLogger(__name__)


def _require_positive(amount: object) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(amount)
    return amount


class InMemoryCreditLedger(ICreditLedger):
    """
    Thread-safe credit ledger backed by a dict.

    One lock guards every read-modify-write, so the check-then-add of
    credit and the check-then-subtract of debit are atomic even when
    calls arrive from several threads or event loops. No operation
    awaits while holding the lock.
    """

    def __init__(self):
        self._accounts: Dict[str, UserAccount] = {}
        self._lock = threading.Lock()

    def register(self, identity: str) -> UserAccount:
        with self._lock:
            account = self._accounts.get(identity)
            if account is None:
                account = UserAccount(identity=identity)
                self._accounts[identity] = account
                metrics.ledger_accounts.set(len(self._accounts))
                logger.info(f"Registered account {identity}")
            return account.snapshot()

    def credit(self, identity: str, tx_id: str, amount: int) -> UserAccount:
        account, _ = self.apply_credit(identity, tx_id, amount)
        return account

    def apply_credit(
        self, identity: str, tx_id: str, amount: int
    ) -> Tuple[UserAccount, bool]:
        amount = _require_positive(amount)

        with self._lock:
            account = self._get_locked(identity)

            if tx_id in account.credited_transactions:
                metrics.ledger_operations_total.labels(
                    operation="credit", result="duplicate"
                ).inc()
                return account.snapshot(), False

            if account.balance + amount > MAX_BALANCE:
                metrics.ledger_operations_total.labels(
                    operation="credit", result="overflow"
                ).inc()
                raise BalanceOverflowError(identity, account.balance, amount)

            account.balance += amount
            account.credited_transactions.add(tx_id)
            snapshot = account.snapshot()

        metrics.ledger_operations_total.labels(
            operation="credit", result="applied"
        ).inc()
        logger.info(
            f"Credited {amount} to {identity} from {tx_id} "
            f"(balance={snapshot.balance})"
        )
        return snapshot, True

    def debit(self, identity: str, amount: int) -> UserAccount:
        amount = _require_positive(amount)

        with self._lock:
            account = self._get_locked(identity)

            if account.balance < amount:
                metrics.ledger_operations_total.labels(
                    operation="debit", result="insufficient"
                ).inc()
                raise InsufficientBalanceError(identity, account.balance, amount)

            account.balance -= amount
            snapshot = account.snapshot()

        metrics.ledger_operations_total.labels(
            operation="debit", result="applied"
        ).inc()
        logger.info(
            f"Debited {amount} from {identity} (balance={snapshot.balance})"
        )
        return snapshot

    def balance_of(self, identity: str) -> int:
        with self._lock:
            return self._get_locked(identity).balance

    def get(self, identity: str) -> UserAccount:
        with self._lock:
            return self._get_locked(identity).snapshot()

    def is_credited(self, identity: str, tx_id: str) -> bool:
        with self._lock:
            return self._get_locked(identity).has_credited(tx_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)

    def _get_locked(self, identity: str) -> UserAccount:
        account = self._accounts.get(identity)
        if account is None:
            raise UnknownAccountError(identity)
        return account
