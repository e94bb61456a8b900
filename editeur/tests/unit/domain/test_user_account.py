"""
Unit tests for UserAccount entity.

Usage:
    pytest editeur/tests/unit/domain/test_user_account.py
"""

import pytest

from conftest import PAYER, TX_A
from editeur.domain.entities import UserAccount
from editeur.domain.entities.user_account import MAX_BALANCE


class TestUserAccount:
    """Unit tests for UserAccount."""

    def test_defaults(self):
        """Test a new account starts empty."""
        account = UserAccount(identity=PAYER)

        assert account.balance == 0
        assert account.credited_transactions == set()
        assert not account.has_credited(TX_A)

    def test_rejects_non_canonical_identity(self):
        """Test identity must be lower-case."""
        with pytest.raises(ValueError):
            UserAccount(identity=PAYER.upper().replace("0X", "0x"))

    def test_rejects_empty_identity(self):
        """Test identity is required."""
        with pytest.raises(ValueError):
            UserAccount(identity="")

    @pytest.mark.parametrize("balance", [-1, MAX_BALANCE + 1, 1.5])
    def test_rejects_invalid_balance(self, balance):
        """Test balance must be an unsigned 256-bit integer."""
        with pytest.raises(ValueError):
            UserAccount(identity=PAYER, balance=balance)

    def test_snapshot_is_detached(self):
        """Test snapshot does not share the credited set."""
        account = UserAccount(identity=PAYER, balance=5, credited_transactions={TX_A})
        snapshot = account.snapshot()

        account.balance = 7
        account.credited_transactions.add("0x" + "00" * 32)

        assert snapshot.balance == 5
        assert snapshot.credited_transactions == frozenset({TX_A})
        assert isinstance(snapshot.credited_transactions, frozenset)

    def test_to_dict_serializes_balance_as_string(self):
        """Test wei amounts are strings in the dict form."""
        account = UserAccount(identity=PAYER, balance=MAX_BALANCE)
        data = account.to_dict()

        assert data["balance"] == str(MAX_BALANCE)
        assert data["identity"] == PAYER
