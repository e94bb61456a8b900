"""
Get Payer Balance use case.
"""

from editeur.domain.repositories.i_credit_ledger import ICreditLedger
from editeur.domain.value_objects import normalize_identity


class GetPayerBalance:
    """Read the prepaid balance of a registered payer."""

    def __init__(self, ledger: ICreditLedger):
        self.ledger = ledger

    def execute(self, identity: str) -> int:
        """
        Execute balance query.

        Args:
            identity: Payer address, any letter case

        Returns:
            Balance in wei

        Raises:
            MalformedInputError: If identity is not a valid address
            UnknownAccountError: If identity was never registered
        """
        return self.ledger.balance_of(normalize_identity(identity))
