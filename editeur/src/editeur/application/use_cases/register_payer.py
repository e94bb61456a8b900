"""
Register Payer use case.

Opens a zero-balance account for a chain-A address.
"""

import logging
from dataclasses import dataclass

from editeur.domain.entities.user_account import UserAccount
from editeur.domain.repositories.i_credit_ledger import ICreditLedger
from editeur.domain.value_objects import normalize_identity

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    """
    Result of payer registration.

    Attributes:
        account: Snapshot of the (possibly pre-existing) account
        publisher_address: Custodial address to send top-ups to
    """

    account: UserAccount
    publisher_address: str


class RegisterPayer:
    """
    Register a payer in the credit ledger.

    Business rules:
    - Identity must be a valid chain-A address
    - Registration is idempotent: an existing account is returned as is
    """

    def __init__(self, ledger: ICreditLedger, publisher_address: str):
        """
        Initialize use case with dependencies.

        Args:
            ledger: Credit ledger
            publisher_address: Custodial chain-A address (checksummed)
        """
        self.ledger = ledger
        self.publisher_address = publisher_address

    def execute(self, identity: str) -> RegistrationResult:
        """
        Execute registration.

        Args:
            identity: Payer address, any letter case

        Returns:
            RegistrationResult

        Raises:
            MalformedInputError: If identity is not a valid address
        """
        identity = normalize_identity(identity)
        account = self.ledger.register(identity)

        return RegistrationResult(
            account=account,
            publisher_address=self.publisher_address,
        )
