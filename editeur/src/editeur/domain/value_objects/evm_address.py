"""
EvmAddress value object - Immutable, checksum-validated chain-A address.
"""

from dataclasses import dataclass

from web3 import Web3

from editeur.domain.exceptions import MalformedInputError


@dataclass(frozen=True)
class EvmAddress:
    """
    Value object representing a validated EVM address.

    Business rules:
    - 0x-prefixed, 20 bytes of hex
    - Mixed-case input must carry a valid EIP-55 checksum
    - Canonical form is lower-case (ledger key)
    """

    address: str

    def __post_init__(self):
        """Validate address on creation."""
        if not self.address:
            raise ValueError("Address cannot be empty")

        if not self.address.startswith("0x") or not Web3.is_address(self.address):
            raise ValueError(f"Invalid EVM address: {self.address}")

    @classmethod
    def parse(cls, value, field: str = "identity") -> "EvmAddress":
        """
        Parse untrusted input into an EvmAddress.

        Raises:
            MalformedInputError: If value is not a valid address
        """
        if not isinstance(value, str) or not value.strip():
            raise MalformedInputError(field, "missing address")
        try:
            return cls(value.strip())
        except ValueError as e:
            raise MalformedInputError(field, str(e)) from e

    @property
    def normalized(self) -> str:
        """Lower-cased canonical form."""
        return self.address.lower()

    def __str__(self) -> str:
        """String representation returns the canonical form."""
        return self.normalized

    def __eq__(self, other) -> bool:
        """Compare addresses case-insensitively."""
        if not isinstance(other, EvmAddress):
            return False
        return self.normalized == other.normalized

    def __hash__(self) -> int:
        return hash(self.normalized)


def normalize_identity(value, field: str = "identity") -> str:
    """Validate a payer address and return its ledger key."""
    return EvmAddress.parse(value, field=field).normalized
