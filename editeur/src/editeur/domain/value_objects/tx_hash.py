"""
TxHash value object - chain-A transaction identifier.
"""

import re
from dataclasses import dataclass

from editeur.domain.exceptions import MalformedInputError

_TX_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


@dataclass(frozen=True)
class TxHash:
    """
    Value object for a 32-byte keccak transaction hash.

    Stored lower-cased so the same hash in any casing credits once.
    """

    value: str

    def __post_init__(self):
        """Validate and canonicalize hash on creation."""
        if not isinstance(self.value, str) or not _TX_HASH_PATTERN.match(self.value):
            raise ValueError("expected 0x followed by 64 hex characters")
        object.__setattr__(self, "value", self.value.lower())

    @classmethod
    def parse(cls, value, field: str = "txId") -> "TxHash":
        """
        Parse untrusted input into a TxHash.

        Raises:
            MalformedInputError: If value is not a well-formed hash
        """
        if isinstance(value, str):
            value = value.strip()
        try:
            return cls(value)
        except ValueError as e:
            raise MalformedInputError(field, str(e)) from e

    def __str__(self) -> str:
        return self.value
