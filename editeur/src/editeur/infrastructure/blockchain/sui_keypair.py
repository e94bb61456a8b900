"""
Chain-B Ed25519 keypair.

Signing and addressing follow the Sui conventions: intent-prefixed
Blake2b-256 digests, flag-prefixed serialized signatures.
"""

import base64
import hashlib

import base58
from nacl.signing import SigningKey

ED25519_FLAG = 0x00

# Intent scope TransactionData, version V0, app id Sui
TRANSACTION_INTENT = bytes([0, 0, 0])

TRANSACTION_DATA_PREFIX = b"TransactionData::"


def _blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def transaction_digest(tx_bytes: bytes) -> str:
    """
    Compute the digest a transaction is known by once executed.

    Args:
        tx_bytes: BCS-serialized transaction data

    Returns:
        Base58 digest
    """
    return base58.b58encode(
        _blake2b_256(TRANSACTION_DATA_PREFIX + tx_bytes)
    ).decode()


class SuiKeypair:
    """
    Ed25519 signer for chain-B transactions.

    Accepted secret formats:
    - base64 of flag byte + 32-byte seed (sui.keystore form)
    - base64 of a bare 32-byte seed
    - 0x-prefixed hex of a 32-byte seed
    """

    def __init__(self, signing_key: SigningKey):
        self._signing_key = signing_key
        self.public_key = bytes(signing_key.verify_key)

    @classmethod
    def from_secret(cls, secret: str) -> "SuiKeypair":
        """
        Parse a secret key string.

        Raises:
            ValueError: If the format is not recognized or not Ed25519
        """
        secret = secret.strip()

        if secret.startswith("suiprivkey"):
            raise ValueError(
                "Bech32 'suiprivkey' keys are not supported; export the key "
                "as base64 (sui keytool convert) or 0x-hex"
            )

        if secret.startswith("0x"):
            try:
                seed = bytes.fromhex(secret[2:])
            except ValueError as e:
                raise ValueError("Invalid hex private key") from e
        else:
            try:
                raw = base64.b64decode(secret, validate=True)
            except ValueError as e:
                raise ValueError("Invalid base64 private key") from e

            if len(raw) == 33:
                if raw[0] != ED25519_FLAG:
                    raise ValueError(
                        f"Unsupported key scheme flag {raw[0]}; Ed25519 required"
                    )
                seed = raw[1:]
            else:
                seed = raw

        if len(seed) != 32:
            raise ValueError(f"Private key must be 32 bytes, got {len(seed)}")

        return cls(SigningKey(seed))

    @property
    def address(self) -> str:
        """Chain-B address: Blake2b-256 of flag + public key."""
        return "0x" + _blake2b_256(bytes([ED25519_FLAG]) + self.public_key).hex()

    def sign_transaction(self, tx_bytes: bytes) -> str:
        """
        Sign transaction data.

        Args:
            tx_bytes: BCS-serialized transaction data

        Returns:
            Serialized signature (base64 of flag + signature + public key)
        """
        digest = _blake2b_256(TRANSACTION_INTENT + tx_bytes)
        signature = self._signing_key.sign(digest).signature
        return base64.b64encode(
            bytes([ED25519_FLAG]) + signature + self.public_key
        ).decode()
