"""
Chain-A custodial identity.
"""

from eth_account import Account
from web3 import Web3


def derive_publisher_address(private_key: str) -> str:
    """
    Derive the custodial chain-A address from its private key.

    Args:
        private_key: Hex private key, with or without 0x prefix

    Returns:
        Checksummed address

    Raises:
        ValueError: If the key is malformed
    """
    key = private_key.strip()
    if not key.startswith("0x"):
        key = f"0x{key}"

    try:
        account = Account.from_key(key)
    except Exception as e:
        raise ValueError(f"Invalid EVM private key: {e}") from e
    return Web3.to_checksum_address(account.address)
