"""
Utility functions for the yield-farming SDK.
"""
import re
from typing import Union

from web3 import Web3

_TX_HASH_RE = re.compile(r"(0x)?[0-9a-fA-F]{64}")


def normalize_address(address: str) -> str:
    """
    Convert an account or contract address to its checksum form

    Args:
        address: 20-byte address as a hex string

    Returns:
        EIP-55 checksum address

    Raises:
        ValueError: If the value is not a valid address
    """
    if not isinstance(address, str) or not Web3.is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return Web3.to_checksum_address(address)


def require_amount(amount: int) -> int:
    """
    Validate a token amount in base units

    Raises:
        TypeError: If amount is not an int
        ValueError: If amount is negative
    """
    # bool is an int subclass but never a meaningful amount
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"Amount must be an int, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"Amount must not be negative, got {amount}")
    return amount


def normalize_tx_hash(tx_hash: Union[str, bytes]) -> str:
    """
    Convert a transaction hash to a 0x-prefixed lowercase hex string

    Raises:
        ValueError: If the value is not a 32-byte hash
    """
    if isinstance(tx_hash, (bytes, bytearray)):
        if len(tx_hash) != 32:
            raise ValueError(f"Transaction hash must be 32 bytes, got {len(tx_hash)}")
        return Web3.to_hex(bytes(tx_hash))
    if isinstance(tx_hash, str) and _TX_HASH_RE.fullmatch(tx_hash):
        body = tx_hash[2:] if tx_hash.startswith("0x") else tx_hash
        return "0x" + body.lower()
    raise ValueError(f"Invalid transaction hash: {tx_hash!r}")
