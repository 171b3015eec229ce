"""
Signer backed by a private key held in process memory.
"""
from typing import Any, Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount


class LocalSigner:
    """Signs transactions with an eth-account key."""

    def __init__(self, priv_key: str):
        """
        Args:
            priv_key: Hex-encoded secp256k1 private key

        Raises:
            ValueError: If the key cannot be parsed
        """
        try:
            self._account: LocalAccount = Account.from_key(priv_key)
        except Exception as e:
            # Never echo the key itself
            raise ValueError(f"Invalid private key: {type(e).__name__}") from None

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        return self._account.sign_transaction(transaction_dict)

    def __repr__(self) -> str:
        return f"LocalSigner(address={self.address})"
