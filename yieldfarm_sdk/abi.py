"""
Contract ABI for the yield pool and ABI loading helpers.
"""
import json
from typing import Any, Dict, List, Union

from .exceptions import ConfigurationError

AbiInput = Union[bytes, bytearray, str, List[Dict[str, Any]]]


def _uint256_view(name: str, inputs: List[Dict[str, str]]) -> Dict[str, Any]:
    return {
        "inputs": inputs,
        "name": name,
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    }


_ACCOUNT_INPUT = [{"internalType": "address", "name": "account", "type": "address"}]
_AMOUNT_INPUT = [{"internalType": "uint256", "name": "amount", "type": "uint256"}]

# ABI of the yield pool functions the client calls
YIELD_POOL_ABI: List[Dict[str, Any]] = [
    {
        "inputs": _AMOUNT_INPUT,
        "name": "deposit",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": _AMOUNT_INPUT,
        "name": "withdraw",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "claimRewards",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    _uint256_view("balanceOf", _ACCOUNT_INPUT),
    _uint256_view("pendingRewards", _ACCOUNT_INPUT),
    _uint256_view("totalValueLocked", []),
    _uint256_view("getCurrentAPY", []),
]


def parse_abi(contract_abi: AbiInput) -> List[Dict[str, Any]]:
    """
    Parse a serialized contract ABI

    Args:
        contract_abi: JSON ABI as bytes or str, or an already-decoded list

    Returns:
        List of ABI entries

    Raises:
        ConfigurationError: If the ABI is not a JSON array of objects
    """
    if isinstance(contract_abi, (bytes, bytearray)):
        try:
            contract_abi = bytes(contract_abi).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Contract ABI is not valid UTF-8: {e}") from e

    if isinstance(contract_abi, str):
        try:
            contract_abi = json.loads(contract_abi)
        except (ValueError, RecursionError) as e:
            raise ConfigurationError(f"Contract ABI is not valid JSON: {e}") from e

    if not isinstance(contract_abi, list):
        raise ConfigurationError(
            f"Contract ABI must be a JSON array, got {type(contract_abi).__name__}"
        )

    for index, entry in enumerate(contract_abi):
        if not isinstance(entry, dict):
            raise ConfigurationError(
                f"Contract ABI entry {index} must be an object, got {type(entry).__name__}"
            )
    return contract_abi
