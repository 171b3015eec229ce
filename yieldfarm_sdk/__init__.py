"""
yieldfarm-sdk - Python client for yield-farming pool contracts.
"""
from .abi import YIELD_POOL_ABI, parse_abi
from .calls import ContractCall, FarmFunction
from .client import YieldFarmingClient
from .config import NetworkConfig
from .exceptions import (
    ChainLookupError,
    ConfigurationError,
    ErrorKind,
    InvocationError,
    QueryError,
    YieldFarmError,
)
from .models import NOT_YET_MINED, NotYetMined, PoolInfo, TxReceipt, UserPosition
from .signer import LocalSigner, Signer
from .version import __version__

__all__ = [
    "YieldFarmingClient",
    "ContractCall",
    "FarmFunction",
    "NetworkConfig",
    "YIELD_POOL_ABI",
    "parse_abi",
    "TxReceipt",
    "PoolInfo",
    "UserPosition",
    "NotYetMined",
    "NOT_YET_MINED",
    "Signer",
    "LocalSigner",
    "ErrorKind",
    "YieldFarmError",
    "ConfigurationError",
    "InvocationError",
    "QueryError",
    "ChainLookupError",
    "__version__",
]
