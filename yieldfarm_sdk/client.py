"""
YieldFarmingClient - Main client for the yield pool contract.
"""
import logging
import time
import urllib.parse
from typing import Any, Callable, Mapping, Optional, Union

import requests
from requests.adapters import HTTPAdapter
from web3 import Web3
from web3.exceptions import TransactionNotFound
from web3.types import BlockIdentifier

from .abi import AbiInput, parse_abi
from .calls import ContractCall
from .config import NetworkConfig
from .exceptions import (
    ChainLookupError,
    ConfigurationError,
    InvocationError,
    QueryError,
    YieldFarmError,
)
from .models import NOT_YET_MINED, NotYetMined, PoolInfo, TxReceipt, UserPosition
from .signer import LocalSigner, Signer
from .utils import normalize_address, normalize_tx_hash

ReceiptResult = Union[TxReceipt, NotYetMined]


class YieldFarmingClient:
    """
    Client for a yield-farming pool contract.

    This client handles:
    1. Submitting deposit, withdraw and claimRewards transactions
    2. Reading balances, rewards, TVL and APY from the pool
    3. Looking up transaction receipts and the latest block

    Submissions return the transaction hash as soon as the node accepts it.
    Waiting for a receipt is a separate step (``wait_for_transaction``), and
    nothing is ever retried by the client.

    Without a signer, transactions are sent with ``eth_sendTransaction`` from
    an account managed by the node. With a signer (or ``priv_key``) they are
    built and signed locally and sent raw.
    """

    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        contract_abi: AbiInput,
        signer: Optional[Signer] = None,
        priv_key: Optional[str] = None,
        timeout: int = 30,
        pool_size: int = 10,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the YieldFarmingClient

        No network request is made here and the contract is not checked to
        exist on-chain.

        Args:
            rpc_url: JSON-RPC endpoint URL (https, or http for localhost)
            contract_address: Address of the deployed yield pool
            contract_abi: Contract ABI as JSON bytes, JSON string or decoded list
            signer: Custom signer used for state-mutating calls (optional)
            priv_key: Private key to build a LocalSigner from (optional)
            timeout: Timeout for each RPC request in seconds
            pool_size: Maximum number of pooled HTTP connections
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ConfigurationError: If any argument is invalid
        """
        self.logger = logger or logging.getLogger(__name__)
        self.rpc_url = self._validate_rpc_url(rpc_url)

        try:
            self.contract_address = normalize_address(contract_address)
        except ValueError as e:
            raise ConfigurationError(f"Invalid contract address: {e}") from e

        abi = parse_abi(contract_abi)

        if signer is not None and priv_key:
            raise ConfigurationError("Provide either signer or priv_key, not both")
        if priv_key:
            try:
                signer = LocalSigner(priv_key)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        self.signer = signer

        # Set up the HTTP transport; requests are never retried by the client
        self.timeout = timeout
        self.session = requests.Session()
        adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.w3 = Web3(Web3.HTTPProvider(
            self.rpc_url,
            request_kwargs={"timeout": timeout},
            session=self.session
        ))

        try:
            self.contract = self.w3.eth.contract(address=self.contract_address, abi=abi)
        except Exception as e:
            raise ConfigurationError(f"Contract ABI rejected: {e}") from e

        self.logger.debug(f"Client bound to {self.contract_address} via {self.rpc_url}")

    @classmethod
    def from_network(
        cls,
        network: str,
        contract_abi: AbiInput,
        rpc_url: Optional[str] = None,
        contract_address: Optional[str] = None,
        **kwargs: Any
    ) -> "YieldFarmingClient":
        """
        Create a client for a network listed in networks.json

        Args:
            network: Network name (e.g. "sepolia")
            contract_abi: Contract ABI
            rpc_url: Override for the network's RPC URL
            contract_address: Override for the network's pool address
            **kwargs: Passed through to the constructor

        Raises:
            ConfigurationError: If the network or its pool address is unknown
        """
        return cls(
            rpc_url=NetworkConfig.get_rpc_url(network, override=rpc_url),
            contract_address=NetworkConfig.get_pool_address(network, override=contract_address),
            contract_abi=contract_abi,
            **kwargs
        )

    @staticmethod
    def _validate_rpc_url(rpc_url: str) -> str:
        if not isinstance(rpc_url, str):
            raise ConfigurationError(f"rpc_url must be a string, got {type(rpc_url).__name__}")
        try:
            parsed = urllib.parse.urlparse(rpc_url)
            host = parsed.hostname
        except ValueError as e:
            raise ConfigurationError(f"Malformed rpc_url: {e}") from e
        if parsed.scheme not in ("http", "https") or not host:
            raise ConfigurationError(f"rpc_url must be an http(s) URL (got: {rpc_url!r})")
        is_local = host in ("localhost", "127.0.0.1")
        if parsed.scheme != "https" and not is_local:
            raise ConfigurationError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")
        return rpc_url

    @property
    def address(self) -> Optional[str]:
        """Address of the configured signer, if any"""
        return self.signer.address if self.signer else None

    # ------------------------------------------------------------------
    # State-mutating calls
    # ------------------------------------------------------------------

    def deposit(self, amount: int, caller: str) -> str:
        """
        Deposit tokens into the pool

        Args:
            amount: Amount in token base units
            caller: Address the transaction is sent from

        Returns:
            Transaction hash as a 0x-prefixed hex string

        Raises:
            InvocationError: If the transaction cannot be submitted
        """
        return self._transact(self._build_call(InvocationError, ContractCall.deposit, amount), caller)

    def withdraw(self, amount: int, caller: str) -> str:
        """
        Withdraw tokens from the pool

        Raises:
            InvocationError: If the transaction cannot be submitted
        """
        return self._transact(self._build_call(InvocationError, ContractCall.withdraw, amount), caller)

    def claim_rewards(self, caller: str) -> str:
        """
        Claim accrued rewards

        Raises:
            InvocationError: If the transaction cannot be submitted
        """
        return self._transact(ContractCall.claim_rewards(), caller)

    # ------------------------------------------------------------------
    # Read-only calls
    # ------------------------------------------------------------------

    def get_staked_balance(self, account: str, block_identifier: BlockIdentifier = "latest") -> int:
        """
        Get an account's staked balance

        Args:
            account: Account address
            block_identifier: Block number, hash or tag to read at

        Raises:
            QueryError: If the read fails or cannot be decoded
        """
        return self._query(self._build_call(QueryError, ContractCall.balance_of, account), block_identifier)

    def get_pending_rewards(self, account: str, block_identifier: BlockIdentifier = "latest") -> int:
        """Get rewards an account can currently claim"""
        return self._query(self._build_call(QueryError, ContractCall.pending_rewards, account), block_identifier)

    def get_total_value_locked(self, block_identifier: BlockIdentifier = "latest") -> int:
        return self._query(ContractCall.total_value_locked(), block_identifier)

    def get_current_apy(self, block_identifier: BlockIdentifier = "latest") -> int:
        """Get the pool's current APY as reported by the contract"""
        return self._query(ContractCall.current_apy(), block_identifier)

    def get_pool_info(self) -> PoolInfo:
        """
        Read TVL and APY at the same block

        Raises:
            ChainLookupError: If the latest block cannot be fetched
            QueryError: If either read fails
        """
        block_number = self.get_latest_block()
        return PoolInfo(
            total_value_locked=self.get_total_value_locked(block_identifier=block_number),
            current_apy=self.get_current_apy(block_identifier=block_number),
            block_number=block_number
        )

    def get_user_position(self, account: str) -> UserPosition:
        """
        Read an account's balance and pending rewards at the same block

        Raises:
            ChainLookupError: If the latest block cannot be fetched
            QueryError: If the account is invalid or either read fails
        """
        call = self._build_call(QueryError, ContractCall.balance_of, account)
        block_number = self.get_latest_block()
        return UserPosition(
            account=call.args[0],
            staked_balance=self._query(call, block_number),
            pending_rewards=self.get_pending_rewards(call.args[0], block_identifier=block_number),
            block_number=block_number
        )

    # ------------------------------------------------------------------
    # Chain lookups
    # ------------------------------------------------------------------

    def wait_for_transaction(self, tx_hash: Union[str, bytes]) -> ReceiptResult:
        """
        Fetch a transaction receipt once

        This makes a single request; poll it (or use ``poll_for_receipt``)
        to block until the transaction is mined.

        Args:
            tx_hash: Transaction hash as hex string or 32 bytes

        Returns:
            The receipt, or NOT_YET_MINED if the node has none yet

        Raises:
            ChainLookupError: If the hash is malformed or the request fails
        """
        try:
            tx_hash_hex = normalize_tx_hash(tx_hash)
        except ValueError as e:
            raise ChainLookupError(str(e)) from e

        try:
            receipt = self.w3.eth.get_transaction_receipt(tx_hash_hex)
        except TransactionNotFound:
            self.logger.debug(f"No receipt yet for {tx_hash_hex}")
            return NOT_YET_MINED
        except Exception as e:
            self.logger.error(f"Receipt lookup failed for {tx_hash_hex}: {e}")
            raise ChainLookupError(f"Receipt lookup failed for {tx_hash_hex}: {e}") from e

        # Some nodes report pending transactions with an empty block number
        if receipt is None or receipt.get("blockNumber") is None:
            return NOT_YET_MINED

        try:
            return self._convert_receipt(receipt)
        except ValueError as e:
            raise ChainLookupError(f"Malformed receipt for {tx_hash_hex}: {e}") from e

    def poll_for_receipt(
        self,
        tx_hash: Union[str, bytes],
        timeout: float = 120,
        poll_interval: float = 1.0
    ) -> ReceiptResult:
        """
        Call wait_for_transaction until a receipt appears or timeout elapses

        Args:
            tx_hash: Transaction hash
            timeout: Seconds to keep polling
            poll_interval: Seconds between lookups

        Returns:
            The receipt, or NOT_YET_MINED if none appeared in time

        Raises:
            ChainLookupError: On the first failed lookup
        """
        deadline = time.monotonic() + timeout
        while True:
            result = self.wait_for_transaction(tx_hash)
            if result is not NOT_YET_MINED:
                return result
            if time.monotonic() >= deadline:
                self.logger.warning(f"Transaction {tx_hash!r} not mined after {timeout}s")
                return NOT_YET_MINED
            time.sleep(poll_interval)

    def get_latest_block(self) -> int:
        """
        Get the current chain head's block number

        Raises:
            ChainLookupError: If the node has no head or the request fails
        """
        try:
            block = self.w3.eth.get_block("latest")
        except Exception as e:
            self.logger.error(f"Latest block lookup failed: {e}")
            raise ChainLookupError(f"Latest block lookup failed: {e}") from e

        number = block.get("number")
        if number is None:
            raise ChainLookupError("Node reported no chain head")
        return int(number)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _build_call(
        error_cls: Callable[[str], YieldFarmError],
        factory: Callable[..., ContractCall],
        *args: Any
    ) -> ContractCall:
        try:
            return factory(*args)
        except (TypeError, ValueError) as e:
            raise error_cls(str(e)) from e

    def _transact(self, call: ContractCall, caller: str) -> str:
        """
        Submit a state-mutating call as caller

        Returns:
            Transaction hash as a 0x-prefixed hex string

        Raises:
            InvocationError: If encoding, signing or submission fails
        """
        name = call.function.value
        if not call.mutating:
            raise InvocationError(f"{name} is read-only and cannot be sent as a transaction")

        try:
            caller = normalize_address(caller)
        except ValueError as e:
            raise InvocationError(f"Invalid caller: {e}") from e

        try:
            fn = self.contract.functions[name](*call.args)
        except Exception as e:
            raise InvocationError(f"Cannot encode {name}: {e}") from e

        try:
            if self.signer is None:
                tx_hash = fn.transact({"from": caller})
            else:
                tx_hash = self._sign_and_send(fn, caller)
        except InvocationError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to send {name} transaction: {e}")
            raise InvocationError(f"Failed to send {name} transaction: {e}") from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        self.logger.info(f"{name} transaction sent: {tx_hash_hex}")
        return tx_hash_hex

    def _sign_and_send(self, fn: Any, caller: str) -> bytes:
        if normalize_address(self.signer.address) != caller:
            raise InvocationError(f"No signer available for caller {caller}")

        nonce = self.w3.eth.get_transaction_count(caller, "pending")
        tx = fn.build_transaction({"from": caller, "nonce": nonce})

        try:
            signed_tx = self.signer.sign_transaction(tx)
        except Exception as e:
            self.logger.error(f"Transaction signing failed: {e}")
            raise InvocationError(f"Failed to sign transaction: {e}") from e

        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

    def _query(self, call: ContractCall, block_identifier: BlockIdentifier = "latest") -> int:
        """
        Read a view function at block_identifier

        Raises:
            QueryError: If the read fails or does not decode to an int
        """
        name = call.function.value
        if call.mutating:
            raise QueryError(f"{name} mutates state and cannot be queried")

        try:
            result = self.contract.functions[name](*call.args).call(block_identifier=block_identifier)
        except Exception as e:
            self.logger.error(f"{name} query failed: {e}")
            raise QueryError(f"{name} query failed: {e}") from e

        if isinstance(result, bool) or not isinstance(result, int):
            raise QueryError(f"{name} returned {type(result).__name__}, expected an integer")

        self.logger.debug(f"{name}{call.args} at {block_identifier}: {result}")
        return result

    def _convert_receipt(self, web3_receipt: Mapping[str, Any]) -> TxReceipt:
        """
        Convert Web3 receipt to our TxReceipt model

        Args:
            web3_receipt: The Web3 transaction receipt

        Returns:
            Our TxReceipt model
        """
        return TxReceipt.model_validate(_to_plain(web3_receipt))


def _to_plain(value: Any) -> Any:
    """Turn AttributeDicts and HexBytes into plain dicts and hex strings"""
    if isinstance(value, (bytes, bytearray)):
        return Web3.to_hex(bytes(value))
    if isinstance(value, Mapping):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value
