"""
Tests for state-mutating calls: deposit, withdraw and claimRewards.
"""
import pytest
from unittest.mock import MagicMock
from web3 import Web3

from yieldfarm_sdk.exceptions import InvocationError, ErrorKind
from tests.test_helpers import (
    create_test_client,
    selector,
    TEST_CALLER,
    TEST_CONTRACT,
    TEST_OTHER_ACCOUNT,
)

TX_HASH_LEN = 66  # 0x + 32 bytes


def _data(tx):
    return tx.get("data") or tx.get("input")


def test_deposit_sends_transaction_from_caller(client, rpc_node):
    amount = 10**18
    tx_hash = client.deposit(amount, TEST_CALLER)

    assert tx_hash.startswith("0x") and len(tx_hash) == TX_HASH_LEN
    assert len(rpc_node.sent_transactions) == 1
    sent = rpc_node.sent_transactions[0]
    assert Web3.to_checksum_address(sent["from"]) == TEST_CALLER
    assert Web3.to_checksum_address(sent["to"]) == TEST_CONTRACT
    assert _data(sent).startswith(selector("deposit(uint256)"))
    assert _data(sent).endswith(format(amount, "064x"))


def test_withdraw_encodes_amount(client, rpc_node):
    client.withdraw(5, TEST_CALLER)

    sent = rpc_node.sent_transactions[0]
    assert _data(sent) == selector("withdraw(uint256)") + format(5, "064x")


def test_claim_rewards_takes_no_arguments(client, rpc_node):
    client.claim_rewards(TEST_CALLER)

    assert _data(rpc_node.sent_transactions[0]) == selector("claimRewards()")


def test_submission_does_not_wait_for_receipt(client, rpc_node):
    client.deposit(1, TEST_CALLER)
    assert "eth_getTransactionReceipt" not in rpc_node.methods()


def test_repeated_submissions_are_each_sent(client, rpc_node):
    first = client.deposit(1, TEST_CALLER)
    second = client.deposit(1, TEST_CALLER)

    # No implicit idempotence: both reach the node
    assert len(rpc_node.sent_transactions) == 2
    assert first.startswith("0x") and second.startswith("0x")


def test_lowercase_caller_is_accepted(client, rpc_node):
    client.claim_rewards(TEST_CALLER.lower())
    assert Web3.to_checksum_address(rpc_node.sent_transactions[0]["from"]) == TEST_CALLER


@pytest.mark.parametrize("amount, match", [
    (-1, "must not be negative"),
    (True, "must be an int"),
    (1.5, "must be an int"),
    ("100", "must be an int"),
])
def test_invalid_amount_rejected_before_io(amount, match, client, rpc_node):
    with pytest.raises(InvocationError, match=match):
        client.deposit(amount, TEST_CALLER)
    assert rpc_node.requests == []


def test_invalid_caller_rejected_before_io(client, rpc_node):
    with pytest.raises(InvocationError, match="Invalid caller"):
        client.withdraw(1, "0xnot-an-address")
    assert rpc_node.requests == []


def test_node_rejection_is_invocation_error(client, rpc_node):
    rpc_node.fail_methods["eth_sendTransaction"] = "insufficient funds for gas * price + value"

    with pytest.raises(InvocationError, match="Failed to send deposit transaction") as exc_info:
        client.deposit(1, TEST_CALLER)

    assert exc_info.value.kind is ErrorKind.INVOCATION
    assert exc_info.value.__cause__ is not None


def test_revert_at_estimation_is_invocation_error(client, rpc_node):
    rpc_node.revert_estimate = "nothing to claim"

    with pytest.raises(InvocationError):
        client.claim_rewards(TEST_CALLER)
    assert rpc_node.sent_transactions == []


def test_failed_submission_is_not_retried(client, rpc_node):
    rpc_node.fail_methods["eth_sendTransaction"] = "nonce too low"

    with pytest.raises(InvocationError):
        client.withdraw(1, TEST_CALLER)
    assert rpc_node.methods().count("eth_sendTransaction") == 1


def test_failure_is_logged(client, rpc_node, caplog):
    rpc_node.fail_methods["eth_sendTransaction"] = "boom"
    caplog.set_level("ERROR")

    with pytest.raises(InvocationError):
        client.deposit(1, TEST_CALLER)
    assert any("Failed to send deposit transaction" in msg for msg in caplog.messages)


def test_empty_abi_invocation_fails_cleanly(rpc_node):
    """Calling a function missing from the ABI raises instead of crashing"""
    client = create_test_client(contract_abi=b"[]")

    for call in (
        lambda: client.deposit(1, TEST_CALLER),
        lambda: client.withdraw(1, TEST_CALLER),
        lambda: client.claim_rewards(TEST_CALLER),
    ):
        with pytest.raises(InvocationError, match="Cannot encode"):
            call()
    assert rpc_node.requests == []


# ---------------------------------------------------------------------------
# Local signing
# ---------------------------------------------------------------------------

def test_signed_deposit_sends_raw_transaction(signing_client, rpc_node, mock_account):
    tx_hash = signing_client.deposit(10**18, mock_account.address)

    assert rpc_node.sent_transactions == []
    assert len(rpc_node.raw_transactions) == 1
    assert tx_hash == Web3.to_hex(Web3.keccak(hexstr=rpc_node.raw_transactions[0]))
    assert "eth_getTransactionCount" in rpc_node.methods()


def test_signed_call_uses_pending_nonce(signing_client, rpc_node, mock_account):
    signing_client.claim_rewards(mock_account.address)

    nonce_requests = [r for r in rpc_node.requests if r["method"] == "eth_getTransactionCount"]
    assert nonce_requests[0]["params"][1] == "pending"


def test_signer_must_match_caller(signing_client, rpc_node):
    with pytest.raises(InvocationError, match="No signer available for caller"):
        signing_client.deposit(1, TEST_OTHER_ACCOUNT)
    assert rpc_node.raw_transactions == []


class BadSigner:
    address = TEST_CALLER

    def sign_transaction(self, _):
        raise RuntimeError("nope")


def test_signing_failure_raises_invocation_error(rpc_node):
    client = create_test_client(signer=BadSigner())

    with pytest.raises(InvocationError, match="Failed to sign transaction"):
        client.deposit(1, TEST_CALLER)
    assert rpc_node.raw_transactions == []


def test_custom_signer_receives_built_transaction(rpc_node):
    signer = MagicMock()
    signer.address = TEST_CALLER
    signer.sign_transaction.return_value.raw_transaction = b"\x02" + b"\x00" * 31

    client = create_test_client(signer=signer)
    client.withdraw(3, TEST_CALLER)

    tx = signer.sign_transaction.call_args[0][0]
    assert tx["nonce"] == rpc_node.nonce
    assert Web3.to_checksum_address(tx["to"]) == TEST_CONTRACT
    assert tx["data"] == selector("withdraw(uint256)") + format(3, "064x")
    assert rpc_node.raw_transactions == ["0x02" + "00" * 31]
