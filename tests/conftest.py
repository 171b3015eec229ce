"""
Pytest fixtures for the yield-farming SDK tests.
"""
import time

import pytest
from eth_account import Account

from tests.test_helpers import FakeNode, create_test_client, TEST_RPC_URL, TEST_PRIV_KEY


# Make time.sleep instantaneous so polling and transport backoff don't slow the suite down
@pytest.fixture(autouse=True)
def _fast_sleep(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda *_a, **_kw: None)


@pytest.fixture
def fake_node():
    """A fresh in-memory node with a few canned pool figures"""
    return FakeNode()


@pytest.fixture
def rpc_node(requests_mock, fake_node):
    """Serve the fake node at TEST_RPC_URL"""
    requests_mock.post(TEST_RPC_URL, json=fake_node.callback)
    return fake_node


@pytest.fixture
def client(rpc_node):
    """Client without a signer, sending through node-managed accounts"""
    return create_test_client()


@pytest.fixture
def signing_client(rpc_node):
    """Client that signs transactions locally with TEST_PRIV_KEY"""
    return create_test_client(priv_key=TEST_PRIV_KEY)


@pytest.fixture
def mock_account():
    """Create a deterministic test account"""
    return Account.from_key(TEST_PRIV_KEY)
