from .client_creator import (
    create_test_client,
    TEST_RPC_URL,
    TEST_LOCAL_RPC_URL,
    TEST_CONTRACT,
    TEST_CALLER,
    TEST_OTHER_ACCOUNT,
    TEST_PRIV_KEY,
)
from .fake_node import FakeNode, encode_uint, selector
