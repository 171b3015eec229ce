#!/usr/bin/env python3
"""
Example of using the YieldFarmingClient.
"""
import os
import logging

from yieldfarm_sdk import (
    YieldFarmingClient,
    NetworkConfig,
    YIELD_POOL_ABI,
    NOT_YET_MINED,
    YieldFarmError,
)

def main():
    """
    Demonstrate usage of the YieldFarmingClient.

    This example shows how to:
    1. Initialize the client from a network configuration
    2. Read pool statistics and a user's position
    3. Optionally deposit and poll for the receipt
    """
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

    NETWORK = os.environ.get("NETWORK", "sepolia")
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    DEPOSIT_WEI = os.environ.get("DEPOSIT_WEI")

    print("Available networks:")
    for network_name in NetworkConfig.load_networks().keys():
        print(f"  - {network_name}")
    print()

    try:
        client = YieldFarmingClient.from_network(
            network=NETWORK,
            contract_abi=YIELD_POOL_ABI,
            priv_key=PRIVATE_KEY
        )
    except YieldFarmError as e:
        print(f"ERROR: {e}")
        return

    print(f"Connected to: {client.rpc_url}")
    print(f"Contract: {client.contract_address}")

    try:
        pool = client.get_pool_info()
        print(f"Pool statistics at block {pool.block_number}:")
        print(f"  Total Value Locked: {pool.total_value_locked} wei")
        print(f"  Current APY: {pool.current_apy}")

        if not client.address:
            print("Set PRIVATE_KEY to read your position and submit transactions")
            return

        position = client.get_user_position(client.address)
        print(f"Position of {position.account}:")
        print(f"  Staked Balance: {position.staked_balance} wei")
        print(f"  Pending Rewards: {position.pending_rewards} wei")

        if DEPOSIT_WEI:
            tx_hash = client.deposit(int(DEPOSIT_WEI), client.address)
            print(f"Deposit transaction: {tx_hash}")

            receipt = client.poll_for_receipt(tx_hash, timeout=180, poll_interval=2.0)
            if receipt is NOT_YET_MINED:
                print("Transaction not mined yet, check again later")
            elif receipt.succeeded:
                print(f"Deposit successful in block {receipt.block_number}")
            else:
                print("Deposit failed!")

    except YieldFarmError as e:
        print(f"Error ({e.kind.value}): {e}")

if __name__ == "__main__":
    main()
