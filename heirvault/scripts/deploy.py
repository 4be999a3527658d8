"""
deploy.py — Inheritance contract deployment script
===================================================
Usage:
    python scripts/deploy.py

Requirements:
    pip install -e .
    ALGO_MNEMONIC env var must be set (or use .env file)
    HEIR_ADDRESS is optional; the deployer is used as heir when unset

After deploy, the printed APP_ID can be exported for later scripts:
    APP_ID=<your-app-id>
"""

import json
import pathlib

from contracts.client import InheritanceClient
from contracts.constants import TIMELOCK_SECONDS
from contracts.network import (
    get_algod_client,
    heir_from_env,
    load_account,
    network_name,
    retry_on_429,
)

ARTIFACTS = pathlib.Path(__file__).parent.parent / "contracts" / "artifacts"


def main():
    network = network_name()
    algod = get_algod_client(network)
    deployer = load_account()
    heir = heir_from_env(deployer.address)

    print(f"\n🚀 Deploying Inheritance to {network.upper()}...")
    print(f"   Deployer : {deployer.address}")

    # Check balance
    try:
        info = retry_on_429(algod.account_info, deployer.address)
    except Exception as e:
        raise SystemExit(f"❌  Cannot reach Algorand node: {e}")
    balance_algo = info.get("amount", 0) / 1_000_000
    print(f"   Balance  : {balance_algo:.4f} ALGO")
    if balance_algo < 0.2:
        raise SystemExit(
            "\n❌  Insufficient balance. Need at least 0.2 ALGO.\n"
            f"   Fund this address: {deployer.address}\n"
            "   Testnet dispenser: https://dispenser.testnet.aws.algodev.network\n"
        )

    client = InheritanceClient(algod, deployer)
    app_id = client.create(heir)
    app_addr = client.app_address

    # Wait for a few rounds so the create is settled on every node we query
    status = retry_on_429(algod.status)
    retry_on_429(algod.status_after_block, status["last-round"] + 4)
    created = retry_on_429(algod.application_info, app_id)
    print(f"   Confirmed at round {created.get('params', {}).get('created-at-round', '?')}")

    print("\n" + "═" * 60)
    print("  ✅ Contract deployed!")
    print(f"  📌 App ID       : {app_id}")
    print(f"  📦 App Address  : {app_addr}")
    print(f"  👤 Initial heir : {heir}")
    print(f"  ⏱️  Timelock     : {TIMELOCK_SECONDS // 86400} days")
    print("═" * 60)
    print("\nVerification information:")
    print(f"  Contract address      : {app_addr}")
    print(f"  Constructor arguments : {[heir]}")
    print("\nNext steps:")
    print("  1. Fund the app address with at least 0.1 ALGO (minimum balance):")
    print(f"     Send ALGO to {app_addr}")
    print("  2. Export the app id for later scripts:")
    print(f"     APP_ID={app_id}\n")

    ARTIFACTS.mkdir(exist_ok=True)
    (ARTIFACTS / "deployed.json").write_text(json.dumps({
        "network": network,
        "app_id": app_id,
        "app_address": app_addr,
        "deployer": deployer.address,
        "heir": heir,
    }, indent=2))
    print("  Saved to contracts/artifacts/deployed.json")

    return app_id, app_addr


if __name__ == "__main__":
    main()
