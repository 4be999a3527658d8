"""
status.py — Print the custody state of a deployed Inheritance app
==================================================================
Usage:
    APP_ID=<app-id> python scripts/status.py
"""

from contracts.client import InheritanceClient
from contracts.network import app_id_from_env, get_algod_client, load_account


def main():
    app_id = app_id_from_env()
    if not app_id:
        raise SystemExit("❌  APP_ID environment variable not set.")

    client = InheritanceClient(get_algod_client(), load_account(), app_id)
    remaining = client.time_remaining()

    print(f"\n📜 Inheritance app {app_id}")
    print(f"   Owner          : {client.owner()}")
    print(f"   Heir           : {client.heir()}")
    print(f"   Last activity  : {client.last_activity()}")
    print(f"   Balance        : {client.balance() / 1_000_000:.6f} ALGO")
    print(f"   Status         : {client.status()}")
    print(f"   Claimable in   : {remaining // 86400}d {remaining % 86400 // 3600}h")


if __name__ == "__main__":
    main()
