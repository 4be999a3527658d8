"""
network.py — Node endpoints, deployer account and rate-limit helpers
====================================================================
Configuration comes from the environment (a .env file is honoured):

    NETWORK        testnet | localnet          (default: testnet)
    ALGO_MNEMONIC  25-word deployer mnemonic
    HEIR_ADDRESS   initial heir for deployment (default: deployer)
    APP_ID         id of an already deployed Inheritance app
"""

import os
import sys
import time
from typing import NamedTuple, Optional

from algosdk import account, mnemonic
from algosdk.atomic_transaction_composer import AccountTransactionSigner
from algosdk.error import AlgodHTTPError
from algosdk.v2client import algod as algod_client_module
from dotenv import load_dotenv

load_dotenv()

ALGOD_SERVERS = {
    "testnet":  ("https://testnet-api.algonode.network", "", ""),
    "localnet": ("http://localhost", 4001, "a" * 64),
}


# ── Rate limiting ─────────────────────────────────────────────────────────────
class RetryPolicy(NamedTuple):
    """Backoff for public nodes (AlgoNode free tier allows ~1 req/s)."""

    attempts: int = 5
    backoff_base: float = 2       # wait backoff_base ** attempt seconds after a 429
    pause: float = 0.5            # pause after every successful call


DEFAULT_RETRY = RetryPolicy()


class Account(NamedTuple):
    address: str
    private_key: str

    @property
    def signer(self) -> AccountTransactionSigner:
        return AccountTransactionSigner(self.private_key)


def network_name() -> str:
    return os.getenv("NETWORK", "testnet")


def app_id_from_env() -> Optional[int]:
    value = os.getenv("APP_ID")
    return int(value) if value else None


def is_rate_limited(exc: AlgodHTTPError) -> bool:
    return getattr(exc, "code", None) == 429 or "429" in str(exc)


def retry_on_429(fn, *args, policy: RetryPolicy = DEFAULT_RETRY, **kwargs):
    """Call fn(*args, **kwargs), backing off on HTTP 429 up to policy.attempts times."""
    for attempt in range(policy.attempts):
        try:
            result = fn(*args, **kwargs)
        except AlgodHTTPError as exc:
            if not is_rate_limited(exc):
                raise
            wait = policy.backoff_base ** attempt
            print(f"   ⏳ Rate limited, waiting {wait}s ({attempt + 1}/{policy.attempts})")
            time.sleep(wait)
            continue
        time.sleep(policy.pause)
        return result
    raise RuntimeError(f"node still rate limiting after {policy.attempts} attempts")


def get_algod_client(network: Optional[str] = None) -> algod_client_module.AlgodClient:
    network = network or network_name()
    if network not in ALGOD_SERVERS:
        sys.exit(f"Unsupported network: {network}")

    server, port, token = ALGOD_SERVERS[network]
    url = server if not port else f"{server}:{port}"
    headers = {"User-Agent": "algosdk", "x-api-key": token} if token else {"User-Agent": "algosdk"}
    return algod_client_module.AlgodClient(token, url, headers=headers)


def load_account() -> Account:
    raw_mnemonic = os.getenv("ALGO_MNEMONIC")
    if not raw_mnemonic:
        sys.exit(
            "❌  ALGO_MNEMONIC environment variable not set.\n"
            "    Export your 25-word mnemonic:\n"
            "    export ALGO_MNEMONIC=\"word1 word2 ... word25\""
        )
    private_key = mnemonic.to_private_key(raw_mnemonic)
    return Account(account.address_from_private_key(private_key), private_key)


def heir_from_env(default: str) -> str:
    return os.getenv("HEIR_ADDRESS") or default
