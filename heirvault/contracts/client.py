"""
client.py — Typed client for a deployed Inheritance application
===============================================================
Thin layer over beaker's ApplicationClient. Write calls return the events
logged by the transaction; logic failures come back as CustodyError
subclasses so callers handle the same exceptions as the off-chain vault.
"""

import logging
from typing import List

from algosdk import transaction
from algosdk.atomic_transaction_composer import TransactionWithSigner
from algosdk.v2client.algod import AlgodClient
from beaker.client import ApplicationClient, LogicException

from contracts.errors import error_from_logic
from contracts.events import Event, decode_logs
from contracts.inheritance import app
from contracts.network import Account


logger = logging.getLogger(__name__)


class InheritanceClient:
    def __init__(self, algod: AlgodClient, account: Account, app_id: int = 0):
        self.algod = algod
        self.account = account
        self._app = ApplicationClient(
            client=algod,
            app=app,
            app_id=app_id,
            signer=account.signer,
            sender=account.address,
        )

    @property
    def app_id(self) -> int:
        return self._app.app_id

    @property
    def app_address(self) -> str:
        return self._app.app_addr

    def for_account(self, account: Account) -> "InheritanceClient":
        """Same application, different signer."""
        return InheritanceClient(self.algod, account, self.app_id)

    def _call(self, method: str, **kwargs):
        try:
            return self._app.call(method, **kwargs)
        except LogicException as exc:
            error = error_from_logic(exc)
            if error is None:
                raise
            raise error from exc

    # ── lifecycle ────────────────────────────────────────────────────────────
    def create(self, heir: str) -> int:
        try:
            app_id, app_addr, txid = self._app.create(initial_heir=heir)
        except LogicException as exc:
            error = error_from_logic(exc)
            if error is None:
                raise
            raise error from exc
        logger.info("created app %d at %s (tx %s)", app_id, app_addr, txid)
        return app_id

    def fund(self, amount: int) -> str:
        """Plain payment to the app account, e.g. to cover its minimum balance."""
        return self._app.fund(amount)

    # ── writes ───────────────────────────────────────────────────────────────
    def deposit(self, amount: int) -> int:
        """Send `amount` microALGO to the app; returns the new withdrawable balance."""
        sp = self.algod.suggested_params()
        payment = TransactionWithSigner(
            txn=transaction.PaymentTxn(
                sender=self.account.address,
                sp=sp,
                receiver=self.app_address,
                amt=amount,
            ),
            signer=self.account.signer,
        )
        return self._call("deposit", payment=payment).return_value

    def withdraw(self, amount: int) -> List[Event]:
        sp = self.algod.suggested_params()
        if amount > 0:
            # outer txn pays for the inner payment
            sp.flat_fee = True
            sp.fee = 2 * sp.min_fee
        result = self._call("withdraw", amount=amount, suggested_params=sp)
        return decode_logs(result.tx_info)

    def set_heir(self, new_heir: str) -> List[Event]:
        return decode_logs(self._call("set_heir", new_heir=new_heir).tx_info)

    def claim_inheritance(self) -> List[Event]:
        return decode_logs(self._call("claim_inheritance").tx_info)

    # ── reads ────────────────────────────────────────────────────────────────
    def owner(self) -> str:
        return self._call("get_owner").return_value

    def heir(self) -> str:
        return self._call("get_heir").return_value

    def last_activity(self) -> int:
        return self._call("get_last_activity").return_value

    def balance(self) -> int:
        return self._call("get_balance").return_value

    def time_remaining(self) -> int:
        return self._call("get_time_remaining").return_value

    def status(self) -> str:
        return self._call("get_status").return_value
