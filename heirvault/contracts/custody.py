"""
custody.py — Off-chain Custody State Machine
=============================================
Plain Python rendition of the Inheritance application for hosts that run
outside the AVM (simulations, services, tests). One InheritanceVault owns one
custody record; every operation runs in a single critical section so callers
on different threads observe the same all-or-nothing ordering the chain
gives for free.

Addresses are Algorand addresses (base32 text). The zero address marks an
unset heir.
"""

import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

from algosdk import encoding

from contracts.constants import STATUS_ALIVE, STATUS_CLAIMABLE, TIMELOCK_SECONDS
from contracts.errors import (
    InsufficientBalance,
    InvalidHeirAddress,
    NotHeir,
    NotOwner,
    TimelockNotExpired,
    TransferFailed,
)
from contracts.events import (
    ActivityUpdated,
    Event,
    HeirUpdated,
    OwnershipTransferred,
    Withdrawal,
)


logger = logging.getLogger(__name__)

ZERO_ADDRESS = encoding.encode_address(bytes(32))

Clock = Callable[[], int]
Transfer = Callable[[str, int], bool]
Listener = Callable[[Event], None]


def wall_clock() -> int:
    return int(time.time())


def is_zero(address: str) -> bool:
    return address == ZERO_ADDRESS


def _check_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"amount must be an integer, got {amount!r}")
    if amount < 0:
        raise ValueError(f"amount must not be negative, got {amount}")
    return amount


def _check_heir(address: str) -> str:
    if not isinstance(address, str) or is_zero(address) or not encoding.is_valid_address(address):
        raise InvalidHeirAddress(f"invalid heir address: {address!r}")
    return address


@dataclass
class CustodyRecord:
    owner: str
    heir: str
    last_activity: int
    balance: int = 0


class InMemoryLedger:
    """Account balances for payouts made by a vault. Failing accounts reject transfers."""

    def __init__(self):
        self.balances: Dict[str, int] = {}
        self.rejecting: set = set()

    def balance_of(self, address: str) -> int:
        return self.balances.get(address, 0)

    def transfer(self, to: str, amount: int) -> bool:
        if to in self.rejecting:
            return False
        self.balances[to] = self.balance_of(to) + amount
        return True


class InheritanceVault:
    """
    Custody of one fund balance by one owner, with a single heir who may
    take over after TIMELOCK_SECONDS of owner silence.

    Only `withdraw` counts as proof of life; a zero-value withdraw is the
    activity ping. Deposits and heir changes leave the clock alone.
    """

    def __init__(
        self,
        deployer: str,
        initial_heir: str,
        *,
        clock: Optional[Clock] = None,
        transfer: Optional[Transfer] = None,
    ):
        if is_zero(deployer) or not encoding.is_valid_address(deployer):
            raise ValueError(f"invalid deployer address: {deployer!r}")
        self._clock = clock or wall_clock
        self._transfer = transfer or InMemoryLedger().transfer
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self.events: List[Event] = []
        self._record = CustodyRecord(
            owner=deployer,
            heir=_check_heir(initial_heir),
            last_activity=self._clock(),
        )
        logger.info("vault created owner=%s heir=%s", deployer, initial_heir)

    # ── accessors ────────────────────────────────────────────────────────────
    @property
    def owner(self) -> str:
        return self._record.owner

    @property
    def heir(self) -> str:
        return self._record.heir

    @property
    def last_activity(self) -> int:
        return self._record.last_activity

    @property
    def balance(self) -> int:
        return self._record.balance

    @property
    def claimable_at(self) -> int:
        return self._record.last_activity + TIMELOCK_SECONDS

    def snapshot(self) -> CustodyRecord:
        with self._lock:
            return replace(self._record)

    def time_remaining(self) -> int:
        """Seconds until the heir may claim; 0 once claimable."""
        with self._lock:
            return max(0, self.claimable_at - self._clock())

    def status(self) -> str:
        with self._lock:
            if self._clock() >= self.claimable_at and not is_zero(self._record.heir):
                return STATUS_CLAIMABLE
            return STATUS_ALIVE

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    # ── operations ───────────────────────────────────────────────────────────
    def receive_funds(self, sender: str, amount: int) -> int:
        """Accept value from anyone. Returns the new balance."""
        _check_amount(amount)
        with self._lock:
            self._record.balance += amount
            balance = self._record.balance
        logger.debug("received %d from %s, balance=%d", amount, sender, balance)
        return balance

    def withdraw(self, caller: str, amount: int) -> None:
        _check_amount(amount)
        with self._lock:
            record = self._record
            if caller != record.owner:
                raise NotOwner(f"{caller} is not the owner")
            if amount > record.balance:
                raise InsufficientBalance(f"requested {amount}, balance is {record.balance}")
            if amount > 0 and not self._transfer(record.owner, amount):
                raise TransferFailed(f"payment of {amount} to {record.owner} failed")

            record.balance -= amount
            now = self._touch()
            emitted = self._emit(ActivityUpdated(now), Withdrawal(record.owner, amount))
        logger.info("owner withdrew %d, activity at %d", amount, now)
        self._notify(emitted)

    def set_heir(self, caller: str, new_heir: str) -> None:
        with self._lock:
            record = self._record
            if caller != record.owner:
                raise NotOwner(f"{caller} is not the owner")
            _check_heir(new_heir)

            old_heir, record.heir = record.heir, new_heir
            emitted = self._emit(HeirUpdated(old_heir, new_heir))
        logger.info("heir changed %s -> %s", old_heir, new_heir)
        self._notify(emitted)

    def claim_inheritance(self, caller: str) -> None:
        with self._lock:
            record = self._record
            if self._clock() < self.claimable_at:
                raise TimelockNotExpired(f"claimable from {self.claimable_at}")
            if caller != record.heir:
                raise NotHeir(f"{caller} is not the heir")

            old_owner = record.owner
            record.owner, record.heir = record.heir, ZERO_ADDRESS
            self._touch()
            emitted = self._emit(OwnershipTransferred(old_owner, record.owner))
        logger.warning("ownership transferred %s -> %s", old_owner, caller)
        self._notify(emitted)

    # ── internals ────────────────────────────────────────────────────────────
    def _touch(self) -> int:
        # last_activity never moves backwards, even with a skewed clock
        self._record.last_activity = max(self._record.last_activity, self._clock())
        return self._record.last_activity

    def _emit(self, *events: Event) -> tuple:
        self.events.extend(events)
        return events

    def _notify(self, events: tuple) -> None:
        # effects are already committed at this point
        for event in events:
            for listener in self._listeners:
                try:
                    listener(event)
                except Exception:
                    logger.exception("listener %r failed on %r", listener, event)
