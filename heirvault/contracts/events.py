"""
events.py — ARC-28 event records
================================
Events are append-only notifications for external monitors. On chain each
one is logged as ``selector || abi-encoded fields`` where the selector is the
first 4 bytes of SHA-512/256 over the event signature.
"""

import base64
from dataclasses import astuple, dataclass
from typing import ClassVar, Optional, Union

from algosdk import abi, encoding


@dataclass(frozen=True)
class Event:
    SIGNATURE: ClassVar[str] = ""

    @classmethod
    def selector(cls) -> bytes:
        return encoding.checksum(cls.SIGNATURE.encode())[:4]

    @classmethod
    def abi_type(cls) -> abi.ABIType:
        return abi.ABIType.from_string("(" + cls.SIGNATURE.split("(", 1)[1])

    @classmethod
    def from_payload(cls, payload: bytes) -> "Event":
        return cls(*cls.abi_type().decode(payload))

    def encode(self) -> bytes:
        return self.selector() + self.abi_type().encode(list(astuple(self)))


@dataclass(frozen=True)
class Withdrawal(Event):
    SIGNATURE: ClassVar[str] = "Withdrawal(address,uint64)"
    to: str
    amount: int


@dataclass(frozen=True)
class HeirUpdated(Event):
    SIGNATURE: ClassVar[str] = "HeirUpdated(address,address)"
    old_heir: str
    new_heir: str


@dataclass(frozen=True)
class ActivityUpdated(Event):
    SIGNATURE: ClassVar[str] = "ActivityUpdated(uint64)"
    timestamp: int


@dataclass(frozen=True)
class OwnershipTransferred(Event):
    SIGNATURE: ClassVar[str] = "OwnershipTransferred(address,address)"
    old_owner: str
    new_owner: str


EVENTS = {
    cls.selector(): cls
    for cls in (Withdrawal, HeirUpdated, ActivityUpdated, OwnershipTransferred)
}


def decode_log(entry: Union[bytes, str]) -> Optional[Event]:
    """Decode one log entry (raw bytes or base64 text). Unknown selectors -> None."""
    raw = base64.b64decode(entry) if isinstance(entry, str) else bytes(entry)
    cls = EVENTS.get(raw[:4])
    if cls is None:
        return None
    return cls.from_payload(raw[4:])


def decode_logs(tx_info: dict) -> list:
    decoded = (decode_log(entry) for entry in tx_info.get("logs", []))
    return [event for event in decoded if event is not None]
