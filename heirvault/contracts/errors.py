"""
errors.py — Custody error taxonomy
==================================
Every failure is a precondition violation that aborts the whole operation.
The ``code`` of each class is also the ``Assert`` comment compiled into the
TEAL program, so a logic error raised by the node maps back to the same
exception the off-chain vault raises.
"""

import re


class CustodyError(Exception):
    code = "CustodyError"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)


class NotOwner(CustodyError):
    code = "NotOwner"


class NotHeir(CustodyError):
    code = "NotHeir"


class InvalidHeirAddress(CustodyError):
    code = "InvalidHeirAddress"


class InsufficientBalance(CustodyError):
    code = "InsufficientBalance"


class TimelockNotExpired(CustodyError):
    code = "TimelockNotExpired"


class TransferFailed(CustodyError):
    code = "TransferFailed"


class PaymentNotToContract(CustodyError):
    code = "PaymentNotToContract"


ERRORS = {
    cls.code: cls
    for cls in (
        NotOwner,
        NotHeir,
        InvalidHeirAddress,
        InsufficientBalance,
        TimelockNotExpired,
        TransferFailed,
        PaymentNotToContract,
    )
}

_ASSERT_COMMENT = re.compile(r"//\s*(\w+)")


def _failing_line(exc: Exception):
    lines = getattr(exc, "lines", None)
    line_no = getattr(exc, "line_no", None)
    if not lines or not isinstance(line_no, int):
        return None
    if 0 <= line_no < len(lines):
        return lines[line_no]
    return None


def error_from_logic(exc: Exception):
    """
    Translate an AVM logic failure into the matching CustodyError.

    Looks at the failing TEAL line first (its ``// <code>`` comment), then
    falls back to scanning the exception text. Returns None when no known
    code is present.
    """
    line = _failing_line(exc)
    if line is not None:
        match = _ASSERT_COMMENT.search(line)
        if match and match.group(1) in ERRORS:
            return ERRORS[match.group(1)](str(exc))

    text = str(exc)
    for code, cls in ERRORS.items():
        if re.search(rf"\b{code}\b", text):
            return cls(text)
    return None
