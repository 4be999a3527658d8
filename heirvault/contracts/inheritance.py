"""
Inheritance — Dead-Man's-Switch Custody Smart Contract
=======================================================
Built with Beaker 1.x + PyTEAL for Algorand

Architecture:
  - Creator becomes the owner and names an initial heir
  - Anyone can send funds to the application account
  - Owner withdraws funds; every withdraw (even of 0) is proof of life
  - If the owner stays silent for TIMELOCK_SECONDS the heir claims ownership
  - The new owner starts with no heir and a fresh activity clock

Security:
  - Only owner can withdraw / set the heir
  - Heir address can never be the zero address
  - Claim blocked until the timelock elapses, then only the heir may claim
  - Withdrawals are capped at balance above the account minimum balance
"""

from beaker import Application, GlobalStateValue
from pyteal import (
    Assert,
    Balance,
    Bytes,
    Concat,
    Expr,
    Global,
    If,
    InnerTxnBuilder,
    Int,
    Itob,
    Log,
    MinBalance,
    Seq,
    Subroutine,
    TealType,
    Txn,
    TxnField,
    TxnType,
    abi,
)

from contracts.constants import STATUS_ALIVE, STATUS_CLAIMABLE, TIMELOCK_SECONDS
from contracts.errors import (
    InsufficientBalance,
    InvalidHeirAddress,
    NotHeir,
    NotOwner,
    PaymentNotToContract,
    TimelockNotExpired,
)
from contracts.events import (
    ActivityUpdated,
    Event,
    HeirUpdated,
    OwnershipTransferred,
    Withdrawal,
)


class InheritanceState:
    owner = GlobalStateValue(
        stack_type=TealType.bytes,
        descr="Sole principal allowed to withdraw and name the heir",
    )
    heir = GlobalStateValue(
        stack_type=TealType.bytes,
        descr="Principal allowed to claim after the timelock (zero address = unset)",
    )
    last_activity = GlobalStateValue(
        stack_type=TealType.uint64,
        descr="Timestamp of the last owner withdraw",
    )


app = Application(
    "Inheritance",
    descr="Single-owner custody with a 30 day inactivity switch to one heir",
    state=InheritanceState(),
)


def emit(event: type[Event], *fields: Expr) -> Expr:
    """ARC-28 style log: 4 byte selector followed by the encoded fields."""
    return Log(Concat(Bytes(event.selector()), *fields))


@Subroutine(TealType.uint64)
def available_balance() -> Expr:
    """Application balance above its minimum balance requirement."""
    account = Global.current_application_address()
    return If(
        Balance(account) > MinBalance(account),
        Balance(account) - MinBalance(account),
        Int(0),
    )


def claimable_at() -> Expr:
    return app.state.last_activity.get() + Int(TIMELOCK_SECONDS)


# ─────────────────────────────────────────────────────────────────────────────
# 1. CREATE
# ─────────────────────────────────────────────────────────────────────────────
@app.create
def create(initial_heir: abi.Address) -> Expr:
    """Creator becomes the owner; the initial heir must be a real address."""
    return Seq(
        Assert(initial_heir.get() != Global.zero_address(), comment=InvalidHeirAddress.code),
        app.state.owner.set(Txn.sender()),
        app.state.heir.set(initial_heir.get()),
        app.state.last_activity.set(Global.latest_timestamp()),
    )


# ─────────────────────────────────────────────────────────────────────────────
# 2. RECEIVE FUNDS
# ─────────────────────────────────────────────────────────────────────────────
@app.external
def deposit(payment: abi.PaymentTransaction, *, output: abi.Uint64) -> Expr:
    """Accept funds from anyone. Not proof of life: the clock is untouched."""
    return Seq(
        Assert(
            payment.get().receiver() == Global.current_application_address(),
            comment=PaymentNotToContract.code,
        ),
        output.set(available_balance()),
    )


# ─────────────────────────────────────────────────────────────────────────────
# 3. WITHDRAW (also the activity ping when amount is 0)
# ─────────────────────────────────────────────────────────────────────────────
@app.external
def withdraw(amount: abi.Uint64) -> Expr:
    """Owner pulls `amount` to itself and resets the inactivity clock."""
    return Seq(
        Assert(Txn.sender() == app.state.owner.get(), comment=NotOwner.code),
        Assert(amount.get() <= available_balance(), comment=InsufficientBalance.code),
        app.state.last_activity.set(Global.latest_timestamp()),
        emit(ActivityUpdated, Itob(Global.latest_timestamp())),
        If(
            amount.get() > Int(0),
            InnerTxnBuilder.Execute({
                TxnField.type_enum: TxnType.Payment,
                TxnField.receiver:  app.state.owner.get(),
                TxnField.amount:    amount.get(),
                TxnField.fee:       Int(0),
            }),
        ),
        emit(Withdrawal, app.state.owner.get(), Itob(amount.get())),
    )


# ─────────────────────────────────────────────────────────────────────────────
# 4. SET HEIR
# ─────────────────────────────────────────────────────────────────────────────
@app.external
def set_heir(new_heir: abi.Address) -> Expr:
    """Owner replaces the heir. Does not count as activity."""
    return Seq(
        Assert(Txn.sender() == app.state.owner.get(), comment=NotOwner.code),
        Assert(new_heir.get() != Global.zero_address(), comment=InvalidHeirAddress.code),
        emit(HeirUpdated, app.state.heir.get(), new_heir.get()),
        app.state.heir.set(new_heir.get()),
    )


# ─────────────────────────────────────────────────────────────────────────────
# 5. CLAIM INHERITANCE
# ─────────────────────────────────────────────────────────────────────────────
@app.external
def claim_inheritance() -> Expr:
    """Heir takes ownership once the owner has been silent for the timelock."""
    return Seq(
        Assert(Global.latest_timestamp() >= claimable_at(), comment=TimelockNotExpired.code),
        Assert(Txn.sender() == app.state.heir.get(), comment=NotHeir.code),
        emit(OwnershipTransferred, app.state.owner.get(), app.state.heir.get()),
        app.state.owner.set(app.state.heir.get()),
        app.state.heir.set(Global.zero_address()),
        app.state.last_activity.set(Global.latest_timestamp()),
    )


# ─────────────────────────────────────────────────────────────────────────────
# 6. READ-ONLY HELPERS
# ─────────────────────────────────────────────────────────────────────────────
@app.external(read_only=True)
def get_owner(*, output: abi.Address) -> Expr:
    return output.set(app.state.owner.get())


@app.external(read_only=True)
def get_heir(*, output: abi.Address) -> Expr:
    return output.set(app.state.heir.get())


@app.external(read_only=True)
def get_last_activity(*, output: abi.Uint64) -> Expr:
    return output.set(app.state.last_activity.get())


@app.external(read_only=True)
def get_balance(*, output: abi.Uint64) -> Expr:
    """Withdrawable microALGO (balance above minimum balance)."""
    return output.set(available_balance())


@app.external(read_only=True)
def get_time_remaining(*, output: abi.Uint64) -> Expr:
    """Seconds until the heir may claim. Returns 0 once claimable."""
    now = Global.latest_timestamp()
    return If(
        now >= claimable_at(),
        output.set(Int(0)),
        output.set(claimable_at() - now),
    )


@app.external(read_only=True)
def get_status(*, output: abi.String) -> Expr:
    """Returns: ALIVE | CLAIMABLE"""
    return If(
        (Global.latest_timestamp() >= claimable_at())
        .And(app.state.heir.get() != Global.zero_address()),
        output.set(Bytes(STATUS_CLAIMABLE)),
        output.set(Bytes(STATUS_ALIVE)),
    )
