"""
mint_vm.runtime.treasury_api — native coin balances for local VM runs.

This module provides the deterministic "treasury" ledger of the chain's native
coin. Balances live under the host-reserved TREASURY_ADDRESS namespace of the
injected storage backend and are written through the call's journal, so a
registration charge and the registry state it pays for either both commit or
both disappear.

Contract-facing API (re-exported by stdlib.treasury):

- balance_of(addr: bytes) -> int
- transfer(amount: int, sender: bytes, recipient: bytes) -> bool

Host API:

- credit(addr: bytes, amount: int)   # used by Engine.fund

Failures of `transfer` are native codes raised as `Revert(code, origin="native")`:

    1 insufficient balance, 2 sender == recipient, 3 non-positive amount,
    4 sender is not the calling principal
"""

from __future__ import annotations

from typing import Final

from mint_vm.config import U128_MAX
from mint_vm.errors import ORIGIN_NATIVE, Revert

from . import storage_api as _st
from .context import current_frame
from .error import VmError

TREASURY_ADDRESS: Final[bytes] = b"\x00" * 32
P_COIN: Final[bytes] = _st.RESERVED_PREFIX + b"coin:"

ERR_INSUFFICIENT_BALANCE: Final[int] = 1
ERR_SAME_PRINCIPAL: Final[int] = 2
ERR_NON_POSITIVE_AMOUNT: Final[int] = 3
ERR_SENDER_NOT_CALLER: Final[int] = 4


# ------------------------------ Addr & Amount ------------------------------ #

def _check_addr(addr: bytes) -> bytes:
    if not isinstance(addr, (bytes, bytearray)) or len(addr) == 0:
        raise VmError("address must be non-empty bytes", code="treasury_bad_address")
    return bytes(addr)


def _check_amount(amount: int) -> int:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise VmError("amount must be int", code="treasury_bad_amount")
    if amount < 0 or amount > U128_MAX:
        raise VmError("amount out of u128 range", code="treasury_bad_amount")
    return amount


def _set_balance(addr: bytes, amount: int) -> None:
    if amount > U128_MAX:
        raise VmError("balance overflow", code="u128_overflow")
    _st.host_set(TREASURY_ADDRESS, P_COIN + addr, _st.encode_u128(amount))


# ------------------------------- Public API -------------------------------- #

def balance_of(addr: bytes) -> int:
    """Native balance of `addr` as seen by the executing call."""
    return _st.decode_u128(_st.host_get(TREASURY_ADDRESS, P_COIN + _check_addr(addr)))


def credit(addr: bytes, amount: int) -> None:
    """Host helper: increase the balance of `addr` by `amount`."""
    addr = _check_addr(addr)
    _set_balance(addr, balance_of(addr) + _check_amount(amount))


def transfer(amount: int, sender: bytes, recipient: bytes) -> bool:
    """
    Debit `sender` and credit `recipient` by `amount`.

    Only the calling principal can spend its own balance.
    """
    sender = _check_addr(sender)
    recipient = _check_addr(recipient)
    amount = _check_amount(amount)
    if amount == 0:
        raise Revert(ERR_NON_POSITIVE_AMOUNT, origin=ORIGIN_NATIVE)
    if sender == recipient:
        raise Revert(ERR_SAME_PRINCIPAL, origin=ORIGIN_NATIVE)
    if sender != current_frame().caller:
        raise Revert(ERR_SENDER_NOT_CALLER, origin=ORIGIN_NATIVE)
    cur_from = balance_of(sender)
    if amount > cur_from:
        raise Revert(ERR_INSUFFICIENT_BALANCE, origin=ORIGIN_NATIVE)
    _set_balance(sender, cur_from - amount)
    _set_balance(recipient, balance_of(recipient) + amount)
    return True


__all__ = [
    "TREASURY_ADDRESS",
    "ERR_INSUFFICIENT_BALANCE",
    "ERR_SAME_PRINCIPAL",
    "ERR_NON_POSITIVE_AMOUNT",
    "ERR_SENDER_NOT_CALLER",
    "balance_of",
    "credit",
    "transfer",
]
