"""
mint_vm.runtime.ft_api — native fungible-token primitive.

Every contract gets exactly one native fungible token. Balances and the total
supply live in the contract's own storage namespace under host-reserved keys,
so contracts cannot tamper with them except through this API, and every update
of a holder balance also updates the supply in the same journaled write set:

    sum(balances) == supply        (always)

Failures are *low-level* codes, raised as `Revert(code, origin="native")`,
kept distinct from the application codes a contract raises itself:

    transfer:  1 insufficient balance, 2 sender == recipient, 3 non-positive amount
    mint:      1 non-positive amount
    burn:      1 insufficient balance, 3 non-positive amount

Supply overflow beyond u128 is a host fault (VmError "u128_overflow"), not a
revert code.
"""

from __future__ import annotations

from typing import Final

from mint_vm.config import U128_MAX
from mint_vm.errors import ORIGIN_NATIVE, Revert

from . import storage_api as _st
from .context import current_frame
from .error import VmError

K_SUPPLY: Final[bytes] = _st.RESERVED_PREFIX + b"ft:supply"
P_BALANCE: Final[bytes] = _st.RESERVED_PREFIX + b"ft:bal:"

ERR_INSUFFICIENT_BALANCE: Final[int] = 1
ERR_SAME_PRINCIPAL: Final[int] = 2
ERR_NON_POSITIVE_AMOUNT: Final[int] = 3
ERR_MINT_NON_POSITIVE: Final[int] = 1


def _holder(who: bytes) -> bytes:
    if not isinstance(who, (bytes, bytearray)) or len(who) == 0:
        raise VmError("ft holder must be non-empty bytes", code="ft_bad_holder")
    return bytes(who)


def _fail(code: int) -> None:
    raise Revert(code, origin=ORIGIN_NATIVE)


def _read(key: bytes) -> int:
    return _st.decode_u128(_st.host_get(current_frame().address, key))


def _write(key: bytes, value: int) -> None:
    if value > U128_MAX:
        raise VmError("ft amount exceeds u128", code="u128_overflow", context={"value": value})
    _st.host_set(current_frame().address, key, _st.encode_u128(value))


# ------------------------------- reads ------------------------------------ #


def get_balance(who: bytes) -> int:
    return _read(P_BALANCE + _holder(who))


def get_supply() -> int:
    return _read(K_SUPPLY)


# ------------------------------- writes ----------------------------------- #


def transfer(amount: int, sender: bytes, recipient: bytes) -> bool:
    """Move `amount` from `sender` to `recipient`; supply is unchanged."""
    sender = _holder(sender)
    recipient = _holder(recipient)
    if amount <= 0:
        _fail(ERR_NON_POSITIVE_AMOUNT)
    if sender == recipient:
        _fail(ERR_SAME_PRINCIPAL)
    bal = get_balance(sender)
    if bal < amount:
        _fail(ERR_INSUFFICIENT_BALANCE)
    _write(P_BALANCE + sender, bal - amount)
    _write(P_BALANCE + recipient, get_balance(recipient) + amount)
    return True


def mint(amount: int, recipient: bytes) -> bool:
    """Credit `recipient` and grow the supply by the same amount."""
    recipient = _holder(recipient)
    if amount <= 0:
        _fail(ERR_MINT_NON_POSITIVE)
    _write(K_SUPPLY, get_supply() + amount)
    _write(P_BALANCE + recipient, get_balance(recipient) + amount)
    return True


def burn(amount: int, owner: bytes) -> bool:
    """Debit `owner` and shrink the supply by the same amount."""
    owner = _holder(owner)
    if amount <= 0:
        _fail(ERR_NON_POSITIVE_AMOUNT)
    bal = get_balance(owner)
    if bal < amount:
        _fail(ERR_INSUFFICIENT_BALANCE)
    _write(P_BALANCE + owner, bal - amount)
    _write(K_SUPPLY, get_supply() - amount)
    return True


__all__ = [
    "ERR_INSUFFICIENT_BALANCE",
    "ERR_SAME_PRINCIPAL",
    "ERR_NON_POSITIVE_AMOUNT",
    "ERR_MINT_NON_POSITIVE",
    "get_balance",
    "get_supply",
    "transfer",
    "mint",
    "burn",
]
