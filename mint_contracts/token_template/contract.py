# -*- coding: utf-8 -*-
"""
Token Ledger (deterministic)

One fungible token per deployment: immutable metadata, an owner, a mintable
flag, balances held by the VM's native ft primitive, and an unrelated counter.

Every public function either succeeds completely or returns an error code
with no effect (the engine discards the call's journal and events).

Public ABI:
- init(name, symbol, decimals, token_uri, initial_supply)
- transfer(amount, sender, recipient, memo) -> bool
- mint(amount, recipient) -> uint
- burn(amount, sender) -> uint
- set_mintable(flag) -> bool
- get_name / get_symbol / get_decimals / get_token_uri / get_total_supply
- get_balance(who) / is_mintable / get_owner / get_counter
- increment() -> uint, decrement() -> uint
"""

from typing import Optional

from mint_vm.stdlib import abi, ft, storage

from mint_contracts.stdlib.access import ownable
from mint_contracts.stdlib.math import u128_add, u128_sub
from mint_contracts.stdlib.token import (COUNTER_KEY, ERR_ALREADY_INITIALIZED,
                                         ERR_COUNTER_UNDERFLOW,
                                         ERR_INVALID_AMOUNT,
                                         ERR_NOT_AUTHORIZED, ERR_NOT_MINTABLE,
                                         ERR_NOT_TOKEN_OWNER, MEMO_TYPE,
                                         META_KEY, MINTABLE_KEY, NAME_TYPE,
                                         SYMBOL_TYPE, URI_TYPE, TokenMetadata,
                                         decode_flag, encode_flag)
from mint_contracts.stdlib.utils import events as ev

ABI = {
    "init": {
        "args": [NAME_TYPE, SYMBOL_TYPE, "uint", URI_TYPE, "uint"],
    },
    "transfer": {
        "args": ["uint", "principal", "principal", MEMO_TYPE],
        "returns": "bool",
    },
    "mint": {"args": ["uint", "principal"], "returns": "uint"},
    "burn": {"args": ["uint", "principal"], "returns": "uint"},
    "set_mintable": {"args": ["bool"], "returns": "bool"},
    "get_name": {"args": [], "returns": NAME_TYPE, "read_only": True},
    "get_symbol": {"args": [], "returns": SYMBOL_TYPE, "read_only": True},
    "get_decimals": {"args": [], "returns": "uint", "read_only": True},
    "get_token_uri": {"args": [], "returns": URI_TYPE, "read_only": True},
    "get_total_supply": {"args": [], "returns": "uint", "read_only": True},
    "get_balance": {"args": ["principal"], "returns": "uint", "read_only": True},
    "is_mintable": {"args": [], "returns": "bool", "read_only": True},
    "get_owner": {"args": [], "returns": "principal", "read_only": True},
    "get_counter": {"args": [], "returns": "uint", "read_only": True},
    "increment": {"args": [], "returns": "uint"},
    "decrement": {"args": [], "returns": "uint"},
}


def _meta() -> TokenMetadata:
    return TokenMetadata.from_cbor(storage.get(META_KEY))


def _mintable() -> bool:
    return decode_flag(storage.get(MINTABLE_KEY))


# --------------------------------------------------------------------------- #
# Initialization
# --------------------------------------------------------------------------- #


def init(
    name: str,
    symbol: str,
    decimals: int,
    token_uri: Optional[str],
    initial_supply: int,
) -> None:
    """
    @notice Fix the metadata, make the caller the owner and mint the initial supply to them.
    @param initial_supply May be zero; nothing is minted then.
    """
    owner = abi.caller()
    abi.require(ownable.init_owner(owner), ERR_ALREADY_INITIALIZED)
    storage.set(META_KEY, TokenMetadata(name, symbol, decimals, token_uri).to_cbor())
    storage.set(MINTABLE_KEY, encode_flag(False))
    if initial_supply > 0:
        ft.mint(initial_supply, owner)
        ev.emit_mint(owner, initial_supply)


# --------------------------------------------------------------------------- #
# Transfers, minting and burning
# --------------------------------------------------------------------------- #


def transfer(amount: int, sender: bytes, recipient: bytes, memo: Optional[bytes]) -> bool:
    """
    @notice Move `amount` from `sender` to `recipient`. Only `sender` may call.
    @param memo Optional note of up to 34 bytes, echoed in the Transfer event.
    @return ok True on success.
    """
    abi.require(abi.caller() == sender, ERR_NOT_TOKEN_OWNER)
    abi.require(amount > 0, ERR_INVALID_AMOUNT)
    ft.transfer(amount, sender, recipient)
    ev.emit_transfer(sender, recipient, amount, memo)
    return True


def mint(amount: int, recipient: bytes) -> int:
    """
    @notice Owner-only issuance while minting is enabled.
    @return amount The amount minted.
    """
    ownable.require_owner(ERR_NOT_AUTHORIZED)
    abi.require(_mintable(), ERR_NOT_MINTABLE)
    abi.require(amount > 0, ERR_INVALID_AMOUNT)
    ft.mint(amount, recipient)
    ev.emit_mint(recipient, amount)
    return amount


def burn(amount: int, sender: bytes) -> int:
    """
    @notice Destroy `amount` of the caller's own balance.
    @return amount The amount burned.
    """
    abi.require(abi.caller() == sender, ERR_NOT_TOKEN_OWNER)
    abi.require(amount > 0, ERR_INVALID_AMOUNT)
    ft.burn(amount, sender)
    ev.emit_burn(sender, amount)
    return amount


def set_mintable(flag: bool) -> bool:
    ownable.require_owner(ERR_NOT_AUTHORIZED)
    storage.set(MINTABLE_KEY, encode_flag(flag))
    ev.emit_mintable_set(flag)
    return flag


# --------------------------------------------------------------------------- #
# Read-only accessors
# --------------------------------------------------------------------------- #


def get_name() -> str:
    return _meta().name


def get_symbol() -> str:
    return _meta().symbol


def get_decimals() -> int:
    return _meta().decimals


def get_token_uri() -> Optional[str]:
    return _meta().token_uri


def get_total_supply() -> int:
    return ft.get_supply()


def get_balance(who: bytes) -> int:
    """Zero for principals that never held the token."""
    return ft.get_balance(who)


def is_mintable() -> bool:
    return _mintable()


def get_owner() -> bytes:
    return ownable.get_owner()


# --------------------------------------------------------------------------- #
# Counter (unauthenticated, unrelated to balances)
# --------------------------------------------------------------------------- #


def get_counter() -> int:
    return storage.get_int(COUNTER_KEY)


def increment() -> int:
    value = u128_add(storage.get_int(COUNTER_KEY), 1)
    storage.set_int(COUNTER_KEY, value)
    ev.emit_counter_changed(value)
    return value


def decrement() -> int:
    """
    @notice Subtract one from the counter.
    @return new_value The updated value; fails with counter-underflow at zero.
    """
    current = storage.get_int(COUNTER_KEY)
    abi.require(current > 0, ERR_COUNTER_UNDERFLOW)
    value = u128_sub(current, 1)
    storage.set_int(COUNTER_KEY, value)
    ev.emit_counter_changed(value)
    return value
