# -*- coding: utf-8 -*-
"""
Token Registry (deterministic)

A shared directory of token metadata, keyed by the token's identity and
indexed by the principal that registered it. Registration data is attested
by the caller and copied at call time; the registry never calls a ledger.

Functions:
- init(registration_fee)
- register_token(token, name, symbol, decimals, total_supply, token_uri) -> uint
- update_token_uri(token, new_uri) -> bool
- get_token_info(token) -> entry | None
- get_tokens_by_owner(owner) -> [principal]  (at most 50; [] if unknown)
- get_token_by_id(id) -> principal | None
- get_token_count / get_registration_fee / get_total_fees_collected
- get_registry_owner / is_registered(token)

Events:
- registry.TokenRegistered(id, token, owner, symbol, fee)
- registry.TokenUriUpdated(token, token_uri)
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from mint_vm.stdlib import abi, storage, treasury

from mint_contracts.stdlib.access import ownable
from mint_contracts.stdlib.math import u128_add
from mint_contracts.stdlib.registry import (COUNT_KEY, ERR_ALREADY_INITIALIZED,
                                            ERR_ALREADY_REGISTERED,
                                            ERR_INVALID_NAME,
                                            ERR_INVALID_SUPPLY,
                                            ERR_INVALID_SYMBOL, ERR_LIST_FULL,
                                            ERR_NOT_AUTHORIZED,
                                            ERR_TOKEN_NOT_FOUND, FEE_KEY,
                                            FEES_KEY, BoundedList,
                                            CapacityError, RegistryEntry,
                                            key_entry, key_id, key_owned)
from mint_contracts.stdlib.token import NAME_TYPE, SYMBOL_TYPE, URI_TYPE
from mint_contracts.stdlib.utils import events as ev

ABI = {
    "init": {"args": ["uint"]},
    "register_token": {
        "args": ["principal", NAME_TYPE, SYMBOL_TYPE, "uint", "uint", URI_TYPE],
        "returns": "uint",
    },
    "update_token_uri": {"args": ["principal", URI_TYPE], "returns": "bool"},
    "get_token_info": {"args": ["principal"], "returns": "optional<entry>", "read_only": True},
    "get_tokens_by_owner": {"args": ["principal"], "returns": "list<principal>", "read_only": True},
    "get_token_by_id": {"args": ["uint"], "returns": "optional<principal>", "read_only": True},
    "get_token_count": {"args": [], "returns": "uint", "read_only": True},
    "get_registration_fee": {"args": [], "returns": "uint", "read_only": True},
    "get_total_fees_collected": {"args": [], "returns": "uint", "read_only": True},
    "get_registry_owner": {"args": [], "returns": "principal", "read_only": True},
    "is_registered": {"args": ["principal"], "returns": "bool", "read_only": True},
}


def _entry(token: bytes) -> Optional[RegistryEntry]:
    raw = storage.get(key_entry(token))
    return RegistryEntry.from_cbor(raw) if raw else None


def _owned(owner: bytes) -> BoundedList:
    return BoundedList.from_cbor(storage.get(key_owned(owner)))


def _charge_fee(payer: bytes) -> int:
    """Move the registration fee payer -> registry owner; returns what was charged."""
    fee = storage.get_int(FEE_KEY)
    owner = ownable.get_owner()
    if fee == 0 or payer == owner:
        return 0
    # A short balance surfaces as the treasury's native insufficient-balance code.
    treasury.transfer(fee, payer, owner)
    return fee


# ---- initialization ----------------------------------------------------------


def init(registration_fee: int) -> None:
    abi.require(ownable.init_owner(abi.caller()), ERR_ALREADY_INITIALIZED)
    storage.set_int(FEE_KEY, registration_fee)
    storage.set_int(COUNT_KEY, 0)
    storage.set_int(FEES_KEY, 0)


# ---- mutations ---------------------------------------------------------------


def register_token(
    token: bytes,
    name: str,
    symbol: str,
    decimals: int,
    total_supply: int,
    token_uri: Optional[str],
) -> int:
    """
    Record `token` under the caller and return its sequential id (1, 2, ...).

    Checks run in a fixed order and the first failure decides the code:
    already-registered, invalid-name, invalid-symbol, invalid-supply, list-full.

    A non-zero registration fee moves from the caller to the registry owner
    through the native treasury; a short balance fails with native code 1.
    The registry owner registering for itself pays nothing, since a native
    transfer to oneself fails (native code 2). `total-fees-collected` grows
    only by what was actually charged, which is also the event's `fee`.
    """
    abi.require(_entry(token) is None, ERR_ALREADY_REGISTERED)
    abi.require(len(name) > 0, ERR_INVALID_NAME)
    abi.require(len(symbol) > 0, ERR_INVALID_SYMBOL)
    abi.require(total_supply > 0, ERR_INVALID_SUPPLY)

    caller = abi.caller()
    try:
        owned = _owned(caller).append(token)
    except CapacityError:
        abi.revert(ERR_LIST_FULL)

    token_id = u128_add(storage.get_int(COUNT_KEY), 1)
    entry = RegistryEntry(
        id=token_id,
        name=name,
        symbol=symbol,
        decimals=decimals,
        total_supply=total_supply,
        token_uri=token_uri,
        owner=caller,
        registered_at=abi.block_height(),
    )
    storage.set(key_entry(token), entry.to_cbor())
    storage.set(key_owned(caller), owned.to_cbor())
    storage.set(key_id(token_id), bytes(token))
    storage.set_int(COUNT_KEY, token_id)

    fee = _charge_fee(caller)
    storage.set_int(FEES_KEY, u128_add(storage.get_int(FEES_KEY), fee))

    ev.emit_token_registered(token_id, token, caller, symbol, fee)
    return token_id


def update_token_uri(token: bytes, new_uri: Optional[str]) -> bool:
    """Replace the URI of an entry; only the registering principal may do so."""
    entry = _entry(token)
    abi.require(entry is not None, ERR_TOKEN_NOT_FOUND)
    abi.require(abi.caller() == entry.owner, ERR_NOT_AUTHORIZED)
    storage.set(key_entry(token), entry.with_uri(new_uri).to_cbor())
    ev.emit_token_uri_updated(token, new_uri)
    return True


# ---- read-only ---------------------------------------------------------------


def get_token_info(token: bytes) -> Optional[Dict[str, Any]]:
    entry = _entry(token)
    return entry.to_dict() if entry is not None else None


def get_tokens_by_owner(owner: bytes) -> List[bytes]:
    return list(_owned(owner))


def get_token_by_id(token_id: int) -> Optional[bytes]:
    return storage.get(key_id(token_id))


def get_token_count() -> int:
    return storage.get_int(COUNT_KEY)


def get_registration_fee() -> int:
    return storage.get_int(FEE_KEY)


def get_total_fees_collected() -> int:
    return storage.get_int(FEES_KEY)


def get_registry_owner() -> bytes:
    return ownable.get_owner()


def is_registered(token: bytes) -> bool:
    return _entry(token) is not None
