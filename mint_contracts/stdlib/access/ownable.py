# -*- coding: utf-8 -*-
"""
mint_contracts.stdlib.access.ownable
====================================

Minimal, deterministic **Ownable** helper:

- read the current owner (`get_owner`)
- initialize the owner once (`init_owner`)
- check that the caller is the owner (`require_owner`)

Typical usage
-------------
    from mint_contracts.stdlib.access import ownable

    def init() -> None:
        abi.require(ownable.init_owner(abi.caller()), ERR_ALREADY_INITIALIZED)

    def set_mintable(flag: bool) -> bool:
        ownable.require_owner(ERR_NOT_AUTHORIZED)
        ...
"""
from __future__ import annotations

from typing import Optional

from mint_vm.stdlib import abi, storage

OWNER_KEY: bytes = b"access:owner"


def get_owner() -> Optional[bytes]:
    """
    Return the current owner address, or None if not set.
    """
    v = storage.get(OWNER_KEY)
    return v if v else None


def init_owner(owner: bytes) -> bool:
    """
    Record `owner` if no owner is set yet.

    Returns False (and writes nothing) when the contract already has an owner,
    which is how initializers detect a second `init`.
    """
    if get_owner() is not None:
        return False
    storage.set(OWNER_KEY, bytes(owner))
    return True


def is_owner(who: bytes) -> bool:
    owner = get_owner()
    return owner is not None and owner == bytes(who)


def require_owner(code: int) -> bytes:
    """
    Revert with `code` unless the calling principal is the owner.
    Returns the caller for convenience.
    """
    who = abi.caller()
    abi.require(is_owner(who), code)
    return who


__all__ = ["OWNER_KEY", "get_owner", "init_owner", "is_owner", "require_owner"]
