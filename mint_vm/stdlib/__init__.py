"""
mint_vm.stdlib
==============

Contract-facing standard library surface.

Contracts do:

    from mint_vm.stdlib import abi, events, ft, storage, treasury

Every module here is bound to the call frame the engine installs, so a
contract never names its own address: storage is namespaced, events are
staged for the current call, and `abi.caller()` is the invoking principal.

Exports
-------
- storage  : get/set/delete/exists, get_int/set_int (u128)
- events   : emit(name: bytes, args: dict)->None
- abi      : revert(code), require(cond, code), caller(), contract_address(),
             block_height(), chain_id()
- ft       : native fungible token (transfer/mint/burn/get_balance/get_supply)
- treasury : native coin (balance_of/transfer)
"""

from __future__ import annotations

from . import abi, events, ft, storage, treasury

__all__ = ("abi", "events", "ft", "storage", "treasury")
