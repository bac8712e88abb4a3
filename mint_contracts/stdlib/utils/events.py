# -*- coding: utf-8 -*-
"""
mint_contracts.stdlib.utils.events
==================================

Canonical event names and thin emit helpers for the bundled contracts. All
helpers route through the VM's event emitter (`mint_vm.stdlib.events`), so
events are staged on the current call and published only if it succeeds.

Event **names** are bytes namespaced as `b"<domain>.<Event>"`. Field values
are principals (bytes), integers, booleans, text, or None for an absent
optional.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from mint_vm.stdlib import events as _ev

# ------------------------------------------------------------------------------
# Canonical event name constants
# ------------------------------------------------------------------------------

# Token ledger
EV_TRANSFER              = b"token.Transfer"
EV_MINT                  = b"token.Mint"
EV_BURN                  = b"token.Burn"
EV_MINTABLE_SET          = b"token.MintableSet"
EV_COUNTER_CHANGED       = b"counter.Changed"

# Registry
EV_TOKEN_REGISTERED      = b"registry.TokenRegistered"
EV_TOKEN_URI_UPDATED     = b"registry.TokenUriUpdated"


def _emit(name: bytes, fields: Mapping[str, Any]) -> None:
    _ev.emit(name, fields)

# ------------------------------------------------------------------------------
# Token ledger
# ------------------------------------------------------------------------------

def emit_transfer(sender: bytes, to: bytes, amount: int, memo: Optional[bytes]) -> None:
    _emit(EV_TRANSFER, {
        "from":   sender,
        "to":     to,
        "amount": amount,
        "memo":   memo,
    })

def emit_mint(to: bytes, amount: int) -> None:
    _emit(EV_MINT, {"to": to, "amount": amount})

def emit_burn(frm: bytes, amount: int) -> None:
    _emit(EV_BURN, {"from": frm, "amount": amount})

def emit_mintable_set(flag: bool) -> None:
    _emit(EV_MINTABLE_SET, {"mintable": flag})

def emit_counter_changed(value: int) -> None:
    _emit(EV_COUNTER_CHANGED, {"value": value})

# ------------------------------------------------------------------------------
# Registry
# ------------------------------------------------------------------------------

def emit_token_registered(token_id: int, token: bytes, owner: bytes, symbol: str, fee: int) -> None:
    _emit(EV_TOKEN_REGISTERED, {
        "id":     token_id,
        "token":  token,
        "owner":  owner,
        "symbol": symbol,
        "fee":    fee,
    })

def emit_token_uri_updated(token: bytes, token_uri: Optional[str]) -> None:
    _emit(EV_TOKEN_URI_UPDATED, {"token": token, "token_uri": token_uri})


__all__ = [
    "EV_TRANSFER",
    "EV_MINT",
    "EV_BURN",
    "EV_MINTABLE_SET",
    "EV_COUNTER_CHANGED",
    "EV_TOKEN_REGISTERED",
    "EV_TOKEN_URI_UPDATED",
    "emit_transfer",
    "emit_mint",
    "emit_burn",
    "emit_mintable_set",
    "emit_counter_changed",
    "emit_token_registered",
    "emit_token_uri_updated",
]
