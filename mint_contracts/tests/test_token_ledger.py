# -*- coding: utf-8 -*-
"""
Token ledger tests
- metadata fixed at init, owner = deployer, initial supply to the owner
- transfer / mint / burn authorization and amount checks, first failure wins
- native insufficient-balance failures keep their own code and origin
- counter utility, including the underflow guard
"""
from __future__ import annotations

import pytest

from mint_contracts import DEFAULT_INITIAL_SUPPLY, DEFAULT_TOKEN_URI, deploy_token
from mint_contracts.stdlib.token import (ERR_ALREADY_INITIALIZED,
                                         ERR_COUNTER_UNDERFLOW,
                                         ERR_INVALID_AMOUNT,
                                         ERR_NOT_AUTHORIZED, ERR_NOT_MINTABLE,
                                         ERR_NOT_TOKEN_OWNER, MAX_MEMO_LEN,
                                         MAX_NAME_LEN, MAX_SYMBOL_LEN,
                                         MAX_URI_LEN)
from mint_contracts.stdlib.utils.events import (EV_BURN, EV_COUNTER_CHANGED,
                                                EV_MINT, EV_MINTABLE_SET,
                                                EV_TRANSFER)
from mint_vm.abi.types import ValidationError
from mint_vm.errors import ORIGIN_CONTRACT, ORIGIN_NATIVE


def _balance(engine, token, who):
    return engine.read(token, "get_balance", who).value


def _supply(engine, token):
    return engine.read(token, "get_total_supply").value


def _err(res):
    assert not res.ok, res
    return res.error


# ----------------------------------------------------------------------------- metadata


def test_metadata_after_init(engine, token, deployer, wallet_1):
    assert engine.read(token, "get_name").value == "My Token"
    assert engine.read(token, "get_symbol").value == "MTK"
    assert engine.read(token, "get_decimals").value == 6
    assert engine.read(token, "get_token_uri").value == DEFAULT_TOKEN_URI
    assert engine.read(token, "get_owner").value == deployer
    assert engine.read(token, "is_mintable").value is False
    assert _supply(engine, token) == DEFAULT_INITIAL_SUPPLY
    assert _balance(engine, token, deployer) == DEFAULT_INITIAL_SUPPLY
    assert _balance(engine, token, wallet_1) == 0


def test_absent_uri_is_none_and_empty_uri_is_kept(engine, deployer):
    bare = deploy_token(engine, deployer, symbol="NOU", token_uri=None)
    empty = deploy_token(engine, deployer, symbol="EMP", token_uri="")
    assert engine.read(bare, "get_token_uri").value is None
    assert engine.read(empty, "get_token_uri").value == ""


def test_init_is_one_time(engine, token, deployer, wallet_1):
    res = engine.call(token, "init", "Other", "OTH", 0, None, 5, caller=wallet_1)
    assert (_err(res), res.origin) == (ERR_ALREADY_INITIALIZED, ORIGIN_CONTRACT)
    assert engine.read(token, "get_owner").value == deployer
    assert engine.read(token, "get_name").value == "My Token"


def test_init_validates_metadata_types(engine, deployer):
    with pytest.raises(ValidationError):
        deploy_token(engine, deployer, name="N" * 33)
    with pytest.raises(ValidationError):
        deploy_token(engine, deployer, symbol="TOOLONGSYMB")
    with pytest.raises(ValidationError):
        deploy_token(engine, deployer, token_uri="\udcff")


def test_metadata_limits_are_inclusive(engine, deployer):
    name, symbol, uri = "N" * MAX_NAME_LEN, "S" * MAX_SYMBOL_LEN, "u" * MAX_URI_LEN
    t = deploy_token(engine, deployer, name=name, symbol=symbol, token_uri=uri)
    assert engine.read(t, "get_name").value == name
    assert engine.read(t, "get_symbol").value == symbol
    assert engine.read(t, "get_token_uri").value == uri
    with pytest.raises(ValidationError):
        deploy_token(engine, deployer, token_uri="u" * (MAX_URI_LEN + 1))


def test_zero_initial_supply(engine, deployer):
    t = deploy_token(engine, deployer, symbol="ZRO", initial_supply=0)
    assert _supply(engine, t) == 0
    assert all(e.address != t for e in engine.logs)


# ----------------------------------------------------------------------------- transfer


def test_transfer_moves_balance(engine, token, deployer, wallet_1):
    res = engine.call(token, "transfer", 1_000_000, deployer, wallet_1, None, caller=deployer)
    assert res.ok and res.value is True
    assert _balance(engine, token, wallet_1) == 1_000_000
    assert _balance(engine, token, deployer) == 999_999_000_000
    assert _supply(engine, token) == DEFAULT_INITIAL_SUPPLY


def test_transfer_event_carries_memo(engine, token, deployer, wallet_1):
    memo = b"invoice-42"
    res = engine.call(token, "transfer", 5, deployer, wallet_1, memo, caller=deployer)
    (ev,) = res.logs
    assert ev.name == EV_TRANSFER
    assert ev.args == {"from": deployer, "to": wallet_1, "amount": 5, "memo": memo}


def test_transfer_memo_limit(engine, token, deployer, wallet_1):
    res = engine.call(token, "transfer", 5, deployer, wallet_1, b"m" * MAX_MEMO_LEN,
                      caller=deployer)
    assert res.ok and res.logs[-1].args["memo"] == b"m" * MAX_MEMO_LEN
    with pytest.raises(ValidationError):
        engine.call(token, "transfer", 5, deployer, wallet_1, b"m" * 35, caller=deployer)


def test_transfer_requires_sender_to_be_caller(engine, token, deployer, wallet_1):
    res = engine.call(token, "transfer", 5, deployer, wallet_1, None, caller=wallet_1)
    assert _err(res) == ERR_NOT_TOKEN_OWNER
    assert _balance(engine, token, wallet_1) == 0


def test_transfer_authorization_is_checked_before_amount(engine, token, deployer, wallet_1):
    res = engine.call(token, "transfer", 0, deployer, wallet_1, None, caller=wallet_1)
    assert _err(res) == ERR_NOT_TOKEN_OWNER


def test_transfer_zero_amount(engine, token, deployer, wallet_1):
    res = engine.call(token, "transfer", 0, deployer, wallet_1, None, caller=deployer)
    assert _err(res) == ERR_INVALID_AMOUNT


def test_transfer_insufficient_balance_is_native(engine, token, deployer, wallet_1, wallet_2):
    res = engine.call(token, "transfer", 1, wallet_1, wallet_2, None, caller=wallet_1)
    assert (_err(res), res.origin) == (1, ORIGIN_NATIVE)


def test_transfer_to_self_is_native_failure(engine, token, deployer):
    res = engine.call(token, "transfer", 1, deployer, deployer, None, caller=deployer)
    assert (_err(res), res.origin) == (2, ORIGIN_NATIVE)
    assert _balance(engine, token, deployer) == DEFAULT_INITIAL_SUPPLY


# ----------------------------------------------------------------------------- mint


def test_mint_gated_by_flag_then_succeeds(engine, token, deployer, wallet_1):
    res = engine.call(token, "mint", 5_000_000, wallet_1, caller=deployer)
    assert _err(res) == ERR_NOT_MINTABLE

    res = engine.call(token, "set_mintable", True, caller=deployer)
    assert res.ok and res.value is True
    assert res.logs[0].name == EV_MINTABLE_SET
    assert engine.read(token, "is_mintable").value is True

    res = engine.call(token, "mint", 5_000_000, wallet_1, caller=deployer)
    assert res.ok and res.value == 5_000_000
    assert res.logs[0].name == EV_MINT
    assert _balance(engine, token, wallet_1) == 5_000_000
    assert _supply(engine, token) == DEFAULT_INITIAL_SUPPLY + 5_000_000


def test_mint_check_order(engine, token, deployer, wallet_1):
    # not owner wins over not-mintable and zero amount
    assert _err(engine.call(token, "mint", 0, wallet_1, caller=wallet_1)) == ERR_NOT_AUTHORIZED
    # not-mintable wins over zero amount
    assert _err(engine.call(token, "mint", 0, wallet_1, caller=deployer)) == ERR_NOT_MINTABLE
    engine.call(token, "set_mintable", True, caller=deployer)
    assert _err(engine.call(token, "mint", 0, wallet_1, caller=deployer)) == ERR_INVALID_AMOUNT


def test_set_mintable_owner_only(engine, token, wallet_1):
    res = engine.call(token, "set_mintable", True, caller=wallet_1)
    assert _err(res) == ERR_NOT_AUTHORIZED
    assert engine.read(token, "is_mintable").value is False


# ----------------------------------------------------------------------------- burn


def test_burn_reduces_balance_and_supply(engine, token, deployer):
    res = engine.call(token, "burn", 1_000, deployer, caller=deployer)
    assert res.ok and res.value == 1_000
    assert res.logs[0].name == EV_BURN
    assert _supply(engine, token) == DEFAULT_INITIAL_SUPPLY - 1_000
    assert _balance(engine, token, deployer) == DEFAULT_INITIAL_SUPPLY - 1_000


def test_burn_failures(engine, token, deployer, wallet_1):
    assert _err(engine.call(token, "burn", 1, deployer, caller=wallet_1)) == ERR_NOT_TOKEN_OWNER
    assert _err(engine.call(token, "burn", 0, deployer, caller=deployer)) == ERR_INVALID_AMOUNT
    res = engine.call(token, "burn", 1, wallet_1, caller=wallet_1)
    assert (_err(res), res.origin) == (1, ORIGIN_NATIVE)
    assert _supply(engine, token) == DEFAULT_INITIAL_SUPPLY


# ----------------------------------------------------------------------------- counter


def test_counter_underflow_leaves_counter_at_zero(engine, token, wallet_1):
    res = engine.call(token, "decrement", caller=wallet_1)
    assert _err(res) == ERR_COUNTER_UNDERFLOW
    assert res.logs == ()
    assert engine.read(token, "get_counter").value == 0


def test_counter_is_unauthenticated(engine, token, wallet_1, wallet_2):
    assert engine.call(token, "increment", caller=wallet_1).value == 1
    res = engine.call(token, "increment", caller=wallet_2)
    assert res.value == 2
    assert res.logs[0].name == EV_COUNTER_CHANGED
    assert res.logs[0].args == {"value": 2}
    assert engine.call(token, "decrement", caller=wallet_1).value == 1
    assert engine.read(token, "get_counter").value == 1


def test_counter_does_not_touch_balances(engine, token, deployer):
    engine.call(token, "increment", caller=deployer)
    assert _supply(engine, token) == DEFAULT_INITIAL_SUPPLY
    assert _balance(engine, token, deployer) == DEFAULT_INITIAL_SUPPLY


# ----------------------------------------------------------------------------- isolation


def test_ledgers_are_independent(engine, deployer, wallet_1):
    a = deploy_token(engine, deployer, symbol="AAA", initial_supply=100)
    b = deploy_token(engine, wallet_1, symbol="BBB", initial_supply=7)
    assert a != b
    engine.call(a, "transfer", 40, deployer, wallet_1, None, caller=deployer)
    assert _balance(engine, a, wallet_1) == 40
    assert _balance(engine, b, wallet_1) == 7
    assert _balance(engine, b, deployer) == 0
    assert engine.read(b, "get_owner").value == wallet_1
