# -*- coding: utf-8 -*-
"""Pure helpers: bounded owner index, entry/metadata codecs and checked math."""
from __future__ import annotations

import cbor2
import pytest
from hypothesis import given, strategies as st

from mint_contracts.stdlib.math import U128_MAX, u128_add, u128_sub
from mint_contracts.stdlib.registry import (OWNER_INDEX_CAPACITY, BoundedList,
                                            CapacityError, RegistryEntry,
                                            key_id)
from mint_contracts.stdlib.token import TokenMetadata, decode_flag, encode_flag
from mint_vm.errors import VmError

# ----------------------------------------------------------------------------- BoundedList


def test_bounded_list_appends_until_full():
    lst = BoundedList(capacity=2)
    lst = lst.append(b"a").append(b"b")
    assert list(lst) == [b"a", b"b"]
    assert lst.is_full
    with pytest.raises(CapacityError) as ei:
        lst.append(b"c")
    assert ei.value.capacity == 2
    assert len(lst) == 2  # unchanged: append never mutates


def test_bounded_list_default_capacity_and_codec():
    lst = BoundedList()
    assert lst.capacity == OWNER_INDEX_CAPACITY == 50
    lst = lst.append(b"\x01" * 32)
    again = BoundedList.from_cbor(lst.to_cbor())
    assert again == lst
    assert b"\x01" * 32 in again
    assert BoundedList.from_cbor(None) == BoundedList()


def test_bounded_list_rejects_oversized_payload():
    raw = cbor2.dumps([b"x"] * 3)
    with pytest.raises(CapacityError):
        BoundedList.from_cbor(raw, capacity=2)


@given(st.lists(st.binary(min_size=1, max_size=64), max_size=OWNER_INDEX_CAPACITY))
def test_bounded_list_encoding_is_canonical(items):
    lst = BoundedList(tuple(items))
    assert lst.to_cbor() == BoundedList.from_cbor(lst.to_cbor()).to_cbor()


# ----------------------------------------------------------------------------- entries


def test_registry_entry_codec_and_uri_update():
    e = RegistryEntry(1, "Alpha Token", "ALPHA", 6, 500_000_000, None, b"\x02" * 32, 10)
    assert RegistryEntry.from_cbor(e.to_cbor()) == e
    e2 = e.with_uri("ipfs://x")
    assert e2.token_uri == "ipfs://x"
    assert (e2.id, e2.owner, e2.registered_at) == (e.id, e.owner, e.registered_at)
    assert e.to_dict()["owner"] == b"\x02" * 32


def test_id_keys_sort_numerically():
    assert key_id(2) < key_id(10) < key_id(256)


def test_token_metadata_distinguishes_none_and_empty_uri():
    none = TokenMetadata("My Token", "MTK", 6, None)
    empty = TokenMetadata("My Token", "MTK", 6, "")
    assert none.to_cbor() != empty.to_cbor()
    assert TokenMetadata.from_cbor(empty.to_cbor()).token_uri == ""
    assert TokenMetadata.from_cbor(none.to_cbor()).token_uri is None


def test_flags():
    assert decode_flag(encode_flag(True)) is True
    assert decode_flag(encode_flag(False)) is False
    assert decode_flag(None) is False


# ----------------------------------------------------------------------------- math


def test_checked_u128():
    assert u128_add(U128_MAX - 1, 1) == U128_MAX
    assert u128_sub(5, 5) == 0
    with pytest.raises(VmError) as ei:
        u128_add(U128_MAX, 1)
    assert ei.value.code == "u128_overflow"
    with pytest.raises(VmError):
        u128_sub(0, 1)
    with pytest.raises(VmError):
        u128_add(True, 1)
