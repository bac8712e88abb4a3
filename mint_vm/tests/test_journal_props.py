# -*- coding: utf-8 -*-
"""
Property tests for the journal's revert/commit "laws":

- writes → revert   ⇒ state equals baseline
- writes → commit   ⇒ state equals baseline ∪ writes (last-wins)
- a staged deletion hides the backend value until it is reverted
- nothing reaches the backend before commit
"""
from __future__ import annotations

from typing import Dict

from hypothesis import given, settings, strategies as st

from mint_vm.runtime.journal import Journal
from mint_vm.runtime.storage_api import MemoryBackend

ADDR = b"\x11" * 32

HKEY = st.binary(min_size=1, max_size=32)
HVAL = st.binary(min_size=1, max_size=64)
MAP_SMALL = st.dictionaries(keys=HKEY, values=HVAL, min_size=0, max_size=16)
MAP_NONEMPTY = st.dictionaries(keys=HKEY, values=HVAL, min_size=1, max_size=16)


def _backend_with(base: Dict[bytes, bytes]) -> MemoryBackend:
    be = MemoryBackend()
    for k, v in base.items():
        be.set(ADDR, k, v)
    return be


def _view(j: Journal, keys) -> Dict[bytes, bytes]:
    out = {}
    for k in keys:
        v = j.storage_get(ADDR, k)
        if v is not None:
            out[k] = v
    return out


@settings(max_examples=60, deadline=None)
@given(base=MAP_SMALL, writes=MAP_NONEMPTY)
def test_revert_restores_baseline(base, writes):
    be = _backend_with(base)
    j = Journal(be)
    for k, v in writes.items():
        j.storage_set(ADDR, k, v)
    j.revert()
    keys = set(base) | set(writes)
    assert _view(j, keys) == base
    assert {k: be.get(ADDR, k) for k in base} == base


@settings(max_examples=60, deadline=None)
@given(base=MAP_SMALL, writes=MAP_NONEMPTY)
def test_commit_applies_last_wins(base, writes):
    be = _backend_with(base)
    j = Journal(be)
    for k, v in writes.items():
        j.storage_set(ADDR, k, v)
    j.commit()
    expected = dict(base)
    expected.update(writes)
    assert {k: be.get(ADDR, k) for k in expected} == expected


@settings(max_examples=40, deadline=None)
@given(writes=MAP_NONEMPTY)
def test_writes_are_invisible_to_backend_until_commit(writes):
    be = MemoryBackend()
    j = Journal(be)
    for k, v in writes.items():
        j.storage_set(ADDR, k, v)
    assert _view(j, writes) == writes
    assert all(be.get(ADDR, k) is None for k in writes)


def test_staged_delete_shadows_backend():
    be = _backend_with({b"k": b"v"})
    j = Journal(be)
    j.storage_delete(ADDR, b"k")
    assert j.storage_get(ADDR, b"k") is None
    j.revert()
    assert j.storage_get(ADDR, b"k") == b"v"

    j.storage_set(ADDR, b"k", b"")  # empty value is a deletion too
    j.commit()
    assert be.get(ADDR, b"k") is None
    assert not be.exists(ADDR, b"k")


def test_journal_is_reusable_after_commit():
    be = MemoryBackend()
    j = Journal(be)
    j.storage_set(ADDR, b"a", b"1")
    j.commit()
    j.storage_set(ADDR, b"a", b"2")
    j.revert()
    assert j.storage_get(ADDR, b"a") == b"1"
    assert be.get(ADDR, b"a") == b"1"
