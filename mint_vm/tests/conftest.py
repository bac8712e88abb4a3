# -*- coding: utf-8 -*-
"""
mint_vm.tests.conftest
======================

Fixtures for host-level tests:

- `config`  : an explicit VMConfig (independent of the process environment)
- `engine`  : a fresh Engine over an in-memory backend
- `kv`      : the sample contract from `kv_contract.py`, deployed by alice
- `alice`, `bob`, `carol` : stable 32-byte principals derived from labels
"""
from __future__ import annotations

import hashlib

import pytest

from mint_vm.config import VMConfig
from mint_vm.runtime.engine import Engine
from mint_vm.runtime.storage_api import MemoryBackend

KV_CONTRACT = "mint_vm.tests.kv_contract"


def det_address(tag: str) -> bytes:
    """Stable 32-byte principal from a tag."""
    return hashlib.sha3_256(b"stacksmint-tests|" + tag.encode("utf-8")).digest()


def make_config(**overrides) -> VMConfig:
    base = dict(
        strict_mode=True,
        chain_id=1337,
        registration_fee=0,
        max_storage_key_bytes=128,
        max_storage_value_bytes=131_072,
        max_logs_per_call=256,
    )
    base.update(overrides)
    return VMConfig(**base)


@pytest.fixture
def config() -> VMConfig:
    return make_config()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def engine(backend: MemoryBackend, config: VMConfig) -> Engine:
    return Engine(backend=backend, config=config)


@pytest.fixture
def alice() -> bytes:
    return det_address("alice")


@pytest.fixture
def bob() -> bytes:
    return det_address("bob")


@pytest.fixture
def carol() -> bytes:
    return det_address("carol")


@pytest.fixture
def kv(engine: Engine, alice: bytes) -> bytes:
    return engine.deploy(KV_CONTRACT, alice, name="kv")
