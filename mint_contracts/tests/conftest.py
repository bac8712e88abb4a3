# -*- coding: utf-8 -*-
"""
mint_contracts.tests.conftest
=============================

Pytest fixtures for the bundled contracts.

- `engine`    : fresh Engine with an explicit configuration
- `deployer`, `wallet_1`, `wallet_2`, `wallet_3` : stable 32-byte principals
- `token`     : ledger deployed by `deployer` with the default metadata
                ("My Token", "MTK", 6 decimals, 1_000_000_000_000 supply)
- `registry`  : registry deployed by `deployer`, no registration fee
- `paid_registry` : registry charging REGISTRATION_FEE, wallets funded

Usage (inside a test file):
    def test_flow(engine, token, deployer, wallet_1):
        res = engine.call(token, "transfer", 10, deployer, wallet_1, None, caller=deployer)
        assert res.ok
"""
from __future__ import annotations

import hashlib

import pytest

from mint_contracts import deploy_registry, deploy_token
from mint_vm.config import VMConfig
from mint_vm.runtime.engine import Engine

REGISTRATION_FEE = 1_000_000
STARTING_COINS = 100_000_000


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
def engine() -> Engine:
    return Engine(config=make_config())


@pytest.fixture
def deployer() -> bytes:
    return det_address("deployer")


@pytest.fixture
def wallet_1() -> bytes:
    return det_address("wallet_1")


@pytest.fixture
def wallet_2() -> bytes:
    return det_address("wallet_2")


@pytest.fixture
def wallet_3() -> bytes:
    return det_address("wallet_3")


@pytest.fixture
def token(engine: Engine, deployer: bytes) -> bytes:
    return deploy_token(engine, deployer)


@pytest.fixture
def registry(engine: Engine, deployer: bytes) -> bytes:
    return deploy_registry(engine, deployer, fee=0)


@pytest.fixture
def paid_registry(engine: Engine, deployer: bytes, wallet_1: bytes, wallet_2: bytes) -> bytes:
    for w in (wallet_1, wallet_2):
        engine.fund(w, STARTING_COINS)
    return deploy_registry(engine, deployer, fee=REGISTRATION_FEE)
