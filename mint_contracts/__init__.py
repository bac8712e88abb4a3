"""
mint_contracts
==============

Contracts bundled with StackSmint plus their shared helpers:

- `token_template`  : one fungible token per deployment (the Token Ledger)
- `token_registry`  : the shared Token Registry
- `stdlib`          : helpers the contracts are written against

Deployers
---------
    from mint_vm import Engine
    from mint_contracts import deploy_token, deploy_registry

    eng = Engine()
    token = deploy_token(eng, alice, name="Alpha", symbol="ALP")
    registry = deploy_registry(eng, alice)          # fee from configuration
"""

from __future__ import annotations

from typing import Optional

from mint_vm.runtime.engine import Engine

from .token_registry import CONTRACT as REGISTRY_CONTRACT
from .token_template import CONTRACT as TOKEN_CONTRACT

DEFAULT_NAME = "My Token"
DEFAULT_SYMBOL = "MTK"
DEFAULT_DECIMALS = 6
DEFAULT_TOKEN_URI = "https://example.com/token-metadata.json"
DEFAULT_INITIAL_SUPPLY = 1_000_000_000_000


def deploy_token(
    engine: Engine,
    deployer: bytes,
    *,
    name: str = DEFAULT_NAME,
    symbol: str = DEFAULT_SYMBOL,
    decimals: int = DEFAULT_DECIMALS,
    token_uri: Optional[str] = DEFAULT_TOKEN_URI,
    initial_supply: int = DEFAULT_INITIAL_SUPPLY,
) -> bytes:
    """Deploy a ledger owned by `deployer`; the initial supply goes to them."""
    return engine.deploy(
        TOKEN_CONTRACT,
        deployer,
        name,
        symbol,
        decimals,
        token_uri,
        initial_supply,
        name=f"token:{symbol}",
    )


def deploy_registry(engine: Engine, deployer: bytes, fee: Optional[int] = None) -> bytes:
    """Deploy the registry owned by `deployer`. `fee=None` uses the engine's configured fee."""
    if fee is None:
        fee = engine.config.registration_fee
    return engine.deploy(REGISTRY_CONTRACT, deployer, fee, name="registry")


__all__ = [
    "REGISTRY_CONTRACT",
    "TOKEN_CONTRACT",
    "DEFAULT_NAME",
    "DEFAULT_SYMBOL",
    "DEFAULT_DECIMALS",
    "DEFAULT_TOKEN_URI",
    "DEFAULT_INITIAL_SUPPLY",
    "deploy_token",
    "deploy_registry",
]
