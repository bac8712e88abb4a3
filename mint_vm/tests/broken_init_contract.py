# -*- coding: utf-8 -*-
"""Sample contract whose initializer refuses a zero seed."""
from __future__ import annotations

from mint_vm.stdlib import abi, storage

ERR_ZERO_SEED = 7

ABI = {
    "init": {"args": ["uint"]},
    "seed": {"args": [], "returns": "uint", "read_only": True},
}


def init(seed: int) -> None:
    storage.set_int(b"seed", seed)
    abi.require(seed > 0, ERR_ZERO_SEED)


def seed() -> int:
    return storage.get_int(b"seed")
