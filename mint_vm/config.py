"""
mint_vm.config — host feature flags, numeric caps and the registration charge.

This module centralizes configuration for the contract host. It has NO
third-party deps and is safe to import very early.

Configuration precedence:
  1) Environment variables (STACKSMINT_* / legacy VM_PY_*)
  2) Hardcoded safe defaults below

Key env vars (case-insensitive where boolean):
  - STACKSMINT_STRICT                  (bool)   default: true
  - STACKSMINT_REGISTRATION_FEE        (int)    default: 0
  - STACKSMINT_CHAIN_ID                (int)    default: 1337
  - STACKSMINT_MAX_STORAGE_KEY_BYTES   (int)    default: 128
  - STACKSMINT_MAX_STORAGE_VAL_BYTES   (int)    default: 131_072   (128 KiB)
  - STACKSMINT_MAX_LOGS_PER_CALL       (int)    default: 256

The registration charge is deliberately a configuration value: the registry
contract receives it as an init argument and never hard-codes it.

Usage:
    from mint_vm.config import load_config
    CFG = load_config()
    if CFG.strict_mode: ...
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

U128_MAX = (1 << 128) - 1


# ----------------------------- helpers ---------------------------------------


def _raw_env(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None:
        # Secondary prefix (legacy)
        raw = os.getenv(name.replace("STACKSMINT_", "VM_PY_"))
    return raw


def _env_bool(name: str, default: bool) -> bool:
    raw = _raw_env(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in ("1", "true", "t", "yes", "y", "on")


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = _raw_env(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class VMConfig:
    # Feature flags
    strict_mode: bool

    # Chain/economics
    chain_id: int
    registration_fee: int

    # Numeric caps / limits (enforced by the runtime)
    max_storage_key_bytes: int
    max_storage_value_bytes: int
    max_logs_per_call: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "strict_mode": self.strict_mode,
            "chain_id": self.chain_id,
            "registration_fee": self.registration_fee,
            "max_storage_key_bytes": self.max_storage_key_bytes,
            "max_storage_value_bytes": self.max_storage_value_bytes,
            "max_logs_per_call": self.max_logs_per_call,
        }


@lru_cache(maxsize=1)
def load_config() -> VMConfig:
    """
    Build and cache a VMConfig from environment + safe defaults.
    Call `load_config.cache_clear()` after changing the environment.
    """
    return VMConfig(
        strict_mode=_env_bool("STACKSMINT_STRICT", True),
        chain_id=_env_int("STACKSMINT_CHAIN_ID", 1337, min_v=0, max_v=(1 << 63) - 1),
        registration_fee=_env_int("STACKSMINT_REGISTRATION_FEE", 0, min_v=0, max_v=U128_MAX),
        max_storage_key_bytes=_env_int("STACKSMINT_MAX_STORAGE_KEY_BYTES", 128, min_v=16, max_v=1024),
        max_storage_value_bytes=_env_int("STACKSMINT_MAX_STORAGE_VAL_BYTES", 131_072, min_v=256, max_v=8_388_608),
        max_logs_per_call=_env_int("STACKSMINT_MAX_LOGS_PER_CALL", 256, min_v=1, max_v=10_000),
    )


__all__ = ["VMConfig", "load_config", "U128_MAX"]
