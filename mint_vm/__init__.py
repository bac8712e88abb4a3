"""
StackSmint host (mint_vm) — package marker and public entrypoints.

This module exposes a tiny, stable façade over the runtime so downstream code
can rely on a consistent API:

- Engine: deterministic, journaled, single-writer contract host
- CallResult / TxStatus: outcome of a call (ok value or numeric error code)
- Revert / VmError: contract-level failure vs. host fault
- load_config(): environment-driven configuration

Contracts never import these; they use `mint_vm.stdlib`.
"""

from __future__ import annotations

from .config import VMConfig, load_config
from .errors import ExecError, InvalidAccess, Revert, VmError
from .runtime.engine import Engine, contract_address
from .runtime.result import CallResult
from .runtime.status import TxStatus
from .version import __version__


def version() -> str:
    """Return the mint_vm semantic version string."""
    return __version__


__all__ = [
    "__version__",
    "version",
    "Engine",
    "contract_address",
    "CallResult",
    "TxStatus",
    "ExecError",
    "InvalidAccess",
    "Revert",
    "VmError",
    "VMConfig",
    "load_config",
]
