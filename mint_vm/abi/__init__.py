"""
mint_vm.abi
===========

Public ABI surface for the StackSmint host: textual type specs and the
validation the engine applies to call arguments before entering a contract.
"""

from __future__ import annotations

from .types import *  # noqa: F401,F403
from .types import __all__ as _all_types

__all__ = tuple(_all_types)
