"""
StackSmint host — runtime package

This package contains the call frame, the journal, the storage backend
abstraction and the host-facing APIs (storage/events/ft/treasury) that
contracts reach through `mint_vm.stdlib`.

Convenience re-exports live here so callers can do:

    from mint_vm.runtime import BlockEnv, Journal, MemoryBackend
    from mint_vm.runtime import storage, events   # module namespaces

The engine itself is imported from `mint_vm.runtime.engine` (or simply
`mint_vm.Engine`); it pulls in the native primitives, which depend on
`mint_vm.errors`, so this package stays import-light.

Notes
-----
- All code that can affect determinism is behind explicit APIs.
- No wall-clock I/O or system randomness is exposed here.
"""

from __future__ import annotations

from . import events_api as events
from . import storage_api as storage
from .context import BlockEnv, Frame, current_frame, enter_frame
from .error import VmError
from .journal import Journal
from .storage_api import MemoryBackend, StorageBackend

__all__ = [
    "BlockEnv",
    "Frame",
    "current_frame",
    "enter_frame",
    "Journal",
    "MemoryBackend",
    "StorageBackend",
    "VmError",
    "events",
    "storage",
]
