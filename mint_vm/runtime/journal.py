"""
mint_vm.runtime.journal — per-call write journal with revert/commit.

A deterministic, in-memory overlay over an injected `StorageBackend`. Writes
go to the overlay; reads consult the overlay first and fall back to the
backend. `commit()` applies the overlay to the backend, `revert()` discards
it. Nothing reaches the backend before `commit()`.

Intended usage
--------------
    j = Journal(backend)
    j.storage_set(addr, b"k", b"value")
    j.storage_delete(addr, b"old")
    j.commit()                      # overlay -> backend

The engine opens one journal per call: every write staged by a contract, a
native primitive or the treasury lands in the same unit of work, so a revert
anywhere discards all of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .storage_api import StorageBackend


def _b(x: bytes | bytearray | memoryview, *, name: str) -> bytes:
    if not isinstance(x, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like")
    return bytes(x)


# Distinguishes "not staged" from a staged deletion (None).
_MISSING = object()


@dataclass
class _Overlay:
    """
    Staged storage changes per address. `None` means deletion.
    """

    storage: Dict[bytes, Dict[bytes, Optional[bytes]]] = field(default_factory=dict)

    def get_local(self, addr: bytes, key: bytes) -> object:
        m = self.storage.get(addr)
        if m is None:
            return _MISSING
        return m.get(key, _MISSING)

    def set_local(self, addr: bytes, key: bytes, value: Optional[bytes]) -> None:
        self.storage.setdefault(addr, {})[key] = value


class Journal:
    """
    A copy-on-write write journal.

    Parameters
    ----------
    backend : StorageBackend
        The base (persisted) store, keyed by (address, key).
    """

    def __init__(self, backend: StorageBackend) -> None:
        self._backend = backend
        self._overlay = _Overlay()

    def commit(self) -> None:
        """Apply every staged write to the backend and start a fresh overlay."""
        for addr, writes in self._overlay.storage.items():
            for k, v in writes.items():
                if v is None:
                    self._backend.delete(addr, k)
                else:
                    self._backend.set(addr, k, v)
        self._overlay = _Overlay()

    def revert(self) -> None:
        """Discard every staged write."""
        self._overlay = _Overlay()

    # --------------------------------------------------------------------- #
    # Storage API
    # --------------------------------------------------------------------- #

    def storage_get(
        self,
        address: bytes | bytearray | memoryview,
        key: bytes | bytearray | memoryview,
    ) -> Optional[bytes]:
        """Read storage with overlay precedence. Returns None if absent."""
        addr = _b(address, name="address")
        key_b = _b(key, name="key")
        local = self._overlay.get_local(addr, key_b)
        if local is not _MISSING:
            return local  # type: ignore[return-value]
        return self._backend.get(addr, key_b)

    def storage_set(
        self,
        address: bytes | bytearray | memoryview,
        key: bytes | bytearray | memoryview,
        value: bytes | bytearray | memoryview,
    ) -> None:
        """Stage a storage write. Empty value is a deletion."""
        addr = _b(address, name="address")
        key_b = _b(key, name="key")
        val_b = _b(value, name="value")
        self._overlay.set_local(addr, key_b, val_b if val_b else None)

    def storage_delete(
        self,
        address: bytes | bytearray | memoryview,
        key: bytes | bytearray | memoryview,
    ) -> None:
        """Explicit storage deletion."""
        addr = _b(address, name="address")
        key_b = _b(key, name="key")
        self._overlay.set_local(addr, key_b, None)


__all__ = ["Journal"]
