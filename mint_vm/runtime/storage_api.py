"""
mint_vm.runtime.storage_api — host hooks for deterministic key/value storage.

This module provides the storage backend abstraction the engine is built on,
plus the contract-facing storage primitives that `mint_vm.stdlib.storage`
re-exports.

Design goals
------------
- Deterministic: pure functions over (address, key, value) with no I/O.
- Simple default: in-process memory backend for local runs & tests.
- Pluggable: a tiny backend protocol so the host can swap in a real state DB.
- Namespaced: every contract sees only the keys under its own address.
- Safe: strict byte-length caps; typed helpers for common int ↔ bytes use.

Backend API (injected into the engine)
--------------------------------------
- StorageBackend protocol: get/set/delete/exists keyed by (address, key)
- MemoryBackend: thread-safe dict implementation with `snapshot()`

Contract-facing API (re-exported by stdlib.storage)
---------------------------------------------------
- get(key: bytes) -> Optional[bytes]
- set(key: bytes, value: bytes) -> None
- delete(key: bytes) -> None
- exists(key: bytes) -> bool
- get_int(key: bytes) -> int                     # big-endian u128, unset -> 0
- set_int(key: bytes, value: int) -> None

Keys that start with RESERVED_PREFIX belong to the host (native token
balances, treasury). Contracts cannot read or write them directly; the native
primitives go through `host_get`/`host_set`.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional, Protocol, Tuple, runtime_checkable

from mint_vm.config import U128_MAX
from mint_vm.errors import InvalidAccess

from .context import Frame, current_frame
from .error import VmError

RESERVED_PREFIX = b"\x00"


# ---------------------------- Backend API ---------------------------- #


@runtime_checkable
class StorageBackend(Protocol):
    """Minimal backend interface for contract storage."""

    def get(self, address: bytes, key: bytes) -> Optional[bytes]: ...
    def set(self, address: bytes, key: bytes, value: bytes) -> None: ...
    def delete(self, address: bytes, key: bytes) -> None: ...
    def exists(self, address: bytes, key: bytes) -> bool: ...


class MemoryBackend:
    """Thread-safe in-memory backend for local runs and tests."""

    def __init__(self) -> None:
        self._store: Dict[Tuple[bytes, bytes], bytes] = {}
        self._lock = threading.RLock()

    def get(self, address: bytes, key: bytes) -> Optional[bytes]:
        with self._lock:
            return self._store.get((address, key))

    def set(self, address: bytes, key: bytes, value: bytes) -> None:
        with self._lock:
            self._store[(address, key)] = value

    def delete(self, address: bytes, key: bytes) -> None:
        with self._lock:
            self._store.pop((address, key), None)

    def exists(self, address: bytes, key: bytes) -> bool:
        with self._lock:
            return (address, key) in self._store

    def snapshot(self) -> Dict[Tuple[bytes, bytes], bytes]:
        """Copy of the whole store (tests compare snapshots for atomicity)."""
        with self._lock:
            return dict(self._store)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


def check_backend(backend: object) -> StorageBackend:
    """Verify Protocol conformance at runtime; mypy enforces it statically."""
    for attr in ("get", "set", "delete", "exists"):
        if not callable(getattr(backend, attr, None)):
            raise VmError(
                f"backend missing method: {attr}",
                code="bad_backend",
                context={"type": type(backend).__name__},
            )
    return backend  # type: ignore[return-value]


# --------------------------- Validation helpers --------------------------- #


def _check_key(frame: Frame, key: bytes, *, allow_reserved: bool = False) -> bytes:
    if not isinstance(key, (bytes, bytearray)):
        raise VmError("storage key must be bytes", code="storage_bad_key")
    if len(key) == 0:
        raise VmError("storage key must be non-empty", code="storage_bad_key")
    max_len = frame.config.max_storage_key_bytes
    if len(key) > max_len:
        raise VmError(
            f"storage key too long (>{max_len} bytes)",
            code="storage_bad_key",
            context={"len": len(key)},
        )
    if not allow_reserved and bytes(key).startswith(RESERVED_PREFIX):
        raise InvalidAccess(
            "storage key uses the host-reserved prefix",
            op="storage",
            address=frame.address.hex(),
        )
    return bytes(key)


def _check_value(frame: Frame, value: bytes) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise VmError("storage value must be bytes", code="storage_bad_value")
    max_len = frame.config.max_storage_value_bytes
    if len(value) > max_len:
        raise VmError(
            f"storage value too large (>{max_len} bytes)",
            code="storage_bad_value",
            context={"len": len(value)},
        )
    return bytes(value)


def _writable_frame() -> Frame:
    frame = current_frame()
    if frame.read_only and frame.config.strict_mode:
        raise InvalidAccess(
            "storage write in a read-only call",
            op="storage_set",
            address=frame.address.hex(),
        )
    return frame


# ------------------------------ Host API ---------------------------------- #


def host_get(address: bytes, key: bytes) -> Optional[bytes]:
    """Read any (address, key) in the active journal, reserved keys included."""
    frame = current_frame()
    return frame.journal.storage_get(address, _check_key(frame, key, allow_reserved=True))


def host_set(address: bytes, key: bytes, value: bytes) -> None:
    """Stage a write to any (address, key); still refused in read-only frames."""
    frame = _writable_frame()
    frame.journal.storage_set(
        address,
        _check_key(frame, key, allow_reserved=True),
        _check_value(frame, value),
    )


# --------------------------- Contract-facing API --------------------------- #


def get(key: bytes) -> Optional[bytes]:
    """Return the value for `key`, or None if not set."""
    frame = current_frame()
    return frame.journal.storage_get(frame.address, _check_key(frame, key))


def set(key: bytes, value: bytes) -> None:
    """Set `key` to `value` (overwrites existing; empty value deletes)."""
    frame = _writable_frame()
    frame.journal.storage_set(
        frame.address, _check_key(frame, key), _check_value(frame, value)
    )


def delete(key: bytes) -> None:
    """Delete `key` if present (no-op otherwise)."""
    frame = _writable_frame()
    frame.journal.storage_delete(frame.address, _check_key(frame, key))


def exists(key: bytes) -> bool:
    """Return True if `key` is present."""
    return get(key) is not None


# ------------------------------ Typed helpers ----------------------------- #


def encode_u128(value: int) -> bytes:
    """Minimal big-endian encoding of an unsigned 128-bit int (zero -> b"\\x00")."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise VmError("u128 value must be int", code="storage_bad_value")
    if value < 0 or value > U128_MAX:
        raise VmError("u128 out of range", code="u128_overflow", context={"value": value})
    if value == 0:
        return b"\x00"
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def decode_u128(raw: Optional[bytes]) -> int:
    if not raw:
        return 0
    if len(raw) > 16:
        raise VmError("stored u128 wider than 16 bytes", code="storage_bad_value")
    return int.from_bytes(raw, "big")


def get_int(key: bytes) -> int:
    """Read a big-endian unsigned integer at `key`; unset reads as 0."""
    return decode_u128(get(key))


def set_int(key: bytes, value: int) -> None:
    """Store `value` as big-endian u128. Enforces 0 <= value <= 2^128-1."""
    set(key, encode_u128(value))


__all__ = [
    "RESERVED_PREFIX",
    "StorageBackend",
    "MemoryBackend",
    "check_backend",
    "host_get",
    "host_set",
    "get",
    "set",
    "delete",
    "exists",
    "encode_u128",
    "decode_u128",
    "get_int",
    "set_int",
]
