# -*- coding: utf-8 -*-
"""
mint_contracts.stdlib.registry
==============================

Data structures and storage layout for the shared token registry.

Design goals
------------
- **Deterministic encoding**: entries and owner indexes are canonical CBOR
  (`cbor2.dumps(..., canonical=True)`), so equal state is equal bytes.
- **Bounded**: an owner index holds at most OWNER_INDEX_CAPACITY identities.
  Appending past the cap raises `CapacityError`, which the contract turns into
  its list-full error code; it never truncates or crashes.
- **Library-only permissions**: nothing here reads the caller. The contract
  enforces authorization before persisting anything built here.

Storage layout (contract namespace)
-----------------------------------
    ENTRY_PREFIX + identity   -> CBOR RegistryEntry
    OWNED_PREFIX + owner      -> CBOR list of identities (registration order)
    ID_PREFIX    + be16(id)   -> identity
    FEE_KEY                   -> u128 registration fee
    COUNT_KEY                 -> u128 number of registrations
    FEES_KEY                  -> u128 total fees collected
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Final, Iterator, Optional, Tuple

import cbor2

ERR_ALREADY_REGISTERED: Final[int] = 200
ERR_NOT_AUTHORIZED: Final[int] = 201
ERR_INSUFFICIENT_FEE: Final[int] = 202  # reserved; a short payer fails with native code 1
ERR_INVALID_NAME: Final[int] = 203
ERR_INVALID_SYMBOL: Final[int] = 204
ERR_INVALID_SUPPLY: Final[int] = 205
ERR_TOKEN_NOT_FOUND: Final[int] = 206
ERR_LIST_FULL: Final[int] = 207
ERR_ALREADY_INITIALIZED: Final[int] = 208

OWNER_INDEX_CAPACITY: Final[int] = 50

ENTRY_PREFIX: Final[bytes] = b"reg:entry:"
OWNED_PREFIX: Final[bytes] = b"reg:owned:"
ID_PREFIX: Final[bytes] = b"reg:id:"
FEE_KEY: Final[bytes] = b"reg:fee"
COUNT_KEY: Final[bytes] = b"reg:count"
FEES_KEY: Final[bytes] = b"reg:fees"


def key_entry(token: bytes) -> bytes:
    return ENTRY_PREFIX + bytes(token)


def key_owned(owner: bytes) -> bytes:
    return OWNED_PREFIX + bytes(owner)


def key_id(token_id: int) -> bytes:
    return ID_PREFIX + int(token_id).to_bytes(16, "big")


# -----------------------------------------------------------------------------
# Bounded, append-only owner index
# -----------------------------------------------------------------------------


class CapacityError(Exception):
    """Raised when appending to a full BoundedList."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"list is full (capacity {capacity})")
        self.capacity = capacity


@dataclass(frozen=True)
class BoundedList:
    """Immutable sequence of identities with a fixed maximum length."""

    items: Tuple[bytes, ...] = ()
    capacity: int = OWNER_INDEX_CAPACITY

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError("capacity must be non-negative")
        if len(self.items) > self.capacity:
            raise CapacityError(self.capacity)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.items)

    def __contains__(self, item: object) -> bool:
        return item in self.items

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.capacity

    def append(self, item: bytes) -> "BoundedList":
        """Return a new list with `item` at the end; raises CapacityError when full."""
        if self.is_full:
            raise CapacityError(self.capacity)
        return replace(self, items=self.items + (bytes(item),))

    def to_cbor(self) -> bytes:
        return cbor2.dumps(list(self.items), canonical=True)

    @classmethod
    def from_cbor(cls, raw: Optional[bytes], capacity: int = OWNER_INDEX_CAPACITY) -> "BoundedList":
        if not raw:
            return cls((), capacity)
        return cls(tuple(bytes(x) for x in cbor2.loads(raw)), capacity)


# -----------------------------------------------------------------------------
# Registry entry
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class RegistryEntry:
    """
    Caller-attested snapshot of a token's metadata.

    `total_supply` is recorded at registration time and never refreshed from
    the ledger; `token_uri` is the only field that changes afterwards.
    """

    id: int
    name: str
    symbol: str
    decimals: int
    total_supply: int
    token_uri: Optional[str]
    owner: bytes
    registered_at: int

    def with_uri(self, token_uri: Optional[str]) -> "RegistryEntry":
        return replace(self, token_uri=token_uri)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_cbor(self) -> bytes:
        return cbor2.dumps(self.to_dict(), canonical=True)

    @classmethod
    def from_cbor(cls, raw: bytes) -> "RegistryEntry":
        m: Dict[str, Any] = cbor2.loads(raw)
        return cls(
            id=int(m["id"]),
            name=m["name"],
            symbol=m["symbol"],
            decimals=int(m["decimals"]),
            total_supply=int(m["total_supply"]),
            token_uri=m.get("token_uri"),
            owner=bytes(m["owner"]),
            registered_at=int(m["registered_at"]),
        )


__all__ = [
    # errors
    "ERR_ALREADY_REGISTERED",
    "ERR_NOT_AUTHORIZED",
    "ERR_INSUFFICIENT_FEE",
    "ERR_INVALID_NAME",
    "ERR_INVALID_SYMBOL",
    "ERR_INVALID_SUPPLY",
    "ERR_TOKEN_NOT_FOUND",
    "ERR_LIST_FULL",
    "ERR_ALREADY_INITIALIZED",
    # layout
    "OWNER_INDEX_CAPACITY",
    "FEE_KEY",
    "COUNT_KEY",
    "FEES_KEY",
    "key_entry",
    "key_owned",
    "key_id",
    # types
    "CapacityError",
    "BoundedList",
    "RegistryEntry",
]
