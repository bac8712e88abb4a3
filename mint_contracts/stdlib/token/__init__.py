# -*- coding: utf-8 -*-
"""
mint_contracts.stdlib.token
===========================

Constants, storage layout and metadata codec for the token ledger.

Balances and the total supply are *not* stored here: they belong to the VM's
native fungible-token primitive (`mint_vm.stdlib.ft`), which keeps
sum(balances) == supply by construction. This package only holds what the
ledger itself owns.

Storage keys (contract namespace)
---------------------------------
  - META_KEY      -> canonical CBOR map {name, symbol, decimals, token_uri}
  - MINTABLE_KEY  -> b"\\x01" when minting is enabled, b"\\x00" otherwise
  - COUNTER_KEY   -> u128 counter value (unset reads as 0)
  - owner         -> see `mint_contracts.stdlib.access`

Error codes
-----------
Application codes returned by the ledger. Native ft failures keep their own
low-level codes (e.g. 1 = insufficient balance) and are reported with
origin "native".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Final, Optional

import cbor2

ERR_NOT_AUTHORIZED: Final[int] = 100
ERR_NOT_TOKEN_OWNER: Final[int] = 101
ERR_INVALID_AMOUNT: Final[int] = 103
ERR_NOT_MINTABLE: Final[int] = 104
ERR_COUNTER_UNDERFLOW: Final[int] = 105
ERR_ALREADY_INITIALIZED: Final[int] = 106

MAX_NAME_LEN: Final[int] = 32
MAX_SYMBOL_LEN: Final[int] = 10
MAX_URI_LEN: Final[int] = 256
MAX_MEMO_LEN: Final[int] = 34

# ABI argument types built from the limits above.
NAME_TYPE: Final[str] = f"ascii{MAX_NAME_LEN}"
SYMBOL_TYPE: Final[str] = f"ascii{MAX_SYMBOL_LEN}"
URI_TYPE: Final[str] = f"optional<utf8{MAX_URI_LEN}>"
MEMO_TYPE: Final[str] = f"optional<buffer{MAX_MEMO_LEN}>"

META_KEY: Final[bytes] = b"tok:meta"
MINTABLE_KEY: Final[bytes] = b"tok:mintable"
COUNTER_KEY: Final[bytes] = b"tok:counter"

FLAG_ON: Final[bytes] = b"\x01"
FLAG_OFF: Final[bytes] = b"\x00"


@dataclass(frozen=True)
class TokenMetadata:
    """Immutable descriptive fields fixed at initialization."""

    name: str
    symbol: str
    decimals: int
    token_uri: Optional[str] = None

    def to_cbor(self) -> bytes:
        # None and "" must stay distinguishable, hence a map rather than raw text.
        return cbor2.dumps(
            {
                "name": self.name,
                "symbol": self.symbol,
                "decimals": self.decimals,
                "token_uri": self.token_uri,
            },
            canonical=True,
        )

    @classmethod
    def from_cbor(cls, raw: bytes) -> "TokenMetadata":
        m: Dict[str, Any] = cbor2.loads(raw)
        return cls(
            name=m["name"],
            symbol=m["symbol"],
            decimals=int(m["decimals"]),
            token_uri=m.get("token_uri"),
        )


def encode_flag(flag: bool) -> bytes:
    return FLAG_ON if flag else FLAG_OFF


def decode_flag(raw: Optional[bytes]) -> bool:
    return raw == FLAG_ON


__all__ = [
    # errors
    "ERR_NOT_AUTHORIZED",
    "ERR_NOT_TOKEN_OWNER",
    "ERR_INVALID_AMOUNT",
    "ERR_NOT_MINTABLE",
    "ERR_COUNTER_UNDERFLOW",
    "ERR_ALREADY_INITIALIZED",
    # limits
    "MAX_NAME_LEN",
    "MAX_SYMBOL_LEN",
    "MAX_URI_LEN",
    "MAX_MEMO_LEN",
    "NAME_TYPE",
    "SYMBOL_TYPE",
    "URI_TYPE",
    "MEMO_TYPE",
    # storage
    "META_KEY",
    "MINTABLE_KEY",
    "COUNTER_KEY",
    "TokenMetadata",
    "encode_flag",
    "decode_flag",
]
