"""
mint_vm.runtime.result — CallResult container for contract calls.

`CallResult` is what the engine returns for every call that reached a
contract. It mirrors the `ok(value) | err(code)` convention:

* status : TxStatus — SUCCESS / REVERT
* value  : Any      — the function's return value (SUCCESS only)
* error  : int      — numeric failure code (REVERT only)
* origin : str      — "contract" for application codes, "native" for codes
                      raised by the fungible-token / treasury primitives
* logs   : tuple[Event, ...] — events committed by the call, in emission order

Utilities
---------
* `.ok` / `.err` conveniences, `.unwrap()` for tests and scripts.
* `.to_dict()` for JSON-friendly output (events in canonical receipt form).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from mint_vm.errors import ORIGIN_CONTRACT, ORIGIN_NATIVE, Revert

from .events_api import Event, events_for_receipt
from .status import TxStatus


def _jsonable(v: Any) -> Any:
    if isinstance(v, (bytes, bytearray)):
        return "0x" + bytes(v).hex()
    if isinstance(v, dict):
        return {str(k): _jsonable(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [_jsonable(x) for x in v]
    return v


@dataclass(frozen=True)
class CallResult:
    status: TxStatus
    value: Any = None
    error: Optional[int] = None
    origin: Optional[str] = None
    logs: Tuple[Event, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls, value: Any, logs: Tuple[Event, ...] = ()) -> "CallResult":
        return cls(status=TxStatus.SUCCESS, value=value, logs=tuple(logs))

    @classmethod
    def from_revert(cls, exc: Revert) -> "CallResult":
        return cls(status=TxStatus.REVERT, error=exc.err, origin=exc.origin)

    # ----------------------------- conveniences ------------------------------

    @property
    def is_success(self) -> bool:
        return self.status.is_success

    @property
    def ok(self) -> bool:
        return self.is_success

    @property
    def err(self) -> Optional[int]:
        return self.error

    @property
    def is_native_error(self) -> bool:
        return self.origin == ORIGIN_NATIVE

    @property
    def is_contract_error(self) -> bool:
        return self.origin == ORIGIN_CONTRACT

    def unwrap(self) -> Any:
        """Return the value, or raise the Revert this result was built from."""
        if self.is_success:
            return self.value
        raise Revert(self.error or 0, origin=self.origin or ORIGIN_CONTRACT)

    # --------------------------- (de)serialization ---------------------------

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to a JSON-friendly mapping.

        Example:
            {"status": "success", "value": 1, "logs": [...]}
            {"status": "revert", "error": 103, "origin": "contract", "logs": []}
        """
        out: Dict[str, Any] = {"status": str(self.status)}
        if self.is_success:
            out["value"] = _jsonable(self.value)
        else:
            out["error"] = self.error
            out["origin"] = self.origin
        out["logs"] = [
            {"address": ev.address, "name": ev.name, "args": list(ev.args)}
            for ev in events_for_receipt(self.logs)
        ]
        return out

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        if self.is_success:
            return f"CallResult(ok {self.value!r}, logs={len(self.logs)})"
        return f"CallResult(err u{self.error} [{self.origin}])"


__all__ = ["CallResult", "TxStatus"]
