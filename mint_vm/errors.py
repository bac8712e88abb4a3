"""
mint_vm.errors — failure types for the StackSmint host.

The host communicates failures via *typed exceptions*. These exceptions are
pure-Python, dependency-free and deliberately small, and this module imports
nothing from the rest of the package so every layer can depend on it.

Hierarchy
---------
VmError             : Host fault (unknown function, oversize value, bad backend, ...)

ExecError (base)
 ├─ Revert          : Contract- or primitive-triggered failure carrying a uint code
 └─ InvalidAccess   : Illegal state access (write from a read-only frame, reserved key)

Notes
-----
* `Revert` is a *semantic* outcome of a call, not a host bug. The engine turns
  it into a `CallResult`. Its `err` is the numeric code surfaced to the
  caller; `origin` tells application codes (raised by a contract through
  `abi.revert`) apart from the low-level codes raised by native primitives
  such as the fungible-token ledger.
* `VmError` and `InvalidAccess` propagate out of the engine after the call's
  journal has been discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

ORIGIN_CONTRACT = "contract"
ORIGIN_NATIVE = "native"


@dataclass
class VmError(Exception):
    """
    Structured host fault raised by the StackSmint runtime.

    Supported call patterns:

        VmError("simple message")

        VmError("message", code="some_code", context={...})

        # 2-positional form:
        VmError("SOME_CODE", "message")

    Attributes:
        code: short machine-readable code string
        message: human-readable message
        context: optional extra fields for debugging
    """

    code: str
    message: str
    context: Dict[str, Any]

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        code: str = "vm_error"
        context: Dict[str, Any] = {}

        if "code" in kwargs:
            code = str(kwargs.pop("code"))

        if "context" in kwargs:
            ctx = kwargs.pop("context")
            if ctx is not None:
                context = dict(ctx) if isinstance(ctx, Mapping) else dict(ctx)

        if len(args) == 0:
            message = ""
        elif len(args) == 1:
            message = str(args[0])
        else:
            code = str(args[0])
            message = str(args[1])

        super().__init__(message)

        object.__setattr__(self, "code", code)
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "context", context)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" if self.message else self.code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }


@dataclass
class ExecError(Exception):
    """
    Base execution error.

    Attributes:
        message: Human-readable explanation.
        code:    Stable machine code string (e.g., 'REVERT').
        data:    Optional structured details (kept JSON-serializable).
    """
    message: str = "execution error"
    code: str = "EXEC_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.data:
            return f"{self.code}: {self.message} ({self.data})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict for receipts/logs."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class Revert(ExecError):
    """
    Call-level failure with a numeric error code.

    Usage:
        raise Revert(103)                          # application code
        raise Revert(1, origin=ORIGIN_NATIVE)      # primitive code
    """
    def __init__(
        self,
        err: int,
        *,
        origin: str = ORIGIN_CONTRACT,
        data: Optional[Dict[str, Any]] = None,
    ):
        if not isinstance(err, int) or isinstance(err, bool) or err < 0:
            raise TypeError("revert code must be a non-negative int")
        d: Dict[str, Any] = {"err": err, "origin": origin}
        if data:
            d.update(data)
        super().__init__(message=f"reverted with u{err}", code="REVERT", data=d)
        self.err = err
        self.origin = origin

    @property
    def is_native(self) -> bool:
        return self.origin == ORIGIN_NATIVE


class InvalidAccess(ExecError):
    """
    Illegal access or forbidden operation under the host rules.

    Examples:
      - Storage write or event emission from a read-only frame
      - Contract-facing access to a host-reserved storage key
    """
    def __init__(
        self,
        message: str = "invalid access",
        *,
        op: Optional[str] = None,
        address: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        d: Dict[str, Any] = {}
        if data:
            d.update(data)
        if op is not None:
            d.setdefault("op", op)
        if address is not None:
            d.setdefault("address", address)
        super().__init__(message=message, code="INVALID_ACCESS", data=d or None)


def error_to_receipt_fields(err: ExecError) -> Dict[str, Any]:
    """
    Map an ExecError to canonical receipt-like fields.

    Returns:
        {
          "status": "REVERT" | "ERROR",
          "error":  {code, message, data?}
        }
    """
    status = "REVERT" if isinstance(err, Revert) else "ERROR"
    return {"status": status, "error": err.to_dict()}


__all__ = [
    "ORIGIN_CONTRACT",
    "ORIGIN_NATIVE",
    "VmError",
    "ExecError",
    "Revert",
    "InvalidAccess",
    "error_to_receipt_fields",
]
