# -*- coding: utf-8 -*-
"""
Checked unsigned 128-bit arithmetic.

Overflow is a runtime fault, not an application error code: the call aborts
with `VmError(code="u128_overflow")` and the engine discards its journal.
Underflow is the same fault; contracts that want a *named* error for going
below zero (e.g. the counter) check before subtracting.
"""

from __future__ import annotations

from mint_vm.config import U128_MAX
from mint_vm.errors import VmError


def require_u128(x: int) -> int:
    if not isinstance(x, int) or isinstance(x, bool):
        raise VmError("u128 operand must be int", code="u128_type",
                      context={"py_type": type(x).__name__})
    if x < 0 or x > U128_MAX:
        raise VmError("u128 out of range", code="u128_overflow", context={"value": x})
    return x


def u128_add(a: int, b: int) -> int:
    """a + b, faulting past 2**128 - 1."""
    s = require_u128(a) + require_u128(b)
    if s > U128_MAX:
        raise VmError("u128 addition overflow", code="u128_overflow",
                      context={"a": a, "b": b})
    return s


def u128_sub(a: int, b: int) -> int:
    """a - b, faulting below zero."""
    if require_u128(b) > require_u128(a):
        raise VmError("u128 subtraction underflow", code="u128_overflow",
                      context={"a": a, "b": b})
    return a - b


__all__ = ["U128_MAX", "require_u128", "u128_add", "u128_sub"]
