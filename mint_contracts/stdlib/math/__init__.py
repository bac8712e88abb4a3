# -*- coding: utf-8 -*-
"""
mint_contracts.stdlib.math
==========================

Integer-only arithmetic for contracts. Values live in the unsigned 128-bit
domain the VM stores; nothing here ever uses floats or wraps silently.

    from mint_contracts.stdlib.math import u128_add, u128_sub

    supply = u128_add(supply, amount)
"""

from __future__ import annotations

from .safe_uint import U128_MAX, require_u128, u128_add, u128_sub

__all__ = ["U128_MAX", "require_u128", "u128_add", "u128_sub"]
