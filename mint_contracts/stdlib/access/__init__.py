# -*- coding: utf-8 -*-
"""
mint_contracts.stdlib.access
============================

Single-owner access control for the bundled contracts.

Storage layout (by convention)
------------------------------
- Owner: key `b"access:owner"` -> owner principal bytes; absent until `init`.

The owner is written exactly once, by the contract's initializer, and never
changes afterwards. Helpers take the error code to revert with so each
contract keeps its own numbering (ledger 100, registry 201).
"""

from __future__ import annotations

from .ownable import OWNER_KEY, get_owner, init_owner, is_owner, require_owner

__all__ = ["OWNER_KEY", "get_owner", "init_owner", "is_owner", "require_owner"]
