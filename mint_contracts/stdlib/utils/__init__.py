# -*- coding: utf-8 -*-
"""
mint_contracts.stdlib.utils
===========================

Small shared utilities. `events` holds the canonical event names and the
emit helpers used by the bundled contracts.
"""

from __future__ import annotations

from . import events

__all__ = ["events"]
