"""Native coin balances (registration charges and the like)."""

from __future__ import annotations

from mint_vm.runtime.treasury_api import balance_of, transfer

__all__ = ["balance_of", "transfer"]
