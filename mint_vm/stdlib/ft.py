"""Native fungible token of the executing contract."""

from __future__ import annotations

from mint_vm.runtime.ft_api import burn, get_balance, get_supply, mint, transfer

__all__ = ["transfer", "mint", "burn", "get_balance", "get_supply"]
