"""Contract storage, namespaced by the executing contract's address."""

from __future__ import annotations

from mint_vm.runtime.storage_api import (delete, exists, get, get_int, set,
                                         set_int)

__all__ = ["get", "set", "delete", "exists", "get_int", "set_int"]
