"""
mint_vm.runtime.status — canonical call status enum.

TxStatus models the *logical* outcome of executing a call:
  - SUCCESS : Execution completed; its writes and events were committed
  - REVERT  : A contract or a native primitive failed with a numeric code

str(TxStatus.SUCCESS) is "success", the form used in logs and `to_dict()`.
"""

from __future__ import annotations

from enum import Enum


class TxStatus(str, Enum):
    SUCCESS = "success"
    REVERT = "revert"

    @property
    def is_success(self) -> bool:
        return self is TxStatus.SUCCESS

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


__all__ = ["TxStatus"]
