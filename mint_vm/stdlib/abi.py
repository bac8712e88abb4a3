from __future__ import annotations

from typing import NoReturn

from mint_vm.errors import ORIGIN_CONTRACT, Revert
from mint_vm.runtime.context import current_frame


def revert(code: int) -> NoReturn:
    """Abort the call with application error `code`; nothing it wrote survives."""
    raise Revert(code, origin=ORIGIN_CONTRACT)


def require(condition: bool, code: int) -> None:
    """
    Assertion helper for contracts; the first failing check decides the code.

        abi.require(amount > 0, ERR_INVALID_AMOUNT)
    """
    if not condition:
        revert(code)


def caller() -> bytes:
    """The principal invoking the current call (tx-sender)."""
    return current_frame().caller


def contract_address() -> bytes:
    return current_frame().address


def block_height() -> int:
    return current_frame().block.height


def chain_id() -> int:
    return current_frame().block.chain_id


def is_read_only() -> bool:
    return current_frame().read_only


__all__ = [
    "revert",
    "require",
    "caller",
    "contract_address",
    "block_height",
    "chain_id",
    "is_read_only",
]
