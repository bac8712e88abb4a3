"""
mint_vm.runtime.context — BlockEnv and the active call frame.

`BlockEnv` is the deterministic block metadata handed to contracts. It holds
only validated non-negative ints.

The engine installs a `Frame` for the duration of every call. The frame binds
the contract-facing stdlib (storage/events/ft/treasury/abi) to:

- the executing contract's address (storage namespace),
- the invoking caller (`tx-sender` in contract terms),
- the journal layer the call writes into,
- the event sink staging the call's events,
- the read-only flag for accessor calls.

The frame lives in a `contextvars.ContextVar`, so concurrent threads that use
separate engines never observe each other's frames.

No wall-clock time is exposed; `height` only moves when the host advances it.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Iterator, Optional, Union

from mint_vm.config import VMConfig, load_config

from .error import VmError

if TYPE_CHECKING:  # pragma: no cover
    from .events_api import EventSink
    from .journal import Journal


# ----------------------------- helpers ----------------------------- #

class ContextError(Exception):
    """Validation failure for BlockEnv fields."""


def to_hex(b: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as 0x-prefixed lowercase hex."""
    return "0x" + bytes(b).hex()


def _require_non_negative_int(name: str, v: Any) -> int:
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContextError(f"{name} must be int, got {type(v).__name__}")
    if v < 0:
        raise ContextError(f"{name} must be non-negative, got {v}")
    return v


# ----------------------------- models ------------------------------ #

@dataclass(frozen=True)
class BlockEnv:
    """
    Deterministic per-block environment passed to contracts.

    Fields
    ------
    height:     Block height. Registry entries record it as `registered_at`.
    chain_id:   Integer chain identifier (domain separation).
    """
    height: int
    chain_id: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "height", _require_non_negative_int("height", self.height))
        object.__setattr__(self, "chain_id", _require_non_negative_int("chain_id", self.chain_id))

    def advanced(self, blocks: int = 1) -> "BlockEnv":
        """Return a copy `blocks` heights further on."""
        blocks = _require_non_negative_int("blocks", blocks)
        return replace(self, height=self.height + blocks)


# ------------------------------ frame ------------------------------ #

@dataclass
class Frame:
    """Everything a single contract call is bound to while it runs."""

    address: bytes
    caller: bytes
    journal: "Journal"
    sink: "EventSink"
    block: BlockEnv
    read_only: bool = False
    config: VMConfig = field(default_factory=load_config)

_FRAME: contextvars.ContextVar[Optional[Frame]] = contextvars.ContextVar(
    "mint_vm_frame", default=None
)


def current_frame() -> Frame:
    """Return the active frame or raise if no call is executing."""
    frame = _FRAME.get()
    if frame is None:
        raise VmError(
            "no contract call is executing",
            code="no_active_frame",
        )
    return frame


@contextmanager
def enter_frame(frame: Frame) -> Iterator[Frame]:
    """Install `frame` as the active frame for the duration of the block."""
    token = _FRAME.set(frame)
    try:
        yield frame
    finally:
        _FRAME.reset(token)


__all__ = [
    "ContextError",
    "to_hex",
    "BlockEnv",
    "Frame",
    "current_frame",
    "enter_frame",
]
