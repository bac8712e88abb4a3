from __future__ import annotations

from typing import Any, Dict, Mapping

from mint_vm.runtime import events_api as _rt

# Re-export types so tests and contracts can import them from stdlib.events
Event = _rt.Event
CanonicalEvent = _rt.CanonicalEvent
events_for_receipt = _rt.events_for_receipt

__all__ = [
    "Event",
    "CanonicalEvent",
    "emit",
    "events_for_receipt",
]


def _to_str_key(k: Any) -> str:
    """
    stdlib-facing keys are usually bytes; runtime-facing keys must be str.
    We accept:
      * bytes / bytearray -> ASCII decode
      * str               -> pass through
    """
    if isinstance(k, str):
        return k
    if isinstance(k, (bytes, bytearray)):
        try:
            return k.decode("ascii")
        except UnicodeDecodeError:
            return k.hex()
    return str(k)


def emit(name: bytes, args: Mapping[Any, Any]) -> None:
    """
    Contract-facing emit:

        emit(b"counter.Changed", {b"value": 1})

    The runtime validates names and values; keys are normalized to str here.
    """
    if not isinstance(name, (bytes, bytearray)):
        raise TypeError(f"event name must be bytes, got {type(name).__name__}")

    converted: Dict[str, Any] = {}
    for raw_k, v in args.items():
        converted[_to_str_key(raw_k)] = v

    _rt.emit(bytes(name), converted)
