from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from mint_vm.config import load_config
from mint_vm.errors import InvalidAccess

from .context import current_frame
from .error import VmError

# Basic bounds (kept generous; tests only check that we *validate*).
MAX_EVENT_NAME_BYTES = 64
MAX_KEY_LEN = 64
MAX_BYTES_LEN = 4096
MAX_INT_BITS = 128  # uint domain

# Keys must be identifier-like: letters/underscore, then letters/digits/underscore.
_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

ArgValue = Any  # constrained at runtime: bytes | str | int | bool | None


@dataclass
class Event:
    """In-VM representation of an emitted event."""

    name: bytes
    args: Dict[str, ArgValue]
    address: bytes = field(default=b"")


@dataclass
class CanonicalEvent:
    """
    Canonical event representation for receipts:

        address: "0x" + hex-encoded emitting contract address
        name: "0x" + hex-encoded event name bytes
        args: sequence of {"k", "t", "v"} dicts
              t="b" => bytes encoded as 0x-prefixed hex
              t="s" => text (ascii/utf8 metadata)
              t="i" => integer
              t="z" => boolean
              t="n" => none (optional argument left empty)
    """

    address: str
    name: str
    args: Sequence[Mapping[str, Any]]


class EventSink:
    """Per-call staging buffer; the engine publishes it only on success."""

    def __init__(self, max_events: Optional[int] = None) -> None:
        self._events: List[Event] = []
        self._max_events = max_events if max_events is not None else load_config().max_logs_per_call

    # --- Validation helpers -------------------------------------------------

    def _check_name(self, name: Any) -> bytes:
        if not isinstance(name, (bytes, bytearray)):
            raise VmError(
                "event name must be bytes",
                code="event_invalid",
                context={"where": "name_type"},
            )
        b = bytes(name)
        if len(b) == 0:
            raise VmError(
                "event name must be non-empty",
                code="event_invalid",
                context={"where": "name_empty"},
            )
        if len(b) > MAX_EVENT_NAME_BYTES:
            raise VmError(
                "event name too long",
                code="event_invalid",
                context={"where": "name_length", "len": len(b)},
            )
        return b

    def _check_key(self, key: Any) -> str:
        if not isinstance(key, str):
            raise VmError(
                "event key must be str",
                code="event_invalid",
                context={"where": "key_type"},
            )
        if len(key) == 0 or len(key) > MAX_KEY_LEN:
            raise VmError(
                "event key length out of range",
                code="event_invalid",
                context={"where": "key_length", "len": len(key)},
            )
        if not _KEY_RE.match(key):
            raise VmError(
                "event key has invalid characters",
                code="event_invalid",
                context={"where": "key_grammar", "key": key},
            )
        return key

    def _check_value(self, value: Any) -> ArgValue:
        if value is None:
            return None

        if isinstance(value, (bytes, bytearray)):
            b = bytes(value)
            if len(b) > MAX_BYTES_LEN:
                raise VmError(
                    "event bytes arg too long",
                    code="event_invalid",
                    context={"where": "value_bytes_length", "len": len(b)},
                )
            return b

        if isinstance(value, str):
            if len(value.encode("utf-8")) > MAX_BYTES_LEN:
                raise VmError(
                    "event text arg too long",
                    code="event_invalid",
                    context={"where": "value_text_length", "len": len(value)},
                )
            return value

        if isinstance(value, bool):
            # bool is a subclass of int, so check it before int.
            return value

        if isinstance(value, int):
            if value < 0 or value.bit_length() > MAX_INT_BITS:
                raise VmError(
                    "event int arg out of range",
                    code="event_invalid",
                    context={"where": "value_int_bits", "bits": value.bit_length()},
                )
            return int(value)

        raise VmError(
            "unsupported event arg type",
            code="event_invalid",
            context={"where": "value_type", "py_type": type(value).__name__},
        )

    # --- Core sink operations -----------------------------------------------

    def emit(self, name: bytes, args: Mapping[Any, Any], *, address: bytes = b"") -> Event:
        bname = self._check_name(name)

        if not isinstance(args, Mapping):
            raise VmError(
                "event args must be a mapping",
                code="event_invalid",
                context={"where": "args_type"},
            )
        if len(self._events) >= self._max_events:
            raise VmError(
                "too many events in one call",
                code="event_limit",
                context={"max": self._max_events},
            )

        checked_args: Dict[str, ArgValue] = {}
        for raw_k, raw_v in args.items():
            checked_args[self._check_key(raw_k)] = self._check_value(raw_v)

        ev = Event(bname, checked_args, bytes(address))
        self._events.append(ev)
        return ev

    def clear(self) -> None:
        self._events.clear()

    def iter_events(self) -> Iterable[Event]:
        # Expose a stable snapshot
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)


# --- Contract-facing API ----------------------------------------------------


def emit(name: bytes, args: Mapping[Any, Any]) -> None:
    """Stage an event from the executing contract into the call's sink."""
    frame = current_frame()
    if frame.read_only and frame.config.strict_mode:
        raise InvalidAccess(
            "event emitted from a read-only call",
            op="emit",
            address=frame.address.hex(),
        )
    frame.sink.emit(name, args, address=frame.address)


def events_for_receipt(logs: Iterable[Event]) -> List[CanonicalEvent]:
    """
    Convert events into canonical receipt events (hex/typed form for indexers).
    """
    out: List[CanonicalEvent] = []
    for ev in logs:
        enc_args: List[Dict[str, Any]] = []
        for k, v in ev.args.items():
            if v is None:
                enc_args.append({"k": k, "t": "n", "v": None})
            elif isinstance(v, (bytes, bytearray)):
                enc_args.append({"k": k, "t": "b", "v": "0x" + bytes(v).hex()})
            elif isinstance(v, str):
                enc_args.append({"k": k, "t": "s", "v": v})
            elif isinstance(v, bool):
                enc_args.append({"k": k, "t": "z", "v": v})
            elif isinstance(v, int):
                enc_args.append({"k": k, "t": "i", "v": int(v)})
            else:
                raise VmError(
                    "unsupported event arg type in receipt",
                    code="event_invalid",
                    context={
                        "where": "receipt_value_type",
                        "py_type": type(v).__name__,
                    },
                )

        out.append(
            CanonicalEvent(
                address="0x" + ev.address.hex(),
                name="0x" + ev.name.hex(),
                args=tuple(enc_args),
            )
        )
    return out


__all__ = [
    "Event",
    "CanonicalEvent",
    "EventSink",
    "emit",
    "events_for_receipt",
    "MAX_EVENT_NAME_BYTES",
    "MAX_KEY_LEN",
    "MAX_BYTES_LEN",
    "MAX_INT_BITS",
]
