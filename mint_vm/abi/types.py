"""
ABI type definitions and validation for the StackSmint host.

The surface mirrors the value types contracts exchange with callers:
  - uint / uintN (unsigned; canonical default = 128 bits)
  - bool
  - principal (raw address bytes, 1..64 bytes; 0x-hex accepted)
  - bufferN (opaque byte strings of at most N bytes)
  - bytesN (opaque byte strings of exactly N bytes)
  - asciiN (printable ASCII text of at most N characters)
  - utf8N (UTF-8 text of at most N characters)
  - optional<T> (None or a valid T)

Utilities here *only* coerce/validate Python values. The engine runs every
argument of a call through its declared type before the contract is entered,
so malformed input never reaches contract code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

__all__ = [
    "ABITypeError",
    "ValidationError",
    "MAX_PRINCIPAL_LEN",
    "normalize_hex",
    "coerce_bool",
    "coerce_uint",
    "coerce_bytes",
    "coerce_principal",
    "coerce_text",
    "UIntType",
    "BoolType",
    "PrincipalType",
    "BytesType",
    "TextType",
    "OptionalType",
    "parse_type",
    "validate_args",
    "describe",
]

MAX_PRINCIPAL_LEN = 64

# ──────────────────────────────────────────────────────────────────────────────
# Errors
# ──────────────────────────────────────────────────────────────────────────────


class ABITypeError(TypeError):
    """Raised when an ABI type spec is malformed or unsupported."""


class ValidationError(ValueError):
    """Raised when a Python value does not conform to an ABI type."""


# ──────────────────────────────────────────────────────────────────────────────
# Scalar coercion helpers
# ──────────────────────────────────────────────────────────────────────────────


def normalize_hex(s: str) -> bytes:
    """Convert a 0x-prefixed hex string to bytes, accepting even-length only."""
    if not isinstance(s, str) or not s.startswith("0x"):
        raise ValidationError("expected 0x-prefixed hex string")
    hex_part = s[2:]
    if len(hex_part) % 2 != 0:
        raise ValidationError("hex string must have an even number of digits")
    try:
        return bytes.fromhex(hex_part)
    except ValueError as e:
        raise ValidationError(f"invalid hex: {e}") from e


def coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ValidationError("bool must be True/False")


def coerce_uint(value: Any, *, bits: int = 128) -> int:
    # bool is an int subclass; a flag is never an amount.
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError("uint must be a Python int")
    if bits <= 0 or bits > 256:
        raise ABITypeError("bits must be in 1..256")
    max_v = (1 << bits) - 1
    if value < 0 or value > max_v:
        raise ValidationError(f"uint{bits} out of range [0, {max_v}]")
    return int(value)


def coerce_bytes(
    value: Any,
    *,
    fixed_len: Optional[int] = None,
    max_len: Optional[int] = None,
) -> bytes:
    """Accept bytes or 0x-hex; enforce optional fixed or max length (in bytes)."""
    if isinstance(value, bytes):
        b = value
    elif isinstance(value, bytearray):
        b = bytes(value)
    elif isinstance(value, str) and value.startswith("0x"):
        b = normalize_hex(value)
    else:
        raise ValidationError("bytes must be bytes, bytearray, or 0x-hex string")
    if fixed_len is not None and len(b) != fixed_len:
        raise ValidationError(f"bytes length must be exactly {fixed_len}, got {len(b)}")
    if max_len is not None and len(b) > max_len:
        raise ValidationError(f"bytes too long (max {max_len}, got {len(b)})")
    return b


def coerce_principal(value: Any) -> bytes:
    """Principals are raw address bytes (1..MAX_PRINCIPAL_LEN)."""
    try:
        b = coerce_bytes(value, max_len=MAX_PRINCIPAL_LEN)
    except ValidationError as e:
        raise ValidationError(f"invalid principal: {e}") from e
    if len(b) == 0:
        raise ValidationError("principal must be non-empty")
    return b


def coerce_text(value: Any, *, max_len: int, ascii_only: bool) -> str:
    if not isinstance(value, str):
        raise ValidationError("text must be str")
    if len(value) > max_len:
        raise ValidationError(f"text too long (max {max_len}, got {len(value)})")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError("text must be valid UTF-8") from e
    if ascii_only and not all(0x20 <= ord(c) <= 0x7E for c in value):
        raise ValidationError("ascii text must be printable ASCII")
    return value


# ──────────────────────────────────────────────────────────────────────────────
# Type specs
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class UIntType:
    bits: int = 128

    def validate(self, value: Any) -> int:
        return coerce_uint(value, bits=self.bits)

    @property
    def name(self) -> str:
        return "uint" if self.bits == 128 else f"uint{self.bits}"


@dataclass(frozen=True)
class BoolType:
    def validate(self, value: Any) -> bool:
        return coerce_bool(value)

    @property
    def name(self) -> str:
        return "bool"


@dataclass(frozen=True)
class PrincipalType:
    def validate(self, value: Any) -> bytes:
        return coerce_principal(value)

    @property
    def name(self) -> str:
        return "principal"


@dataclass(frozen=True)
class BytesType:
    fixed_len: Optional[int] = None
    max_len: Optional[int] = None  # enforced when fixed_len is None

    def __post_init__(self) -> None:
        if self.fixed_len is not None and self.fixed_len < 0:
            raise ABITypeError("fixed_len must be >= 0")
        if self.fixed_len is None and self.max_len is not None and self.max_len <= 0:
            raise ABITypeError("max_len must be > 0")

    def validate(self, value: Any) -> bytes:
        return coerce_bytes(value, fixed_len=self.fixed_len, max_len=self.max_len)

    @property
    def name(self) -> str:
        if self.fixed_len is not None:
            return f"bytes{self.fixed_len}"
        if self.max_len is not None:
            return f"buffer{self.max_len}"
        return "bytes"


@dataclass(frozen=True)
class TextType:
    max_len: int
    ascii_only: bool = True

    def __post_init__(self) -> None:
        if self.max_len <= 0:
            raise ABITypeError("text max length must be > 0")

    def validate(self, value: Any) -> str:
        return coerce_text(value, max_len=self.max_len, ascii_only=self.ascii_only)

    @property
    def name(self) -> str:
        return f"{'ascii' if self.ascii_only else 'utf8'}{self.max_len}"


@dataclass(frozen=True)
class OptionalType:
    inner: Any

    def validate(self, value: Any) -> Any:
        if value is None:
            return None
        return self.inner.validate(value)

    @property
    def name(self) -> str:
        return f"optional<{self.inner.name}>"


# ──────────────────────────────────────────────────────────────────────────────
# Parser for textual type specs (e.g., "uint", "principal", "ascii32")
# ──────────────────────────────────────────────────────────────────────────────


def _length_suffix(s: str, prefix: str, *, lo: int = 1, hi: int = 1 << 20) -> int:
    try:
        n = int(s[len(prefix):])
    except ValueError as e:
        raise ABITypeError(f"invalid {prefix}N length") from e
    if n < lo or n > hi:
        raise ABITypeError(f"{prefix}N length must be in {lo}..{hi}")
    return n


def parse_type(spec: str) -> Any:
    """
    Parse a textual type spec into a type object with a .validate() method.
    Supported forms:
      - "uint" (u128), "uintN" where N is a multiple of 8 in 8..256
      - "bool"
      - "principal"
      - "bufferN" (at most N bytes), "bytesN" (exactly N bytes), "bytes"
      - "asciiN", "utf8N" (at most N characters)
      - "optional<T>"
    """
    if not isinstance(spec, str) or not spec:
        raise ABITypeError("type spec must be a non-empty string")

    s = spec.strip().lower()

    if s.startswith("optional<") and s.endswith(">"):
        return OptionalType(parse_type(s[len("optional<"):-1]))

    if s == "bool":
        return BoolType()

    if s == "principal":
        return PrincipalType()

    if s == "uint":
        return UIntType(bits=128)

    if s.startswith("uint"):
        bits = _length_suffix(s, "uint", lo=8, hi=256)
        if bits % 8:
            raise ABITypeError("bit width must be a multiple of 8 in 8..256")
        return UIntType(bits=bits)

    if s.startswith("buffer"):
        return BytesType(max_len=_length_suffix(s, "buffer"))

    if s == "bytes":
        return BytesType(fixed_len=None, max_len=None)

    if s.startswith("bytes"):
        return BytesType(fixed_len=_length_suffix(s, "bytes", hi=65535))

    if s.startswith("ascii"):
        return TextType(max_len=_length_suffix(s, "ascii"), ascii_only=True)

    if s.startswith("utf8"):
        return TextType(max_len=_length_suffix(s, "utf8"), ascii_only=False)

    raise ABITypeError(f"unsupported type spec: {spec!r}")


def validate_args(
    function: str, specs: Sequence[str], args: Sequence[Any]
) -> List[Any]:
    """
    Validate positional `args` against `specs`, returning the coerced values.

    Errors name the function and argument index so callers can see which
    input was rejected.
    """
    if len(args) != len(specs):
        raise ValidationError(
            f"{function}: expected {len(specs)} argument(s), got {len(args)}"
        )
    out: List[Any] = []
    for i, (spec, value) in enumerate(zip(specs, args)):
        try:
            out.append(parse_type(spec).validate(value))
        except ValidationError as e:
            raise ValidationError(f"{function}: arg {i} ({spec}): {e}") from e
    return out


def describe(abi: Mapping[str, Mapping[str, Any]]) -> List[str]:
    """Human-readable signatures, e.g. 'mint(uint, principal) -> uint'."""
    lines = []
    for fn in sorted(abi):
        entry = abi[fn]
        args = ", ".join(parse_type(a).name for a in entry.get("args", ()))
        ret = entry.get("returns")
        mode = " [read-only]" if entry.get("read_only") else ""
        lines.append(f"{fn}({args})" + (f" -> {ret}" if ret else "") + mode)
    return lines
