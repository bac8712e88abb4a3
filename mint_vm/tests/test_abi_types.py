# -*- coding: utf-8 -*-
"""ABI type specs and argument coercion."""
from __future__ import annotations

import pytest

from mint_vm.abi.types import (ABITypeError, OptionalType, TextType,
                               ValidationError, coerce_principal, coerce_uint,
                               describe, parse_type, validate_args)
from mint_vm.config import U128_MAX


@pytest.mark.parametrize(
    "spec,name",
    [
        ("uint", "uint"),
        ("uint64", "uint64"),
        ("bool", "bool"),
        ("principal", "principal"),
        ("ascii32", "ascii32"),
        ("utf8256", "utf8256"),
        ("optional<buffer34>", "optional<buffer34>"),
    ],
)
def test_parse_type_names(spec, name):
    assert parse_type(spec).name == name


@pytest.mark.parametrize("spec", ["", "float", "uint7", "ascii0", "optional<nope>"])
def test_parse_type_rejects_unknown_specs(spec):
    with pytest.raises(ABITypeError):
        parse_type(spec)


def test_uint_range_is_u128():
    assert coerce_uint(U128_MAX) == U128_MAX
    with pytest.raises(ValidationError):
        coerce_uint(U128_MAX + 1)
    with pytest.raises(ValidationError):
        coerce_uint(-1)
    with pytest.raises(ValidationError):
        coerce_uint(True)


def test_text_limits_and_charset():
    ascii10 = parse_type("ascii10")
    assert ascii10.validate("MTK") == "MTK"
    assert ascii10.validate("") == ""
    with pytest.raises(ValidationError):
        ascii10.validate("X" * 11)
    with pytest.raises(ValidationError):
        ascii10.validate("Ünïcode")
    # utf8 counts characters, not bytes
    assert TextType(max_len=3, ascii_only=False).validate("日本語") == "日本語"


def test_text_rejects_lone_surrogates():
    utf8 = parse_type("utf8256")
    with pytest.raises(ValidationError):
        utf8.validate("\ud800")
    with pytest.raises(ValidationError):
        parse_type("optional<utf8256>").validate("ok\udcff")
    with pytest.raises(ValidationError):
        parse_type("ascii32").validate("\ud800")


def test_optional_accepts_none():
    opt = parse_type("optional<buffer34>")
    assert isinstance(opt, OptionalType)
    assert opt.validate(None) is None
    assert opt.validate(b"m" * 34) == b"m" * 34
    with pytest.raises(ValidationError):
        opt.validate(b"m" * 35)


def test_principal_accepts_bytes_and_hex():
    assert coerce_principal("0x" + "ab" * 32) == b"\xab" * 32
    with pytest.raises(ValidationError):
        coerce_principal(b"")
    with pytest.raises(ValidationError):
        coerce_principal(b"x" * 65)


def test_validate_args_names_the_failing_argument():
    with pytest.raises(ValidationError) as ei:
        validate_args("mint", ["uint", "principal"], [5, 123])
    assert "mint: arg 1 (principal)" in str(ei.value)


def test_describe_lists_signatures():
    abi = {
        "get_name": {"args": [], "returns": "ascii32", "read_only": True},
        "mint": {"args": ["uint", "principal"], "returns": "uint"},
    }
    assert describe(abi) == [
        "get_name() -> ascii32 [read-only]",
        "mint(uint, principal) -> uint",
    ]
