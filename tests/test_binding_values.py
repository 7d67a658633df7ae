"""
Tests for shiftconf/binding/values.py

Covers both conversion paths: environment text and decoded TOML values.
Integer widths are passed explicitly so results do not depend on the platform.
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from shiftconf.binding.fields import FieldDescriptor, FieldKind
from shiftconf.binding.values import (
    ValueKind,
    parse_env_value,
    parse_file_value,
    parse_float,
    value_kind,
)
from shiftconf.errors import (
    ConfigSchemaError,
    NumericOverflowError,
    TypeMismatchError,
    UnsupportedTypeError,
    ValueParseError,
)


def make_descriptor(kind: FieldKind, key: str = "key") -> FieldDescriptor:
    """Build a descriptor for a field of the given kind."""
    return FieldDescriptor(name=key, key=key, kind=kind, type_name=kind.value)


# ============================================================================
# Value kinds
# ============================================================================

def test_value_kind_classification():
    """Test that decoded values are classified, bool before int."""
    assert value_kind("x") is ValueKind.TEXT
    assert value_kind(True) is ValueKind.BOOLEAN
    assert value_kind(3) is ValueKind.INTEGER
    assert value_kind(3.5) is ValueKind.FLOAT
    assert value_kind(datetime(2020, 1, 1, tzinfo=timezone.utc)) is ValueKind.TIMESTAMP
    assert value_kind(["a"]) is ValueKind.LIST
    assert value_kind({"a": 1}) is ValueKind.TABLE
    assert value_kind(None) is ValueKind.OTHER


# ============================================================================
# Environment source
# ============================================================================

def test_env_text_is_verbatim():
    """Test that text passes through untouched."""
    assert parse_env_value(" spaced ", make_descriptor(FieldKind.TEXT)) == " spaced "


def test_env_bool_exact_spelling():
    """Test that only 'true' and 'false' are booleans."""
    descriptor = make_descriptor(FieldKind.BOOLEAN)

    assert parse_env_value("true", descriptor) is True
    assert parse_env_value("false", descriptor) is False
    for text in ("True", "1", "yes", "FALSE"):
        with pytest.raises(ValueParseError, match="invalid value for bool"):
            parse_env_value(text, descriptor)


def test_env_native_int_respects_width():
    """Test that native ints are bounded by the given width."""
    descriptor = make_descriptor(FieldKind.INT)

    assert parse_env_value("558", descriptor, bits=32) == 558
    with pytest.raises(NumericOverflowError):
        parse_env_value("2147483648", descriptor, bits=32)
    assert parse_env_value("2147483648", descriptor, bits=64) == 2147483648


def test_env_int64_ignores_native_width():
    """Test that Int64 fields always get the full 64-bit range."""
    descriptor = make_descriptor(FieldKind.INT64)

    assert parse_env_value("2147483648", descriptor, bits=32) == 2147483648
    with pytest.raises(ValueParseError):
        parse_env_value("12abc", descriptor)


def test_env_duration_uses_duration_grammar():
    """Test that duration fields parse '15s' instead of an integer."""
    descriptor = make_descriptor(FieldKind.DURATION)

    assert parse_env_value("15s", descriptor) == timedelta(seconds=15)
    with pytest.raises(ValueParseError):
        parse_env_value("15", descriptor)


def test_env_unsigned():
    """Test unsigned parsing and narrowing."""
    assert parse_env_value("42", make_descriptor(FieldKind.UINT), bits=32) == 42
    with pytest.raises(NumericOverflowError):
        parse_env_value("4294967296", make_descriptor(FieldKind.UINT), bits=32)
    assert parse_env_value("4294967296", make_descriptor(FieldKind.UINT64), bits=32) == 2**32
    with pytest.raises(ValueParseError):
        parse_env_value("-1", make_descriptor(FieldKind.UINT64))


def test_env_float():
    """Test float parsing, including exponents and hex floats."""
    descriptor = make_descriptor(FieldKind.FLOAT)

    assert parse_env_value("1.5", descriptor) == 1.5
    assert parse_env_value("-2e3", descriptor) == -2000.0
    assert parse_env_value("0x1p-2", descriptor) == 0.25
    assert parse_env_value("inf", descriptor) == float("inf")


@pytest.mark.parametrize("text", ["abc", "1_0", " 1.5", "1.5 "])
def test_parse_float_rejects_bad_syntax(text):
    """Test that separators, whitespace and junk are parse errors."""
    with pytest.raises(ValueParseError):
        parse_float(text)


def test_parse_float_overflow():
    """Test that a finite literal too large for a double overflows."""
    with pytest.raises(NumericOverflowError):
        parse_float("1e400")


def test_env_timestamp():
    """Test RFC 3339 parsing from the environment."""
    descriptor = make_descriptor(FieldKind.TIMESTAMP)

    got = parse_env_value("2006-01-02T15:04:05Z", descriptor)
    assert got == datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
    with pytest.raises(ValueParseError):
        parse_env_value("yesterday", descriptor)


@pytest.mark.parametrize("kind", [FieldKind.STRING_LIST, FieldKind.UNSUPPORTED])
def test_env_unsupported_kinds_are_schema_errors(kind):
    """Test that list and unknown fields cannot be read from the environment."""
    with pytest.raises(UnsupportedTypeError) as exc_info:
        parse_env_value("a,b", make_descriptor(kind))

    assert isinstance(exc_info.value, ConfigSchemaError)
    assert "unsupported field type" in str(exc_info.value)


# ============================================================================
# File source
# ============================================================================

def test_file_scalars_pass_through():
    """Test matching scalar kinds."""
    when = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)

    assert parse_file_value("s", make_descriptor(FieldKind.TEXT)) == "s"
    assert parse_file_value(False, make_descriptor(FieldKind.BOOLEAN)) is False
    assert parse_file_value(2.5, make_descriptor(FieldKind.FLOAT)) == 2.5
    assert parse_file_value(when, make_descriptor(FieldKind.TIMESTAMP)) is when


def test_file_native_int_narrowing():
    """Test that file integers are narrowed to the native width."""
    descriptor = make_descriptor(FieldKind.INT)

    assert parse_file_value(-5, descriptor, bits=32) == -5
    with pytest.raises(NumericOverflowError):
        parse_file_value(2**31, descriptor, bits=32)


def test_file_int64_direct():
    """Test that Int64 fields take any 64-bit integer regardless of width."""
    assert parse_file_value(2**40, make_descriptor(FieldKind.INT64), bits=32) == 2**40
    with pytest.raises(NumericOverflowError):
        parse_file_value(2**63, make_descriptor(FieldKind.INT64))


def test_file_duration_from_text():
    """Test that file durations are text in the shared grammar."""
    descriptor = make_descriptor(FieldKind.DURATION)

    assert parse_file_value("15s", descriptor) == parse_env_value("15s", descriptor)
    with pytest.raises(TypeMismatchError):
        parse_file_value(15, descriptor)


def test_file_unsigned_reinterprets_negative(caplog):
    """Test the known looseness: negative file ints become large unsigned values."""
    with caplog.at_level(logging.WARNING, logger="shiftconf.binding.values"):
        got = parse_file_value(-1, make_descriptor(FieldKind.UINT64, key="limit"))

    assert got == 2**64 - 1
    assert "limit" in caplog.text


def test_file_native_unsigned():
    """Test native unsigned narrowing, including a reinterpreted negative."""
    descriptor = make_descriptor(FieldKind.UINT)

    assert parse_file_value(7, descriptor, bits=32) == 7
    with pytest.raises(NumericOverflowError):
        parse_file_value(-1, descriptor, bits=32)
    assert parse_file_value(-1, descriptor, bits=64) == 2**64 - 1


def test_file_string_list_is_lossy():
    """Test that non-text elements become empty strings."""
    got = parse_file_value(["a", 1, True, "b"], make_descriptor(FieldKind.STRING_LIST))

    assert got == ["a", "", "", "b"]


@pytest.mark.parametrize(
    "kind, value, actual",
    [
        (FieldKind.INT, "5", "text"),
        (FieldKind.TEXT, 5, "integer"),
        (FieldKind.BOOLEAN, 1, "integer"),
        (FieldKind.INT, True, "boolean"),
        (FieldKind.FLOAT, 1, "integer"),
        (FieldKind.TIMESTAMP, "2006-01-02T15:04:05Z", "text"),
        (FieldKind.STRING_LIST, "a", "text"),
        (FieldKind.TEXT, {"a": 1}, "table"),
        (FieldKind.UNSUPPORTED, "x", "text"),
    ],
)
def test_file_mismatch_names_both_kinds(kind, value, actual):
    """Test that a wrong value kind is a mismatch naming both sides."""
    with pytest.raises(TypeMismatchError) as exc_info:
        parse_file_value(value, make_descriptor(kind))

    assert exc_info.value.declared == kind.value
    assert exc_info.value.actual == actual
    assert kind.value in str(exc_info.value)
