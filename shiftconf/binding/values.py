"""
Typed value conversion for both configuration sources.

**Conceptual**: A field can receive its value from two very different
places, so there are two conversion paths:

  - ``parse_env_value``: the environment only ever provides text. The text
    is parsed according to the field's declared kind (``"true"`` for a
    bool, ``"8080"`` for an int, ``"15s"`` for a duration, ...).
  - ``parse_file_value``: the TOML decoder has already produced typed
    Python values (str, bool, int, float, datetime, list). The value's
    *kind* must agree with the field's declared kind; the only text that is
    parsed here is a duration (TOML has no duration type).

Both paths share the integer width checks in ``shiftconf.utils.bounds`` and
the timestamp/duration grammar in ``shiftconf.utils.time``.

**Known looseness**: a file integer bound to an unsigned field is
reinterpreted as unsigned 64-bit (two's complement) instead of being
rejected when negative, so ``-1`` becomes ``2**64 - 1`` (and then overflows
a 32-bit native ``Uint``). The environment path rejects ``"-1"`` outright.
The reinterpretation is logged as a warning.
"""

import logging
import math
import re
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

from shiftconf.binding.fields import FieldDescriptor, FieldKind
from shiftconf.errors import (
    NumericOverflowError,
    TypeMismatchError,
    UnsupportedTypeError,
    ValueParseError,
)
from shiftconf.utils.bounds import (
    NATIVE_INT_BITS,
    check_int64,
    int64_to_int,
    parse_int,
    parse_uint,
    to_unsigned64,
    uint64_to_uint,
)
from shiftconf.utils.time import parse_duration, parse_timestamp

logger = logging.getLogger(__name__)

_HEX_FLOAT = re.compile(r"[+-]?0[xX][0-9a-fA-F]*\.?[0-9a-fA-F]*[pP][+-]?[0-9]+")


class ValueKind(Enum):
    """Kind of a value produced by the file decoder."""

    TEXT = "text"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TIMESTAMP = "timestamp"
    LIST = "list"
    TABLE = "table"
    OTHER = "other"


def value_kind(value: Any) -> ValueKind:
    """Classify a decoded value. ``bool`` is checked before ``int``."""
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, datetime):
        return ValueKind.TIMESTAMP
    if isinstance(value, list):
        return ValueKind.LIST
    if isinstance(value, dict):
        return ValueKind.TABLE
    return ValueKind.OTHER


def value_kind_name(value: Any) -> str:
    """Name of a decoded value's kind for error messages."""
    kind = value_kind(value)
    if kind is ValueKind.OTHER:
        return type(value).__name__
    return kind.value


# ============================================================================
# Environment source
# ============================================================================

def parse_bool(text: str) -> bool:
    """Accept exactly ``"true"`` or ``"false"``."""
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueParseError(f'invalid value for bool, must be "true" or "false": {text}')


def parse_float(text: str) -> float:
    """
    Parse a 64-bit float.

    Accepts decimal and exponent forms, ``inf``/``nan`` spellings and hex
    floats (``0x1p-2``). Whitespace and digit separators are rejected, and a
    finite literal too large for a double is an overflow error rather than
    silently becoming infinity.
    """
    if not text or text != text.strip() or "_" in text:
        raise ValueParseError(f"invalid syntax for float: {text!r}")

    try:
        value = float.fromhex(text) if _HEX_FLOAT.fullmatch(text) else float(text)
    except OverflowError as e:
        raise NumericOverflowError(f"value {text!r} out of range for float64") from e
    except ValueError as e:
        raise ValueParseError(f"invalid syntax for float: {text!r}") from e

    if math.isinf(value) and "inf" not in text.lower():
        raise NumericOverflowError(f"value {text!r} out of range for float64")
    return value


_ENV_PARSERS: Dict[FieldKind, Callable[[str, int], Any]] = {
    FieldKind.TEXT: lambda text, bits: text,
    FieldKind.BOOLEAN: lambda text, bits: parse_bool(text),
    FieldKind.INT: lambda text, bits: parse_int(text, bits),
    FieldKind.INT64: lambda text, bits: parse_int(text, 64),
    FieldKind.DURATION: lambda text, bits: parse_duration(text),
    FieldKind.UINT: lambda text, bits: parse_uint(text, bits),
    FieldKind.UINT64: lambda text, bits: parse_uint(text, 64),
    FieldKind.FLOAT: lambda text, bits: parse_float(text),
    FieldKind.TIMESTAMP: lambda text, bits: parse_timestamp(text),
}


def parse_env_value(
    text: str,
    descriptor: FieldDescriptor,
    bits: int = NATIVE_INT_BITS,
) -> Any:
    """
    Convert an environment variable's text to the field's declared type.

    Args:
        text: Non-empty variable value.
        descriptor: Field being bound.
        bits: Native integer width for ``int`` and ``Uint`` fields.

    Returns:
        The typed value.

    Raises:
        ValueParseError: Malformed text.
        NumericOverflowError: Integer or float out of range.
        UnsupportedTypeError: The declared type cannot be read from text
                              (``list[str]`` and unsupported annotations).
    """
    parser = _ENV_PARSERS.get(descriptor.kind)
    if parser is None:
        raise UnsupportedTypeError(f"unsupported field type: {descriptor.type_name}")
    return parser(text, bits)


# ============================================================================
# File source
# ============================================================================

def _to_int(value: int, descriptor: FieldDescriptor, bits: int) -> int:
    return int64_to_int(check_int64(value), bits)


def _to_int64(value: int, descriptor: FieldDescriptor, bits: int) -> int:
    return check_int64(value)


def _to_uint(value: int, descriptor: FieldDescriptor, bits: int) -> int:
    return uint64_to_uint(_reinterpret_unsigned(value, descriptor), bits)


def _to_uint64(value: int, descriptor: FieldDescriptor, bits: int) -> int:
    return _reinterpret_unsigned(value, descriptor)


def _reinterpret_unsigned(value: int, descriptor: FieldDescriptor) -> int:
    unsigned = to_unsigned64(value)
    if value < 0:
        logger.warning(
            "negative file value for unsigned key %s reinterpreted as %d",
            descriptor.key,
            unsigned,
        )
    return unsigned


def _to_string_list(value: List[Any], descriptor: FieldDescriptor, bits: int) -> List[str]:
    # Non-text elements become "" rather than failing the field
    return [item if isinstance(item, str) else "" for item in value]


def _passthrough(value: Any, descriptor: FieldDescriptor, bits: int) -> Any:
    return value


# Valid (declared kind, decoded kind) pairs; every other pair is a mismatch
_FILE_CONVERTERS: Dict[Tuple[FieldKind, ValueKind], Callable[[Any, FieldDescriptor, int], Any]] = {
    (FieldKind.TEXT, ValueKind.TEXT): _passthrough,
    (FieldKind.BOOLEAN, ValueKind.BOOLEAN): _passthrough,
    (FieldKind.INT, ValueKind.INTEGER): _to_int,
    (FieldKind.INT64, ValueKind.INTEGER): _to_int64,
    (FieldKind.DURATION, ValueKind.TEXT): lambda value, d, bits: parse_duration(value),
    (FieldKind.UINT, ValueKind.INTEGER): _to_uint,
    (FieldKind.UINT64, ValueKind.INTEGER): _to_uint64,
    (FieldKind.FLOAT, ValueKind.FLOAT): _passthrough,
    (FieldKind.TIMESTAMP, ValueKind.TIMESTAMP): _passthrough,
    (FieldKind.STRING_LIST, ValueKind.LIST): _to_string_list,
}


def parse_file_value(
    value: Any,
    descriptor: FieldDescriptor,
    bits: int = NATIVE_INT_BITS,
) -> Any:
    """
    Convert a decoded TOML value to the field's declared type.

    Args:
        value: Value from the environment section of the decoded file.
        descriptor: Field being bound.
        bits: Native integer width for ``int`` and ``Uint`` fields.

    Returns:
        The typed value.

    Raises:
        TypeMismatchError: The value's kind does not fit the declared type.
        NumericOverflowError: Integer out of range for the field.
        ValueParseError: Malformed duration text.
    """
    converter = _FILE_CONVERTERS.get((descriptor.kind, value_kind(value)))
    if converter is None:
        raise TypeMismatchError(descriptor.type_name, value_kind_name(value))
    return converter(value, descriptor, bits)
