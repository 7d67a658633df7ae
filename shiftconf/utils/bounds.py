"""
Integer width checks and decimal integer parsing.

**Conceptual**: Python integers are unbounded, but configuration fields are
declared against machine widths (native ``int``, ``Int64``, ``Uint``,
``Uint64``). This module answers "does this value fit?" using numpy's
``iinfo`` tables so the same code is correct on 32-bit and 64-bit
platforms. The native width is measured from ``numpy.intp`` (pointer
width) rather than assumed.

**Functionally**:
  - ``int64_to_int`` / ``uint64_to_uint`` narrow a 64-bit value to the
    native width, raising ``NumericOverflowError`` when it does not fit.
    At native width 64 the conversion is lossless.
  - ``parse_int`` / ``parse_uint`` parse base-10 text constrained to a
    bit width (``ValueParseError`` on bad syntax, ``NumericOverflowError``
    when out of range).
  - ``to_unsigned64`` reinterprets a signed 64-bit value as unsigned
    (two's complement), which is how file integers reach unsigned fields.
"""

import re

import numpy as np

from shiftconf.errors import NumericOverflowError, ValueParseError

NATIVE_INT_BITS = np.dtype(np.intp).itemsize * 8

SUPPORTED_INT_BITS = (8, 16, 32, 64)

_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_DECIMAL = re.compile(r"[0-9]+")

# Widest value is 2**64 - 1, which has 20 digits
_MAX_DIGITS = 20


def signed_bounds(bits: int) -> tuple[int, int]:
    """Return the inclusive (min, max) range of a signed integer of ``bits``."""
    info = np.iinfo(f"int{_check_bits(bits)}")
    return int(info.min), int(info.max)


def unsigned_bounds(bits: int) -> tuple[int, int]:
    """Return the inclusive (min, max) range of an unsigned integer of ``bits``."""
    info = np.iinfo(f"uint{_check_bits(bits)}")
    return int(info.min), int(info.max)


def int64_to_int(value: int, bits: int = NATIVE_INT_BITS) -> int:
    """
    Narrow a signed 64-bit value to the native signed width.

    Args:
        value: Signed 64-bit integer.
        bits: Native integer width (defaults to the running platform's).

    Returns:
        The same value, guaranteed to fit ``bits``.

    Raises:
        NumericOverflowError: If the value lies outside the signed range.

    Example:
        >>> int64_to_int(23, bits=32)
        23
        >>> int64_to_int(2**31, bits=32)
        Traceback (most recent call last):
        ...
        shiftconf.errors.NumericOverflowError: integer too big 2147483648
    """
    if bits == 64:
        return int(value)

    low, high = signed_bounds(bits)
    if value > high:
        raise NumericOverflowError(f"integer too big {value}")
    if value < low:
        raise NumericOverflowError(f"integer too small {value}")
    return int(value)


def uint64_to_uint(value: int, bits: int = NATIVE_INT_BITS) -> int:
    """
    Narrow an unsigned 64-bit value to the native unsigned width.

    Raises:
        NumericOverflowError: If the value exceeds the unsigned range.
    """
    if bits == 64:
        return int(value)

    _, high = unsigned_bounds(bits)
    if value > high:
        raise NumericOverflowError(f"unsigned integer too big {value}")
    return int(value)


def check_int64(value: int) -> int:
    """Raise ``NumericOverflowError`` unless ``value`` fits a signed 64-bit integer."""
    low, high = signed_bounds(64)
    if not low <= value <= high:
        raise NumericOverflowError(f"integer {value} out of range for int64")
    return value


def to_unsigned64(value: int) -> int:
    """Reinterpret a signed 64-bit value as unsigned (``-1`` -> ``2**64 - 1``)."""
    return int(np.array(check_int64(value), dtype=np.int64).view(np.uint64))


def parse_int(text: str, bits: int = 64) -> int:
    """
    Parse a base-10 signed integer that must fit ``bits``.

    Only an optional sign followed by ASCII digits is accepted; surrounding
    whitespace and digit separators are rejected.

    Raises:
        ValueParseError: If the text is not a decimal integer.
        NumericOverflowError: If the value does not fit ``bits``.
    """
    if not _SIGNED_DECIMAL.fullmatch(text):
        raise ValueParseError(f"invalid syntax for integer: {text!r}")

    _check_digit_count(text, bits)
    value = int(text)
    low, high = signed_bounds(bits)
    if not low <= value <= high:
        raise NumericOverflowError(f"value {text!r} out of range for int{bits}")
    return value


def parse_uint(text: str, bits: int = 64) -> int:
    """
    Parse a base-10 unsigned integer that must fit ``bits``.

    A sign prefix is not permitted, so ``"-1"`` and ``"+1"`` are syntax errors.

    Raises:
        ValueParseError: If the text is not an unsigned decimal integer.
        NumericOverflowError: If the value does not fit ``bits``.
    """
    if not _UNSIGNED_DECIMAL.fullmatch(text):
        raise ValueParseError(f"invalid syntax for unsigned integer: {text!r}")

    _check_digit_count(text, bits)
    value = int(text)
    _, high = unsigned_bounds(bits)
    if value > high:
        raise NumericOverflowError(f"value {text!r} out of range for uint{bits}")
    return value


def _check_digit_count(text: str, bits: int) -> None:
    # Keeps int() away from CPython's digit limit on absurdly long input
    digits = text.lstrip("+-").lstrip("0")
    if len(digits) > _MAX_DIGITS:
        raise NumericOverflowError(f"value {text[:24]!r}... out of range for {bits}-bit integer")


def _check_bits(bits: int) -> int:
    if bits not in SUPPORTED_INT_BITS:
        raise ValueError(
            f"integer width must be one of {SUPPORTED_INT_BITS}, got: {bits}"
        )
    return bits
