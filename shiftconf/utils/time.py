"""
Timestamp and duration text parsing.

This module turns configuration text into time values:

  - ``parse_timestamp`` accepts RFC 3339 date-times (the common internet
    date-time format, e.g. ``"2006-01-02T15:04:05Z"``) and returns a
    timezone-aware ``datetime``. A timestamp without an offset is rejected:
    configuration timestamps must be unambiguous.
  - ``parse_duration`` accepts human-readable durations such as ``"15s"``,
    ``"1h30m"`` or ``"-1.5ms"`` and returns a ``pandas.Timedelta``, which
    stores the duration as a signed 64-bit count of nanoseconds.

Both the environment and the file source share these parsers, so ``"15s"``
means the same thing wherever it comes from.
"""

import re
from datetime import datetime

import pandas as pd

from shiftconf.errors import ValueParseError

_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})"
)

# Nanoseconds per duration unit
DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

# One group of the duration grammar: [0-9]*(\.[0-9]*)?<unit>
_DURATION_GROUP = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")

_MAX_NANOS = 2**63 - 1

# A whole part with more significant digits than this overflows any unit
_MAX_WHOLE_DIGITS = len(str(_MAX_NANOS))

# Fraction digits past this are ignored
_MAX_FRACTION_DIGITS = 30


def parse_timestamp(text: str) -> datetime:
    """
    Parse an RFC 3339 timestamp into a timezone-aware datetime.

    **Functionally**:
      - The overall shape is checked first (date, ``T``, time, optional
        fraction, then ``Z`` or a ``+HH:MM``/``-HH:MM`` offset).
      - The value itself is built by ``pandas.Timestamp``, which rejects
        impossible dates (month 13, February 30) and returns the offset as a
        fixed-offset timezone.

    Args:
        text: Timestamp text, e.g. ``"2006-01-02T15:04:05Z"``.

    Returns:
        Timezone-aware ``datetime`` (fractions beyond microseconds are dropped).

    Raises:
        ValueParseError: If the text is not a valid RFC 3339 timestamp.
    """
    if not _RFC3339.fullmatch(text):
        raise ValueParseError(f"cannot parse {text!r} as RFC 3339 timestamp")

    try:
        stamp = pd.Timestamp(text.upper())
    except ValueError as e:
        raise ValueParseError(f"cannot parse {text!r} as RFC 3339 timestamp: {e}") from e

    return stamp.to_pydatetime(warn=False)


def parse_duration(text: str) -> pd.Timedelta:
    """
    Parse a duration string such as ``"300ms"``, ``"-1.5h"`` or ``"2h45m"``.

    **Grammar**: an optional sign followed by one or more groups of a
    decimal number and a unit. Valid units are ``ns``, ``us`` (or ``µs``),
    ``ms``, ``s``, ``m`` and ``h``. The bare string ``"0"`` is accepted
    without a unit.

    **Edge cases**:
      - ``""``, ``"10"`` (no unit), ``"5x"`` (unknown unit) and ``".s"``
        (no digits) are errors.
      - Totals outside the signed 64-bit nanosecond range are errors.
      - Fractional parts are converted exactly and truncated to whole
        nanoseconds. Fraction digits past the 30th are ignored.

    Args:
        text: Duration text.

    Returns:
        ``pandas.Timedelta`` holding the total number of nanoseconds.

    Raises:
        ValueParseError: If the text does not match the grammar or overflows.

    Example:
        >>> parse_duration("15s") == pd.Timedelta(seconds=15)
        True
    """
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]

    if rest == "0":
        return pd.Timedelta(0)
    if not rest:
        raise ValueParseError(f"invalid duration {text!r}")

    total = 0
    pos = 0
    while pos < len(rest):
        group = _DURATION_GROUP.match(rest, pos)
        whole, fraction, unit = group.groups()
        if not whole and not fraction:
            raise ValueParseError(f"invalid duration {text!r}")
        if not unit:
            raise ValueParseError(f"missing unit in duration {text!r}")
        if unit not in DURATION_UNITS:
            raise ValueParseError(f"unknown unit {unit!r} in duration {text!r}")

        whole = whole.lstrip("0")
        if len(whole) > _MAX_WHOLE_DIGITS:
            raise ValueParseError(f"invalid duration {text[:24]!r}...: out of range")
        fraction = fraction[:_MAX_FRACTION_DIGITS] if fraction else fraction

        scale = DURATION_UNITS[unit]
        total += int(whole or "0") * scale
        if fraction:
            total += int(fraction) * scale // 10 ** len(fraction)
        if total > _MAX_NANOS:
            raise ValueParseError(f"invalid duration {text!r}: out of range")
        pos = group.end()

    return pd.Timedelta(-total if negative else total, unit="ns")
