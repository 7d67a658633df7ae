"""
shiftconf - typed configuration loading from the environment and TOML files.

Populates a mutable dataclass instance from two layered sources: process
environment variables (highest precedence) and one environment-scoped
section of a TOML file (e.g. ``[dev]``, ``[prod]``).
"""

import logging

from shiftconf.binding.fields import OMIT, TAG_NAME, get_keys, setting
from shiftconf.binding.keys import resolve_key, to_snake_case
from shiftconf.errors import (
    ConfigDecodeError,
    ConfigSchemaError,
    FieldBindingError,
    NumericOverflowError,
    ShiftError,
    TypeMismatchError,
    UnsupportedTypeError,
    ValueParseError,
)
from shiftconf.loader import load
from shiftconf.sources.environment import (
    DotenvEnvironment,
    ProcessEnvironment,
    StaticEnvironment,
)
from shiftconf.types import Int64, Uint, Uint64

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "OMIT",
    "TAG_NAME",
    "ConfigDecodeError",
    "ConfigSchemaError",
    "DotenvEnvironment",
    "FieldBindingError",
    "Int64",
    "NumericOverflowError",
    "ProcessEnvironment",
    "ShiftError",
    "StaticEnvironment",
    "TypeMismatchError",
    "Uint",
    "Uint64",
    "UnsupportedTypeError",
    "ValueParseError",
    "get_keys",
    "load",
    "resolve_key",
    "setting",
    "to_snake_case",
]
