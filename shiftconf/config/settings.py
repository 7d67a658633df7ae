"""
Settings for the configuration loader itself.

**Conceptual**: The loader has a few knobs of its own: which dataclass
metadata key holds the explicit key name, which tag value means "never bind
this field", and which native integer width bounds ``int``/``Uint`` fields.
They live in one frozen dataclass so they are validated once and can be
injected in tests instead of read from the environment.

**Environment variables** (all optional):
  - SHIFT_TAG_NAME: metadata key for explicit key names (default ``"shift"``).
  - SHIFT_OMIT_SENTINEL: tag value that excludes a field (default ``"-"``).
  - SHIFT_NATIVE_INT_BITS: ``32`` or ``64``; defaults to the running
    platform's pointer width. Useful to reproduce 32-bit behaviour.

A ``.env`` file in the current working directory is read with python-dotenv
before these variables are looked up; values already present in the
process environment win.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import dotenv_values

from shiftconf.utils.bounds import NATIVE_INT_BITS

DEFAULT_TAG_NAME = "shift"
DEFAULT_OMIT_SENTINEL = "-"
VALID_NATIVE_INT_BITS = (32, 64)


@dataclass(frozen=True)
class LoaderSettings:
    """
    Validated settings that shape how fields are described and bound.

    Attributes:
        tag_name: Dataclass field metadata key holding the explicit key name.
        omit_sentinel: Tag value that removes a field from binding entirely.
        native_int_bits: Width used to bound ``int`` and ``Uint`` fields.
    """
    tag_name: str = DEFAULT_TAG_NAME
    omit_sentinel: str = DEFAULT_OMIT_SENTINEL
    native_int_bits: int = field(default=NATIVE_INT_BITS)

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.tag_name:
            raise ValueError("SHIFT_TAG_NAME must not be empty.")
        if not self.omit_sentinel:
            raise ValueError("SHIFT_OMIT_SENTINEL must not be empty.")
        if self.native_int_bits not in VALID_NATIVE_INT_BITS:
            raise ValueError(
                f"SHIFT_NATIVE_INT_BITS must be one of {VALID_NATIVE_INT_BITS}, "
                f"got: {self.native_int_bits}"
            )

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = ".env") -> "LoaderSettings":
        """
        Load loader settings from the environment (and an optional .env file).

        Args:
            dotenv_path: Path of a .env file to read first, or None to skip it.
                         A missing file is ignored.

        Returns:
            LoaderSettings with values from the environment or defaults.

        Raises:
            ValueError: If SHIFT_NATIVE_INT_BITS is not an integer or not 32/64.
        """
        values = {}
        if dotenv_path is not None:
            values.update(
                {k: v for k, v in dotenv_values(dotenv_path).items() if v is not None}
            )
        values.update(os.environ)

        tag_name = values.get("SHIFT_TAG_NAME", DEFAULT_TAG_NAME)
        omit_sentinel = values.get("SHIFT_OMIT_SENTINEL", DEFAULT_OMIT_SENTINEL)
        bits_str = values.get("SHIFT_NATIVE_INT_BITS", str(NATIVE_INT_BITS))

        try:
            native_int_bits = int(bits_str)
        except ValueError:
            raise ValueError(
                f"SHIFT_NATIVE_INT_BITS must be an integer, got: {bits_str}"
            )

        return cls(
            tag_name=tag_name,
            omit_sentinel=omit_sentinel,
            native_int_bits=native_int_bits,
        )


_default_settings: Optional[LoaderSettings] = None


def get_settings() -> LoaderSettings:
    """
    Get the cached loader settings, building them from the environment once.

    Tests can bypass the cache by passing ``settings=LoaderSettings(...)`` to
    ``load()`` or by calling ``reset_settings()``.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = LoaderSettings.from_env()
    return _default_settings


def reset_settings():
    """Clear the cached settings so the next ``get_settings()`` re-reads them."""
    global _default_settings
    _default_settings = None
