"""
Integer annotations for fields whose width or signedness differs from ``int``.

**Conceptual**: Python has a single unbounded ``int``, but configuration
values often have to fit a concrete machine type (a port in a native
``int``, a byte budget in an unsigned 64-bit counter). These aliases let a
dataclass declare that intent so the binder can bound-check values:

    - ``int``     -> native signed integer (platform pointer width)
    - ``Int64``   -> signed 64-bit integer
    - ``Uint``    -> native unsigned integer
    - ``Uint64``  -> unsigned 64-bit integer

At runtime they are plain ``int`` values; the alias only guides binding.

Usage example:
    >>> from dataclasses import dataclass
    >>> from shiftconf import Uint64
    >>>
    >>> @dataclass
    ... class Limits:
    ...     max_bytes: Uint64 = 0
"""

from typing import NewType

Int64 = NewType("Int64", int)
Uint = NewType("Uint", int)
Uint64 = NewType("Uint64", int)
