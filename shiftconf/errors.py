"""
Exception hierarchy for configuration loading.

**Conceptual**: Every failure raised by ``load()`` derives from ``ShiftError``
so callers can catch one type at startup, while the concrete subclasses keep
the standard-library base that matches their nature (``TypeError`` for
schema problems, ``ValueError`` for unparseable text, ``OverflowError`` for
out-of-range numbers). Messages should carry enough context (key name,
declared type, offending value kind) for quick remediation.

Binding stops at the first error. Per-field errors are wrapped in
``FieldBindingError`` which names the resolved key; the underlying error
stays reachable through ``__cause__`` (and ``.cause``).
"""


class ShiftError(Exception):
    """Base class for all configuration loading errors."""
    pass


class ConfigSchemaError(ShiftError, TypeError):
    """
    Raised when the target or one of its fields cannot be bound at all.

    **Usage**: Signals programmer errors: passing a class instead of an
    instance, a frozen dataclass, a non-dataclass object, or declaring a
    field type the binder does not support.
    """
    pass


class ConfigDecodeError(ShiftError):
    """Raised when the decoded file does not have the expected shape."""
    pass


class ValueParseError(ShiftError, ValueError):
    """
    Raised when a source value cannot be converted to the declared type.

    **Usage**: Covers malformed booleans, integers, floats, durations and
    timestamps coming from environment strings or file text.
    """
    pass


class UnsupportedTypeError(ConfigSchemaError, ValueParseError):
    """Raised when a source provides a value for a field of unsupported type."""
    pass


class NumericOverflowError(ShiftError, OverflowError):
    """Raised when an integer does not fit the target integer width."""
    pass


class TypeMismatchError(ShiftError, TypeError):
    """
    Raised when a decoded file value has the wrong kind for the field.

    Attributes:
        declared: Name of the field's declared type (e.g. ``"int"``).
        actual: Name of the decoded value's kind (e.g. ``"text"``).
    """

    def __init__(self, declared: str, actual: str):
        self.declared = declared
        self.actual = actual
        super().__init__(f"unsupported conversion {declared} -> {actual}")


class FieldBindingError(ShiftError):
    """
    Raised by the binder when assigning a single field fails.

    Attributes:
        key: Resolved key of the field that failed.
        cause: The underlying parse, overflow, mismatch or schema error.
    """

    def __init__(self, key: str, cause: Exception):
        self.key = key
        self.cause = cause
        super().__init__(f"failed to assign key {key}: {cause}")
