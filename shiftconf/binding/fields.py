"""
Field descriptors: the binding schema derived from a dataclass.

**Conceptual**: The binder does not inspect values at run time to decide how
to convert them. Instead, each dataclass field is described once per
``load()`` call by a ``FieldDescriptor``: its attribute name, its resolved
key and a ``FieldKind`` taken from its annotation. Conversions then dispatch
on the closed set of kinds.

**Supported annotations**:
  - ``str`` -> TEXT
  - ``bool`` -> BOOLEAN
  - ``int`` -> INT (native width), ``Int64`` -> INT64
  - ``Uint`` -> UINT (native width), ``Uint64`` -> UINT64
  - ``float`` -> FLOAT
  - ``datetime`` -> TIMESTAMP
  - ``timedelta`` -> DURATION
  - ``list[str]`` / ``List[str]`` -> STRING_LIST

Anything else is UNSUPPORTED. Such a field is still described (and is
harmless while no source mentions it); it only fails when a value for it
turns up.

**Field metadata**: an explicit key goes in the field metadata under the
tag name (``"shift"`` by default); the value ``"-"`` excludes the field:

    @dataclass
    class AppConfig:
        hello: str = field(default="", metadata={"shift": "greeting"})
        secret: str = setting(omit=True, default="")
"""

import dataclasses
import typing
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, List, Optional

from shiftconf.binding.keys import OMIT_SENTINEL, resolve_key
from shiftconf.config.settings import DEFAULT_TAG_NAME, LoaderSettings, get_settings
from shiftconf.errors import ConfigSchemaError
from shiftconf.types import Int64, Uint, Uint64

TAG_NAME = DEFAULT_TAG_NAME
OMIT = OMIT_SENTINEL


class FieldKind(Enum):
    """Declared type of a bindable field."""

    TEXT = "str"
    BOOLEAN = "bool"
    INT = "int"
    INT64 = "Int64"
    UINT = "Uint"
    UINT64 = "Uint64"
    FLOAT = "float"
    TIMESTAMP = "datetime"
    DURATION = "timedelta"
    STRING_LIST = "list[str]"
    UNSUPPORTED = "unsupported"


_SIMPLE_KINDS = {
    str: FieldKind.TEXT,
    bool: FieldKind.BOOLEAN,
    int: FieldKind.INT,
    Int64: FieldKind.INT64,
    Uint: FieldKind.UINT,
    Uint64: FieldKind.UINT64,
    float: FieldKind.FLOAT,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Everything the binder needs to know about one field.

    Attributes:
        name: Attribute name on the dataclass.
        key: Resolved external key (``""`` when the field is omitted).
        kind: Declared kind, from the annotation.
        type_name: Human-readable annotation, used in error messages.
    """
    name: str
    key: str
    kind: FieldKind
    type_name: str

    @property
    def omitted(self) -> bool:
        return not self.key


def field_kind(annotation: Any) -> FieldKind:
    """Map a type annotation to its ``FieldKind``."""
    origin = typing.get_origin(annotation)
    if origin is not None:
        if origin is list and typing.get_args(annotation) == (str,):
            return FieldKind.STRING_LIST
        return FieldKind.UNSUPPORTED

    kind = _SIMPLE_KINDS.get(annotation)
    if kind is not None:
        return kind

    if isinstance(annotation, type):
        if issubclass(annotation, datetime):
            return FieldKind.TIMESTAMP
        if issubclass(annotation, timedelta):
            return FieldKind.DURATION

    return FieldKind.UNSUPPORTED


def type_name(annotation: Any) -> str:
    """Readable name of an annotation (``"int"``, ``"Uint64"``, ``"list[str]"``)."""
    if typing.get_origin(annotation) is None and isinstance(annotation, type):
        return annotation.__name__
    if isinstance(annotation, typing.NewType):
        return annotation.__name__
    return repr(annotation).replace("typing.", "")


def describe_fields(
    target_type: type,
    settings: Optional[LoaderSettings] = None,
) -> List[FieldDescriptor]:
    """
    Describe every field of a dataclass type, in declaration order.

    Args:
        target_type: A dataclass type.
        settings: Loader settings (tag name and omit sentinel). Defaults to
                  ``get_settings()``, the same settings ``load()`` uses.

    Returns:
        One ``FieldDescriptor`` per field, omitted fields included.

    Raises:
        ConfigSchemaError: If ``target_type`` is not a dataclass type, or its
                           annotations cannot be resolved.
    """
    settings = settings or get_settings()

    if not (isinstance(target_type, type) and dataclasses.is_dataclass(target_type)):
        raise ConfigSchemaError(f"expected a dataclass type, got: {target_type!r}")

    try:
        hints = typing.get_type_hints(target_type)
    except NameError as e:
        raise ConfigSchemaError(
            f"cannot resolve annotations of {target_type.__name__}: {e}"
        ) from e

    descriptors = []
    for f in dataclasses.fields(target_type):
        annotation = hints.get(f.name, f.type)
        tag = f.metadata.get(settings.tag_name)
        descriptors.append(
            FieldDescriptor(
                name=f.name,
                key=resolve_key(f.name, tag, settings.omit_sentinel),
                kind=field_kind(annotation),
                type_name=type_name(annotation),
            )
        )
    return descriptors


def get_keys(target: Any, settings: Optional[LoaderSettings] = None) -> List[str]:
    """
    Resolved keys of all non-omitted fields, in declaration order.

    Args:
        target: A dataclass type or instance.
        settings: Loader settings. Defaults to ``get_settings()``.

    Example:
        >>> @dataclass
        ... class S:
        ...     Int: int = 0
        ...     String: str = setting("a", default="")
        ...     Count: Uint = setting(omit=True, default=0)
        >>> get_keys(S)
        ['int', 'a']
    """
    target_type = target if isinstance(target, type) else type(target)
    return [d.key for d in describe_fields(target_type, settings) if not d.omitted]


def setting(
    key: Optional[str] = None,
    *,
    omit: bool = False,
    tag_name: str = TAG_NAME,
    **field_kwargs: Any,
) -> Any:
    """
    ``dataclasses.field`` with the key tag filled in.

    Args:
        key: Explicit external key (used verbatim, casing included).
        omit: Exclude the field from binding entirely.
        tag_name: Metadata key to write the tag under.
        **field_kwargs: Passed through to ``dataclasses.field``
                        (``default``, ``default_factory``, ...).
    """
    if omit and key:
        raise ValueError("setting() takes either a key or omit=True, not both")

    metadata = dict(field_kwargs.pop("metadata", None) or {})
    if omit:
        metadata[tag_name] = OMIT
    elif key:
        metadata[tag_name] = key
    return dataclasses.field(metadata=metadata, **field_kwargs)
