"""
Precedence-ordered binding of sources onto a dataclass instance.

**Conceptual**: For each field, in declaration order, the binder decides
where the value comes from and assigns it exactly once:

  1. Omitted fields (empty resolved key) are skipped: never read, never written.
  2. The environment variable ``[PREFIX_]KEY`` is consulted first. A
     non-empty value wins outright and the file is not looked at.
  3. Otherwise the key is looked up in the environment section of the file.
  4. If neither source has the key, the field keeps whatever value it
     already had. The binder never resets a field.

The first conversion error stops binding and is raised as a
``FieldBindingError`` naming the key. Fields bound before it keep their new
values; fields after it are untouched.
"""

import logging
from typing import Any, List, Mapping

from shiftconf.binding.fields import FieldDescriptor
from shiftconf.binding.keys import env_var_name
from shiftconf.binding.values import parse_env_value, parse_file_value
from shiftconf.errors import FieldBindingError, ShiftError
from shiftconf.sources.base import Environment
from shiftconf.utils.bounds import NATIVE_INT_BITS

logger = logging.getLogger(__name__)


def bind(
    record: Any,
    descriptors: List[FieldDescriptor],
    environ: Environment,
    file_values: Mapping[str, Any],
    env_prefix: str = "",
    bits: int = NATIVE_INT_BITS,
) -> None:
    """
    Assign every eligible field of ``record`` from the environment or the file.

    Args:
        record: Mutable dataclass instance to populate.
        descriptors: Field descriptors of ``record``'s type.
        environ: Environment lookup (consulted first).
        file_values: Environment section of the decoded file (may be empty).
        env_prefix: Optional prefix for environment variable names.
        bits: Native integer width for ``int`` and ``Uint`` fields.

    Raises:
        FieldBindingError: On the first field whose value cannot be converted.
    """
    for descriptor in descriptors:
        if descriptor.omitted:
            continue

        key = descriptor.key
        env_name = env_var_name(key, env_prefix)
        env_value = environ.get(env_name)

        try:
            if env_value:
                value = parse_env_value(env_value, descriptor, bits)
                source = f"env {env_name}"
            elif key in file_values:
                value = parse_file_value(file_values[key], descriptor, bits)
                source = "file"
            else:
                continue
        except ShiftError as e:
            raise FieldBindingError(key, e) from e

        setattr(record, descriptor.name, value)
        logger.debug("bound key %s from %s", key, source)
