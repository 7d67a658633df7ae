"""
TOML file decoding for environment-partitioned configuration.

**Conceptual**: The configuration file groups values by deployment
environment. Every top-level table names an environment and holds the
values for that environment only:

    [dev]
    configstring = "string"
    configint = -5
    configtime = 2006-01-02T15:04:05Z

    [prod]
    configstring = "other"

``decode_file`` parses the whole file into nested dicts and ``env_section``
picks the table for the active environment. This is the only place the file
is opened; the binder works on the already-decoded mapping.

**Errors**:
  - Missing file: ``FileNotFoundError`` from ``decode_file`` (the loader
    treats this as "no file values").
  - Invalid TOML: ``tomllib.TOMLDecodeError``, propagated unchanged.
  - A section that is not a table: ``ConfigDecodeError``.
"""

import sys
from pathlib import Path
from typing import Any, Dict

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from shiftconf.errors import ConfigDecodeError


def decode_file(path: Path | str) -> Dict[str, Any]:
    """
    Parse a TOML file into a nested mapping.

    Args:
        path: Path to the TOML file.

    Returns:
        Top-level mapping keyed by environment name.

    Raises:
        FileNotFoundError: If the file does not exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as handle:
        return tomllib.load(handle)


def env_section(decoded: Dict[str, Any], env_name: str) -> Dict[str, Any]:
    """
    Extract the values for one environment from a decoded file.

    Args:
        decoded: Mapping returned by ``decode_file`` (or an equivalent decoder).
        env_name: Environment name, i.e. the top-level table to select.

    Returns:
        The environment's table, or an empty dict if the environment is absent.

    Raises:
        ConfigDecodeError: If the entry exists but is not a table.
    """
    section = decoded.get(env_name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigDecodeError(
            f"environment section {env_name!r} must be a table, "
            f"got {type(section).__name__}"
        )
    return section
