"""
Entry point: load configuration into a dataclass instance.

**Conceptual**: ``load`` merges two layers into one strongly typed object:

  1. Environment variables (``[PREFIX_]KEY``), which always win.
  2. The section of a TOML file named after the active environment.

    # config.toml
    [dev]
    db_host = "localhost"
    timeout = "15s"

    @dataclass
    class AppConfig:
        db_host: str = ""
        timeout: timedelta = timedelta(0)
        port: int = 8080

    cfg = load(AppConfig(), "config.toml", "dev", env_prefix="myapp")
    # MYAPP_DB_HOST / MYAPP_TIMEOUT / MYAPP_PORT override the file

Fields that neither source mentions keep their current value, so dataclass
defaults act as the lowest-precedence layer.

**Failure modes**:
  - Missing file: not an error; only the environment is used.
  - Missing environment section: not an error; only the environment is used.
  - Anything else (bad TOML, bad value, wrong target) raises.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

from shiftconf.binding.binder import bind
from shiftconf.binding.fields import describe_fields
from shiftconf.config.settings import LoaderSettings, get_settings
from shiftconf.errors import ConfigSchemaError
from shiftconf.sources.base import Environment
from shiftconf.sources.environment import ProcessEnvironment
from shiftconf.sources.toml_file import decode_file, env_section

logger = logging.getLogger(__name__)

T = TypeVar("T")

Decoder = Callable[[Path | str], Mapping[str, Any]]


def load(
    record: T,
    file_path: Path | str,
    env_name: str,
    *,
    env_prefix: str = "",
    environ: Optional[Environment] = None,
    decoder: Optional[Decoder] = None,
    settings: Optional[LoaderSettings] = None,
) -> T:
    """
    Populate ``record`` from the environment and one section of a TOML file.

    Args:
        record: Mutable (non-frozen) dataclass *instance* to fill in place.
        file_path: Path to the TOML file. It may not exist.
        env_name: Name of the top-level table to read (e.g. ``"dev"``).
        env_prefix: Optional prefix for environment variable names
                    (``"myapp"`` -> ``MYAPP_<KEY>``).
        environ: Environment lookup. Defaults to the process environment.
        decoder: File decoder with the ``decode_file`` contract. Defaults to
                 the TOML decoder.
        settings: Loader settings. Defaults to ``get_settings()``.

    Returns:
        ``record`` itself, for chaining.

    Raises:
        ConfigSchemaError: ``record`` is not a mutable dataclass instance
                           (raised before any source is read).
        tomllib.TOMLDecodeError: The file exists but is not valid TOML.
        ConfigDecodeError: The environment entry is not a table.
        FieldBindingError: A value could not be converted; ``__cause__`` holds
                           the parse, overflow or mismatch error.
    """
    _check_record(record)

    settings = settings or get_settings()
    environ = environ if environ is not None else ProcessEnvironment()
    decoder = decoder or decode_file

    file_values = _read_file_values(decoder, file_path, env_name)
    descriptors = describe_fields(type(record), settings)

    bind(
        record,
        descriptors,
        environ,
        file_values,
        env_prefix=env_prefix,
        bits=settings.native_int_bits,
    )
    return record


def _check_record(record: Any) -> None:
    if isinstance(record, type):
        raise ConfigSchemaError(
            f"'record' must be a dataclass instance, was the class: {record.__name__}"
        )
    if not dataclasses.is_dataclass(record):
        raise ConfigSchemaError(
            f"'record' must be a dataclass instance, was: {type(record).__name__}"
        )
    if type(record).__dataclass_params__.frozen:
        raise ConfigSchemaError(
            f"'record' must be mutable, {type(record).__name__} is a frozen dataclass"
        )


def _read_file_values(
    decoder: Decoder,
    file_path: Path | str,
    env_name: str,
) -> Dict[str, Any]:
    try:
        decoded = decoder(file_path)
    except FileNotFoundError:
        logger.debug("config file %s not found, using environment only", file_path)
        return {}

    if not decoded:
        return {}

    section = env_section(dict(decoded), env_name)
    if not section:
        logger.debug("no [%s] section in %s", env_name, file_path)
    return section
