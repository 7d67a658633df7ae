"""
Concrete ``Environment`` implementations.

  - ``ProcessEnvironment``: the live process environment (``os.environ``),
    read at lookup time.
  - ``StaticEnvironment``: a fixed mapping, for tests and for callers that
    assemble variables themselves.
  - ``DotenvEnvironment``: variables from a ``.env`` file (parsed with
    python-dotenv) layered under another environment, so real variables
    win over file defaults, as with ``load_dotenv(override=False)``.

None of these ever writes to ``os.environ``.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

from shiftconf.sources.base import Environment


class ProcessEnvironment:
    """Environment backed by ``os.environ``."""

    def get(self, name: str) -> str:
        return os.environ.get(name, "")


class StaticEnvironment:
    """
    Environment backed by a fixed mapping.

    **Usage**:
        environ = StaticEnvironment({"APP_PORT": "8080"})
        environ.get("APP_PORT")  # "8080"
        environ.get("APP_HOST")  # ""
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values = dict(values or {})

    def get(self, name: str) -> str:
        return self._values.get(name) or ""


class DotenvEnvironment:
    """
    Environment that falls back to a ``.env`` file.

    **Functionally**:
      - The file is parsed once, at construction, with ``dotenv_values``.
      - ``get`` asks the fallback environment first and only uses the file
        value when the fallback has nothing (or an empty value).
      - A missing file behaves like an empty one.
      - Keys without a value (a bare ``NAME`` line) count as unset.

    Args:
        path: Path to the .env file.
        fallback: Environment consulted before the file. Defaults to the
                  live process environment.
    """

    def __init__(self, path: Path | str = ".env", fallback: Optional[Environment] = None):
        self.path = Path(path)
        self._fallback = fallback if fallback is not None else ProcessEnvironment()
        self._values = {
            key: value
            for key, value in dotenv_values(self.path).items()
            if value is not None
        }

    def get(self, name: str) -> str:
        return self._fallback.get(name) or self._values.get(name, "")
