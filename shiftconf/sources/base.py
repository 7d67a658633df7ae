"""
Abstract environment lookup used by the binder.

**Conceptual**: The binder never reads ``os.environ`` directly. It depends on
an ``Environment``: any object that can answer "what is the value of this
variable?". In production pass a ``ProcessEnvironment``; in tests pass a
``StaticEnvironment`` built from a plain dict, so results are deterministic
and the real process environment is never touched.

**Why protocols over inheritance?**
  - Any class with a matching ``get`` method is an Environment, no base class.
  - Test doubles are one-liners.

**Contract**: ``get`` returns the empty string for an unset variable. An
empty value and an unset variable are therefore indistinguishable, and both
mean "absent" to the binder.
"""

from typing import Protocol


class Environment(Protocol):
    """
    Protocol for looking up environment variables by (uppercase) name.

    **Example**:
        def bind(environ: Environment):
            port = environ.get("APP_PORT")

        bind(ProcessEnvironment())
        bind(StaticEnvironment({"APP_PORT": "8080"}))
    """

    def get(self, name: str) -> str:
        """
        Return the value of ``name``.

        Returns:
            The variable's value, or ``""`` if it is not set.
        """
        ...
