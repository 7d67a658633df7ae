"""
External key names for dataclass fields.

**Conceptual**: Every bound field has one *resolved key*, a lowercase,
underscore-separated name. The same key is used twice:
  - uppercased (and optionally prefixed) as the environment variable name,
  - verbatim as the key inside the TOML environment section.

A field either carries an explicit key in its metadata tag, is excluded with
the omit sentinel, or gets a key derived from its attribute name.

**Word boundaries**: ``to_snake_case`` inserts an underscore before an
uppercase character when
  - the previous character was not uppercase (``oneTwo`` -> ``one_two``), or
  - it ends an uppercase run and the next character is not uppercase
    (``OneTWOThree`` -> ``one_two_three``, ``ONETWOThree`` -> ``onetwo_three``).

Acronyms therefore stay together and only their last capital starts the
following word. External key compatibility depends on this rule, so it must
not be "improved".
"""

from typing import Optional

OMIT_SENTINEL = "-"


def to_snake_case(name: str) -> str:
    """
    Convert an identifier to lowercase words joined by underscores.

    Already lowercase, underscored names are returned unchanged, so applying
    the function twice gives the same result as applying it once.

    Example:
        >>> to_snake_case("OneTWOThree")
        'one_two_three'
        >>> to_snake_case("ONETWOThree")
        'onetwo_three'
    """
    out = []
    last_upper = False
    length = len(name)

    for i, ch in enumerate(name):
        upper = ch.isupper()

        if i != 0 and upper:
            if not last_upper:
                out.append("_")
            elif i + 1 < length and not name[i + 1].isupper():
                out.append("_")

        out.append(ch.lower())
        last_upper = upper

    return "".join(out)


def resolve_key(name: str, tag: Optional[str] = None, omit: str = OMIT_SENTINEL) -> str:
    """
    Resolve the external key of a field.

    Args:
        name: The field's attribute name.
        tag: Explicit key from the field's metadata, if any.
        omit: Tag value that excludes the field.

    Returns:
        ``""`` if the field is omitted, the tag verbatim if one is given,
        otherwise ``to_snake_case(name)``.
    """
    if tag == omit:
        return ""
    if tag:
        return tag
    return to_snake_case(name)


def env_var_name(key: str, prefix: str = "") -> str:
    """
    Build the environment variable name for a resolved key.

    Example:
        >>> env_var_name("db_host", "myapp")
        'MYAPP_DB_HOST'
    """
    if prefix:
        key = f"{prefix}_{key}"
    return key.upper()
