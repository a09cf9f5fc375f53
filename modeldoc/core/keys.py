"""Model key format.

A key is an optional namespace followed by ``:`` and a value, all lowercase,
e.g. ``"spell/fireball"`` or ``"combat:weapon.sword"``.
"""

from __future__ import annotations

import re
from functools import lru_cache

from modeldoc.core.exceptions import ValidationError

NAMESPACE_SEPARATOR = ":"

NAMESPACE_PATTERN = r"[a-z0-9_\-.]+"
VALUE_PATTERN = r"[a-z0-9_\-./]+"
KEY_PATTERN = rf"({NAMESPACE_PATTERN}{NAMESPACE_SEPARATOR})?{VALUE_PATTERN}"

# Child keys equal to this sentinel take the key of the parameter type's own model tag
DEFAULT_KEY = "__default__"


@lru_cache(maxsize=16)
def compile_key_pattern(pattern: str = KEY_PATTERN) -> re.Pattern[str]:
    """Compile a key-format pattern.

    Raises
    ------
    ValidationError
        If the pattern is not a valid regular expression
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValidationError(
            "key_pattern", f"is not a valid regular expression: {e}", pattern
        ) from e


def is_valid_key(key: str, pattern: str = KEY_PATTERN) -> bool:
    """Check whether ``key`` matches ``pattern`` in full.

    Examples
    --------
    >>> is_valid_key("foo/bar")
    True
    >>> is_valid_key("Foo Bar")
    False
    """
    return compile_key_pattern(pattern).fullmatch(key) is not None
