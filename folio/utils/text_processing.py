"""
Text processing utilities for turning loosely-typed resume values into display text and flags.
"""

import re
from typing import Any, Iterable, List

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_WHITESPACE = re.compile(r"\s+")

TRUE_STRINGS = {"true", "yes", "on", "1"}
FALSE_STRINGS = {"false", "no", "off", "0"}


def to_display_text(value: Any) -> str:
    """
    Coerce a resume value to a display string.

    Strings pass through; numbers and booleans are stringified; lists keep only
    their non-empty string members, joined by ", ". Mappings and other objects
    have no meaningful display form and become "".

    Examples:
        >>> to_display_text(["Python", "", "Go"])
        'Python, Go'
        >>> to_display_text(3.9)
        '3.9'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(item for item in value if isinstance(item, str) and item.strip())
    return ""


def to_flag(value: Any, default: bool) -> bool:
    """
    Read a loosely-typed boolean.

    Strings are read by meaning ("false", "no", "off" and "0" are False), numbers
    are False only at zero, and anything else falls back to default.

    Examples:
        >>> to_flag("false", True)
        False
        >>> to_flag(None, True)
        True
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    return default


def non_empty_strings(values: Iterable[Any]) -> List[str]:
    """Keep the members of values that display as non-blank text."""
    result = []
    for value in values or []:
        text = to_display_text(value)
        if text.strip():
            result.append(text)
    return result


def humanize_key(key: str) -> str:
    """
    Turn a camelCase or snake_case key into a Title Case label.

    Examples:
        >>> humanize_key("securityCompliance")
        'Security Compliance'
        >>> humanize_key("cloud_platforms")
        'Cloud Platforms'
    """
    spaced = _CAMEL_BOUNDARY.sub(" ", key.replace("_", " "))
    words = _WHITESPACE.split(spaced.strip())
    return " ".join(word[:1].upper() + word[1:] for word in words if word)
