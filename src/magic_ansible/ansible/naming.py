"""Name conversions between API (camelCase) and Ansible (snake_case) styles."""

import re as _re

_ACRONYM_BOUNDARY = _re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = _re.compile(r"([a-z\d])([A-Z])")
_UNDERSCORE_WORD = _re.compile(r"(?:_|(/))([a-z\d]*)")


def underscore(source: str) -> str:
    """
    Convert a camelCase or PascalCase name to snake_case.

    >>> underscore("fooBarBaz")
    'foo_bar_baz'
    >>> underscore("HTTPHealthCheck")
    'http_health_check'
    """
    result = _ACRONYM_BOUNDARY.sub(r"\1_\2", source)
    result = _WORD_BOUNDARY.sub(r"\1_\2", result)
    result = result.replace("-", "_").replace(".", "_")
    return result.lower()


def camelize(term: str, first_letter: str = "upper") -> str:
    """
    Convert a snake_case (or already camelCase) name to camel case.

    Args:
        term: Name to convert.
        first_letter: "upper" for PascalCase, "lower" for camelCase.

    >>> camelize("foo_bar")
    'FooBar'
    >>> camelize("FooBar", "lower")
    'fooBar'
    """
    if first_letter not in ("upper", "lower"):
        raise ValueError(f"first_letter must be 'upper' or 'lower', got {first_letter!r}")
    if not term:
        return term

    result = _UNDERSCORE_WORD.sub(
        lambda m: (m.group(1) or "") + m.group(2)[:1].upper() + m.group(2)[1:], term
    )
    if first_letter == "upper":
        return result[:1].upper() + result[1:]
    return result[:1].lower() + result[1:]


def plural(source: str) -> str:
    """English plural of an API field name."""
    if source.endswith(("ies", "es")):
        return source
    if source.endswith("ex"):
        return source[:-2] + "ices"
    if source.endswith(("sh", "ch", "x")):
        return source + "es"
    if source.endswith(("ey", "ay", "oy")):
        return source + "s"
    if source.endswith("y"):
        return source[:-1] + "ies"
    if source.endswith("s"):
        return source
    return source + "s"


def singular(source: str) -> str:
    """English singular of an API field name."""
    if source.endswith("ies") and len(source) > 3:
        return source[:-3] + "y"
    if source.endswith("ices"):
        return source[:-4] + "ex"
    if source.endswith(("sses", "shes", "ches", "xes")):
        return source[:-2]
    if source.endswith("s") and not source.endswith(("ss", "us", "is")):
        return source[:-1]
    return source
