"""Typed access to the raw property bag of a schema statement.

The bag maps an option name to either a scalar string or a nested
``{sub_option: string}`` mapping. Getters take a single default that is
returned when the key is absent; a value of the wrong shape or an unparseable
literal raises ``MalformedValueError`` and is never silently defaulted.
Numeric literals are plain ASCII decimal: no digit separators, no padding.
"""
from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Mapping, Optional

from .errors import ConfigError, MalformedValueError
from .keywords import suggest

__all__ = ["INT_LITERAL", "DOUBLE_LITERAL", "PropertyDefinitions", "RawProperties"]

RawProperties = Mapping[str, Any]

_TRUE_LITERALS = {"1", "true", "yes"}

# ASCII digits only: no underscores, no surrounding whitespace
INT_LITERAL = re.compile(r"[+-]?[0-9]+", re.ASCII)
DOUBLE_LITERAL = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?Infinity|NaN",
    re.ASCII,
)


class PropertyDefinitions:
    """Read-only view over one statement's raw properties."""

    def __init__(self, properties: Optional[RawProperties] = None):
        self.properties: Dict[str, Any] = dict(properties or {})

    def __contains__(self, key: str) -> bool:
        return key in self.properties

    def has_property(self, key: str) -> bool:
        return key in self.properties

    def validate_keys(self, keywords: Iterable[str], obsolete: Iterable[str]) -> None:
        """Reject retired and unknown option names, in bag order."""
        keywords = frozenset(keywords)
        obsolete = frozenset(obsolete)
        for name in self.properties:
            if name in keywords:
                continue
            if name in obsolete:
                raise ConfigError(f"The '{name}' option is obsolete and no longer supported")
            sug = suggest(name, keywords)
            hint = f" (did you mean '{sug}')" if sug else ""
            raise ConfigError(f"Unknown property '{name}'{hint}")

    def get_simple(self, key: str) -> Optional[str]:
        value = self.properties.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise MalformedValueError(f"Invalid value for property '{key}'. It should be a string")
        return value

    def get_map(self, key: str) -> Optional[Dict[str, str]]:
        value = self.properties.get(key)
        if value is None:
            return None
        if not isinstance(value, Mapping):
            raise MalformedValueError(f"Invalid value for property '{key}'. It should be a map.")
        return dict(value)

    def get_string(self, key: str, default: Optional[str]) -> Optional[str]:
        value = self.get_simple(key)
        return default if value is None else value

    def get_boolean(self, key: str, default: bool) -> bool:
        value = self.get_simple(key)
        if value is None:
            return default
        return value.strip().lower() in _TRUE_LITERALS

    def get_double(self, key: str, default: Optional[float]) -> Optional[float]:
        value = self.get_simple(key)
        if value is None:
            return default
        if not DOUBLE_LITERAL.fullmatch(value):
            raise MalformedValueError(f"Invalid double value {value} for '{key}'")
        return float(value)

    def get_int(self, key: str, default: Optional[int]) -> Optional[int]:
        return self.to_int(key, self.get_simple(key), default)

    @staticmethod
    def to_int(key: str, value: Optional[str], default: Optional[int]) -> Optional[int]:
        if value is None:
            return default
        if not INT_LITERAL.fullmatch(value):
            raise MalformedValueError(f"Invalid integer value {value} for '{key}'")
        return int(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.properties!r})"
