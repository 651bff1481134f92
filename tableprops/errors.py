from __future__ import annotations

"""Typed error taxonomy.

Only `tableprops` and `tableprops.errors` are public import roots. This module
exposes the operator-facing error classes and a small helper `format_error`.
"""

__all__ = [
    "TablePropsError",
    "ConfigError",
    "MalformedValueError",
    "InvalidRequestError",
    "PipelineStateError",
    "format_error",
]


class TablePropsError(Exception):
    """Base class for all typed, operator-facing errors in tableprops."""
    pass


class ConfigError(TablePropsError):
    """Unknown or retired option, missing sub-option, unresolvable name, bad level."""
    pass


class MalformedValueError(TablePropsError):
    """A raw property value does not have the shape a typed getter expects."""
    pass


class InvalidRequestError(TablePropsError):
    """A consistency level is not applicable to the keyspace's replication setup."""
    pass


class PipelineStateError(TablePropsError):
    """Properties were applied before they were validated."""
    pass


def format_error(e: BaseException) -> str:
    """Return a short, uniform operator-facing message like 'ConfigError: detail'."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name


# Keep star-export order deterministic for tests and tooling
__all__ = sorted(__all__)
