"""tableprops: public API surface.

Validates the table options of a schema statement and applies them to the
table's metadata record. `tableprops` and `tableprops.errors` are the public
import roots.
"""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from . import errors as errors  # noqa: F401
from .consistency import ConsistencyLevel, ReplicationApplicability
from .metadata import Caching, TableMetadata
from .pipeline import ResolvedProperties, TablePropertyDefinitions
from .settings import Settings, configure, current_settings, load_settings


def _version_from_metadata() -> str | None:
    try:
        return _pkg_version("tableprops")
    except PackageNotFoundError:
        return None


__version__ = _version_from_metadata() or "0+unknown"

# Star-export surface (deterministic ordering).
__all__ = [
    "Caching",
    "ConsistencyLevel",
    "ReplicationApplicability",
    "ResolvedProperties",
    "Settings",
    "TableMetadata",
    "TablePropertyDefinitions",
    "__version__",
    "configure",
    "current_settings",
    "errors",
    "load_settings",
]
