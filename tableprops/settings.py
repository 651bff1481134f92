from __future__ import annotations

"""Process-wide settings consulted by the property pipeline.

Settings load from an optional YAML file, then environment overrides apply:
  - TABLEPROPS_DEFAULT_COMPRESSOR=<name>  -> default_compressor (empty disables)
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .keywords import suggest

__all__ = [
    "Settings",
    "DEFAULT_COMPRESSOR",
    "ENV_DEFAULT_COMPRESSOR",
    "load_settings",
    "current_settings",
    "configure",
]

logger = logging.getLogger(__name__)

DEFAULT_COMPRESSOR = "SnappyCompressor"
ENV_DEFAULT_COMPRESSOR = "TABLEPROPS_DEFAULT_COMPRESSOR"

_ALLOWED = {"default_compressor"}


@dataclass(frozen=True)
class Settings:
    default_compressor: Optional[str] = DEFAULT_COMPRESSOR


# ---- small helpers --------------------------------------------------------

def _from_mapping(data: Dict[str, Any]) -> Settings:
    for k in data:
        if k not in _ALLOWED:
            sug = suggest(k, _ALLOWED)
            hint = f" (did you mean '{sug}')" if sug else ""
            raise ConfigError(f"settings.{k} unknown key{hint}")
    if "default_compressor" not in data:
        return Settings()
    value = data["default_compressor"]
    if value is not None and not isinstance(value, str):
        raise ConfigError("settings.default_compressor must be a string or null")
    return Settings(default_compressor=value or None)


def _apply_env_overrides(settings: Settings) -> Settings:
    value = os.getenv(ENV_DEFAULT_COMPRESSOR)
    if value is None:
        return settings
    value = value.strip()
    logger.debug("%s overrides default_compressor -> %r", ENV_DEFAULT_COMPRESSOR, value)
    return replace(settings, default_compressor=value or None)


# ---- loader ---------------------------------------------------------------

def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load YAML settings if a file is given; otherwise return defaults.
    A missing file also yields defaults. Environment overrides apply last.
    """
    if not path:
        return _apply_env_overrides(Settings())
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.debug("settings file %s not found; using defaults", path)
        return _apply_env_overrides(Settings())
    except yaml.YAMLError as e:
        raise ConfigError(f"failed to parse settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"settings file {path} must contain a mapping")
    return _apply_env_overrides(_from_mapping(data))


_CURRENT: Optional[Settings] = None


def current_settings() -> Settings:
    """Return the process-wide settings, loading defaults on first use."""
    global _CURRENT
    if _CURRENT is None:
        _CURRENT = load_settings()
    return _CURRENT


def configure(settings: Optional[Settings]) -> Optional[Settings]:
    """Install process-wide settings and return the previous value.

    Passing ``None`` resets to lazily loaded defaults.
    """
    global _CURRENT
    previous, _CURRENT = _CURRENT, settings
    return previous
