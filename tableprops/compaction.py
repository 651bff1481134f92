"""Compaction strategy lookup and compaction sub-option extraction."""
from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Type

from .errors import ConfigError, MalformedValueError
from .keywords import COMPACTION_STRATEGY_CLASS_KEY, KW_COMPACTION

__all__ = [
    "CompactionStrategy",
    "SizeTieredCompactionStrategy",
    "LeveledCompactionStrategy",
    "BUILTIN_STRATEGIES",
    "CompactionConfig",
    "StrategyResolver",
    "resolve_compaction_strategy",
    "extract_compaction",
]

logger = logging.getLogger(__name__)


class CompactionStrategy:
    """Marker base for pluggable compaction strategies selected by name."""


class SizeTieredCompactionStrategy(CompactionStrategy):
    pass


class LeveledCompactionStrategy(CompactionStrategy):
    pass


BUILTIN_STRATEGIES: Mapping[str, Type[CompactionStrategy]] = MappingProxyType({
    cls.__name__: cls for cls in (SizeTieredCompactionStrategy, LeveledCompactionStrategy)
})

StrategyResolver = Callable[[str], Type[CompactionStrategy]]


def resolve_compaction_strategy(name: str) -> Type[CompactionStrategy]:
    """Map a strategy name to its type.

    Short names resolve against the built-in strategies; dotted names are
    imported as ``package.module.ClassName`` and must subclass
    ``CompactionStrategy``.
    """
    if name is None:
        name = ""
    if not isinstance(name, str):
        raise MalformedValueError(f"Invalid compaction strategy class {name!r}. It should be a string")
    name = name.strip()
    if name in BUILTIN_STRATEGIES:
        return BUILTIN_STRATEGIES[name]
    module_name, _, attr = name.rpartition(".")
    if not module_name:
        raise ConfigError(f"Unable to find compaction strategy class '{name}'")
    try:
        cls = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigError(f"Unable to find compaction strategy class '{name}'") from e
    if not (isinstance(cls, type) and issubclass(cls, CompactionStrategy)):
        raise ConfigError(f"Compaction strategy class {name} is not a CompactionStrategy")
    return cls


@dataclass(frozen=True)
class CompactionConfig:
    strategy: Optional[Type[CompactionStrategy]] = None
    options: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def extract_compaction(
    raw_options: Optional[Mapping[str, str]],
    resolve: StrategyResolver = resolve_compaction_strategy,
) -> CompactionConfig:
    """Resolve the strategy named by the ``class`` sub-option and strip it.

    An absent or empty compaction map yields no strategy and no options.
    """
    if not raw_options:
        return CompactionConfig()
    options: Dict[str, str] = dict(raw_options)
    strategy_name = options.pop(COMPACTION_STRATEGY_CLASS_KEY, None)
    if strategy_name is None:
        raise ConfigError(
            f"Missing sub-option '{COMPACTION_STRATEGY_CLASS_KEY}' for the '{KW_COMPACTION}' option."
        )
    strategy = resolve(strategy_name)
    logger.debug("resolved compaction strategy %r -> %s", strategy_name, strategy.__name__)
    return CompactionConfig(strategy=strategy, options=MappingProxyType(options))
