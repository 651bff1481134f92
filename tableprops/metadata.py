"""Mutable table metadata record and caching modes."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type

from .compaction import CompactionStrategy, SizeTieredCompactionStrategy
from .compression import CompressionParameters
from .consistency import ConsistencyLevel
from .errors import ConfigError

__all__ = ["Caching", "TableMetadata"]


class Caching(enum.Enum):
    ALL = "ALL"
    KEYS_ONLY = "KEYS_ONLY"
    ROWS_ONLY = "ROWS_ONLY"
    NONE = "NONE"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "Caching":
        try:
            return cls[value.upper()]
        except KeyError:
            available = ", ".join(m.value for m in cls)
            raise ConfigError(f"{value} not found, available types: {available}.") from None


@dataclass
class TableMetadata:
    """Current schema configuration of one table.

    Attributes are read for the current value and assigned for the new one.
    """

    keyspace: str
    name: str
    comment: str = ""
    read_repair_chance: float = 0.1
    dclocal_read_repair_chance: float = 0.0
    gc_grace_seconds: int = 864000
    replicate_on_write: bool = True
    min_compaction_threshold: int = 4
    max_compaction_threshold: int = 32
    caching: Caching = Caching.KEYS_ONLY
    bloom_filter_fp_chance: Optional[float] = None
    compaction_strategy_class: Type[CompactionStrategy] = SizeTieredCompactionStrategy
    compaction_strategy_options: Dict[str, str] = field(default_factory=dict)
    compression_parameters: CompressionParameters = field(default_factory=CompressionParameters)
    default_read_consistency: ConsistencyLevel = ConsistencyLevel.ONE
    default_write_consistency: ConsistencyLevel = ConsistencyLevel.ONE

    def describe(self) -> Dict[str, Any]:
        """Plain, JSON-friendly view of every property."""
        return {
            "keyspace": self.keyspace,
            "name": self.name,
            "comment": self.comment,
            "read_repair_chance": self.read_repair_chance,
            "dclocal_read_repair_chance": self.dclocal_read_repair_chance,
            "gc_grace_seconds": self.gc_grace_seconds,
            "replicate_on_write": self.replicate_on_write,
            "min_compaction_threshold": self.min_compaction_threshold,
            "max_compaction_threshold": self.max_compaction_threshold,
            "caching": str(self.caching),
            "bloom_filter_fp_chance": self.bloom_filter_fp_chance,
            "compaction_strategy_class": self.compaction_strategy_class.__name__,
            "compaction_strategy_options": dict(self.compaction_strategy_options),
            "compression_parameters": self.compression_parameters.as_options(),
            "default_read_consistency": str(self.default_read_consistency),
            "default_write_consistency": str(self.default_write_consistency),
        }
