"""Validate a schema statement's table properties and apply them to metadata.

Two phases over one raw property bag:

1. ``validate()`` rejects unknown and retired option names and resolves the
   compaction strategy named by the ``class`` sub-option. It returns an
   immutable ``ResolvedProperties`` and never touches table metadata.
2. ``apply_to_metadata(target)`` writes every property onto the target, each
   defaulting to the target's current value when it was not supplied.

Application is not transactional: when a step fails, the steps before it have
already been written to the target.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Type

from .compaction import (
    CompactionConfig,
    CompactionStrategy,
    StrategyResolver,
    extract_compaction,
    resolve_compaction_strategy,
)
from .compression import CompressionParameters, compression_options
from .consistency import ApplicabilityChecker, ConsistencyLevel, parse_consistency_level
from .errors import ConfigError, InvalidRequestError, PipelineStateError
from .keywords import (
    KEYWORDS,
    KW_BF_FP_CHANCE,
    KW_CACHING,
    KW_COMMENT,
    KW_COMPACTION,
    KW_COMPRESSION,
    KW_DCLOCAL_READ_REPAIR_CHANCE,
    KW_DEFAULT_READ_CONSISTENCY,
    KW_DEFAULT_WRITE_CONSISTENCY,
    KW_GC_GRACE_SECONDS,
    KW_MAX_COMPACTION_THRESHOLD,
    KW_MIN_COMPACTION_THRESHOLD,
    KW_READ_REPAIR_CHANCE,
    KW_REPLICATE_ON_WRITE,
    OBSOLETE_KEYWORDS,
)
from .metadata import Caching, TableMetadata
from .properties import PropertyDefinitions, RawProperties
from .settings import Settings, current_settings

__all__ = ["ResolvedProperties", "TablePropertyDefinitions"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedProperties:
    """Outcome of a successful ``validate()``."""

    compaction: CompactionConfig = field(default_factory=CompactionConfig)

    @property
    def compaction_strategy(self) -> Optional[Type[CompactionStrategy]]:
        return self.compaction.strategy

    @property
    def compaction_options(self) -> Mapping[str, str]:
        return self.compaction.options


class TablePropertyDefinitions(PropertyDefinitions):
    """Table options attached to one CREATE/ALTER TABLE statement.

    Parameters
    ----------
    properties:
        The raw bag produced by the statement parser. It is copied, never mutated.
    settings:
        Process-wide settings; defaults to ``current_settings()`` at use time.
    strategy_resolver:
        Maps a compaction strategy name to its type.
    applicability:
        Read/write consistency applicability checker keyed by keyspace. Only
        needed when a default consistency override is supplied.
    """

    def __init__(
        self,
        properties: Optional[RawProperties] = None,
        *,
        settings: Optional[Settings] = None,
        strategy_resolver: StrategyResolver = resolve_compaction_strategy,
        applicability: Optional[ApplicabilityChecker] = None,
    ):
        super().__init__(properties)
        self.settings = settings
        self.strategy_resolver = strategy_resolver
        self.applicability = applicability
        self._resolved: Optional[ResolvedProperties] = None

    # ---- phase 1 ---------------------------------------------------------

    def validate(self) -> ResolvedProperties:
        """Check option names and resolve the compaction strategy once."""
        if self._resolved is not None:
            return self._resolved
        self.validate_keys(KEYWORDS, OBSOLETE_KEYWORDS)
        compaction = extract_compaction(self.get_map(KW_COMPACTION), self.strategy_resolver)
        self._resolved = ResolvedProperties(compaction=compaction)
        return self._resolved

    @property
    def resolved(self) -> Optional[ResolvedProperties]:
        return self._resolved

    # ---- resolvers -------------------------------------------------------

    def get_compaction_options(self) -> Dict[str, str]:
        if self._resolved is not None and self._resolved.compaction_strategy is not None:
            return dict(self._resolved.compaction_options)
        return self.get_map(KW_COMPACTION) or {}

    def get_compression_options(self) -> Dict[str, str]:
        settings = self.settings or current_settings()
        return compression_options(self.get_map(KW_COMPRESSION), settings.default_compressor)

    def get_consistency_level(self, key: str) -> Optional[ConsistencyLevel]:
        value = self.get_simple(key)
        if value is None:
            return None
        return parse_consistency_level(value)

    def _resolve_with_fallback(self, key: str, sources: Sequence[Optional[str]], current: int) -> int:
        """First supplied source wins; the target's current value is the last resort."""
        for raw in sources:
            if raw is not None:
                return self.to_int(key, raw, current)
        return current

    def _checker(self) -> ApplicabilityChecker:
        if self.applicability is None:
            raise PipelineStateError("no consistency applicability checker configured")
        return self.applicability

    # ---- phase 2 ---------------------------------------------------------

    def apply_to_metadata(
        self,
        cfm: TableMetadata,
        resolved: Optional[ResolvedProperties] = None,
    ) -> None:
        if resolved is None:
            resolved = self._resolved
        if resolved is None:
            raise PipelineStateError("table properties must be validated before they are applied")
        if self.applicability is None and (
            self.properties.get(KW_DEFAULT_READ_CONSISTENCY) is not None
            or self.properties.get(KW_DEFAULT_WRITE_CONSISTENCY) is not None
        ):
            raise PipelineStateError("no consistency applicability checker configured")

        if self.has_property(KW_COMMENT):
            cfm.comment = self.get_string(KW_COMMENT, "")

        cfm.read_repair_chance = self.get_double(KW_READ_REPAIR_CHANCE, cfm.read_repair_chance)
        cfm.dclocal_read_repair_chance = self.get_double(
            KW_DCLOCAL_READ_REPAIR_CHANCE, cfm.dclocal_read_repair_chance
        )
        cfm.gc_grace_seconds = self.get_int(KW_GC_GRACE_SECONDS, cfm.gc_grace_seconds)
        cfm.replicate_on_write = self.get_boolean(KW_REPLICATE_ON_WRITE, cfm.replicate_on_write)

        compaction_options = resolved.compaction_options
        cfm.min_compaction_threshold = self._resolve_with_fallback(
            KW_MIN_COMPACTION_THRESHOLD,
            [compaction_options.get(KW_MIN_COMPACTION_THRESHOLD)],
            cfm.min_compaction_threshold,
        )
        cfm.max_compaction_threshold = self._resolve_with_fallback(
            KW_MAX_COMPACTION_THRESHOLD,
            [compaction_options.get(KW_MAX_COMPACTION_THRESHOLD)],
            cfm.max_compaction_threshold,
        )

        cfm.caching = Caching.from_string(self.get_string(KW_CACHING, str(cfm.caching)))
        cfm.bloom_filter_fp_chance = self.get_double(KW_BF_FP_CHANCE, cfm.bloom_filter_fp_chance)

        if resolved.compaction_strategy is not None:
            cfm.compaction_strategy_class = resolved.compaction_strategy
            cfm.compaction_strategy_options = dict(compaction_options)
            logger.debug(
                "%s.%s: compaction -> %s %s",
                cfm.keyspace, cfm.name, resolved.compaction_strategy.__name__, dict(compaction_options),
            )

        compression = self.get_compression_options()
        if compression:
            cfm.compression_parameters = CompressionParameters.create(compression)

        try:
            read_cl = self.get_consistency_level(KW_DEFAULT_READ_CONSISTENCY)
            if read_cl is not None:
                self._checker().validate_for_read(read_cl, cfm.keyspace)
                cfm.default_read_consistency = read_cl
            write_cl = self.get_consistency_level(KW_DEFAULT_WRITE_CONSISTENCY)
            if write_cl is not None:
                self._checker().validate_for_write(write_cl, cfm.keyspace)
                cfm.default_write_consistency = write_cl
        except InvalidRequestError as e:
            raise ConfigError(str(e)) from e

        logger.debug("%s.%s: applied properties %s", cfm.keyspace, cfm.name, sorted(self.properties))
