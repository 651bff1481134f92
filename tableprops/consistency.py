"""Consistency levels and their read/write applicability per keyspace."""
from __future__ import annotations

import enum
from typing import Mapping, Protocol

from .errors import ConfigError, InvalidRequestError

__all__ = [
    "ConsistencyLevel",
    "NETWORK_TOPOLOGY_STRATEGY",
    "parse_consistency_level",
    "ApplicabilityChecker",
    "ReplicationApplicability",
]

NETWORK_TOPOLOGY_STRATEGY = "NetworkTopologyStrategy"


class ConsistencyLevel(enum.Enum):
    ANY = 0
    ONE = 1
    TWO = 2
    THREE = 3
    QUORUM = 4
    ALL = 5
    LOCAL_QUORUM = 6
    EACH_QUORUM = 7

    def __str__(self) -> str:
        return self.name


def parse_consistency_level(value: str) -> ConsistencyLevel:
    """Look up a level by its exact (case-sensitive) name."""
    try:
        return ConsistencyLevel[value]
    except KeyError:
        raise ConfigError(f"Invalid consistency level value: {value}") from None


class ApplicabilityChecker(Protocol):
    def validate_for_read(self, level: ConsistencyLevel, keyspace: str) -> None: ...

    def validate_for_write(self, level: ConsistencyLevel, keyspace: str) -> None: ...


class ReplicationApplicability:
    """Checks levels against each keyspace's replication strategy name.

    ``strategies`` maps keyspace name to the short name of its replication
    strategy (e.g. ``SimpleStrategy``, ``NetworkTopologyStrategy``).
    """

    def __init__(self, strategies: Mapping[str, str]):
        self.strategies = dict(strategies)

    def _strategy(self, keyspace: str) -> str:
        try:
            return self.strategies[keyspace]
        except KeyError:
            raise InvalidRequestError(f"Keyspace {keyspace} does not exist") from None

    def _require_network_topology(self, level: ConsistencyLevel, keyspace: str) -> None:
        strategy = self._strategy(keyspace)
        if strategy.rpartition(".")[2] != NETWORK_TOPOLOGY_STRATEGY:
            raise InvalidRequestError(
                f"consistency level {level} not compatible with replication strategy ({strategy})"
            )

    def validate_for_read(self, level: ConsistencyLevel, keyspace: str) -> None:
        if level in (ConsistencyLevel.ANY, ConsistencyLevel.EACH_QUORUM):
            raise InvalidRequestError(f"{level} ConsistencyLevel is only supported for writes")
        if level is ConsistencyLevel.LOCAL_QUORUM:
            self._require_network_topology(level, keyspace)
        else:
            self._strategy(keyspace)

    def validate_for_write(self, level: ConsistencyLevel, keyspace: str) -> None:
        if level in (ConsistencyLevel.LOCAL_QUORUM, ConsistencyLevel.EACH_QUORUM):
            self._require_network_topology(level, keyspace)
        else:
            self._strategy(keyspace)
