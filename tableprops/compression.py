"""Compression sub-options and compression parameter construction."""
from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Type

from .errors import ConfigError
from .properties import DOUBLE_LITERAL, INT_LITERAL

__all__ = [
    "SSTABLE_COMPRESSION",
    "CHUNK_LENGTH_KB",
    "CRC_CHECK_CHANCE",
    "DEFAULT_CHUNK_LENGTH",
    "Compressor",
    "LZ4Compressor",
    "SnappyCompressor",
    "DeflateCompressor",
    "BUILTIN_COMPRESSORS",
    "CompressionParameters",
    "resolve_compressor",
    "compression_options",
]

logger = logging.getLogger(__name__)

SSTABLE_COMPRESSION = "sstable_compression"
CHUNK_LENGTH_KB = "chunk_length_kb"
CRC_CHECK_CHANCE = "crc_check_chance"

DEFAULT_CHUNK_LENGTH = 65536


class Compressor:
    """Marker base for compressors selected by name."""

    supported_options: FrozenSet[str] = frozenset()


class LZ4Compressor(Compressor):
    pass


class SnappyCompressor(Compressor):
    pass


class DeflateCompressor(Compressor):
    pass


BUILTIN_COMPRESSORS: Mapping[str, Type[Compressor]] = MappingProxyType({
    cls.__name__: cls for cls in (LZ4Compressor, SnappyCompressor, DeflateCompressor)
})


def resolve_compressor(name: str) -> Type[Compressor]:
    if name in BUILTIN_COMPRESSORS:
        return BUILTIN_COMPRESSORS[name]
    module_name, _, attr = name.rpartition(".")
    if not module_name:
        raise ConfigError(f"Could not create Compression for type {name}")
    try:
        cls = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigError(f"Could not create Compression for type {name}") from e
    if not (isinstance(cls, type) and issubclass(cls, Compressor)):
        raise ConfigError(f"Compression class {name} is not a Compressor")
    return cls


def _parse_chunk_length(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_CHUNK_LENGTH
    if not INT_LITERAL.fullmatch(value):
        raise ConfigError(f"Invalid value for {CHUNK_LENGTH_KB}: {value}")
    return int(value) * 1024


def _parse_crc_check_chance(value: Optional[str]) -> float:
    if value is None:
        return 1.0
    if not DOUBLE_LITERAL.fullmatch(value):
        raise ConfigError(f"Invalid value for {CRC_CHECK_CHANCE}: {value}")
    chance = float(value)
    if not (0.0 <= chance <= 1.0):
        raise ConfigError(f"{CRC_CHECK_CHANCE} should be between 0.0 and 1.0")
    return chance


@dataclass(frozen=True)
class CompressionParameters:
    """Which compressor and block size compress a table's data segments.

    ``compressor`` is ``None`` when compression is disabled.
    """

    compressor: Optional[Type[Compressor]] = SnappyCompressor
    chunk_length: int = DEFAULT_CHUNK_LENGTH
    crc_check_chance: float = 1.0
    other_options: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def create(cls, options: Mapping[str, str]) -> "CompressionParameters":
        opts: Dict[str, str] = dict(options)
        compressor_name = opts.pop(SSTABLE_COMPRESSION, None)
        chunk_length = _parse_chunk_length(opts.pop(CHUNK_LENGTH_KB, None))
        crc_check_chance = _parse_crc_check_chance(opts.pop(CRC_CHECK_CHANCE, None))

        compressor = resolve_compressor(compressor_name) if compressor_name else None
        if compressor is not None:
            unknown = set(opts) - compressor.supported_options
            if unknown:
                raise ConfigError(f"Unknown compression options ({', '.join(sorted(unknown))})")

        params = cls(
            compressor=compressor,
            chunk_length=chunk_length,
            crc_check_chance=crc_check_chance,
            other_options=MappingProxyType(opts),
        )
        params.validate()
        return params

    @property
    def chunk_length_kb(self) -> int:
        return self.chunk_length // 1024

    @property
    def enabled(self) -> bool:
        return self.compressor is not None

    def validate(self) -> None:
        if self.chunk_length <= 0:
            raise ConfigError(f"Invalid negative or null {CHUNK_LENGTH_KB}")
        if self.chunk_length & (self.chunk_length - 1):
            raise ConfigError(f"{CHUNK_LENGTH_KB} must be a power of 2")

    def as_options(self) -> Dict[str, str]:
        if self.compressor is None:
            return {SSTABLE_COMPRESSION: ""}
        out = {
            SSTABLE_COMPRESSION: self.compressor.__name__,
            CHUNK_LENGTH_KB: str(self.chunk_length_kb),
        }
        if self.crc_check_chance != 1.0:
            out[CRC_CHECK_CHANCE] = str(self.crc_check_chance)
        out.update(self.other_options)
        return out


def compression_options(
    raw_options: Optional[Mapping[str, str]],
    default_compressor: Optional[str],
) -> Dict[str, str]:
    """Return the supplied compression map, or one naming the default compressor.

    An empty map counts as absent. Never returns ``None``: with no supplied map
    and no configured default the result is empty.
    """
    if raw_options:
        return dict(raw_options)
    if default_compressor:
        logger.debug("no compression options supplied; defaulting to %s", default_compressor)
        return {SSTABLE_COMPRESSION: default_compressor}
    return {}
