from __future__ import annotations

import pytest

from tableprops.compaction import LeveledCompactionStrategy, SizeTieredCompactionStrategy
from tableprops.compression import SSTABLE_COMPRESSION
from tableprops.consistency import ConsistencyLevel
from tableprops.errors import ConfigError, MalformedValueError
from tableprops.keywords import KEYWORDS, OBSOLETE_KEYWORDS
from tableprops.pipeline import ResolvedProperties, TablePropertyDefinitions
from tableprops.settings import Settings, configure

from tests.helpers.metadata import make_defs

# One syntactically valid value per recognized option
VALID_VALUES = {
    "comment": "users table",
    "read_repair_chance": "0.2",
    "dclocal_read_repair_chance": "0.1",
    "gc_grace_seconds": "100",
    "replicate_on_write": "true",
    "caching": "ALL",
    "bloom_filter_fp_chance": "0.01",
    "compaction": {"class": "LeveledCompactionStrategy"},
    "compression": {SSTABLE_COMPRESSION: "LZ4Compressor"},
    "default_read_consistency": "QUORUM",
    "default_write_consistency": "ONE",
}


def test_valid_values_cover_every_keyword():
    assert set(VALID_VALUES) == KEYWORDS


@pytest.mark.parametrize("name", sorted(KEYWORDS))
def test_each_recognized_option_validates(name):
    resolved = make_defs({name: VALID_VALUES[name]}).validate()
    assert isinstance(resolved, ResolvedProperties)


@pytest.mark.parametrize("name", sorted(OBSOLETE_KEYWORDS))
def test_each_obsolete_option_fails(name):
    with pytest.raises(ConfigError) as ei:
        make_defs({name: "1"}).validate()
    assert name in str(ei.value)
    assert "obsolete" in str(ei.value)


def test_unknown_option_fails():
    with pytest.raises(ConfigError) as ei:
        make_defs({"gc_grace_second": "10"}).validate()
    assert "gc_grace_second" in str(ei.value)
    assert "did you mean 'gc_grace_seconds'" in str(ei.value)


def test_compaction_without_class_fails():
    with pytest.raises(ConfigError) as ei:
        make_defs({"compaction": {"min_threshold": "2"}}).validate()
    assert "'class'" in str(ei.value)


def test_compaction_with_unknown_class_fails():
    with pytest.raises(ConfigError):
        make_defs({"compaction": {"class": "NoSuchStrategy"}}).validate()


def test_compaction_scalar_is_malformed():
    with pytest.raises(MalformedValueError):
        make_defs({"compaction": "SizeTieredCompactionStrategy"}).validate()


def test_compaction_non_string_class_is_malformed():
    with pytest.raises(MalformedValueError):
        make_defs({"compaction": {"class": 1}}).validate()


def test_compaction_class_resolved_and_stripped():
    defs = make_defs({"compaction": {"class": "LeveledCompactionStrategy", "sstable_size_in_mb": "10"}})
    # Before validation the raw map is returned as-is
    assert defs.get_compaction_options()["class"] == "LeveledCompactionStrategy"
    resolved = defs.validate()
    assert resolved.compaction_strategy is LeveledCompactionStrategy
    assert defs.get_compaction_options() == {"sstable_size_in_mb": "10"}
    # Raw bag owned by the caller is untouched
    assert defs.properties["compaction"]["class"] == "LeveledCompactionStrategy"


def test_no_compaction_leaves_strategy_absent():
    defs = make_defs({"gc_grace_seconds": "1"})
    resolved = defs.validate()
    assert resolved.compaction_strategy is None
    assert defs.get_compaction_options() == {}


def test_validate_resolves_strategy_once():
    calls = []

    def resolve(name):
        calls.append(name)
        return SizeTieredCompactionStrategy

    defs = TablePropertyDefinitions(
        {"compaction": {"class": "SizeTieredCompactionStrategy"}},
        strategy_resolver=resolve,
    )
    first = defs.validate()
    second = defs.validate()
    assert first is second
    assert defs.resolved is first
    assert calls == ["SizeTieredCompactionStrategy"]


def test_get_compaction_options_is_idempotent():
    defs = make_defs({"compaction": {"class": "SizeTieredCompactionStrategy", "min_threshold": "2"}})
    defs.validate()
    a = defs.get_compaction_options()
    a["min_threshold"] = "99"
    assert defs.get_compaction_options() == {"min_threshold": "2"}


def test_compression_options_default_configured():
    defs = make_defs({}, default_compressor="SnappyCompressor")
    assert defs.get_compression_options() == {SSTABLE_COMPRESSION: "SnappyCompressor"}
    defs = make_defs({"compression": {}}, default_compressor="SnappyCompressor")
    assert defs.get_compression_options() == {SSTABLE_COMPRESSION: "SnappyCompressor"}


def test_compression_options_no_default():
    assert make_defs({}, default_compressor=None).get_compression_options() == {}


def test_compression_options_supplied():
    defs = make_defs({"compression": {SSTABLE_COMPRESSION: "DeflateCompressor"}})
    assert defs.get_compression_options() == {SSTABLE_COMPRESSION: "DeflateCompressor"}


def test_compression_options_follow_process_settings():
    configure(Settings(default_compressor="LZ4Compressor"))
    defs = TablePropertyDefinitions({})
    assert defs.get_compression_options() == {SSTABLE_COMPRESSION: "LZ4Compressor"}
    configure(Settings(default_compressor=None))
    assert defs.get_compression_options() == {}


def test_consistency_level_lookup():
    defs = make_defs({"default_read_consistency": "QUORUM", "default_write_consistency": "BOGUS"})
    assert defs.get_consistency_level("default_read_consistency") is ConsistencyLevel.QUORUM
    assert make_defs({}).get_consistency_level("default_read_consistency") is None
    with pytest.raises(ConfigError) as ei:
        defs.get_consistency_level("default_write_consistency")
    assert "BOGUS" in str(ei.value)


def test_consistency_parse_does_not_check_applicability():
    # ANY is write-only, but parsing alone accepts it
    defs = make_defs({"default_read_consistency": "ANY"})
    assert defs.get_consistency_level("default_read_consistency") is ConsistencyLevel.ANY


def test_repr():
    assert repr(TablePropertyDefinitions({"comment": "x"})) == "TablePropertyDefinitions({'comment': 'x'})"
