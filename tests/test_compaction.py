from __future__ import annotations

import pytest

from tableprops.compaction import (
    CompactionConfig,
    LeveledCompactionStrategy,
    SizeTieredCompactionStrategy,
    extract_compaction,
    resolve_compaction_strategy,
)
from tableprops.errors import ConfigError, MalformedValueError


class CustomStrategy(SizeTieredCompactionStrategy):
    pass


class NotAStrategy:
    pass


def test_resolves_builtin_short_names():
    assert resolve_compaction_strategy("SizeTieredCompactionStrategy") is SizeTieredCompactionStrategy
    assert resolve_compaction_strategy("LeveledCompactionStrategy") is LeveledCompactionStrategy


def test_resolves_dotted_names():
    assert resolve_compaction_strategy("tableprops.compaction.LeveledCompactionStrategy") is LeveledCompactionStrategy
    assert resolve_compaction_strategy(f"{__name__}.CustomStrategy") is CustomStrategy


@pytest.mark.parametrize(
    "name",
    ["Bogus", "no.such.module.Strategy", "tableprops.compaction.Missing", f"{__name__}.NotAStrategy", ""],
)
def test_unresolvable_names(name):
    with pytest.raises(ConfigError):
        resolve_compaction_strategy(name)


@pytest.mark.parametrize("name", [1, 2.5, ["SizeTieredCompactionStrategy"]])
def test_non_string_names_are_malformed(name):
    with pytest.raises(MalformedValueError):
        resolve_compaction_strategy(name)


def test_extract_absent_or_empty():
    assert extract_compaction(None) == CompactionConfig()
    assert extract_compaction({}).strategy is None
    assert dict(extract_compaction({}).options) == {}


def test_extract_requires_class():
    with pytest.raises(ConfigError) as ei:
        extract_compaction({"min_threshold": "2"})
    assert "Missing sub-option 'class' for the 'compaction' option." in str(ei.value)


def test_extract_strips_class_without_mutating_input():
    raw = {"class": "LeveledCompactionStrategy", "sstable_size_in_mb": "160"}
    out = extract_compaction(raw)
    assert out.strategy is LeveledCompactionStrategy
    assert dict(out.options) == {"sstable_size_in_mb": "160"}
    assert "class" in raw


def test_extract_uses_injected_resolver():
    seen = []

    def resolve(name):
        seen.append(name)
        return CustomStrategy

    out = extract_compaction({"class": "Whatever"}, resolve)
    assert out.strategy is CustomStrategy
    assert seen == ["Whatever"]


def test_options_are_read_only():
    out = extract_compaction({"class": "SizeTieredCompactionStrategy", "min_threshold": "2"})
    with pytest.raises(TypeError):
        out.options["min_threshold"] = "3"  # type: ignore[index]
