from __future__ import annotations

import pytest

from tableprops import keywords as kw


def test_registry_sets_are_disjoint_and_frozen():
    assert not (kw.KEYWORDS & kw.OBSOLETE_KEYWORDS)
    assert isinstance(kw.KEYWORDS, frozenset)
    assert isinstance(kw.OBSOLETE_KEYWORDS, frozenset)


def test_registry_contents():
    assert kw.KEYWORDS == {
        "comment",
        "read_repair_chance",
        "dclocal_read_repair_chance",
        "gc_grace_seconds",
        "replicate_on_write",
        "caching",
        "bloom_filter_fp_chance",
        "compaction",
        "compression",
        "default_read_consistency",
        "default_write_consistency",
    }
    assert kw.OBSOLETE_KEYWORDS == {
        "compaction_strategy_class",
        "compaction_strategy_options",
        "min_compaction_threshold",
        "max_compaction_threshold",
        "compaction_parameters",
        "compression_parameters",
    }


@pytest.mark.parametrize("name", sorted(kw.KEYWORDS))
def test_recognized(name):
    assert kw.is_recognized(name)
    assert not kw.is_obsolete(name)


@pytest.mark.parametrize("name", sorted(kw.OBSOLETE_KEYWORDS))
def test_obsolete(name):
    assert kw.is_obsolete(name)
    assert not kw.is_recognized(name)


def test_sub_options_are_not_top_level_keywords():
    assert not kw.is_recognized(kw.KW_MIN_COMPACTION_THRESHOLD)
    assert not kw.is_recognized(kw.COMPACTION_STRATEGY_CLASS_KEY)


def test_keywords_are_case_sensitive():
    assert not kw.is_recognized("Comment")


@pytest.mark.parametrize(
    "bad,expected",
    [
        ("coment", "comment"),
        ("gc_grace_second", "gc_grace_seconds"),
        ("compresion", "compression"),
        ("totally_unrelated", None),
    ],
)
def test_suggest(bad, expected):
    assert kw.suggest(bad) == expected
