"""Recognized and retired table option names."""
from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

__all__ = [
    "KW_COMMENT",
    "KW_READ_REPAIR_CHANCE",
    "KW_DCLOCAL_READ_REPAIR_CHANCE",
    "KW_GC_GRACE_SECONDS",
    "KW_MIN_COMPACTION_THRESHOLD",
    "KW_MAX_COMPACTION_THRESHOLD",
    "KW_REPLICATE_ON_WRITE",
    "KW_CACHING",
    "KW_BF_FP_CHANCE",
    "KW_DEFAULT_READ_CONSISTENCY",
    "KW_DEFAULT_WRITE_CONSISTENCY",
    "KW_COMPACTION",
    "KW_COMPRESSION",
    "COMPACTION_STRATEGY_CLASS_KEY",
    "KEYWORDS",
    "OBSOLETE_KEYWORDS",
    "is_recognized",
    "is_obsolete",
    "suggest",
]

KW_COMMENT = "comment"
KW_READ_REPAIR_CHANCE = "read_repair_chance"
KW_DCLOCAL_READ_REPAIR_CHANCE = "dclocal_read_repair_chance"
KW_GC_GRACE_SECONDS = "gc_grace_seconds"
KW_REPLICATE_ON_WRITE = "replicate_on_write"
KW_CACHING = "caching"
KW_BF_FP_CHANCE = "bloom_filter_fp_chance"
KW_DEFAULT_READ_CONSISTENCY = "default_read_consistency"
KW_DEFAULT_WRITE_CONSISTENCY = "default_write_consistency"
KW_COMPACTION = "compaction"
KW_COMPRESSION = "compression"

# Sub-options of the compaction map, not top-level keywords
KW_MIN_COMPACTION_THRESHOLD = "min_threshold"
KW_MAX_COMPACTION_THRESHOLD = "max_threshold"
COMPACTION_STRATEGY_CLASS_KEY = "class"

KEYWORDS: FrozenSet[str] = frozenset({
    KW_COMMENT,
    KW_READ_REPAIR_CHANCE,
    KW_DCLOCAL_READ_REPAIR_CHANCE,
    KW_GC_GRACE_SECONDS,
    KW_REPLICATE_ON_WRITE,
    KW_CACHING,
    KW_BF_FP_CHANCE,
    KW_COMPACTION,
    KW_COMPRESSION,
    KW_DEFAULT_READ_CONSISTENCY,
    KW_DEFAULT_WRITE_CONSISTENCY,
})

OBSOLETE_KEYWORDS: FrozenSet[str] = frozenset({
    "compaction_strategy_class",
    "compaction_strategy_options",
    "min_compaction_threshold",
    "max_compaction_threshold",
    "compaction_parameters",
    "compression_parameters",
})


def is_recognized(name: str) -> bool:
    return name in KEYWORDS


def is_obsolete(name: str) -> bool:
    return name in OBSOLETE_KEYWORDS


def _lev(a: str, b: str) -> int:
    """Tiny Levenshtein distance (edit distance) for did-you-mean suggestions."""
    la, lb = len(a), len(b)
    dp = list(range(lb + 1))
    for i, ca in enumerate(a, 1):
        prev = dp[0]
        dp[0] = i
        for j, cb in enumerate(b, 1):
            ins = dp[j] + 1
            dele = dp[j - 1] + 1
            sub = prev + (0 if ca == cb else 1)
            prev, dp[j] = dp[j], min(ins, dele, sub)
    return dp[-1]


def suggest(bad: str, allowed: Iterable[str] = KEYWORDS) -> Optional[str]:
    """Return the closest allowed name within distance <= 2, else None.

    Ties resolve to the lexicographically smallest name so messages are stable.
    """
    best_key, best_dist = None, 99
    for k in sorted(allowed):
        d = _lev(bad, k)
        if d < best_dist:
            best_key, best_dist = k, d
    return best_key if best_dist <= 2 else None
