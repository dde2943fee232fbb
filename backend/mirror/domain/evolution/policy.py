# mirror/domain/evolution/policy.py
"""
Evolution report policy: who gets how much history, and when a report can run.

Public API:
- threshold(kind) -> int
- context_limit(tier, kind) -> int
- meets_threshold(count, kind) -> bool
- reflections_needed(count, kind) -> int
- is_available(tier, kind) -> bool

The table is fixed. A context limit of 0 means the report kind is not offered
on that tier; callers skip selection entirely.
"""

from __future__ import annotations

from typing import Dict, NamedTuple, Tuple, Union

from mirror.schemas.evolution import ReportKind, Tier

__all__ = [
    "Tier",
    "ReportKind",
    "PolicyEntry",
    "THRESHOLDS",
    "CONTEXT_LIMITS",
    "POLICY",
    "as_tier",
    "as_kind",
    "policy_entry",
    "threshold",
    "context_limit",
    "is_available",
    "meets_threshold",
    "reflections_needed",
]


class PolicyEntry(NamedTuple):
    threshold: int
    context_limit: int


# minimum reflection count per report kind (tier-independent)
THRESHOLDS: Dict[ReportKind, int] = {
    ReportKind.DREAM_SPECIFIC: 4,
    ReportKind.CROSS_DREAM: 12,
}

CONTEXT_LIMITS: Dict[ReportKind, Dict[Tier, int]] = {
    ReportKind.DREAM_SPECIFIC: {
        Tier.FREE: 4,
        Tier.PRO: 6,
        Tier.UNLIMITED: 12,
    },
    ReportKind.CROSS_DREAM: {
        Tier.FREE: 0,  # not offered
        Tier.PRO: 12,
        Tier.UNLIMITED: 30,
    },
}

POLICY: Dict[Tuple[Tier, ReportKind], PolicyEntry] = {
    (tier, kind): PolicyEntry(THRESHOLDS[kind], CONTEXT_LIMITS[kind][tier])
    for kind in ReportKind
    for tier in Tier
}


# ---------------------------------------------------------------------
# Boundary coercion (strings from tokens / query params -> enum members)
# ---------------------------------------------------------------------
def as_tier(value: Union[Tier, str]) -> Tier:
    if isinstance(value, Tier):
        return value
    try:
        return Tier(str(value).strip().lower())
    except ValueError:
        raise ValueError(
            f"unknown tier {value!r}; expected one of {[t.value for t in Tier]}"
        ) from None


def as_kind(value: Union[ReportKind, str]) -> ReportKind:
    if isinstance(value, ReportKind):
        return value
    try:
        return ReportKind(str(value).strip().lower())
    except ValueError:
        raise ValueError(
            f"unknown report kind {value!r}; expected one of {[k.value for k in ReportKind]}"
        ) from None


# ---------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------
def policy_entry(tier: Tier, kind: ReportKind) -> PolicyEntry:
    return POLICY[(tier, kind)]


def threshold(kind: ReportKind) -> int:
    return THRESHOLDS[kind]


def context_limit(tier: Tier, kind: ReportKind) -> int:
    """Maximum number of reflections fed into a report of this kind."""
    return POLICY[(tier, kind)].context_limit


def is_available(tier: Tier, kind: ReportKind) -> bool:
    return context_limit(tier, kind) > 0


def meets_threshold(count: int, kind: ReportKind) -> bool:
    """True iff `count` reflections are enough to attempt a report of `kind`."""
    if count < 0:
        return False
    return count >= THRESHOLDS[kind]


def reflections_needed(count: int, kind: ReportKind) -> int:
    """How many more reflections before `kind` unlocks (0 once eligible)."""
    return max(THRESHOLDS[kind] - max(count, 0), 0)
