"""
Evolution policy table + eligibility gate.

Run with: pytest backend/tests/test_evolution_policy.py -v
"""

from __future__ import annotations

import os
import sys

THIS_DIR = os.path.dirname(__file__)
PKG_ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
if PKG_ROOT not in sys.path:
    sys.path.insert(0, PKG_ROOT)

import pytest
from mirror.domain.evolution.policy import (
    POLICY,
    PolicyEntry,
    ReportKind,
    Tier,
    as_kind,
    as_tier,
    context_limit,
    is_available,
    meets_threshold,
    policy_entry,
    reflections_needed,
    threshold,
)


class TestPolicyTable:
    """Every (tier, kind) pair resolves to the fixed limits."""

    TABLE = [
        (Tier.FREE, ReportKind.DREAM_SPECIFIC, 4),
        (Tier.PRO, ReportKind.DREAM_SPECIFIC, 6),
        (Tier.UNLIMITED, ReportKind.DREAM_SPECIFIC, 12),
        (Tier.FREE, ReportKind.CROSS_DREAM, 0),
        (Tier.PRO, ReportKind.CROSS_DREAM, 12),
        (Tier.UNLIMITED, ReportKind.CROSS_DREAM, 30),
    ]

    @pytest.mark.parametrize("tier,kind,expected", TABLE)
    def test_context_limit(self, tier, kind, expected):
        assert context_limit(tier, kind) == expected

    def test_table_is_complete(self):
        assert len(POLICY) == 6
        for tier in Tier:
            for kind in ReportKind:
                assert isinstance(policy_entry(tier, kind), PolicyEntry)

    def test_threshold_depends_only_on_kind(self):
        for kind in ReportKind:
            assert {policy_entry(t, kind).threshold for t in Tier} == {threshold(kind)}
        assert threshold(ReportKind.DREAM_SPECIFIC) == 4
        assert threshold(ReportKind.CROSS_DREAM) == 12

    def test_free_cross_dream_is_unavailable(self):
        assert is_available(Tier.FREE, ReportKind.CROSS_DREAM) is False
        assert is_available(Tier.FREE, ReportKind.DREAM_SPECIFIC) is True
        assert is_available(Tier.PRO, ReportKind.CROSS_DREAM) is True

    def test_entries_are_immutable(self):
        entry = policy_entry(Tier.PRO, ReportKind.DREAM_SPECIFIC)
        with pytest.raises(AttributeError):
            entry.context_limit = 99  # type: ignore[misc]


class TestMeetsThreshold:
    """Boundary checks for the minimum reflection count."""

    @pytest.mark.parametrize(
        "count,kind,expected",
        [
            (3, ReportKind.DREAM_SPECIFIC, False),
            (4, ReportKind.DREAM_SPECIFIC, True),
            (50, ReportKind.DREAM_SPECIFIC, True),
            (11, ReportKind.CROSS_DREAM, False),
            (12, ReportKind.CROSS_DREAM, True),
            (0, ReportKind.CROSS_DREAM, False),
        ],
    )
    def test_boundaries(self, count, kind, expected):
        assert meets_threshold(count, kind) is expected

    @pytest.mark.parametrize("kind", list(ReportKind))
    def test_negative_count_is_not_eligible(self, kind):
        assert meets_threshold(-1, kind) is False
        assert meets_threshold(-1000, kind) is False

    def test_reflections_needed(self):
        assert reflections_needed(0, ReportKind.DREAM_SPECIFIC) == 4
        assert reflections_needed(3, ReportKind.DREAM_SPECIFIC) == 1
        assert reflections_needed(4, ReportKind.DREAM_SPECIFIC) == 0
        assert reflections_needed(20, ReportKind.CROSS_DREAM) == 0
        assert reflections_needed(-5, ReportKind.CROSS_DREAM) == 12


class TestCoercion:
    """Strings from the outside world map onto the closed enums."""

    def test_tier_strings(self):
        assert as_tier("pro") is Tier.PRO
        assert as_tier(" Unlimited ") is Tier.UNLIMITED
        assert as_tier(Tier.FREE) is Tier.FREE

    def test_kind_strings(self):
        assert as_kind("cross_dream") is ReportKind.CROSS_DREAM
        assert as_kind(ReportKind.DREAM_SPECIFIC) is ReportKind.DREAM_SPECIFIC

    @pytest.mark.parametrize("bad", ["elite", "", "premium"])
    def test_unknown_tier_raises(self, bad):
        with pytest.raises(ValueError):
            as_tier(bad)

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            as_kind("weekly")
