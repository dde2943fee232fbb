# mirror/domain/evolution/service.py
# -*- coding: utf-8 -*-
"""
Evolution report preparation.

Sits between the reflection store and the report writer: checks that the
tier offers the report kind, that there is enough history, then hands over a
bounded, chronologically ordered selection.

Public API:
- check_eligibility(count, tier, kind) -> EligibilityOut
- evolution_progress(count, kind) -> EvolutionProgress
- build_context(reflections, tier, kind) -> EvolutionContext
- build_context_async(reflections, tier, kind) -> EvolutionContext
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from mirror.domain.evolution.policy import (
    ReportKind,
    Tier,
    as_kind,
    as_tier,
    context_limit,
    meets_threshold,
    reflections_needed,
    threshold,
)
from mirror.domain.evolution.temporal import stratify
from mirror.schemas.evolution import EligibilityOut, EvolutionContext, EvolutionProgress

logger = logging.getLogger(__name__)

__all__ = [
    "EvolutionError",
    "FeatureUnavailable",
    "InsufficientReflections",
    "check_eligibility",
    "evolution_progress",
    "build_context",
    "build_context_async",
]


class EvolutionError(ValueError):
    """A report can't be prepared for this request."""


class FeatureUnavailable(EvolutionError):
    def __init__(self, tier: Tier, kind: ReportKind):
        self.tier = tier
        self.kind = kind
        super().__init__(f"{kind.value} evolution reports are not available on the {tier.value} tier")


class InsufficientReflections(EvolutionError):
    def __init__(self, kind: ReportKind, count: int, required: int):
        self.kind = kind
        self.count = count
        self.required = required
        super().__init__(
            f"Need at least {required} reflections for a {kind.value} evolution report. "
            f"You have {count}."
        )


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def _reason(count: int, tier: Tier, kind: ReportKind, limit: int) -> Optional[str]:
    if limit <= 0:
        return f"{kind.value} evolution reports require a higher tier than {tier.value}"
    need = reflections_needed(count, kind)
    if need > 0:
        return f"Need {_plural(need, 'more reflection')} for a {kind.value} evolution report"
    return None


def _record_id(record: Any) -> Any:
    if isinstance(record, Mapping):
        return record.get("id")
    return getattr(record, "id", None)


def check_eligibility(
    count: int,
    tier: Union[Tier, str],
    kind: Union[ReportKind, str],
) -> EligibilityOut:
    """
    Can this user request a report right now?
    Never raises for enum members; strings outside the enums raise ValueError.
    """
    tier = as_tier(tier)
    kind = as_kind(kind)
    limit = context_limit(tier, kind)
    eligible = limit > 0 and meets_threshold(count, kind)
    return EligibilityOut(
        eligible=eligible,
        tier=tier,
        report_kind=kind,
        current_reflections=max(count, 0),
        required_reflections=threshold(kind),
        needed=reflections_needed(count, kind),
        context_limit=limit,
        upgrade_required=limit <= 0,
        reason=_reason(count, tier, kind, limit),
    )


def evolution_progress(count: int, kind: Union[ReportKind, str]) -> EvolutionProgress:
    """Progress toward the next report of `kind` (dashboard widget shape)."""
    kind = as_kind(kind)
    required = threshold(kind)
    count = max(count, 0)
    pct = 100 if required <= 0 else min(100, (count * 100) // required)
    return EvolutionProgress(
        can_generate_next=meets_threshold(count, kind),
        needed=reflections_needed(count, kind),
        total=required,
        percentage=pct,
    )


def build_context(
    reflections: Sequence[Any],
    tier: Union[Tier, str],
    kind: Union[ReportKind, str],
) -> EvolutionContext:
    """
    Select the reflections a report of `kind` may read for this tier.

    Raises FeatureUnavailable when the tier's limit is 0 and
    InsufficientReflections below the kind's threshold; the selector is not
    called in either case.
    """
    tier = as_tier(tier)
    kind = as_kind(kind)
    limit = context_limit(tier, kind)
    count = len(reflections)

    if limit <= 0:
        logger.info("evolution refused: %s not offered on tier=%s", kind.value, tier.value)
        raise FeatureUnavailable(tier, kind)
    if not meets_threshold(count, kind):
        logger.info(
            "evolution refused: %s needs %d reflections, have %d",
            kind.value, threshold(kind), count,
        )
        raise InsufficientReflections(kind, count, threshold(kind))

    selection = stratify(reflections, limit)
    logger.info(
        "evolution context ready: kind=%s tier=%s selected=%d/%d",
        kind.value, tier.value, len(selection.selected), count,
    )
    return EvolutionContext(
        tier=tier,
        report_kind=kind,
        context_limit=limit,
        total_reflections=count,
        reflections_analyzed=len(selection.selected),
        reflection_ids=[_record_id(r) for r in selection.selected],
        period_counts=selection.picked._asdict(),
        reflections=selection.selected,
    )


async def build_context_async(
    reflections: Sequence[Any],
    tier: Union[Tier, str],
    kind: Union[ReportKind, str],
) -> EvolutionContext:
    return await asyncio.to_thread(build_context, reflections, tier, kind)
