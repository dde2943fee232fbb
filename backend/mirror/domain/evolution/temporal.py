# mirror/domain/evolution/temporal.py
"""
Temporal stratification of a reflection history.

Evolution reports should read the whole journey, not the last few entries.
The history is sorted oldest-first, cut into three contiguous periods
(early / middle / recent) and each period is sampled evenly. The recent period
takes the remainder when the limit doesn't split by three.

Records are opaque: anything with an `id` and a `created_at` (or `createdAt`)
key or attribute. They are returned as the same objects, untouched.

Public API:
- select_temporal_context(reflections, limit, key=created_at_of) -> list
- stratify(reflections, limit, key=created_at_of) -> TemporalSelection
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Generic, List, Mapping, NamedTuple, Sequence, TypeVar

from mirror.domain.evolution.sampling import sample_evenly
from mirror.utils.time import coerce_timestamp

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "Periods",
    "Quotas",
    "TemporalSelection",
    "created_at_of",
    "sort_chronologically",
    "split_periods",
    "period_quotas",
    "fit_quotas",
    "select_temporal_context",
    "stratify",
]

_TIMESTAMP_KEYS = ("created_at", "createdAt")


class Periods(NamedTuple):
    early: List[Any]
    middle: List[Any]
    recent: List[Any]


class Quotas(NamedTuple):
    early: int
    middle: int
    recent: int


@dataclass(frozen=True)
class TemporalSelection(Generic[T]):
    """Selected records plus how they were drawn from each period."""

    selected: List[T]
    total: int
    limit: int
    period_sizes: Quotas
    quotas: Quotas
    picked: Quotas

    @property
    def stratified(self) -> bool:
        """False when the whole history fit under the limit."""
        return self.total > self.limit


def created_at_of(record: Any) -> datetime:
    """Creation time of a record (mapping key or attribute), as aware UTC."""
    if isinstance(record, Mapping):
        for k in _TIMESTAMP_KEYS:
            if k in record:
                return coerce_timestamp(record[k])
    else:
        for k in _TIMESTAMP_KEYS:
            if hasattr(record, k):
                return coerce_timestamp(getattr(record, k))
    raise ValueError(f"record has no created_at: {record!r}")


def sort_chronologically(
    records: Sequence[T],
    key: Callable[[T], Any] = created_at_of,
) -> List[T]:
    # sorted() is guaranteed stable: equal timestamps keep input order
    return sorted(records, key=key)


def split_periods(ordered: Sequence[T]) -> Periods:
    n = len(ordered)
    early_end = n // 3
    middle_end = (2 * n) // 3
    return Periods(
        list(ordered[:early_end]),
        list(ordered[early_end:middle_end]),
        list(ordered[middle_end:]),
    )


def period_quotas(limit: int) -> Quotas:
    """limit // 3 per period, remainder to the recent one."""
    per_period, remainder = divmod(max(limit, 0), 3)
    return Quotas(per_period, per_period, per_period + remainder)


def fit_quotas(quotas: Quotas, sizes: Quotas) -> Quotas:
    """
    Cap each quota at its period size, handing any overflow to the period
    before it (recent -> middle -> early).

    Only matters for tiny histories, e.g. n=3 with limit=2 leaves the recent
    period one short; without the spill the selection would undershoot.
    """
    fitted = [0, 0, 0]
    carry = 0
    for idx in (2, 1, 0):
        want = quotas[idx] + carry
        fitted[idx] = min(want, sizes[idx])
        carry = want - fitted[idx]
    return Quotas(*fitted)


def stratify(
    reflections: Sequence[T],
    limit: int,
    key: Callable[[T], Any] = created_at_of,
) -> TemporalSelection[T]:
    """
    Full selection with per-period bookkeeping.
    A negative limit is treated as 0.
    """
    limit = max(limit, 0)
    ordered = sort_chronologically(reflections, key=key)
    n = len(ordered)
    periods = split_periods(ordered)
    sizes = Quotas(len(periods.early), len(periods.middle), len(periods.recent))
    quotas = period_quotas(limit)

    if n <= limit:
        return TemporalSelection(
            selected=ordered,
            total=n,
            limit=limit,
            period_sizes=sizes,
            quotas=quotas,
            picked=sizes,
        )

    fitted = fit_quotas(quotas, sizes)
    early = sample_evenly(periods.early, fitted.early)
    middle = sample_evenly(periods.middle, fitted.middle)
    recent = sample_evenly(periods.recent, fitted.recent)
    picked = Quotas(len(early), len(middle), len(recent))

    logger.debug(
        "temporal selection n=%d limit=%d periods=%d/%d/%d picked=%d/%d/%d",
        n, limit, sizes.early, sizes.middle, sizes.recent,
        picked.early, picked.middle, picked.recent,
    )

    # periods are contiguous and ascending, so the concatenation already is
    return TemporalSelection(
        selected=early + middle + recent,
        total=n,
        limit=limit,
        period_sizes=sizes,
        quotas=quotas,
        picked=picked,
    )


def select_temporal_context(
    reflections: Sequence[T],
    limit: int,
    key: Callable[[T], Any] = created_at_of,
) -> List[T]:
    """
    Up to `limit` reflections spread across the whole timeline, oldest first.

    - len(reflections) <= limit: every reflection, sorted by creation time
    - otherwise: exactly `limit` reflections, the earliest and the most recent
      periods both represented
    - the input sequence is never mutated
    """
    return stratify(reflections, limit, key=key).selected
