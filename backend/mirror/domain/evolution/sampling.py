# mirror/domain/evolution/sampling.py
from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")

__all__ = ["sample_evenly"]


def sample_evenly(period: Sequence[T], count: int) -> List[T]:
    """
    Pick `count` evenly spaced items from an ordered period.

    Short periods come back whole, in order. Otherwise item i is taken from
    index floor(i * len/count); since len > count the step is > 1, so the
    indices strictly increase and no item repeats.
    """
    if count <= 0:
        return []
    if len(period) <= count:
        return list(period)

    step = len(period) / count
    return [period[int(i * step)] for i in range(count)]
