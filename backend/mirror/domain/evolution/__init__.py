# backend/mirror/domain/evolution/__init__.py
from .policy import (
    Tier,
    ReportKind,
    PolicyEntry,
    context_limit,
    meets_threshold,
    threshold,
)
from .sampling import sample_evenly
from .temporal import select_temporal_context, stratify
from .service import (
    EvolutionError,
    FeatureUnavailable,
    InsufficientReflections,
    check_eligibility,
    evolution_progress,
    build_context,
    build_context_async,
)

__all__ = [
    "Tier",
    "ReportKind",
    "PolicyEntry",
    "context_limit",
    "meets_threshold",
    "threshold",
    "sample_evenly",
    "select_temporal_context",
    "stratify",
    "EvolutionError",
    "FeatureUnavailable",
    "InsufficientReflections",
    "check_eligibility",
    "evolution_progress",
    "build_context",
    "build_context_async",
]
