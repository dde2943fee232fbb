from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Union
from pydantic import BaseModel, ConfigDict, Field

class Tier(str, Enum):
    FREE = "free"
    PRO = "pro"
    UNLIMITED = "unlimited"

class ReportKind(str, Enum):
    DREAM_SPECIFIC = "dream_specific"
    CROSS_DREAM = "cross_dream"

class ReflectionRecord(BaseModel):
    """One journal entry. Fields beyond id/created_at ride along untouched."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Union[str, int] = Field(..., description="Stable reflection id")
    created_at: datetime = Field(..., alias="createdAt")

class EligibilityOut(BaseModel):
    eligible: bool
    tier: Tier
    report_kind: ReportKind
    current_reflections: int = 0
    required_reflections: int
    needed: int = 0
    context_limit: int = 0
    upgrade_required: bool = False
    reason: Optional[str] = None

class EvolutionProgress(BaseModel):
    can_generate_next: bool = False
    needed: int = 0
    total: int = 0
    percentage: int = 0

class EvolutionContext(BaseModel):
    """What the report writer receives: bounded, oldest-first evidence."""
    tier: Tier
    report_kind: ReportKind
    context_limit: int
    total_reflections: int
    reflections_analyzed: int
    reflection_ids: List[Union[str, int]] = []
    period_counts: Dict[str, int] = {}
    reflections: List[Any] = []
