"""Targeting engine: legal targets for cards, abilities and costs."""

from .context import (
    CostSelection,
    PrimarySelection,
    SectionBlocked,
    TargetDescriptor,
    TargetingContext,
    TargetKind,
)
from .router import TargetingRouter, legal_targets
from .secondary import resolve_secondary_targets
from .affected import calculate_affected_drone_ids

__all__ = [
    "CostSelection",
    "PrimarySelection",
    "SectionBlocked",
    "TargetDescriptor",
    "TargetingContext",
    "TargetKind",
    "TargetingRouter",
    "legal_targets",
    "resolve_secondary_targets",
    "calculate_affected_drone_ids",
]
