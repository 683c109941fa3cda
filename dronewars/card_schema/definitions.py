"""
Card Definitions - Schema for static card and ability data.

Definitions are:
- Static: owned by the data files, never mutated by the engine
- Declarative: targeting, costs and conditions are data, not code
- Lenient on discriminators: type/affinity/location are stored as plain
  strings so that an unknown value survives loading and is rejected by
  the engine at evaluation time (fail closed) instead of at import

Key design decisions:
- Every discriminator has a closed Enum listing the values the engine
  understands, plus a parse_* helper returning None for anything else
- Restrictions are either string tags or numeric stat filters
- Relational filters reference an earlier selection (primary target)
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class TargetingType(str, Enum):
    """What kind of entity a targeting rule selects."""
    DRONE = "DRONE"
    LANE = "LANE"
    SHIP_SECTION = "SHIP_SECTION"
    SELF = "SELF"
    CARD_IN_HAND = "CARD_IN_HAND"
    APPLIED_UPGRADE = "APPLIED_UPGRADE"
    DRONE_CARD = "DRONE_CARD"
    NONE = "NONE"


class Affinity(str, Enum):
    """Whose board a targeting rule looks at."""
    FRIENDLY = "FRIENDLY"
    ENEMY = "ENEMY"
    ANY = "ANY"


class Location(str, Enum):
    """Lane scoping for DRONE and LANE targeting."""
    ANY_LANE = "ANY_LANE"
    ALL_LANES = "ALL_LANES"
    SAME_LANE = "SAME_LANE"
    ADJACENT_LANE = "ADJACENT_LANE"
    COST_SOURCE_LANE = "COST_SOURCE_LANE"
    COST_DESTINATION_LANE = "COST_DESTINATION_LANE"


class SecondaryLocation(str, Enum):
    """Lane scoping for secondary targeting, relative to the primary target."""
    ADJACENT_TO_PRIMARY = "ADJACENT_TO_PRIMARY"
    PRIMARY_SOURCE_LANE = "PRIMARY_SOURCE_LANE"


class ConditionType(str, Enum):
    """Play-time preconditions."""
    CONTROL_LANES = "CONTROL_LANES"
    CONTROL_LANE_EMPTY = "CONTROL_LANE_EMPTY"


class CostType(str, Enum):
    """Kinds of additional cost."""
    DISCARD_CARD = "DISCARD_CARD"
    EXHAUST_DRONE = "EXHAUST_DRONE"
    SINGLE_MOVE = "SINGLE_MOVE"
    MULTI_MOVE = "MULTI_MOVE"


class CardType(str, Enum):
    """Card categories."""
    ORDNANCE = "Ordnance"
    SUPPORT = "Support"
    TACTIC = "Tactic"
    UPGRADE = "Upgrade"
    DOCTRINE = "Doctrine"


class ReferenceKind(str, Enum):
    """Earlier selections a relational restriction may point at."""
    PRIMARY_TARGET = "PRIMARY_TARGET"


MOVEMENT_TYPES = frozenset({CostType.SINGLE_MOVE.value, CostType.MULTI_MOVE.value})
"""Cost/effect types that relocate a drone."""

NON_DAMAGING_LANE_EFFECTS = frozenset({"SINGLE_MOVE", "MULTI_MOVE", "CREATE_TOKENS"})
"""LANE effects that use the lane as a destination rather than hitting its drones."""


def _parse(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def parse_targeting_type(value: str | None) -> TargetingType | None:
    return _parse(TargetingType, value)


def parse_affinity(value: str | None) -> Affinity | None:
    return _parse(Affinity, value)


def parse_location(value: str | None) -> Location | None:
    return _parse(Location, value)


def parse_secondary_location(value: str | None) -> SecondaryLocation | None:
    return _parse(SecondaryLocation, value)


def parse_condition_type(value: str | None) -> ConditionType | None:
    return _parse(ConditionType, value)


# =============================================================================
# Restrictions
# =============================================================================

class StatFilter(BaseModel):
    """Numeric filter against an effective stat: ``speed GTE 5``."""
    stat: str
    comparison: str
    value: int

    model_config = {"frozen": True, "extra": "forbid"}


class RelationalStatFilter(BaseModel):
    """
    Filter comparing a candidate's stat with a referenced entity's stat.

    Example: candidate speed LT primary target's speed.
    """
    type: Literal["STAT_COMPARISON"] = "STAT_COMPARISON"
    stat: Optional[str] = None
    comparison: Optional[str] = None
    reference: str = ReferenceKind.PRIMARY_TARGET.value
    reference_stat: Optional[str] = None

    model_config = {"frozen": True, "extra": "forbid"}


Restriction = Union[str, StatFilter, RelationalStatFilter]


# =============================================================================
# Targeting descriptors
# =============================================================================

class Targeting(BaseModel):
    """
    A targeting rule.

    ``location`` may be a Location value or a concrete lane id.
    ``custom`` is the legacy name for tag restrictions and is merged
    into ``all_restrictions``.
    """
    type: str = TargetingType.NONE.value
    affinity: str = Affinity.ANY.value
    location: Optional[str] = None
    restrictions: list[Restriction] = Field(default_factory=list)
    custom: list[str] = Field(default_factory=list)
    max_targets: Optional[int] = None
    affected_filter: list[Restriction] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def all_restrictions(self) -> list[Restriction]:
        return [*self.restrictions, *self.custom]


class SecondaryTargeting(BaseModel):
    """Second, dependent selection computed relative to the primary target."""
    type: str
    affinity: str = Affinity.FRIENDLY.value
    location: Optional[str] = None
    restrictions: list[Restriction] = Field(default_factory=list)

    model_config = {"frozen": True}


class AdditionalCost(BaseModel):
    """A cost that must be selected before the main effect target."""
    type: str
    targeting: Targeting = Field(default_factory=Targeting)
    properties: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_movement(self) -> bool:
        return self.type in MOVEMENT_TYPES


class PlayCondition(BaseModel):
    """A precondition checked before a card may be played at all."""
    type: str
    lanes: list[str] = Field(default_factory=list)
    operator: str = "ALL"

    model_config = {"frozen": True}


class EffectSpec(BaseModel):
    """
    The effect applied once targets are confirmed.

    Only the fields the selection engine reads are named; everything
    else is kept for the resolution collaborator.
    """
    type: str
    count: Optional[int] = None
    destination: Optional[dict[str, Any]] = None
    properties: list[str] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "allow"}

    @property
    def is_movement(self) -> bool:
        return self.type in MOVEMENT_TYPES


# =============================================================================
# Definitions
# =============================================================================

class AbilityDefinition(BaseModel):
    """A drone or ship-section ability."""
    name: str
    type: str = "ACTIVE"
    description: str = ""
    targeting: Targeting = Field(default_factory=Targeting)
    effect: Optional[EffectSpec] = None

    model_config = {"frozen": True}


class CardDefinition(BaseModel):
    """A playable card."""
    id: str
    name: str
    type: str = CardType.ORDNANCE.value
    cost: int = 0
    description: str = ""

    # Upgrade cards only
    slots: int = 1
    max_applications: Optional[int] = None

    targeting: Targeting = Field(default_factory=Targeting)
    additional_cost: Optional[AdditionalCost] = None
    secondary_targeting: Optional[SecondaryTargeting] = None
    condition: Optional[PlayCondition] = None
    effect: Optional[EffectSpec] = None

    model_config = {"frozen": True}

    @property
    def is_upgrade(self) -> bool:
        return self.type == CardType.UPGRADE.value


Definition = Union[CardDefinition, AbilityDefinition]
