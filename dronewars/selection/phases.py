"""
Selection Phases - States and events of the UI selection flows.

Each flow is a tagged union of frozen dataclasses; the `phase` field is
the tag. Transitions never mutate a phase, they return a new one.

Card flow:
    idle -> select_cost -> [select_cost_movement_destination]
         -> select_effect -> [select_secondary] -> complete

Movement flow:
    select_drone -> select_destination -> move_complete
    select_source_lane -> select_drones -> select_destination_lane -> move_complete
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union

from ..card_schema.definitions import Definition
from ..targeting.context import CostSelection, PrimarySelection, TargetDescriptor


class Phase(str, Enum):
    """Tags of every selection phase."""
    IDLE = "idle"
    SELECT_COST = "select_cost"
    SELECT_COST_MOVEMENT_DESTINATION = "select_cost_movement_destination"
    SELECT_EFFECT = "select_effect"
    SELECT_SECONDARY = "select_secondary"
    COMPLETE = "complete"

    SELECT_DRONE = "select_drone"
    SELECT_DESTINATION = "select_destination"
    SELECT_SOURCE_LANE = "select_source_lane"
    SELECT_DRONES = "select_drones"
    SELECT_DESTINATION_LANE = "select_destination_lane"
    MOVE_COMPLETE = "move_complete"


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class TargetSelected:
    """The user clicked a target."""
    target: TargetDescriptor


@dataclass(frozen=True)
class DronesConfirmed:
    """The user finished picking drones for a multi move."""


@dataclass(frozen=True)
class Cancelled:
    """The user backed out. Every flow returns to idle."""


SelectionEvent = Union[TargetSelected, DronesConfirmed, Cancelled]


# =============================================================================
# Card flow phases
# =============================================================================

@dataclass(frozen=True)
class Idle:
    phase: Phase = field(default=Phase.IDLE, init=False)


@dataclass(frozen=True)
class SelectCost:
    card: Definition
    valid_targets: tuple[TargetDescriptor, ...] = ()
    phase: Phase = field(default=Phase.SELECT_COST, init=False)


@dataclass(frozen=True)
class SelectCostMovementDestination:
    """A movement cost drone is chosen, waiting for the lane it moves to."""
    card: Definition
    cost_selection: CostSelection
    valid_targets: tuple[TargetDescriptor, ...] = ()
    phase: Phase = field(default=Phase.SELECT_COST_MOVEMENT_DESTINATION, init=False)


@dataclass(frozen=True)
class SelectEffect:
    card: Definition
    cost_selection: CostSelection | None = None
    valid_targets: tuple[TargetDescriptor, ...] = ()
    phase: Phase = field(default=Phase.SELECT_EFFECT, init=False)


@dataclass(frozen=True)
class SelectSecondary:
    card: Definition
    primary: PrimarySelection
    cost_selection: CostSelection | None = None
    valid_targets: tuple[TargetDescriptor, ...] = ()
    phase: Phase = field(default=Phase.SELECT_SECONDARY, init=False)


@dataclass(frozen=True)
class Complete:
    """
    Every selection the card needs has been made.

    The engine only signals completion; paying the cost and resolving
    the effect belong to the caller. skipped is set when a step after a
    paid cost had nothing to pick, so the effect fizzles (or resolves
    without its secondary target) instead of leaving the cost unplayable.
    """
    card: Definition
    cost_selection: CostSelection | None = None
    target: TargetDescriptor | None = None
    secondary_target: TargetDescriptor | None = None
    skipped: bool = False
    phase: Phase = field(default=Phase.COMPLETE, init=False)


CardSelectionState = Union[
    Idle, SelectCost, SelectCostMovementDestination, SelectEffect, SelectSecondary, Complete
]


# =============================================================================
# Movement flow phases
# =============================================================================

@dataclass(frozen=True)
class SelectDrone:
    valid_targets: tuple[TargetDescriptor, ...] = ()
    phase: Phase = field(default=Phase.SELECT_DRONE, init=False)


@dataclass(frozen=True)
class SelectDestination:
    drone: TargetDescriptor
    source_lane: str
    valid_targets: tuple[TargetDescriptor, ...] = ()
    phase: Phase = field(default=Phase.SELECT_DESTINATION, init=False)


@dataclass(frozen=True)
class SelectSourceLane:
    count: int | None = None
    valid_targets: tuple[TargetDescriptor, ...] = ()
    phase: Phase = field(default=Phase.SELECT_SOURCE_LANE, init=False)


@dataclass(frozen=True)
class SelectDrones:
    source_lane: str
    count: int | None = None
    selected: tuple[TargetDescriptor, ...] = ()
    valid_targets: tuple[TargetDescriptor, ...] = ()
    phase: Phase = field(default=Phase.SELECT_DRONES, init=False)


@dataclass(frozen=True)
class SelectDestinationLane:
    source_lane: str
    selected: tuple[TargetDescriptor, ...] = ()
    valid_targets: tuple[TargetDescriptor, ...] = ()
    phase: Phase = field(default=Phase.SELECT_DESTINATION_LANE, init=False)


@dataclass(frozen=True)
class MoveComplete:
    drones: tuple[TargetDescriptor, ...]
    source_lane: str
    destination_lane: str
    phase: Phase = field(default=Phase.MOVE_COMPLETE, init=False)


MovementState = Union[
    Idle, SelectDrone, SelectDestination, SelectSourceLane,
    SelectDrones, SelectDestinationLane, MoveComplete,
]


def find_valid(
    valid_targets: Iterable[TargetDescriptor],
    target: TargetDescriptor,
) -> TargetDescriptor | None:
    """The valid target matching a selection by key, None if not offered."""
    for candidate in valid_targets:
        if candidate.key == target.key:
            return candidate
    return None
