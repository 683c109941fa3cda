"""
Movement Flow - Selection for SINGLE_MOVE and MULTI_MOVE cards.

Single move: pick one drone, then an adjacent lane.
Multi move: pick a friendly lane, up to `count` drones in it, then an
adjacent lane. Exhausted and INERT drones never move.
"""

from __future__ import annotations
import logging

from ..card_schema.definitions import Affinity
from ..config import EngineConfig
from ..engine_core.queries import adjacent_lanes, find_drone_lane
from ..targeting.context import TargetDescriptor, TargetingContext
from ..targeting.restrictions import drone_can_move, drone_passes
from .phases import (
    Cancelled,
    DronesConfirmed,
    Idle,
    MoveComplete,
    MovementState,
    SelectDestination,
    SelectDestinationLane,
    SelectDrone,
    SelectDrones,
    SelectSourceLane,
    SelectionEvent,
    TargetSelected,
    find_valid,
)

log = logging.getLogger(__name__)


def begin_single_move(
    context: TargetingContext,
    config: EngineConfig | None = None,
) -> MovementState:
    """First phase of a single move: the movable drones of the affinity's boards."""
    config = config or EngineConfig()
    targeting = context.definition.targeting
    affinity = targeting.affinity if "affinity" in targeting.model_fields_set else Affinity.FRIENDLY.value

    candidates = []
    for owner in context.target_player_ids(affinity):
        board = context.boards.get_board(owner)
        for lane_id, drone in board.iter_drones(context.boards.lane_ids):
            if not drone_can_move(drone, lane_id, owner, context, config):
                continue
            if drone_passes(drone, lane_id, owner, targeting.all_restrictions, context):
                candidates.append(TargetDescriptor.for_drone(drone, owner, lane_id))
    return SelectDrone(valid_targets=tuple(candidates))


def begin_multi_move(
    context: TargetingContext,
    config: EngineConfig | None = None,
) -> MovementState:
    """First phase of a multi move: friendly lanes holding at least one drone."""
    effect = context.definition.effect
    count = effect.count if effect is not None else None

    owner = context.acting_player_id
    board = context.boards.get_board(owner)
    lanes = tuple(
        TargetDescriptor.for_lane(lane_id, owner)
        for lane_id in context.boards.lane_ids
        if board is not None and board.drone_count(lane_id) > 0
    )
    return SelectSourceLane(count=count, valid_targets=lanes)


def advance(
    state: MovementState,
    event: SelectionEvent,
    context: TargetingContext,
    config: EngineConfig | None = None,
) -> MovementState:
    """
    Apply one selection event.

    Cancelled resets to idle. DronesConfirmed only means something while
    drones are being picked. Invalid selections leave the phase unchanged.
    """
    config = config or EngineConfig()

    if isinstance(event, Cancelled):
        return Idle()

    if isinstance(event, DronesConfirmed):
        if isinstance(state, SelectDrones) and state.selected:
            return _to_destination_lane(state, context)
        return state

    handler = _get_handler(state)
    if handler is None or not isinstance(event, TargetSelected):
        return state

    target = find_valid(state.valid_targets, event.target)
    if target is None:
        log.debug("Ignoring %s %r: not a valid target in phase %s",
                  event.target.type.value, event.target.id, state.phase.value)
        return state

    return handler(state, target, context, config)


def _get_handler(state: MovementState):
    """Get the handler function for a phase."""
    handlers = {
        SelectDrone: _handle_drone,
        SelectDestination: _handle_destination,
        SelectSourceLane: _handle_source_lane,
        SelectDrones: _handle_drones,
        SelectDestinationLane: _handle_destination_lane,
    }
    return handlers.get(type(state))


# =============================================================================
# Single move
# =============================================================================

def _handle_drone(
    state: SelectDrone,
    target: TargetDescriptor,
    context: TargetingContext,
    config: EngineConfig,
) -> MovementState:
    location = find_drone_lane(context.boards, target.id)
    if location is None:
        log.warning("Drone %s is not on the board, resetting move", target.id)
        return Idle()

    destinations = tuple(
        TargetDescriptor.for_lane(lane_id, location.owner)
        for lane_id in adjacent_lanes(location.lane, context.boards.lane_ids)
    )
    return SelectDestination(drone=target, source_lane=location.lane, valid_targets=destinations)


def _handle_destination(
    state: SelectDestination,
    target: TargetDescriptor,
    context: TargetingContext,
    config: EngineConfig,
) -> MovementState:
    return MoveComplete(
        drones=(state.drone,),
        source_lane=state.source_lane,
        destination_lane=target.id,
    )


# =============================================================================
# Multi move
# =============================================================================

def _handle_source_lane(
    state: SelectSourceLane,
    target: TargetDescriptor,
    context: TargetingContext,
    config: EngineConfig,
) -> MovementState:
    lane_id = target.id
    owner = context.acting_player_id
    board = context.boards.get_board(owner)
    drones = tuple(
        TargetDescriptor.for_drone(drone, owner, lane_id)
        for drone in board.drones_in(lane_id)
        if drone_can_move(drone, lane_id, owner, context, config)
    )
    return SelectDrones(source_lane=lane_id, count=state.count, valid_targets=drones)


def _handle_drones(
    state: SelectDrones,
    target: TargetDescriptor,
    context: TargetingContext,
    config: EngineConfig,
) -> MovementState:
    # Clicking a selected drone again deselects it
    if any(d.key == target.key for d in state.selected):
        selected = tuple(d for d in state.selected if d.key != target.key)
        return SelectDrones(
            source_lane=state.source_lane,
            count=state.count,
            selected=selected,
            valid_targets=state.valid_targets,
        )

    if state.count is not None and len(state.selected) >= state.count:
        return state

    updated = SelectDrones(
        source_lane=state.source_lane,
        count=state.count,
        selected=state.selected + (target,),
        valid_targets=state.valid_targets,
    )
    if updated.count is not None and len(updated.selected) == updated.count:
        return _to_destination_lane(updated, context)
    return updated


def _to_destination_lane(state: SelectDrones, context: TargetingContext) -> MovementState:
    destinations = tuple(
        TargetDescriptor.for_lane(lane_id, context.acting_player_id)
        for lane_id in adjacent_lanes(state.source_lane, context.boards.lane_ids)
    )
    return SelectDestinationLane(
        source_lane=state.source_lane,
        selected=state.selected,
        valid_targets=destinations,
    )


def _handle_destination_lane(
    state: SelectDestinationLane,
    target: TargetDescriptor,
    context: TargetingContext,
    config: EngineConfig,
) -> MovementState:
    return MoveComplete(
        drones=state.selected,
        source_lane=state.source_lane,
        destination_lane=target.id,
    )
