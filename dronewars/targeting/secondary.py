"""
Secondary Targeting - Second targets of two-target cards.

Some cards pick a primary target and then a secondary one relative to it,
e.g. "move a drone to an adjacent lane" or "destroy a slower drone in the
same lane". The secondary set depends only on the committed primary
selection and the current snapshot.
"""

from __future__ import annotations
import logging

from ..card_schema.definitions import (
    Affinity,
    SecondaryLocation,
    SecondaryTargeting,
    TargetingType,
    parse_affinity,
    parse_secondary_location,
    parse_targeting_type,
)
from ..engine_core.queries import adjacent_lanes
from ..engine_core.state import Drone
from .context import PrimarySelection, TargetDescriptor, TargetingContext
from .restrictions import StatReference, drone_passes

log = logging.getLogger(__name__)


def resolve_secondary_targets(
    primary: PrimarySelection,
    secondary: SecondaryTargeting,
    context: TargetingContext,
) -> list[TargetDescriptor]:
    """
    Legal secondary targets for a committed primary selection.

    LANE + ADJACENT_TO_PRIMARY (or a concrete lane id) and
    DRONE + PRIMARY_SOURCE_LANE are supported; anything else has no targets.
    """
    kind = parse_targeting_type(secondary.type)
    if kind == TargetingType.LANE:
        return _secondary_lanes(primary, secondary, context)
    if kind == TargetingType.DRONE:
        return _secondary_drones(primary, secondary, context)

    log.debug("Unsupported secondary targeting type %r", secondary.type)
    return []


def _secondary_lanes(
    primary: PrimarySelection,
    secondary: SecondaryTargeting,
    context: TargetingContext,
) -> list[TargetDescriptor]:
    # Destination lanes belong to the mover unless the card says otherwise
    if parse_affinity(secondary.affinity) == Affinity.ENEMY and context.opponent_id is not None:
        owner = context.opponent_id
    else:
        owner = context.acting_player_id

    lane_ids = context.boards.lane_ids
    if secondary.location in lane_ids:
        return [TargetDescriptor.for_lane(secondary.location, owner)]

    if parse_secondary_location(secondary.location) != SecondaryLocation.ADJACENT_TO_PRIMARY:
        log.debug("Unsupported secondary lane location %r", secondary.location)
        return []

    return [
        TargetDescriptor.for_lane(lane_id, owner)
        for lane_id in adjacent_lanes(primary.lane, lane_ids)
    ]


def _secondary_drones(
    primary: PrimarySelection,
    secondary: SecondaryTargeting,
    context: TargetingContext,
) -> list[TargetDescriptor]:
    if parse_secondary_location(secondary.location) != SecondaryLocation.PRIMARY_SOURCE_LANE:
        log.debug("Unsupported secondary drone location %r", secondary.location)
        return []
    if primary.lane is None:
        return []

    reference = None
    if isinstance(primary.target.entity, Drone):
        reference = StatReference(drone=primary.target.entity, lane=primary.lane, owner=primary.owner)

    targets = []
    for owner in context.target_player_ids(secondary.affinity):
        board = context.boards.get_board(owner)
        for drone in board.drones_in(primary.lane):
            if drone.id == primary.target.id:
                continue
            if drone_passes(drone, primary.lane, owner, secondary.restrictions, context, reference):
                targets.append(TargetDescriptor.for_drone(drone, owner, primary.lane))
    return targets
