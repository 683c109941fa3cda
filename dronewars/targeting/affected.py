"""
Affected-Drone Preview - Which drones a lane-wide or global card will hit.

Used for visual feedback only: while hovering a lane target the UI
highlights the drones that will actually be affected.
"""

from __future__ import annotations

from ..card_schema.definitions import (
    NON_DAMAGING_LANE_EFFECTS,
    Definition,
    TargetingType,
    parse_targeting_type,
)
from .context import TargetDescriptor, TargetingContext
from .restrictions import drone_passes


def calculate_affected_drone_ids(
    definition: Definition,
    lane_targets: list[TargetDescriptor],
    context: TargetingContext,
) -> list[str]:
    """
    Drone ids the definition's effect would hit.

    - NONE targeting with an affected_filter: every drone on the
      affinity's boards passing the filter
    - LANE targeting: drones of each lane target's owner in that lane,
      filtered and capped at max_targets when an affected_filter is set
    - Anything else, including movement and token effects: nothing
    """
    targeting = definition.targeting
    kind = parse_targeting_type(targeting.type)

    if kind == TargetingType.NONE and targeting.affected_filter:
        affected = []
        for owner in context.target_player_ids(targeting.affinity):
            board = context.boards.get_board(owner)
            for lane_id, drone in board.iter_drones(context.boards.lane_ids):
                if drone_passes(drone, lane_id, owner, targeting.affected_filter, context):
                    affected.append(drone.id)
        return affected

    if kind != TargetingType.LANE:
        return []
    if definition.effect is not None and definition.effect.type in NON_DAMAGING_LANE_EFFECTS:
        return []

    affected = []
    for target in lane_targets:
        board = context.boards.get_board(target.owner)
        if board is None:
            continue
        drones = board.drones_in(target.id)

        if targeting.affected_filter:
            drones = [
                d for d in drones
                if drone_passes(d, target.id, target.owner, targeting.affected_filter, context)
            ]
            if targeting.max_targets:
                drones = drones[:targeting.max_targets]

        affected.extend(d.id for d in drones)
    return affected
