"""
Targeting Processors - One function per targeting type.

Every processor has the same signature:

    processor(targeting, context, config) -> list[TargetDescriptor]

Processors never raise on odd data. An unknown affinity, location or
restriction tag simply yields fewer (often zero) targets. Results are in
a stable order: acting player before opponent, lanes in lane order,
drones in board order.
"""

from __future__ import annotations
import logging
from typing import Callable

from ..card_schema.definitions import (
    Affinity,
    CardDefinition,
    Location,
    Targeting,
    parse_affinity,
    parse_location,
)
from ..config import EngineConfig
from ..engine_core.lane_control import compute_lane_control
from ..engine_core.queries import adjacent_lanes, find_drone_lane, find_section, source_lane
from ..engine_core.state import ShipSection
from .context import TargetDescriptor, TargetKind, TargetingContext
from .restrictions import drone_passes, lane_passes, section_passes

log = logging.getLogger(__name__)

Processor = Callable[[Targeting, TargetingContext, EngineConfig], list[TargetDescriptor]]


def resolve_lane_scope(location: str | None, context: TargetingContext) -> list[str]:
    """
    Lanes a location admits, in lane order.

    No location means every lane. Source-relative locations need a
    locatable source, cost-relative ones need a paid cost carrying the
    lane; otherwise nothing is admitted.
    """
    lane_ids = context.boards.lane_ids
    if location is None:
        return list(lane_ids)

    kind = parse_location(location)
    if kind in (Location.ANY_LANE, Location.ALL_LANES):
        return list(lane_ids)

    if kind == Location.SAME_LANE:
        lane = source_lane(context.boards, context.source)
        return [lane] if lane in lane_ids else []

    if kind == Location.ADJACENT_LANE:
        return adjacent_lanes(source_lane(context.boards, context.source), lane_ids)

    if kind in (Location.COST_SOURCE_LANE, Location.COST_DESTINATION_LANE):
        cost = context.cost_selection
        if cost is None:
            return []
        lane = cost.source_lane if kind == Location.COST_SOURCE_LANE else cost.destination_lane
        return [lane] if lane in lane_ids else []

    # A concrete lane id
    if location in lane_ids:
        return [location]

    log.debug("Unknown location %r admits no lanes", location)
    return []


# =============================================================================
# Board targets
# =============================================================================

def process_drone(
    targeting: Targeting, context: TargetingContext, config: EngineConfig
) -> list[TargetDescriptor]:
    """Drones on the affinity's boards, inside the location, passing all restrictions."""
    lanes = resolve_lane_scope(targeting.location, context)
    restrictions = targeting.all_restrictions

    targets = []
    for owner in context.target_player_ids(targeting.affinity):
        board = context.boards.get_board(owner)
        for lane_id in lanes:
            for drone in board.drones_in(lane_id):
                if drone_passes(drone, lane_id, owner, restrictions, context):
                    targets.append(TargetDescriptor.for_drone(drone, owner, lane_id))
    return targets


def process_lane(
    targeting: Targeting, context: TargetingContext, config: EngineConfig
) -> list[TargetDescriptor]:
    """One descriptor per (owner, lane) pair passing the lane restrictions."""
    lanes = resolve_lane_scope(targeting.location, context)
    control = compute_lane_control(
        context.boards.player1, context.boards.player2, context.boards.lane_ids
    )

    targets = []
    for owner in context.target_player_ids(targeting.affinity):
        for lane_id in lanes:
            if lane_passes(lane_id, owner, targeting.all_restrictions, context, control):
                targets.append(TargetDescriptor.for_lane(lane_id, owner))
    return targets


def process_ship_section(
    targeting: Targeting, context: TargetingContext, config: EngineConfig
) -> list[TargetDescriptor]:
    """
    Ship sections on the affinity's boards.

    Destroyed sections are skipped, and so are sections the injected
    section_blocked rule shields.
    """
    restricted_lanes = None
    location = targeting.location
    if location is not None and parse_location(location) not in (Location.ANY_LANE, Location.ALL_LANES):
        restricted_lanes = resolve_lane_scope(targeting.location, context)

    targets = []
    for owner in context.target_player_ids(targeting.affinity):
        for section in context.boards.get_board(owner).ship_sections:
            if section.destroyed:
                continue
            if restricted_lanes is not None and section.lane not in restricted_lanes:
                continue
            if context.section_blocked is not None and context.section_blocked(section, owner):
                continue
            if section_passes(section, targeting.all_restrictions):
                targets.append(TargetDescriptor.for_section(section, owner))
    return targets


def process_self(
    targeting: Targeting, context: TargetingContext, config: EngineConfig
) -> list[TargetDescriptor]:
    """The source itself, whatever the affinity."""
    source = context.source
    if source is None:
        log.warning("SELF targeting for %r without a source, no targets",
                    getattr(context.definition, "name", None))
        return []

    if isinstance(source, ShipSection):
        found = find_section(context.boards, source.id)
        owner = found[0] if found else context.acting_player_id
        return [TargetDescriptor.for_section(source, owner)]

    location = find_drone_lane(context.boards, source.id)
    if location is None:
        log.debug("Source drone %s is not on the board, no SELF target", source.id)
        return []
    return [TargetDescriptor.for_drone(location.drone, location.owner, location.lane)]


# =============================================================================
# Hand and upgrade targets
# =============================================================================

def process_card_in_hand(
    targeting: Targeting, context: TargetingContext, config: EngineConfig
) -> list[TargetDescriptor]:
    """Cards in the acting player's hand other than the one being played."""
    if parse_affinity(targeting.affinity) != Affinity.FRIENDLY:
        log.warning("CARD_IN_HAND only supports FRIENDLY affinity, got %r", targeting.affinity)
        return []

    owner = context.acting_player_id
    board = context.boards.get_board(owner)
    if board is None:
        return []
    return [
        TargetDescriptor.for_card(card, owner)
        for card in board.hand
        if card.id != context.playing_card_id
    ]


def process_applied_upgrade(
    targeting: Targeting, context: TargetingContext, config: EngineConfig
) -> list[TargetDescriptor]:
    """
    Upgrades already attached to drone types, indestructible ones excluded.

    Looks at the opponent unless the definition names an affinity.
    """
    affinity = targeting.affinity if "affinity" in targeting.model_fields_set else Affinity.ENEMY.value

    targets = []
    for owner in context.target_player_ids(affinity):
        board = context.boards.get_board(owner)
        for drone_name, upgrades in board.applied_upgrades.items():
            for upgrade in upgrades:
                if upgrade.indestructible:
                    continue
                targets.append(TargetDescriptor(
                    id=upgrade.instance_id,
                    type=TargetKind.UPGRADE,
                    owner=owner,
                    entity=upgrade,
                    holder=drone_name,
                ))
    return targets


def process_upgrade_slots(
    targeting: Targeting, context: TargetingContext, config: EngineConfig
) -> list[TargetDescriptor]:
    """
    Drone types in the acting player's pool that can take the upgrade.

    A type is valid when the slots already used plus the card's slot
    cost fit in its upgrade_slots, and the card has not yet been applied
    max_applications times to that type.
    """
    card = context.definition
    if not isinstance(card, CardDefinition):
        return []

    owner = context.acting_player_id
    board = context.boards.get_board(owner)
    if board is None:
        return []

    card_slots = card.slots or config.default_upgrade_slot_cost
    max_applications = card.max_applications or config.default_max_applications

    targets = []
    for drone_type in board.active_drone_pool:
        applied = board.upgrades_for(drone_type.name)
        used = sum(
            u.slots if u.slots is not None else config.default_upgrade_slot_cost
            for u in applied
        )
        already = sum(1 for u in applied if u.card_id == card.id)
        if used + card_slots <= drone_type.upgrade_slots and already < max_applications:
            targets.append(TargetDescriptor(
                id=drone_type.name,
                type=TargetKind.DRONE_TYPE,
                owner=owner,
                entity=drone_type,
            ))
    return targets


def process_none(
    targeting: Targeting, context: TargetingContext, config: EngineConfig
) -> list[TargetDescriptor]:
    """No selectable target. Affected drones are previewed separately."""
    return []
