"""
Playability - Play-time preconditions of cards.

A card with no condition is always playable. Whether it also has a
legal target is a separate question answered by the TargetingRouter.
Unrecognised condition types are never playable.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .lane_control import (
    ControlOperator,
    check_lane_control,
    check_lane_control_empty,
    compute_lane_control,
)
from .state import BoardSnapshot

if TYPE_CHECKING:
    from ..card_schema.definitions import CardDefinition, PlayCondition

log = logging.getLogger(__name__)


def is_card_playable(card: CardDefinition, acting_player_id: str, boards: BoardSnapshot) -> bool:
    """Check a card's play-time condition against the current boards."""
    from ..card_schema.definitions import ConditionType, parse_condition_type

    condition = card.condition
    if condition is None:
        return True

    handlers = {
        ConditionType.CONTROL_LANES: _check_control_lanes,
        ConditionType.CONTROL_LANE_EMPTY: _check_control_lane_empty,
    }
    handler = handlers.get(parse_condition_type(condition.type))
    if handler is None:
        log.debug("Card %s has unknown condition type %r, not playable", card.id, condition.type)
        return False

    return handler(condition, acting_player_id, boards)


def _check_control_lanes(condition: PlayCondition, player_id: str, boards: BoardSnapshot) -> bool:
    control = compute_lane_control(boards.player1, boards.player2, boards.lane_ids)
    operator = condition.operator or ControlOperator.ALL
    return check_lane_control(player_id, condition.lanes, control, operator)


def _check_control_lane_empty(condition: PlayCondition, player_id: str, boards: BoardSnapshot) -> bool:
    control = compute_lane_control(boards.player1, boards.player2, boards.lane_ids)
    return any(
        check_lane_control_empty(player_id, lane_id, boards.player1, boards.player2, control)
        for lane_id in boards.lane_ids
    )
