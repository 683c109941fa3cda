"""
Lane Control - Which player controls each lane.

A lane is controlled by the player with a strict majority of drones in
it. Equal counts, including an empty lane, leave it uncontrolled.
"""

from __future__ import annotations
from enum import Enum
from typing import Iterable, Mapping

from .state import DEFAULT_LANE_IDS, PlayerBoard


ControlMap = Mapping[str, "str | None"]


class ControlOperator(str, Enum):
    """How a list of required lanes is combined."""
    ALL = "ALL"
    ANY = "ANY"


def compute_lane_control(
    board_a: PlayerBoard,
    board_b: PlayerBoard,
    lane_ids: Iterable[str] = DEFAULT_LANE_IDS,
) -> dict[str, str | None]:
    """
    Compute the controller of every lane.

    Every lane id appears in the result, tied lanes map to None.
    """
    control: dict[str, str | None] = {}
    for lane_id in lane_ids:
        count_a = board_a.drone_count(lane_id)
        count_b = board_b.drone_count(lane_id)
        if count_a > count_b:
            control[lane_id] = board_a.player_id
        elif count_b > count_a:
            control[lane_id] = board_b.player_id
        else:
            control[lane_id] = None
    return control


def check_lane_control(
    player_id: str,
    lane_ids: Iterable[str],
    control_map: ControlMap,
    operator: str | ControlOperator = ControlOperator.ALL,
) -> bool:
    """
    Check whether a player controls the listed lanes.

    ALL requires every lane, ANY at least one. An unknown operator
    returns False.
    """
    controlled = [control_map.get(lane_id) == player_id for lane_id in lane_ids]
    if operator == ControlOperator.ALL:
        return all(controlled)
    if operator == ControlOperator.ANY:
        return any(controlled)
    return False


def check_lane_control_empty(
    player_id: str,
    lane_id: str,
    board_a: PlayerBoard,
    board_b: PlayerBoard,
    control_map: ControlMap,
) -> bool:
    """True iff player_id controls the lane and the opponent has no drones there."""
    if control_map.get(lane_id) != player_id:
        return False
    opponent = board_b if board_a.player_id == player_id else board_a
    return opponent.drone_count(lane_id) == 0
