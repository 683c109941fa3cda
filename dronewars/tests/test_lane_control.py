"""
Tests for lane control and lane topology.

Tests:
- Strict majority control, ties and empty lanes
- ALL / ANY operators
- Control with an empty enemy side
- Lane adjacency
"""

import pytest

from ..engine_core.lane_control import (
    check_lane_control,
    check_lane_control_empty,
    compute_lane_control,
)
from ..engine_core.queries import adjacent_lanes, find_drone_lane, lane_index
from ..engine_core.state import DEFAULT_LANE_IDS, PLAYER_1, PLAYER_2, Drone
from .conftest import make_boards


def _drones(prefix: str, n: int) -> list[Drone]:
    return [Drone(id=f"{prefix}_{i}", name="Dart") for i in range(n)]


class TestComputeLaneControl:
    """Tests for compute_lane_control."""

    def test_every_lane_present(self):
        """Every lane id appears even when both boards are empty."""
        boards = make_boards()
        control = compute_lane_control(boards.player1, boards.player2)
        assert control == {"lane1": None, "lane2": None, "lane3": None}

    def test_strict_majority(self):
        """The player with more drones controls the lane."""
        boards = make_boards(
            p1_drones={"lane1": _drones("a", 2), "lane3": _drones("c", 1)},
            p2_drones={"lane1": _drones("b", 1), "lane3": _drones("d", 3)},
        )
        control = compute_lane_control(boards.player1, boards.player2)
        assert control["lane1"] == PLAYER_1
        assert control["lane2"] is None
        assert control["lane3"] == PLAYER_2

    def test_tie_is_uncontrolled(self):
        """Equal drone counts leave a lane uncontrolled."""
        boards = make_boards(
            p1_drones={"lane2": _drones("a", 2)},
            p2_drones={"lane2": _drones("b", 2)},
        )
        assert compute_lane_control(boards.player1, boards.player2)["lane2"] is None

    def test_argument_order_does_not_matter(self):
        """Swapping the boards gives the same map."""
        boards = make_boards(
            p1_drones={"lane1": _drones("a", 1)},
            p2_drones={"lane2": _drones("b", 1)},
        )
        assert compute_lane_control(boards.player1, boards.player2) == \
            compute_lane_control(boards.player2, boards.player1)

    def test_custom_lane_ids(self):
        """Only the requested lanes are reported."""
        boards = make_boards(p1_drones={"lane4": _drones("a", 1)})
        control = compute_lane_control(boards.player1, boards.player2, ["lane4"])
        assert control == {"lane4": PLAYER_1}


class TestCheckLaneControl:
    """Tests for check_lane_control."""

    CONTROL = {"lane1": PLAYER_1, "lane2": PLAYER_2, "lane3": PLAYER_1}

    def test_all_operator(self):
        """ALL needs every listed lane."""
        assert check_lane_control(PLAYER_1, ["lane1", "lane3"], self.CONTROL, "ALL")
        assert not check_lane_control(PLAYER_1, ["lane1", "lane2"], self.CONTROL, "ALL")

    def test_default_operator_is_all(self):
        """Operator defaults to ALL."""
        assert not check_lane_control(PLAYER_1, ["lane1", "lane2"], self.CONTROL)

    def test_any_operator(self):
        """ANY needs at least one listed lane."""
        assert check_lane_control(PLAYER_1, ["lane1", "lane2"], self.CONTROL, "ANY")
        assert not check_lane_control(PLAYER_1, ["lane2"], self.CONTROL, "ANY")

    def test_unknown_operator(self):
        """Unknown operators are never satisfied."""
        assert not check_lane_control(PLAYER_1, ["lane1"], self.CONTROL, "MOST")


class TestCheckLaneControlEmpty:
    """Tests for check_lane_control_empty."""

    def test_controlled_and_enemy_empty(self):
        """Satisfied when the player controls and the enemy has nothing there."""
        boards = make_boards(p1_drones={"lane1": _drones("a", 1)})
        control = compute_lane_control(boards.player1, boards.player2)
        assert check_lane_control_empty(PLAYER_1, "lane1", boards.player1, boards.player2, control)

    def test_enemy_present(self):
        """A single enemy drone breaks the condition."""
        boards = make_boards(
            p1_drones={"lane1": _drones("a", 2)},
            p2_drones={"lane1": _drones("b", 1)},
        )
        control = compute_lane_control(boards.player1, boards.player2)
        assert not check_lane_control_empty(PLAYER_1, "lane1", boards.player1, boards.player2, control)

    def test_not_controlled(self):
        """An empty uncontrolled lane does not count."""
        boards = make_boards()
        control = compute_lane_control(boards.player1, boards.player2)
        assert not check_lane_control_empty(PLAYER_1, "lane1", boards.player1, boards.player2, control)

    def test_works_for_second_board(self):
        """The player may be either board argument."""
        boards = make_boards(p2_drones={"lane3": _drones("b", 1)})
        control = compute_lane_control(boards.player1, boards.player2)
        assert check_lane_control_empty(PLAYER_2, "lane3", boards.player1, boards.player2, control)


class TestLaneTopology:
    """Tests for lane adjacency and drone lookup."""

    @pytest.mark.parametrize("lane,expected", [
        ("lane1", ["lane2"]),
        ("lane2", ["lane1", "lane3"]),
        ("lane3", ["lane2"]),
        ("lane9", []),
        (None, []),
    ])
    def test_adjacent_lanes(self, lane, expected):
        """Edge lanes have one neighbour, the middle lane two."""
        assert adjacent_lanes(lane, DEFAULT_LANE_IDS) == expected

    def test_adjacency_is_symmetric(self):
        """If a is adjacent to b then b is adjacent to a."""
        for a in DEFAULT_LANE_IDS:
            for b in adjacent_lanes(a, DEFAULT_LANE_IDS):
                assert a in adjacent_lanes(b, DEFAULT_LANE_IDS)

    def test_lane_index(self):
        """Lane index follows lane order."""
        assert lane_index("lane3", DEFAULT_LANE_IDS) == 2
        assert lane_index("nowhere", DEFAULT_LANE_IDS) is None

    def test_find_drone_lane(self, skirmish_boards):
        """A drone is found with its owner and lane."""
        location = find_drone_lane(skirmish_boards, "bomber_1")
        assert location.owner == PLAYER_2
        assert location.lane == "lane1"

    def test_find_missing_drone(self, skirmish_boards):
        """A drone on neither board is None."""
        assert find_drone_lane(skirmish_boards, "ghost") is None
