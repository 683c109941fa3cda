"""
Pytest fixtures for Dronewars tests.
"""

import pytest

from ..card_schema.definitions import CardDefinition
from ..config import EngineConfig
from ..engine_core.state import (
    PLAYER_1,
    PLAYER_2,
    AppliedUpgrade,
    BoardSnapshot,
    Drone,
    DroneType,
    HandCard,
    PlayerBoard,
    ShipSection,
)
from ..targeting.context import TargetingContext
from ..targeting.router import TargetingRouter


def make_boards(p1_drones=None, p2_drones=None, **board_kwargs) -> BoardSnapshot:
    """Build a snapshot from lane -> drones mappings for each player."""
    p1_kwargs = board_kwargs.get("player1", {})
    p2_kwargs = board_kwargs.get("player2", {})
    return BoardSnapshot(
        player1=PlayerBoard(PLAYER_1, drones_on_board=p1_drones or {}, **p1_kwargs),
        player2=PlayerBoard(PLAYER_2, drones_on_board=p2_drones or {}, **p2_kwargs),
    )


def make_context(card, boards, acting=PLAYER_1, **kwargs) -> TargetingContext:
    """Targeting context for the acting player."""
    return TargetingContext(acting_player_id=acting, boards=boards, definition=card, **kwargs)


@pytest.fixture
def config() -> EngineConfig:
    """Engine config with defaults."""
    return EngineConfig()


@pytest.fixture
def router(config: EngineConfig) -> TargetingRouter:
    """A fresh router."""
    return TargetingRouter(config=config)


@pytest.fixture
def scout() -> Drone:
    return Drone(id="scout_1", name="Scout", attack=1, speed=6, hull=2, max_hull=2)


@pytest.fixture
def heavy() -> Drone:
    return Drone(id="heavy_1", name="Heavy", attack=3, speed=2, hull=4, max_hull=5, is_marked=True)


@pytest.fixture
def interceptor() -> Drone:
    return Drone(id="int_1", name="Interceptor", attack=2, speed=4, hull=2, max_hull=2, is_exhausted=True)


@pytest.fixture
def bomber() -> Drone:
    return Drone(id="bomber_1", name="Bomber", attack=4, speed=1, hull=3, max_hull=3)


@pytest.fixture
def skirmish_boards(scout, heavy, interceptor, bomber) -> BoardSnapshot:
    """
    player1: scout + heavy in lane1, interceptor in lane2.
    player2: bomber in lane1, nothing else.
    """
    return make_boards(
        p1_drones={"lane1": [scout, heavy], "lane2": [interceptor]},
        p2_drones={"lane1": [bomber]},
        player1={
            "hand": [HandCard("h1", "CARD_DISCARD", "Recycle"), HandCard("h2", "CARD_A", "Alpha")],
            "ship_sections": [
                ShipSection("p1_bridge", lane="lane1", hull=8, max_hull=10),
                ShipSection("p1_engines", lane="lane2", hull=0, max_hull=10, destroyed=True),
            ],
            "active_drone_pool": [DroneType("Scout", upgrade_slots=2), DroneType("Heavy", upgrade_slots=1)],
            "applied_upgrades": {
                "Scout": [AppliedUpgrade("u1", "UPG_BOOST", "Boost", slots=2)],
            },
        },
        player2={
            "hand": [HandCard("e1", "CARD_X", "Enemy card")],
            "ship_sections": [
                ShipSection("p2_bridge", lane="lane1", hull=10, max_hull=10),
                ShipSection("p2_drone_control", lane="lane2", hull=5, max_hull=10),
                ShipSection("p2_power", lane="lane3", hull=10, max_hull=10),
            ],
            "applied_upgrades": {
                "Bomber": [
                    AppliedUpgrade("u2", "UPG_ARMOR", "Armor"),
                    AppliedUpgrade("u3", "UPG_CORE", "Core", indestructible=True),
                ],
            },
        },
    )


@pytest.fixture
def laser_blast() -> CardDefinition:
    """Damage any drone anywhere."""
    return CardDefinition.model_validate({
        "id": "CARD001",
        "name": "Laser Blast",
        "targeting": {"type": "DRONE", "affinity": "ANY", "location": "ANY_LANE"},
        "effect": {"type": "DAMAGE", "value": 2},
    })
