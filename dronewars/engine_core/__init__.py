"""
Engine Core - Read-only board state and the rules queried over it.

The core is used to:
1. Describe both boards as an immutable BoardSnapshot
2. Locate drones and sections, walk lane adjacency
3. Compute lane control
4. Check card play conditions
"""

from .state import (
    AppliedUpgrade,
    BoardSnapshot,
    Drone,
    DroneType,
    HandCard,
    PlayerBoard,
    ShipSection,
)
from .queries import EffectiveStats, StatsCalculator, StatsContext, find_drone_lane
from .comparison import Comparison, compare
from .lane_control import check_lane_control, check_lane_control_empty, compute_lane_control
from .playability import is_card_playable

__all__ = [
    "AppliedUpgrade",
    "BoardSnapshot",
    "Drone",
    "DroneType",
    "HandCard",
    "PlayerBoard",
    "ShipSection",
    "EffectiveStats",
    "StatsCalculator",
    "StatsContext",
    "find_drone_lane",
    "Comparison",
    "compare",
    "check_lane_control",
    "check_lane_control_empty",
    "compute_lane_control",
    "is_card_playable",
]
