"""
Board Queries - Read-only helpers over a BoardSnapshot.

Provides:
- Lane lookup for a drone (drones do not store their lane)
- Lane topology helpers (index, adjacency)
- Effective stat access through an injected StatsCalculator
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Protocol

from .state import BoardSnapshot, Drone, ShipSection


@dataclass(frozen=True)
class DroneLocation:
    """Where a drone currently sits."""
    owner: str
    lane: str
    drone: Drone


@dataclass(frozen=True)
class EffectiveStats:
    """A drone's stats after all active modifiers are applied."""
    attack: int = 0
    speed: int = 0
    hull: int = 0
    shields: int = 0
    keywords: frozenset[str] = field(default_factory=frozenset)

    def get(self, stat: str) -> int | None:
        """Stat by name, None for unknown stat names."""
        if stat in ("attack", "speed", "hull", "shields"):
            return getattr(self, stat)
        return None


@dataclass(frozen=True)
class StatsContext:
    """Extra information handed to a StatsCalculator."""
    owner: str
    boards: BoardSnapshot


class StatsCalculator(Protocol):
    """
    Strategy that computes effective stats.

    Supplied by the combat-stats collaborator. The engine never applies
    buffs or debuffs itself.
    """

    def __call__(
        self,
        drone: Drone,
        lane_id: str,
        context: StatsContext | None = None,
    ) -> EffectiveStats:
        ...


def base_stats(
    drone: Drone,
    lane_id: str,
    context: StatsContext | None = None,
) -> EffectiveStats:
    """StatsCalculator that reports a drone's unmodified stats."""
    return EffectiveStats(
        attack=drone.attack,
        speed=drone.speed,
        hull=drone.hull,
        shields=drone.shields,
        keywords=frozenset(drone.keywords),
    )


def effective_stat(
    drone: Drone,
    stat: str,
    lane_id: str,
    stats: StatsCalculator | None = None,
    context: StatsContext | None = None,
) -> int | None:
    """
    Read one effective stat.

    Falls back to the drone's base value when the calculator does not
    report the stat. None if the stat is unknown everywhere.
    """
    calculator = stats or base_stats
    value = calculator(drone, lane_id, context).get(stat)
    if value is None:
        value = getattr(drone, stat, None)
    return value


def effective_keywords(
    drone: Drone,
    lane_id: str,
    stats: StatsCalculator | None = None,
    context: StatsContext | None = None,
) -> frozenset[str]:
    calculator = stats or base_stats
    return frozenset(calculator(drone, lane_id, context).keywords)


def find_drone_lane(boards: BoardSnapshot, drone_id: str) -> DroneLocation | None:
    """
    Find which board and lane a drone is on.

    Returns None when the drone is on neither board. Callers must treat
    that as an inconsistent snapshot, not as "no restriction".
    """
    for board in boards.boards:
        for lane_id, drone in board.iter_drones(boards.lane_ids):
            if drone.id == drone_id:
                return DroneLocation(owner=board.player_id, lane=lane_id, drone=drone)
    return None


def find_section(boards: BoardSnapshot, section_id: str) -> tuple[str, ShipSection] | None:
    """Return (owner, section) for a section id, None if not placed."""
    for board in boards.boards:
        for section in board.ship_sections:
            if section.id == section_id:
                return board.player_id, section
    return None


def lane_index(lane_id: str | None, lane_ids: tuple[str, ...]) -> int | None:
    """Position of a lane in the ordered lane set, None if unknown."""
    if lane_id is None:
        return None
    try:
        return lane_ids.index(lane_id)
    except ValueError:
        return None


def adjacent_lanes(lane_id: str | None, lane_ids: tuple[str, ...]) -> list[str]:
    """
    Lanes whose index differs by exactly one.

    Edge lanes have one neighbour, inner lanes two. Unknown lane -> [].
    """
    idx = lane_index(lane_id, lane_ids)
    if idx is None:
        return []
    return [lane_ids[i] for i in (idx - 1, idx + 1) if 0 <= i < len(lane_ids)]


def source_lane(boards: BoardSnapshot, source: Drone | ShipSection | None) -> str | None:
    """Lane of an ability source: a drone's current lane or a section's lane."""
    if source is None:
        return None
    if isinstance(source, ShipSection):
        return source.lane
    location = find_drone_lane(boards, source.id)
    return location.lane if location else None
