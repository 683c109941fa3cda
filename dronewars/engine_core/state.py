"""
Board State - Read-only snapshot of both players' boards.

Design principles:
- Immutable: every container is frozen, the engine never mutates a snapshot
- Symmetric: both players are described by the same PlayerBoard shape
- Lookup-based: a drone does not store its lane, the lane is found on demand
- Snapshot-scoped: a new snapshot is built whenever the store changes
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterator, Mapping


DEFAULT_LANE_IDS: tuple[str, ...] = ("lane1", "lane2", "lane3")

PLAYER_1 = "player1"
PLAYER_2 = "player2"


@dataclass(frozen=True)
class Drone:
    """
    A drone deployed on a lane.

    Stats here are base stats. Effective stats (buffs, auras, debuffs)
    come from the injected StatsCalculator.
    """
    id: str
    name: str
    attack: int = 0
    speed: int = 0
    hull: int = 1
    max_hull: int | None = None
    shields: int = 0

    is_exhausted: bool = False
    is_marked: bool = False
    is_snared: bool = False

    keywords: frozenset[str] = frozenset()

    @property
    def is_damaged(self) -> bool:
        return self.max_hull is not None and self.hull < self.max_hull


@dataclass(frozen=True)
class ShipSection:
    """A ship section placed behind one lane."""
    id: str
    lane: str | None = None
    hull: int = 0
    max_hull: int | None = None
    shields: int = 0
    destroyed: bool = False

    @property
    def is_damaged(self) -> bool:
        return self.max_hull is not None and self.hull < self.max_hull


@dataclass(frozen=True)
class HandCard:
    """
    A card instance in a player's hand.

    Note: This is a runtime instance, not the definition.
    The definition is a CardDefinition keyed by card_id.
    """
    id: str  # Instance id, unique per game
    card_id: str  # References CardDefinition.id
    name: str = ""
    cost: int = 0


@dataclass(frozen=True)
class DroneType:
    """An entry of the active drone pool: the unit upgrades are applied to."""
    name: str
    upgrade_slots: int = 0


@dataclass(frozen=True)
class AppliedUpgrade:
    """An upgrade card already attached to a drone type."""
    instance_id: str
    card_id: str
    name: str = ""
    slots: int | None = None  # None -> engine default slot cost
    indestructible: bool = False


@dataclass(frozen=True)
class PlayerBoard:
    """
    Everything the engine may inspect about one player.

    drones_on_board maps lane id -> drones in lane order. Lanes missing
    from the mapping are treated as empty.
    """
    player_id: str
    drones_on_board: Mapping[str, tuple[Drone, ...]] = field(default_factory=dict)
    hand: tuple[HandCard, ...] = ()
    ship_sections: tuple[ShipSection, ...] = ()
    active_drone_pool: tuple[DroneType, ...] = ()
    applied_upgrades: Mapping[str, tuple[AppliedUpgrade, ...]] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mappings and coerce lists handed in by callers
        drones = {lane: tuple(ds or ()) for lane, ds in self.drones_on_board.items()}
        upgrades = {name: tuple(us or ()) for name, us in self.applied_upgrades.items()}
        object.__setattr__(self, "drones_on_board", MappingProxyType(drones))
        object.__setattr__(self, "applied_upgrades", MappingProxyType(upgrades))
        object.__setattr__(self, "hand", tuple(self.hand))
        object.__setattr__(self, "ship_sections", tuple(self.ship_sections))
        object.__setattr__(self, "active_drone_pool", tuple(self.active_drone_pool))

    def drones_in(self, lane_id: str) -> tuple[Drone, ...]:
        """Drones in a lane, empty if the lane is unknown."""
        return self.drones_on_board.get(lane_id, ())

    def drone_count(self, lane_id: str) -> int:
        return len(self.drones_in(lane_id))

    def iter_drones(self, lane_ids: tuple[str, ...]) -> Iterator[tuple[str, Drone]]:
        """Yield (lane_id, drone) in lane order, then board order."""
        for lane_id in lane_ids:
            for drone in self.drones_in(lane_id):
                yield lane_id, drone

    def upgrades_for(self, drone_name: str) -> tuple[AppliedUpgrade, ...]:
        return self.applied_upgrades.get(drone_name, ())

    def without_card(self, card_id: str) -> PlayerBoard:
        """Copy of the board with a hand card instance removed."""
        return replace(self, hand=tuple(c for c in self.hand if c.id != card_id))

    def with_drone_moved(self, drone_id: str, to_lane: str) -> PlayerBoard:
        """
        Copy of the board with a drone relocated to the end of another lane.

        Unknown drones leave the board unchanged.
        """
        moved = None
        drones = {}
        for lane_id, lane_drones in self.drones_on_board.items():
            kept = []
            for drone in lane_drones:
                if drone.id == drone_id and moved is None:
                    moved = drone
                else:
                    kept.append(drone)
            drones[lane_id] = tuple(kept)
        if moved is None:
            return self
        drones[to_lane] = drones.get(to_lane, ()) + (moved,)
        return replace(self, drones_on_board=drones)


@dataclass(frozen=True)
class BoardSnapshot:
    """
    Both boards at one point in time.

    Callers must always supply a consistent pair taken from the same
    moment; the engine never caches anything across snapshots.
    """
    player1: PlayerBoard
    player2: PlayerBoard
    lane_ids: tuple[str, ...] = DEFAULT_LANE_IDS

    def __post_init__(self):
        object.__setattr__(self, "lane_ids", tuple(self.lane_ids))

    @property
    def boards(self) -> tuple[PlayerBoard, PlayerBoard]:
        return (self.player1, self.player2)

    def get_board(self, player_id: str) -> PlayerBoard | None:
        """Get a board by player ID."""
        for board in self.boards:
            if board.player_id == player_id:
                return board
        return None

    def with_board(self, board: PlayerBoard) -> BoardSnapshot:
        """Copy of the snapshot with one player's board replaced."""
        if board.player_id == self.player1.player_id:
            return replace(self, player1=board)
        if board.player_id == self.player2.player_id:
            return replace(self, player2=board)
        return self

    def opponent_of(self, player_id: str) -> str | None:
        """Player ID of the other player, None if player_id is unknown."""
        if player_id == self.player1.player_id:
            return self.player2.player_id
        if player_id == self.player2.player_id:
            return self.player1.player_id
        return None
