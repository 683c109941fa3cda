"""
Targeting Context - Per-call inputs and outputs of the targeting engine.

A TargetingContext is built for one query, consumed, and discarded.
TargetDescriptors are what every processor returns: enough data for the
caller to highlight and validate a target without a second lookup.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Union

from ..card_schema.definitions import Affinity, Definition, parse_affinity
from ..engine_core.queries import StatsCalculator, StatsContext
from ..engine_core.state import (
    AppliedUpgrade,
    BoardSnapshot,
    Drone,
    DroneType,
    HandCard,
    ShipSection,
)


class TargetKind(str, Enum):
    """Kinds of target descriptor."""
    DRONE = "drone"
    LANE = "lane"
    SECTION = "section"
    CARD = "card"
    UPGRADE = "upgrade"
    DRONE_TYPE = "drone_type"


TargetEntity = Union[Drone, ShipSection, HandCard, AppliedUpgrade, DroneType, None]

SectionBlocked = Callable[[ShipSection, str], bool]
"""Predicate (section, owner) -> True when combat rules shield the section."""


@dataclass(frozen=True)
class TargetDescriptor:
    """A legal target."""
    id: str
    type: TargetKind
    owner: str
    lane: str | None = None
    entity: TargetEntity = None
    holder: str | None = None  # Drone type an applied upgrade sits on

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity used to match a UI selection against valid targets."""
        return (self.type.value, self.id, self.owner)

    @classmethod
    def for_drone(cls, drone: Drone, owner: str, lane: str) -> TargetDescriptor:
        return cls(id=drone.id, type=TargetKind.DRONE, owner=owner, lane=lane, entity=drone)

    @classmethod
    def for_lane(cls, lane_id: str, owner: str) -> TargetDescriptor:
        return cls(id=lane_id, type=TargetKind.LANE, owner=owner, lane=lane_id)

    @classmethod
    def for_section(cls, section: ShipSection, owner: str) -> TargetDescriptor:
        return cls(id=section.id, type=TargetKind.SECTION, owner=owner, lane=section.lane, entity=section)

    @classmethod
    def for_card(cls, card: HandCard, owner: str) -> TargetDescriptor:
        return cls(id=card.id, type=TargetKind.CARD, owner=owner, entity=card)


@dataclass(frozen=True)
class CostSelection:
    """
    A paid additional cost, carried into effect targeting.

    source_lane is where the cost target was when it was chosen,
    destination_lane is set only for movement costs.
    """
    target: TargetDescriptor
    source_lane: str | None = None
    destination_lane: str | None = None

    def apply_to(self, boards: BoardSnapshot) -> BoardSnapshot:
        """
        Boards as they will look once the cost is paid.

        A discarded card leaves its owner's hand and a moved drone sits at
        the end of its destination lane. Other costs change nothing.
        """
        board = boards.get_board(self.target.owner)
        if board is None:
            return boards
        if self.target.type == TargetKind.CARD:
            return boards.with_board(board.without_card(self.target.id))
        if self.target.type == TargetKind.DRONE and self.destination_lane is not None:
            return boards.with_board(board.with_drone_moved(self.target.id, self.destination_lane))
        return boards


@dataclass(frozen=True)
class PrimarySelection:
    """The already-committed first target of a two-target card."""
    target: TargetDescriptor
    lane: str | None
    owner: str


@dataclass(frozen=True)
class TargetingContext:
    """
    Everything a processor may read.

    stats defaults to base stats when None. section_blocked is the
    combat collaborator's Guardian rule; None means nothing is blocked.
    """
    acting_player_id: str
    boards: BoardSnapshot
    definition: Definition
    source: Drone | ShipSection | None = None
    playing_card_id: str | None = None
    stats: StatsCalculator | None = None
    cost_selection: CostSelection | None = None
    section_blocked: SectionBlocked | None = None

    @property
    def opponent_id(self) -> str | None:
        return self.boards.opponent_of(self.acting_player_id)

    def with_cost_selection(self, cost_selection: CostSelection | None) -> TargetingContext:
        return replace(self, cost_selection=cost_selection)

    def with_cost_applied(self, cost_selection: CostSelection | None) -> TargetingContext:
        """Context for effect targeting: the cost is recorded and its board change applied."""
        if cost_selection is None:
            return self.with_cost_selection(None)
        return replace(self, cost_selection=cost_selection, boards=cost_selection.apply_to(self.boards))

    def with_definition(self, definition: Definition, **changes: Any) -> TargetingContext:
        return replace(self, definition=definition, **changes)

    def target_player_ids(self, affinity: str | None) -> list[str]:
        """
        Player ids an affinity resolves to.

        FRIENDLY -> acting player, ENEMY -> opponent, ANY -> both
        (acting player first). Unknown affinity -> nobody.
        """
        kind = parse_affinity(affinity)
        opponent = self.opponent_id
        if kind == Affinity.FRIENDLY:
            ids = [self.acting_player_id]
        elif kind == Affinity.ENEMY:
            ids = [opponent]
        elif kind == Affinity.ANY:
            ids = [self.acting_player_id, opponent]
        else:
            ids = []
        return [pid for pid in ids if pid is not None and self.boards.get_board(pid) is not None]

    def stats_context(self, owner: str) -> StatsContext:
        return StatsContext(owner=owner, boards=self.boards)
