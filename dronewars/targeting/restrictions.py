"""
Restriction Evaluation - Shared filters for drones, lanes and sections.

Restrictions come in three shapes:
- String tags: "MARKED", "EXHAUSTED", "DAMAGED_HULL", "CONTROLLED", ...
- Stat filters: {"stat": "speed", "comparison": "GTE", "value": 5}
- Relational filters: {"type": "STAT_COMPARISON", "stat": "speed",
  "comparison": "LT", "reference": "PRIMARY_TARGET", "reference_stat": "speed"}

Unknown tags and unknown stats never match. A relational filter with no
reference entity or with missing values does not filter anything.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from ..card_schema.definitions import RelationalStatFilter, Restriction, StatFilter
from ..engine_core.comparison import compare, parse_comparison
from ..config import EngineConfig
from ..engine_core.queries import effective_keywords, effective_stat
from ..engine_core.state import Drone, ShipSection
from .context import TargetingContext

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatReference:
    """An entity a relational filter compares against."""
    drone: Drone
    lane: str
    owner: str


_DRONE_TAGS: dict[str, Callable[[Drone], bool]] = {
    "MARKED": lambda d: d.is_marked,
    "NOT_MARKED": lambda d: not d.is_marked,
    "EXHAUSTED": lambda d: d.is_exhausted,
    "NOT_EXHAUSTED": lambda d: not d.is_exhausted,
    "SNARED": lambda d: d.is_snared,
    "NOT_SNARED": lambda d: not d.is_snared,
    "DAMAGED_HULL": lambda d: d.is_damaged,
}

_SECTION_TAGS: dict[str, Callable[[ShipSection], bool]] = {
    "DAMAGED_HULL": lambda s: s.is_damaged,
}


def drone_passes(
    drone: Drone,
    lane: str,
    owner: str,
    restrictions: Iterable[Restriction],
    context: TargetingContext,
    reference: StatReference | None = None,
) -> bool:
    """Check a drone against every restriction."""
    for restriction in restrictions:
        if isinstance(restriction, str):
            check = _DRONE_TAGS.get(restriction)
            if check is None:
                log.debug("Unknown drone restriction tag %r", restriction)
                return False
            if not check(drone):
                return False
        elif isinstance(restriction, StatFilter):
            if not _passes_stat_filter(drone, lane, owner, restriction, context):
                return False
        elif isinstance(restriction, RelationalStatFilter):
            if not _passes_relational(drone, lane, owner, restriction, context, reference):
                return False
        else:
            return False
    return True


def drone_can_move(
    drone: Drone, lane: str, owner: str, context: TargetingContext, config: EngineConfig
) -> bool:
    """A drone may move when it is ready and not INERT."""
    if drone.is_exhausted:
        return False
    keywords = effective_keywords(drone, lane, context.stats, context.stats_context(owner))
    return config.inert_keyword not in keywords and config.inert_keyword not in drone.keywords


def _passes_stat_filter(
    drone: Drone,
    lane: str,
    owner: str,
    restriction: StatFilter,
    context: TargetingContext,
) -> bool:
    value = effective_stat(drone, restriction.stat, lane, context.stats, context.stats_context(owner))
    if value is None:
        return False
    return compare(value, restriction.value, restriction.comparison)


def _passes_relational(
    drone: Drone,
    lane: str,
    owner: str,
    restriction: RelationalStatFilter,
    context: TargetingContext,
    reference: StatReference | None,
) -> bool:
    if reference is None or not restriction.stat or not restriction.reference_stat:
        return True

    drone_value = effective_stat(
        drone, restriction.stat, lane, context.stats, context.stats_context(owner)
    )
    ref_value = effective_stat(
        reference.drone,
        restriction.reference_stat,
        reference.lane,
        context.stats,
        context.stats_context(reference.owner),
    )
    if drone_value is None or ref_value is None:
        return True
    if parse_comparison(restriction.comparison) is None:
        return True
    return compare(drone_value, ref_value, restriction.comparison)


def section_passes(section: ShipSection, restrictions: Iterable[Restriction]) -> bool:
    """Check a ship section against tag restrictions. Stat filters never match sections."""
    for restriction in restrictions:
        check = _SECTION_TAGS.get(restriction) if isinstance(restriction, str) else None
        if check is None or not check(section):
            return False
    return True


def lane_passes(
    lane_id: str,
    owner: str,
    restrictions: Iterable[Restriction],
    context: TargetingContext,
    control: dict[str, str | None],
) -> bool:
    """
    Check a lane against lane tags.

    CONTROLLED / ENEMY_CONTROLLED / UNCONTROLLED are relative to the
    acting player; HAS_DRONES / NO_DRONES look at the lane owner's side.
    """
    board = context.boards.get_board(owner)
    for restriction in restrictions:
        if restriction == "CONTROLLED":
            ok = control.get(lane_id) == context.acting_player_id
        elif restriction == "ENEMY_CONTROLLED":
            ok = control.get(lane_id) == context.opponent_id
        elif restriction == "UNCONTROLLED":
            ok = control.get(lane_id) is None
        elif restriction == "HAS_DRONES":
            ok = board is not None and board.drone_count(lane_id) > 0
        elif restriction == "NO_DRONES":
            ok = board is not None and board.drone_count(lane_id) == 0
        else:
            log.debug("Unknown lane restriction %r", restriction)
            ok = False
        if not ok:
            return False
    return True
