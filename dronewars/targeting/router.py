"""
Targeting Router - Dispatches a definition to its targeting processor.

The router is used by:
1. The card flow, to fill valid_targets for each phase
2. UI highlighting, to show what a card or ability can hit
3. Validation (is this selection among the legal targets?)

Design: a closed registry keyed by TargetingType. Anything the registry
does not know resolves to no targets; the router never raises on data.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from ..card_schema.definitions import CardDefinition, Targeting, TargetingType, parse_targeting_type
from ..config import EngineConfig
from . import processors
from .context import CostSelection, TargetDescriptor, TargetingContext, TargetKind
from .processors import Processor
from .restrictions import drone_can_move

log = logging.getLogger(__name__)


def default_registry() -> dict[TargetingType, Processor]:
    return {
        TargetingType.DRONE: processors.process_drone,
        TargetingType.LANE: processors.process_lane,
        TargetingType.SHIP_SECTION: processors.process_ship_section,
        TargetingType.SELF: processors.process_self,
        TargetingType.CARD_IN_HAND: processors.process_card_in_hand,
        TargetingType.APPLIED_UPGRADE: processors.process_applied_upgrade,
        TargetingType.DRONE_CARD: processors.process_upgrade_slots,
        TargetingType.NONE: processors.process_none,
    }


@dataclass
class TargetingRouter:
    """
    Resolves legal targets for cards and abilities.

    Built once by the composition root and passed to whoever needs it.
    """
    config: EngineConfig = field(default_factory=EngineConfig)
    registry: dict[TargetingType, Processor] = field(default_factory=default_registry)

    def resolve_targets(self, context: TargetingContext) -> list[TargetDescriptor]:
        """
        Legal targets for the definition's own targeting.

        Upgrade cards always use the upgrade-slot processor, whatever
        their targeting says.
        """
        definition = context.definition
        if isinstance(definition, CardDefinition) and definition.is_upgrade:
            return processors.process_upgrade_slots(definition.targeting, context, self.config)
        return self._route(definition.targeting, context)

    def resolve_cost_targets(self, context: TargetingContext) -> list[TargetDescriptor]:
        """
        Legal targets for a card's additional cost. No cost -> [].

        A movement cost only offers drones that are able to move.
        """
        definition = context.definition
        cost = getattr(definition, "additional_cost", None)
        if cost is None:
            return []
        targets = self._route(cost.targeting, context)
        if cost.is_movement:
            targets = [
                t for t in targets
                if t.type != TargetKind.DRONE
                or drone_can_move(t.entity, t.lane, t.owner, context, self.config)
            ]
        return targets

    def resolve_effect_targets(
        self,
        context: TargetingContext,
        cost_selection: CostSelection | None,
    ) -> list[TargetDescriptor]:
        """
        Legal effect targets once the additional cost has been chosen.

        Targets are computed on the boards as they stand after the cost is
        paid: a discarded card is gone and a moved drone is in its new lane.
        """
        return self.resolve_targets(context.with_cost_applied(cost_selection))

    def _route(self, targeting: Targeting, context: TargetingContext) -> list[TargetDescriptor]:
        kind = parse_targeting_type(targeting.type)
        processor = self.registry.get(kind) if kind is not None else None
        if processor is None:
            log.debug("No processor for targeting type %r, no targets", targeting.type)
            return []
        return processor(targeting, context, self.config)


def legal_targets(
    context: TargetingContext,
    router: TargetingRouter | None = None,
) -> list[TargetDescriptor]:
    """Convenience function to resolve a definition's legal targets."""
    if router is None:
        router = TargetingRouter()
    return router.resolve_targets(context)
