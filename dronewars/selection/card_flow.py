"""
Card Flow - Drives target selection for a card from click to completion.

Design principles:
- Pure function: (state, event, context) -> new_state
- Every phase carries the valid targets the UI should highlight
- Invalid clicks leave the phase unchanged
- Effect targets are recomputed once the additional cost is known
"""

from __future__ import annotations
import logging
from dataclasses import replace

from ..card_schema.definitions import CardDefinition, TargetingType, parse_targeting_type
from ..engine_core.queries import adjacent_lanes, find_drone_lane
from ..targeting.context import (
    CostSelection,
    PrimarySelection,
    TargetDescriptor,
    TargetingContext,
    TargetKind,
)
from ..targeting.router import TargetingRouter
from ..targeting.secondary import resolve_secondary_targets
from .phases import (
    Cancelled,
    CardSelectionState,
    Complete,
    Idle,
    SelectCost,
    SelectCostMovementDestination,
    SelectEffect,
    SelectSecondary,
    SelectionEvent,
    TargetSelected,
    find_valid,
)

log = logging.getLogger(__name__)


def begin_card_selection(
    card: CardDefinition,
    context: TargetingContext,
    router: TargetingRouter,
) -> CardSelectionState:
    """
    First phase for a card the player just clicked.

    Cards with an additional cost start by choosing what pays it. A card
    with nothing to pay with, or nothing to target, stays idle.
    """
    ctx = context.with_definition(card)
    if card.additional_cost is not None:
        cost_targets = tuple(router.resolve_cost_targets(ctx))
        if not cost_targets:
            log.info("No way to pay the additional cost of %s, staying idle", card.name)
            return Idle()
        return SelectCost(card=card, valid_targets=cost_targets)

    state = _enter_effect_phase(card, None, ctx, router)
    if isinstance(state, SelectEffect) and not state.valid_targets:
        log.info("No legal targets for %s, staying idle", card.name)
        return Idle()
    return state


def advance(
    state: CardSelectionState,
    event: SelectionEvent,
    context: TargetingContext,
    router: TargetingRouter,
) -> CardSelectionState:
    """
    Apply one selection event.

    Cancelled always resets to idle. Events a phase does not expect,
    and selections outside its valid targets, leave it unchanged.
    """
    if isinstance(event, Cancelled):
        return Idle()

    handler = _get_handler(state)
    if handler is None or not isinstance(event, TargetSelected):
        return state

    target = find_valid(state.valid_targets, event.target)
    if target is None:
        log.debug("Ignoring %s %r: not a valid target in phase %s",
                  event.target.type.value, event.target.id, state.phase.value)
        return state

    return handler(state, target, context.with_definition(state.card), router)


def _get_handler(state: CardSelectionState):
    """Get the handler function for a phase."""
    handlers = {
        SelectCost: _handle_cost,
        SelectCostMovementDestination: _handle_cost_destination,
        SelectEffect: _handle_effect,
        SelectSecondary: _handle_secondary,
    }
    return handlers.get(type(state))


# =============================================================================
# Phase Handlers
# =============================================================================

def _handle_cost(
    state: SelectCost,
    target: TargetDescriptor,
    context: TargetingContext,
    router: TargetingRouter,
) -> CardSelectionState:
    card = state.card
    source_lane = None
    if target.type == TargetKind.DRONE:
        location = find_drone_lane(context.boards, target.id)
        if location is None:
            log.warning("Cost drone %s is not on the board, resetting selection", target.id)
            return Idle()
        source_lane = location.lane

    cost_selection = CostSelection(target=target, source_lane=source_lane)

    if card.additional_cost.is_movement:
        destinations = tuple(
            TargetDescriptor.for_lane(lane_id, context.acting_player_id)
            for lane_id in adjacent_lanes(source_lane, context.boards.lane_ids)
        )
        return SelectCostMovementDestination(
            card=card, cost_selection=cost_selection, valid_targets=destinations
        )

    return _enter_effect_phase(card, cost_selection, context, router)


def _handle_cost_destination(
    state: SelectCostMovementDestination,
    target: TargetDescriptor,
    context: TargetingContext,
    router: TargetingRouter,
) -> CardSelectionState:
    cost_selection = replace(state.cost_selection, destination_lane=target.id)
    return _enter_effect_phase(state.card, cost_selection, context, router)


def _handle_effect(
    state: SelectEffect,
    target: TargetDescriptor,
    context: TargetingContext,
    router: TargetingRouter,
) -> CardSelectionState:
    card = state.card
    if card.secondary_targeting is None:
        return Complete(card=card, cost_selection=state.cost_selection, target=target)

    effect_context = context.with_cost_applied(state.cost_selection)
    lane = target.lane
    if target.type == TargetKind.DRONE:
        location = find_drone_lane(effect_context.boards, target.id)
        if location is None:
            log.warning("Primary drone %s is not on the board, resetting selection", target.id)
            return Idle()
        lane = location.lane

    primary = PrimarySelection(target=target, lane=lane, owner=target.owner)
    secondary_targets = resolve_secondary_targets(primary, card.secondary_targeting, effect_context)
    if not secondary_targets:
        log.info("No secondary target for %s, resolving on %s alone", card.name, target.id)
        return Complete(card=card, cost_selection=state.cost_selection, target=target, skipped=True)

    return SelectSecondary(
        card=card,
        primary=primary,
        cost_selection=state.cost_selection,
        valid_targets=tuple(secondary_targets),
    )


def _handle_secondary(
    state: SelectSecondary,
    target: TargetDescriptor,
    context: TargetingContext,
    router: TargetingRouter,
) -> CardSelectionState:
    return Complete(
        card=state.card,
        cost_selection=state.cost_selection,
        target=state.primary.target,
        secondary_target=target,
    )


def _enter_effect_phase(
    card: CardDefinition,
    cost_selection: CostSelection | None,
    context: TargetingContext,
    router: TargetingRouter,
) -> CardSelectionState:
    # Cards without a target resolve as soon as their cost is paid
    if not card.is_upgrade and parse_targeting_type(card.targeting.type) == TargetingType.NONE:
        return Complete(card=card, cost_selection=cost_selection)

    targets = router.resolve_effect_targets(context, cost_selection)
    if not targets and cost_selection is not None:
        # The cost is already committed, so the effect fizzles
        log.info("No effect targets for %s after its cost, skipping the effect", card.name)
        return Complete(card=card, cost_selection=cost_selection, skipped=True)
    return SelectEffect(card=card, cost_selection=cost_selection, valid_targets=tuple(targets))
