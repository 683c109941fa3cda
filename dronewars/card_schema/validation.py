"""
Definition Validation - Consistency checks for static card data.

Validates that:
1. Required fields are present and ids are unique
2. Upgrade cards describe their slot usage
3. Costs and conditions are well-formed
4. Discriminators are known to the engine (unknown ones are only
   warnings: the engine fails closed on them, so they can never widen
   what a player may do, but they usually mean a typo in the data)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable

from ..engine_core.comparison import parse_comparison
from ..engine_core.state import DEFAULT_LANE_IDS
from .definitions import (
    AbilityDefinition,
    CardDefinition,
    ConditionType,
    RelationalStatFilter,
    SecondaryTargeting,
    StatFilter,
    Targeting,
    TargetingType,
    parse_affinity,
    parse_condition_type,
    parse_location,
    parse_secondary_location,
    parse_targeting_type,
)

log = logging.getLogger(__name__)


class DefinitionValidationError(Exception):
    """Raised when definition validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Definition validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_definitions(
    cards: Iterable[CardDefinition],
    abilities: Iterable[AbilityDefinition] = (),
    lane_ids: tuple[str, ...] = DEFAULT_LANE_IDS,
    raise_on_error: bool = False,
) -> ValidationResult:
    """
    Validate a set of card and ability definitions.

    Returns ValidationResult with errors and warnings.
    Raises DefinitionValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    seen_ids: set[str] = set()
    for card in cards:
        if not card.id:
            errors.append("Card has empty ID")
        elif card.id in seen_ids:
            errors.append(f"Duplicate card id '{card.id}'")
        seen_ids.add(card.id)

        card_errors, card_warnings = _validate_card(card, lane_ids)
        errors.extend(card_errors)
        warnings.extend(card_warnings)

    for ability in abilities:
        if not ability.name:
            errors.append("Ability has empty name")
        warnings.extend(
            f"Ability '{ability.name}': {w}" for w in _check_targeting(ability.targeting, lane_ids)
        )

    for w in warnings:
        log.warning(w)

    result = ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)
    if raise_on_error and not result.valid:
        raise DefinitionValidationError(errors)
    return result


def _validate_card(card: CardDefinition, lane_ids: tuple[str, ...]) -> tuple[list[str], list[str]]:
    """Validate a single card definition."""
    errors: list[str] = []
    warnings: list[str] = []
    label = f"Card '{card.id}'"

    if not card.name:
        errors.append(f"{label} has empty name")

    if card.is_upgrade:
        if card.slots < 1:
            errors.append(f"{label} is an Upgrade but uses {card.slots} slots")
        if card.max_applications is not None and card.max_applications < 1:
            errors.append(f"{label} has max_applications < 1")

    warnings.extend(f"{label}: {w}" for w in _check_targeting(card.targeting, lane_ids))

    cost = card.additional_cost
    if cost is not None:
        cost_kind = parse_targeting_type(cost.targeting.type)
        if cost.is_movement and cost_kind != TargetingType.DRONE:
            errors.append(f"{label}: movement cost must target a DRONE")
        warnings.extend(f"{label} cost: {w}" for w in _check_targeting(cost.targeting, lane_ids))

    if card.secondary_targeting is not None:
        warnings.extend(
            f"{label} secondary: {w}" for w in _check_secondary(card.secondary_targeting, lane_ids)
        )

    condition = card.condition
    if condition is not None:
        kind = parse_condition_type(condition.type)
        if kind is None:
            warnings.append(f"{label}: unknown condition type '{condition.type}' (never playable)")
        elif kind == ConditionType.CONTROL_LANES:
            if not condition.lanes:
                errors.append(f"{label}: CONTROL_LANES condition lists no lanes")
            for lane in condition.lanes:
                if lane not in lane_ids:
                    errors.append(f"{label}: CONTROL_LANES references unknown lane '{lane}'")

    return errors, warnings


def _check_targeting(targeting: Targeting, lane_ids: tuple[str, ...]) -> list[str]:
    """Warnings for discriminators the engine will not recognise."""
    warnings = []
    if parse_targeting_type(targeting.type) is None:
        warnings.append(f"unknown targeting type '{targeting.type}'")
    if parse_affinity(targeting.affinity) is None:
        warnings.append(f"unknown affinity '{targeting.affinity}'")
    location = targeting.location
    if location is not None and parse_location(location) is None and location not in lane_ids:
        warnings.append(f"unknown location '{location}'")
    warnings.extend(_check_restrictions(targeting.all_restrictions))
    warnings.extend(_check_restrictions(targeting.affected_filter))
    return warnings


def _check_secondary(secondary: SecondaryTargeting, lane_ids: tuple[str, ...]) -> list[str]:
    warnings = []
    kind = parse_targeting_type(secondary.type)
    if kind not in (TargetingType.LANE, TargetingType.DRONE):
        warnings.append(f"unsupported secondary type '{secondary.type}'")
    if parse_secondary_location(secondary.location) is None and secondary.location not in lane_ids:
        warnings.append(f"unknown secondary location '{secondary.location}'")
    warnings.extend(_check_restrictions(secondary.restrictions))
    return warnings


def _check_restrictions(restrictions) -> list[str]:
    warnings = []
    for restriction in restrictions:
        if isinstance(restriction, (StatFilter, RelationalStatFilter)):
            if restriction.comparison is not None and parse_comparison(restriction.comparison) is None:
                warnings.append(f"unknown comparison '{restriction.comparison}'")
    return warnings
