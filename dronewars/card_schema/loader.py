"""Card loader: parses card and ability YAML files into definition models.

Expected layout::

    cards:
      - id: CARD001
        name: Laser Blast
        type: Ordnance
        targeting: {type: DRONE, affinity: ANY, location: ANY_LANE}
        effect: {type: DAMAGE, value: 2}
    abilities:
      - name: Self Repair
        targeting: {type: SELF}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..config import EngineConfig
from .definitions import AbilityDefinition, CardDefinition
from .validation import validate_definitions

log = logging.getLogger(__name__)


class DefinitionLoadError(Exception):
    """Raised when a data file cannot be parsed into definitions."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Could not load definitions: {len(errors)} error(s)")


@dataclass
class DefinitionSet:
    """Cards and abilities loaded from one data file."""
    cards: list[CardDefinition] = field(default_factory=list)
    abilities: list[AbilityDefinition] = field(default_factory=list)

    def get_card(self, card_id: str) -> CardDefinition | None:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None


def parse_card_definition(raw: dict[str, Any]) -> CardDefinition:
    """Parse one card dict, raising DefinitionLoadError on bad data."""
    try:
        return CardDefinition.model_validate(raw)
    except ValidationError as e:
        label = raw.get("id", "<no id>") if isinstance(raw, dict) else "<not a mapping>"
        raise DefinitionLoadError(
            [f"Card '{label}': {err['loc']}: {err['msg']}" for err in e.errors()]
        ) from e


def parse_ability_definition(raw: dict[str, Any]) -> AbilityDefinition:
    """Parse one ability dict, raising DefinitionLoadError on bad data."""
    try:
        return AbilityDefinition.model_validate(raw)
    except ValidationError as e:
        label = raw.get("name", "<no name>") if isinstance(raw, dict) else "<not a mapping>"
        raise DefinitionLoadError(
            [f"Ability '{label}': {err['loc']}: {err['msg']}" for err in e.errors()]
        ) from e


def load_card_definitions(path: str | Path, config: EngineConfig | None = None) -> DefinitionSet:
    """Load every card and ability from a YAML file.

    All malformed entries are collected before raising, so one run
    reports every problem in the file. When a config is given, the
    loaded set is also validated against its lanes and any validation
    error raises DefinitionValidationError.
    """
    p = Path(path)
    try:
        with p.open() as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise DefinitionLoadError([f"{p}: {e}"]) from e

    if not isinstance(raw, dict):
        raise DefinitionLoadError([f"{p}: top level must be a mapping"])

    result = DefinitionSet()
    errors: list[str] = []

    for entry in raw.get("cards") or []:
        try:
            result.cards.append(parse_card_definition(entry))
        except DefinitionLoadError as e:
            errors.extend(e.errors)

    for entry in raw.get("abilities") or []:
        try:
            result.abilities.append(parse_ability_definition(entry))
        except DefinitionLoadError as e:
            errors.extend(e.errors)

    if errors:
        raise DefinitionLoadError(errors)

    if config is not None:
        validate_definitions(result.cards, result.abilities, config.lane_ids, raise_on_error=True)

    log.info("Loaded %d cards and %d abilities from %s",
             len(result.cards), len(result.abilities), p)
    return result
