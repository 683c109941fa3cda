"""
Tests for card definition parsing, loading and validation.

Tests:
- Pydantic parsing of targeting and restrictions
- YAML loading and error collection
- Validation errors and warnings
"""

import pytest

from ..card_schema.definitions import (
    CardDefinition,
    RelationalStatFilter,
    StatFilter,
    Targeting,
)
from ..card_schema.loader import DefinitionLoadError, load_card_definitions, parse_card_definition
from ..card_schema.validation import DefinitionValidationError, validate_definitions
from ..config import EngineConfig


CARDS_YAML = """
cards:
  - id: CARD001
    name: Laser Blast
    cost: 2
    targeting: {type: DRONE, affinity: ANY, location: ANY_LANE}
    effect: {type: DAMAGE, value: 2}
  - id: UPG001
    name: Overclock
    type: Upgrade
    slots: 2
    max_applications: 1
    targeting: {type: DRONE_CARD}
abilities:
  - name: Self Repair
    targeting: {type: SELF}
    effect: {type: HEAL_HULL, value: 1}
"""


class TestParsing:
    """Tests for definition models."""

    def test_defaults(self):
        """A bare card has NONE targeting and ANY affinity."""
        card = CardDefinition(id="X", name="Bare")
        assert card.targeting.type == "NONE"
        assert card.targeting.affinity == "ANY"
        assert not card.is_upgrade

    def test_restriction_shapes(self):
        """Tags, stat filters and relational filters parse to their models."""
        targeting = Targeting.model_validate({
            "type": "DRONE",
            "restrictions": [
                "MARKED",
                {"stat": "speed", "comparison": "GTE", "value": 5},
                {"type": "STAT_COMPARISON", "stat": "speed", "comparison": "LT", "reference_stat": "speed"},
            ],
            "custom": ["NOT_EXHAUSTED"],
        })
        marked, stat, relational = targeting.restrictions
        assert marked == "MARKED"
        assert isinstance(stat, StatFilter)
        assert isinstance(relational, RelationalStatFilter)
        assert relational.reference == "PRIMARY_TARGET"
        assert targeting.all_restrictions[-1] == "NOT_EXHAUSTED"

    def test_movement_cost(self):
        """Movement costs are recognised."""
        card = CardDefinition.model_validate({
            "id": "M", "name": "Move",
            "additional_cost": {"type": "MULTI_MOVE", "targeting": {"type": "DRONE"}},
        })
        assert card.additional_cost.is_movement

    def test_parse_error(self):
        """Bad data raises DefinitionLoadError naming the card."""
        with pytest.raises(DefinitionLoadError) as exc_info:
            parse_card_definition({"id": "BAD", "name": "Bad", "cost": "lots"})
        assert "BAD" in exc_info.value.errors[0]


class TestLoader:
    """Tests for load_card_definitions."""

    def test_load(self, tmp_path):
        """Cards and abilities are read from YAML."""
        path = tmp_path / "cards.yaml"
        path.write_text(CARDS_YAML)
        definitions = load_card_definitions(path)
        assert [c.id for c in definitions.cards] == ["CARD001", "UPG001"]
        assert definitions.get_card("UPG001").is_upgrade
        assert definitions.get_card("NOPE") is None
        assert definitions.abilities[0].targeting.type == "SELF"

    def test_missing_file(self, tmp_path):
        """A missing file is a load error."""
        with pytest.raises(DefinitionLoadError):
            load_card_definitions(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Unparseable YAML is a load error."""
        path = tmp_path / "cards.yaml"
        path.write_text("cards: [unclosed")
        with pytest.raises(DefinitionLoadError):
            load_card_definitions(path)

    def test_collects_every_error(self, tmp_path):
        """All bad entries are reported together."""
        path = tmp_path / "cards.yaml"
        path.write_text(
            "cards:\n"
            "  - id: A\n"
            "  - id: B\n"
            "    name: Fine\n"
            "  - name: No Id\n"
        )
        with pytest.raises(DefinitionLoadError) as exc_info:
            load_card_definitions(path)
        assert len(exc_info.value.errors) == 2

    def test_validates_against_configured_lanes(self, tmp_path):
        """With a config, lane references are checked against its lanes."""
        path = tmp_path / "cards.yaml"
        path.write_text(
            "cards:\n"
            "  - id: HOLD\n"
            "    name: Hold the Line\n"
            "    condition: {type: CONTROL_LANES, lanes: [left]}\n"
        )
        wide = EngineConfig(lane_ids=("left", "centre", "right"))
        assert load_card_definitions(path, config=wide).get_card("HOLD") is not None

        with pytest.raises(DefinitionValidationError):
            load_card_definitions(path, config=EngineConfig())


class TestValidation:
    """Tests for validate_definitions."""

    def test_valid_set(self):
        """Well-formed cards validate cleanly."""
        cards = [
            CardDefinition.model_validate({
                "id": "C1", "name": "Blast",
                "targeting": {"type": "DRONE", "affinity": "ENEMY", "location": "lane2"},
            }),
            CardDefinition.model_validate({
                "id": "C2", "name": "Hold the Line",
                "condition": {"type": "CONTROL_LANES", "lanes": ["lane1", "lane3"]},
            }),
        ]
        result = validate_definitions(cards)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_duplicate_ids(self):
        """Duplicate ids are errors."""
        cards = [CardDefinition(id="C1", name="One"), CardDefinition(id="C1", name="Two")]
        result = validate_definitions(cards)
        assert not result.valid
        assert any("Duplicate" in e for e in result.errors)

    def test_upgrade_without_slots(self):
        """Upgrades must use at least one slot."""
        card = CardDefinition(id="U", name="Free Lunch", type="Upgrade", slots=0)
        assert not validate_definitions([card]).valid

    def test_movement_cost_must_target_drone(self):
        """A movement cost aimed at a lane is an error."""
        card = CardDefinition.model_validate({
            "id": "M", "name": "Move",
            "additional_cost": {"type": "SINGLE_MOVE", "targeting": {"type": "LANE"}},
        })
        assert not validate_definitions([card]).valid

    def test_unknown_control_lane(self):
        """CONTROL_LANES must name real lanes."""
        card = CardDefinition.model_validate({
            "id": "C", "name": "Hold",
            "condition": {"type": "CONTROL_LANES", "lanes": ["lane7"]},
        })
        result = validate_definitions([card])
        assert any("lane7" in e for e in result.errors)

    def test_unknown_discriminators_are_warnings(self):
        """Unknown types, affinities and locations only warn."""
        card = CardDefinition.model_validate({
            "id": "W", "name": "Weird",
            "targeting": {"type": "WORMHOLE", "affinity": "NEUTRAL", "location": "BEHIND"},
        })
        result = validate_definitions([card])
        assert result.valid
        assert len(result.warnings) == 3

    def test_raise_on_error(self):
        """raise_on_error turns errors into an exception."""
        with pytest.raises(DefinitionValidationError):
            validate_definitions([CardDefinition(id="", name="Nameless")], raise_on_error=True)
