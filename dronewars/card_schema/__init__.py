"""
Card Schema - Static card and ability definitions.

Definitions are loaded from YAML, parsed into frozen pydantic models and
checked once at load time. The targeting engine only ever reads them.
"""

from .definitions import (
    AbilityDefinition,
    CardDefinition,
    Definition,
    SecondaryTargeting,
    Targeting,
)
from .validation import DefinitionValidationError, ValidationResult, validate_definitions
from .loader import DefinitionLoadError, DefinitionSet, load_card_definitions

__all__ = [
    "AbilityDefinition",
    "CardDefinition",
    "Definition",
    "SecondaryTargeting",
    "Targeting",
    "DefinitionValidationError",
    "ValidationResult",
    "validate_definitions",
    "DefinitionLoadError",
    "DefinitionSet",
    "load_card_definitions",
]
