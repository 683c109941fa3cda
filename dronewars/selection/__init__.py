"""Selection flows: what the player clicks, in which order."""

from .phases import (
    Cancelled,
    Complete,
    DronesConfirmed,
    Idle,
    MoveComplete,
    Phase,
    SelectCost,
    SelectCostMovementDestination,
    SelectDestination,
    SelectDestinationLane,
    SelectDrone,
    SelectDrones,
    SelectEffect,
    SelectSecondary,
    SelectSourceLane,
    TargetSelected,
)
from . import card_flow, movement_flow

__all__ = [
    "Cancelled",
    "Complete",
    "DronesConfirmed",
    "Idle",
    "MoveComplete",
    "Phase",
    "SelectCost",
    "SelectCostMovementDestination",
    "SelectDestination",
    "SelectDestinationLane",
    "SelectDrone",
    "SelectDrones",
    "SelectEffect",
    "SelectSecondary",
    "SelectSourceLane",
    "TargetSelected",
    "card_flow",
    "movement_flow",
]
