"""Engine configuration: loads tunable constants from config/engine.yaml.

Provides a single ``EngineConfig`` dataclass that is loaded once by the
composition root and then passed wherever the constants are needed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .engine_core.state import DEFAULT_LANE_IDS, BoardSnapshot, PlayerBoard

log = logging.getLogger(__name__)

DEFAULT_ENGINE_CONFIG_PATH = "config/engine.yaml"


@dataclass
class EngineConfig:
    """All tunable rule constants.

    Loaded from ``config/engine.yaml``.  Every field has a sensible default
    so the engine works without the file.
    """

    # -- Board -------------------------------------------------------
    lane_ids: tuple[str, ...] = field(default_factory=lambda: DEFAULT_LANE_IDS)

    # -- Upgrades ----------------------------------------------------
    default_max_applications: int = 1
    default_upgrade_slot_cost: int = 1

    # -- Movement ----------------------------------------------------
    inert_keyword: str = "INERT"

    def new_snapshot(self, player1: PlayerBoard, player2: PlayerBoard) -> BoardSnapshot:
        """Snapshot of both boards laid out on the configured lanes."""
        return BoardSnapshot(player1=player1, player2=player2, lane_ids=self.lane_ids)


def load_engine_config(path: str = DEFAULT_ENGINE_CONFIG_PATH) -> EngineConfig:
    """Load engine configuration from a YAML file.

    Missing keys fall back to dataclass defaults.  If the file does not
    exist, or does not hold a mapping, a warning is logged and pure
    defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Engine config not found at %s, using defaults", p)
        return EngineConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        log.warning("Engine config at %s is not a mapping (%s), using defaults",
                    p, type(raw).__name__)
        return EngineConfig()

    log.info("Loaded engine config from %s (%d keys)", p, len(raw))

    lanes = raw.pop("lane_ids", None)
    cfg = EngineConfig(**{
        k: v for k, v in raw.items()
        if k in EngineConfig.__dataclass_fields__
    })
    if lanes:
        cfg.lane_ids = tuple(str(lane) for lane in lanes)
    return cfg
