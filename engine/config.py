"""
EngineConfig - Tunables for a practice session.

Configuration can come from three places:
- Keyword arguments (tests, embedding code)
- A JSON file written by save_json()
- Environment variables, optionally from a .env file (from_env())

Environment variables:
    HC_SEED            Integer seed; empty or unset for a random session
    HC_ZONE_TOLERANCE  Zone radius, in (0, 80]
    HC_FUSION_RADIUS   Fusion pairing radius, in (0, 100]
    HC_LOG_LEVEL       Logging level name (INFO, DEBUG, ...)
    HC_LOG_JSON        "1"/"true" to emit JSON log lines
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv

MAX_ZONE_TOLERANCE = 80.0
MAX_FUSION_RADIUS = 100.0

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class EngineConfig:
    """
    Session configuration.

    Attributes:
        seed: Seed for the session RNG (None for a fresh random session)
        zone_tolerance: Radius of every anchor, tower and diagonal zone
        fusion_radius: Two Perfection holders fuse strictly inside this distance
        log_level: Level passed to configure_logging()
        log_json: Emit JSON log lines instead of the text format
    """
    seed: Optional[int] = None
    zone_tolerance: float = MAX_ZONE_TOLERANCE
    fusion_radius: float = MAX_FUSION_RADIUS
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self):
        self.zone_tolerance = float(self.zone_tolerance)
        self.fusion_radius = float(self.fusion_radius)
        self.log_level = str(self.log_level).upper()

        # Larger radii would let anchors overlap the towers.
        if not 0 < self.zone_tolerance <= MAX_ZONE_TOLERANCE:
            raise ValueError(
                f"zone_tolerance must be in (0, {MAX_ZONE_TOLERANCE:g}], got {self.zone_tolerance}"
            )
        if not 0 < self.fusion_radius <= MAX_FUSION_RADIUS:
            raise ValueError(
                f"fusion_radius must be in (0, {MAX_FUSION_RADIUS:g}], got {self.fusion_radius}"
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EngineConfig:
        """Build a config from to_dict() output; unknown keys are ignored."""
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        return cls(**known)

    def save_json(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        return path

    @classmethod
    def load_json(cls, path: Union[str, Path]) -> EngineConfig:
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))

    @classmethod
    def from_env(cls, dotenv_path: Optional[Union[str, Path]] = None) -> EngineConfig:
        """
        Build a config from HC_* environment variables.

        Args:
            dotenv_path: .env file to load first (default: search upwards from cwd)

        Returns:
            EngineConfig; unset variables keep their defaults
        """
        load_dotenv(dotenv_path)

        data: Dict[str, Any] = {}
        seed = os.getenv("HC_SEED")
        if seed:
            data["seed"] = int(seed)
        tolerance = os.getenv("HC_ZONE_TOLERANCE")
        if tolerance:
            data["zone_tolerance"] = float(tolerance)
        radius = os.getenv("HC_FUSION_RADIUS")
        if radius:
            data["fusion_radius"] = float(radius)
        level = os.getenv("HC_LOG_LEVEL")
        if level:
            data["log_level"] = level
        log_json = os.getenv("HC_LOG_JSON")
        if log_json:
            data["log_json"] = log_json.strip().lower() in _TRUTHY
        return cls(**data)
