"""
Snapshot - Read-only view of a session for renderers and clients.

A snapshot is built from an EngineState and never points back into it, so a
caller can keep old snapshots around (the runner diffs consecutive ones to
derive feedback events).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .core.types import PHASE_NAMES, SUB_PHASE_NAMES, Classification

if TYPE_CHECKING:
    from .world.state import EngineState


@dataclass
class Snapshot:
    """
    Everything a renderer needs for one frame.

    Attributes:
        players: Player dicts, each with its current classification
        towers: Active tower zones
        indicators: Corner and diagonal markers (phase 1.2 only)
        phase / sub_phase: Current position in the state machine
        phase_name / sub_phase_name: Display names
        solved: True once the phase's terminal sub-phase passed
        required_conception: Conception kind the current towers need
        last_violations: Violations from the most recent check
    """
    players: List[Dict[str, Any]]
    towers: List[Dict[str, Any]]
    indicators: List[Dict[str, Any]]
    phase: int
    sub_phase: int
    phase_name: str
    sub_phase_name: str
    solved: bool
    required_conception: Optional[str] = None
    last_violations: List[str] = field(default_factory=list)

    @classmethod
    def from_state(cls, state: EngineState) -> Snapshot:
        players = []
        for player in state.players:
            data = player.to_dict()
            verdict = state.classifications.get(player.id, Classification.NEUTRAL)
            data["classification"] = verdict.value
            players.append(data)

        return cls(
            players=players,
            towers=[tower.to_dict() for tower in state.zones.towers],
            indicators=[zone.to_dict() for zone in state.zones.indicators()],
            phase=state.phase,
            sub_phase=state.sub_phase,
            phase_name=PHASE_NAMES[state.phase],
            sub_phase_name=SUB_PHASE_NAMES[(state.phase, state.sub_phase)],
            solved=state.solved,
            required_conception=(
                state.required_conception.value if state.required_conception else None
            ),
            last_violations=list(state.last_violations),
        )

    def player(self, entity_id: int) -> Optional[Dict[str, Any]]:
        for data in self.players:
            if data["id"] == entity_id:
                return data
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "players": [dict(p) for p in self.players],
            "towers": [dict(t) for t in self.towers],
            "indicators": [dict(z) for z in self.indicators],
            "phase": self.phase,
            "sub_phase": self.sub_phase,
            "phase_name": self.phase_name,
            "sub_phase_name": self.sub_phase_name,
            "solved": self.solved,
            "required_conception": self.required_conception,
            "last_violations": list(self.last_violations),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Snapshot:
        return cls(
            players=[dict(p) for p in data["players"]],
            towers=[dict(t) for t in data.get("towers", [])],
            indicators=[dict(z) for z in data.get("indicators", [])],
            phase=data["phase"],
            sub_phase=data["sub_phase"],
            phase_name=data["phase_name"],
            sub_phase_name=data["sub_phase_name"],
            solved=data["solved"],
            required_conception=data.get("required_conception"),
            last_violations=list(data.get("last_violations", [])),
        )
