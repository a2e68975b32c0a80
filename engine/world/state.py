"""
EngineState - Explicit state of one practice session.

The EngineState is the value every engine operation reads and writes. It:
- Holds the eight players (tags, buffs, positions)
- Holds the zone registry (anchors, towers, indicators)
- Tracks the phase, sub-phase, solved flag and required Conception
- Carries the session RNG so a seeded session is reproducible

It does NOT decide anything:
- Tag and Perfection assignment live in mechanics.assignment
- Fusion lives in mechanics.fusion
- Rule checks live in mechanics.validator
- Phase transitions live in mechanics.phases
"""

from __future__ import annotations

import json
import random
from typing import Any, Dict, Iterable, List, Optional

from ..core.errors import UnknownEntityError
from ..core.types import (
    Classification,
    ConceptionKind,
    DebuffTag,
    Duration,
    PerfectionKind,
)
from ..entities.player import Player
from ..entities.roster import validate_fusion_links, validate_tag_permutation
from .arena import Arena
from .zones import ZoneRegistry


class EngineState:
    """
    The complete state of a session.

    Attributes:
        arena: Spatial bounds
        zones: Zone registry (anchors and the current towers)
        phase: 0, 1 or 2
        sub_phase: Sub-phase within the phase (0 for phase 0)
        solved: True right after the phase's terminal sub-phase passed
        required_conception: Conception kind the current towers demand
        rng: Session random source
    """

    def __init__(
            self,
            players: List[Player],
            zones: Optional[ZoneRegistry] = None,
            arena: Optional[Arena] = None,
            seed: Optional[int] = None
    ):
        """
        Initialize a state around an existing roster.

        Args:
            players: The eight players, ids unique
            zones: Zone registry (a default one is built if omitted)
            arena: Arena bounds (default 550x550)
            seed: Random seed for reproducibility
        """
        self.arena = arena or Arena()
        self.zones = zones or ZoneRegistry(center=self.arena.center)

        self._players: List[Player] = list(players)
        self._players_by_id: Dict[int, Player] = {p.id: p for p in self._players}
        if len(self._players_by_id) != len(self._players):
            raise ValueError("Player ids must be unique")

        # Phase state
        self.phase: int = 0
        self.sub_phase: int = 0
        self.solved: bool = False
        self.required_conception: Optional[ConceptionKind] = None

        # Feedback from the last check
        self.classifications: Dict[int, Classification] = {
            p.id: Classification.NEUTRAL for p in self._players
        }
        self.last_violations: List[str] = []

        # Random number generator
        self.seed = seed
        self.rng = random.Random(seed)

    # ========================================================================
    # PLAYER ACCESS
    # ========================================================================

    @property
    def players(self) -> List[Player]:
        """All players in id order."""
        return list(self._players)

    def get_entity(self, entity_id: int) -> Optional[Player]:
        """
        Get player by ID.

        Args:
            entity_id: Player ID to look up

        Returns:
            Player if found, None otherwise
        """
        return self._players_by_id.get(entity_id)

    def require_entity(self, entity_id: int) -> Player:
        """
        Get player by ID or fail fast.

        Raises:
            UnknownEntityError: If no player has that ID
        """
        player = self.get_entity(entity_id)
        if player is None:
            raise UnknownEntityError(entity_id)
        return player

    def player_with_tag(self, tag: DebuffTag) -> Player:
        """Get the unique holder of a tag."""
        for player in self._players:
            if player.tag == tag:
                return player
        raise LookupError(f"No player holds {tag}")

    def players_with_duration(self, duration: Duration) -> List[Player]:
        return [p for p in self._players if p.tag.duration == duration]

    def splicers(self) -> List[Player]:
        return [p for p in self._players if p.tag.is_splicer]

    def perfection_holders(
            self,
            kinds: Optional[Iterable[PerfectionKind]] = None,
    ) -> List[Player]:
        """
        Get players holding an unfused Perfection, in id order.

        Args:
            kinds: If provided, only keep holders of these kinds
        """
        allowed = set(kinds) if kinds is not None else None
        return [
            p for p in self._players
            if p.has_perfection and not p.fused
            and (allowed is None or p.perfection_kind in allowed)
        ]

    def conception_holders(self) -> List[Player]:
        return [p for p in self._players if p.has_conception]

    def reset_classifications(self) -> None:
        self.classifications = {p.id: Classification.NEUTRAL for p in self._players}
        self.last_violations = []

    # ========================================================================
    # UTILITY
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize state to dictionary.

        Returns:
            JSON-serializable dictionary of the complete session state
        """
        return {
            "arena": {"size": self.arena.size},
            "zones": self.zones.to_dict(),
            "players": [player.to_dict() for player in self._players],
            "phase": self.phase,
            "sub_phase": self.sub_phase,
            "solved": self.solved,
            "required_conception": (
                self.required_conception.value if self.required_conception else None
            ),
            "classifications": {
                str(entity_id): verdict.value
                for entity_id, verdict in self.classifications.items()
            },
            "last_violations": list(self.last_violations),
            "seed": self.seed,
            "rng_state": self.rng.getstate(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EngineState:
        """
        Deserialize state from dictionary.

        Args:
            data: Dictionary from to_dict()

        Returns:
            Reconstructed EngineState

        Raises:
            ValueError: If the tags are not a permutation or fusion links disagree
        """
        players = [Player.from_dict(p) for p in data["players"]]
        validate_tag_permutation([p.tag for p in players])
        validate_fusion_links(players)

        state = cls(
            players=players,
            zones=ZoneRegistry.from_dict(data["zones"]),
            arena=Arena(data["arena"]["size"]),
            seed=data.get("seed"),
        )
        state.phase = data["phase"]
        state.sub_phase = data["sub_phase"]
        state.solved = data["solved"]
        required = data.get("required_conception")
        state.required_conception = ConceptionKind(required) if required else None
        state.classifications = {
            int(entity_id): Classification(verdict)
            for entity_id, verdict in data.get("classifications", {}).items()
        }
        state.last_violations = list(data.get("last_violations", []))

        # Convert rng_state to tuple (JSON converts tuples to lists)
        # Random state is: (version, (624 integers..., position), gauss_next)
        rng_state = data.get("rng_state")
        if rng_state is not None:
            if isinstance(rng_state, list):
                inner_tuple = tuple(rng_state[1]) if isinstance(rng_state[1], list) else rng_state[1]
                rng_state = (rng_state[0], inner_tuple, rng_state[2])
            state.rng.setstate(rng_state)

        return state

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=True)

    @classmethod
    def from_json(cls, json_str: str) -> EngineState:
        return cls.from_dict(json.loads(json_str))

    def clone(self) -> EngineState:
        """
        Create a deep copy of this state.

        Operations run against a clone and are committed only when accepted.

        Returns:
            Independent copy of this EngineState
        """
        return EngineState.from_dict(self.to_dict())

    def __str__(self) -> str:
        """String representation."""
        return (f"EngineState(phase={self.phase}.{self.sub_phase}, "
                f"solved={self.solved}, players={len(self._players)})")

    def __repr__(self) -> str:
        """Detailed representation."""
        return (f"EngineState(arena={self.arena}, players={len(self._players)}, "
                f"phase={self.phase}, sub_phase={self.sub_phase}, solved={self.solved}, "
                f"required_conception={self.required_conception}, "
                f"towers={len(self.zones.towers)})")
