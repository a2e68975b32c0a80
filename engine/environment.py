"""
MechanicEngine - Main engine interface.

This is the primary API of the High Concept mechanic validator. Renderers,
the HTTP API and the session runner only ever talk to this facade.

Usage:
    from engine import MechanicEngine

    engine = MechanicEngine()
    snapshot = engine.reset(seed=42)

    engine.set_position(0, 550, 50)
    result = engine.check_solution()
    if not result.passed:
        print(result.violations)

    if engine.get_snapshot().solved:
        engine.advance_phase()

Every operation runs against a clone of the current EngineState and is
committed only when accepted, so a rejected operation leaves the session
exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from infra.logger import get_logger

from .config import EngineConfig
from .core.types import DebuffTag
from .core.validation import CheckResult
from .mechanics import (
    AutoSolver,
    CornerAssignmentResolver,
    FusionResolver,
    PhaseStateMachine,
    PhaseValidator,
)
from .snapshot import Snapshot
from .world.state import EngineState

log = get_logger(__name__)


@dataclass
class AdvanceResult:
    """
    Outcome of advance_phase().

    Attributes:
        accepted: True when the phase moved forward
        violations: Why the advance was rejected (empty when accepted)
        snapshot: Session view after the call
    """
    accepted: bool
    violations: List[str] = field(default_factory=list)
    snapshot: Optional[Snapshot] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accepted": self.accepted,
            "violations": list(self.violations),
            "snapshot": self.snapshot.to_dict() if self.snapshot else None,
        }


class MechanicEngine:
    """
    High Concept mechanic validator - main simulation interface.

    The engine owns:
    - The committed EngineState of the session
    - The resolvers (fusion, corners, validator, state machine, solver)

    Attributes:
        config: EngineConfig the resolvers were built from
    """

    def __init__(
            self,
            config: Optional[EngineConfig] = None,
            state: Optional[EngineState] = None,
    ):
        """
        Initialize the engine and start a session.

        Args:
            config: Session configuration (defaults when omitted)
            state: Resume this state instead of drawing a new one
        """
        self.config = config or EngineConfig()

        # Mechanics modules (stateless, can be reused)
        corners = CornerAssignmentResolver()
        self._machine = PhaseStateMachine(zone_tolerance=self.config.zone_tolerance)
        self._validator = PhaseValidator(
            fusion=FusionResolver(radius=self.config.fusion_radius),
            corners=corners,
        )
        self._solver = AutoSolver(corners=corners)

        if state is not None:
            self._state = state.clone()
        else:
            self._state = self._machine.new_state(seed=self.config.seed)

    @property
    def state(self) -> EngineState:
        """The committed state. Mutate it only through the engine operations."""
        return self._state

    # ========================================================================
    # OPERATIONS
    # ========================================================================

    def reset(
            self,
            seed: Optional[int] = None,
            *,
            state: Optional[EngineState] = None,
            tags: Optional[Sequence[DebuffTag]] = None,
    ) -> Snapshot:
        """
        Start a new session.

        Args:
            seed: Seed for the new session (falls back to config.seed)
            state: Resume a copy of this state instead of drawing a new one
            tags: Fixed tag per roster slot instead of a random permutation

        Returns:
            Snapshot of the new session

        Raises:
            ValueError: If the restored state breaks the tag or fusion rules
        """
        if state is not None:
            self._state = state.clone()
            log.info("Session restored at phase %s.%s", self._state.phase, self._state.sub_phase)
        else:
            seed = self.config.seed if seed is None else seed
            self._state = self._machine.new_state(seed=seed, tags=tags)
            log.info("Session reset (seed=%s)", seed)
        return self.get_snapshot()

    def set_position(self, entity_id: int, x: float, y: float) -> Snapshot:
        """
        Move one player.

        The position is clamped to the arena. Moving anyone clears the
        solved flag, so the phase has to be checked again.

        Raises:
            UnknownEntityError: If entity_id is not in the roster
        """
        working = self._state.clone()
        player = working.require_entity(entity_id)
        requested = (float(x), float(y))
        if not working.arena.in_bounds(requested):
            log.debug("Clamping %s from (%.1f, %.1f) into the arena", player.name, *requested)
        player.position = working.arena.clamp(requested)
        working.solved = False

        self._commit(working)
        log.debug("Moved %s to (%.1f, %.1f)", player.name, *player.position)
        return self.get_snapshot()

    def get_snapshot(self) -> Snapshot:
        return Snapshot.from_state(self._state)

    def check_solution(self) -> CheckResult:
        """
        Validate the current sub-phase and apply the outcome.

        Returns:
            CheckResult; precondition failures leave the session unchanged
        """
        working = self._state.clone()
        result = self._validator.check(working)

        if result.precondition_failed:
            log.info("Check rejected: %s", result.violations[0])
            return result

        self._machine.apply_check(working, result)
        self._commit(working)

        if result.fusion is not None:
            log.info("Fusion: %s", result.fusion.description)
        if result.passed:
            log.info(
                "Check passed at phase %s.%s (transition=%s)",
                working.phase, working.sub_phase, result.transition,
            )
        else:
            log.debug("Check failed with %d violation(s)", len(result.violations))
        return result

    def advance_phase(self) -> AdvanceResult:
        """
        Move to the next phase once the current one is solved.

        Returns:
            AdvanceResult; a rejection leaves the session unchanged
        """
        working = self._state.clone()
        violations = self._machine.advance(working)
        if violations:
            log.info("Advance rejected: %s", violations[0])
            return AdvanceResult(accepted=False, violations=violations, snapshot=self.get_snapshot())

        self._commit(working)
        log.info(
            "Advanced to phase %s (required conception: %s)",
            working.phase, working.required_conception,
        )
        return AdvanceResult(accepted=True, snapshot=self.get_snapshot())

    def auto_solve(self) -> Snapshot:
        """
        Move every player to a passing position for the current sub-phase.

        Only positions change; the next check_solution() commits the outcome.
        """
        working = self._state.clone()
        self._solver.apply(working)
        working.solved = False

        self._commit(working)
        log.debug("Auto-solved phase %s.%s", working.phase, working.sub_phase)
        return self.get_snapshot()

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _commit(self, working: EngineState) -> None:
        self._state = working

    def __repr__(self) -> str:
        return f"MechanicEngine(config={self.config}, state={self._state})"
