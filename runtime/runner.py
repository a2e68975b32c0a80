from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from engine import EngineConfig, EngineState, MechanicEngine, Snapshot
from engine.core.types import FINAL_PHASE
from infra.logger import bind_session, get_logger
from infra.paths import SESSION_STORAGE_DIR

from .events import extract_events
from .frame import Frame

log = get_logger(__name__)


class SessionRunner:
    """
    Operation-by-operation session runner that returns UI-friendly frames.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        state: EngineState | Dict[str, Any] | None = None,
    ):
        if isinstance(state, dict):
            state = EngineState.from_dict(state)

        self.engine = MechanicEngine(config=config, state=state)
        self.history: List[Frame] = []
        self._record("reset")

        log.info("SessionRunner initialized (seed=%s)", self.engine.config.seed)

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    def reset(self, seed: Optional[int] = None) -> Frame:
        self.engine.reset(seed)
        self.history = []
        return self._record("reset")

    def move(self, entity_id: int, x: float, y: float) -> Frame:
        self.engine.set_position(entity_id, x, y)
        return self._record("move")

    def check(self) -> Frame:
        result = self.engine.check_solution()
        return self._record("check", result.to_dict())

    def advance(self) -> Frame:
        result = self.engine.advance_phase()
        payload = result.to_dict()
        # The frame carries its own snapshot.
        payload.pop("snapshot")
        return self._record("advance", payload)

    def auto_solve(self) -> Frame:
        self.engine.auto_solve()
        return self._record("auto_solve")

    def run_auto(self, max_steps: int = 50) -> List[Frame]:
        """
        Play the rest of the session with the auto-solver.

        Solves and checks each sub-phase, advancing whenever a phase is
        solved, until the final phase is solved.

        Returns:
            Frames recorded by this call

        Raises:
            RuntimeError: If a solved layout fails its check or the session
                does not finish within max_steps operations
        """
        start = len(self.history)
        for _ in range(max_steps):
            if self.done:
                log.info("Auto run finished after %d frames", len(self.history) - start)
                return self.history[start:]

            if self.snapshot.solved:
                self.advance()
                continue

            self.auto_solve()
            frame = self.check()
            if not frame.result["passed"]:
                raise RuntimeError(
                    f"Auto-solved layout failed at phase {frame.snapshot.phase}."
                    f"{frame.snapshot.sub_phase}: {frame.result['violations']}"
                )

        raise RuntimeError(f"Session did not finish within {max_steps} operations")

    def save_history(self, path: str | Path | None = None) -> Path:
        """Write every recorded frame as JSON."""
        path = Path(path) if path else SESSION_STORAGE_DIR / f"session_{self.engine.state.seed}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        frames = [frame.to_dict() for frame in self.history]
        path.write_text(json.dumps(frames, indent=2), encoding="utf-8")
        log.info("Saved %d frames to %s", len(frames), path)
        return path

    # ------------------------------------------------------------------#
    # Helpers
    # ------------------------------------------------------------------#
    @property
    def snapshot(self) -> Snapshot:
        return self.engine.get_snapshot()

    @property
    def done(self) -> bool:
        snapshot = self.snapshot
        return snapshot.phase == FINAL_PHASE and snapshot.solved

    @property
    def step_count(self) -> int:
        return len(self.history)

    def _record(self, operation: str, result: Dict[str, Any] | None = None) -> Frame:
        snapshot = self.snapshot
        bind_session(self.engine.state.seed, snapshot.phase, snapshot.sub_phase)
        events: List[Dict[str, Any]] = []
        if self.history:
            events = extract_events(
                prev_snapshot=self.history[-1].snapshot,
                snapshot=snapshot,
            )

        for event in events:
            if event.get("severity") == "HIGH":
                log.warning("Session event: %s", event)
            else:
                log.info("Session event: %s", event["type"])

        frame = Frame(
            index=len(self.history),
            operation=operation,
            snapshot=snapshot,
            result=result,
            events=events,
        )
        self.history.append(frame)
        return frame
