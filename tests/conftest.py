from pathlib import Path
import sys

# Add repository root to sys.path so tests can import local modules without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from engine import EngineConfig, MechanicEngine
from engine.core.types import DebuffTag
from engine.mechanics import PhaseStateMachine, PhaseValidator
from engine.mechanics.validator import SPREAD_ANCHORS

# Roster slot -> tag used by the fixed-layout tests (ids 0..7).
FIXED_TAGS = [
    DebuffTag.ALPHA_SHORT,
    DebuffTag.BETA_SHORT,
    DebuffTag.GAMMA_SHORT,
    DebuffTag.MULTISPLICE,
    DebuffTag.ALPHA_LONG,
    DebuffTag.SUPERSPLICE,
    DebuffTag.BETA_LONG,
    DebuffTag.GAMMA_LONG,
]


@pytest.fixture
def fixed_tags():
    return list(FIXED_TAGS)


@pytest.fixture
def machine():
    return PhaseStateMachine()


@pytest.fixture
def validator():
    return PhaseValidator()


@pytest.fixture
def state(machine, fixed_tags):
    """Fresh phase-0 state with the fixed tag layout."""
    return machine.new_state(seed=7, tags=fixed_tags)


@pytest.fixture
def engine(fixed_tags):
    """Engine at phase 0 with the fixed tag layout."""
    engine = MechanicEngine(EngineConfig(seed=7))
    engine.reset(tags=fixed_tags)
    return engine


@pytest.fixture
def spread():
    """Return a helper that moves every player onto its phase-0 anchor."""
    def _spread(state):
        for player in state.players:
            player.position = state.zones.anchor(SPREAD_ANCHORS[player.tag]).position
        return state
    return _spread


@pytest.fixture
def engine_at_phase():
    """Return a helper that auto-plays an engine up to the start of a phase."""
    def _advance_to(engine, phase):
        while engine.state.phase < phase:
            if engine.state.solved:
                assert engine.advance_phase().accepted
                continue
            engine.auto_solve()
            assert engine.check_solution().passed
        return engine
    return _advance_to
