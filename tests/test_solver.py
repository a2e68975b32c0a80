from engine import EngineConfig, MechanicEngine
from engine.core.types import FINAL_PHASE
from engine.mechanics import AutoSolver


def play_through(engine):
    """Solve-then-check every reachable sub-phase; returns the visited keys."""
    visited = []
    while not (engine.state.phase == FINAL_PHASE and engine.state.solved):
        if engine.state.solved:
            assert engine.advance_phase().accepted
            continue
        key = (engine.state.phase, engine.state.sub_phase)
        engine.auto_solve()
        result = engine.check_solution()
        assert result.passed, (key, result.violations)
        visited.append(key)
        assert len(visited) < 20
    return visited


def test_auto_solve_passes_every_sub_phase_for_many_seeds():
    engine = MechanicEngine()
    for seed in range(40):
        engine.reset(seed)
        visited = play_through(engine)
        assert set(visited) == {(0, 0), (1, 0), (1, 1), (1, 2), (2, 0), (2, 1)}


def test_auto_solve_works_with_tighter_zones():
    engine = MechanicEngine(EngineConfig(seed=3, zone_tolerance=40, fusion_radius=50))
    play_through(engine)


def test_solver_only_moves_players(state):
    before = {p.id: (p.tag, p.buff) for p in state.players}

    positions = AutoSolver().apply(state)

    assert set(positions) == {p.id for p in state.players}
    assert {p.id: (p.tag, p.buff) for p in state.players} == before
    for player in state.players:
        assert player.position == positions[player.id]


def test_solve_does_not_touch_state(state):
    original = [p.position for p in state.players]
    AutoSolver().solve(state)
    assert [p.position for p in state.players] == original


def test_auto_solve_clears_solved(engine):
    engine.auto_solve()
    engine.check_solution()
    assert engine.state.solved

    engine.auto_solve()
    assert not engine.state.solved
