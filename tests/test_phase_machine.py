from engine.core.types import Duration, TowerElement
from engine.mechanics import PHASE_SOLVED, SUB_PHASE_ADVANCED


def solve_phase_zero(state, spread, validator, machine):
    spread(state)
    machine.apply_check(state, validator.check(state))
    assert state.solved


def test_advance_before_solved_is_rejected(state, machine):
    violations = machine.advance(state)

    assert violations == ["Solve the current phase first!"]
    assert state.phase == 0


def test_advance_enters_phase_one(state, spread, validator, machine):
    solve_phase_zero(state, spread, validator, machine)

    assert machine.advance(state) == []

    assert state.phase == 1
    assert state.sub_phase == 0
    assert not state.solved
    assert len(state.zones.towers) == 2
    element = state.required_conception.tower_element
    assert {t.element for t in state.zones.towers} == {element}

    holders = {p.id for p in state.perfection_holders()}
    assert holders == {p.id for p in state.players_with_duration(Duration.SHORT)}


def test_non_terminal_pass_advances_sub_phase(state, spread, validator, machine):
    solve_phase_zero(state, spread, validator, machine)
    machine.advance(state)

    first, second = state.perfection_holders()[:2]
    first.position = second.position = (100.0, 275.0)

    result = validator.check(state)
    machine.apply_check(state, result)

    assert result.passed
    assert result.fusion is not None
    assert result.transition == SUB_PHASE_ADVANCED
    assert state.sub_phase == 1
    assert not state.solved


def test_entering_splicer_positioning_shows_indicators(state, machine):
    state.phase = 1
    state.sub_phase = 1
    state.zones.regenerate_towers(2, TowerElement.WIND)

    machine._enter_sub_phase(state, 2)

    assert state.zones.towers == []
    assert state.zones.indicators_visible
    assert len(state.zones.indicators()) == 6


def test_precondition_failure_changes_nothing(state, validator, machine):
    state.phase = 1
    state.sub_phase = 1

    result = validator.check(state)
    machine.apply_check(state, result)

    assert result.precondition_failed
    assert result.violations == ["Towers not spawned yet - advance the phase first"]
    assert state.sub_phase == 1
    assert state.last_violations == []


def test_advance_past_final_phase_is_rejected(state, machine):
    state.phase = 2
    state.solved = True

    assert machine.advance(state) == ["Already at final phase!"]
    assert state.phase == 2


def test_terminal_pass_reports_phase_solved(state, spread, validator, machine):
    spread(state)
    result = validator.check(state)
    machine.apply_check(state, result)
    assert result.transition == PHASE_SOLVED


def test_phase_two_entry_replaces_every_buff(engine, engine_at_phase):
    engine_at_phase(engine, 2)
    state = engine.state

    assert state.sub_phase == 0
    assert len(state.zones.towers) == 4
    assert state.conception_holders() == []
    assert len(state.perfection_holders()) == 6
    for splicer in state.splicers():
        assert splicer.buff is None
