import pytest

from engine import EngineConfig, EngineState, MechanicEngine, UnknownEntityError
from engine.core.types import Classification


def test_set_position_clamps_to_arena(engine):
    snapshot = engine.set_position(0, -50, 900)
    assert snapshot.player(0)["position"] == [0.0, 550.0]


def test_unknown_entity_fails_fast(engine):
    before = engine.state.to_dict()
    with pytest.raises(UnknownEntityError) as excinfo:
        engine.set_position(42, 10, 10)
    assert excinfo.value.entity_id == 42
    assert engine.state.to_dict() == before


def test_moving_clears_solved(engine):
    engine.auto_solve()
    engine.check_solution()
    assert engine.get_snapshot().solved

    engine.set_position(3, 200, 200)
    assert not engine.get_snapshot().solved


def test_rejected_advance_leaves_session_unchanged(engine):
    before = engine.state.to_dict()

    result = engine.advance_phase()

    assert not result.accepted
    assert result.violations == ["Solve the current phase first!"]
    assert result.snapshot.phase == 0
    assert engine.state.to_dict() == before


def test_accepted_advance_returns_new_snapshot(engine):
    engine.auto_solve()
    engine.check_solution()

    result = engine.advance_phase()

    assert result.accepted
    assert result.snapshot.phase == 1
    assert result.snapshot.phase_name == "Gamma Resolution"
    assert len(result.snapshot.towers) == 2
    assert result.snapshot.required_conception is not None


def test_same_seed_replays_identically():
    first = MechanicEngine(EngineConfig(seed=99))
    second = MechanicEngine(EngineConfig(seed=99))
    for engine in (first, second):
        engine.auto_solve()
        engine.check_solution()
        engine.advance_phase()
    assert first.get_snapshot().to_dict() == second.get_snapshot().to_dict()


def test_reset_seed_overrides_config():
    engine = MechanicEngine(EngineConfig(seed=1))
    other = MechanicEngine(EngineConfig(seed=2))
    assert engine.reset(2).to_dict() == other.get_snapshot().to_dict()


def test_check_stores_feedback_in_snapshot(engine):
    engine.check_solution()
    snapshot = engine.get_snapshot()

    assert len(snapshot.last_violations) == 8
    assert {p["classification"] for p in snapshot.players} == {Classification.INCORRECT.value}


def test_precondition_failure_is_not_committed(engine):
    state = engine.state.clone()
    state.phase = 1
    state.sub_phase = 1
    engine.reset(state=state)
    before = engine.state.to_dict()

    result = engine.check_solution()

    assert result.precondition_failed
    assert engine.state.to_dict() == before


def test_reset_from_state_uses_a_copy(engine):
    state = engine.state.clone()
    engine.reset(state=state)
    engine.set_position(0, 10, 10)
    assert state.require_entity(0).position != (10.0, 10.0)


def test_state_json_roundtrip_keeps_rng(engine, engine_at_phase):
    engine_at_phase(engine, 1)
    state = engine.state
    loaded = EngineState.from_json(state.to_json())

    assert loaded.to_dict() == state.to_dict()
    assert loaded.rng.random() == state.clone().rng.random()


def test_restore_rejects_repeated_tags(engine):
    data = engine.state.to_dict()
    for player in data["players"]:
        player["tag"] = "alpha-short"

    with pytest.raises(ValueError):
        EngineState.from_dict(data)


def test_reset_rejects_state_without_every_tag(engine):
    state = engine.state.clone()
    state.require_entity(1).tag = state.require_entity(0).tag
    before = engine.state.to_dict()

    with pytest.raises(ValueError):
        engine.reset(state=state)
    assert engine.state.to_dict() == before


def test_restore_rejects_one_sided_fusion(engine):
    data = engine.state.to_dict()
    data["players"][0]["buff"] = {"type": "conception", "kind": "winged"}
    data["players"][0]["fusion_partner"] = 1
    data["players"][1]["buff"] = {"type": "conception", "kind": "winged"}

    with pytest.raises(ValueError, match="not fused with each other"):
        EngineState.from_dict(data)


def test_restore_rejects_partner_without_conception(engine):
    data = engine.state.to_dict()
    data["players"][0]["fusion_partner"] = 1
    data["players"][1]["fusion_partner"] = 0

    with pytest.raises(ValueError, match="no Conception"):
        EngineState.from_dict(data)


def test_restore_rejects_conception_without_partner(engine):
    data = engine.state.to_dict()
    data["players"][0]["buff"] = {"type": "conception", "kind": "winged"}

    with pytest.raises(ValueError, match="without a fusion partner"):
        EngineState.from_dict(data)


def test_snapshot_roundtrip(engine):
    snapshot = engine.get_snapshot()
    assert type(snapshot).from_dict(snapshot.to_dict()) == snapshot


def test_snapshot_names(engine):
    snapshot = engine.get_snapshot()
    assert snapshot.phase_name == "Alpha Resolution"
    assert snapshot.sub_phase_name == "Spread and Stack"
    assert snapshot.towers == []
    assert snapshot.indicators == []
