from engine.core.types import Conception, ConceptionKind, DebuffTag, Perfection, PerfectionKind
from engine.mechanics import CornerAssignmentResolver, resolve_corners


def test_priority_takes_home_corner_then_splicers_walk():
    assert resolve_corners(PerfectionKind.ALPHA) == {
        "priority": "A", "multisplice": "B", "supersplice": "C",
    }
    assert resolve_corners(PerfectionKind.BETA) == {
        "priority": "B", "multisplice": "A", "supersplice": "C",
    }
    assert resolve_corners(PerfectionKind.GAMMA) == {
        "priority": "C", "multisplice": "A", "supersplice": "B",
    }


def test_without_priority_splicers_take_opposite_ends():
    assert resolve_corners(None) == {
        "priority": None, "multisplice": "A", "supersplice": "C",
    }


def test_taken_home_corner_is_not_replaced():
    roles = resolve_corners(PerfectionKind.ALPHA, taken=["A"])
    assert roles["priority"] is None
    assert roles["multisplice"] == "B"
    assert roles["supersplice"] == "C"


def test_no_corner_left_for_a_splicer():
    roles = resolve_corners(PerfectionKind.GAMMA, taken=["A", "B"])
    assert roles == {"priority": "C", "multisplice": None, "supersplice": None}


def test_resolution_is_idempotent():
    for kind in list(PerfectionKind) + [None]:
        assert resolve_corners(kind) == resolve_corners(kind)


def test_resolver_uses_unused_perfection_holder(state):
    state.require_entity(0).buff = Conception(ConceptionKind.SHOCKING)
    state.require_entity(1).buff = Conception(ConceptionKind.SHOCKING)
    state.require_entity(2).buff = Perfection(PerfectionKind.BETA)

    assignment = CornerAssignmentResolver().assign(state)

    multi = state.player_with_tag(DebuffTag.MULTISPLICE)
    supers = state.player_with_tag(DebuffTag.SUPERSPLICE)
    assert assignment.priority_id == 2
    assert assignment.corner_for(2) == "B"
    assert assignment.corner_for(multi.id) == "A"
    assert assignment.corner_for(supers.id) == "C"
    assert assignment.problems == []
    assert assignment == CornerAssignmentResolver().assign(state)


def test_resolver_reports_missing_priority(state):
    assignment = CornerAssignmentResolver().assign(state)

    assert assignment.priority_id is None
    assert any("exactly one unused Perfection holder" in p for p in assignment.problems)
