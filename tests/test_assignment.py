import random

import pytest

from engine import MechanicEngine
from engine.core.types import ConceptionKind, DebuffTag, Duration, PerfectionKind
from engine.entities import create_roster
from engine.utils import IDGenerator
from engine.mechanics import (
    assign_perfection,
    assign_tags,
    choose_required_conception,
    fisher_yates,
)


def test_fisher_yates_returns_shuffled_copy():
    items = list(range(10))
    shuffled = fisher_yates(items, random.Random(3))

    assert items == list(range(10))
    assert sorted(shuffled) == items


def test_fisher_yates_is_reproducible_for_a_seed():
    assert fisher_yates(list("abcdefgh"), random.Random(11)) == fisher_yates(list("abcdefgh"), random.Random(11))


def test_assign_tags_is_always_a_permutation():
    for seed in range(200):
        tags = assign_tags(random.Random(seed))
        assert len(tags) == 8
        assert set(tags) == set(DebuffTag)


def test_reset_always_deals_every_tag_once():
    engine = MechanicEngine()
    for seed in range(50):
        snapshot = engine.reset(seed)
        tags = [p["tag"] for p in snapshot.players]
        assert sorted(tags) == sorted(tag.value for tag in DebuffTag)


def test_create_roster_rejects_duplicate_tags():
    tags = [DebuffTag.ALPHA_SHORT] * 8
    with pytest.raises(ValueError):
        create_roster(tags)


def test_phase_one_perfection_goes_to_short_players(state):
    assigned = assign_perfection(state, 1)

    shorts = {p.id for p in state.players_with_duration(Duration.SHORT)}
    assert set(assigned) == shorts
    assert set(assigned.values()) == set(PerfectionKind)
    for player in state.players:
        assert player.has_perfection == (player.id in shorts)


def test_phase_two_perfection_gives_two_of_each_kind(state):
    assigned = assign_perfection(state, 2)

    assert len(assigned) == 6
    for kind in PerfectionKind:
        assert list(assigned.values()).count(kind) == 2
    for splicer in state.splicers():
        assert splicer.buff is None


def test_assign_perfection_rejects_phase_zero(state):
    with pytest.raises(ValueError):
        assign_perfection(state, 0)


def test_required_conception_uses_present_kinds():
    rng = random.Random(0)
    for _ in range(20):
        assert choose_required_conception([PerfectionKind.ALPHA, PerfectionKind.BETA], rng) == ConceptionKind.WINGED
        assert choose_required_conception([PerfectionKind.BETA, PerfectionKind.GAMMA], rng) == ConceptionKind.SHOCKING


def test_required_conception_falls_back_to_winged():
    assert choose_required_conception([PerfectionKind.GAMMA], random.Random(0)) == ConceptionKind.WINGED


def test_required_conception_is_always_a_success_kind():
    rng = random.Random(5)
    seen = set()
    for _ in range(100):
        kind = choose_required_conception(list(PerfectionKind), rng)
        assert not kind.is_failure
        seen.add(kind)
    assert len(seen) == 3


def test_roster_ids_follow_party_order(fixed_tags):
    players = create_roster(fixed_tags)
    assert [p.id for p in players] == list(range(8))
    assert [p.name for p in players] == ["MT", "OT", "H1", "H2", "D1", "D2", "D3", "D4"]


def test_id_generator_counts_from_start():
    ids = IDGenerator(start=3)
    assert [ids.next_id(), ids.next_id(), ids.next_id()] == [3, 4, 5]
