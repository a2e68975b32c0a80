import pytest

from engine.core.types import PerfectionKind, TowerElement
from engine.world import Arena, ZoneKind, ZoneRegistry, distance, in_safe_region, within, within_radius


def test_distance_is_euclidean():
    assert distance((0, 0), (3, 4)) == 5


def test_zone_boundary_is_strict():
    zones = ZoneRegistry()
    anchor = zones.anchor("A")  # (550, 50)

    assert not within((470.0, 50.0), anchor)
    assert within((470.5, 50.0), anchor)
    assert within(anchor.position, anchor)


def test_within_radius_is_strict():
    assert not within_radius((0, 0), (100, 0), 100)
    assert within_radius((0, 0), (99.9, 0), 100)


def test_unknown_anchor_raises():
    with pytest.raises(KeyError):
        ZoneRegistry().anchor("Z")


def test_home_corners_follow_perfection_kind():
    zones = ZoneRegistry()
    assert zones.home_corner(PerfectionKind.ALPHA).name == "A"
    assert zones.home_corner(PerfectionKind.BETA).name == "B"
    assert zones.home_corner(PerfectionKind.GAMMA).name == "C"


def test_diagonal_is_midpoint_between_center_and_corner():
    zones = ZoneRegistry()
    assert zones.diagonal("A").position == (412.5, 162.5)
    assert zones.diagonal("B").position == (412.5, 412.5)
    assert zones.diagonal("C").position == (162.5, 412.5)
    assert zones.diagonal("A").label == "A diagonal"


def test_indicators_only_when_visible():
    zones = ZoneRegistry()
    assert zones.indicators() == []

    zones.indicators_visible = True
    names = [zone.name for zone in zones.indicators()]
    assert names == ["A", "B", "C", "diag-A", "diag-B", "diag-C"]


def test_regenerate_towers_share_one_element():
    zones = ZoneRegistry()
    towers = zones.regenerate_towers(4, TowerElement.WATER)

    assert [t.label for t in towers] == ["North Tower", "Mid-North Tower", "Mid-South Tower", "South Tower"]
    assert {t.element for t in towers} == {TowerElement.WATER}

    zones.clear_towers()
    assert zones.towers == []


def test_regenerate_towers_rejects_unknown_count():
    with pytest.raises(ValueError):
        ZoneRegistry().regenerate_towers(3, TowerElement.WIND)


def test_anchors_stay_clear_of_every_tower():
    zones = ZoneRegistry()
    for count in (2, 4):
        zones.regenerate_towers(count, TowerElement.WIND)
        for anchor in zones.anchors():
            assert zones.towers_containing(anchor.position) == []


def test_safe_region_is_strict():
    assert in_safe_region((149.9, 0))
    assert not in_safe_region((150, 10))
    assert not in_safe_region((10, 150))


def test_arena_clamps_into_bounds():
    arena = Arena()
    assert arena.clamp((-20, 600)) == (0.0, 550.0)
    assert arena.center == (275.0, 275.0)
    assert arena.in_bounds((550, 0))
    assert not arena.in_bounds((551, 0))


def test_start_circle_is_around_the_center():
    arena = Arena()
    for index in range(8):
        assert distance(arena.circle_position(index), arena.center) == pytest.approx(200.0)


def test_registry_roundtrip():
    zones = ZoneRegistry(tolerance=60)
    zones.regenerate_towers(2, TowerElement.LIGHTNING)
    zones.indicators_visible = True

    loaded = ZoneRegistry.from_dict(zones.to_dict())
    assert loaded.tolerance == 60
    assert loaded.towers == zones.towers
    assert loaded.indicators_visible


def test_waymarks_a_b_c_are_corner_zones():
    zones = ZoneRegistry()
    kinds = {zone.name: zone.kind for zone in zones.anchors()}

    assert kinds == {
        "A": ZoneKind.CORNER,
        "B": ZoneKind.CORNER,
        "C": ZoneKind.CORNER,
        "2": ZoneKind.ANCHOR,
        "3": ZoneKind.ANCHOR,
    }
    assert zones.diagonal("B").kind == ZoneKind.DIAGONAL
    assert str(ZoneKind.CORNER) == "corner"
