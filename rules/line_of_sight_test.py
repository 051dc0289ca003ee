"""Tests for model and unit line of sight."""

from rules.line_of_sight import (
    BLOCKED_BY_TERRAIN,
    BLOCKED_BY_WALL,
    can_see,
    check_line_of_sight,
    check_unit_to_unit_line_of_sight,
    exempt_terrain_ids,
    unit_can_see_unit,
)
from rules.terrain_groups import find_connected_terrain_groups
from rules.types import Base, Model, TerrainFootprint, TerrainPiece


def _circle(mid, x, y, radius=0.5):
    return Model(id=mid, x=x, y=y, base=Base.circle(radius))


def _terrain(tid, x, y, w, h, rot=0.0):
    return TerrainPiece(tid, x, y, w, h, rot).footprint()


def _box(x1, y1, x2, y2):
    return [(x1, y1), (x2, y1), (x2, y2), (x1, y2)]


# A wall cutting the table at x = 14..15 for y in 0..20
WALL = _box(14, 0, 15, 20)


def _both(viewer, target, terrains, walls):
    """Run both entry points and check they agree."""
    full = check_line_of_sight(viewer, target, terrains, walls)
    fast = can_see(viewer, target, terrains, walls)
    assert full.can_see == fast
    return full


class TestOpenGround:
    def test_sees_at_any_distance(self):
        viewer = _circle("a", 0, 0)
        for x, y in ((1, 0), (30, 0), (1000, 1000)):
            result = _both(viewer, _circle("b", x, y), [], [])
            assert result.can_see

    def test_ray_count_and_first_clear(self):
        result = check_line_of_sight(
            _circle("a", 0, 0), _circle("b", 10, 0), [], []
        )
        assert len(result.rays) == 256
        assert all(not r.blocked for r in result.rays)
        assert result.first_clear_ray is result.rays[0]
        assert result.terrains_ignored == []

    def test_rays_run_from_viewer_to_target(self):
        result = check_line_of_sight(
            _circle("a", 0, 0), _circle("b", 10, 0), [], []
        )
        first = result.rays[0]
        assert abs(first.start[0] - 0.5) < 1e-9
        assert abs(first.end[0] - 10.5) < 1e-9
        # Second ray keeps the viewer sample and moves along the target
        assert result.rays[1].start == first.start
        assert result.rays[1].end != first.end


class TestWalls:
    def test_wall_spanning_path_blocks(self):
        result = _both(_circle("a", 5, 10), _circle("b", 25, 10), [], [WALL])
        assert not result.can_see
        assert result.first_clear_ray is None
        assert all(r.blocked_by == BLOCKED_BY_WALL for r in result.rays)

    def test_partial_cover_leaves_clear_rays(self):
        post = _box(14.9, 9.9, 15.1, 10.1)
        result = _both(_circle("a", 5, 10), _circle("b", 25, 10), [], [post])
        assert result.can_see
        assert any(r.blocked for r in result.rays)
        first = next(r for r in result.rays if not r.blocked)
        assert result.first_clear_ray is first
        assert result.rays[0].blocked

    def test_wall_blocks_even_inside_terrain(self):
        field = _terrain("field", 0, 0, 40, 20)
        divider = _box(19.75, 0, 20.25, 20)
        result = _both(
            _circle("a", 5, 10), _circle("b", 35, 10), [field], [divider]
        )
        assert not result.can_see
        assert result.terrains_ignored == ["field"]
        assert all(r.blocked_by == BLOCKED_BY_WALL for r in result.rays)

    def test_wider_bases_peek_over_wall_end(self):
        """A tall rectangle and a tall oval reach past the wall's end where
        small round bases at the same centres cannot."""
        blocked = _both(_circle("a", 5, 19), _circle("b", 25, 19), [], [WALL])
        assert not blocked.can_see

        viewer = Model("a", 5, 19, Base.rectangle(1, 4))
        target = Model("b", 25, 19, Base.oval(1, 4))
        assert _both(viewer, target, [], [WALL]).can_see


class TestTerrain:
    def test_outside_looking_through_is_blocked(self):
        ruin = _terrain("ruin", 10, 0, 10, 20)
        result = _both(_circle("a", 5, 10), _circle("b", 30, 10), [ruin], [])
        assert not result.can_see
        assert result.terrains_ignored == []
        assert all(r.blocked_by == BLOCKED_BY_TERRAIN for r in result.rays)

    def test_enclosed_viewer_sees_out(self):
        ruin = _terrain("ruin", 10, 0, 10, 20)
        result = _both(_circle("a", 15, 10), _circle("b", 30, 10), [ruin], [])
        assert result.can_see
        assert result.terrains_ignored == ["ruin"]

    def test_target_touching_terrain_is_seen(self):
        ruin = _terrain("ruin", 10, 0, 10, 20)
        target = _circle("b", 20.3, 10)
        result = _both(_circle("a", 5, 10), target, [ruin], [])
        assert result.can_see
        assert result.terrains_ignored == ["ruin"]

    def test_asymmetric_exemption(self):
        """A viewer only partly on terrain can't see out, but the same
        position as a target is seen into."""
        ruin = _terrain("ruin", 10, 0, 10, 20)
        partly_on = _circle("p", 10.2, 10)
        far = _circle("f", 30, 10)
        assert not _both(partly_on, far, [ruin], []).can_see
        assert _both(far, partly_on, [ruin], []).can_see

    def test_terrain_reported_before_wall(self):
        ruin = _terrain("ruin", 10, 0, 2, 20)
        wall = _box(20, 0, 21, 20)
        result = _both(
            _circle("a", 5, 10), _circle("b", 30, 10), [ruin], [wall]
        )
        assert all(r.blocked_by == BLOCKED_BY_TERRAIN for r in result.rays)

    def test_rotated_terrain(self):
        """A 45 degree ruin still sits across the path."""
        ruin = _terrain("ruin", 12, 5, 6, 12, rot=45)
        result = _both(_circle("a", 5, 11), _circle("b", 25, 11), [ruin], [])
        assert not result.can_see


class TestTerrainGroups:
    def test_exemption_spreads_to_fused_terrain(self):
        a = _terrain("a", 10, 0, 5, 20)
        b = _terrain("b", 15, 0, 5, 20)
        viewer = _circle("v", 12.5, 10)
        target = _circle("t", 30, 10)
        result = _both(viewer, target, [a, b], [])
        assert result.can_see
        assert result.terrains_ignored == ["a", "b"]

    def test_without_grouping_far_half_blocks(self):
        a = _terrain("a", 10, 0, 5, 20)
        b = _terrain("b", 15, 0, 5, 20)
        separate = {"a": "a", "b": "b"}
        viewer = _circle("v", 12.5, 10)
        target = _circle("t", 30, 10)
        result = check_line_of_sight(viewer, target, [a, b], [], separate)
        assert not result.can_see
        assert result.terrains_ignored == ["a"]
        assert not can_see(viewer, target, [a, b], [], separate)

    def test_target_touching_far_piece_exempts_near_piece(self):
        a = _terrain("a", 10, 0, 5, 20)
        b = _terrain("b", 15, 0, 5, 20)
        result = _both(
            _circle("v", 5, 10), _circle("t", 20.3, 10), [a, b], []
        )
        assert result.can_see
        assert result.terrains_ignored == ["a", "b"]

    def test_exempt_terrain_ids_in_input_order(self):
        b = _terrain("b", 15, 0, 5, 20)
        a = _terrain("a", 10, 0, 5, 20)
        lone = _terrain("lone", 40, 0, 5, 5)
        terrains = [b, lone, a]
        groups = find_connected_terrain_groups(terrains)
        exempt = exempt_terrain_ids(
            _circle("v", 12.5, 10), _circle("t", 50, 30), terrains, groups
        )
        assert exempt == ["b", "a"]


class TestDegenerateInput:
    def test_empty_polygons_never_block(self):
        result = _both(
            _circle("a", 0, 0),
            _circle("b", 10, 0),
            [TerrainFootprint("empty", [])],
            [[]],
        )
        assert result.can_see

    def test_coincident_models(self):
        result = _both(_circle("a", 3, 3), _circle("b", 3, 3), [], [])
        assert result.can_see

    def test_zero_radius(self):
        a = _circle("a", 5, 10, 0)
        b = _circle("b", 25, 10, 0)
        assert _both(a, b, [], []).can_see
        assert not _both(a, b, [], [WALL]).can_see

    def test_no_samples(self):
        a = _circle("a", 0, 0)
        b = _circle("b", 5, 0)
        assert not check_line_of_sight(a, b, [], [], num_samples=0).can_see
        assert not can_see(a, b, [], [], num_samples=0)


class TestUnitToUnit:
    def _units(self):
        hidden = _circle("a1", 5, 10)
        exposed = _circle("a2", 5, 40)
        target = _circle("b1", 25, 10)
        return [hidden, exposed], [target]

    def test_any_pair_sees(self):
        unit_a, unit_b = self._units()
        assert unit_can_see_unit(unit_a, unit_b, [], [WALL])

    def test_no_pair_sees(self):
        unit_a, unit_b = self._units()
        assert not unit_can_see_unit(unit_a[:1], unit_b, [], [WALL])

    def test_debug_variant_collects_all_pairs(self):
        unit_a, unit_b = self._units()
        result = check_unit_to_unit_line_of_sight(unit_a, unit_b, [], [WALL])
        assert result.can_see
        assert [(p.viewer_id, p.target_id) for p in result.pairs] == [
            ("a1", "b1"),
            ("a2", "b1"),
        ]
        assert not result.pairs[0].result.can_see
        assert result.pairs[1].result.can_see

    def test_empty_units(self):
        unit_a, _ = self._units()
        assert not unit_can_see_unit(unit_a, [], [], [])
        assert not unit_can_see_unit([], unit_a, [], [])
        result = check_unit_to_unit_line_of_sight([], unit_a, [], [])
        assert not result.can_see
        assert result.pairs == []
