"""Tests for the board renderer."""

from PIL import ImageColor

from rules.coherency import check_all_units_coherency
from rules.line_of_sight import check_line_of_sight
from rules.types import Base, Battlefield, Model, TerrainPiece, WallPiece

from .missions import get_deployment
from .render import (
    OBJECTIVE_FILL,
    OBJECTIVE_RANGE,
    PLAYER_COLORS,
    PRIMARY_OBJECTIVE_FILL,
    RAY_BLOCKED,
    RAY_FIRST_CLEAR,
    TERRAIN_FILL,
    VIOLATION_COLOR,
    WALL_FILL,
    ZONE_FILLS,
    BoardRenderer,
)

PPI = 10


def _rgb(color):
    return ImageColor.getrgb(color)


def _colors(img):
    return {c for _, c in img.getcolors(1 << 20)}


def _board(models=None):
    return Battlefield(
        terrains=[
            TerrainPiece("ruin", 10, 8, 12, 6),
            TerrainPiece("left", 10, 30, 4, 6),
            TerrainPiece("right", 14, 30, 4, 6),
        ],
        walls=[WallPiece("w", 40, 20, "L-4x8")],
        models=models or [],
    )


class TestBoardRenderer:
    def test_image_size(self):
        img = BoardRenderer(60, 44, PPI).render(_board())
        assert img.size == (600, 440)

    def test_terrain_and_walls(self):
        img = BoardRenderer(60, 44, PPI).render(_board())
        assert img.getpixel((165, 115)) == _rgb(TERRAIN_FILL)
        # Upright of the L wall, x 40..40.5
        assert img.getpixel((402, 235)) == _rgb(WALL_FILL)

    def test_fused_terrain_has_no_inner_edge(self):
        """The shared edge of two fused areas is filled, not outlined."""
        img = BoardRenderer(60, 44, PPI).render(_board())
        assert img.getpixel((140, 333)) == _rgb(TERRAIN_FILL)

    def test_model_bases(self):
        models = [
            Model("c", 50, 10, Base.circle(1.0), player_id=1),
            Model("o", 50, 20, Base.oval(3, 2), 30, player_id=2),
            Model("r", 50, 35, Base.rectangle(2, 4), 45),
        ]
        img = BoardRenderer(60, 44, PPI).render(_board(models))
        assert img.getpixel((503, 103)) == _rgb(PLAYER_COLORS[1])
        assert img.getpixel((503, 203)) == _rgb(PLAYER_COLORS[2])
        assert img.getpixel((502, 352)) == _rgb("#888888")

    def test_violation_ring(self):
        models = [
            Model("a", 5, 5, Base.circle(0.5), unit_id="u"),
            Model("b", 6.5, 5, Base.circle(0.5), unit_id="u"),
        ]
        renderer = BoardRenderer(60, 44, PPI)

        coherent = check_all_units_coherency(models)
        img = renderer.render(_board(models), coherency=coherent)
        assert _rgb(VIOLATION_COLOR) not in _colors(img)

        models[1] = Model("b", 30, 40, Base.circle(0.5), unit_id="u")
        broken = check_all_units_coherency(models)
        img = renderer.render(_board(models), coherency=broken)
        assert _rgb(VIOLATION_COLOR) in _colors(img)

    def test_sight_rays(self):
        board = _board()
        viewer = Model("v", 35, 24, Base.circle(0.5))
        target = Model("t", 45, 24, Base.circle(0.5))
        renderer = BoardRenderer(60, 44, PPI)

        blocked = check_line_of_sight(
            viewer, target, [], board.wall_polygons()
        )
        assert not blocked.can_see
        img = renderer.render(board, sight=blocked)
        colors = _colors(img)
        assert _rgb(RAY_BLOCKED) in colors
        assert _rgb(RAY_FIRST_CLEAR) not in colors

        below = Model("t", 35, 40, target.base)
        clear = check_line_of_sight(viewer, below, [], [])
        img = renderer.render(board, sight=clear)
        assert _rgb(RAY_FIRST_CLEAR) in _colors(img)

    def test_line_scale(self):
        img = BoardRenderer(60, 44, 40, line_scale=4).render(_board())
        assert img.size == (2400, 1760)

    def test_deployment_zones_and_objectives(self):
        renderer = BoardRenderer(60, 44, PPI)
        plain = renderer.render(_board())
        assert _rgb(OBJECTIVE_RANGE) not in _colors(plain)

        dawn = get_deployment("Dawn of War")
        img = renderer.render(_board(), deployment=dawn)
        assert img.getpixel((55, 405)) == _rgb(ZONE_FILLS[1])
        assert img.getpixel((555, 55)) == _rgb(ZONE_FILLS[2])
        assert img.getpixel((300, 220)) == _rgb(PRIMARY_OBJECTIVE_FILL)
        assert img.getpixel((100, 220)) == _rgb(OBJECTIVE_FILL)
        assert _rgb(OBJECTIVE_RANGE) in _colors(img)
        # Terrain still draws over the zone
        assert img.getpixel((165, 115)) == _rgb(TERRAIN_FILL)
