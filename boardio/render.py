"""Top-down rendering of a battlefield to a Pillow image.

Draws, back to front: the table mat and 1" grid, deployment zones, terrain
areas (fused groups drawn as one merged outline), ruin walls, objective
markers, line-of-sight rays for one model pair, and model bases. Models
out of coherency get a thick warning ring. The result is what
``layout_io.save_board_png`` embeds the snapshot into.
"""

from __future__ import annotations

from PIL import Image, ImageDraw

from rules.coherency import CoherencyStatus
from rules.geometry import model_outline
from rules.line_of_sight import LineOfSightResult
from rules.terrain_groups import (
    find_connected_terrain_groups,
    terrain_group_outlines,
)
from rules.types import Battlefield, BaseShape, Model, Point

from .missions import OBJECTIVE_CONTROL_RADIUS, OBJECTIVE_RADIUS

# -- Visual constants --

TABLE_BG = "#2d5a27"  # dark green gaming mat
TABLE_GRID = "#264e22"  # subtle darker grid
TABLE_BORDER = "#111111"
TERRAIN_FILL = "#8a7a5c"
TERRAIN_OUTLINE = "#5c4f38"
WALL_FILL = "#3a3a3a"
DEFAULT_MODEL_FILL = "#888888"
MODEL_OUTLINE = "#000000"
VIOLATION_COLOR = "#FF4444"
RAY_CLEAR = "#00FF00"
RAY_BLOCKED = "#aa3333"
RAY_FIRST_CLEAR = "#FFD700"

PLAYER_COLORS = {
    1: "#c0392b",
    2: "#2e6fbd",
}
ZONE_FILLS = {
    1: "#4f5a2a",
    2: "#2a5a57",
}
OBJECTIVE_FILL = "#d4af37"
PRIMARY_OBJECTIVE_FILL = "#f5f5f5"
OBJECTIVE_RANGE = "#e8d27a"


class BoardRenderer:
    """Renders a battlefield to a Pillow image."""

    def __init__(self, width, height, ppi, line_scale=1):
        self.width = width
        self.height = height
        self.ppi = ppi
        self.line_scale = line_scale

    def _lw(self, base_width):
        """Scale a pixel width by the supersample factor."""
        return max(1, round(base_width * self.line_scale))

    def _to_px(self, x_inches, y_inches):
        """Table coords (top-left origin) -> pixel coords."""
        return x_inches * self.ppi, y_inches * self.ppi

    def _poly_px(self, vertices):
        return [self._to_px(x, y) for x, y in vertices]

    def render(
        self,
        board: Battlefield,
        coherency: dict[str, CoherencyStatus] | None = None,
        sight: LineOfSightResult | None = None,
        deployment: dict | None = None,
    ) -> Image.Image:
        """Draw the board. ``deployment`` is an entry of
        ``missions.DEPLOYMENTS``; its zones go under the terrain and its
        objectives over it."""
        w = int(self.width * self.ppi)
        h = int(self.height * self.ppi)

        # 1. Background and grid
        img = Image.new("RGB", (w, h), TABLE_BG)
        draw = ImageDraw.Draw(img)
        glw = self._lw(1)
        for ix in range(1, int(self.width)):
            px = int(ix * self.ppi)
            draw.line([(px, 0), (px, h - 1)], fill=TABLE_GRID, width=glw)
        for iy in range(1, int(self.height)):
            py = int(iy * self.ppi)
            draw.line([(0, py), (w - 1, py)], fill=TABLE_GRID, width=glw)

        # 1b. Deployment zones
        if deployment is not None:
            for player_id, zone in deployment["zones"].items():
                draw.polygon(
                    self._poly_px(zone),
                    fill=ZONE_FILLS.get(player_id, TABLE_BG),
                    outline=PLAYER_COLORS.get(player_id, MODEL_OUTLINE),
                    width=self._lw(2),
                )

        # 2. Terrain, one merged outline per fused group
        footprints = board.terrain_footprints()
        groups = find_connected_terrain_groups(footprints)
        for rings in terrain_group_outlines(footprints, groups).values():
            for ring in rings:
                draw.polygon(
                    self._poly_px(ring),
                    fill=TERRAIN_FILL,
                    outline=TERRAIN_OUTLINE,
                    width=self._lw(2),
                )

        # 3. Walls
        for polygon in board.wall_polygons():
            if len(polygon) >= 3:
                draw.polygon(self._poly_px(polygon), fill=WALL_FILL)

        # 3b. Objective markers with their control range
        if deployment is not None:
            for objective in deployment["objectives"]:
                self._draw_objective(draw, objective)

        # 4. Sight rays, blocked first so clear ones stay visible
        if sight is not None:
            self._draw_rays(draw, sight)

        # 5. Model bases
        for model in board.models:
            status = coherency.get(model.id) if coherency else None
            self._draw_model(draw, model, status)

        # 6. Table border
        draw.rectangle(
            [0, 0, w - 1, h - 1], outline=TABLE_BORDER, width=self._lw(3)
        )
        return img

    def _draw_rays(self, draw, sight: LineOfSightResult):
        lw = self._lw(1)
        for ray in sight.rays:
            if ray.blocked:
                self._draw_segment(draw, ray.start, ray.end, RAY_BLOCKED, lw)
        for ray in sight.rays:
            if not ray.blocked:
                self._draw_segment(draw, ray.start, ray.end, RAY_CLEAR, lw)
        first = sight.first_clear_ray
        if first is not None:
            self._draw_segment(
                draw, first.start, first.end, RAY_FIRST_CLEAR, self._lw(3)
            )

    def _draw_objective(self, draw, objective):
        cx, cy = self._to_px(objective["x_inches"], objective["y_inches"])
        r = OBJECTIVE_CONTROL_RADIUS * self.ppi
        draw.ellipse(
            [cx - r, cy - r, cx + r, cy + r],
            outline=OBJECTIVE_RANGE,
            width=self._lw(1),
        )
        r = OBJECTIVE_RADIUS * self.ppi
        fill = OBJECTIVE_FILL
        if objective["primary"]:
            fill = PRIMARY_OBJECTIVE_FILL
        draw.ellipse(
            [cx - r, cy - r, cx + r, cy + r],
            fill=fill,
            outline=MODEL_OUTLINE,
            width=self._lw(1),
        )

    def _draw_segment(self, draw, start: Point, end: Point, fill, width):
        draw.line(
            [self._to_px(*start), self._to_px(*end)], fill=fill, width=width
        )

    def _draw_model(self, draw, model: Model, status=None):
        fill = PLAYER_COLORS.get(model.player_id, DEFAULT_MODEL_FILL)
        violating = status is not None and not status.in_coherency
        outline = VIOLATION_COLOR if violating else MODEL_OUTLINE
        width = self._lw(3) if violating else self._lw(1)

        if model.base.shape is BaseShape.CIRCLE:
            cx, cy = self._to_px(model.x, model.y)
            r = model.base.radius * self.ppi
            draw.ellipse(
                [cx - r, cy - r, cx + r, cy + r],
                fill=fill,
                outline=outline,
                width=width,
            )
        else:
            draw.polygon(
                self._poly_px(model_outline(model)),
                fill=fill,
                outline=outline,
                width=width,
            )
