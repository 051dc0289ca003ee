"""Wall piece shapes.

Walls are thin (0.5") L- and C-shaped ruin walls. A shape string names the
kind and its segment lengths in inches:

  * ``"L-4x8"``: an 8" upright with a 4" foot running right from its
    bottom end; ``"L-4x8-mirror"`` runs the foot left instead.
  * ``"C-4-8-4"``: top arm, upright, bottom arm; opening to the right.

Vertices are produced in a local frame with the origin at the wall's anchor,
then placed on the table by ``transform_wall_vertices``: translate by the
wall's (x, y), then rotate about the centre of the bounding box.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .geometry import rotate_point
from .types import Polygon

WALL_THICKNESS = 0.5

WALL_SHAPES = [
    "L-4x8",
    "L-4x8-mirror",
    "C-4-8-4",
    "L-5x6",
    "L-5x6-mirror",
    "L-4x6",
    "L-4x6-mirror",
]

_L_PATTERN = re.compile(r"L-(\d+(?:\.\d+)?)x(\d+(?:\.\d+)?)")
_C_PATTERN = re.compile(r"C-(\d+(?:\.\d+)?)-(\d+(?:\.\d+)?)-(\d+(?:\.\d+)?)")


@dataclass(frozen=True)
class WallShapeSpec:
    kind: str
    segments: tuple[float, ...]
    mirrored: bool = False


def parse_wall_shape(shape: str) -> WallShapeSpec:
    """Parse a shape string; anything unrecognised becomes a plain L-4x8."""
    mirrored = "-mirror" in shape
    base_shape = shape.replace("-mirror", "")

    m = _L_PATTERN.fullmatch(base_shape)
    if m:
        return WallShapeSpec(
            "L", (float(m.group(1)), float(m.group(2))), mirrored
        )
    m = _C_PATTERN.fullmatch(base_shape)
    if m:
        return WallShapeSpec(
            "C",
            (float(m.group(1)), float(m.group(2)), float(m.group(3))),
            mirrored,
        )
    return WallShapeSpec("L", (4.0, 8.0), False)


def wall_vertices(
    shape: str, segments: list[float] | None = None
) -> Polygon:
    """Local-space outline of a wall piece.

    ``segments`` overrides the lengths encoded in the shape string.
    """
    parsed = parse_wall_shape(shape)
    segs = tuple(segments) if segments else parsed.segments
    t = WALL_THICKNESS

    if parsed.kind == "C" and len(segs) == 3:
        top, height, bottom = segs
        return [
            (0.0, 0.0),
            (bottom, 0.0),
            (bottom, t),
            (t, t),
            (t, height - t),
            (top, height - t),
            (top, height),
            (0.0, height),
        ]

    if len(segs) < 2:
        segs = (4.0, 8.0)
    width, height = segs[0], segs[1]
    if parsed.mirrored:
        return [
            (0.0, 0.0),
            (t, 0.0),
            (t, height),
            (-width + t, height),
            (-width + t, height - t),
            (0.0, height - t),
        ]
    return [
        (0.0, 0.0),
        (t, 0.0),
        (t, height - t),
        (width, height - t),
        (width, height),
        (0.0, height),
    ]


def transform_wall_vertices(
    vertices: Polygon,
    x: float,
    y: float,
    rotation_deg: float,
) -> Polygon:
    """Place local wall vertices on the table.

    Translates by (x, y), then rotates about the centre of the translated
    bounding box.
    """
    if not vertices:
        return []
    xs = [v[0] for v in vertices]
    ys = [v[1] for v in vertices]
    center = (
        x + (min(xs) + max(xs)) / 2,
        y + (min(ys) + max(ys)) / 2,
    )
    return [
        rotate_point((x + vx, y + vy), center, rotation_deg)
        for vx, vy in vertices
    ]
