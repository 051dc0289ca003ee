"""2D geometry primitives for the coherency and line-of-sight engines.

Everything here is a pure function over plain tuples. The pieces:

  * **Segment intersection**: ``segments_intersect`` is an orientation
    (cross product sign) test that counts touching and collinear overlap as
    intersecting. ``segments_intersect_matrix`` is the same test broadcast
    over every (ray, edge) pair with NumPy; the line-of-sight engine tests
    256 rays per query against every occluder edge, so the batched form is
    the one that matters for speed. Both must agree exactly.
  * **Containment**: ``point_in_polygon`` checks that the point sits on the
    same side of every edge. Zero cross products are skipped, so a point on
    an edge line is not rejected by that edge. This is exact for convex
    polygons and tolerable for the mildly concave footprints (L and C
    walls) we feed it, but it is not a winding-number test.
  * **Rotation**: ``rotate_point``, ``rotate_polygon`` and
    ``rotated_rect_vertices``. Degrees in, screen coordinates (y down).
  * **Perimeter sampling**: N evenly angle-spaced points around a circle,
    a rotated ellipse, or a rotated rectangle. The LOS engine casts rays
    between these samples, so N trades fidelity for cost.
  * **Model distance**: edge-to-edge distance between two bases using an
    "effective radius" per shape (see ``effective_radius``).
  * **Model vs polygon**: ``model_overlaps_polygon`` and
    ``model_wholly_inside_polygon``. These are sampling approximations:
    a polygon sliver thinner than the gap between two samples, or a
    polygon entirely inside a large base, can be missed. That is an
    accepted limit of the tabletop ruling, not something to patch here.

Base shapes dispatch on the closed ``BaseShape`` enum.
"""

from __future__ import annotations

import math

import numpy as np

from .types import BaseShape, Model, Point, Polygon

NUM_SAMPLE_POINTS = 16


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


def _direction(p1: Point, p2: Point, p3: Point) -> float:
    """Cross product sign of p3 relative to the line p1->p2."""
    return (p3[0] - p1[0]) * (p2[1] - p1[1]) - (p2[0] - p1[0]) * (
        p3[1] - p1[1]
    )


def _on_segment(p1: Point, p2: Point, p: Point) -> bool:
    """For collinear p: True if p is within the bounds of p1-p2."""
    return (
        min(p1[0], p2[0]) <= p[0] <= max(p1[0], p2[0])
        and min(p1[1], p2[1]) <= p[1] <= max(p1[1], p2[1])
    )


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """Test if segment p1-p2 intersects segment p3-p4.

    Crossing, touching at an endpoint, and collinear overlap all count.
    """
    d1 = _direction(p3, p4, p1)
    d2 = _direction(p3, p4, p2)
    d3 = _direction(p1, p2, p3)
    d4 = _direction(p1, p2, p4)

    if ((d1 > 0 and d2 < 0) or (d1 < 0 and d2 > 0)) and (
        (d3 > 0 and d4 < 0) or (d3 < 0 and d4 > 0)
    ):
        return True

    # Collinear cases
    if d1 == 0 and _on_segment(p3, p4, p1):
        return True
    if d2 == 0 and _on_segment(p3, p4, p2):
        return True
    if d3 == 0 and _on_segment(p1, p2, p3):
        return True
    if d4 == 0 and _on_segment(p1, p2, p4):
        return True
    return False


def segments_intersect_matrix(
    starts: np.ndarray,
    ends: np.ndarray,
    edge_starts: np.ndarray,
    edge_ends: np.ndarray,
) -> np.ndarray:
    """Vectorized ``segments_intersect`` over all (segment, edge) pairs.

    Args:
        starts, ends: (R, 2) arrays of segment endpoints.
        edge_starts, edge_ends: (E, 2) arrays of edge endpoints.

    Returns:
        (R, E) boolean array; entry [r, e] matches
        ``segments_intersect`` on the same ray and edge.
    """
    # Broadcast: rays along axis 0, edges along axis 1
    ax1 = starts[:, 0:1]
    ay1 = starts[:, 1:2]
    ax2 = ends[:, 0:1]
    ay2 = ends[:, 1:2]
    bx1 = edge_starts[:, 0][None, :]
    by1 = edge_starts[:, 1][None, :]
    bx2 = edge_ends[:, 0][None, :]
    by2 = edge_ends[:, 1][None, :]

    # Same operand order as _direction so the signs agree bit for bit
    d1 = (ax1 - bx1) * (by2 - by1) - (bx2 - bx1) * (ay1 - by1)
    d2 = (ax2 - bx1) * (by2 - by1) - (bx2 - bx1) * (ay2 - by1)
    d3 = (bx1 - ax1) * (ay2 - ay1) - (ax2 - ax1) * (by1 - ay1)
    d4 = (bx2 - ax1) * (ay2 - ay1) - (ax2 - ax1) * (by2 - ay1)

    straddle = (((d1 > 0) & (d2 < 0)) | ((d1 < 0) & (d2 > 0))) & (
        ((d3 > 0) & (d4 < 0)) | ((d3 < 0) & (d4 > 0))
    )

    b_min_x = np.minimum(bx1, bx2)
    b_max_x = np.maximum(bx1, bx2)
    b_min_y = np.minimum(by1, by2)
    b_max_y = np.maximum(by1, by2)
    a_min_x = np.minimum(ax1, ax2)
    a_max_x = np.maximum(ax1, ax2)
    a_min_y = np.minimum(ay1, ay2)
    a_max_y = np.maximum(ay1, ay2)

    p1_on_b = (
        (d1 == 0)
        & (b_min_x <= ax1)
        & (ax1 <= b_max_x)
        & (b_min_y <= ay1)
        & (ay1 <= b_max_y)
    )
    p2_on_b = (
        (d2 == 0)
        & (b_min_x <= ax2)
        & (ax2 <= b_max_x)
        & (b_min_y <= ay2)
        & (ay2 <= b_max_y)
    )
    p3_on_a = (
        (d3 == 0)
        & (a_min_x <= bx1)
        & (bx1 <= a_max_x)
        & (a_min_y <= by1)
        & (by1 <= a_max_y)
    )
    p4_on_a = (
        (d4 == 0)
        & (a_min_x <= bx2)
        & (bx2 <= a_max_x)
        & (a_min_y <= by2)
        & (by2 <= a_max_y)
    )
    return straddle | p1_on_b | p2_on_b | p3_on_a | p4_on_a


def polygon_edges(vertices: Polygon) -> tuple[np.ndarray, np.ndarray]:
    """Closed-loop edge arrays (starts, ends) for a polygon, each (N, 2)."""
    if not vertices:
        empty = np.empty((0, 2), dtype=np.float64)
        return empty, empty
    starts = np.asarray(vertices, dtype=np.float64)
    ends = np.roll(starts, -1, axis=0)
    return starts, ends


def segment_crosses_polygon(p1: Point, p2: Point, vertices: Polygon) -> bool:
    """True if segment p1-p2 intersects any edge of the polygon.

    Only edges are tested: a segment lying wholly inside a polygon does not
    cross it.
    """
    n = len(vertices)
    for i in range(n):
        if segments_intersect(p1, p2, vertices[i], vertices[(i + 1) % n]):
            return True
    return False


def point_to_segment_distance(p: Point, a: Point, b: Point) -> float:
    """Shortest distance from point p to segment a-b.

    Projects p onto the segment's line and clamps to the endpoints. A
    zero-length segment is treated as a point.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(p[0] - a[0], p[1] - a[1])

    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(p[0] - (a[0] + t * dx), p[1] - (a[1] + t * dy))


# ---------------------------------------------------------------------------
# Containment
# ---------------------------------------------------------------------------


def point_in_polygon(point: Point, vertices: Polygon) -> bool:
    """Cross-product sign test: inside if on the same side of every edge.

    Edges whose line passes through the point (zero cross product) don't
    fix the side. A point with no side-determining edge counts as inside.
    Sensitive to vertex order only through direction, so either winding
    works for convex polygons.
    """
    n = len(vertices)
    sign: bool | None = None
    px, py = point
    for i in range(n):
        x1, y1 = vertices[i]
        x2, y2 = vertices[(i + 1) % n]
        cross = (x2 - x1) * (py - y1) - (y2 - y1) * (px - x1)
        if cross != 0:
            positive = cross > 0
            if sign is None:
                sign = positive
            elif sign != positive:
                return False
    return True


# ---------------------------------------------------------------------------
# Rotation
# ---------------------------------------------------------------------------


def rotate_point(point: Point, center: Point, angle_deg: float) -> Point:
    """Rotate a point about a centre by angle_deg."""
    rad = math.radians(angle_deg)
    cos_r = math.cos(rad)
    sin_r = math.sin(rad)
    dx = point[0] - center[0]
    dy = point[1] - center[1]
    return (
        center[0] + dx * cos_r - dy * sin_r,
        center[1] + dx * sin_r + dy * cos_r,
    )


def rotate_polygon(
    vertices: Polygon, center: Point, angle_deg: float
) -> Polygon:
    return [rotate_point(v, center, angle_deg) for v in vertices]


def _place(
    cx: float, cy: float, lx: float, ly: float, cos_r: float, sin_r: float
) -> Point:
    """Rotate a local offset and add it to the centre."""
    return (cx + lx * cos_r - ly * sin_r, cy + lx * sin_r + ly * cos_r)


def rotated_rect_vertices(
    cx: float,
    cy: float,
    width: float,
    height: float,
    rotation_deg: float,
) -> Polygon:
    """Compute the 4 corners of a rectangle centred on (cx, cy).

    Corners run top-left, top-right, bottom-right, bottom-left before
    rotation.
    """
    rad = math.radians(rotation_deg)
    cos_r = math.cos(rad)
    sin_r = math.sin(rad)
    hw = width / 2
    hh = height / 2
    result: Polygon = []
    for sx, sy in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
        lx = sx * hw
        ly = sy * hh
        result.append(_place(cx, cy, lx, ly, cos_r, sin_r))
    return result


# ---------------------------------------------------------------------------
# Perimeter sampling
# ---------------------------------------------------------------------------


def circle_perimeter_points(
    cx: float, cy: float, radius: float, n: int = NUM_SAMPLE_POINTS
) -> list[Point]:
    """n evenly spaced points on a circle, starting at angle 0."""
    points: list[Point] = []
    for i in range(n):
        angle = 2 * math.pi * i / n
        points.append(
            (cx + radius * math.cos(angle), cy + radius * math.sin(angle))
        )
    return points


def ellipse_perimeter_points(
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    rotation_deg: float = 0.0,
    n: int = NUM_SAMPLE_POINTS,
) -> list[Point]:
    """n points on an axis-aligned ellipse at even parametric angles, then
    rotated about the centre."""
    rad = math.radians(rotation_deg)
    cos_r = math.cos(rad)
    sin_r = math.sin(rad)
    points: list[Point] = []
    for i in range(n):
        angle = 2 * math.pi * i / n
        lx = rx * math.cos(angle)
        ly = ry * math.sin(angle)
        points.append(_place(cx, cy, lx, ly, cos_r, sin_r))
    return points


def rectangle_perimeter_points(
    cx: float,
    cy: float,
    width: float,
    height: float,
    rotation_deg: float = 0.0,
    n: int = NUM_SAMPLE_POINTS,
) -> list[Point]:
    """n points where evenly spaced rays from the centre meet the rectangle
    boundary, rotated about the centre."""
    rad = math.radians(rotation_deg)
    cos_r = math.cos(rad)
    sin_r = math.sin(rad)
    hw = width / 2
    hh = height / 2
    points: list[Point] = []
    for i in range(n):
        angle = 2 * math.pi * i / n
        ux = math.cos(angle)
        uy = math.sin(angle)
        # Distance along the ray to the nearer of the two slab boundaries
        t = math.inf
        if abs(ux) > 1e-12:
            t = min(t, hw / abs(ux))
        if abs(uy) > 1e-12:
            t = min(t, hh / abs(uy))
        lx = t * ux
        ly = t * uy
        points.append(_place(cx, cy, lx, ly, cos_r, sin_r))
    return points


def model_perimeter_points(
    model: Model, n: int = NUM_SAMPLE_POINTS
) -> list[Point]:
    """Sample n points on a model's base outline."""
    base = model.base
    if base.shape is BaseShape.CIRCLE:
        return circle_perimeter_points(model.x, model.y, base.radius, n)
    if base.shape is BaseShape.OVAL:
        return ellipse_perimeter_points(
            model.x,
            model.y,
            base.width / 2,
            base.height / 2,
            model.rotation_deg,
            n,
        )
    if base.shape is BaseShape.RECTANGLE:
        return rectangle_perimeter_points(
            model.x, model.y, base.width, base.height, model.rotation_deg, n
        )
    raise AssertionError(f"unhandled base shape {base.shape!r}")


def model_outline(model: Model, n: int = 32) -> Polygon:
    """Polygon approximating a model's base, for drawing.

    Rectangles return their 4 true corners; curved bases are sampled.
    """
    base = model.base
    if base.shape is BaseShape.RECTANGLE:
        return rotated_rect_vertices(
            model.x, model.y, base.width, base.height, model.rotation_deg
        )
    return model_perimeter_points(model, n)


# ---------------------------------------------------------------------------
# Model distance
# ---------------------------------------------------------------------------


def effective_radius(model: Model) -> float:
    """Radius used for edge-to-edge distance.

    Circles use their radius. Ovals use the smaller semi-axis and rectangles
    half their shorter side, which under-estimates their reach: two ovals
    side by side may measure slightly further apart than they really are.
    """
    base = model.base
    if base.shape is BaseShape.CIRCLE:
        return base.radius
    if base.shape is BaseShape.OVAL:
        return min(base.width, base.height) / 2
    if base.shape is BaseShape.RECTANGLE:
        return min(base.width, base.height) / 2
    raise AssertionError(f"unhandled base shape {base.shape!r}")


def model_distance(a: Model, b: Model) -> float:
    """Edge-to-edge distance between two bases, floored at zero."""
    center_dist = math.hypot(a.x - b.x, a.y - b.y)
    return max(0.0, center_dist - effective_radius(a) - effective_radius(b))


# ---------------------------------------------------------------------------
# Model vs polygon
# ---------------------------------------------------------------------------


def model_overlaps_polygon(
    model: Model,
    vertices: Polygon,
    samples: list[Point] | None = None,
) -> bool:
    """True if the model's centre or any perimeter sample lies inside.

    ``samples`` may be passed to reuse an existing perimeter sampling.
    Polygons with fewer than 3 vertices have no area and never overlap.
    """
    if len(vertices) < 3:
        return False
    if point_in_polygon((model.x, model.y), vertices):
        return True
    if samples is None:
        samples = model_perimeter_points(model)
    return any(point_in_polygon(p, vertices) for p in samples)


def model_wholly_inside_polygon(
    model: Model,
    vertices: Polygon,
    samples: list[Point] | None = None,
) -> bool:
    """True if the centre and every perimeter sample lie inside."""
    if len(vertices) < 3:
        return False
    if not point_in_polygon((model.x, model.y), vertices):
        return False
    if samples is None:
        samples = model_perimeter_points(model)
    return all(point_in_polygon(p, vertices) for p in samples)
