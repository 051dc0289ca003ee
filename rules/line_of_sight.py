"""Model-to-model line of sight.

This module answers: can model A see model B, given terrain footprints and
walls on the table? A model can see another if ANY straight line from some
part of A's base to some part of B's base is unobstructed. We approximate
"any part" by sampling 16 points on each base outline (see
``geometry.model_perimeter_points``) and testing all 16 x 16 = 256 rays.

Occluders come in two kinds:

  * **Walls** always block. A ray crossing any wall polygon edge is blocked,
    whichever side of the wall either model is standing on.
  * **Terrain footprints** block unless exempted for this particular query.
    A footprint is exempt when the viewer is *wholly inside* it, or when the
    target *touches* it at all. Exemption spreads to every footprint fused
    to it (``terrain_groups``), so a model inside one half of a two-piece
    ruin sees out through the other half too.

The exemption rule is deliberately asymmetric. A viewer standing on terrain
only sees out once fully enclosed by it, while a target is visible as soon
as any part of its base is on the terrain. Callers that want symmetric
behaviour must not rely on this module.

A ray is blocked by "terrain" if it crosses an edge of a non-exempt
footprint, otherwise by "wall" if it crosses a wall edge. Terrain is tested
first, so a ray crossing both reports "terrain".

Two entry points share the exemption logic:

  * ``check_line_of_sight``: evaluates all 256 rays (vectorized with NumPy)
    and returns them for debug drawing, along with the first clear ray in
    sampling order.
  * ``can_see``: the fast path. Tests the rays from one viewer sample at a
    time and returns as soon as any ray is clear.

Unit-level helpers lift these to two collections of models and compute the
terrain groups once for all pairs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .geometry import (
    NUM_SAMPLE_POINTS,
    model_overlaps_polygon,
    model_perimeter_points,
    model_wholly_inside_polygon,
    polygon_edges,
    segments_intersect_matrix,
)
from .terrain_groups import (
    find_connected_terrain_groups,
    get_terrain_group_members,
)
from .types import Model, Point, Polygon, TerrainFootprint

BLOCKED_BY_TERRAIN = "terrain"
BLOCKED_BY_WALL = "wall"


@dataclass
class SightRay:
    start: Point
    end: Point
    blocked: bool = False
    blocked_by: str | None = None


@dataclass
class LineOfSightResult:
    can_see: bool
    rays: list[SightRay] = field(default_factory=list)
    first_clear_ray: SightRay | None = None
    terrains_ignored: list[str] = field(default_factory=list)


@dataclass
class ModelPairSight:
    viewer_id: str
    target_id: str
    result: LineOfSightResult


@dataclass
class UnitSightResult:
    can_see: bool
    pairs: list[ModelPairSight] = field(default_factory=list)


def exempt_terrain_ids(
    viewer: Model,
    target: Model,
    terrains: list[TerrainFootprint],
    groups: dict[str, str],
    viewer_samples: list[Point] | None = None,
    target_samples: list[Point] | None = None,
) -> list[str]:
    """Terrain ids that don't occlude for this viewer/target pair.

    A footprint is exempt when the viewer is wholly inside it or the target
    overlaps it; its whole group is exempted with it. Returned in terrain
    input order.
    """
    exempt: set[str] = set()
    for terrain in terrains:
        if terrain.id in exempt:
            continue
        if model_wholly_inside_polygon(
            viewer, terrain.vertices, viewer_samples
        ) or model_overlaps_polygon(target, terrain.vertices, target_samples):
            exempt.update(get_terrain_group_members(terrain.id, groups))
    return [t.id for t in terrains if t.id in exempt]


def _stack_edges(polygons: list[Polygon]) -> tuple[np.ndarray, np.ndarray]:
    """Concatenate the closed edge loops of several polygons."""
    starts: list[np.ndarray] = []
    ends: list[np.ndarray] = []
    for vertices in polygons:
        if len(vertices) < 2:
            continue
        s, e = polygon_edges(vertices)
        starts.append(s)
        ends.append(e)
    if not starts:
        empty = np.empty((0, 2), dtype=np.float64)
        return empty, empty
    return np.concatenate(starts), np.concatenate(ends)


def _blocked_mask(
    ray_starts: np.ndarray,
    ray_ends: np.ndarray,
    edges: tuple[np.ndarray, np.ndarray],
) -> np.ndarray:
    """(R,) mask of rays crossing any of the given edges."""
    edge_starts, edge_ends = edges
    if len(edge_starts) == 0 or len(ray_starts) == 0:
        return np.zeros(len(ray_starts), dtype=bool)
    hits = segments_intersect_matrix(
        ray_starts, ray_ends, edge_starts, edge_ends
    )
    return hits.any(axis=1)


def _occluder_edges(
    terrains: list[TerrainFootprint],
    walls: list[Polygon],
    exempt: list[str],
) -> tuple[tuple[np.ndarray, np.ndarray], tuple[np.ndarray, np.ndarray]]:
    exempt_set = set(exempt)
    terrain_edges = _stack_edges(
        [t.vertices for t in terrains if t.id not in exempt_set]
    )
    wall_edges = _stack_edges(walls)
    return terrain_edges, wall_edges


def check_line_of_sight(
    viewer: Model,
    target: Model,
    terrains: list[TerrainFootprint],
    walls: list[Polygon],
    groups: dict[str, str] | None = None,
    num_samples: int = NUM_SAMPLE_POINTS,
) -> LineOfSightResult:
    """Full line-of-sight check, keeping every ray for debug drawing.

    Args:
        viewer: Model doing the looking.
        target: Model being looked at.
        terrains: Terrain footprints that may occlude.
        walls: Wall polygons that always occlude.
        groups: Precomputed ``find_connected_terrain_groups(terrains)``;
            computed here when omitted.
        num_samples: Perimeter samples per model.

    Returns:
        ``LineOfSightResult`` with rays ordered viewer-sample-major.
    """
    if groups is None:
        groups = find_connected_terrain_groups(terrains)
    points_a = model_perimeter_points(viewer, num_samples)
    points_b = model_perimeter_points(target, num_samples)
    exempt = exempt_terrain_ids(
        viewer, target, terrains, groups, points_a, points_b
    )
    terrain_edges, wall_edges = _occluder_edges(terrains, walls, exempt)

    # All rays, viewer sample outer / target sample inner
    arr_a = np.asarray(points_a, dtype=np.float64).reshape(-1, 2)
    arr_b = np.asarray(points_b, dtype=np.float64).reshape(-1, 2)
    ray_starts = np.repeat(arr_a, len(arr_b), axis=0)
    ray_ends = np.tile(arr_b, (len(arr_a), 1))

    by_terrain = _blocked_mask(ray_starts, ray_ends, terrain_edges)
    by_wall = _blocked_mask(ray_starts, ray_ends, wall_edges) & ~by_terrain

    rays: list[SightRay] = []
    first_clear: SightRay | None = None
    idx = 0
    for pa in points_a:
        for pb in points_b:
            if by_terrain[idx]:
                ray = SightRay(pa, pb, True, BLOCKED_BY_TERRAIN)
            elif by_wall[idx]:
                ray = SightRay(pa, pb, True, BLOCKED_BY_WALL)
            else:
                ray = SightRay(pa, pb)
                if first_clear is None:
                    first_clear = ray
            rays.append(ray)
            idx += 1

    return LineOfSightResult(
        can_see=first_clear is not None,
        rays=rays,
        first_clear_ray=first_clear,
        terrains_ignored=exempt,
    )


def can_see(
    viewer: Model,
    target: Model,
    terrains: list[TerrainFootprint],
    walls: list[Polygon],
    groups: dict[str, str] | None = None,
    num_samples: int = NUM_SAMPLE_POINTS,
) -> bool:
    """Fast line-of-sight check: stops at the first clear ray."""
    if groups is None:
        groups = find_connected_terrain_groups(terrains)
    points_a = model_perimeter_points(viewer, num_samples)
    points_b = model_perimeter_points(target, num_samples)
    if not points_a or not points_b:
        return False
    exempt = exempt_terrain_ids(
        viewer, target, terrains, groups, points_a, points_b
    )
    terrain_edges, wall_edges = _occluder_edges(terrains, walls, exempt)

    ends = np.asarray(points_b, dtype=np.float64)
    for pa in points_a:
        starts = np.tile(np.asarray(pa, dtype=np.float64), (len(ends), 1))
        blocked = _blocked_mask(starts, ends, terrain_edges)
        if blocked.all():
            continue
        blocked |= _blocked_mask(starts, ends, wall_edges)
        if not blocked.all():
            return True
    return False


def unit_can_see_unit(
    unit_a: list[Model],
    unit_b: list[Model],
    terrains: list[TerrainFootprint],
    walls: list[Polygon],
) -> bool:
    """True if any model in unit_a can see any model in unit_b."""
    if not unit_a or not unit_b:
        return False
    groups = find_connected_terrain_groups(terrains)
    for viewer in unit_a:
        for target in unit_b:
            if can_see(viewer, target, terrains, walls, groups):
                return True
    return False


def check_unit_to_unit_line_of_sight(
    unit_a: list[Model],
    unit_b: list[Model],
    terrains: list[TerrainFootprint],
    walls: list[Polygon],
) -> UnitSightResult:
    """Check every (viewer, target) model pair, keeping each pair's rays."""
    groups = find_connected_terrain_groups(terrains)
    pairs: list[ModelPairSight] = []
    for viewer in unit_a:
        for target in unit_b:
            result = check_line_of_sight(
                viewer, target, terrains, walls, groups
            )
            pairs.append(ModelPairSight(viewer.id, target.id, result))
    return UnitSightResult(
        can_see=any(p.result.can_see for p in pairs), pairs=pairs
    )
