"""Grouping of terrain footprints that physically abut.

Terrain pieces are often placed flush against each other to build one larger
area (two 4"x6" ruins side by side, say). For line of sight such a cluster
behaves as a single piece: a model touching any part of it is "on" the whole
thing. This module finds those clusters.

Two footprints are fused when some edge of one lies along some edge of the
other over a real length. Touching at a single corner is not enough, so
diagonal neighbours stay separate pieces. Fusing is transitive: A-B and B-C
put A, B and C in one group, which is tracked with an array-backed
disjoint-set.

Complexity is O(n^2) polygon pairs, each O(edges_a * edges_b); terrain
counts on a table are in the tens.
"""

from __future__ import annotations

import math

from shapely.geometry import Polygon as ShapelyPolygon
from shapely.ops import unary_union

from .types import Point, Polygon, TerrainFootprint

EDGE_TOLERANCE = 0.01


class DisjointSet:
    """Union-find over indices 0..n-1.

    The root of each set is always its lowest index, so the representative
    of a group is stable regardless of union order.
    """

    def __init__(self, n: int) -> None:
        self._parent: list[int] = list(range(n))

    def find(self, i: int) -> int:
        root = i
        while self._parent[root] != root:
            root = self._parent[root]
        # Path compression
        while self._parent[i] != root:
            self._parent[i], i = root, self._parent[i]
        return root

    def union(self, i: int, j: int) -> None:
        ri = self.find(i)
        rj = self.find(j)
        if ri == rj:
            return
        if ri < rj:
            self._parent[rj] = ri
        else:
            self._parent[ri] = rj


def segments_share_edge(
    a1: Point,
    a2: Point,
    b1: Point,
    b2: Point,
    tolerance: float = EDGE_TOLERANCE,
) -> bool:
    """True if segment b lies along segment a over more than ``tolerance``.

    Both endpoints of b must be within ``tolerance`` of the infinite line
    through a, and the overlap of their projections onto a must be longer
    than ``tolerance``. Segments meeting at a single point fail the second
    test.
    """
    dx = a2[0] - a1[0]
    dy = a2[1] - a1[1]
    length = math.hypot(dx, dy)
    if length <= tolerance:
        return False
    ux = dx / length
    uy = dy / length

    # Perpendicular distance of b's endpoints from a's line
    for px, py in (b1, b2):
        perp = (px - a1[0]) * uy - (py - a1[1]) * ux
        if abs(perp) > tolerance:
            return False

    # Overlap of the projections onto a, measured in inches along a
    s1 = (b1[0] - a1[0]) * ux + (b1[1] - a1[1]) * uy
    s2 = (b2[0] - a1[0]) * ux + (b2[1] - a1[1]) * uy
    overlap = min(length, max(s1, s2)) - max(0.0, min(s1, s2))
    return overlap > tolerance


def polygons_share_edge(
    a: Polygon,
    b: Polygon,
    tolerance: float = EDGE_TOLERANCE,
) -> bool:
    """True if any edge of a shares an edge with any edge of b."""
    n_a = len(a)
    n_b = len(b)
    if n_a < 2 or n_b < 2:
        return False
    for i in range(n_a):
        a1 = a[i]
        a2 = a[(i + 1) % n_a]
        for j in range(n_b):
            if segments_share_edge(a1, a2, b[j], b[(j + 1) % n_b], tolerance):
                return True
    return False


def find_connected_terrain_groups(
    terrains: list[TerrainFootprint],
    tolerance: float = EDGE_TOLERANCE,
) -> dict[str, str]:
    """Map each terrain id to its group id.

    The group id is the id of the group's first terrain in input order.
    """
    n = len(terrains)
    dsu = DisjointSet(n)
    for i in range(n):
        for j in range(i + 1, n):
            if polygons_share_edge(
                terrains[i].vertices, terrains[j].vertices, tolerance
            ):
                dsu.union(i, j)
    return {t.id: terrains[dsu.find(i)].id for i, t in enumerate(terrains)}


def get_terrain_group_members(
    terrain_id: str, groups: dict[str, str]
) -> list[str]:
    """All terrain ids in the same group as ``terrain_id`` (itself included).

    An id missing from ``groups`` is its own one-member group.
    """
    group = groups.get(terrain_id)
    if group is None:
        return [terrain_id]
    return [tid for tid, gid in groups.items() if gid == group]


def terrain_group_outlines(
    terrains: list[TerrainFootprint],
    groups: dict[str, str],
) -> dict[str, list[Polygon]]:
    """Merged outline(s) of each terrain group, keyed by group id.

    Uses shapely's union to dissolve shared edges. A group normally merges
    to a single ring; rounding can leave a sliver split, hence the list.
    """
    members: dict[str, list[ShapelyPolygon]] = {}
    for t in terrains:
        if len(t.vertices) < 3:
            continue
        gid = groups.get(t.id, t.id)
        # Tiny buffer closes float gaps along the shared edges
        members.setdefault(gid, []).append(
            ShapelyPolygon(t.vertices).buffer(
                EDGE_TOLERANCE / 2, join_style="mitre"
            )
        )

    result: dict[str, list[Polygon]] = {}
    for gid, polys in members.items():
        merged = unary_union(polys)
        if merged.is_empty:
            continue
        geoms = (
            list(merged.geoms)
            if merged.geom_type == "MultiPolygon"
            else [merged]
        )
        rings: list[Polygon] = []
        for geom in geoms:
            coords = list(geom.exterior.coords)
            if coords and coords[-1] == coords[0]:
                coords = coords[:-1]
            rings.append(coords)
        result[gid] = rings
    return result
