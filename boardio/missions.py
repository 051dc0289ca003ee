"""Deployment maps for a 60" x 44" Strike Force table.

Pure data module: each deployment has one zone polygon per player and five
objective markers. Coordinates are inches from the top-left corner of the
table, the same frame as ``rules.types``. Curved zone edges are flattened
to short chords.
"""

from __future__ import annotations

import math
from typing import Any

from shapely.geometry import Polygon as ShapelyPolygon

from rules.bases import MM_TO_INCH
from rules.geometry import model_outline
from rules.types import Model, Point, Polygon

# 40mm marker; models within 3" of its edge control it
OBJECTIVE_RADIUS = 40 * MM_TO_INCH / 2
OBJECTIVE_CONTROL_RADIUS = 3 + 20 * MM_TO_INCH

ARC_STEPS = 12

# Slack for models drawn flush against a zone edge
ZONE_TOLERANCE = 1e-6


def _arc(
    cx: float, cy: float, r: float, start_deg: float, end_deg: float
) -> list[Point]:
    """Points along a circular arc, both ends included."""
    points = []
    for i in range(ARC_STEPS + 1):
        a = math.radians(start_deg + (end_deg - start_deg) * i / ARC_STEPS)
        points.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return points


def _obj(oid: str, x: float, y: float, primary: bool = False):
    return {"id": oid, "x_inches": x, "y_inches": y, "primary": primary}


def _objectives(*positions: Point) -> list[dict[str, Any]]:
    """The first position is the primary, centre-table objective."""
    return [
        _obj(str(i + 1), x, y, primary=(i == 0))
        for i, (x, y) in enumerate(positions)
    ]


# name -> {"zones": {player_id: polygon}, "objectives": [...]}
DEPLOYMENTS: dict[str, dict[str, Any]] = {
    "Dawn of War": {
        "zones": {
            1: [(0, 32), (60, 32), (60, 44), (0, 44)],
            2: [(0, 0), (60, 0), (60, 12), (0, 12)],
        },
        "objectives": _objectives(
            (30, 22), (10, 22), (50, 22), (30, 6), (30, 38)
        ),
    },
    "Hammer and Anvil": {
        "zones": {
            1: [(0, 0), (18, 0), (18, 44), (0, 44)],
            2: [(42, 0), (60, 0), (60, 44), (42, 44)],
        },
        "objectives": _objectives(
            (30, 22), (30, 6), (30, 38), (10, 22), (50, 22)
        ),
    },
    "Tipping Point": {
        "zones": {
            1: [(0, 0), (12, 0), (12, 22), (20, 22), (20, 44), (0, 44)],
            2: [(40, 0), (60, 0), (60, 44), (48, 44), (48, 22), (40, 22)],
        },
        "objectives": _objectives(
            (30, 22), (14, 34), (22, 8), (38, 36), (46, 10)
        ),
    },
    # Opposite quarters, each cut back 9" around the table centre
    "Search and Destroy": {
        "zones": {
            1: [(0, 22), (21, 22)]
            + _arc(30, 22, 9, 180, 90)[1:]
            + [(30, 44), (0, 44)],
            2: [(30, 0), (30, 13)]
            + _arc(30, 22, 9, 270, 360)[1:]
            + [(60, 22), (60, 0)],
        },
        "objectives": _objectives(
            (30, 22), (14, 10), (46, 34), (14, 34), (46, 10)
        ),
    },
    "Sweeping Engagement": {
        "zones": {
            1: [(0, 0), (0, 8), (30, 8), (30, 14), (60, 14), (60, 0)],
            2: [(0, 44), (60, 44), (60, 36), (30, 36), (30, 30), (0, 30)],
        },
        "objectives": _objectives(
            (30, 22), (10, 18), (50, 26), (18, 38), (42, 6)
        ),
    },
    "Crucible of Battle": {
        "zones": {
            1: [(0, 0), (30, 44), (0, 44)],
            2: [(60, 44), (30, 0), (60, 0)],
        },
        "objectives": _objectives(
            (30, 22), (20, 8), (40, 36), (14, 34), (46, 10)
        ),
    },
}


def get_deployment(name: str) -> dict[str, Any]:
    """Look up a deployment by name. Raises KeyError for an unknown name."""
    if name not in DEPLOYMENTS:
        raise KeyError(
            f"Unknown deployment {name!r}; "
            f"available: {', '.join(DEPLOYMENTS)}"
        )
    return DEPLOYMENTS[name]


def model_in_zone(model: Model, zone: Polygon) -> bool:
    """True if the model's whole base lies inside the zone.

    Zones can be concave, so containment goes through shapely rather than
    the convex-only ``rules.geometry.point_in_polygon``.
    """
    area = ShapelyPolygon(zone).buffer(ZONE_TOLERANCE, join_style="mitre")
    return area.covers(ShapelyPolygon(model_outline(model)))
