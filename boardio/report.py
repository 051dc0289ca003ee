"""Plain-text summaries of coherency, line of sight and deployment for a
battlefield.

Each function returns a list of printable lines; printing is left to the
caller (see ``scripts/check_board.py``).
"""

from __future__ import annotations

from rules.bases import base_label
from rules.coherency import (
    COHERENCY_DISTANCE,
    check_all_units_coherency,
    group_by_unit,
)
from rules.line_of_sight import (
    BLOCKED_BY_TERRAIN,
    BLOCKED_BY_WALL,
    check_line_of_sight,
    check_unit_to_unit_line_of_sight,
)
from rules.types import Battlefield

from .missions import get_deployment, model_in_zone


def _plural(n, word):
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def coherency_report(board: Battlefield) -> list[str]:
    """One header line per unit, then one line per model out of coherency."""
    statuses = check_all_units_coherency(board.models)
    units = group_by_unit(board.models)
    lines: list[str] = []

    for unit_id, models in units.items():
        first = statuses[models[0].id]
        violators = [m for m in models if not statuses[m.id].in_coherency]
        verdict = "coherent" if not violators else "NOT coherent"
        lines.append(
            f"Unit {unit_id}: {verdict} "
            f"({_plural(first.unit_size, 'model')}, "
            f"{_plural(first.component_count, 'group')})"
        )
        for model in violators:
            status = statuses[model.id]
            detail = (
                f"  {model.id} ({base_label(model.base)}): "
                f"{status.actual_count}/{status.required_count} "
                "neighbours within "
                f'{COHERENCY_DISTANCE:g}"'
            )
            if status.is_disconnected:
                detail += (
                    ", split from main body "
                    f"(group of {status.component_size})"
                )
            lines.append(detail)

    unitless = sum(1 for m in board.models if not m.unit_id)
    if unitless:
        lines.append(f"{_plural(unitless, 'model')} without a unit skipped")
    if not lines:
        lines.append("No models on the board")
    return lines


def sight_report(
    board: Battlefield, viewer_id: str, target_id: str
) -> list[str]:
    """Line of sight between two models, with a ray breakdown.

    Raises KeyError for an unknown model id.
    """
    models = board.models_by_id()
    for model_id in (viewer_id, target_id):
        if model_id not in models:
            raise KeyError(f"No model with id {model_id!r}")

    result = check_line_of_sight(
        models[viewer_id],
        models[target_id],
        board.terrain_footprints(),
        board.wall_polygons(),
    )
    total = len(result.rays)
    clear = sum(1 for r in result.rays if not r.blocked)
    by_terrain = sum(
        1 for r in result.rays if r.blocked_by == BLOCKED_BY_TERRAIN
    )
    by_wall = sum(1 for r in result.rays if r.blocked_by == BLOCKED_BY_WALL)

    verdict = "visible" if result.can_see else "blocked"
    lines = [
        f"{viewer_id} -> {target_id}: {verdict} "
        f"({clear}/{total} rays clear; "
        f"terrain {by_terrain}, wall {by_wall})"
    ]
    if result.terrains_ignored:
        lines.append(
            "  terrain ignored: " + ", ".join(result.terrains_ignored)
        )
    if result.first_clear_ray is not None:
        (sx, sy), (ex, ey) = (
            result.first_clear_ray.start,
            result.first_clear_ray.end,
        )
        lines.append(
            f"  first clear ray: ({sx:.2f}, {sy:.2f}) -> ({ex:.2f}, {ey:.2f})"
        )
    return lines


def unit_sight_report(
    board: Battlefield, viewer_unit: str, target_unit: str
) -> list[str]:
    """Which model pairs of two units can see each other.

    Raises KeyError if either unit has no models on the board.
    """
    unit_a = board.unit_models(viewer_unit)
    unit_b = board.unit_models(target_unit)
    for unit_id, models in ((viewer_unit, unit_a), (target_unit, unit_b)):
        if not models:
            raise KeyError(f"No models in unit {unit_id!r}")

    result = check_unit_to_unit_line_of_sight(
        unit_a, unit_b, board.terrain_footprints(), board.wall_polygons()
    )
    seeing = [p for p in result.pairs if p.result.can_see]
    verdict = "visible" if result.can_see else "blocked"
    lines = [
        f"Unit {viewer_unit} -> Unit {target_unit}: {verdict} "
        f"({len(seeing)}/{_plural(len(result.pairs), 'model pair')} "
        "with line of sight)"
    ]
    for pair in seeing:
        lines.append(f"  {pair.viewer_id} -> {pair.target_id}")
    return lines


def deployment_report(board: Battlefield, deployment_name: str) -> list[str]:
    """Models not wholly inside their player's deployment zone.

    Raises KeyError for an unknown deployment.
    """
    zones = get_deployment(deployment_name)["zones"]
    outside = []
    skipped = 0
    for model in board.models:
        zone = zones.get(model.player_id)
        if zone is None:
            skipped += 1
        elif not model_in_zone(model, zone):
            outside.append(model)

    if outside:
        verdict = f"{_plural(len(outside), 'model')} outside their zone"
    else:
        verdict = "all models inside their zones"
    lines = [f"Deployment {deployment_name}: {verdict}"]
    for model in outside:
        lines.append(f"  {model.id} (player {model.player_id})")
    if skipped:
        lines.append(f"{_plural(skipped, 'model')} without a player skipped")
    return lines
