"""Unit coherency checking.

A unit is "in coherency" when its models stay grouped on the table:

  * every model is within ``COHERENCY_DISTANCE`` (2") of at least one other
    model of its unit, or at least two others once the unit has 7 or more
    models;
  * the whole unit forms a single connected group. A unit split into two
    clusters is illegal even if each cluster is locally dense.

Distances are edge-to-edge between bases (``geometry.model_distance``).

The check builds an undirected proximity graph over the unit's models, finds
its connected components with a breadth-first search, and takes the largest
component as the unit's main body. Ties for largest go to the component
found first, i.e. the one containing the earliest model in input order, so
results depend on (and are stable for) the caller's model ordering.

Every model outside the main body is a violator, as is every model short of
the required neighbour count.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from .geometry import model_distance
from .types import Model

COHERENCY_DISTANCE = 2.0
LARGE_UNIT_SIZE = 7


@dataclass
class ModelCoherency:
    """Coherency details for one model within its unit."""

    model_id: str
    required_count: int
    actual_count: int
    is_disconnected: bool
    component_size: int

    @property
    def in_coherency(self) -> bool:
        return (
            self.actual_count >= self.required_count
            and not self.is_disconnected
        )


@dataclass
class UnitCoherencyResult:
    is_coherent: bool
    violations: dict[str, ModelCoherency] = field(default_factory=dict)
    component_count: int = 0
    statuses: dict[str, ModelCoherency] = field(default_factory=dict)


@dataclass
class CoherencyStatus:
    """Per-model status reported by ``check_all_units_coherency``."""

    in_coherency: bool
    required_count: int
    actual_count: int
    unit_size: int
    is_disconnected: bool
    component_size: int
    component_count: int


def required_neighbor_count(unit_size: int) -> int:
    return 2 if unit_size >= LARGE_UNIT_SIZE else 1


def build_adjacency(
    models: list[Model],
    max_distance: float = COHERENCY_DISTANCE,
) -> dict[str, list[str]]:
    """Proximity graph: model id -> ids within max_distance (inclusive).

    Neighbour lists follow input order.
    """
    adjacency: dict[str, list[str]] = {m.id: [] for m in models}
    n = len(models)
    for i in range(n):
        for j in range(i + 1, n):
            if model_distance(models[i], models[j]) <= max_distance:
                adjacency[models[i].id].append(models[j].id)
                adjacency[models[j].id].append(models[i].id)
    return adjacency


def find_connected_components(
    models: list[Model],
    adjacency: dict[str, list[str]],
) -> list[list[str]]:
    """Connected components by BFS, seeded in input order."""
    visited: set[str] = set()
    components: list[list[str]] = []
    for model in models:
        if model.id in visited:
            continue
        component: list[str] = []
        queue = deque([model.id])
        visited.add(model.id)
        while queue:
            current = queue.popleft()
            component.append(current)
            for neighbor in adjacency[current]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)
        components.append(component)
    return components


def _largest_component(components: list[list[str]]) -> list[str]:
    largest = components[0]
    for component in components[1:]:
        # Strictly greater: ties keep the earlier component
        if len(component) > len(largest):
            largest = component
    return largest


def check_unit_coherency(models: list[Model]) -> UnitCoherencyResult:
    """Check coherency for the models of a single unit.

    Returns:
        ``UnitCoherencyResult`` with a status for every model, the subset
        that violates coherency, and the number of connected components
        (1 means the unit is in one piece).
    """
    if len(models) <= 1:
        statuses = {
            m.id: ModelCoherency(
                model_id=m.id,
                required_count=0,
                actual_count=0,
                is_disconnected=False,
                component_size=1,
            )
            for m in models
        }
        return UnitCoherencyResult(
            is_coherent=True,
            component_count=len(models),
            statuses=statuses,
        )

    required = required_neighbor_count(len(models))
    adjacency = build_adjacency(models)
    components = find_connected_components(models, adjacency)
    main = set(_largest_component(components))

    component_size: dict[str, int] = {}
    for component in components:
        for model_id in component:
            component_size[model_id] = len(component)

    statuses: dict[str, ModelCoherency] = {}
    violations: dict[str, ModelCoherency] = {}
    for model in models:
        status = ModelCoherency(
            model_id=model.id,
            required_count=required,
            actual_count=len(adjacency[model.id]),
            is_disconnected=model.id not in main,
            component_size=component_size[model.id],
        )
        statuses[model.id] = status
        if not status.in_coherency:
            violations[model.id] = status

    return UnitCoherencyResult(
        is_coherent=not violations,
        violations=violations,
        component_count=len(components),
        statuses=statuses,
    )


def group_by_unit(models: list[Model]) -> dict[str, list[Model]]:
    """Group models by unit_id in first-seen order; unitless models are
    dropped."""
    units: dict[str, list[Model]] = {}
    for model in models:
        if model.unit_id:
            units.setdefault(model.unit_id, []).append(model)
    return units


def check_all_units_coherency(
    models: list[Model],
) -> dict[str, CoherencyStatus]:
    """Check every unit present in a flat model list.

    Models without a unit id are not part of any unit and get no entry.
    """
    result: dict[str, CoherencyStatus] = {}
    for unit_models in group_by_unit(models).values():
        unit = check_unit_coherency(unit_models)
        for model in unit_models:
            status = unit.statuses[model.id]
            result[model.id] = CoherencyStatus(
                in_coherency=model.id not in unit.violations,
                required_count=status.required_count,
                actual_count=status.actual_count,
                unit_size=len(unit_models),
                is_disconnected=status.is_disconnected,
                component_size=status.component_size,
                component_count=unit.component_count,
            )
    return result
