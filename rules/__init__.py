"""Rules engine for deployment planning: unit coherency and line of sight.

The public API is a handful of pure functions over battlefield snapshots:

  * ``check_unit_coherency`` / ``check_all_units_coherency``
  * ``check_line_of_sight`` / ``can_see``
  * ``unit_can_see_unit`` / ``check_unit_to_unit_line_of_sight``
  * ``find_connected_terrain_groups`` / ``get_terrain_group_members``
"""

from .coherency import check_all_units_coherency, check_unit_coherency
from .line_of_sight import (
    can_see,
    check_line_of_sight,
    check_unit_to_unit_line_of_sight,
    unit_can_see_unit,
)
from .terrain_groups import (
    find_connected_terrain_groups,
    get_terrain_group_members,
)

__all__ = [
    "can_see",
    "check_all_units_coherency",
    "check_line_of_sight",
    "check_unit_coherency",
    "check_unit_to_unit_line_of_sight",
    "find_connected_terrain_groups",
    "get_terrain_group_members",
    "unit_can_see_unit",
]
