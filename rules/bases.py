"""Model base catalog.

Base sizes are published in millimetres; everything in the engine works in
inches. Catalog keys match the base-type strings carried by imported army
lists (``"32mm"``, ``"75x42mm"``). Rectangular bases (vehicle hulls and
custom footprints) use a ``rect-`` prefix and take their dimensions from the
model record instead of the catalog.
"""

from __future__ import annotations

from .types import Base, BaseShape

MM_TO_INCH = 1 / 25.4

# Used whenever a base type can't be resolved.
DEFAULT_RADIUS = 0.5

CIRCLE_BASES_MM: dict[str, float] = {
    "25mm": 25.0,
    "28.5mm": 28.5,
    "32mm": 32.0,
    "40mm": 40.0,
    "50mm": 50.0,
    "60mm": 60.0,
    "80mm": 80.0,
    "90mm": 90.0,
    "100mm": 100.0,
    "130mm": 130.0,
}

OVAL_BASES_MM: dict[str, tuple[float, float]] = {
    "60x35.5mm": (60.0, 35.5),
    "75x42mm": (75.0, 42.0),
    "90x52.5mm": (90.0, 52.5),
    "105x70mm": (105.0, 70.0),
    "120x90mm": (120.0, 90.0),
}

RECT_PREFIX = "rect-"


def is_oval_base(base_type: str | None) -> bool:
    return base_type in OVAL_BASES_MM


def is_rectangular_base(base_type: str | None) -> bool:
    return bool(base_type) and base_type.startswith(RECT_PREFIX)


def base_from_type(
    base_type: str | None,
    custom_width: float | None = None,
    custom_height: float | None = None,
) -> Base:
    """Resolve a base-type string to a ``Base`` in inches.

    Diameters from the catalog are halved for circles; oval dimensions stay
    as diameters. A rectangular type without both custom dimensions, or any
    unknown type, falls back to a circle of ``DEFAULT_RADIUS``.
    """
    if base_type in CIRCLE_BASES_MM:
        return Base.circle(CIRCLE_BASES_MM[base_type] * MM_TO_INCH / 2)
    if is_oval_base(base_type):
        w_mm, h_mm = OVAL_BASES_MM[base_type]
        return Base.oval(w_mm * MM_TO_INCH, h_mm * MM_TO_INCH)
    if is_rectangular_base(base_type) and custom_width and custom_height:
        return Base.rectangle(custom_width, custom_height)
    return Base.circle(DEFAULT_RADIUS)


def base_label(base: Base) -> str:
    """Short human-readable size, e.g. ``32mm`` or ``3.0"x5.0"``."""
    if base.shape is BaseShape.CIRCLE:
        return f"{base.radius * 2 / MM_TO_INCH:g}mm"
    if base.shape is BaseShape.OVAL:
        return f"{base.width / MM_TO_INCH:g}x{base.height / MM_TO_INCH:g}mm"
    return f'{base.width:.1f}"x{base.height:.1f}"'
