"""Data types for battlefield snapshots and their JSON schema.

Everything the rules engines read is defined here: model bases, models,
terrain pieces and their footprints, wall pieces, and the ``Battlefield``
that holds them. The engines only read these records; callers own them.

Coordinates are inches with the origin at the top-left corner of the table
(x to the right, y down). Rotations are degrees, clockwise on screen.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

Point = tuple[float, float]
Polygon = list[Point]

BATTLEFIELD_WIDTH = 60.0
BATTLEFIELD_HEIGHT = 44.0


class BaseShape(enum.Enum):
    CIRCLE = "circle"
    OVAL = "oval"
    RECTANGLE = "rectangle"


@dataclass(frozen=True)
class Base:
    """A model's footprint.

    Circles use ``radius``. Ovals use ``width`` and ``height`` as the two
    perpendicular diameters. Rectangles use them as side lengths.
    """

    shape: BaseShape
    radius: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @staticmethod
    def circle(radius: float) -> Base:
        return Base(shape=BaseShape.CIRCLE, radius=radius)

    @staticmethod
    def oval(width: float, height: float) -> Base:
        return Base(shape=BaseShape.OVAL, width=width, height=height)

    @staticmethod
    def rectangle(width: float, height: float) -> Base:
        return Base(shape=BaseShape.RECTANGLE, width=width, height=height)

    @staticmethod
    def from_dict(d: dict) -> Base:
        shape = BaseShape(d["shape"])
        if shape is BaseShape.CIRCLE:
            return Base.circle(d["radius_inches"])
        if shape is BaseShape.OVAL:
            return Base.oval(d["width_inches"], d["height_inches"])
        return Base.rectangle(d["width_inches"], d["height_inches"])

    def to_dict(self) -> dict:
        if self.shape is BaseShape.CIRCLE:
            return {"shape": self.shape.value, "radius_inches": self.radius}
        return {
            "shape": self.shape.value,
            "width_inches": self.width,
            "height_inches": self.height,
        }


@dataclass
class Model:
    id: str
    x: float
    y: float
    base: Base
    rotation_deg: float = 0.0
    unit_id: str | None = None
    player_id: int | None = None
    name: str | None = None

    @staticmethod
    def from_dict(d: dict) -> Model:
        """Read a model record.

        The base is either an explicit ``base`` record or a catalog
        ``base_type`` string (``"32mm"``, ``"75x42mm"``, ``"rect-custom"``)
        resolved through ``rules.bases``.
        """
        from .bases import base_from_type

        if "base" in d:
            base = Base.from_dict(d["base"])
        else:
            base = base_from_type(
                d.get("base_type"),
                d.get("custom_width_inches"),
                d.get("custom_height_inches"),
            )
        return Model(
            id=d["id"],
            x=d["x_inches"],
            y=d["y_inches"],
            base=base,
            rotation_deg=d.get("rotation_deg", 0.0),
            unit_id=d.get("unit_id"),
            player_id=d.get("player_id"),
            name=d.get("name"),
        )

    def to_dict(self) -> dict:
        d: dict = {
            "id": self.id,
            "x_inches": self.x,
            "y_inches": self.y,
            "rotation_deg": self.rotation_deg,
            "base": self.base.to_dict(),
        }
        if self.unit_id is not None:
            d["unit_id"] = self.unit_id
        if self.player_id is not None:
            d["player_id"] = self.player_id
        if self.name:
            d["name"] = self.name
        return d


@dataclass
class TerrainFootprint:
    """An identified terrain polygon, the form the engines consume."""

    id: str
    vertices: Polygon


@dataclass
class TerrainPiece:
    """A rectangular terrain area, positioned by its top-left corner and
    rotated about its centre."""

    id: str
    x: float
    y: float
    width: float
    height: float
    rotation_deg: float = 0.0

    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def footprint(self) -> TerrainFootprint:
        from .geometry import rotated_rect_vertices

        cx, cy = self.center()
        return TerrainFootprint(
            id=self.id,
            vertices=rotated_rect_vertices(
                cx, cy, self.width, self.height, self.rotation_deg
            ),
        )

    @staticmethod
    def from_dict(d: dict) -> TerrainPiece:
        return TerrainPiece(
            id=d["id"],
            x=d["x_inches"],
            y=d["y_inches"],
            width=d["width_inches"],
            height=d["height_inches"],
            rotation_deg=d.get("rotation_deg", 0.0),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x_inches": self.x,
            "y_inches": self.y,
            "width_inches": self.width,
            "height_inches": self.height,
            "rotation_deg": self.rotation_deg,
        }


@dataclass
class WallPiece:
    id: str
    x: float
    y: float
    shape: str
    rotation_deg: float = 0.0
    segments: list[float] | None = None

    def polygon(self) -> Polygon:
        from .walls import transform_wall_vertices, wall_vertices

        return transform_wall_vertices(
            wall_vertices(self.shape, self.segments),
            self.x,
            self.y,
            self.rotation_deg,
        )

    @staticmethod
    def from_dict(d: dict) -> WallPiece:
        segs = d.get("segments")
        return WallPiece(
            id=d["id"],
            x=d["x_inches"],
            y=d["y_inches"],
            shape=d["shape"],
            rotation_deg=d.get("rotation_deg", 0.0),
            segments=list(segs) if segs else None,
        )

    def to_dict(self) -> dict:
        d: dict = {
            "id": self.id,
            "x_inches": self.x,
            "y_inches": self.y,
            "shape": self.shape,
            "rotation_deg": self.rotation_deg,
        }
        if self.segments:
            d["segments"] = list(self.segments)
        return d


@dataclass
class Battlefield:
    width: float = BATTLEFIELD_WIDTH
    height: float = BATTLEFIELD_HEIGHT
    terrains: list[TerrainPiece] = field(default_factory=list)
    walls: list[WallPiece] = field(default_factory=list)
    models: list[Model] = field(default_factory=list)

    def terrain_footprints(self) -> list[TerrainFootprint]:
        return [t.footprint() for t in self.terrains]

    def wall_polygons(self) -> list[Polygon]:
        return [w.polygon() for w in self.walls]

    def models_by_id(self) -> dict[str, Model]:
        return {m.id: m for m in self.models}

    def unit_models(self, unit_id: str) -> list[Model]:
        return [m for m in self.models if m.unit_id == unit_id]

    @staticmethod
    def from_dict(d: dict) -> Battlefield:
        return Battlefield(
            width=d.get("width_inches", BATTLEFIELD_WIDTH),
            height=d.get("height_inches", BATTLEFIELD_HEIGHT),
            terrains=[
                TerrainPiece.from_dict(t) for t in d.get("terrains", [])
            ],
            walls=[WallPiece.from_dict(w) for w in d.get("walls", [])],
            models=[Model.from_dict(m) for m in d.get("models", [])],
        )

    def to_dict(self) -> dict:
        return {
            "width_inches": self.width,
            "height_inches": self.height,
            "terrains": [t.to_dict() for t in self.terrains],
            "walls": [w.to_dict() for w in self.walls],
            "models": [m.to_dict() for m in self.models],
        }
