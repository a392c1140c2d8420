"""Geometry primitives and the element record used by the snapping engine.

All coordinates are canvas (world) units. Rectangles are axis-aligned and
described by their min/max corners; rotation is stored on the element and
applied about the rectangle center.
"""

import math
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Axis(str, Enum):
    """Canvas axis."""

    X = "x"
    Y = "y"

    @property
    def perpendicular(self) -> "Axis":
        """The orthogonal axis."""
        return Axis.Y if self is Axis.X else Axis.X


class AxisAnchor(str, Enum):
    """Representative position of a rectangle along one axis."""

    START = "start"  # min
    CENTER = "center"
    END = "end"  # max


ALL_ANCHORS: tuple[AxisAnchor, ...] = (
    AxisAnchor.START,
    AxisAnchor.CENTER,
    AxisAnchor.END,
)


# ============================================================================
# Geometry Models
# ============================================================================


@dataclass(frozen=True)
class Point:
    """A point in canvas units."""

    x: float = 0.0
    y: float = 0.0

    def translate(self, offset: "Point") -> "Point":
        """Return this point moved by ``offset``."""
        return Point(self.x + offset.x, self.y + offset.y)

    def coordinate(self, axis: Axis) -> float:
        return self.x if axis is Axis.X else self.y


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its min and max corners.

    Zero-size rectangles are valid; they simply fail to produce some
    snap candidates (for instance gaps of zero length).
    """

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> "Rect":
        """Build a rect from its top-left corner and size."""
        return cls(min_x=x, min_y=y, max_x=x + width, max_y=y + height)

    @classmethod
    def from_points(cls, points: list[Point]) -> "Rect":
        """Smallest rect containing every point."""
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min_x=min(xs), min_y=min(ys), max_x=max(xs), max_y=max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def center_y(self) -> float:
        return (self.min_y + self.max_y) / 2

    @property
    def center(self) -> Point:
        return Point(self.center_x, self.center_y)

    @property
    def is_finite(self) -> bool:
        """Whether every coordinate is a finite number."""
        return all(
            math.isfinite(v) for v in (self.min_x, self.min_y, self.max_x, self.max_y)
        )

    def translate(self, offset: Point) -> "Rect":
        """Return this rect moved by ``offset``."""
        return Rect(
            min_x=self.min_x + offset.x,
            min_y=self.min_y + offset.y,
            max_x=self.max_x + offset.x,
            max_y=self.max_y + offset.y,
        )

    def union(self, other: "Rect") -> "Rect":
        """Smallest rect containing both rects."""
        return Rect(
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y),
        )

    # Axis accessors

    def axis_min(self, axis: Axis) -> float:
        return self.min_x if axis is Axis.X else self.min_y

    def axis_max(self, axis: Axis) -> float:
        return self.max_x if axis is Axis.X else self.max_y

    def axis_center(self, axis: Axis) -> float:
        return self.center_x if axis is Axis.X else self.center_y

    def axis_size(self, axis: Axis) -> float:
        return self.width if axis is Axis.X else self.height

    def anchor_position(self, axis: Axis, anchor: AxisAnchor) -> float:
        """Coordinate of ``anchor`` along ``axis``."""
        if anchor is AxisAnchor.START:
            return self.axis_min(axis)
        if anchor is AxisAnchor.END:
            return self.axis_max(axis)
        return self.axis_center(axis)


# ============================================================================
# Scene Models
# ============================================================================


class Element(BaseModel):
    """A canvas element as seen by the snapping engine.

    Only the geometry matters here: the unrotated rect and a rotation in
    radians about the rect center. Opacity is used to skip invisible
    elements when collecting snap references.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique element identifier")
    rect: Rect = Field(description="Unrotated bounds in canvas units")
    rotation: float = Field(
        default=0.0, description="Rotation in radians about the rect center"
    )
    opacity: float = Field(default=1.0, ge=0.0, le=1.0, description="Opacity")

    @property
    def is_visible(self) -> bool:
        return self.opacity > 0
