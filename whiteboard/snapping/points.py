"""Snap point extraction for (possibly rotated) elements."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from whiteboard.scene.schema import ORIGIN, Axis, AxisAnchor, Element, Point, Rect
from whiteboard.scene.transform import element_world_aabb, rotate_point
from whiteboard.snapping.config import EPSILON


class SnapPointKind(str, Enum):
    """Classification of a snap point on its element."""

    CENTER = "center"
    EDGE = "edge"  # edge midpoint
    CORNER = "corner"


# Scaled by half width/height: 4 corners, 4 edge midpoints, center.
NORMALIZED_SNAP_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (1, -1),
    (1, 1),
    (-1, 1),
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 0),
    (0, 0),
)


@dataclass(frozen=True)
class SnapPoint:
    """A world-space snap point with its per-axis anchor classification."""

    point: Point
    anchor_x: AxisAnchor
    anchor_y: AxisAnchor
    rect: Rect  # owner's world AABB

    def anchor(self, axis: Axis) -> AxisAnchor:
        return self.anchor_x if axis is Axis.X else self.anchor_y

    def position(self, axis: Axis) -> float:
        return self.point.coordinate(axis)

    @property
    def kind(self) -> SnapPointKind:
        """Center, edge midpoint or corner, derived from the anchors."""
        if self.anchor_x is AxisAnchor.CENTER and self.anchor_y is AxisAnchor.CENTER:
            return SnapPointKind.CENTER
        if self.anchor_x is AxisAnchor.CENTER or self.anchor_y is AxisAnchor.CENTER:
            return SnapPointKind.EDGE
        return SnapPointKind.CORNER


def resolve_axis_anchor(
    value: float, minimum: float, center: float, maximum: float
) -> AxisAnchor:
    """Classify a coordinate against an axis range.

    Exact matches (within EPSILON) win; otherwise the side of the center
    decides, so points of rotated elements still get a usable anchor.
    """
    if abs(value - minimum) <= EPSILON:
        return AxisAnchor.START
    if abs(value - maximum) <= EPSILON:
        return AxisAnchor.END
    if abs(value - center) <= EPSILON:
        return AxisAnchor.CENTER
    return AxisAnchor.START if value < center else AxisAnchor.END


def build_element_snap_points(
    elements: Iterable[Element],
    offset: Point = ORIGIN,
) -> list[SnapPoint]:
    """Build the nine snap points of every element.

    Args:
        elements: Elements to extract points from.
        offset: Translation not yet committed to the elements (mid-drag).

    Returns:
        Snap points in world space, nine per element. Elements whose
        geometry is not finite are skipped.
    """
    points: list[SnapPoint] = []
    for element in elements:
        rect = element.rect
        rotation = element.rotation
        center = rect.center.translate(offset)
        aabb = element_world_aabb(element)
        if offset != ORIGIN:
            aabb = aabb.translate(offset)
        if not aabb.is_finite:
            continue

        half_width = rect.width / 2
        half_height = rect.height / 2
        for nx, ny in NORMALIZED_SNAP_OFFSETS:
            unrotated = Point(center.x + nx * half_width, center.y + ny * half_height)
            world_point = rotate_point(unrotated, center, rotation)
            points.append(
                SnapPoint(
                    point=world_point,
                    anchor_x=resolve_axis_anchor(
                        world_point.x, aabb.min_x, aabb.center_x, aabb.max_x
                    ),
                    anchor_y=resolve_axis_anchor(
                        world_point.y, aabb.min_y, aabb.center_y, aabb.max_y
                    ),
                    rect=aabb,
                )
            )
    return points
