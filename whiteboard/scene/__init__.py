"""Scene geometry - points, rects and canvas elements."""

from whiteboard.scene.schema import (
    ALL_ANCHORS,
    ORIGIN,
    Axis,
    AxisAnchor,
    Element,
    Point,
    Rect,
)
from whiteboard.scene.transform import (
    compute_selection_bounds,
    element_world_aabb,
    rotate_point,
)

__all__ = [
    # Primitives
    "ALL_ANCHORS",
    "ORIGIN",
    "Axis",
    "AxisAnchor",
    "Point",
    "Rect",
    # Elements
    "Element",
    # Transforms
    "compute_selection_bounds",
    "element_world_aabb",
    "rotate_point",
]
