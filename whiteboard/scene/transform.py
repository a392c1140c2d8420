"""Rotation helpers for element geometry.

Elements rotate about the center of their unrotated rect. These helpers map
local points into world space and compute the axis-aligned world bounds used
for snapping and selection.
"""

import math
from collections.abc import Iterable

from whiteboard.scene.schema import Element, Point, Rect


def rotate_point(point: Point, origin: Point, angle: float) -> Point:
    """Rotate ``point`` about ``origin`` by ``angle`` radians.

    Args:
        point: Point to rotate.
        origin: Rotation center.
        angle: Angle in radians (positive is clockwise on a y-down canvas).

    Returns:
        The rotated point.
    """
    if angle == 0:
        return point
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    dx = point.x - origin.x
    dy = point.y - origin.y
    return Point(
        origin.x + dx * cos_a - dy * sin_a,
        origin.y + dx * sin_a + dy * cos_a,
    )


def element_world_aabb(element: Element) -> Rect:
    """Axis-aligned world bounds of an element after rotation.

    Args:
        element: Element to measure.

    Returns:
        The element rect itself when unrotated, otherwise the bounds of its
        four rotated corners.
    """
    rect = element.rect
    if element.rotation == 0:
        return rect

    center = rect.center
    corners = [
        Point(rect.min_x, rect.min_y),
        Point(rect.max_x, rect.min_y),
        Point(rect.max_x, rect.max_y),
        Point(rect.min_x, rect.max_y),
    ]
    return Rect.from_points([rotate_point(c, center, element.rotation) for c in corners])


def compute_selection_bounds(elements: Iterable[Element]) -> Rect | None:
    """Union of the world bounds of ``elements``, or None when empty."""
    bounds: Rect | None = None
    for element in elements:
        aabb = element_world_aabb(element)
        bounds = aabb if bounds is None else bounds.union(aabb)
    return bounds
