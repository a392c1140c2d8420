"""Glue between the interactive edit operations and the snap engine.

Resolves which snapping mode is active, which anchors a resize handle
drags, which elements may serve as snap references, how a resize snap is
applied back onto the dragged edges, and how the user's ``SnapConfig``
turns into a move or resize snap.
"""

from collections.abc import Iterable, Sequence
from enum import Enum

from whiteboard.scene.schema import AxisAnchor, Element, Point, Rect
from whiteboard.snapping.config import SnapConfig
from whiteboard.snapping.engine import SnapResult, snap_move, snap_resize


class SnappingMode(str, Enum):
    """Which snapping system drives the current drag."""

    NONE = "none"
    OBJECT = "object"
    GRID = "grid"


class ResizeHandle(str, Enum):
    """Resize handles of a selection box."""

    TOP_LEFT = "top_left"
    TOP = "top"
    TOP_RIGHT = "top_right"
    RIGHT = "right"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM = "bottom"
    BOTTOM_LEFT = "bottom_left"
    LEFT = "left"


_LEFT_HANDLES = {ResizeHandle.LEFT, ResizeHandle.TOP_LEFT, ResizeHandle.BOTTOM_LEFT}
_RIGHT_HANDLES = {ResizeHandle.RIGHT, ResizeHandle.TOP_RIGHT, ResizeHandle.BOTTOM_RIGHT}
_TOP_HANDLES = {ResizeHandle.TOP, ResizeHandle.TOP_LEFT, ResizeHandle.TOP_RIGHT}
_BOTTOM_HANDLES = {ResizeHandle.BOTTOM, ResizeHandle.BOTTOM_LEFT, ResizeHandle.BOTTOM_RIGHT}


def resolve_persistent_snapping_mode(grid_enabled: bool, object_enabled: bool) -> SnappingMode:
    """Mode from the saved toggles alone. Grid snapping takes precedence."""
    if grid_enabled:
        return SnappingMode.GRID
    if object_enabled:
        return SnappingMode.OBJECT
    return SnappingMode.NONE


def resolve_effective_snapping_mode(
    grid_enabled: bool, object_enabled: bool, ctrl_pressed: bool
) -> SnappingMode:
    """Mode for the current drag.

    Holding the override key inverts the persistent mode: snapping turns
    off when any mode is active, and object snapping turns on otherwise.
    """
    persistent = resolve_persistent_snapping_mode(grid_enabled, object_enabled)
    if not ctrl_pressed:
        return persistent
    return SnappingMode.OBJECT if persistent is SnappingMode.NONE else SnappingMode.NONE


def resolve_effective_snapping_mode_for_config(
    config: SnapConfig, grid_enabled: bool, ctrl_pressed: bool
) -> SnappingMode:
    return resolve_effective_snapping_mode(
        grid_enabled=grid_enabled,
        object_enabled=config.enabled,
        ctrl_pressed=ctrl_pressed,
    )


def resize_anchors(handle: ResizeHandle) -> tuple[list[AxisAnchor], list[AxisAnchor]]:
    """Anchors dragged by a resize handle.

    Args:
        handle: Handle being dragged.

    Returns:
        Tuple of (x anchors, y anchors). Side handles leave the other axis
        empty.
    """
    anchors_x = []
    if handle in _LEFT_HANDLES:
        anchors_x.append(AxisAnchor.START)
    if handle in _RIGHT_HANDLES:
        anchors_x.append(AxisAnchor.END)

    anchors_y = []
    if handle in _TOP_HANDLES:
        anchors_y.append(AxisAnchor.START)
    if handle in _BOTTOM_HANDLES:
        anchors_y.append(AxisAnchor.END)
    return anchors_x, anchors_y


def apply_resize_snap(
    rect: Rect,
    result: SnapResult,
    anchors_x: Iterable[AxisAnchor],
    anchors_y: Iterable[AxisAnchor],
) -> Rect:
    """Apply a resize snap by moving only the dragged edges.

    Args:
        rect: Bounds before snapping.
        result: Result of ``snap_resize`` for those bounds.
        anchors_x: X anchors being dragged.
        anchors_y: Y anchors being dragged.

    Returns:
        The snapped bounds (``rect`` unchanged when there is no snap).
    """
    if not result.has_snap:
        return rect
    anchors_x = set(anchors_x)
    anchors_y = set(anchors_y)
    return Rect(
        min_x=rect.min_x + (result.dx if AxisAnchor.START in anchors_x else 0),
        min_y=rect.min_y + (result.dy if AxisAnchor.START in anchors_y else 0),
        max_x=rect.max_x + (result.dx if AxisAnchor.END in anchors_x else 0),
        max_y=rect.max_y + (result.dy if AxisAnchor.END in anchors_y else 0),
    )


def resolve_reference_elements(
    elements: Iterable[Element], excluded_ids: Iterable[str]
) -> list[Element]:
    """Visible elements that are not part of the current edit."""
    excluded = set(excluded_ids)
    return [e for e in elements if e.is_visible and e.id not in excluded]


# ============================================================================
# Config-driven snapping
# ============================================================================


def snap_move_with_config(
    config: SnapConfig,
    target_rect: Rect,
    reference_elements: Sequence[Element],
    zoom: float,
    target_elements: Sequence[Element] | None = None,
    target_offset: Point | None = None,
) -> SnapResult:
    """Snap a moving selection using the user's snapping options.

    Args:
        config: Snapping options.
        target_rect: Bounds of the moved selection, drag offset applied.
        reference_elements: Elements to snap against.
        zoom: Current camera zoom, used to convert the screen distance.
        target_elements: Elements being moved, at their committed positions.
        target_offset: Drag offset not yet committed to ``target_elements``.

    Returns:
        The snap result, without guides when ``show_guides`` is off.
    """
    result = snap_move(
        target_rect,
        reference_elements,
        config.world_snap_distance(zoom),
        target_elements=target_elements,
        target_offset=target_offset,
        enable_point_snaps=config.enable_point_snaps,
        enable_gap_snaps=config.enable_gap_snaps,
    )
    return _apply_guide_visibility(config, result)


def snap_resize_with_config(
    config: SnapConfig,
    target_rect: Rect,
    reference_elements: Sequence[Element],
    zoom: float,
    handle: ResizeHandle,
) -> SnapResult:
    """Snap the edges dragged by ``handle`` using the user's snapping options."""
    anchors_x, anchors_y = resize_anchors(handle)
    result = snap_resize(
        target_rect,
        reference_elements,
        config.world_snap_distance(zoom),
        anchors_x,
        anchors_y,
        enable_point_snaps=config.enable_point_snaps,
    )
    return _apply_guide_visibility(config, result)


def _apply_guide_visibility(config: SnapConfig, result: SnapResult) -> SnapResult:
    if config.show_guides or not result.guides:
        return result
    return SnapResult(dx=result.dx, dy=result.dy)
