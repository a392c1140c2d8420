"""Object-to-object snapping for moving and resizing canvas elements.

The engine is a pure function of its inputs. For each axis independently it:

1. builds point candidates (target anchors vs. reference anchors or snap
   points) and gap candidates (centering in, or matching, existing gaps);
2. scores them and selects the best one (see ``scoring``);
3. turns the winners into guides for the overlay renderer.

Callers add ``(dx, dy)`` of the returned ``SnapResult`` to their in-progress
transform and draw ``guides``; nothing here mutates the document.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from whiteboard.scene.schema import ALL_ANCHORS, ORIGIN, Axis, AxisAnchor, Element, Point, Rect
from whiteboard.scene.transform import element_world_aabb
from whiteboard.snapping.candidates import Candidate, build_point_candidates, is_gap_candidate
from whiteboard.snapping.gaps import build_gap_candidates
from whiteboard.snapping.guides import (
    SnapGuide,
    build_associated_gap_guides,
    build_guides_for_candidate,
    dedupe_guides,
)
from whiteboard.snapping.points import SnapPoint, build_element_snap_points
from whiteboard.snapping.scoring import select_best_candidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapResult:
    """Result of a snap operation."""

    dx: float = 0.0
    dy: float = 0.0
    guides: tuple[SnapGuide, ...] = field(default_factory=tuple)

    @property
    def has_snap(self) -> bool:
        """Whether any offset was found."""
        return self.dx != 0 or self.dy != 0

    @property
    def offset(self) -> Point:
        return Point(self.dx, self.dy)


EMPTY_RESULT = SnapResult()


class ObjectSnapService:
    """Calculates object snapping while elements are moved or resized.

    Stateless; a single shared instance (``object_snap_service``) is enough.
    """

    def snap_move(
        self,
        target_rect: Rect,
        reference_elements: Sequence[Element],
        snap_distance: float,
        target_elements: Sequence[Element] | None = None,
        target_offset: Point | None = None,
        enable_point_snaps: bool = True,
        enable_gap_snaps: bool = True,
    ) -> SnapResult:
        """Snap a moving selection.

        All anchors (start, center, end) are considered on both axes since
        the whole selection moves.

        Args:
            target_rect: Bounds of the element(s) being moved, with the
                pending drag offset already applied.
            reference_elements: Other elements to snap against.
            snap_distance: Maximum distance (canvas units) that triggers a snap.
            target_elements: Elements being moved, at their committed
                positions. Enables point-to-point snapping for rotated
                elements.
            target_offset: Drag offset not yet committed to
                ``target_elements``.
            enable_point_snaps: Consider anchor/point alignment.
            enable_gap_snaps: Consider equal-spacing alignment.

        Returns:
            The snap offset and guides.
        """
        return self.snap_rect(
            target_rect=target_rect,
            reference_elements=reference_elements,
            snap_distance=snap_distance,
            target_anchors_x=ALL_ANCHORS,
            target_anchors_y=ALL_ANCHORS,
            target_elements=target_elements,
            target_offset=target_offset,
            enable_point_snaps=enable_point_snaps,
            enable_gap_snaps=enable_gap_snaps,
        )

    def snap_resize(
        self,
        target_rect: Rect,
        reference_elements: Sequence[Element],
        snap_distance: float,
        target_anchors_x: Sequence[AxisAnchor],
        target_anchors_y: Sequence[AxisAnchor],
        enable_point_snaps: bool = True,
    ) -> SnapResult:
        """Snap the edges being dragged by a resize handle.

        Only the given anchors may snap (e.g. ``END`` on both axes for a
        bottom-right handle). Gap snapping never applies to resizes.

        Args:
            target_rect: Current bounds during the resize.
            reference_elements: Other elements to snap against.
            snap_distance: Maximum distance that triggers a snap.
            target_anchors_x: X anchors being resized.
            target_anchors_y: Y anchors being resized.
            enable_point_snaps: Consider anchor alignment.

        Returns:
            The snap offset and guides.
        """
        return self.snap_rect(
            target_rect=target_rect,
            reference_elements=reference_elements,
            snap_distance=snap_distance,
            target_anchors_x=target_anchors_x,
            target_anchors_y=target_anchors_y,
            enable_point_snaps=enable_point_snaps,
            enable_gap_snaps=False,
        )

    def snap_rect(
        self,
        target_rect: Rect,
        reference_elements: Sequence[Element],
        snap_distance: float,
        target_anchors_x: Sequence[AxisAnchor],
        target_anchors_y: Sequence[AxisAnchor],
        target_elements: Sequence[Element] | None = None,
        target_offset: Point | None = None,
        enable_point_snaps: bool = True,
        enable_gap_snaps: bool = True,
    ) -> SnapResult:
        """Core snapping calculation shared by ``snap_move`` and ``snap_resize``.

        An empty anchor list disables its axis only. Degenerate input
        (non-positive or non-finite distance, non-finite target, no
        references, no active feature) gives an empty result.
        """
        assert all(isinstance(a, AxisAnchor) for a in (*target_anchors_x, *target_anchors_y))

        if (
            not math.isfinite(snap_distance)
            or snap_distance <= 0
            or not target_rect.is_finite
            or not reference_elements
            or not (enable_point_snaps or enable_gap_snaps)
            or not (target_anchors_x or target_anchors_y)
        ):
            return EMPTY_RESULT

        reference_rects = [
            rect
            for rect in (element_world_aabb(e) for e in reference_elements)
            if rect.is_finite
        ]
        if not reference_rects:
            return EMPTY_RESULT

        reference_points: list[SnapPoint] | None = None
        target_points: list[SnapPoint] | None = None
        if enable_point_snaps:
            reference_points = build_element_snap_points(reference_elements)
            if target_elements is not None:
                target_points = build_element_snap_points(
                    target_elements, offset=target_offset or ORIGIN
                )

        def axis_candidates(axis: Axis, anchors: Sequence[AxisAnchor]) -> list[Candidate]:
            candidates: list[Candidate] = []
            if not anchors:
                return candidates
            if enable_point_snaps:
                candidates.extend(
                    build_point_candidates(
                        axis,
                        target_rect,
                        reference_rects,
                        anchors,
                        snap_distance,
                        target_points=target_points,
                        reference_points=reference_points,
                    )
                )
            if enable_gap_snaps:
                candidates.extend(
                    build_gap_candidates(
                        axis, target_rect, reference_rects, anchors, snap_distance
                    )
                )
            return candidates

        candidates_x = axis_candidates(Axis.X, target_anchors_x)
        candidates_y = axis_candidates(Axis.Y, target_anchors_y)
        x_candidate = select_best_candidate(candidates_x, target_rect, snap_distance)
        y_candidate = select_best_candidate(candidates_y, target_rect, snap_distance)

        dx = x_candidate.offset if x_candidate is not None else 0.0
        dy = y_candidate.offset if y_candidate is not None else 0.0
        snapped_rect = target_rect.translate(Point(dx, dy))

        guides: list[SnapGuide] = []
        for winner, other in ((x_candidate, y_candidate), (y_candidate, x_candidate)):
            if winner is None:
                continue
            guides.extend(build_guides_for_candidate(winner, snapped_rect, other))
            if is_gap_candidate(winner):
                guides.extend(
                    build_associated_gap_guides(
                        winner, snapped_rect, reference_rects, snap_distance
                    )
                )

        logger.debug(
            f"Snap: {len(candidates_x)} x / {len(candidates_y)} y candidates, "
            f"dx={dx:.4f} dy={dy:.4f}"
        )
        return SnapResult(dx=dx, dy=dy, guides=tuple(dedupe_guides(guides)))


object_snap_service = ObjectSnapService()


def snap_move(
    target_rect: Rect,
    reference_elements: Sequence[Element],
    snap_distance: float,
    target_elements: Sequence[Element] | None = None,
    target_offset: Point | None = None,
    enable_point_snaps: bool = True,
    enable_gap_snaps: bool = True,
) -> SnapResult:
    """Convenience function for ``ObjectSnapService.snap_move``."""
    return object_snap_service.snap_move(
        target_rect,
        reference_elements,
        snap_distance,
        target_elements=target_elements,
        target_offset=target_offset,
        enable_point_snaps=enable_point_snaps,
        enable_gap_snaps=enable_gap_snaps,
    )


def snap_resize(
    target_rect: Rect,
    reference_elements: Sequence[Element],
    snap_distance: float,
    target_anchors_x: Sequence[AxisAnchor],
    target_anchors_y: Sequence[AxisAnchor],
    enable_point_snaps: bool = True,
) -> SnapResult:
    """Convenience function for ``ObjectSnapService.snap_resize``."""
    return object_snap_service.snap_resize(
        target_rect,
        reference_elements,
        snap_distance,
        target_anchors_x,
        target_anchors_y,
        enable_point_snaps=enable_point_snaps,
    )


def snap_rect(
    target_rect: Rect,
    reference_elements: Sequence[Element],
    snap_distance: float,
    target_anchors_x: Sequence[AxisAnchor],
    target_anchors_y: Sequence[AxisAnchor],
    target_elements: Sequence[Element] | None = None,
    target_offset: Point | None = None,
    enable_point_snaps: bool = True,
    enable_gap_snaps: bool = True,
) -> SnapResult:
    """Convenience function for ``ObjectSnapService.snap_rect``."""
    return object_snap_service.snap_rect(
        target_rect,
        reference_elements,
        snap_distance,
        target_anchors_x,
        target_anchors_y,
        target_elements=target_elements,
        target_offset=target_offset,
        enable_point_snaps=enable_point_snaps,
        enable_gap_snaps=enable_gap_snaps,
    )
