"""Snap candidates and the point candidate builder.

A candidate is a proposed alignment on one axis: the offset that would
align the target with something, plus whatever the scorer and the guide
builder need to know about it. Candidates only live for one snap call.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from whiteboard.scene.schema import ALL_ANCHORS, Axis, AxisAnchor, Point, Rect
from whiteboard.snapping.points import SnapPoint, SnapPointKind


class SnapKind(str, Enum):
    """Type of snap: point alignment or gap alignment."""

    POINT = "point"
    GAP_CENTER = "gap_center"
    GAP_SIDE = "gap_side"


class GapSide(str, Enum):
    """Which side of the reference element the matched gap lies on."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class PointCandidate:
    """Align a target anchor (or point) with a reference anchor (or point)."""

    kind: ClassVar[SnapKind] = SnapKind.POINT

    axis: Axis
    offset: float
    reference_rect: Rect
    target_anchor: AxisAnchor
    reference_anchor: AxisAnchor
    perpendicular_distance: float = 0.0
    target_point: Point | None = None
    reference_point: Point | None = None
    target_point_kind: SnapPointKind | None = None
    reference_point_kind: SnapPointKind | None = None

    @property
    def distance(self) -> float:
        return abs(self.offset)

    @property
    def is_point_pair(self) -> bool:
        """Whether this candidate came from explicit snap points."""
        return self.target_point_kind is not None and self.reference_point_kind is not None


@dataclass(frozen=True)
class GapCenterCandidate:
    """Center the target inside the gap between two reference rects."""

    kind: ClassVar[SnapKind] = SnapKind.GAP_CENTER

    axis: Axis
    offset: float
    gap_before_rect: Rect
    gap_after_rect: Rect
    gap_size: float
    gap_frequency: int

    @property
    def distance(self) -> float:
        return abs(self.offset)


@dataclass(frozen=True)
class GapSideCandidate:
    """Place the target one known gap away from a neighboring rect."""

    kind: ClassVar[SnapKind] = SnapKind.GAP_SIDE

    axis: Axis
    offset: float
    reference_rect: Rect
    gap_size: float
    gap_frequency: int
    gap_side: GapSide

    @property
    def distance(self) -> float:
        return abs(self.offset)


GapCandidate = Union[GapCenterCandidate, GapSideCandidate]
Candidate = Union[PointCandidate, GapCenterCandidate, GapSideCandidate]


def is_gap_candidate(candidate: Candidate) -> bool:
    return candidate.kind is not SnapKind.POINT


def rect_perpendicular_distance(a: Rect, b: Rect, axis: Axis) -> float:
    """Gap between two rects on the axis perpendicular to ``axis`` (0 if they overlap)."""
    perp = axis.perpendicular
    if a.axis_max(perp) < b.axis_min(perp):
        return b.axis_min(perp) - a.axis_max(perp)
    if b.axis_max(perp) < a.axis_min(perp):
        return a.axis_min(perp) - b.axis_max(perp)
    return 0.0


def build_point_candidates(
    axis: Axis,
    target_rect: Rect,
    reference_rects: Sequence[Rect],
    target_anchors: Sequence[AxisAnchor],
    snap_distance: float,
    target_points: Sequence[SnapPoint] | None = None,
    reference_points: Sequence[SnapPoint] | None = None,
) -> list[PointCandidate]:
    """Build point snap candidates for one axis.

    When both point sets are non-empty, every allowed target point is paired
    with every reference point. Otherwise each allowed target anchor is
    compared with the three anchors of every reference rect.

    Args:
        axis: Axis being snapped.
        target_rect: Bounds of what is being moved or resized.
        reference_rects: World bounds of the reference elements.
        target_anchors: Target anchors allowed to snap on this axis.
        snap_distance: Maximum |offset| accepted.
        target_points: Snap points of the moving elements, if known.
        reference_points: Snap points of the reference elements.

    Returns:
        All candidates within ``snap_distance``.
    """
    if snap_distance <= 0 or not target_anchors:
        return []

    if target_points and reference_points:
        return _build_point_candidates_from_points(
            axis, target_points, reference_points, target_anchors, snap_distance
        )

    candidates: list[PointCandidate] = []
    for rect in reference_rects:
        perpendicular_distance = rect_perpendicular_distance(target_rect, rect, axis)
        for target_anchor in target_anchors:
            target_pos = target_rect.anchor_position(axis, target_anchor)
            for reference_anchor in ALL_ANCHORS:
                offset = rect.anchor_position(axis, reference_anchor) - target_pos
                if abs(offset) <= snap_distance:
                    candidates.append(
                        PointCandidate(
                            axis=axis,
                            offset=offset,
                            reference_rect=rect,
                            target_anchor=target_anchor,
                            reference_anchor=reference_anchor,
                            perpendicular_distance=perpendicular_distance,
                        )
                    )
    return candidates


def _build_point_candidates_from_points(
    axis: Axis,
    target_points: Sequence[SnapPoint],
    reference_points: Sequence[SnapPoint],
    target_anchors: Sequence[AxisAnchor],
    snap_distance: float,
) -> list[PointCandidate]:
    allowed = set(target_anchors)
    perp = axis.perpendicular
    candidates: list[PointCandidate] = []
    for target_point in target_points:
        target_anchor = target_point.anchor(axis)
        if target_anchor not in allowed:
            continue
        target_kind = target_point.kind
        target_pos = target_point.position(axis)
        for reference_point in reference_points:
            offset = reference_point.position(axis) - target_pos
            if abs(offset) > snap_distance:
                continue
            candidates.append(
                PointCandidate(
                    axis=axis,
                    offset=offset,
                    reference_rect=reference_point.rect,
                    target_anchor=target_anchor,
                    reference_anchor=reference_point.anchor(axis),
                    perpendicular_distance=abs(
                        target_point.position(perp) - reference_point.position(perp)
                    ),
                    target_point=target_point.point,
                    reference_point=reference_point.point,
                    target_point_kind=target_kind,
                    reference_point_kind=reference_point.kind,
                )
            )
    return candidates
