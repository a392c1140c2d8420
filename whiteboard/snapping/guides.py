"""Snap guide synthesis.

Guides are purely descriptive: line segments, marker points and an
optional gap-size label that the overlay renderer draws while dragging.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from whiteboard.scene.schema import Axis, Point, Rect
from whiteboard.snapping.candidates import (
    Candidate,
    GapCenterCandidate,
    GapSide,
    GapSideCandidate,
    PointCandidate,
)
from whiteboard.snapping.config import EPSILON, MAX_ASSOCIATED_GAP_GUIDES
from whiteboard.snapping.gaps import (
    GapSegment,
    build_gap_segments,
    resolve_gap_reference_rects,
)
from whiteboard.snapping.scoring import distance_slack


class GuideKind(str, Enum):
    """What produced the guide."""

    POINT = "point"
    GAP = "gap"


class GuideAxis(str, Enum):
    """Orientation of the guide line."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class SnapGuide:
    """A guide line with markers and an optional gap-size label."""

    kind: GuideKind
    axis: GuideAxis
    start: Point
    end: Point
    markers: tuple[Point, ...] = field(default_factory=tuple)
    label: float | None = None


def dedupe_guides(guides: Iterable[SnapGuide]) -> list[SnapGuide]:
    """Drop structurally equal guides, keeping first-seen order."""
    return list(dict.fromkeys(guides))


def build_guides_for_candidate(
    candidate: Candidate,
    target_rect: Rect,
    perpendicular_candidate: Candidate | None,
) -> list[SnapGuide]:
    """Guides for the winning candidate of one axis.

    Args:
        candidate: Winning candidate.
        target_rect: Target bounds after both axis offsets were applied.
        perpendicular_candidate: Winner of the other axis, if any.

    Returns:
        One guide, or two for a gap-center snap that leaves room on both
        sides of the target.
    """
    if isinstance(candidate, GapCenterCandidate):
        split = build_split_gap_center_guides(candidate, target_rect)
        if split:
            return split
    if isinstance(candidate, PointCandidate):
        return [build_point_guide(candidate, target_rect, perpendicular_candidate)]
    return [build_gap_guide(candidate, target_rect)]


# ============================================================================
# Point guides
# ============================================================================


def build_point_guide(
    candidate: PointCandidate,
    target_rect: Rect,
    perpendicular_candidate: Candidate | None,
) -> SnapGuide:
    """Line through the snapped position spanning target and reference."""
    axis = candidate.axis
    reference_rect = candidate.reference_rect
    if candidate.reference_point is not None:
        snap_pos = candidate.reference_point.coordinate(axis)
    else:
        snap_pos = reference_rect.anchor_position(axis, candidate.reference_anchor)
    markers = _point_markers(candidate, target_rect, snap_pos, perpendicular_candidate)

    if axis is Axis.X:
        return SnapGuide(
            kind=GuideKind.POINT,
            axis=GuideAxis.VERTICAL,
            start=Point(snap_pos, min(reference_rect.min_y, target_rect.min_y)),
            end=Point(snap_pos, max(reference_rect.max_y, target_rect.max_y)),
            markers=markers,
        )
    return SnapGuide(
        kind=GuideKind.POINT,
        axis=GuideAxis.HORIZONTAL,
        start=Point(min(reference_rect.min_x, target_rect.min_x), snap_pos),
        end=Point(max(reference_rect.max_x, target_rect.max_x), snap_pos),
        markers=markers,
    )


def _point_markers(
    candidate: PointCandidate,
    target_rect: Rect,
    snap_pos: float,
    perpendicular_candidate: Candidate | None,
) -> tuple[Point, ...]:
    axis = candidate.axis
    perp = axis.perpendicular
    perpendicular = (
        perpendicular_candidate
        if perpendicular_candidate is not None and perpendicular_candidate.axis is perp
        else None
    )

    if candidate.target_point is not None and candidate.reference_point is not None:
        target_point = candidate.target_point
        perpendicular_offset = perpendicular.offset if perpendicular is not None else 0.0
        if axis is Axis.X:
            target_marker = Point(
                target_point.x + candidate.offset, target_point.y + perpendicular_offset
            )
        else:
            target_marker = Point(
                target_point.x + perpendicular_offset, target_point.y + candidate.offset
            )
        return _collapse(target_marker, candidate.reference_point)

    reference_rect = candidate.reference_rect
    target_perp = target_rect.axis_center(perp)
    reference_perp = reference_rect.axis_center(perp)
    if isinstance(perpendicular, PointCandidate):
        target_perp = target_rect.anchor_position(perp, perpendicular.target_anchor)
        if perpendicular.reference_rect == reference_rect:
            reference_perp = reference_rect.anchor_position(
                perp, perpendicular.reference_anchor
            )

    if axis is Axis.X:
        return _collapse(Point(snap_pos, target_perp), Point(snap_pos, reference_perp))
    return _collapse(Point(target_perp, snap_pos), Point(reference_perp, snap_pos))


def _collapse(primary: Point, secondary: Point) -> tuple[Point, ...]:
    if primary == secondary:
        return (primary,)
    return (primary, secondary)


# ============================================================================
# Gap guides
# ============================================================================


def gap_bounds(
    candidate: GapCenterCandidate | GapSideCandidate, target_rect: Rect
) -> tuple[float, float]:
    """Start and end of the gap span a gap guide covers."""
    axis = candidate.axis
    if isinstance(candidate, GapCenterCandidate):
        return (
            candidate.gap_before_rect.axis_max(axis),
            candidate.gap_after_rect.axis_min(axis),
        )
    if candidate.gap_side is GapSide.AFTER:
        return candidate.reference_rect.axis_max(axis), target_rect.axis_min(axis)
    return target_rect.axis_max(axis), candidate.reference_rect.axis_min(axis)


def _gap_guide(
    axis: Axis, target_rect: Rect, start: float, end: float, gap_size: float
) -> SnapGuide:
    if axis is Axis.X:
        y = target_rect.center_y
        start_point = Point(start, y)
        end_point = Point(end, y)
        guide_axis = GuideAxis.HORIZONTAL
    else:
        x = target_rect.center_x
        start_point = Point(x, start)
        end_point = Point(x, end)
        guide_axis = GuideAxis.VERTICAL
    return SnapGuide(
        kind=GuideKind.GAP,
        axis=guide_axis,
        start=start_point,
        end=end_point,
        markers=(start_point, end_point),
        label=gap_size,
    )


def build_gap_guide(
    candidate: GapCenterCandidate | GapSideCandidate, target_rect: Rect
) -> SnapGuide:
    """Gap guide across the matched span, at the target's cross-axis center."""
    start, end = gap_bounds(candidate, target_rect)
    return _gap_guide(candidate.axis, target_rect, start, end, candidate.gap_size)


def build_split_gap_center_guides(
    candidate: GapCenterCandidate, target_rect: Rect
) -> list[SnapGuide]:
    """Two guides (before and after the target) when it sits strictly inside the gap.

    Returns an empty list when the target touches either side of the gap.
    """
    axis = candidate.axis
    gap_start = candidate.gap_before_rect.axis_max(axis)
    gap_end = candidate.gap_after_rect.axis_min(axis)
    target_start = target_rect.axis_min(axis)
    target_end = target_rect.axis_max(axis)
    if target_start <= gap_start + EPSILON or target_end >= gap_end - EPSILON:
        return []

    guides = []
    for start, end in ((gap_start, target_start), (target_end, gap_end)):
        if end - start > EPSILON:
            guides.append(_gap_guide(axis, target_rect, start, end, candidate.gap_size))
    return guides if len(guides) == 2 else []


def build_associated_gap_guides(
    candidate: GapCenterCandidate | GapSideCandidate,
    target_rect: Rect,
    reference_rects: Sequence[Rect],
    snap_distance: float,
) -> list[SnapGuide]:
    """Guides for other gaps in the same row/column with the matched size.

    Args:
        candidate: Winning gap candidate.
        target_rect: Target bounds after snapping.
        reference_rects: World bounds of all reference elements.
        snap_distance: Snap distance of the current call.

    Returns:
        Up to MAX_ASSOCIATED_GAP_GUIDES guides, nearest gaps first.
    """
    axis = candidate.axis
    tolerance = max(EPSILON, distance_slack(snap_distance))
    filtered = resolve_gap_reference_rects(axis, target_rect, reference_rects)
    if len(filtered) < 2:
        return []

    matching = [
        segment
        for segment in build_gap_segments(axis, filtered)
        if abs(segment.gap - candidate.gap_size) <= tolerance
        and not _is_candidate_segment(candidate, segment)
    ]
    target_center = target_rect.axis_center(axis)
    matching.sort(key=lambda segment: abs(segment.center(axis) - target_center))

    return [
        _gap_guide(
            axis,
            target_rect,
            segment.before.axis_max(axis),
            segment.after.axis_min(axis),
            candidate.gap_size,
        )
        for segment in matching[:MAX_ASSOCIATED_GAP_GUIDES]
    ]


def _is_candidate_segment(
    candidate: GapCenterCandidate | GapSideCandidate, segment: GapSegment
) -> bool:
    if not isinstance(candidate, GapCenterCandidate):
        return False
    return (
        candidate.gap_before_rect == segment.before
        and candidate.gap_after_rect == segment.after
    )
