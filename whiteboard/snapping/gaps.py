"""Gap (equal spacing) candidates.

Gap snapping looks at reference rects in the same row (for X) or column
(for Y) as the target and proposes either centering the target inside an
existing gap or placing it one known gap size away from its nearest
neighbor. Gap sizes that repeat score higher.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from whiteboard.scene.schema import Axis, AxisAnchor, Rect
from whiteboard.snapping.candidates import (
    GapCandidate,
    GapCenterCandidate,
    GapSide,
    GapSideCandidate,
)
from whiteboard.snapping.config import EPSILON


class NeighborDirection(str, Enum):
    """Direction to search for the nearest reference rect."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class GapSegment:
    """Empty space between two adjacent reference rects."""

    before: Rect
    after: Rect
    gap: float

    def center(self, axis: Axis) -> float:
        return (self.before.axis_max(axis) + self.after.axis_min(axis)) / 2


@dataclass(frozen=True)
class GapSizeBucket:
    """Gap sizes equal within EPSILON, with how often they occur."""

    size: float
    count: int


def overlaps_perpendicular(a: Rect, b: Rect, axis: Axis) -> bool:
    """Whether the rects share any extent on the axis perpendicular to ``axis``."""
    perp = axis.perpendicular
    return a.axis_max(perp) >= b.axis_min(perp) and a.axis_min(perp) <= b.axis_max(perp)


def resolve_gap_reference_rects(
    axis: Axis, target_rect: Rect, reference_rects: Sequence[Rect]
) -> list[Rect]:
    """Reference rects in the target's row/column, sorted along ``axis``."""
    filtered = [r for r in reference_rects if overlaps_perpendicular(r, target_rect, axis)]
    filtered.sort(key=lambda r: r.axis_min(axis))
    return filtered


def build_gap_segments(axis: Axis, sorted_rects: Sequence[Rect]) -> list[GapSegment]:
    """Positive gaps between consecutive sorted rects."""
    segments = []
    for before, after in zip(sorted_rects, sorted_rects[1:]):
        gap = after.axis_min(axis) - before.axis_max(axis)
        if gap > 0:
            segments.append(GapSegment(before=before, after=after, gap=gap))
    return segments


def gap_size_buckets(segments: Sequence[GapSegment]) -> list[GapSizeBucket]:
    """Group segment sizes within EPSILON, keeping first-seen order."""
    buckets: list[GapSizeBucket] = []
    for segment in segments:
        for i, bucket in enumerate(buckets):
            if abs(bucket.size - segment.gap) <= EPSILON:
                buckets[i] = GapSizeBucket(size=bucket.size, count=bucket.count + 1)
                break
        else:
            buckets.append(GapSizeBucket(size=segment.gap, count=1))
    return buckets


def gap_frequency_for(buckets: Sequence[GapSizeBucket], gap: float) -> int:
    for bucket in buckets:
        if abs(bucket.size - gap) <= EPSILON:
            return bucket.count
    return 0


def closest_neighbor(
    axis: Axis,
    target_rect: Rect,
    reference_rects: Sequence[Rect],
    direction: NeighborDirection,
) -> Rect | None:
    """Nearest reference rect entirely before or after the target on ``axis``."""
    best: Rect | None = None
    if direction is NeighborDirection.BEFORE:
        target_min = target_rect.axis_min(axis)
        best_max = float("-inf")
        for rect in reference_rects:
            rect_max = rect.axis_max(axis)
            if rect_max <= target_min + EPSILON and rect_max > best_max:
                best_max = rect_max
                best = rect
    else:
        target_max = target_rect.axis_max(axis)
        best_min = float("inf")
        for rect in reference_rects:
            rect_min = rect.axis_min(axis)
            if rect_min >= target_max - EPSILON and rect_min < best_min:
                best_min = rect_min
                best = rect
    return best


def build_gap_candidates(
    axis: Axis,
    target_rect: Rect,
    reference_rects: Sequence[Rect],
    target_anchors: Sequence[AxisAnchor],
    snap_distance: float,
) -> list[GapCandidate]:
    """Build gap snap candidates for one axis.

    Args:
        axis: Axis being snapped.
        target_rect: Bounds of what is being moved.
        reference_rects: World bounds of the reference elements.
        target_anchors: Target anchors allowed to snap on this axis.
        snap_distance: Maximum |offset| accepted.

    Returns:
        Gap-center candidates (one per gap within reach, when the center
        anchor is allowed) followed by gap-side candidates (at most one per
        gap size and neighbor).
    """
    allow_start = AxisAnchor.START in target_anchors
    allow_center = AxisAnchor.CENTER in target_anchors
    allow_end = AxisAnchor.END in target_anchors
    if snap_distance <= 0 or not (allow_start or allow_center or allow_end):
        return []

    filtered = resolve_gap_reference_rects(axis, target_rect, reference_rects)
    if len(filtered) < 2:
        return []
    segments = build_gap_segments(axis, filtered)
    if not segments:
        return []
    buckets = gap_size_buckets(segments)

    candidates: list[GapCandidate] = []
    if allow_center:
        target_center = target_rect.axis_center(axis)
        for segment in segments:
            offset = segment.center(axis) - target_center
            if abs(offset) <= snap_distance:
                candidates.append(
                    GapCenterCandidate(
                        axis=axis,
                        offset=offset,
                        gap_before_rect=segment.before,
                        gap_after_rect=segment.after,
                        gap_size=segment.gap,
                        gap_frequency=gap_frequency_for(buckets, segment.gap),
                    )
                )

    target_size = target_rect.axis_size(axis)
    before = closest_neighbor(axis, target_rect, filtered, NeighborDirection.BEFORE)
    after = closest_neighbor(axis, target_rect, filtered, NeighborDirection.AFTER)
    for bucket in buckets:
        if before is not None:
            desired_start = before.axis_max(axis) + bucket.size
            candidate = _gap_side_candidate(
                axis,
                target_rect,
                (allow_start, allow_center, allow_end),
                desired_start,
                desired_start + target_size,
                snap_distance,
                before,
                bucket,
                GapSide.AFTER,
            )
            if candidate is not None:
                candidates.append(candidate)

        if after is not None:
            desired_end = after.axis_min(axis) - bucket.size
            candidate = _gap_side_candidate(
                axis,
                target_rect,
                (allow_start, allow_center, allow_end),
                desired_end - target_size,
                desired_end,
                snap_distance,
                after,
                bucket,
                GapSide.BEFORE,
            )
            if candidate is not None:
                candidates.append(candidate)

    return candidates


def _gap_side_candidate(
    axis: Axis,
    target_rect: Rect,
    allowed: tuple[bool, bool, bool],
    desired_start: float,
    desired_end: float,
    snap_distance: float,
    reference_rect: Rect,
    bucket: GapSizeBucket,
    gap_side: GapSide,
) -> GapSideCandidate | None:
    """First of start, end, center placement that lies within reach."""
    allow_start, allow_center, allow_end = allowed
    offsets = []
    if allow_start:
        offsets.append(desired_start - target_rect.axis_min(axis))
    if allow_end:
        offsets.append(desired_end - target_rect.axis_max(axis))
    if allow_center:
        offsets.append((desired_start + desired_end) / 2 - target_rect.axis_center(axis))

    for offset in offsets:
        if abs(offset) <= snap_distance:
            return GapSideCandidate(
                axis=axis,
                offset=offset,
                reference_rect=reference_rect,
                gap_size=bucket.size,
                gap_frequency=bucket.count,
                gap_side=gap_side,
            )
    return None
