"""Candidate scoring and per-axis selection.

Each candidate gets a strength in [0, 1]:

- Point snaps weigh distance (45%), perpendicular proximity of the two
  elements (40%) and anchor pairing (15%). Center-to-center beats
  edge-to-edge, which beats mixed pairings.
- Gap snaps weigh distance (70%), how often the gap size repeats (20%) and
  center-vs-side kind (10%), then get scaled by 0.9 so that point snaps win
  when both are equally good.

Selection keeps a running best and only replaces it when the challenger is
decisively better, which keeps the chosen snap stable while dragging.
"""

from collections.abc import Iterable

from whiteboard.scene.schema import AxisAnchor, Rect
from whiteboard.snapping.candidates import (
    Candidate,
    GapCenterCandidate,
    PointCandidate,
    SnapKind,
)
from whiteboard.snapping.config import (
    EPSILON,
    GAP_CENTER_KIND_STRENGTH,
    GAP_DISTANCE_WEIGHT,
    GAP_FREQUENCY_WEIGHT,
    GAP_KIND_WEIGHT,
    GAP_SIDE_KIND_STRENGTH,
    GAP_STRENGTH_SCALE,
    MAX_ANCHOR_PRIORITY,
    MAX_POINT_PAIR_PRIORITY,
    PERPENDICULAR_SIZE_RANGE_FACTOR,
    PERPENDICULAR_SNAP_RANGE_FACTOR,
    POINT_ANCHOR_WEIGHT,
    POINT_DISTANCE_WEIGHT,
    POINT_PERPENDICULAR_WEIGHT,
    PRIORITY_DISTANCE_SLACK_FACTOR,
    PRIORITY_DISTANCE_SLACK_MAX,
    STRENGTH_SLACK,
)
from whiteboard.snapping.points import SnapPointKind


def clamp01(value: float) -> float:
    if value <= 0:
        return 0.0
    if value >= 1:
        return 1.0
    return value


def is_exact(offset: float) -> bool:
    return abs(offset) <= EPSILON


def distance_slack(snap_distance: float) -> float:
    """Distance difference below which two candidates count as equally close."""
    if snap_distance <= 0:
        return 0.0
    return min(PRIORITY_DISTANCE_SLACK_MAX, snap_distance * PRIORITY_DISTANCE_SLACK_FACTOR)


def distance_strength(distance: float, snap_distance: float) -> float:
    """1.0 at zero distance, falling linearly to 0.0 at ``snap_distance``."""
    if snap_distance <= 0:
        return 0.0
    return 1.0 - min(1.0, distance / snap_distance)


# ============================================================================
# Priorities (lower is better)
# ============================================================================


def anchor_priority(target: AxisAnchor, reference: AxisAnchor) -> int:
    if target is AxisAnchor.CENTER and reference is AxisAnchor.CENTER:
        return 0
    if target is reference:
        return 1
    if target is AxisAnchor.CENTER or reference is AxisAnchor.CENTER:
        return 2
    return 3


def point_pair_priority(target: SnapPointKind, reference: SnapPointKind) -> int:
    if target is SnapPointKind.CENTER and reference is SnapPointKind.CENTER:
        return 0
    if target is SnapPointKind.CENTER or reference is SnapPointKind.CENTER:
        return 1
    if target is SnapPointKind.EDGE and reference is SnapPointKind.EDGE:
        return 2
    if target is SnapPointKind.EDGE or reference is SnapPointKind.EDGE:
        return 3
    return 4


def point_priority(candidate: PointCandidate) -> int:
    """Point-pair priority when known, otherwise the rect anchor priority."""
    if candidate.is_point_pair:
        return point_pair_priority(candidate.target_point_kind, candidate.reference_point_kind)
    return anchor_priority(candidate.target_anchor, candidate.reference_anchor)


# ============================================================================
# Strength
# ============================================================================


def perpendicular_range(
    target_rect: Rect, reference_rect: Rect, candidate: PointCandidate, snap_distance: float
) -> float:
    perp = candidate.axis.perpendicular
    size_range = (
        max(target_rect.axis_size(perp), reference_rect.axis_size(perp))
        * PERPENDICULAR_SIZE_RANGE_FACTOR
    )
    snap_range = snap_distance * PERPENDICULAR_SNAP_RANGE_FACTOR
    return max(size_range, snap_range, snap_distance)


def perpendicular_strength(
    candidate: PointCandidate, target_rect: Rect, snap_distance: float
) -> float:
    """How close the two elements are on the cross axis (1.0 = overlapping)."""
    range_ = perpendicular_range(
        target_rect, candidate.reference_rect, candidate, snap_distance
    )
    if range_ <= 0:
        return 0.0
    return 1.0 - min(1.0, candidate.perpendicular_distance / range_)


def point_alignment_strength(candidate: PointCandidate) -> float:
    if candidate.is_point_pair:
        priority = point_pair_priority(
            candidate.target_point_kind, candidate.reference_point_kind
        )
        return 1.0 - priority / MAX_POINT_PAIR_PRIORITY
    priority = anchor_priority(candidate.target_anchor, candidate.reference_anchor)
    return 1.0 - priority / MAX_ANCHOR_PRIORITY


def gap_frequency_strength(gap_frequency: int) -> float:
    """Approaches 1.0 as the same gap size repeats."""
    if gap_frequency <= 0:
        return 0.0
    return 1.0 - 1.0 / (gap_frequency + 1)


def gap_strength_score(distance_score: float, gap_frequency: int, is_center: bool) -> float:
    kind_strength = GAP_CENTER_KIND_STRENGTH if is_center else GAP_SIDE_KIND_STRENGTH
    return (
        distance_score * GAP_DISTANCE_WEIGHT
        + gap_frequency_strength(gap_frequency) * GAP_FREQUENCY_WEIGHT
        + kind_strength * GAP_KIND_WEIGHT
    )


def candidate_strength(candidate: Candidate, target_rect: Rect, snap_distance: float) -> float:
    """Strength score in [0, 1] for a candidate.

    Args:
        candidate: Candidate to score.
        target_rect: Bounds of the target before snapping.
        snap_distance: Snap distance of the current call.

    Returns:
        The weighted, clamped strength.
    """
    if snap_distance <= 0:
        return 0.0
    distance_score = distance_strength(candidate.distance, snap_distance)
    if isinstance(candidate, PointCandidate):
        return clamp01(
            distance_score * POINT_DISTANCE_WEIGHT
            + perpendicular_strength(candidate, target_rect, snap_distance)
            * POINT_PERPENDICULAR_WEIGHT
            + point_alignment_strength(candidate) * POINT_ANCHOR_WEIGHT
        )
    score = gap_strength_score(
        distance_score,
        candidate.gap_frequency,
        is_center=isinstance(candidate, GapCenterCandidate),
    )
    return clamp01(score * GAP_STRENGTH_SCALE)


# ============================================================================
# Selection
# ============================================================================


def is_candidate_better(
    candidate: Candidate,
    best: Candidate,
    candidate_strength_: float,
    best_strength: float,
    slack: float,
) -> bool:
    """Whether ``candidate`` should replace the current ``best``.

    Rules, first decisive one wins: clearly higher strength, exactness,
    clearly smaller distance, point over gap, then kind-specific
    tie-breaks, then smaller distance. Ties keep the incumbent.
    """
    strength_delta = candidate_strength_ - best_strength
    if abs(strength_delta) > STRENGTH_SLACK:
        return strength_delta > 0

    candidate_exact = is_exact(candidate.offset)
    if candidate_exact != is_exact(best.offset):
        return candidate_exact

    distance_delta = candidate.distance - best.distance
    if abs(distance_delta) > slack:
        return distance_delta < 0

    candidate_is_point = candidate.kind is SnapKind.POINT
    best_is_point = best.kind is SnapKind.POINT
    if candidate_is_point != best_is_point:
        return candidate_is_point

    if candidate_is_point:
        candidate_priority = point_priority(candidate)
        best_priority = point_priority(best)
        if candidate_priority != best_priority:
            return candidate_priority < best_priority

        candidate_anchor = anchor_priority(candidate.target_anchor, candidate.reference_anchor)
        best_anchor = anchor_priority(best.target_anchor, best.reference_anchor)
        if candidate_anchor != best_anchor:
            return candidate_anchor < best_anchor

        perp_delta = candidate.perpendicular_distance - best.perpendicular_distance
        if abs(perp_delta) > EPSILON:
            return perp_delta < 0
    else:
        if candidate.gap_frequency != best.gap_frequency:
            return candidate.gap_frequency > best.gap_frequency
        candidate_center = candidate.kind is SnapKind.GAP_CENTER
        if candidate_center != (best.kind is SnapKind.GAP_CENTER):
            return candidate_center

    if abs(distance_delta) > EPSILON:
        return distance_delta < 0
    return False


def select_best_candidate(
    candidates: Iterable[Candidate], target_rect: Rect, snap_distance: float
) -> Candidate | None:
    """Pick the winning candidate for one axis, or None when there is none."""
    best: Candidate | None = None
    best_strength = -1.0
    slack = distance_slack(snap_distance)
    for candidate in candidates:
        strength = candidate_strength(candidate, target_rect, snap_distance)
        if best is None or is_candidate_better(
            candidate, best, strength, best_strength, slack
        ):
            best = candidate
            best_strength = strength
    return best
