"""Object snapping module - align moving elements to their neighbors."""

from whiteboard.snapping.candidates import (
    Candidate,
    GapCenterCandidate,
    GapSide,
    GapSideCandidate,
    PointCandidate,
    SnapKind,
    build_point_candidates,
)
from whiteboard.snapping.config import SnapConfig, SnapSettings, get_snap_settings
from whiteboard.snapping.engine import (
    ObjectSnapService,
    SnapResult,
    object_snap_service,
    snap_move,
    snap_rect,
    snap_resize,
)
from whiteboard.snapping.gaps import build_gap_candidates
from whiteboard.snapping.guides import GuideAxis, GuideKind, SnapGuide
from whiteboard.snapping.modes import (
    ResizeHandle,
    SnappingMode,
    apply_resize_snap,
    resize_anchors,
    resolve_effective_snapping_mode,
    resolve_effective_snapping_mode_for_config,
    resolve_persistent_snapping_mode,
    resolve_reference_elements,
    snap_move_with_config,
    snap_resize_with_config,
)
from whiteboard.snapping.points import SnapPoint, SnapPointKind, build_element_snap_points
from whiteboard.snapping.scoring import candidate_strength, select_best_candidate

__all__ = [
    # Engine
    "ObjectSnapService",
    "SnapResult",
    "object_snap_service",
    "snap_move",
    "snap_rect",
    "snap_resize",
    # Guides
    "GuideAxis",
    "GuideKind",
    "SnapGuide",
    # Candidates
    "Candidate",
    "GapCenterCandidate",
    "GapSide",
    "GapSideCandidate",
    "PointCandidate",
    "SnapKind",
    "build_gap_candidates",
    "build_point_candidates",
    "candidate_strength",
    "select_best_candidate",
    # Snap points
    "SnapPoint",
    "SnapPointKind",
    "build_element_snap_points",
    # Config
    "SnapConfig",
    "SnapSettings",
    "get_snap_settings",
    # Modes
    "ResizeHandle",
    "SnappingMode",
    "apply_resize_snap",
    "resize_anchors",
    "resolve_effective_snapping_mode",
    "resolve_effective_snapping_mode_for_config",
    "resolve_persistent_snapping_mode",
    "resolve_reference_elements",
    "snap_move_with_config",
    "snap_resize_with_config",
]
