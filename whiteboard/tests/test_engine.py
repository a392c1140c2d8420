"""Tests for the object snap engine."""

import logging
import math

import pytest

from whiteboard.scene.schema import ALL_ANCHORS, AxisAnchor, Point, Rect
from whiteboard.snapping import (
    ObjectSnapService,
    SnapResult,
    object_snap_service,
    snap_move,
    snap_rect,
    snap_resize,
)
from whiteboard.snapping.guides import GuideAxis, GuideKind, SnapGuide


@pytest.fixture
def service() -> ObjectSnapService:
    return ObjectSnapService()


class TestPointSnapping:
    """Tests for point (anchor) snapping through the engine."""

    def test_edge_to_edge(self, service: ObjectSnapService, make_element) -> None:
        """Test the target's right edge snaps to the reference's left edge."""
        result = service.snap_rect(
            Rect(0, 0, 10, 10),
            [make_element(15, 0, 25, 10)],
            6,
            target_anchors_x=[AxisAnchor.END],
            target_anchors_y=[],
        )
        assert result.dx == 5
        assert result.dy == 0
        assert result.guides == (
            SnapGuide(
                kind=GuideKind.POINT,
                axis=GuideAxis.VERTICAL,
                start=Point(15, 0),
                end=Point(15, 10),
                markers=(Point(15, 5),),
            ),
        )

    def test_out_of_range(self, service: ObjectSnapService, make_element) -> None:
        """Test nothing snaps when the reference is too far."""
        result = service.snap_rect(
            Rect(0, 0, 10, 10),
            [make_element(15, 0, 25, 10)],
            4,
            target_anchors_x=[AxisAnchor.END],
            target_anchors_y=[],
        )
        assert result == SnapResult()
        assert not result.has_snap

    def test_snapping_again_is_stable(self, service: ObjectSnapService, make_element) -> None:
        """Test an already snapped target stays put."""
        reference = [make_element(15, 0, 25, 10)]
        first = service.snap_move(Rect(0, 0, 10, 10), reference, 6)
        snapped = Rect(0, 0, 10, 10).translate(first.offset)
        second = service.snap_move(snapped, reference, 6)
        assert first.dx == 5
        assert second.dx == 0
        assert second.dy == 0
        assert second.guides
        assert all(g.kind is GuideKind.POINT for g in second.guides)

    def test_axes_are_independent(self, service: ObjectSnapService, make_element) -> None:
        """Test the x offset does not depend on the target's y position."""
        reference = [make_element(15, 0, 25, 10)]
        level = service.snap_move(Rect(0, 0, 10, 10), reference, 6)
        shifted = service.snap_move(Rect(0, 3, 10, 13), reference, 6)
        assert level.dx == shifted.dx == 5

    def test_rotated_reference_uses_world_bounds(
        self, service: ObjectSnapService, make_element
    ) -> None:
        """Test a rotated reference snaps by its world bounding box."""
        reference = [make_element(0, 0, 20, 10, rotation=math.pi / 2)]
        result = service.snap_move(Rect(17, 0, 27, 10), reference, 3)
        assert result.dx == pytest.approx(-2)
        assert result.dy == pytest.approx(0)

    def test_pending_offset_applied_to_target_points(
        self, service: ObjectSnapService, make_element
    ) -> None:
        """Test point-to-point snapping sees the uncommitted drag offset."""
        result = service.snap_move(
            Rect(4, 0, 14, 10),
            [make_element(15, 0, 25, 10)],
            2,
            target_elements=[make_element(0, 0, 10, 10)],
            target_offset=Point(4, 0),
            enable_gap_snaps=False,
        )
        assert result.dx == 1
        assert result.dy == 0
        assert any(
            g.kind is GuideKind.POINT and g.axis is GuideAxis.VERTICAL and g.start.x == 15
            for g in result.guides
        )


class TestGapSnapping:
    """Tests for gap snapping through the engine."""

    def test_center_in_gap(self, service: ObjectSnapService, make_element) -> None:
        """Test the target centers between two references with split guides."""
        result = service.snap_rect(
            Rect(12, 0, 22, 10),
            [make_element(0, 0, 10, 10), make_element(30, 0, 40, 10)],
            5,
            target_anchors_x=[AxisAnchor.CENTER],
            target_anchors_y=[],
            enable_point_snaps=False,
        )
        assert result.dx == 3
        assert [(g.start, g.end, g.label) for g in result.guides] == [
            (Point(10, 5), Point(15, 5), 20),
            (Point(25, 5), Point(30, 5), 20),
        ]

    def test_move_centers_in_gap(self, service: ObjectSnapService, make_element) -> None:
        """Test a plain move finds the same gap center."""
        result = service.snap_move(
            Rect(12, 0, 22, 10),
            [make_element(0, 0, 10, 10), make_element(30, 0, 40, 10)],
            5,
            enable_point_snaps=False,
        )
        assert (result.dx, result.dy) == (3, 0)

    def test_already_centered(self, service: ObjectSnapService, make_element) -> None:
        """Test an exact gap center reports guides without moving."""
        result = service.snap_move(
            Rect(15, 0, 25, 10),
            [make_element(0, 0, 10, 10), make_element(30, 0, 40, 10)],
            5,
            enable_point_snaps=False,
        )
        assert result.dx == 0
        assert not result.has_snap
        assert result.guides

    def test_side_gap_with_associated_guides(
        self, service: ObjectSnapService, make_element, row_of_four: list[Rect]
    ) -> None:
        """Test matching a repeated gap also marks the other equal gaps."""
        references = [make_element(r.min_x, r.min_y, r.max_x, r.max_y) for r in row_of_four]
        result = service.snap_move(
            Rect(78, 0, 88, 10), references, 5, enable_point_snaps=False
        )
        assert result.dx == 2
        assert all(g.kind is GuideKind.GAP and g.label == 10 for g in result.guides)
        assert [(g.start.x, g.end.x) for g in result.guides] == [
            (70, 80),
            (50, 60),
            (30, 40),
            (10, 20),
        ]

    def test_associated_guides_capped(self, service: ObjectSnapService, make_element) -> None:
        """Test at most four associated guides accompany the main one."""
        references = [make_element(x, 0, x + 10, 10) for x in range(0, 120, 20)]
        result = service.snap_move(
            Rect(118, 0, 128, 10), references, 5, enable_point_snaps=False
        )
        assert result.dx == 2
        assert len(result.guides) == 5

    def test_gap_snaps_disabled(self, service: ObjectSnapService, make_element) -> None:
        """Test no gap snap or gap guide appears when gaps are switched off."""
        references = [make_element(0, 0, 10, 10), make_element(30, 0, 40, 10)]
        target = Rect(13, 0, 23, 10)

        with_gaps = service.snap_move(target, references, 5)
        assert with_gaps.dx == 2
        assert any(g.kind is GuideKind.GAP for g in with_gaps.guides)

        without_gaps = service.snap_move(target, references, 5, enable_gap_snaps=False)
        assert without_gaps.dx == -3
        assert without_gaps.guides
        assert not any(g.kind is GuideKind.GAP for g in without_gaps.guides)

    def test_resize_never_gap_snaps(self, service: ObjectSnapService, make_element) -> None:
        """Test resizing ignores gaps."""
        result = service.snap_resize(
            Rect(12, 0, 22, 10),
            [make_element(0, 0, 10, 10), make_element(30, 0, 40, 10)],
            5,
            target_anchors_x=[AxisAnchor.CENTER],
            target_anchors_y=[],
            enable_point_snaps=False,
        )
        assert result == SnapResult()


class TestResizeSnapping:
    """Tests for resize snapping."""

    def test_only_dragged_edge_snaps(self, service: ObjectSnapService, make_element) -> None:
        """Test anchors that are not dragged never snap."""
        reference = [make_element(3, 0, 30, 10)]
        right = service.snap_resize(Rect(0, 0, 10, 10), reference, 6, [AxisAnchor.END], [])
        left = service.snap_resize(Rect(0, 0, 10, 10), reference, 6, [AxisAnchor.START], [])
        assert right.dx == 0
        assert left.dx == 3


class TestDegenerateInput:
    """Tests for inputs that produce an empty result."""

    @pytest.mark.parametrize("snap_distance", [0, -5, math.inf, math.nan])
    def test_bad_snap_distance(
        self, service: ObjectSnapService, make_element, snap_distance: float
    ) -> None:
        """Test non-positive or non-finite distances disable snapping."""
        reference = [make_element(12, 0, 22, 10)]
        result = service.snap_move(Rect(0, 0, 10, 10), reference, snap_distance)
        assert result == SnapResult()

    def test_non_finite_target(self, service: ObjectSnapService, make_element) -> None:
        """Test a non-finite target is not snapped."""
        result = service.snap_move(Rect(math.nan, 0, 10, 10), [make_element(12, 0, 22, 10)], 5)
        assert result == SnapResult()

    def test_no_references(self, service: ObjectSnapService) -> None:
        """Test an empty reference list gives an empty result."""
        assert service.snap_move(Rect(0, 0, 10, 10), [], 5) == SnapResult()

    def test_non_finite_references_ignored(
        self, service: ObjectSnapService, make_element
    ) -> None:
        """Test references with non-finite bounds are skipped."""
        unbounded = make_element(12, 0, math.inf, 10)
        only_bad = service.snap_move(Rect(0, 0, 10, 10), [unbounded], 5)
        assert only_bad == SnapResult()
        mixed = service.snap_rect(
            Rect(0, 0, 10, 10),
            [make_element(12, 0, math.inf, 10), make_element(13, 0, 23, 10)],
            5,
            target_anchors_x=[AxisAnchor.END],
            target_anchors_y=[],
        )
        assert mixed.dx == 3

    def test_all_features_disabled(self, service: ObjectSnapService, make_element) -> None:
        """Test disabling both snap families gives an empty result."""
        result = service.snap_move(
            Rect(0, 0, 10, 10),
            [make_element(12, 0, 22, 10)],
            5,
            enable_point_snaps=False,
            enable_gap_snaps=False,
        )
        assert result == SnapResult()

    def test_no_anchors(self, service: ObjectSnapService, make_element) -> None:
        """Test empty anchor sets on both axes give an empty result."""
        reference = [make_element(12, 0, 22, 10)]
        result = service.snap_rect(Rect(0, 0, 10, 10), reference, 5, [], [])
        assert result == SnapResult()

    def test_anchor_type_checked(self, service: ObjectSnapService, make_element) -> None:
        """Test anchors must be AxisAnchor members."""
        reference = [make_element(12, 0, 22, 10)]
        with pytest.raises(AssertionError):
            service.snap_rect(Rect(0, 0, 10, 10), reference, 5, ["start"], [])


class TestModuleFunctions:
    """Tests for the module-level convenience functions."""

    def test_match_service(self, make_element) -> None:
        """Test the functions delegate to the shared service."""
        references = [make_element(15, 0, 25, 10), make_element(0, 20, 10, 30)]
        target = Rect(0, 0, 10, 10)
        corner = [AxisAnchor.END]
        assert snap_move(target, references, 6) == object_snap_service.snap_move(
            target, references, 6
        )
        assert snap_resize(target, references, 6, corner, corner) == (
            object_snap_service.snap_resize(target, references, 6, corner, corner)
        )
        assert snap_rect(target, references, 6, ALL_ANCHORS, ALL_ANCHORS) == snap_move(
            target, references, 6
        )

    def test_debug_logging(self, make_element, caplog: pytest.LogCaptureFixture) -> None:
        """Test a debug summary is logged for each snap."""
        with caplog.at_level(logging.DEBUG, logger="whiteboard.snapping.engine"):
            snap_move(Rect(0, 0, 10, 10), [make_element(15, 0, 25, 10)], 6)
        assert "dx=5.0000" in caplog.text
