"""
Tests for builder.focal.resolver

Test Coverage:
- resolve(): Manual > detection > existing > center precedence
- apply_detection(): Status transitions and failure fallback
- as_focal_point(): Coercion of loose inputs
"""
import pytest

from report_toolkit.builder.focal import apply_detection, as_focal_point, resolve
from report_toolkit.core.models import FocalPoint, ImageEntry, ProcessingStatus


@pytest.fixture
def entry(make_source):
    return ImageEntry.create(make_source())


@pytest.fixture
def manual_entry(make_source):
    return ImageEntry.create(make_source(), focal_point=FocalPoint(20, 80))


class TestResolve:
    """Tests for resolve()."""

    def test_resolve_when_nothing_known_then_center(self, entry):
        assert resolve(entry) == FocalPoint.center()

    def test_resolve_when_detector_result_then_used(self, entry):
        assert resolve(entry, detector_result={"x": 30, "y": 40}) == FocalPoint(30, 40)

    def test_resolve_when_detector_out_of_range_then_clamped(self, entry):
        assert resolve(entry, detector_result={"x": -10, "y": 130}) == FocalPoint(0, 100)

    @pytest.mark.parametrize("result", ["oops", {"x": 10}, 42, []])
    def test_resolve_when_detector_malformed_then_center(self, entry, result):
        assert resolve(entry, detector_result=result) == FocalPoint.center()

    def test_resolve_when_manual_point_then_wins_over_detection(self, entry):
        point = resolve(entry, detector_result={"x": 1, "y": 1}, manual_point=(70, 30))
        assert point == FocalPoint(70, 30)

    def test_resolve_when_manual_entry_then_detection_ignored(self, manual_entry):
        """Once placed by hand, later detections never move the point."""
        for _ in range(3):
            assert resolve(manual_entry, detector_result={"x": 5, "y": 5}) == FocalPoint(20, 80)

    def test_resolve_manual_point_is_idempotent(self, entry):
        first = resolve(entry, manual_point={"x": 33, "y": 66})
        again = resolve(entry.with_manual_point(first), manual_point={"x": 33, "y": 66})
        assert first == again == FocalPoint(33, 66)

    def test_resolve_when_previously_resolved_then_kept(self, entry):
        resolved = apply_detection(entry, {"x": 12, "y": 34})
        assert resolve(resolved) == FocalPoint(12, 34)


class TestApplyDetection:
    """Tests for apply_detection()."""

    def test_apply_detection_success(self, entry):
        updated = apply_detection(entry.with_status(ProcessingStatus.PROCESSING), {"x": 30, "y": 40})
        assert updated.focal_point == FocalPoint(30, 40)
        assert updated.status is ProcessingStatus.RESOLVED
        assert not updated.manual

    @pytest.mark.parametrize("result", [None, "bad", {"y": 3}])
    def test_apply_detection_failure_falls_back_to_center(self, entry, result):
        updated = apply_detection(entry, result)
        assert updated.focal_point == FocalPoint.center()
        assert updated.status is ProcessingStatus.FAILED

    def test_apply_detection_when_manual_then_unchanged(self, manual_entry):
        assert apply_detection(manual_entry, {"x": 1, "y": 2}) is manual_entry


@pytest.mark.parametrize("value, expected", [
    (FocalPoint(1, 2), FocalPoint(1, 2)),
    ({"x": 10, "y": 20}, FocalPoint(10, 20)),
    ((120, "n/a"), FocalPoint(100, 50)),
    ([5, 6], FocalPoint(5, 6)),
    (None, FocalPoint(50, 50)),
    ("middle", FocalPoint(50, 50)),
])
def test_as_focal_point(value, expected):
    assert as_focal_point(value) == expected
