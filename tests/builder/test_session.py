"""
Tests for builder.session

Test Coverage:
- ReportSession: Upload -> processing -> resolved flow via the inbox
- Listener notifications
- Manual focal points skip detection
- Enhancement success, failure and busy flag
"""
import random
import threading

import pytest

from report_toolkit.builder.session import ReportSession
from report_toolkit.builder.state import EnhancedContent
from report_toolkit.core.models import DEFAULT_THEME_COLOR, FocalPoint, LayoutMode, ProcessingStatus


class FixedDetector:
    def __init__(self, result=None):
        self.result = result if result is not None else {"x": 30, "y": 40}
        self.calls = 0

    def detect(self, data, mime_type):
        self.calls += 1
        return self.result


class GatedDetector:
    """Waits for ``gate`` before answering."""

    def __init__(self):
        self.gate = threading.Event()

    def detect(self, data, mime_type):
        self.gate.wait(5)
        return {"x": 90, "y": 90}


class RecordingEnhancer:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.busy_during_call = None
        self.session = None

    def enhance(self, title, description):
        if self.session is not None:
            self.busy_during_call = self.session.is_enhancing
        if self.error is not None:
            raise self.error
        return self.content


def test_add_image_without_detector_stays_pending(make_source):
    with ReportSession() as session:
        image_id = session.add_image(make_source())
        entry = session.document.get(image_id)
        assert entry.status is ProcessingStatus.PENDING
        assert session.layout().cells[0].transform.position_x == 50.0


def test_add_image_sets_theme_color_from_first_image(make_source):
    with ReportSession() as session:
        session.add_image(make_source(color=(255, 0, 0)))
        session.add_image(make_source(color=(0, 0, 255)))
        assert session.document.theme_color == "#ff0000"


def test_detection_flow(make_source):
    detector = FixedDetector()
    with ReportSession(detector=detector) as session:
        image_id = session.add_image(make_source())
        assert session.document.get(image_id).status in (
            ProcessingStatus.PROCESSING, ProcessingStatus.RESOLVED,
        )

        doc = session.wait_for_detections(timeout=5)

        entry = doc.get(image_id)
        assert entry.focal_point == FocalPoint(30, 40)
        assert entry.status is ProcessingStatus.RESOLVED
        assert detector.calls == 1


def test_processing_flag_while_detection_in_flight(make_source):
    detector = GatedDetector()
    with ReportSession(detector=detector) as session:
        image_id = session.add_image(make_source())
        session.process_pending()
        assert session.document.get(image_id).is_processing

        detector.gate.set()
        session.wait_for_detections(timeout=5)
        assert not session.document.get(image_id).is_processing


def test_manual_point_skips_detection(make_source):
    detector = FixedDetector()
    with ReportSession(detector=detector) as session:
        image_id = session.add_image(make_source(), focal_point=(10, 20))
        session.wait_for_detections(timeout=5)
        assert detector.calls == 0
        assert session.document.get(image_id).focal_point == FocalPoint(10, 20)


def test_manual_edit_beats_late_detection(make_source):
    detector = GatedDetector()
    with ReportSession(detector=detector) as session:
        image_id = session.add_image(make_source())
        session.set_focal_point(image_id, {"x": 5, "y": 5})
        detector.gate.set()
        session.wait_for_detections(timeout=5)
        assert session.document.get(image_id).focal_point == FocalPoint(5, 5)


def test_detection_for_removed_image_is_ignored(make_source):
    detector = GatedDetector()
    with ReportSession(detector=detector) as session:
        removed = session.add_image(make_source())
        kept = session.add_image(make_source(), focal_point=(30, 40))
        session.remove_image(removed)

        detector.gate.set()
        doc = session.wait_for_detections(timeout=5)

        assert removed not in doc
        assert doc.get(kept).focal_point == FocalPoint(30, 40)


def test_detection_timeout_falls_back_to_center(make_source):
    detector = GatedDetector()
    with ReportSession(detector=detector, detection_timeout_s=0.05) as session:
        image_id = session.add_image(make_source())
        doc = session.wait_for_detections()
        entry = doc.get(image_id)
        assert entry.focal_point == FocalPoint.center()
        assert entry.status is ProcessingStatus.FAILED
        detector.gate.set()


def test_listeners_notified_on_change_only(make_source):
    seen = []
    with ReportSession() as session:
        unsubscribe = session.subscribe(seen.append)
        session.set_orientation("tall")
        session.set_orientation(LayoutMode.TALL)
        assert [doc.orientation for doc in seen] == [LayoutMode.TALL]

        unsubscribe()
        session.set_orientation("wide")
        assert len(seen) == 1


def test_move_and_remove(make_source):
    with ReportSession() as session:
        a = session.add_image(make_source())
        b = session.add_image(make_source())
        session.move_image(b, 0)
        assert session.document.order == (b, a)
        session.remove_image(a)
        session.remove_image(b)
        assert session.document.theme_color == DEFAULT_THEME_COLOR


def test_randomize_theme_color():
    with ReportSession() as session:
        doc = session.randomize_theme_color(random.Random(1))
        assert doc.theme_color.startswith("#")
        assert len(doc.theme_color) == 7


def test_update_fields():
    with ReportSession() as session:
        doc = session.update_fields(title="Sports Day", location="Field")
        assert (doc.title, doc.location) == ("Sports Day", "Field")


class TestEnhance:
    """Tests for ReportSession.enhance()."""

    def test_enhance_applies_content(self):
        content = EnhancedContent("New", "Desc", "Obj", "Imp")
        enhancer = RecordingEnhancer(content)
        with ReportSession(enhancer=enhancer) as session:
            enhancer.session = session
            session.update_fields(title="old", description="raw notes")

            assert session.enhance() == content

            assert session.document.title == "New"
            assert session.document.impact == "Imp"
            assert enhancer.busy_during_call is True
            assert session.is_enhancing is False

    def test_enhance_failure_keeps_fields_and_clears_busy(self):
        enhancer = RecordingEnhancer(error=RuntimeError("boom"))
        with ReportSession(enhancer=enhancer) as session:
            session.update_fields(title="old", description="raw")
            version = session.document.version

            assert session.enhance() is None

            assert session.document.title == "old"
            assert session.document.version == version
            assert session.is_enhancing is False

    @pytest.mark.parametrize("title, description", [("", "text"), ("title", "   ")])
    def test_enhance_requires_title_and_description(self, title, description):
        enhancer = RecordingEnhancer(EnhancedContent("a", "b", "c", "d"))
        enhancer.session = None
        with ReportSession(enhancer=enhancer) as session:
            session.update_fields(title=title, description=description)
            assert session.enhance() is None
            assert session.document.title == title

    def test_enhance_without_enhancer(self):
        with ReportSession() as session:
            session.update_fields(title="t", description="d")
            assert session.enhance() is None
