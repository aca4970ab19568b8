"""
Tests for builder.focal.service

Test Coverage:
- FocalPointService: Background detection posting ApplyDetection commands
- Detector exceptions treated as failures
- Timeouts post a center fallback and discard late results
"""
import queue
import threading

import pytest

from report_toolkit.builder.focal import FocalPointService
from report_toolkit.builder.state import ApplyDetection
from report_toolkit.core.models import ImageEntry


class FixedDetector:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def detect(self, data, mime_type):
        self.calls.append(mime_type)
        return self.result


class FailingDetector:
    def detect(self, data, mime_type):
        raise RuntimeError("service unavailable")


class BlockingDetector:
    """Blocks until released, then returns a point."""

    def __init__(self):
        self.release = threading.Event()

    def detect(self, data, mime_type):
        self.release.wait(5)
        return {"x": 10, "y": 10}


def _drain(inbox):
    commands = []
    while True:
        try:
            commands.append(inbox.get_nowait())
        except queue.Empty:
            return commands


@pytest.fixture
def entry(make_source):
    return ImageEntry.create(make_source())


def test_submit_posts_detection_result(entry):
    inbox = queue.Queue()
    detector = FixedDetector({"x": 30, "y": 40})
    with FocalPointService(detector, post=inbox.put) as service:
        service.submit(entry)
        assert service.wait_all(timeout=5) == 1

    assert _drain(inbox) == [ApplyDetection(entry.id, {"x": 30, "y": 40})]
    assert detector.calls == ["image/png"]


def test_detector_exception_posts_failure(entry):
    inbox = queue.Queue()
    with FocalPointService(FailingDetector(), post=inbox.put) as service:
        service.submit(entry)
        service.wait_all(timeout=5)

    assert _drain(inbox) == [ApplyDetection(entry.id, None)]


def test_timeout_posts_center_fallback_and_discards_late_result(entry):
    inbox = queue.Queue()
    detector = BlockingDetector()
    service = FocalPointService(detector, post=inbox.put)
    try:
        service.submit(entry)
        assert service.wait_all(timeout=0.05) == 0
        assert _drain(inbox) == [ApplyDetection(entry.id, None)]

        # The late completion must not post a second command
        detector.release.set()
    finally:
        service.shutdown(wait=True)

    assert _drain(inbox) == []


def test_wait_all_without_jobs_returns_zero():
    with FocalPointService(FixedDetector(None), post=lambda command: None) as service:
        assert service.wait_all(timeout=0.1) == 0
        assert service.pending_count == 0


def test_independent_jobs_post_by_id(make_source):
    inbox = queue.Queue()
    entries = [ImageEntry.create(make_source()) for _ in range(5)]
    with FocalPointService(FixedDetector({"x": 1, "y": 2}), post=inbox.put, max_workers=3) as service:
        for entry in entries:
            service.submit(entry)
        assert service.wait_all(timeout=5) == 5

    posted = {command.image_id for command in _drain(inbox)}
    assert posted == {entry.id for entry in entries}


def test_settled_jobs_are_forgotten(entry, make_source):
    inbox = queue.Queue()
    detector = BlockingDetector()
    service = FocalPointService(detector, post=inbox.put)
    try:
        service.submit(entry)
        service.wait_all(timeout=0.05)
        detector.release.set()
    finally:
        service.shutdown(wait=True)
    assert service._expired == set()

    with FocalPointService(FixedDetector({"x": 5, "y": 5}), post=inbox.put) as service:
        service.submit(ImageEntry.create(make_source()))
        assert service.wait_all(timeout=5) == 1
        assert service._completed == set()
        assert service.pending_count == 0
