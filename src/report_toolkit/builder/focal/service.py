"""
Module: builder.focal.service

Purpose:
    Run automatic focal-point detection in the background, one job per
    uploaded image, and post each outcome back to the owning session as
    an ApplyDetection command.

Key Classes:
    - FocalPointDetector: Protocol for detector collaborators
    - FocalPointService: Thread pool-based detection queue

Concurrency:
    Workers never touch the report document. They call ``post`` with a
    command addressed by image id; the session applies posted commands
    on its own thread. Detector exceptions, malformed results and
    timeouts are all posted as ``ApplyDetection(id, None)``, which the
    reducer resolves to center. Results arriving after their job timed
    out are discarded.

Dependencies:
    - concurrent.futures: Thread pool execution
    - builder.state.commands: ApplyDetection

Used By:
    - builder.session.ReportSession
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Set

from report_toolkit.core.models import ImageEntry
from report_toolkit.builder.state.commands import ApplyDetection, Command

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


class FocalPointDetector(Protocol):
    """Detects the most prominent subject in an image."""

    def detect(self, data: bytes, mime_type: str) -> Optional[Mapping[str, Any]]:
        """
        Return ``{"x": 0-100, "y": 0-100}`` or None.

        May raise; the service treats exceptions as failure.
        """
        ...


class FocalPointService:
    """
    Thread pool-based focal-point detection queue.

    Usage:
        service = FocalPointService(detector, post=inbox.put)
        try:
            service.submit(entry)
            ...
            service.wait_all(timeout=30)
        finally:
            service.shutdown()

    Attributes:
        timeout_s: Default wait for ``wait_all``
    """

    def __init__(
        self,
        detector: FocalPointDetector,
        post: Callable[[Command], None],
        *,
        max_workers: int = 4,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._detector = detector
        self._post = post
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="focal-detect",
        )
        self._lock = threading.Lock()
        self._futures: Dict[Future, str] = {}
        self._completed: Set[str] = set()
        self._expired: Set[str] = set()
        self.timeout_s = timeout_s

    def submit(self, entry: ImageEntry) -> Future:
        """Queue detection for ``entry``."""
        future = self._executor.submit(
            self._run, entry.id, entry.source.data, entry.source.mime_type
        )
        with self._lock:
            self._futures[future] = entry.id
        logger.debug(f"Queued focal point detection for image {entry.id}")
        return future

    @property
    def pending_count(self) -> int:
        with self._lock:
            return sum(1 for future in self._futures if not future.done())

    def wait_all(self, timeout: Optional[float] = None) -> int:
        """
        Wait for queued detections.

        Jobs still running after ``timeout`` seconds are resolved as
        failures and their eventual results discarded.

        Args:
            timeout: Max seconds to wait (None = ``timeout_s``).

        Returns:
            Number of jobs that finished in time.
        """
        with self._lock:
            futures = list(self._futures)
        if not futures:
            return 0

        done, not_done = wait(futures, timeout=self.timeout_s if timeout is None else timeout)

        with self._lock:
            for future in not_done:
                image_id = self._futures[future]
                if image_id in self._completed:
                    continue
                self._expired.add(image_id)
                logger.warning(f"Focal point detection timed out for image {image_id}; using center")
                self._post(ApplyDetection(image_id, None))
            for future in futures:
                image_id = self._futures.pop(future, None)
                # Settled either way; expired ids stay until the late result lands
                self._completed.discard(image_id)

        return len(done)

    def _run(self, image_id: str, data: bytes, mime_type: str) -> None:
        """Worker body: detect, then post the outcome unless expired."""
        result: Any = None
        try:
            result = self._detector.detect(data, mime_type)
        except Exception as e:
            logger.warning(f"Focal point detector failed for image {image_id}: {e}")
            result = None

        with self._lock:
            if image_id in self._expired:
                self._expired.discard(image_id)
                logger.debug(f"Discarding late detection for image {image_id}")
                return
            self._completed.add(image_id)
            self._post(ApplyDetection(image_id, result))

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the thread pool."""
        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    def __enter__(self) -> "FocalPointService":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()
