"""
Runs detection off the interactive thread.

One run at a time: re-triggering while a run is in flight hands back the
in-flight future instead of queueing another. Runs cannot be cancelled
once started.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

import numpy as np

from .detector import QuadrilateralDetector
from .models import DetectionResult

logger = logging.getLogger(__name__)


class BackgroundDetector:
    """One-shot background detection with a single worker thread."""

    def __init__(self, detector: Optional[QuadrilateralDetector] = None):
        self.detector = detector or QuadrilateralDetector()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="quad-detect")
        self._lock = threading.Lock()
        self._current: Optional[Future] = None

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._current is not None and not self._current.done()

    def submit(
        self,
        image: np.ndarray,
        callback: Optional[Callable[[DetectionResult], None]] = None,
        min_area_fraction: Optional[float] = None,
        max_results: Optional[int] = None
    ) -> Future:
        """
        Start detection in the background.

        Args:
            image: Input image, must not be modified until the run completes
            callback: Called with the DetectionResult on the worker thread
            min_area_fraction: Overrides the detector config
            max_results: Overrides the detector config

        Returns:
            Future resolving to a DetectionResult. If a run is already in
            flight its future is returned, the new image and overrides are
            ignored and callback receives the in-flight run's result.
        """
        with self._lock:
            if self._current is not None and not self._current.done():
                logger.info("Detection already running, new request joins the in-flight run")
                future = self._current
            else:
                future = self._executor.submit(self.detector.detect, image, min_area_fraction, max_results)
                self._current = future

        if callback is not None:
            future.add_done_callback(lambda f: callback(f.result()))
        return future

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
