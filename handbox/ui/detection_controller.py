"""
Detection loop: one frame, one detection call, one sink update per tick
"""
import logging
import time
from typing import NamedTuple, Optional

from ..core.errors import DetectorNotReadyError, FrameShapeError
from ..core.types import BoundingBox, Frame

logger = logging.getLogger(__name__)


class TickResult(NamedTuple):
    frame: Frame
    box: Optional[BoundingBox]


class DetectionController:
    """
    Owns one detector and drives it from a frame source

    Lifecycle: construct, warm_up() once, then tick() or run(). Nothing is
    carried over between ticks.
    """

    def __init__(self, detector, source, sink=None, expected_size=None, idle_delay=0.01):
        """
        Args:
            detector: HandDetectorBase, fixed for the controller's lifetime
            source: Object with read() -> Frame or None, and is_open()
            sink: Optional object with show(frame, box) -> bool and close()
            expected_size: Optional (width, height) every frame must have
            idle_delay: Seconds to wait when no frame is ready
        """
        self.detector = detector
        self.source = source
        self.sink = sink
        self.expected_size = tuple(expected_size) if expected_size is not None else None
        self.ready = False
        self.stop_requested = False
        self.idle_delay = idle_delay

    def warm_up(self):
        """
        Load the detector's resources

        Raises:
            DetectorInitError: the pipeline must not start
        """
        if self.ready:
            return
        logger.info("Warming up %s detector", self.detector.name)
        self.detector.load()
        self.ready = True

    def tick(self):
        """
        Process at most one frame

        Returns:
            TickResult, or None if no frame was ready

        Raises:
            DetectorNotReadyError: if warm_up() was not called
            FrameShapeError: if the frame is malformed (this tick only)
        """
        if not self.ready:
            raise DetectorNotReadyError("warm_up() must be called before tick()")

        frame = self.source.read()
        if frame is None:
            return None

        frame.check_shape(self.expected_size)
        box = self.detector.detect(frame)

        if self.sink is not None and not self.sink.show(frame, box):
            self.stop_requested = True
        return TickResult(frame, box)

    def run(self, max_ticks=None):
        """
        Warm up, then tick until the source ends, the sink asks to stop
        or max_ticks frames were processed

        Returns:
            Number of frames processed
        """
        processed = 0
        detections = 0
        try:
            self.warm_up()
            while self.source.is_open() and not self.stop_requested:
                if max_ticks is not None and processed >= max_ticks:
                    break
                try:
                    result = self.tick()
                except FrameShapeError as e:
                    logger.warning("Rejected frame: %s", e)
                    continue
                if result is None:
                    time.sleep(self.idle_delay)
                    continue
                processed += 1
                if result.box is not None:
                    detections += 1
        finally:
            self.close()

        logger.info("Processed %d frame(s), %d detection(s)", processed, detections)
        return processed

    def close(self):
        self.detector.cleanup()
        self.ready = False
        if self.sink is not None:
            self.sink.close()
