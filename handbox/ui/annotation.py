"""
Annotation sinks: draw the detection on the frame and display or save it
"""
import logging
import time
from pathlib import Path

import cv2
from PIL import Image

from ..core import config
from ..core.utils import draw_label, to_bgr

logger = logging.getLogger(__name__)


def draw_bounding_box(image, box, color=None, thickness=2):
    """
    Draw a detection box on a BGR image in place

    Args:
        image: BGR image
        box: BoundingBox or None (nothing is drawn)
        color: Rectangle color (default BOX_COLOR)
        thickness: Line thickness

    Returns:
        The image
    """
    if box is not None:
        cv2.rectangle(image, (box.xmin, box.ymin), (box.xmax, box.ymax),
                      color or config.BOX_COLOR, thickness)
    return image


def annotate(frame, box):
    """Copy of the frame as BGR with the box drawn on it"""
    return draw_bounding_box(to_bgr(frame).copy(), box)


class WindowSink:
    """Shows annotated frames in an OpenCV window with a status line"""

    def __init__(self, window_name="Hand Detection", label=None, smoothing=0.9):
        self.window_name = window_name
        self.label = label
        self.smoothing = smoothing
        self.fps = 0.0
        self._last_shown = None

    def update_fps(self, now=None):
        """Fold the gap since the previous frame into the smoothed rate"""
        now = time.perf_counter() if now is None else now
        if self._last_shown is not None and now > self._last_shown:
            instant = 1.0 / (now - self._last_shown)
            self.fps = self.fps * self.smoothing + instant * (1 - self.smoothing)
        self._last_shown = now
        return self.fps

    def status_text(self, box):
        status = "DETECTED" if box is not None else "NO HAND"
        text = f"{status} | FPS: {int(self.fps)}"
        if self.label:
            text = f"{self.label} | {text}"
        return text

    def show(self, frame, box):
        """
        Display one annotated frame

        Returns:
            False when the user pressed 'q' or ESC
        """
        annotated = annotate(frame, box)
        self.update_fps()
        draw_label(annotated, self.status_text(box))

        cv2.imshow(self.window_name, annotated)
        key = cv2.waitKey(1) & 0xFF
        return key not in (ord('q'), 27)

    def close(self):
        cv2.destroyWindow(self.window_name)


class SnapshotSink:
    """Saves annotated frames as PNG files"""

    def __init__(self, directory, only_detections=False):
        self.directory = Path(directory)
        self.only_detections = only_detections
        self.index = 0
        self.saved = []

    def show(self, frame, box):
        self.index += 1
        if self.only_detections and box is None:
            return True

        self.directory.mkdir(parents=True, exist_ok=True)
        annotated = annotate(frame, box)
        path = self.directory / f"frame_{self.index:06d}.png"
        Image.fromarray(cv2.cvtColor(annotated, cv2.COLOR_BGR2RGB)).save(path)
        self.saved.append(path)
        return True

    def close(self):
        logger.info("Saved %d frame(s) to %s", len(self.saved), self.directory)


class MultiSink:
    """Forwards every frame to several sinks"""

    def __init__(self, *sinks):
        self.sinks = sinks

    def show(self, frame, box):
        keep_going = True
        for sink in self.sinks:
            keep_going = sink.show(frame, box) and keep_going
        return keep_going

    def close(self):
        for sink in self.sinks:
            sink.close()
