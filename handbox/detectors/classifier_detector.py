"""
Cascade classifier (Haar/LBP) palm detection
"""
import logging
from pathlib import Path

import cv2

from .hand_detector_base import HandDetectorBase
from ..core import config
from ..core.errors import DetectorInitError
from ..core.types import BoundingBox
from ..core.utils import to_bgr

logger = logging.getLogger(__name__)


class ClassifierDetector(HandDetectorBase):
    """Sliding-window cascade search that keeps the single biggest match"""

    name = "classifier"

    def __init__(self, cascade_path=None, classifier=None,
                 scale_factor=None, min_neighbors=None, min_size=None):
        """
        Args:
            cascade_path: Cascade XML file (default CASCADE_FILE)
            classifier: Already constructed classifier, skips reading cascade_path
            scale_factor: Window scale step (default CASCADE_SCALE_FACTOR)
            min_neighbors: Neighbor count to keep a match (default CASCADE_MIN_NEIGHBORS)
            min_size: Smallest window (default CASCADE_MIN_SIZE)
        """
        super().__init__()
        self.cascade_path = Path(cascade_path or config.CASCADE_FILE)
        self.classifier = classifier
        self.scale_factor = config.CASCADE_SCALE_FACTOR if scale_factor is None else scale_factor
        self.min_neighbors = config.CASCADE_MIN_NEIGHBORS if min_neighbors is None else min_neighbors
        self.min_size = tuple(config.CASCADE_MIN_SIZE if min_size is None else min_size)
        self.flags = 0

    def _load_resources(self):
        # Cascades live in the objdetect module, which some OpenCV builds leave out
        if not all(hasattr(cv2, name) for name in ("CascadeClassifier", "CASCADE_SCALE_IMAGE")):
            raise DetectorInitError(f"OpenCV {cv2.__version__} has no cascade classifier support")
        self.flags = cv2.CASCADE_DO_CANNY_PRUNING | cv2.CASCADE_SCALE_IMAGE | cv2.CASCADE_FIND_BIGGEST_OBJECT

        if self.classifier is None:
            if not self.cascade_path.is_file():
                logger.error("Cascade file not found: %s", self.cascade_path)
                raise DetectorInitError(f"Cascade file not found: {self.cascade_path}")
            self.classifier = cv2.CascadeClassifier()
            self.classifier.load(str(self.cascade_path))

        if self.classifier.empty():
            logger.error("Cascade file could not be loaded: %s", self.cascade_path)
            self.classifier = None
            raise DetectorInitError(f"Cascade file could not be loaded: {self.cascade_path}")

        logger.info("Cascade classifier loaded from %s", self.cascade_path)

    def _detect(self, frame):
        gray = cv2.cvtColor(to_bgr(frame), cv2.COLOR_BGR2GRAY)
        gray = cv2.equalizeHist(gray)

        hands = self.classifier.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            flags=self.flags,
            minSize=self.min_size,
        )

        if len(hands) == 0:
            return None

        x, y, w, h = max(hands, key=lambda r: r[2] * r[3])
        logger.debug("Cascade: palm detected at (%d, %d, %d, %d)", x, y, w, h)
        return BoundingBox.clamped(x, x + w, y, y + h, frame.width, frame.height)

    def cleanup(self):
        super().cleanup()
        self.classifier = None
