"""
SSD-style neural network hand detection through OpenCV's dnn module
"""
import logging
from pathlib import Path

import cv2
import numpy as np

from .hand_detector_base import HandDetectorBase
from ..core import config
from ..core.errors import DetectorInitError
from ..core.types import BoundingBox
from ..core.utils import to_bgr

logger = logging.getLogger(__name__)

# Output row layout: image_id, class_id, confidence, left, top, right, bottom
CONFIDENCE_COLUMN = 2
BOX_COLUMNS = slice(3, 7)
ROW_SIZE = 7


class NeuralNetDetector(HandDetectorBase):
    """Single forward pass of a frozen TensorFlow detection graph"""

    name = "neural_net"

    def __init__(self, model_path=None, config_path=None, net=None,
                 input_size=None, confidence_threshold=None):
        """
        Args:
            model_path: Frozen graph (.pb), default DNN_MODEL_FILE
            config_path: Graph text description (.pbtxt), default DNN_CONFIG_FILE
            net: Already constructed network, skips reading the files
            input_size: Network input (width, height), default DNN_INPUT_SIZE
            confidence_threshold: Best row must score above this, default DNN_CONFIDENCE_THRESHOLD
        """
        super().__init__()
        self.model_path = Path(model_path or config.DNN_MODEL_FILE)
        self.config_path = Path(config_path or config.DNN_CONFIG_FILE)
        self.net = net
        self.input_size = tuple(input_size or config.DNN_INPUT_SIZE)
        self.confidence_threshold = (config.DNN_CONFIDENCE_THRESHOLD
                                     if confidence_threshold is None else confidence_threshold)

    def _load_resources(self):
        if self.net is None:
            for path in (self.model_path, self.config_path):
                if not path.is_file():
                    logger.error("Network file not found: %s", path)
                    raise DetectorInitError(f"Network file not found: {path}")
            try:
                self.net = cv2.dnn.readNetFromTensorflow(str(self.model_path), str(self.config_path))
            except cv2.error as e:
                raise DetectorInitError(f"Network could not be read: {e}") from e

        if self.net.empty():
            self.net = None
            logger.error("Network is empty: %s", self.model_path)
            raise DetectorInitError(f"Network is empty: {self.model_path}")

        logger.info("Detection network loaded from %s", self.model_path)

    def _detect(self, frame):
        blob = cv2.dnn.blobFromImage(
            to_bgr(frame), 1.0, self.input_size, (0, 0, 0), swapRB=True, crop=False
        )
        self.net.setInput(blob)
        output = np.asarray(self.net.forward())
        return self.select_box(output, frame.width, frame.height)

    def select_box(self, output, width, height):
        """
        Turn raw network output into a box

        Args:
            output: Detection tensor, any shape whose last axis holds rows of 7
            width: Frame width in pixels
            height: Frame height in pixels

        Returns:
            BoundingBox for the most confident row, None below the threshold
        """
        rows = output.reshape(-1, ROW_SIZE)
        if len(rows) == 0:
            return None

        best = rows[int(np.argmax(rows[:, CONFIDENCE_COLUMN]))]
        score = float(best[CONFIDENCE_COLUMN])
        if not score > self.confidence_threshold:
            logger.debug("Network: best score %.2f below threshold", score)
            return None

        left, top, right, bottom = best[BOX_COLUMNS]
        return BoundingBox.clamped(
            left * width, right * width, top * height, bottom * height, width, height
        )

    def cleanup(self):
        super().cleanup()
        self.net = None
