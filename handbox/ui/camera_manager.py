"""
Frame sources: camera or video capture producing one Frame per tick
"""
import logging
import platform

import cv2

from ..core import config
from ..core.errors import SourceUnavailableError
from ..core.types import Frame

logger = logging.getLogger(__name__)

# Capture backends tried, in order, when scanning for a camera
_BACKENDS = {
    'Darwin': (cv2.CAP_AVFOUNDATION,),
    'Windows': (cv2.CAP_DSHOW, cv2.CAP_ANY),
}
_DEFAULT_BACKENDS = (cv2.CAP_V4L2, cv2.CAP_ANY)


class CameraSource:
    """Reads BGR frames from a camera index or a video file"""

    def __init__(self, device=None, width=None, height=None, fps=None, mirror=True, max_index=5):
        """
        Args:
            device: Camera index, video path, or None to scan for a camera
            width: Requested capture width (default CAMERA_WIDTH)
            height: Requested capture height (default CAMERA_HEIGHT)
            fps: Requested frame rate (default CAMERA_FPS)
            mirror: Flip camera frames horizontally (selfie view)
            max_index: Camera indices scanned when device is None
        """
        self.device = device
        self.width = width or config.CAMERA_WIDTH
        self.height = height or config.CAMERA_HEIGHT
        self.fps = fps or config.CAMERA_FPS
        self.mirror = mirror
        self.max_index = max_index
        self.cap = None
        self.frame_size = None
        self.frames_read = 0

    @property
    def is_file(self):
        return isinstance(self.device, str)

    def open(self):
        """
        Open the capture device and record the size it actually delivers

        Raises:
            SourceUnavailableError: if no camera or video could be opened
        """
        if self.device is None:
            self.cap = self._scan_cameras()
        else:
            self.cap = cv2.VideoCapture(self.device)
            if not self.cap.isOpened():
                self.cap.release()
                self.cap = None

        if self.cap is None:
            raise SourceUnavailableError(f"Could not open video source {self.device!r}")

        if self.is_file:
            # Files keep their native size and rate
            self.mirror = False
        else:
            self._request_format()

        width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        # Some backends report 0 until the first frame, leave the size unchecked then
        self.frame_size = (width, height) if width and height else None
        logger.info("Video source %r opened (%s)", self.device,
                    "%dx%d" % self.frame_size if self.frame_size else "size unknown")
        return self

    def _scan_cameras(self):
        """First camera index that opens and delivers a frame, or None"""
        backends = _BACKENDS.get(platform.system(), _DEFAULT_BACKENDS)
        for index in range(self.max_index):
            for backend in backends:
                cap = cv2.VideoCapture(index, backend)
                if cap.isOpened() and cap.read()[0]:
                    logger.debug("Camera %d answered on backend %d", index, backend)
                    self.device = index
                    return cap
                cap.release()
        return None

    def _request_format(self):
        """Ask the camera for the configured size and rate (it may not comply)"""
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.fps)

    def is_open(self):
        return self.cap is not None and self.cap.isOpened()

    def read(self):
        """
        Capture the next frame

        Returns:
            Frame, or None if no frame is ready
        """
        if not self.is_open():
            return None

        ret, pixels = self.cap.read()
        if not ret or pixels is None:
            if self.is_file:
                logger.info("End of video %s after %d frames", self.device, self.frames_read)
                self.release()
            return None

        if self.mirror:
            pixels = cv2.flip(pixels, 1)
        self.frames_read += 1
        return Frame.from_array(pixels, 'BGR')

    def release(self):
        if self.cap is not None:
            self.cap.release()
            self.cap = None
