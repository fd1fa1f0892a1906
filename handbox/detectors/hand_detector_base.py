"""
Base class for hand detection methods
"""
from abc import ABC, abstractmethod

from ..core.errors import DetectorNotReadyError


class HandDetectorBase(ABC):
    """
    One interchangeable hand detection strategy

    Lifecycle: construct, load() once, then detect() once per frame.
    Resources loaded by load() are read-only afterwards.
    """

    name = "base"

    def __init__(self):
        self._loaded = False

    @property
    def is_loaded(self):
        return self._loaded

    def load(self):
        """
        Load the detector's resources (idempotent)

        Raises:
            DetectorInitError: if a resource file is missing or unreadable
        """
        if self._loaded:
            return
        self._load_resources()
        self._loaded = True

    def _load_resources(self):
        """Subclasses with resource files override this"""

    def detect(self, frame):
        """
        Detect a hand in a frame

        Args:
            frame: Frame for the current tick

        Returns:
            BoundingBox inside the frame, or None if no hand was found.
            Empty frames give None.
        """
        if not self._loaded:
            raise DetectorNotReadyError(f"{self.name} detector used before load()")
        if frame.is_empty:
            return None
        return self._detect(frame)

    @abstractmethod
    def _detect(self, frame):
        pass

    def cleanup(self):
        self._loaded = False
