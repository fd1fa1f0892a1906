"""
Exceptions raised by the hand detection system

Per-frame misses are not errors: detectors return None for them.
"""


class HandboxError(Exception):
    """Base class for all hand detection errors"""


class DetectorInitError(HandboxError):
    """A detector's resources (classifier, network) could not be loaded"""


class DetectorNotReadyError(HandboxError):
    """A detector or controller was used before warm-up"""


class FrameShapeError(HandboxError, ValueError):
    """A frame's pixel buffer disagrees with its declared or expected shape"""


class SourceUnavailableError(HandboxError):
    """No camera or video could be opened"""
