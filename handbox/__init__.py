"""Hand detection system - Core package"""
from .detectors import (HandDetectorBase, ClassifierDetector, NeuralNetDetector,
                        ContourGeometryDetector, create_detector)
from .core.types import Frame, BoundingBox
from .core.errors import (HandboxError, DetectorInitError, DetectorNotReadyError,
                          FrameShapeError, SourceUnavailableError)

__version__ = "1.0.0"
