"""Hand detector implementations"""
from .hand_detector_base import HandDetectorBase
from .classifier_detector import ClassifierDetector
from .neural_net_detector import NeuralNetDetector
from .contour import ContourGeometryDetector

DETECTION_METHODS = {
    ClassifierDetector.name: ClassifierDetector,
    NeuralNetDetector.name: NeuralNetDetector,
    ContourGeometryDetector.name: ContourGeometryDetector,
}


def create_detector(method, **options):
    """
    Build the detector for a method name

    Args:
        method: "classifier", "neural_net" or "contour"
        **options: Passed to the detector's constructor

    Raises:
        ValueError: for an unknown method
    """
    try:
        detector_class = DETECTION_METHODS[method]
    except KeyError:
        raise ValueError(
            f"Unknown detection method {method!r}, expected one of {sorted(DETECTION_METHODS)}"
        ) from None
    return detector_class(**options)


__all__ = ['HandDetectorBase', 'ClassifierDetector', 'NeuralNetDetector',
           'ContourGeometryDetector', 'DETECTION_METHODS', 'create_detector']
