"""Frame sources, annotation sinks and the detection loop"""
from .camera_manager import CameraSource
from .annotation import WindowSink, SnapshotSink, MultiSink, draw_bounding_box
from .detection_controller import DetectionController, TickResult
