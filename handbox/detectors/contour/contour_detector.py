"""
Contour geometry hand detector
Skin mask -> largest contour -> finger valleys -> fixed-size box
"""
import logging

from ..hand_detector_base import HandDetectorBase
from ...core import config
from ...core.types import BoundingBox
from .skin_detection import extract_skin_mask
from .defect_analysis import find_feature_point

logger = logging.getLogger(__name__)


class ContourGeometryDetector(HandDetectorBase):
    """Locate a hand by the valleys between its fingers"""

    name = "contour"

    def __init__(self, min_defects=None, max_defects=None, min_area=None, box_half_size=None):
        super().__init__()
        self.min_defects = config.MIN_DEFECTS if min_defects is None else min_defects
        self.max_defects = config.MAX_DEFECTS if max_defects is None else max_defects
        self.min_area = config.MIN_CONTOUR_AREA if min_area is None else min_area
        self.box_half_size = config.FEATURE_BOX_HALF_SIZE if box_half_size is None else box_half_size

    def find_feature_point(self, frame, return_debug=False):
        """Run skin detection and valley analysis, returning the feature point"""
        return self.feature_point_from_mask(extract_skin_mask(frame), return_debug)

    def feature_point_from_mask(self, mask, return_debug=False):
        """Valley analysis on an already extracted skin mask"""
        return find_feature_point(
            mask, self.min_defects, self.max_defects, self.min_area, return_debug=return_debug
        )

    def _detect(self, frame):
        point = self.find_feature_point(frame)
        if point is None:
            return None

        return self.box_around(point, frame.width, frame.height)

    def box_around(self, point, width, height):
        """Fixed-size box centered on a feature point, kept inside a width x height frame"""
        cx, cy = point
        half = self.box_half_size
        return BoundingBox.clamped(cx - half, cx + half, cy - half, cy + half, width, height)
