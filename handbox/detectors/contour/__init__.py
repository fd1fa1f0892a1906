"""
Skin color + contour geometry hand detection
Split into logical components for maintainability
"""
from .contour_detector import ContourGeometryDetector
from .defect_analysis import ConvexityDefect, find_feature_point
from .skin_detection import extract_skin_mask

__all__ = ['ContourGeometryDetector', 'ConvexityDefect', 'find_feature_point', 'extract_skin_mask']
