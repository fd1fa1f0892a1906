"""
Finger valley analysis on a skin mask
Uses traditional computer vision techniques:
- Morphological smoothing of the mask
- External contours and convex hull
- Convexity defects filtered by angle and depth
"""
import logging
import math
from typing import NamedTuple

import cv2
import numpy as np

from ...core import config

logger = logging.getLogger(__name__)

# Radius 1 ellipse
SMOOTHING_KERNEL = cv2.getStructuringElement(cv2.MORPH_ELLIPSE, (3, 3))


class ConvexityDefect(NamedTuple):
    """Concavity between one hull edge and the contour, depth in pixels"""
    start_index: int
    end_index: int
    far_index: int
    depth: float


def smooth_mask(mask):
    """Dilate then erode a copy of the mask to remove speckle noise"""
    smoothed = cv2.dilate(mask, SMOOTHING_KERNEL)
    return cv2.erode(smoothed, SMOOTHING_KERNEL)


def find_largest_contour(mask, min_area=None):
    """
    Find the external contour with the largest area above a threshold

    Args:
        mask: Binary mask
        min_area: Contours must have an area strictly greater than this

    Returns:
        (contour, area), contour is None if nothing qualifies
    """
    min_area = config.MIN_CONTOUR_AREA if min_area is None else min_area
    contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

    best_contour = None
    best_area = min_area
    for contour in contours:
        area = cv2.contourArea(contour)
        if area > best_area:
            best_contour = contour
            best_area = area

    if best_contour is None:
        return None, 0.0
    return best_contour, best_area


def _point_line_distance(point, line_start, line_end):
    dx, dy = line_end - line_start
    length = math.hypot(dx, dy)
    if length == 0:
        return float(np.linalg.norm(point - line_start))
    px, py = point - line_start
    return abs(dx * py - dy * px) / length


def compute_convexity_defects(contour):
    """
    Compute the convexity defects of a contour

    Args:
        contour: OpenCV contour (N x 1 x 2)

    Returns:
        List of ConvexityDefect, empty for degenerate contours
    """
    if contour is None or len(contour) < 3:
        return []

    try:
        hull = cv2.convexHull(contour, returnPoints=False)
        if hull is None or len(hull) < 3:
            return []
        raw_defects = cv2.convexityDefects(contour, hull)
    except cv2.error as e:
        # Self-intersecting contours give non-monotonic hull indices
        logger.debug("Convexity defects unavailable: %s", e)
        return []

    if raw_defects is None:
        return []

    points = contour.reshape(-1, 2).astype(np.float64)
    defects = []
    # OpenCV's own depth is fixed-point, measure it in pixels instead
    for s, e, f, _ in raw_defects[:, 0]:
        depth = _point_line_distance(points[f], points[s], points[e])
        defects.append(ConvexityDefect(int(s), int(e), int(f), depth))
    return defects


def defect_angle(contour, defect):
    """
    Interior angle at the far point of a defect, in degrees

    Law of cosines on the triangle start / end / far with
    a = |start-end|, b = |far-start|, c = |far-end|.

    Returns:
        Angle in degrees, None if the triangle is degenerate
    """
    points = contour.reshape(-1, 2).astype(np.float64)
    start = points[defect.start_index]
    end = points[defect.end_index]
    far = points[defect.far_index]

    a = np.linalg.norm(end - start)
    b = np.linalg.norm(far - start)
    c = np.linalg.norm(far - end)
    if b == 0 or c == 0:
        return None

    cosine = (b * b + c * c - a * a) / (2 * b * c)
    return math.degrees(math.acos(max(-1.0, min(1.0, cosine))))


def find_valley_points(contour, mask_height, max_angle=None, depth_divisor=None, return_debug=False):
    """
    Keep the defects that look like the valley between two fingers

    A defect qualifies when its angle is below max_angle and its depth is
    greater than mask_height / depth_divisor.

    Returns:
        List of far points (x, y), optionally with per-defect debug records
    """
    max_angle = config.MAX_VALLEY_ANGLE if max_angle is None else max_angle
    depth_divisor = config.VALLEY_DEPTH_DIVISOR if depth_divisor is None else depth_divisor
    min_depth = mask_height / depth_divisor

    valleys = []
    records = []
    for defect in compute_convexity_defects(contour):
        angle = defect_angle(contour, defect)
        accepted = angle is not None and angle < max_angle and defect.depth > min_depth
        far = contour[defect.far_index][0]
        if accepted:
            valleys.append((int(far[0]), int(far[1])))
        records.append({
            'far': (int(far[0]), int(far[1])),
            'depth': defect.depth,
            'angle': angle,
            'accepted': accepted,
        })

    if return_debug:
        return valleys, records
    return valleys


def find_feature_point(mask, min_defects=None, max_defects=None, min_area=None, return_debug=False):
    """
    Locate a hand in a skin mask by the valleys between its fingers

    Args:
        mask: Binary mask (uint8, nonzero = skin)
        min_defects: Fewest valleys accepted (default MIN_DEFECTS)
        max_defects: Most valleys accepted (default MAX_DEFECTS)
        min_area: Contour area threshold (default MIN_CONTOUR_AREA)
        return_debug: If True, return (point, debug_info) tuple

    Returns:
        (cx, cy) center of the valleys' bounding rectangle, or None.
        Every failure (empty mask, no qualifying contour, valley count out
        of range) is a miss, never an error.
    """
    min_defects = config.MIN_DEFECTS if min_defects is None else min_defects
    max_defects = config.MAX_DEFECTS if max_defects is None else max_defects

    debug_info = {'reason': None, 'area': 0.0, 'contour': None, 'defects': [], 'valleys': []}

    def finish(point, reason):
        debug_info['reason'] = reason
        if reason != 'detected':
            logger.debug("No feature point: %s", reason)
        if return_debug:
            return point, debug_info
        return point

    mask = np.asarray(mask)
    if mask.ndim != 2 or mask.size == 0:
        return finish(None, 'empty_mask')
    if mask.dtype != np.uint8:
        mask = (mask > 0).astype(np.uint8) * 255

    smoothed = smooth_mask(mask)
    contour, area = find_largest_contour(smoothed, min_area)
    if contour is None:
        return finish(None, 'no_contour')

    debug_info['area'] = area
    debug_info['contour'] = contour
    if len(contour) < 3:
        return finish(None, 'degenerate_contour')

    valleys, records = find_valley_points(contour, mask.shape[0], return_debug=True)
    debug_info['defects'] = records
    debug_info['valleys'] = valleys

    if len(valleys) < min_defects:
        return finish(None, 'too_few_valleys')
    if len(valleys) > max_defects:
        return finish(None, 'too_many_valleys')

    x, y, w, h = cv2.boundingRect(np.array(valleys, dtype=np.int32))
    return finish((x + w // 2, y + h // 2), 'detected')
