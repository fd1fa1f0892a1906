"""
Skin detection in the YCrCb color space
"""
import cv2
import numpy as np

from ...core import config
from ...core.utils import to_bgr


def skin_bounds(y_min=None, cr_range=None, cb_range=None):
    """
    Convert the exclusive skin thresholds into inclusive cv2.inRange bounds

    Y > y_min, cr_range[0] < Cr < cr_range[1], cb_range[0] < Cb < cb_range[1]
    becomes lower = (y_min+1, cr_lo+1, cb_lo+1), upper = (255, cr_hi-1, cb_hi-1)
    on 8-bit channels.

    Returns:
        (lower, upper) uint8 arrays in Y, Cr, Cb order
    """
    y_min = config.SKIN_Y_MIN if y_min is None else y_min
    cr_lo, cr_hi = config.SKIN_CR_RANGE if cr_range is None else cr_range
    cb_lo, cb_hi = config.SKIN_CB_RANGE if cb_range is None else cb_range

    lower = np.array([y_min + 1, cr_lo + 1, cb_lo + 1], dtype=np.uint8)
    upper = np.array([255, cr_hi - 1, cb_hi - 1], dtype=np.uint8)
    return lower, upper


def skin_mask_from_ycrcb(ycrcb, y_min=None, cr_range=None, cb_range=None):
    """
    Threshold an image that is already in YCrCb

    Args:
        ycrcb: uint8 image, channels ordered Y, Cr, Cb
        y_min: Exclusive lower bound on Y (default SKIN_Y_MIN)
        cr_range: Exclusive (low, high) bounds on Cr (default SKIN_CR_RANGE)
        cb_range: Exclusive (low, high) bounds on Cb (default SKIN_CB_RANGE)

    Returns:
        Binary mask (0 or 255), same height and width as the input
    """
    lower, upper = skin_bounds(y_min, cr_range, cb_range)
    return cv2.inRange(ycrcb, lower, upper)


def extract_skin_mask(frame, **bounds):
    """
    Detect skin-colored pixels in a frame

    Args:
        frame: Frame in any supported channel order
        **bounds: Optional y_min / cr_range / cb_range overrides

    Returns:
        Binary mask (0 or 255) with the frame's dimensions

    Raises:
        FrameShapeError: if the pixel buffer disagrees with the frame's size
    """
    frame.check_shape()
    if frame.is_empty:
        return np.zeros((frame.height, frame.width), dtype=np.uint8)

    ycrcb = cv2.cvtColor(to_bgr(frame), cv2.COLOR_BGR2YCrCb)
    return skin_mask_from_ycrcb(ycrcb, **bounds)
