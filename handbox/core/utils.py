"""
Image helpers shared by detectors and sinks
"""
import cv2

# Conversions from each channel order to BGR, None means already BGR
_TO_BGR = {
    'BGR': None,
    'RGB': cv2.COLOR_RGB2BGR,
    'BGRA': cv2.COLOR_BGRA2BGR,
    'RGBA': cv2.COLOR_RGBA2BGR,
    'GRAY': cv2.COLOR_GRAY2BGR,
}

LABEL_FONT = cv2.FONT_HERSHEY_SIMPLEX


def to_bgr(frame):
    """
    Return a frame's pixels as a 3-channel BGR image

    Args:
        frame: Frame with any supported channel order

    Returns:
        BGR numpy array (the frame's own buffer when it is already BGR)
    """
    code = _TO_BGR[frame.channel_order]
    if code is None:
        return frame.pixels
    return cv2.cvtColor(frame.pixels, code)


def draw_label(image, text, origin=(10, 25), scale=0.6, thickness=2,
               color=(255, 255, 255), background=(0, 0, 0), pad=5):
    """
    Write a status line on a filled box so it reads over any frame content

    Args:
        image: BGR image, drawn on in place
        text: Label text
        origin: Bottom-left corner of the text baseline
        scale: Font scale
        thickness: Stroke thickness
        color: Text color (BGR)
        background: Box color (BGR)
        pad: Box margin around the text in pixels

    Returns:
        The image
    """
    x, y = origin
    (text_w, text_h), baseline = cv2.getTextSize(text, LABEL_FONT, scale, thickness)
    cv2.rectangle(image, (x - pad, y - text_h - pad), (x + text_w + pad, y + baseline + pad),
                  background, cv2.FILLED)
    cv2.putText(image, text, (x, y), LABEL_FONT, scale, color, thickness, cv2.LINE_AA)
    return image
