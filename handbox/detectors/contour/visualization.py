"""
Debug drawing for the contour detector
"""
import cv2


def draw_valley_visualization(frame, debug_info, point=None):
    """
    Draw the selected contour, its hull and the defects on a BGR frame

    Args:
        frame: BGR image to draw on
        debug_info: Debug dict returned by find_feature_point(..., return_debug=True)
        point: Feature point (cx, cy) or None

    Returns:
        Modified frame
    """
    contour = debug_info.get('contour')
    if contour is None:
        return frame

    # Contour in green, hull in yellow
    cv2.drawContours(frame, [contour], 0, (0, 255, 0), 2)
    hull_points = cv2.convexHull(contour)
    cv2.drawContours(frame, [hull_points], 0, (0, 255, 255), 2)

    for record in debug_info.get('defects', []):
        # Accepted valleys red, rejected defects grey
        color = (0, 0, 255) if record['accepted'] else (128, 128, 128)
        cv2.circle(frame, record['far'], 5 if record['accepted'] else 3, color, -1)

    if point is not None:
        cv2.circle(frame, tuple(point), 7, (255, 0, 255), -1)

    return frame


def mask_preview(annotated, mask, size=(160, 120)):
    """Paste a small copy of the skin mask in the top-right corner"""
    h, w = annotated.shape[:2]
    if w < size[0] + 10 or h < size[1] + 10:
        return annotated

    preview = cv2.cvtColor(cv2.resize(mask, size), cv2.COLOR_GRAY2BGR)
    x_offset = w - size[0] - 10
    y_offset = 10
    annotated[y_offset:y_offset + size[1], x_offset:x_offset + size[0]] = preview
    cv2.putText(annotated, "Skin Mask", (x_offset, y_offset + size[1] + 15),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
    return annotated
