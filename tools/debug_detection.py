"""
Debug Detection Tool
Shows the skin mask, the hand contour and every convexity defect so you can
see why the contour detector does or does not find a hand
"""
import argparse
import logging
import sys
from pathlib import Path

import cv2

sys.path.insert(0, str(Path(__file__).parent.parent))

from handbox.core import config
from handbox.core.errors import SourceUnavailableError
from handbox.detectors import ContourGeometryDetector
from handbox.detectors.contour.skin_detection import extract_skin_mask
from handbox.detectors.contour.visualization import draw_valley_visualization, mask_preview
from handbox.ui import CameraSource, draw_bounding_box
from handbox.core.utils import draw_label

logger = logging.getLogger("handbox.tools.debug")


def describe(debug_info):
    """One-line summary of a find_feature_point debug dict"""
    accepted = sum(1 for d in debug_info['defects'] if d['accepted'])
    return (f"{debug_info['reason']} | area {int(debug_info['area'])} | "
            f"defects {len(debug_info['defects'])} | valleys {accepted}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Inspect the contour detector step by step')
    parser.add_argument('-s', '--source', default=None, help='Camera index or video file')
    parser.add_argument('-c', '--config', default=None, help='JSON config overrides')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    config.load_config(args.config)

    print("=" * 70)
    print("CONTOUR DETECTION DEBUG TOOL")
    print("=" * 70)
    print("  red dots  - accepted finger valleys")
    print("  grey dots - rejected defects (too shallow or too wide)")
    print("  'p' - Print defect details")
    print("  'q' - Quit")
    print("=" * 70)

    source_arg = int(args.source) if args.source and args.source.isdigit() else args.source
    source = CameraSource(source_arg)
    try:
        source.open()
    except SourceUnavailableError as e:
        print(f"Error: {e}")
        return 1

    detector = ContourGeometryDetector()
    detector.load()

    try:
        while source.is_open():
            frame = source.read()
            if frame is None:
                continue

            mask = extract_skin_mask(frame)
            point, debug_info = detector.feature_point_from_mask(mask, return_debug=True)
            box = detector.box_around(point, frame.width, frame.height) if point is not None else None

            annotated = frame.pixels.copy()
            draw_valley_visualization(annotated, debug_info, point)
            draw_bounding_box(annotated, box)
            mask_preview(annotated, mask)
            draw_label(annotated, describe(debug_info), scale=0.5, thickness=1)

            cv2.imshow('Contour Debug', annotated)
            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            elif key == ord('p'):
                print(describe(debug_info))
                for record in debug_info['defects']:
                    angle = record['angle']
                    angle_text = "n/a" if angle is None else f"{angle:.1f}"
                    print(f"  far={record['far']} depth={record['depth']:.1f} "
                          f"angle={angle_text} accepted={record['accepted']}")
    finally:
        source.release()
        detector.cleanup()
        cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    sys.exit(main())
