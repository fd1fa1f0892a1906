"""
Hand Detection System - Main Entry Point
Run one detection method on a camera or video and show the result
"""
import argparse
import logging
import sys

from handbox.core import config
from handbox.core.errors import DetectorInitError, SourceUnavailableError
from handbox.detectors import DETECTION_METHODS, create_detector
from handbox.ui import CameraSource, DetectionController, MultiSink, SnapshotSink, WindowSink

logger = logging.getLogger("handbox")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Locate a hand in a video stream')
    parser.add_argument('-m', '--method', choices=sorted(DETECTION_METHODS), default=None,
                        help=f'Detection method (default: {config.DETECTION_METHOD})')
    parser.add_argument('-s', '--source', default=None,
                        help='Camera index or video file (default: first working camera)')
    parser.add_argument('-c', '--config', default=None,
                        help='JSON file overriding handbox.core.config constants')
    parser.add_argument('--cascade', default=None, help='Cascade XML for the classifier method')
    parser.add_argument('--model', default=None, help='Frozen graph (.pb) for the neural_net method')
    parser.add_argument('--model-config', default=None, help='Graph description (.pbtxt) for the neural_net method')
    parser.add_argument('--save-dir', default=None, help='Save annotated frames to this directory')
    parser.add_argument('--only-detections', action='store_true',
                        help='With --save-dir, save only frames with a detection')
    parser.add_argument('--no-window', action='store_true', help='Do not open a display window')
    parser.add_argument('--no-mirror', action='store_true', help='Do not mirror camera frames')
    parser.add_argument('-n', '--max-frames', type=int, default=None, help='Stop after this many frames')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser.parse_args(argv)


def detector_options(args, method):
    """Constructor options for the chosen method from the command line"""
    if method == 'classifier':
        return {'cascade_path': args.cascade}
    if method == 'neural_net':
        return {'model_path': args.model, 'config_path': args.model_config}
    return {}


def build_sink(args, label):
    sinks = []
    if not args.no_window:
        sinks.append(WindowSink(label=label))
    if args.save_dir:
        sinks.append(SnapshotSink(args.save_dir, only_detections=args.only_detections))
    if not sinks:
        return None
    if len(sinks) == 1:
        return sinks[0]
    return MultiSink(*sinks)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    config.load_config(args.config)
    method = args.method or config.DETECTION_METHOD

    source_arg = args.source
    if source_arg is not None and source_arg.isdigit():
        source_arg = int(source_arg)

    detector = create_detector(method, **detector_options(args, method))
    source = CameraSource(source_arg, mirror=not args.no_mirror)
    try:
        source.open()
    except SourceUnavailableError as e:
        logger.error("%s", e)
        return 1

    controller = DetectionController(detector, source, build_sink(args, method),
                                     expected_size=source.frame_size)
    try:
        controller.run(max_ticks=args.max_frames)
    except DetectorInitError as e:
        logger.error("Cannot start %s detector: %s", method, e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        source.release()
    return 0


if __name__ == "__main__":
    sys.exit(main())
