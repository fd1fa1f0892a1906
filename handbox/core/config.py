"""
Configuration constants for the hand detection system
"""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILE = Path(__file__).parent.parent.parent / 'handbox_config.json'

# Camera settings
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480
CAMERA_FPS = 30

# Active detection method: "classifier", "neural_net" or "contour"
DETECTION_METHOD = "contour"

# Skin gamut in YCrCb (all bounds exclusive)
# Y > 80, 135 < Cr < 180, 85 < Cb < 135
SKIN_Y_MIN = 80
SKIN_CR_RANGE = (135, 180)
SKIN_CB_RANGE = (85, 135)

# Contour settings
# MIN_CONTOUR_AREA: largest contour must exceed this to count as a hand
MIN_CONTOUR_AREA = 2000
MIN_DEFECTS = 1
MAX_DEFECTS = 4
# Valleys must be sharper than this angle (degrees)
MAX_VALLEY_ANGLE = 80.0
# Valleys must be deeper than mask height / VALLEY_DEPTH_DIVISOR
VALLEY_DEPTH_DIVISOR = 8.0
# Contour detector reports a fixed box of +/- this many pixels
FEATURE_BOX_HALF_SIZE = 15

# Cascade classifier settings
CASCADE_SCALE_FACTOR = 1.1
CASCADE_MIN_NEIGHBORS = 2
CASCADE_MIN_SIZE = (10, 10)

# Neural network settings
DNN_INPUT_SIZE = (300, 300)
DNN_CONFIDENCE_THRESHOLD = 0.7

# Resource files
CASCADE_FILE = "palm.xml"
DNN_MODEL_FILE = "frozen_inference_graph.pb"
DNN_CONFIG_FILE = "frozen_inference_graph.pbtxt"

# Annotation color (BGR)
BOX_COLOR = (255, 0, 0)

_TUPLE_KEYS = ('SKIN_CR_RANGE', 'SKIN_CB_RANGE', 'CASCADE_MIN_SIZE', 'DNN_INPUT_SIZE', 'BOX_COLOR')


def load_config(path=None):
    """
    Override module constants from a JSON config file

    Keys are the constant names, e.g. {"MIN_CONTOUR_AREA": 3000}.
    Unknown keys are ignored. A missing file leaves the defaults in place,
    an unreadable one is logged and ignored.

    Args:
        path: Config file path (defaults to handbox_config.json at the project root)

    Returns:
        dict of the overrides that were applied
    """
    config_path = Path(path) if path is not None else CONFIG_FILE
    if not config_path.exists():
        return {}

    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to load config %s: %s", config_path, e)
        return {}

    applied = {}
    module_globals = globals()
    for key, value in config.items():
        if not key.isupper() or key not in module_globals:
            logger.debug("Ignoring unknown config key %s", key)
            continue
        if key in _TUPLE_KEYS:
            value = tuple(value)
        module_globals[key] = value
        applied[key] = value

    if applied:
        logger.info("Loaded %d config override(s) from %s", len(applied), config_path)
    return applied
