"""Synthetic hands and fake collaborators shared by the tests."""

import math

import cv2
import numpy as np
import pytest

from handbox.core.errors import DetectorInitError
from handbox.core.types import BoundingBox, Frame
from handbox.detectors.hand_detector_base import HandDetectorBase

# BGR color inside the skin gamut: Y ~ 167, Cr ~ 165, Cb ~ 101
SKIN_BGR = (120, 150, 220)

HEIGHT = 400
WIDTH = 480
PALM_CENTER = (240, 260)

OPEN_HAND = (-60, -30, 0, 30, 60)
SIX_FINGERS = (-75, -45, -15, 15, 45, 75)


def draw_hand(image, color, finger_angles=OPEN_HAND, center=PALM_CENTER,
              palm_radius=60, finger_length=190, finger_width=20):
    """Palm disc with straight fingers fanning out, angles in degrees from vertical."""
    cx, cy = center
    cv2.circle(image, center, palm_radius, color, -1)
    for angle in finger_angles:
        rad = math.radians(angle)
        tip = (int(round(cx + finger_length * math.sin(rad))),
               int(round(cy - finger_length * math.cos(rad))))
        cv2.line(image, center, tip, color, finger_width)
    return image


def hand_mask(finger_angles=OPEN_HAND):
    mask = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
    return draw_hand(mask, 255, finger_angles)


def hand_frame(finger_angles=OPEN_HAND):
    pixels = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
    draw_hand(pixels, SKIN_BGR, finger_angles)
    return Frame.from_array(pixels, 'BGR')


def blank_frame(value=128, width=WIDTH, height=HEIGHT):
    return Frame.from_array(np.full((height, width, 3), value, dtype=np.uint8), 'BGR')


class StubDetector(HandDetectorBase):
    name = "stub"

    def __init__(self, box=BoundingBox(1, 5, 2, 6), fail_load=False):
        super().__init__()
        self.box = box
        self.fail_load = fail_load
        self.calls = 0
        self.load_calls = 0

    def _load_resources(self):
        self.load_calls += 1
        if self.fail_load:
            raise DetectorInitError("stub resource missing")

    def _detect(self, frame):
        self.calls += 1
        return self.box


class ListSource:
    """Serves a fixed list of frames; None entries mean 'not ready yet'."""

    def __init__(self, frames):
        self.frames = list(frames)
        self.reads = 0

    def read(self):
        self.reads += 1
        if not self.frames:
            return None
        return self.frames.pop(0)

    def is_open(self):
        return bool(self.frames)


class RecordingSink:
    def __init__(self, stop_after=None):
        self.shown = []
        self.closed = False
        self.stop_after = stop_after

    def show(self, frame, box):
        self.shown.append((frame, box))
        return self.stop_after is None or len(self.shown) < self.stop_after

    def close(self):
        self.closed = True


@pytest.fixture
def open_hand_mask():
    return hand_mask()


@pytest.fixture
def open_hand_frame():
    return hand_frame()
