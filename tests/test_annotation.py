"""Tests for drawing and saving annotated frames."""

import numpy as np
import pytest
from PIL import Image

from handbox.core.types import BoundingBox, Frame
from handbox.core.utils import draw_label
from handbox.ui.annotation import MultiSink, SnapshotSink, WindowSink, annotate, draw_bounding_box

from conftest import RecordingSink


def _frame():
    return Frame.from_array(np.zeros((50, 60, 3), dtype=np.uint8))


def test_draw_box_in_blue():
    image = np.zeros((50, 60, 3), dtype=np.uint8)

    draw_bounding_box(image, BoundingBox(10, 20, 10, 30))

    assert tuple(image[10, 10]) == (255, 0, 0)
    assert tuple(image[30, 20]) == (255, 0, 0)
    assert not image[20, 15].any()


def test_no_box_draws_nothing():
    image = np.zeros((10, 10, 3), dtype=np.uint8)
    assert not draw_bounding_box(image, None).any()


def test_annotate_leaves_frame_untouched():
    frame = _frame()
    annotated = annotate(frame, BoundingBox(1, 5, 1, 5))

    assert annotated.any()
    assert not frame.pixels.any()


def test_rgb_frame_annotated_as_bgr():
    frame = Frame.from_array(np.zeros((10, 10, 3), dtype=np.uint8), 'RGB')
    annotated = annotate(frame, BoundingBox(0, 5, 0, 5))
    assert tuple(annotated[0, 0]) == (255, 0, 0)


def test_snapshot_sink_writes_png(tmp_path):
    sink = SnapshotSink(tmp_path / "out")

    assert sink.show(_frame(), BoundingBox(10, 20, 10, 20))
    sink.close()

    assert len(sink.saved) == 1
    image = Image.open(sink.saved[0])
    assert image.size == (60, 50)
    # Saved as RGB, so the blue BGR box is blue here too
    assert image.getpixel((10, 10)) == (0, 0, 255)


def test_snapshot_sink_only_detections(tmp_path):
    sink = SnapshotSink(tmp_path, only_detections=True)

    sink.show(_frame(), None)
    sink.show(_frame(), BoundingBox(1, 2, 1, 2))

    assert [p.name for p in sink.saved] == ["frame_000002.png"]


def test_multi_sink():
    first, second = RecordingSink(), RecordingSink(stop_after=1)
    sink = MultiSink(first, second)

    assert sink.show(_frame(), None) is False
    assert len(first.shown) == len(second.shown) == 1

    sink.close()
    assert first.closed and second.closed


def test_draw_label_fills_background():
    image = np.full((40, 200, 3), 200, dtype=np.uint8)

    draw_label(image, "NO HAND", origin=(10, 25))

    assert tuple(image[25, 6]) == (0, 0, 0)
    assert tuple(image[39, 199]) == (200, 200, 200)


class TestWindowSinkStatus:
    def test_status_line(self):
        sink = WindowSink(label="contour")
        assert sink.status_text(None) == "contour | NO HAND | FPS: 0"
        assert sink.status_text(BoundingBox(1, 2, 1, 2)).startswith("contour | DETECTED")

    def test_fps_smoothing(self):
        sink = WindowSink(smoothing=0.5)

        sink.update_fps(now=10.0)
        assert sink.fps == 0.0
        sink.update_fps(now=10.1)
        assert sink.fps == pytest.approx(5.0)
        sink.update_fps(now=10.2)
        assert sink.fps == pytest.approx(7.5)

    def test_repeated_timestamp_ignored(self):
        sink = WindowSink()
        sink.update_fps(now=1.0)
        sink.update_fps(now=1.0)
        assert sink.fps == 0.0
