"""Tests for DetectionController's tick loop."""

import numpy as np
import pytest

from handbox.core.errors import DetectorInitError, DetectorNotReadyError, FrameShapeError
from handbox.core.types import BoundingBox, Frame
from handbox.detectors import ContourGeometryDetector
from handbox.ui.detection_controller import DetectionController, TickResult

from conftest import ListSource, RecordingSink, StubDetector, blank_frame, hand_frame


def _frame(width=64, height=48):
    return Frame.from_array(np.zeros((height, width, 3), dtype=np.uint8))


def _controller(frames, detector=None, sink=None, **kwargs):
    return DetectionController(detector or StubDetector(), ListSource(frames),
                               sink if sink is not None else RecordingSink(),
                               idle_delay=0, **kwargs)


class TestLifecycle:
    def test_tick_before_warm_up(self):
        controller = _controller([_frame()])
        with pytest.raises(DetectorNotReadyError):
            controller.tick()

    def test_warm_up_loads_once(self):
        detector = StubDetector()
        controller = _controller([_frame()], detector=detector)

        controller.warm_up()
        controller.warm_up()

        assert detector.load_calls == 1
        assert detector.is_loaded

    def test_init_failure_is_fatal(self):
        detector = StubDetector(fail_load=True)
        sink = RecordingSink()
        controller = _controller([_frame()], detector=detector, sink=sink)

        with pytest.raises(DetectorInitError):
            controller.run()
        assert detector.calls == 0
        assert sink.shown == []
        assert sink.closed

    def test_run_cleans_up(self):
        detector = StubDetector()
        sink = RecordingSink()

        _controller([_frame()], detector=detector, sink=sink).run()

        assert not detector.is_loaded
        assert sink.closed


class TestTick:
    def test_result_forwarded_to_sink(self):
        frame = _frame()
        sink = RecordingSink()
        controller = _controller([frame], sink=sink)
        controller.warm_up()

        result = controller.tick()

        assert result == TickResult(frame, BoundingBox(1, 5, 2, 6))
        assert sink.shown == [(frame, BoundingBox(1, 5, 2, 6))]

    def test_no_frame_ready_skips_tick(self):
        detector = StubDetector()
        sink = RecordingSink()
        controller = _controller([None], detector=detector, sink=sink)
        controller.warm_up()

        assert controller.tick() is None
        assert detector.calls == 0
        assert sink.shown == []

    def test_miss_is_not_an_error(self):
        controller = _controller([_frame()], detector=StubDetector(box=None))
        controller.warm_up()

        result = controller.tick()

        assert result.box is None

    def test_malformed_frame_rejected_then_recovers(self):
        bad = Frame(width=64, height=48, pixels=np.zeros((10, 10, 3), dtype=np.uint8))
        good = _frame()
        controller = _controller([bad, good])
        controller.warm_up()

        with pytest.raises(FrameShapeError):
            controller.tick()
        assert controller.tick().frame is good

    def test_unexpected_size_rejected(self):
        controller = _controller([_frame(32, 32)], expected_size=(64, 48))
        controller.warm_up()

        with pytest.raises(FrameShapeError):
            controller.tick()

    def test_no_state_between_ticks(self):
        controller = _controller([hand_frame(), blank_frame(), hand_frame()],
                                 detector=ContourGeometryDetector())
        controller.warm_up()

        boxes = [controller.tick().box for _ in range(3)]

        assert boxes[0] is not None
        assert boxes[1] is None
        assert boxes[2] == boxes[0]


class TestRun:
    def test_processes_all_frames(self):
        detector = StubDetector()
        processed = _controller([_frame(), None, _frame(), _frame()], detector=detector).run()

        assert processed == 3
        assert detector.calls == 3

    def test_malformed_frame_does_not_stop_loop(self):
        sink = RecordingSink()
        frames = [_frame(), _frame(32, 32), _frame()]

        processed = _controller(frames, sink=sink, expected_size=(64, 48)).run()

        assert processed == 2
        assert len(sink.shown) == 2

    def test_sink_can_stop_loop(self):
        sink = RecordingSink(stop_after=2)

        processed = _controller([_frame() for _ in range(5)], sink=sink).run()

        assert processed == 2

    def test_max_ticks(self):
        processed = _controller([_frame() for _ in range(5)]).run(max_ticks=3)
        assert processed == 3

    def test_without_sink(self):
        controller = DetectionController(StubDetector(), ListSource([_frame()]), idle_delay=0)
        assert controller.run() == 1
