import numpy as np
import pytest


def solid_frame(value, width=160, height=90):
    """RGB frame filled with one colour (an int or an (r, g, b) tuple)."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, :] = value
    return frame


class FakeTimer:
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeScheduler:
    """Stands in for Textual's set_interval; ticks are fired by hand."""

    def __init__(self):
        self.timers = []

    def __call__(self, interval, callback):
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self):
        return [t for t in self.timers if not t.stopped]

    def fire(self, times=1):
        for _ in range(times):
            for timer in self.active:
                timer.callback()


class FakeSource:
    """Media source double recording transport calls."""

    def __init__(self, frame=None, width=None, height=None):
        self.frame = solid_frame(128) if frame is None else frame
        self.height, self.width = self.frame.shape[:2]
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height
        self.duration = 10.0
        self.current_time = 0.0
        self.is_playing = False
        self.ended = False
        self.closed = False
        self.seeks = []

    def play(self):
        self.is_playing = True

    def pause(self):
        self.is_playing = False

    def seek(self, seconds):
        self.seeks.append(seconds)
        self.current_time = seconds
        self.ended = False

    def read_frame(self):
        return self.frame

    def close(self):
        self.closed = True


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def source():
    return FakeSource()
