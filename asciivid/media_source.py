"""
Media sources
Decoded frames on demand, with play/pause/seek transport
"""
import logging
import time
from pathlib import Path
from typing import Callable, Optional, Protocol

import cv2
import numpy as np
from PIL import Image

from .errors import SourceUnavailable

logger = logging.getLogger("asciivid.media_source")

# Jumping further ahead than this re-seeks instead of grabbing frame by frame
_MAX_GRAB_AHEAD = 30


class MediaSource(Protocol):
    """What the playback driver needs from a decoder."""

    width: int
    height: int

    @property
    def current_time(self) -> float: ...

    @property
    def duration(self) -> float: ...

    @property
    def is_playing(self) -> bool: ...

    @property
    def ended(self) -> bool: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, seconds: float) -> None: ...

    def read_frame(self) -> Optional[np.ndarray]: ...

    def close(self) -> None: ...


class VideoSource:
    """OpenCV-backed video whose position follows a wall clock while playing."""

    def __init__(self, path, clock: Callable[[], float] = time.monotonic):
        self.path = Path(path)
        self._clock = clock
        self._capture = cv2.VideoCapture(str(self.path))
        if not self._capture.isOpened():
            self._capture.release()
            raise SourceUnavailable(f"could not open video: {self.path}")

        self.fps = self._capture.get(cv2.CAP_PROP_FPS) or 30.0
        self.frame_count = max(0, int(self._capture.get(cv2.CAP_PROP_FRAME_COUNT)))
        self.width = int(self._capture.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT))

        self._position = 0.0
        self._started_at: Optional[float] = None
        self._frame_index = -1
        self._frame: Optional[np.ndarray] = None
        self._exhausted = False
        logger.debug("Opened %s: %sx%s, %.2f fps, %s frames",
                     self.path, self.width, self.height, self.fps, self.frame_count)

    @property
    def duration(self) -> float:
        return self.frame_count / self.fps if self.frame_count else 0.0

    @property
    def is_playing(self) -> bool:
        return self._started_at is not None

    @property
    def current_time(self) -> float:
        position = self._position
        if self._started_at is not None:
            position += self._clock() - self._started_at
        if self.duration:
            position = min(position, self.duration)
        return position

    @property
    def ended(self) -> bool:
        if self._exhausted:
            return True
        return self.is_playing and bool(self.duration) and self.current_time >= self.duration

    def play(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def pause(self) -> None:
        if self._started_at is not None:
            self._position = self.current_time
            self._started_at = None

    def seek(self, seconds: float) -> None:
        upper = self.duration if self.duration else max(0.0, seconds)
        self._position = max(0.0, min(float(seconds), upper))
        self._exhausted = False
        if self._started_at is not None:
            self._started_at = self._clock()

    def _target_index(self) -> int:
        index = int(self.current_time * self.fps)
        if self.frame_count:
            index = min(index, self.frame_count - 1)
        return index

    def read_frame(self) -> Optional[np.ndarray]:
        """RGB frame at the current position, or None if nothing decoded."""
        target = self._target_index()
        if target == self._frame_index and self._frame is not None:
            return self._frame

        if target < self._frame_index or target > self._frame_index + _MAX_GRAB_AHEAD:
            self._capture.set(cv2.CAP_PROP_POS_FRAMES, target)
            self._frame_index = target - 1

        # Skip intermediate frames without decoding them
        while self._frame_index < target - 1:
            if not self._capture.grab():
                self._exhausted = True
                return self._frame
            self._frame_index += 1

        ok, bgr = self._capture.read()
        if not ok:
            self._exhausted = True
            return self._frame
        self._frame_index = target
        self._frame = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
        return self._frame

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()


class StillSource:
    """A single image presented as a video that never advances."""

    def __init__(self, frame: np.ndarray):
        self._frame = np.asarray(frame)
        if self._frame.ndim >= 2:
            self.height, self.width = self._frame.shape[:2]
        else:
            self.height = self.width = 0
        self._playing = False

    @classmethod
    def from_file(cls, path) -> "StillSource":
        try:
            with Image.open(path) as image:
                return cls(np.asarray(image.convert("RGB")))
        except (OSError, ValueError) as e:
            raise SourceUnavailable(f"could not open image: {path}") from e

    duration = 0.0
    current_time = 0.0
    ended = False

    @property
    def is_playing(self) -> bool:
        return self._playing

    def play(self) -> None:
        self._playing = True

    def pause(self) -> None:
        self._playing = False

    def seek(self, seconds: float) -> None:
        pass

    def read_frame(self) -> Optional[np.ndarray]:
        return self._frame if self._frame.size else None

    def close(self) -> None:
        pass


def open_source(path):
    """Open an image with Pillow or a video with OpenCV, based on the extension."""
    path = Path(path)
    if not path.exists():
        raise SourceUnavailable(f"no such file: {path}")
    if path.suffix.lower() in Image.registered_extensions():
        return StillSource.from_file(path)
    return VideoSource(path)
