"""
Conversion cycle
sample -> quantize -> assemble, plus the state the playback loop shares
"""
import logging
import threading
from typing import Optional, Tuple

import numpy as np

from .assembler import assemble
from .config import CELL_ASPECT_ADJUST, Settings, clamp_resolution
from .data_models import LuminanceWeights, OutputGeometry
from .errors import SourceUnavailable
from .quantizer import DEFAULT_WEIGHTS, quantize_buffer
from .ramp import DEFAULT_RAMP, IntensityRamp
from .sampler import compute_geometry, sample_frame

logger = logging.getLogger("asciivid.converter")


def convert(frame, width: int, ramp: IntensityRamp = DEFAULT_RAMP,
            weights: LuminanceWeights = DEFAULT_WEIGHTS,
            cell_aspect: float = CELL_ASPECT_ADJUST) -> str:
    """
    Convert one decoded RGB frame into Frame Text.

    Raises SourceUnavailable if the frame is missing or has no area.
    """
    if frame is None:
        raise SourceUnavailable("no frame data")
    frame = np.asarray(frame)
    if frame.ndim < 2:
        raise SourceUnavailable("frame has no area")
    height, src_width = frame.shape[:2]
    geometry = compute_geometry(src_width, height, width, cell_aspect)
    pixels = sample_frame(frame, geometry)
    indices = quantize_buffer(pixels, len(ramp), weights)
    return assemble(indices, ramp)


class FrameConverter:
    """Owns the resolution, ramp and last Frame Text for a player.

    Mutations and conversions are serialised with one lock, so a resolution
    change always lands between two conversions and never during one.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or Settings()
        self.settings = settings
        self.ramp = settings.ramp
        self.weights = settings.weights
        self.cell_aspect = settings.cell_aspect
        self.resolution = clamp_resolution(settings.resolution, settings)
        self.geometry: Optional[OutputGeometry] = None
        self.frame_text = ""
        self.conversions = 0
        self._geometry_key: Optional[Tuple[int, int, int]] = None
        self._lock = threading.Lock()

    def set_resolution(self, value: int) -> int:
        """Clamp and apply a new output width; returns the applied value."""
        clamped = clamp_resolution(value, self.settings)
        if clamped != value:
            logger.debug("Resolution %s clamped to %s", value, clamped)
        with self._lock:
            self.resolution = clamped
        return clamped

    def set_ramp(self, ramp: IntensityRamp) -> None:
        with self._lock:
            self.ramp = ramp

    def _update_geometry(self, source_width: int, source_height: int) -> OutputGeometry:
        key = (self.resolution, source_width, source_height)
        if key != self._geometry_key:
            self.geometry = compute_geometry(source_width, source_height,
                                             self.resolution, self.cell_aspect)
            self._geometry_key = key
            logger.debug("Output geometry %s for %sx%s source",
                         self.geometry, source_width, source_height)
        return self.geometry

    def refresh(self, source) -> str:
        """Convert the source's current frame.

        Returns the new Frame Text, or the previous one if the source has
        nothing to show or another conversion is still running.
        """
        if not self._lock.acquire(blocking=False):
            logger.debug("Conversion already in flight, skipping")
            return self.frame_text
        try:
            if source is None or source.width <= 0 or source.height <= 0:
                raise SourceUnavailable("source not loaded")
            geometry = self._update_geometry(source.width, source.height)
            frame = source.read_frame()
            if frame is None:
                raise SourceUnavailable("source returned no frame")
            pixels = sample_frame(frame, geometry)
            indices = quantize_buffer(pixels, len(self.ramp), self.weights)
            self.frame_text = assemble(indices, self.ramp)
            self.conversions += 1
        except SourceUnavailable as e:
            logger.warning("Skipping conversion: %s", e)
        finally:
            self._lock.release()
        return self.frame_text
