"""
Frame sampler
Downscales a decoded frame onto the glyph grid
"""
import math

import cv2
import numpy as np

from .config import CELL_ASPECT_ADJUST
from .data_models import OutputGeometry
from .errors import SourceUnavailable


def compute_geometry(source_width: int, source_height: int, width: int,
                     cell_aspect: float = CELL_ASPECT_ADJUST) -> OutputGeometry:
    """
    Work out the grid size for a source frame.

    Args:
        source_width: Native frame width in pixels
        source_height: Native frame height in pixels
        width: Requested output width in cells
        cell_aspect: Width/height ratio of one glyph cell

    The height keeps the source aspect ratio after compensating for glyph
    cells being taller than they are wide, and never drops below one row.
    """
    if source_width <= 0 or source_height <= 0:
        raise SourceUnavailable(f"source has no area ({source_width}x{source_height})")
    if width < 1:
        raise ValueError(f"output width must be positive, got {width}")
    aspect_ratio = source_height / source_width
    height = math.floor(aspect_ratio * width * cell_aspect)
    return OutputGeometry(width=width, height=max(1, height))


def _as_rgb(frame: np.ndarray) -> np.ndarray:
    if frame.ndim == 2:
        return cv2.cvtColor(frame, cv2.COLOR_GRAY2RGB)
    if frame.ndim == 3 and frame.shape[2] == 4:
        return cv2.cvtColor(frame, cv2.COLOR_RGBA2RGB)
    if frame.ndim == 3 and frame.shape[2] == 3:
        return frame
    raise SourceUnavailable(f"unsupported frame shape {frame.shape}")


def sample_frame(frame, geometry: OutputGeometry) -> np.ndarray:
    """Resample an RGB frame to one pixel per cell (box filter)."""
    if frame is None:
        raise SourceUnavailable("no frame data")
    frame = np.asarray(frame)
    if frame.size == 0 or frame.ndim < 2 or frame.shape[0] == 0 or frame.shape[1] == 0:
        raise SourceUnavailable("frame has no area")
    if frame.dtype != np.uint8:
        frame = np.clip(frame, 0, 255).astype(np.uint8)
    rgb = np.ascontiguousarray(_as_rgb(frame))
    # INTER_AREA averages the covered source pixels when shrinking
    try:
        return cv2.resize(rgb, (geometry.width, geometry.height),
                          interpolation=cv2.INTER_AREA)
    except cv2.error as e:
        raise SourceUnavailable(f"could not resample frame: {e}") from e
