"""Configuration and logging setup for asciivid.

Defaults live here as module constants. A `.env` file and ``ASCIIVID_*``
environment variables override them, and CLI flags override those in turn:

  - ASCIIVID_RESOLUTION      initial output width in cells
  - ASCIIVID_MIN_RESOLUTION  lower clamp for the width
  - ASCIIVID_MAX_RESOLUTION  upper clamp for the width
  - ASCIIVID_RAMP            preset name or literal glyph string
  - ASCIIVID_FPS             render-loop refresh rate
  - ASCIIVID_DEBUG           write debug logs to ~/.asciivid_debug.log
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .data_models import LuminanceWeights
from .ramp import DEFAULT_RAMP, IntensityRamp

load_dotenv()

# Output geometry
DEFAULT_RESOLUTION = 150
MIN_RESOLUTION = 50
MAX_RESOLUTION = 300
RESOLUTION_STEP = 10
# Glyph cells are roughly twice as tall as they are wide
CELL_ASPECT_ADJUST = 0.5

# Render loop
DEFAULT_FPS = 60.0

# Logging
LOGGER_NAME = "asciivid"
DEBUG_LOG_FILE = Path.home() / ".asciivid_debug.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("asciivid.config")


@dataclass(frozen=True)
class Settings:
    """Immutable configuration handed to the pipeline and the driver."""
    resolution: int = DEFAULT_RESOLUTION
    min_resolution: int = MIN_RESOLUTION
    max_resolution: int = MAX_RESOLUTION
    ramp: IntensityRamp = DEFAULT_RAMP
    weights: LuminanceWeights = field(default_factory=LuminanceWeights)
    cell_aspect: float = CELL_ASPECT_ADJUST
    fps: float = DEFAULT_FPS
    debug: bool = False

    def __post_init__(self):
        if self.min_resolution < 1 or self.min_resolution > self.max_resolution:
            raise ValueError(
                f"invalid resolution bounds [{self.min_resolution}, {self.max_resolution}]"
            )
        if self.fps <= 0:
            raise ValueError("fps must be positive")
        if self.cell_aspect <= 0:
            raise ValueError("cell_aspect must be positive")

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.fps


def clamp_resolution(value: int, settings: Optional[Settings] = None) -> int:
    """Clamp a requested width into the configured bounds."""
    low = settings.min_resolution if settings else MIN_RESOLUTION
    high = settings.max_resolution if settings else MAX_RESOLUTION
    return max(low, min(high, int(value)))


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using %s", name, raw, default)
        return default


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, then apply explicit overrides.

    Overrides whose value is None are ignored so argparse defaults can be
    passed straight through.
    """
    settings = Settings(
        min_resolution=_env_number("ASCIIVID_MIN_RESOLUTION", MIN_RESOLUTION, int),
        max_resolution=_env_number("ASCIIVID_MAX_RESOLUTION", MAX_RESOLUTION, int),
        fps=_env_number("ASCIIVID_FPS", DEFAULT_FPS, float),
        debug=bool(os.getenv("ASCIIVID_DEBUG")),
    )
    ramp = os.getenv("ASCIIVID_RAMP")
    if ramp:
        settings = replace(settings, ramp=IntensityRamp.resolve(ramp))
    resolution = _env_number("ASCIIVID_RESOLUTION", DEFAULT_RESOLUTION, int)

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if "ramp" in overrides:
        overrides["ramp"] = IntensityRamp.resolve(overrides["ramp"])
    resolution = overrides.pop("resolution", resolution)
    settings = replace(settings, **overrides)
    return replace(settings, resolution=clamp_resolution(resolution, settings))


def configure_logging(debug: bool = False) -> logging.Logger:
    """Route asciivid logs to the debug file, or keep them at WARNING.

    The terminal belongs to Textual while the app runs, so nothing is ever
    written to stderr from here.
    """
    root = logging.getLogger(LOGGER_NAME)
    if not debug:
        root.setLevel(logging.WARNING)
        return root
    if not any(
        isinstance(h, logging.FileHandler)
        and getattr(h, "baseFilename", "") == str(DEBUG_LOG_FILE)
        for h in root.handlers
    ):
        try:
            fh = logging.FileHandler(str(DEBUG_LOG_FILE), encoding="utf-8")
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(fh)
        except OSError:
            # never fail playback for logging issues
            pass
    root.setLevel(logging.DEBUG)
    return root
