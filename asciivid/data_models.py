"""
Data models for asciivid.
These models describe the geometry, weighting and playback state shared
between the pipeline, the playback driver and the UI.
"""
from dataclasses import dataclass
from enum import Enum

# How far the luminance weights may drift from summing to exactly 1
WEIGHT_SUM_TOLERANCE = 1e-3


@dataclass(frozen=True)
class OutputGeometry:
    """Size of the glyph grid in cells."""
    width: int
    height: int

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"geometry must be positive, got {self.width}x{self.height}")

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class LuminanceWeights:
    """Per-channel weights for the grayscale reduction."""
    red: float = 0.21
    green: float = 0.72
    blue: float = 0.07

    def __post_init__(self):
        if min(self.red, self.green, self.blue) < 0:
            raise ValueError("luminance weights must be non-negative")
        if abs(self.red + self.green + self.blue - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(
                f"luminance weights must sum to 1, got {self.red + self.green + self.blue:g}"
            )
        if self.green < self.red or self.green < self.blue:
            raise ValueError("the green weight must dominate")


class PlaybackPhase(Enum):
    """Playback driver state machine."""
    IDLE = "idle"
    LOADED = "loaded"
    PLAYING = "playing"


@dataclass(frozen=True)
class PlaybackState:
    """Snapshot of what the media source is doing."""
    is_playing: bool
    current_time: float
