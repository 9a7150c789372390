"""
ASCII Video Player Widget for Textual
Converts the loaded source to character art on every refresh tick
"""
import logging
from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

from .config import Settings, clamp_resolution
from .playback import PlaybackDriver

logger = logging.getLogger("asciivid.widget")


def format_time(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


class ASCIIVideoPlayer(Widget):
    """Widget that plays a media source as live ASCII art."""

    DEFAULT_CSS = """
    ASCIIVideoPlayer {
        height: auto;
        layout: vertical;
    }
    ASCIIVideoPlayer #video-frame {
        width: auto;
    }
    ASCIIVideoPlayer #video-controls {
        text-style: dim;
        margin-top: 1;
    }
    """

    resolution = reactive(0)
    is_playing = reactive(False)

    def __init__(self, source=None, settings: Optional[Settings] = None, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings or Settings()
        self.source = source
        self.viewer: Optional[Static] = None  # Static containing the frame text
        self.driver = PlaybackDriver(
            schedule=self.set_interval,
            on_frame=self._show_frame,
            settings=self.settings,
            on_state=self._sync_playback,
        )
        self.set_reactive(ASCIIVideoPlayer.resolution, self.driver.converter.resolution)

    def compose(self) -> ComposeResult:
        """Compose with frame viewer and status line."""
        self.viewer = Static(Text("No video loaded"), id="video-frame")
        yield self.viewer
        yield Static("", id="video-controls", classes="video-controls")

    def on_mount(self) -> None:
        """Draw the first frame once the viewer exists."""
        if self.source is not None:
            self.load(self.source)
        else:
            self._update_controls()

    def on_unmount(self) -> None:
        self.driver.unload()

    def _show_frame(self, frame_text: str) -> None:
        if self.viewer is not None:
            # rich Text so glyphs like "[" are never parsed as markup
            self.viewer.update(Text(frame_text, no_wrap=True, overflow="crop"))
        self._sync_playback()

    def _sync_playback(self, phase=None) -> None:
        """Mirror the driver phase, e.g. after it stops itself at end of source."""
        self.is_playing = self.driver.is_playing
        self._update_controls()

    def _update_controls(self) -> None:
        try:
            controls = self.query_one("#video-controls", Static)
        except NoMatches:
            return
        if self.driver.source is None:
            controls.update("No video loaded")
            return
        state = self.driver.state
        status = "▶" if state.is_playing else "⏸"
        geometry = self.driver.converter.geometry
        size = str(geometry) if geometry else "-"
        controls.update(
            f"{status} {format_time(state.current_time)}/{format_time(self.driver.source.duration)}"
            f" | {size} cells | resolution {self.resolution} | click or space to play/pause"
        )

    def load(self, source) -> None:
        """Show a new source, paused on its first frame."""
        logger.debug("Loading source into player %s", self.id)
        self.source = source
        self.driver.load(source)
        self.is_playing = False

    def play(self) -> None:
        """Start playing the video."""
        self.driver.play()
        self.is_playing = self.driver.is_playing

    def pause(self) -> None:
        """Pause the video."""
        self.driver.pause()
        self.is_playing = self.driver.is_playing

    def toggle(self) -> None:
        if self.driver.is_playing:
            self.pause()
        else:
            self.play()

    def seek(self, seconds: float) -> None:
        self.driver.seek(seconds)
        self._update_controls()

    def reset(self) -> None:
        """Rewind to the first frame."""
        self.seek(0.0)

    def validate_resolution(self, value: int) -> int:
        return clamp_resolution(value, self.settings)

    def watch_resolution(self, value: int) -> None:
        self.driver.set_resolution(value)
        self._update_controls()

    def watch_is_playing(self, playing: bool) -> None:
        self._update_controls()

    def on_click(self) -> None:
        """Toggle play/pause on click."""
        self.toggle()
