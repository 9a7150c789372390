"""
Playback driver
Runs the conversion cycle from a render loop while playing, and once per
load/seek event while paused.
"""
import logging
from typing import Callable, Optional, Protocol

from .config import Settings
from .converter import FrameConverter
from .data_models import PlaybackPhase, PlaybackState
from .ramp import IntensityRamp

logger = logging.getLogger("asciivid.playback")


class TimerHandle(Protocol):
    def stop(self) -> None: ...


# schedule(interval, callback) -> handle; Textual's Widget.set_interval fits
Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


class PlaybackDriver:
    """State machine tying a media source, a render loop and a display together.

    IDLE -> LOADED on load(); LOADED <-> PLAYING on play()/pause();
    PLAYING -> LOADED at end of source, after rewinding and converting once.
    """

    def __init__(self, schedule: Scheduler, on_frame: Callable[[str], None],
                 settings: Optional[Settings] = None,
                 converter: Optional[FrameConverter] = None,
                 on_state: Optional[Callable[[PlaybackPhase], None]] = None):
        self.settings = settings or Settings()
        self.converter = converter or FrameConverter(self.settings)
        self._schedule = schedule
        self._on_frame = on_frame
        self._on_state = on_state
        self._timer: Optional[TimerHandle] = None
        self.source = None
        self.phase = PlaybackPhase.IDLE

    def _set_phase(self, phase: PlaybackPhase) -> None:
        if phase is self.phase:
            return
        self.phase = phase
        # Hosts resync even when no new frame follows the change
        if self._on_state is not None:
            self._on_state(phase)

    @property
    def is_playing(self) -> bool:
        return self.phase is PlaybackPhase.PLAYING

    @property
    def state(self) -> PlaybackState:
        current_time = self.source.current_time if self.source is not None else 0.0
        return PlaybackState(is_playing=self.is_playing, current_time=current_time)

    def _render(self) -> None:
        done = self.converter.conversions
        text = self.converter.refresh(self.source)
        # A skipped cycle leaves the display on the previous frame
        if self.converter.conversions != done:
            self._on_frame(text)

    def _start_loop(self) -> None:
        self._stop_loop()
        self._timer = self._schedule(self.settings.frame_interval, self.tick)

    def _stop_loop(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def load(self, source) -> None:
        """Swap in a new source, paused at its current position."""
        self._stop_loop()
        if self.source is not None and self.source is not source:
            self.source.close()
        self.source = source
        source.pause()
        self._set_phase(PlaybackPhase.LOADED)
        logger.debug("Loaded source %sx%s", source.width, source.height)
        self._render()

    def unload(self) -> None:
        self._stop_loop()
        if self.source is not None:
            self.source.close()
        self.source = None
        self._set_phase(PlaybackPhase.IDLE)

    def play(self) -> None:
        if self.phase is not PlaybackPhase.LOADED:
            return
        self.source.play()
        self._set_phase(PlaybackPhase.PLAYING)
        self._start_loop()

    def pause(self) -> None:
        if self.phase is not PlaybackPhase.PLAYING:
            return
        self._stop_loop()
        self.source.pause()
        self._set_phase(PlaybackPhase.LOADED)

    def toggle(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def seek(self, seconds: float) -> None:
        if self.source is None:
            return
        self.source.seek(max(0.0, seconds))
        if not self.is_playing:
            self._render()

    def set_resolution(self, value: int) -> int:
        """Apply a new output width; paused players redraw straight away."""
        applied = self.converter.set_resolution(value)
        if self.phase is PlaybackPhase.LOADED:
            self._render()
        return applied

    def set_ramp(self, ramp: IntensityRamp) -> None:
        self.converter.set_ramp(ramp)
        if self.phase is PlaybackPhase.LOADED:
            self._render()

    def tick(self) -> None:
        """One render-loop step."""
        if not self.is_playing:
            return
        if self.source.ended:
            self._finish()
            return
        self._render()

    def _finish(self) -> None:
        logger.debug("End of source, rewinding")
        self._stop_loop()
        self.source.pause()
        self.source.seek(0.0)
        self._set_phase(PlaybackPhase.LOADED)
        self._render()
