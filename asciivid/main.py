"""
asciivid application
Textual app hosting the player, and the command line entry point
"""
import argparse
import logging
import sys
from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer

from .ascii_video_widget import ASCIIVideoPlayer
from .config import RESOLUTION_STEP, Settings, configure_logging, load_settings
from .converter import convert
from .errors import SourceUnavailable
from .media_source import open_source

logger = logging.getLogger("asciivid.main")

SEEK_STEP = 5.0


class AsciiVidApp(App):
    CSS = """
    Screen {
        background: black;
    }
    #player-scroll {
        color: #5eead4;
    }
    """

    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("space", "toggle_play", "Play/Pause"),
        Binding("plus,equals_sign", "resolution_up", "Resolution +"),
        Binding("minus", "resolution_down", "Resolution -"),
        Binding("r", "restart", "Restart"),
        Binding("left", "seek_back", "Back 5s", show=False, priority=True),
        Binding("right", "seek_forward", "Forward 5s", show=False, priority=True),
    ]

    def __init__(self, source=None, settings: Optional[Settings] = None, **kwargs):
        super().__init__(**kwargs)
        self.source = source
        self.settings = settings or Settings()

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="player-scroll"):
            yield ASCIIVideoPlayer(self.source, settings=self.settings, id="player")
        yield Footer()

    @property
    def player(self) -> ASCIIVideoPlayer:
        return self.query_one("#player", ASCIIVideoPlayer)

    def action_toggle_play(self) -> None:
        self.player.toggle()

    def action_resolution_up(self) -> None:
        self.player.resolution += RESOLUTION_STEP

    def action_resolution_down(self) -> None:
        self.player.resolution -= RESOLUTION_STEP

    def action_restart(self) -> None:
        self.player.reset()

    def action_seek_back(self) -> None:
        player = self.player
        player.seek(player.driver.state.current_time - SEEK_STEP)

    def action_seek_forward(self) -> None:
        player = self.player
        player.seek(player.driver.state.current_time + SEEK_STEP)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asciivid", description="Play a video as live ASCII art in the terminal"
    )
    parser.add_argument("source", help="Path to a video or image file")
    parser.add_argument("--resolution", "-r", type=int, default=None,
                        help="Output width in characters")
    parser.add_argument("--ramp", default=None,
                        help="Ramp preset (default, standard, simple, blocks) or glyph string")
    parser.add_argument("--fps", type=float, default=None, help="Render loop refresh rate")
    parser.add_argument("--once", action="store_true",
                        help="Print the first frame to stdout and exit")
    parser.add_argument("--debug", action="store_true", default=None,
                        help="Write debug logs to ~/.asciivid_debug.log")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(
            resolution=args.resolution, ramp=args.ramp, fps=args.fps, debug=args.debug
        )
    except ValueError as e:
        print(f"asciivid: {e}", file=sys.stderr)
        return 2
    configure_logging(settings.debug)

    try:
        source = open_source(args.source)
    except SourceUnavailable as e:
        logger.error("Could not open %s: %s", args.source, e)
        print(f"asciivid: {e}", file=sys.stderr)
        return 1

    if args.once:
        try:
            sys.stdout.write(convert(source.read_frame(), settings.resolution,
                                     settings.ramp, settings.weights, settings.cell_aspect))
        except SourceUnavailable as e:
            print(f"asciivid: {e}", file=sys.stderr)
            return 1
        finally:
            source.close()
        return 0

    logger.debug("Starting app for %s", args.source)
    AsciiVidApp(source, settings=settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
