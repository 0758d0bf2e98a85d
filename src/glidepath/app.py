"""Window lifecycle, frame loop and command-line entry point."""

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

import pygame

from .clock import MonotonicClock
from .config import VisualizerSettings, load_settings
from .controller import MotionController
from .errors import ClockReadError, InitializationError, RenderError
from .events import InputSource
from .pygame_input import PygameInputSource
from .render import FrameRenderer, PygameRenderer, draw_frame

log = logging.getLogger(__name__)


class PygameBackend:
    """Owns the pygame display for the lifetime of the loop."""

    def __init__(self, settings: VisualizerSettings):
        self.settings = settings
        self.surface: Optional[pygame.Surface] = None

    def open(self) -> PygameRenderer:
        try:
            pygame.init()
            self.surface = pygame.display.set_mode((self.settings.window_width, self.settings.window_height))
            pygame.display.set_caption(self.settings.title)
        except pygame.error as exc:
            pygame.quit()
            raise InitializationError(f"Cannot open {self.settings.window_width}x"
                                      f"{self.settings.window_height} window: {exc}") from exc
        log.info("Opened %dx%d window", self.settings.window_width, self.settings.window_height)
        return PygameRenderer(self.surface, max_fps=self.settings.max_fps)

    def close(self) -> None:
        pygame.quit()
        self.surface = None
        log.info("Closed window")


def run_loop(
    controller: MotionController,
    clock: MonotonicClock,
    input_source: InputSource,
    renderer: FrameRenderer,
    settings: VisualizerSettings,
) -> int:
    """Run frames until a Quit event arrives.

    Each iteration reads the clock, drains input, updates the controller and
    draws synchronously. Clock and render failures propagate.

    Returns:
        Number of frames drawn.
    """
    frames = 0
    while True:
        now = clock.now()
        events = input_source.poll()
        if not controller.update(now, events):
            log.info("Quit after %d frames", frames)
            return frames
        draw_frame(renderer, controller, settings)
        frames += 1


def read_start_time(clock: MonotonicClock) -> float:
    """First clock reading; an unreadable clock at startup is an initialization failure."""
    try:
        return clock.now()
    except ClockReadError as exc:
        raise InitializationError(f"Clock unavailable at startup: {exc}") from exc


def run(settings: VisualizerSettings) -> int:
    """Open the window, run the loop and shut down.

    Returns:
        Process exit status: 0 on Quit, 1 on any fatal error.
    """
    clock = MonotonicClock()
    backend = PygameBackend(settings)
    try:
        start_time = read_start_time(clock)
        renderer = backend.open()
    except InitializationError as exc:
        log.error("Initialization failed: %s", exc)
        return 1

    controller = MotionController(
        settings.initial_position,
        segment_duration=settings.segment_duration,
        resolution=settings.path_resolution,
        start_time=start_time,
    )
    try:
        run_loop(controller, clock, PygameInputSource(), renderer, settings)
    except (ClockReadError, RenderError) as exc:
        log.error("Stopping: %s", exc)
        return 1
    finally:
        backend.close()
    return 0


def build_settings(args: argparse.Namespace) -> VisualizerSettings:
    settings = load_settings(args.preset) if args.preset else VisualizerSettings()

    overrides = {}
    if args.width is not None:
        overrides['window_width'] = args.width
    if args.height is not None:
        overrides['window_height'] = args.height
    if args.duration is not None:
        overrides['segment_duration'] = args.duration
    if args.resolution is not None:
        overrides['path_resolution'] = args.resolution
    if args.fps is not None:
        overrides['max_fps'] = args.fps

    if overrides:
        settings = VisualizerSettings.model_validate({**settings.model_dump(), **overrides})
    return settings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Click anywhere to send the square gliding there on a cubic path.")
    parser.add_argument('--preset', type=str, help='JSON file with settings overrides')
    parser.add_argument('--width', type=int, help='Window width in pixels')
    parser.add_argument('--height', type=int, help='Window height in pixels')
    parser.add_argument('--duration', type=float, help='Seconds per glide segment')
    parser.add_argument('--resolution', type=int, help='Points sampled per segment path')
    parser.add_argument('--fps', type=int, help='Frame rate cap (0 for uncapped)')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging verbosity')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        settings = build_settings(args)
    except (OSError, ValueError) as exc:
        log.error("Invalid settings: %s", exc)
        return 2
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
