"""Frame drawing: renderer protocol, pygame renderer and the frame layout."""

from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, Sequence, Tuple
import numpy as np
import pygame

from .errors import RenderError

if TYPE_CHECKING:
    from .config import Color, VisualizerSettings
    from .controller import MotionController

Rect = Tuple[float, float, float, float]


class FrameRenderer(Protocol):
    def clear(self, color: Color) -> None: ...

    def fill_rect(self, rect: Rect, color: Color) -> None: ...

    def draw_polyline(self, points: np.ndarray, color: Color) -> None: ...

    def present(self) -> None: ...


def marker_rect(center: Sequence[float], size: float) -> Rect:
    """Square of side ``size`` centred on ``center`` as ``(x, y, w, h)``."""
    half = size / 2.0
    return (float(center[0]) - half, float(center[1]) - half, float(size), float(size))


class PygameRenderer:
    """Draws onto a pygame surface and flips the display on present.

    Every pygame failure surfaces as :class:`RenderError`.
    """

    def __init__(self, surface: pygame.Surface, max_fps: int = 0):
        self.surface = surface
        self.max_fps = max_fps
        self._pacer = pygame.time.Clock()

    def clear(self, color):
        try:
            self.surface.fill(color)
        except (pygame.error, ValueError, TypeError) as exc:
            raise RenderError(f"clear failed: {exc}") from exc

    def fill_rect(self, rect, color):
        x, y, w, h = rect
        try:
            pygame.draw.rect(self.surface, color, pygame.Rect(round(x), round(y), round(w), round(h)))
        except (pygame.error, ValueError, TypeError) as exc:
            raise RenderError(f"fill_rect failed: {exc}") from exc

    def draw_polyline(self, points, color):
        # A single point has no segment to draw
        if len(points) < 2:
            return
        try:
            pygame.draw.lines(self.surface, color, False, np.asarray(points).tolist())
        except (pygame.error, ValueError, TypeError) as exc:
            raise RenderError(f"draw_polyline failed: {exc}") from exc

    def present(self):
        try:
            pygame.display.flip()
        except (pygame.error, ValueError, TypeError) as exc:
            raise RenderError(f"present failed: {exc}") from exc
        if self.max_fps > 0:
            self._pacer.tick(self.max_fps)


def draw_frame(renderer: FrameRenderer, controller: MotionController, settings: VisualizerSettings) -> None:
    """Draw background, target, remaining path and entity, then present."""
    renderer.clear(settings.background_color)
    renderer.fill_rect(marker_rect(controller.target, settings.target_size), settings.target_color)
    renderer.draw_polyline(controller.render_window, settings.path_color)
    renderer.fill_rect(marker_rect(controller.position, settings.entity_size), settings.entity_color)
    renderer.present()
