"""Input source backed by the pygame event queue."""

from __future__ import annotations
from typing import List, Optional

import pygame

from .events import Click, Event, Quit


def translate_event(event: pygame.event.Event) -> Optional[Event]:
    """Map a pygame event onto a visualizer event, or ``None`` to ignore it."""
    if event.type == pygame.QUIT:
        return Quit()
    if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
        return Quit()
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        x, y = event.pos
        return Click(float(x), float(y))
    return None


class PygameInputSource:
    """Pulls the pygame event queue once per frame."""

    def poll(self) -> List[Event]:
        events = []
        for raw in pygame.event.get():
            event = translate_event(raw)
            if event is not None:
                events.append(event)
        return events
