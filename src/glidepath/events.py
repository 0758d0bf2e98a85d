"""Discrete input events consumed by the motion controller."""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Protocol, Union


@dataclass(frozen=True)
class Click:
    """Pointer press at window coordinates."""
    x: float
    y: float


@dataclass(frozen=True)
class Quit:
    """Request to end the frame loop."""


Event = Union[Click, Quit]


class InputSource(Protocol):
    def poll(self) -> List[Event]:
        """Drain every pending event, oldest first. Empty when idle."""
        ...
