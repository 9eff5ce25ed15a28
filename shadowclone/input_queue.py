from __future__ import annotations

from collections import deque
from typing import Deque, List, Tuple

from .models import Direction

RELEASE_PREFIX = "-"


class InputQueue:
    """Names pushed by keyboard or GPIO, drained once per frame."""

    def __init__(self) -> None:
        self._q: Deque[str] = deque()

    def push(self, name: str) -> None:
        self._q.append(name)

    def pop_all(self) -> list[str]:
        out: List[str] = list(self._q)
        self._q.clear()
        return out

    def pop_directions(self) -> list[Tuple[Direction, bool]]:
        """Drain as ``(direction, pressed)``; ``"-UP"`` marks a release."""
        out: List[Tuple[Direction, bool]] = []
        for name in self.pop_all():
            name = str(name).upper()
            pressed = not name.startswith(RELEASE_PREFIX)
            d = Direction.__members__.get(name.lstrip(RELEASE_PREFIX))
            if d is not None:
                out.append((d, pressed))
        return out


class EventQueue(InputQueue):
    """Discrete game events (spawns, pickups, run end) for audio and HUD."""


__all__ = ["RELEASE_PREFIX", "InputQueue", "EventQueue"]
