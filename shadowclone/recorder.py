from __future__ import annotations

from typing import List, Optional, Tuple

from .models import Direction, Maze, Position


class MoveRecorder:
    """Append-only log of the tiles the player actually stepped onto."""

    def __init__(self) -> None:
        self._moves: List[Position] = []

    def __len__(self) -> int:
        return len(self._moves)

    @property
    def moves(self) -> Tuple[Position, ...]:
        return tuple(self._moves)

    def recent(self, n: int = 30) -> List[Position]:
        return self._moves[-n:] if n > 0 else []

    def snapshot(self, limit: int) -> Tuple[Position, ...]:
        # copied suffix, later appends do not leak into it
        return tuple(self._moves[max(0, len(self._moves) - limit):])

    def try_move(self, maze: Maze, current: Position, direction: Direction) -> Optional[Position]:
        """Return the new tile and record it, or ``None`` when blocked."""
        target = current.step(direction)
        if not maze.is_open(target):
            return None
        self._moves.append(target)
        return target


__all__ = ["MoveRecorder"]
