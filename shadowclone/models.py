from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, NamedTuple, Optional, Tuple


class Scene(Enum):
    MENU = auto()
    GAME = auto()
    OVER = auto()
    SETTINGS = auto()
    TUTORIAL = auto()


class Cell(Enum):
    WALL = 1
    OPEN = 0
    GOAL = 2


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class CloneKind(str, Enum):
    BASIC = "basic"
    WRAITH = "wraith"


class PowerupKind(str, Enum):
    SPEED = "speed"
    CLOAK = "cloak"
    FREEZE = "freeze"


class Objective(str, Enum):
    SURVIVAL = "SURVIVAL"
    GOAL = "GOAL"


class Outcome(Enum):
    CAUGHT = auto()
    ESCAPED = auto()
    ABANDONED = auto()


class Position(NamedTuple):
    x: int
    y: int

    def step(self, direction: Direction) -> "Position":
        return Position(self.x + direction.dx, self.y + direction.dy)


@dataclass
class Maze:
    """Row-major grid; ``cells[y][x]``."""

    cells: List[List[Cell]]

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def height(self) -> int:
        return len(self.cells)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def cell(self, pos: Position) -> Cell:
        return self.cells[pos.y][pos.x]

    def is_open(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self.cells[pos.y][pos.x] is not Cell.WALL

    def open_cells(self) -> List[Position]:
        return [
            Position(x, y)
            for y, row in enumerate(self.cells)
            for x, c in enumerate(row)
            if c is not Cell.WALL
        ]

    def goal(self) -> Optional[Position]:
        for y, row in enumerate(self.cells):
            for x, c in enumerate(row):
                if c is Cell.GOAL:
                    return Position(x, y)
        return None


@dataclass
class Clone:
    snapshot: Tuple[Position, ...]
    kind: CloneKind = CloneKind.BASIC
    spawn_tick: int = 0
    cursor: int = 0
    frozen: bool = False
    frozen_until: float = 0.0

    @property
    def position(self) -> Position:
        return self.snapshot[self.cursor]

    @property
    def last_index(self) -> int:
        return len(self.snapshot) - 1

    @property
    def exhausted(self) -> bool:
        return self.cursor >= self.last_index

    def age(self, tick: int) -> int:
        return max(0, tick - self.spawn_tick)


@dataclass
class Pickup:
    pos: Position
    kind: PowerupKind


@dataclass
class ActiveEffect:
    kind: PowerupKind
    expires_at: float

    def is_active(self, now: float) -> bool:
        return now < self.expires_at

    def remaining_ms(self, now: float) -> float:
        return max(0.0, self.expires_at - now)


__all__ = [
    "Scene",
    "Cell",
    "Direction",
    "CloneKind",
    "PowerupKind",
    "Objective",
    "Outcome",
    "Position",
    "Maze",
    "Clone",
    "Pickup",
    "ActiveEffect",
]
