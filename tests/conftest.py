from __future__ import annotations

import os
import tempfile
from pathlib import Path

# The package loads its config at import time; keep it out of the source tree.
_CFG_DIR = Path(tempfile.mkdtemp(prefix="shadowclone-test-"))
os.environ.setdefault("SHADOWCLONE_CONFIG", str(_CFG_DIR / "config.json"))

import random
from typing import Callable, Optional

import pytest

from shadowclone.clones import CloneEngine
from shadowclone.maze import generate_maze
from shadowclone.models import Cell, Maze
from shadowclone.scheduler import SpawnScheduler
from shadowclone.session import RunState


class FakeClock:
    def __init__(self, t: float = 0.0) -> None:
        self.t = float(t)

    def __call__(self) -> float:
        return self.t

    def advance(self, ms: float) -> float:
        self.t += ms
        return self.t


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_state() -> Callable[..., RunState]:
    def _make(maze: Optional[Maze] = None, *, seed: int = 0, difficulty: int = 0) -> RunState:
        rng = random.Random(seed)
        if maze is None:
            maze = generate_maze(21, 11, rng)
        return RunState(
            maze=maze,
            engine=CloneEngine(rng),
            scheduler=SpawnScheduler(difficulty, rng),
            difficulty=difficulty,
        )

    return _make


def walled_maze(width: int = 5, height: int = 5, open_cells=((1, 1),)) -> Maze:
    cells = [[Cell.WALL] * width for _ in range(height)]
    for x, y in open_cells:
        cells[y][x] = Cell.OPEN
    return Maze(cells)


@pytest.fixture
def walled() -> Callable[..., Maze]:
    return walled_maze
