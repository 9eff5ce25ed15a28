from __future__ import annotations

import logging
import random
from collections import deque
from typing import Dict, Optional, Set

from .constants import MIN_MAZE_DIMENSION, START
from .errors import InvalidDimensions
from .models import Cell, Maze, Position

logger = logging.getLogger(__name__)

_LATTICE_STEPS = ((2, 0), (-2, 0), (0, 2), (0, -2))


def odd_dimensions(width: int, height: int) -> tuple[int, int]:
    """Round each dimension down to the nearest odd number."""
    w, h = int(width), int(height)
    if w % 2 == 0:
        w -= 1
    if h % 2 == 0:
        h -= 1
    return w, h


def generate_maze(width: int, height: int, rng: Optional[random.Random] = None) -> Maze:
    """
    Carve a perfect maze with a recursive backtracker on a step-2 lattice.

    Dimensions are forced odd first. Every passage is one cell wide and the
    carved open set is a single tree rooted at (1, 1), so any open cell can be
    reached from the start. The three cells of the starting pocket are forced
    open afterwards.
    """
    rng = rng or random.Random()
    w, h = odd_dimensions(width, height)
    if w < MIN_MAZE_DIMENSION or h < MIN_MAZE_DIMENSION:
        raise InvalidDimensions(w, h)

    grid = [[Cell.WALL] * w for _ in range(h)]

    def shuffled_steps() -> list[tuple[int, int]]:
        steps = list(_LATTICE_STEPS)
        rng.shuffle(steps)
        return steps

    sx, sy = START
    grid[sy][sx] = Cell.OPEN
    # explicit stack so large grids do not hit the recursion limit
    stack = [(sx, sy, iter(shuffled_steps()))]
    while stack:
        x, y, steps = stack[-1]
        step = next(steps, None)
        if step is None:
            stack.pop()
            continue
        dx, dy = step
        nx, ny = x + dx, y + dy
        if 0 < nx < w - 1 and 0 < ny < h - 1 and grid[ny][nx] is Cell.WALL:
            grid[y + dy // 2][x + dx // 2] = Cell.OPEN
            grid[ny][nx] = Cell.OPEN
            stack.append((nx, ny, iter(shuffled_steps())))

    # safe starting pocket
    grid[sy][sx] = Cell.OPEN
    grid[sy][sx + 1] = Cell.OPEN
    grid[sy + 1][sx] = Cell.OPEN

    maze = Maze(grid)
    logger.debug("generated %dx%d maze, %d open cells", w, h, len(maze.open_cells()))
    return maze


def distances_from(maze: Maze, start: Position) -> Dict[Position, int]:
    """BFS step distance to every open cell reachable from ``start``."""
    if not maze.is_open(start):
        return {}
    dist = {start: 0}
    q = deque([start])
    while q:
        cur = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nxt = Position(cur.x + dx, cur.y + dy)
            if nxt not in dist and maze.is_open(nxt):
                dist[nxt] = dist[cur] + 1
                q.append(nxt)
    return dist


def reachable_from(maze: Maze, start: Position) -> Set[Position]:
    return set(distances_from(maze, start))


def place_goal(maze: Maze, start: Position = Position(*START)) -> Position:
    """Mark the open cell farthest from ``start`` as the goal."""
    dist = distances_from(maze, start)
    far = max(dist.items(), key=lambda kv: (kv[1], kv[0].y, kv[0].x))[0]
    maze.cells[far.y][far.x] = Cell.GOAL
    return far


__all__ = ["odd_dimensions", "generate_maze", "distances_from", "reachable_from", "place_goal"]
