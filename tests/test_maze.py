from __future__ import annotations

import random

import pytest

from shadowclone.errors import InvalidDimensions
from shadowclone.maze import distances_from, generate_maze, odd_dimensions, place_goal, reachable_from
from shadowclone.models import Cell, Direction, Position
from shadowclone.recorder import MoveRecorder


@pytest.mark.parametrize("size", [(21, 11), (31, 21), (5, 5), (40, 30), (7, 61)])
@pytest.mark.parametrize("seed", range(8))
def test_every_open_cell_is_reachable_from_start(size: tuple[int, int], seed: int) -> None:
    maze = generate_maze(*size, random.Random(seed))
    assert reachable_from(maze, Position(1, 1)) == set(maze.open_cells())


def test_even_dimensions_are_decremented_before_carving() -> None:
    maze = generate_maze(22, 12, random.Random(1))
    assert (maze.width, maze.height) == (21, 11)
    assert odd_dimensions(6, 9) == (5, 9)


@pytest.mark.parametrize("size", [(4, 9), (9, 4), (3, 3), (6, 4), (1, 50)])
def test_too_small_dimensions_fail(size: tuple[int, int]) -> None:
    with pytest.raises(InvalidDimensions):
        generate_maze(*size)


def test_six_is_rounded_down_to_a_valid_five() -> None:
    maze = generate_maze(6, 6, random.Random(0))
    assert (maze.width, maze.height) == (5, 5)


def test_border_stays_solid() -> None:
    maze = generate_maze(31, 21, random.Random(3))
    for x in range(maze.width):
        assert maze.cells[0][x] is Cell.WALL
        assert maze.cells[maze.height - 1][x] is Cell.WALL
    for y in range(maze.height):
        assert maze.cells[y][0] is Cell.WALL
        assert maze.cells[y][maze.width - 1] is Cell.WALL


def test_lattice_cells_are_carved_and_corridors_one_wide() -> None:
    maze = generate_maze(25, 15, random.Random(11))
    for y in range(maze.height):
        for x in range(maze.width):
            if x % 2 == 1 and y % 2 == 1:
                assert maze.cells[y][x] is Cell.OPEN
            if x % 2 == 0 and y % 2 == 0:
                assert maze.cells[y][x] is Cell.WALL


def test_start_pocket_is_open() -> None:
    for seed in range(10):
        maze = generate_maze(21, 11, random.Random(seed))
        for x, y in ((1, 1), (2, 1), (1, 2)):
            assert maze.cells[y][x] is Cell.OPEN


def test_same_seed_same_maze() -> None:
    a = generate_maze(29, 21, random.Random(42))
    b = generate_maze(29, 21, random.Random(42))
    c = generate_maze(29, 21, random.Random(43))
    assert a.cells == b.cells
    assert a.cells != c.cells


def test_large_maze_does_not_hit_recursion_limit() -> None:
    maze = generate_maze(201, 201, random.Random(5))
    assert len(reachable_from(maze, Position(1, 1))) == len(maze.open_cells())


def test_scripted_moves_follow_the_generated_grid() -> None:
    maze = generate_maze(21, 11, random.Random(2024))
    assert reachable_from(maze, Position(1, 1)) == set(maze.open_cells())

    rec = MoveRecorder()
    pos = Position(1, 1)
    for target in [Position(2, 1), Position(3, 1), Position(3, 2)]:
        d = next(d for d in Direction if pos.step(d) == target)
        moved = rec.try_move(maze, pos, d)
        if maze.is_open(target):
            assert moved == target
            pos = target
        else:
            assert moved is None
    assert rec.moves[:2] == (Position(2, 1), Position(3, 1))


def test_place_goal_picks_the_farthest_open_cell() -> None:
    maze = generate_maze(21, 11, random.Random(8))
    dist = distances_from(maze, Position(1, 1))
    goal = place_goal(maze)
    assert maze.cell(goal) is Cell.GOAL
    assert maze.goal() == goal
    assert dist[goal] == max(dist.values())
    # goal tiles stay walkable
    assert maze.is_open(goal)
