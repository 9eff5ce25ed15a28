from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .clones import CloneEngine
from .collision import resolve_collisions
from .constants import (
    EV_CAUGHT,
    EV_CLONE_SPAWNED,
    EV_ESCAPED,
    EV_NEW_RECORD,
    EV_PICKUP,
    EV_RUN_ENDED,
    MOVE_REPEAT_MS,
    MOVE_REPEAT_SPEED_MS,
    START,
)
from .input_queue import EventQueue
from .maze import generate_maze, place_goal
from .models import (
    ActiveEffect,
    Cell,
    Direction,
    Maze,
    Objective,
    Outcome,
    Pickup,
    Position,
    PowerupKind,
)
from .powerups import PowerupSystem, effect_active
from .recorder import MoveRecorder
from .scheduler import SpawnScheduler

logger = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class RunState:
    maze: Maze
    engine: CloneEngine
    scheduler: SpawnScheduler
    difficulty: int = 1
    objective: Objective = Objective.SURVIVAL
    player: Position = Position(*START)
    recorder: MoveRecorder = field(default_factory=MoveRecorder)
    pickups: List[Pickup] = field(default_factory=list)
    effect: Optional[ActiveEffect] = None
    tick: int = 0
    running: bool = True
    started_at: float = 0.0
    ended_at: Optional[float] = None
    outcome: Optional[Outcome] = None
    score: int = 0

    @property
    def interval(self) -> int:
        return self.scheduler.interval

    def elapsed_ms(self, now: float) -> float:
        end = self.ended_at if self.ended_at is not None else now
        return max(0.0, end - self.started_at)

    def elapsed_seconds(self, now: float) -> int:
        return int(self.elapsed_ms(now) // 1000)

    def finish(self, outcome: Outcome, now: float) -> None:
        if not self.running:
            return
        self.running = False
        self.ended_at = now
        self.outcome = outcome
        self.score = self.elapsed_seconds(now)


class GameSession:
    """
    Owns the current RunState and drives it one tick at a time.

    Per tick: expire effects, step the held direction, maybe place a pickup,
    run the spawn schedule, advance clones, resolve collisions, then collect
    pickups and check the goal.
    """

    def __init__(
        self,
        *,
        difficulty: int = 1,
        objective: Objective = Objective.SURVIVAL,
        cols: int = 29,
        rows: int = 21,
        rng: Optional[random.Random] = None,
        now_fn: Optional[Callable[[], float]] = None,
        events: Optional[EventQueue] = None,
        on_run_end: Optional[Callable[[RunState], bool]] = None,
    ) -> None:
        self.difficulty = int(difficulty)
        self.objective = Objective(objective)
        self.cols = int(cols)
        self.rows = int(rows)
        self.rng = rng or random.Random()
        self.now = now_fn or _monotonic_ms
        self.events = events if events is not None else EventQueue()
        self.on_run_end = on_run_end
        self.powerups = PowerupSystem(self.rng)
        self.state: Optional[RunState] = None

        self._intent: Optional[Direction] = None
        self._next_step_at = 0.0

    # ---- Run lifecycle ----

    def new_run(self) -> RunState:
        maze = generate_maze(self.cols, self.rows, self.rng)
        if self.objective is Objective.GOAL:
            place_goal(maze)
        self.state = RunState(
            maze=maze,
            engine=CloneEngine(self.rng),
            scheduler=SpawnScheduler(self.difficulty, self.rng),
            difficulty=self.difficulty,
            objective=self.objective,
            started_at=self.now(),
        )
        self._intent = None
        logger.info(
            "new run: %dx%d maze, difficulty %d, %s",
            maze.width, maze.height, self.difficulty, self.objective.value,
        )
        return self.state

    def abandon(self) -> None:
        st = self.state
        if st is not None and st.running:
            st.finish(Outcome.ABANDONED, self.now())
        self.state = None
        self._intent = None

    @property
    def running(self) -> bool:
        return self.state is not None and self.state.running

    def _finished(self) -> None:
        st = self.state
        self._intent = None
        self.events.push(EV_ESCAPED if st.outcome is Outcome.ESCAPED else EV_CAUGHT)
        self.events.push(EV_RUN_ENDED)
        logger.info("run over: %s after %ds, %d clones", st.outcome.name, st.score, len(st.engine))
        if self.on_run_end is not None and self.on_run_end(st):
            self.events.push(EV_NEW_RECORD)

    # ---- Input ----

    def try_move(self, direction: Direction) -> Optional[Position]:
        st = self.state
        if st is None or not st.running:
            return None
        moved = st.recorder.try_move(st.maze, st.player, direction)
        if moved is not None:
            st.player = moved
        return moved

    def step_delay_ms(self) -> int:
        st = self.state
        if st is not None and effect_active(st, PowerupKind.SPEED, self.now()):
            return MOVE_REPEAT_SPEED_MS
        return MOVE_REPEAT_MS

    def set_intent(self, direction: Direction) -> None:
        self._intent = direction
        self._next_step_at = self.now() + self.step_delay_ms()

    def clear_intent(self, direction: Optional[Direction] = None) -> None:
        if direction is None or direction is self._intent:
            self._intent = None

    @property
    def intent(self) -> Optional[Direction]:
        return self._intent

    def _step_intent(self, now: float) -> None:
        if self._intent is None or now < self._next_step_at:
            return
        self.try_move(self._intent)
        self._next_step_at = now + self.step_delay_ms()

    # ---- Tick ----

    def tick(self) -> None:
        st = self.state
        if st is None or not st.running:
            return
        now = self.now()
        st.tick += 1
        self.powerups.expire(st, now)
        self._step_intent(now)

        self.powerups.maybe_spawn(st)

        for _ in range(st.scheduler.attempt(st.tick, len(st.recorder))):
            if st.engine.spawn_clone(st.recorder.moves, st.tick) is not None:
                self.events.push(EV_CLONE_SPAWNED)

        st.engine.update(st.tick, now)

        if resolve_collisions(st, now):
            self._finished()
            return

        if self.powerups.collect(st, now) is not None:
            self.events.push(EV_PICKUP)

        if st.objective is Objective.GOAL and st.maze.cell(st.player) is Cell.GOAL:
            st.finish(Outcome.ESCAPED, now)
            self._finished()


__all__ = ["RunState", "GameSession"]
