from __future__ import annotations

import logging
import random
from typing import Optional

from .constants import (
    BONUS_CLONE_BASE,
    BONUS_CLONE_PER_DIFFICULTY,
    DIFFICULTY_INTERVAL_FACTOR,
    SPAWN_INTERVAL_BASE,
    SPAWN_INTERVAL_BASE_MIN,
    SPAWN_INTERVAL_DIFFICULTY_STEP,
    SPAWN_INTERVAL_FLOOR,
    SPAWN_INTERVAL_MIN,
    SPAWN_MIN_HISTORY,
)

logger = logging.getLogger(__name__)


def baseline_interval(difficulty: int) -> int:
    return max(SPAWN_INTERVAL_BASE_MIN, SPAWN_INTERVAL_BASE - difficulty * SPAWN_INTERVAL_DIFFICULTY_STEP)


def effective_interval(current: int, difficulty: int) -> int:
    return max(SPAWN_INTERVAL_FLOOR, int(current // (1 + difficulty * DIFFICULTY_INTERVAL_FACTOR)))


def bonus_chance(difficulty: int) -> float:
    return BONUS_CLONE_BASE + difficulty * BONUS_CLONE_PER_DIFFICULTY


class SpawnScheduler:
    """Decides how many clones a tick spawns and tightens the interval."""

    def __init__(self, difficulty: int, rng: Optional[random.Random] = None) -> None:
        self.difficulty = int(difficulty)
        self.rng = rng or random.Random()
        self.interval = baseline_interval(self.difficulty)

    @property
    def effective(self) -> int:
        return effective_interval(self.interval, self.difficulty)

    def due(self, tick: int, history_length: int) -> bool:
        return tick % self.effective == 0 and history_length > SPAWN_MIN_HISTORY

    def ratchet(self) -> None:
        if self.interval > SPAWN_INTERVAL_MIN:
            self.interval = max(SPAWN_INTERVAL_MIN, self.interval - (1 + self.difficulty))

    def attempt(self, tick: int, history_length: int) -> int:
        """Number of clones to spawn this tick (0, 1 or 2)."""
        if not self.due(tick, history_length):
            return 0
        self.ratchet()
        count = 1
        if self.rng.random() < bonus_chance(self.difficulty):
            count += 1
        logger.debug("tick %d: spawn x%d, interval now %d", tick, count, self.interval)
        return count


__all__ = ["baseline_interval", "effective_interval", "bonus_chance", "SpawnScheduler"]
