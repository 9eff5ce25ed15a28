from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from .constants import (
    MIN_HISTORY_TO_SPAWN,
    SNAPSHOT_MAX,
    WRAITH_BASE_CHANCE,
    WRAITH_CHANCE_CAP,
    WRAITH_CHANCE_TICKS,
    WRAITH_SKIP_BASE,
    WRAITH_SKIP_CAP,
    WRAITH_SKIP_MAX,
    WRAITH_SKIP_TICKS,
)
from .models import Clone, CloneKind, Position

logger = logging.getLogger(__name__)


def wraith_chance(tick: int) -> float:
    return WRAITH_BASE_CHANCE + min(WRAITH_CHANCE_CAP, tick / WRAITH_CHANCE_TICKS)


def wraith_skip_chance(tick: int) -> float:
    return WRAITH_SKIP_BASE + min(WRAITH_SKIP_CAP, tick / WRAITH_SKIP_TICKS)


def advance(clone: Clone, tick: int, rng: random.Random) -> Clone:
    """
    Move a clone one replay step.

    Basic clones read their snapshot strictly one index per tick. Wraiths may
    lurch ahead first. Either way the cursor holds at the last index once the
    snapshot is exhausted.
    """
    last = clone.last_index
    if clone.kind is CloneKind.WRAITH and rng.random() < wraith_skip_chance(tick):
        jump = rng.randint(1, min(WRAITH_SKIP_MAX, len(clone.snapshot)))
        clone.cursor = min(last, clone.cursor + jump)
    clone.cursor = min(last, clone.cursor + 1)
    return clone


class CloneEngine:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self.clones: List[Clone] = []

    def __len__(self) -> int:
        return len(self.clones)

    def spawn_clone(self, history: Sequence[Position], tick: int) -> Optional[Clone]:
        if len(history) < MIN_HISTORY_TO_SPAWN:
            return None
        snap = tuple(history[max(0, len(history) - SNAPSHOT_MAX):])
        kind = CloneKind.WRAITH if self.rng.random() < wraith_chance(tick) else CloneKind.BASIC
        clone = Clone(snapshot=snap, kind=kind, spawn_tick=tick)
        self.clones.append(clone)
        logger.debug("tick %d: %s clone spawned, replay length %d", tick, kind.value, len(snap))
        return clone

    def update(self, tick: int, now: float) -> None:
        """Advance every clone one replay step; a clone shows snapshot[0] on its spawn tick."""
        for clone in self.clones:
            if clone.spawn_tick >= tick:
                continue
            if clone.frozen and now >= clone.frozen_until:
                clone.frozen = False
            if clone.frozen:
                continue
            advance(clone, tick, self.rng)

    def freeze_all(self, until: float) -> int:
        for clone in self.clones:
            clone.frozen = True
            clone.frozen_until = until
        return len(self.clones)


__all__ = ["wraith_chance", "wraith_skip_chance", "advance", "CloneEngine"]
