from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional

from .constants import (
    EFFECT_DURATION_MS,
    POWERUP_PLACE_ATTEMPTS,
    POWERUP_SPAWN_CHANCE,
    POWERUP_SPAWN_EVERY,
)
from .errors import NoSpawnTarget
from .models import ActiveEffect, Pickup, Position, PowerupKind

if TYPE_CHECKING:
    from .session import RunState

logger = logging.getLogger(__name__)

POWER_KINDS = (PowerupKind.SPEED, PowerupKind.CLOAK, PowerupKind.FREEZE)


class PowerupSystem:
    """Places pickups on free tiles and turns collected ones into effects."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    # ---- Placement ----

    def place_pickup(self, state: "RunState") -> Pickup:
        maze = state.maze
        taken = {p.pos for p in state.pickups}
        for _ in range(POWERUP_PLACE_ATTEMPTS):
            pos = Position(self.rng.randint(1, maze.width - 2), self.rng.randint(1, maze.height - 2))
            if not maze.is_open(pos) or pos == state.player or pos in taken:
                continue
            pickup = Pickup(pos, self.rng.choice(POWER_KINDS))
            state.pickups.append(pickup)
            return pickup
        raise NoSpawnTarget(f"no free tile after {POWERUP_PLACE_ATTEMPTS} attempts")

    def spawn_pickup(self, state: "RunState") -> Optional[Pickup]:
        try:
            pickup = self.place_pickup(state)
        except NoSpawnTarget as exc:
            logger.debug("pickup skipped: %s", exc)
            return None
        logger.debug("%s pickup placed at %s", pickup.kind.value, tuple(pickup.pos))
        return pickup

    def maybe_spawn(self, state: "RunState") -> Optional[Pickup]:
        if state.tick % POWERUP_SPAWN_EVERY != 0:
            return None
        if self.rng.random() >= POWERUP_SPAWN_CHANCE:
            return None
        return self.spawn_pickup(state)

    # ---- Effects ----

    def apply(self, state: "RunState", kind: PowerupKind, now: float) -> ActiveEffect:
        duration = EFFECT_DURATION_MS[kind.value]
        state.effect = ActiveEffect(kind, now + duration)
        if kind is PowerupKind.FREEZE:
            n = state.engine.freeze_all(now + duration)
            logger.debug("froze %d clones for %dms", n, duration)
        return state.effect

    def collect(self, state: "RunState", now: float) -> Optional[Pickup]:
        for i, pickup in enumerate(state.pickups):
            if pickup.pos == state.player:
                del state.pickups[i]
                self.apply(state, pickup.kind, now)
                logger.debug("collected %s at %s", pickup.kind.value, tuple(pickup.pos))
                return pickup
        return None

    def expire(self, state: "RunState", now: float) -> None:
        if state.effect is not None and not state.effect.is_active(now):
            logger.debug("%s effect expired", state.effect.kind.value)
            state.effect = None


def effect_active(state: "RunState", kind: PowerupKind, now: float) -> bool:
    eff = state.effect
    return eff is not None and eff.kind is kind and eff.is_active(now)


__all__ = ["POWER_KINDS", "PowerupSystem", "effect_active"]
