from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .models import Clone, Outcome, PowerupKind
from .powerups import effect_active

if TYPE_CHECKING:
    from .session import RunState

logger = logging.getLogger(__name__)


def find_collision(state: "RunState") -> Optional[Clone]:
    px, py = state.player
    for clone in state.engine.clones:
        cx, cy = clone.position
        if int(round(cx)) == px and int(round(cy)) == py:
            return clone
    return None


def resolve_collisions(state: "RunState", now: float) -> bool:
    """End the run if a clone shares the player's tile. Returns True on a catch."""
    hit = find_collision(state)
    if hit is None:
        return False
    if effect_active(state, PowerupKind.CLOAK, now):
        return False
    logger.info("caught by %s clone at %s on tick %d", hit.kind.value, tuple(state.player), state.tick)
    state.finish(Outcome.CAUGHT, now)
    return True


__all__ = ["find_collision", "resolve_collisions"]
