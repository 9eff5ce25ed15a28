from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from .config import CFG, save_config
from .constants import LEADERBOARD_SIZE
from .models import Objective, Outcome

logger = logging.getLogger(__name__)


def best_time(cfg: Optional[Dict[str, Any]] = None) -> int:
    cfg = CFG if cfg is None else cfg
    return int(cfg.get("best_time", 0) or 0)


def leaderboard(cfg: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    cfg = CFG if cfg is None else cfg
    rows = [r for r in cfg.get("leaderboard", []) if isinstance(r, dict) and "time" in r]
    return sorted(rows, key=lambda r: int(r["time"]), reverse=True)[:LEADERBOARD_SIZE]


def record_run(
    score: int,
    difficulty: int,
    *,
    cfg: Optional[Dict[str, Any]] = None,
    path: Optional[str] = None,
) -> bool:
    """Store a finished run. Returns True when it beats the best time."""
    cfg = CFG if cfg is None else cfg
    score = int(max(0, score))
    prev = best_time(cfg)
    is_new = score > prev
    if is_new:
        cfg["best_time"] = score

    rows = leaderboard(cfg)
    rows.append({"time": score, "difficulty": int(difficulty), "at": int(time.time())})
    cfg["leaderboard"] = sorted(rows, key=lambda r: int(r["time"]), reverse=True)[:LEADERBOARD_SIZE]

    save_config({"best_time": best_time(cfg), "leaderboard": cfg["leaderboard"]}, path)
    if is_new:
        logger.info("new best time %ds (was %ds)", score, prev)
    return is_new


def best_escape(cfg: Optional[Dict[str, Any]] = None) -> int:
    """Fastest escape in seconds for goal runs; 0 until the maze has been escaped once."""
    cfg = CFG if cfg is None else cfg
    return int(cfg.get("best_escape", 0) or 0)


def record_escape(
    seconds: int,
    *,
    cfg: Optional[Dict[str, Any]] = None,
    path: Optional[str] = None,
) -> bool:
    cfg = CFG if cfg is None else cfg
    seconds = int(max(0, seconds))
    prev = best_escape(cfg)
    if prev and seconds >= prev:
        return False
    cfg["best_escape"] = seconds
    save_config({"best_escape": seconds}, path)
    logger.info("fastest escape %ds (was %ds)", seconds, prev)
    return True


def record_outcome(
    objective: Objective,
    outcome: Outcome,
    score: int,
    difficulty: int,
    *,
    cfg: Optional[Dict[str, Any]] = None,
    path: Optional[str] = None,
) -> bool:
    """
    Route a finished run to the record it competes for.

    Survival runs go to the longest-time leaderboard. Goal runs only count
    when the player escaped, and then the fastest escape wins. Abandoned runs
    are never stored.
    """
    if outcome is Outcome.ABANDONED:
        return False
    if objective is Objective.GOAL:
        if outcome is not Outcome.ESCAPED:
            return False
        return record_escape(score, cfg=cfg, path=path)
    return record_run(score, difficulty, cfg=cfg, path=path)


def reset_records(*, cfg: Optional[Dict[str, Any]] = None, path: Optional[str] = None) -> None:
    cfg = CFG if cfg is None else cfg
    cfg["best_time"] = 0
    cfg["best_escape"] = 0
    cfg["leaderboard"] = []
    save_config({"best_time": 0, "best_escape": 0, "leaderboard": []}, path)


__all__ = [
    "best_time",
    "best_escape",
    "leaderboard",
    "record_run",
    "record_escape",
    "record_outcome",
    "reset_records",
]
