# shadowclone/config.py
from __future__ import annotations
import json, logging, os
from typing import Dict, Any

from pathlib import Path
PKG_DIR = Path(__file__).resolve().parent

logger = logging.getLogger(__name__)

def _abs(path: str) -> str:
    # absolute paths are left untouched
    p = Path(path)
    return str(p) if p.is_absolute() else str((PKG_DIR / p).resolve())

PACKAGE_DIR = os.path.dirname(__file__)
CONFIG_PATH = os.environ.get("SHADOWCLONE_CONFIG") or os.path.join(PACKAGE_DIR, "config.json")

OBJECTIVES = ("SURVIVAL", "GOAL")

DEFAULT_CFG: Dict[str, Any] = {
    "pins": {"UP": 17, "DOWN": 27, "LEFT": 22, "RIGHT": 23},
    "display": {"fullscreen": False, "fps": 60, "windowed_size": [900, 660], "tile_size": 30},
    "maze": {"cols": 29, "rows": 21},
    "game": {"difficulty": 1, "objective": "SURVIVAL"},
    "audio": {
        "music": "assets/music/bg.ogg",
        "music_enabled": True,
        "sfx_enabled": True,
        "music_volume": 0.55,
        "sfx_volume": 0.8,
    },
    "best_time": 0,
    "best_escape": 0,
    "leaderboard": [],
}

def _deepcopy(obj):
    return json.loads(json.dumps(obj))

def _merge(dst: dict, src: dict) -> dict:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _merge(dst[k], v)
        else:
            dst[k] = v
    return dst

def _sanitize_cfg(cfg: dict, path: str | None = None) -> dict:
    g = cfg.setdefault("game", {})
    try:
        g["difficulty"] = int(max(0, min(2, int(g.get("difficulty", 1)))))
    except (TypeError, ValueError):
        g["difficulty"] = 1
    obj = str(g.get("objective", "SURVIVAL")).upper()
    g["objective"] = obj if obj in OBJECTIVES else "SURVIVAL"

    a = cfg.setdefault("audio", {})
    a["music_volume"] = float(max(0.0, min(1.0, a.get("music_volume", 0.55))))
    a["sfx_volume"]   = float(max(0.0, min(1.0, a.get("sfx_volume",   0.8))))
    a["music_enabled"] = bool(a.get("music_enabled", True))
    a["sfx_enabled"]   = bool(a.get("sfx_enabled", True))

    d = cfg.setdefault("display", {})
    d["fullscreen"] = bool(d.get("fullscreen", False))
    d["fps"] = int(max(30, min(240, d.get("fps", 60))))
    d["tile_size"] = int(max(8, min(96, d.get("tile_size", 30))))
    ws = d.get("windowed_size", [900, 660])
    if isinstance(ws, (list, tuple)) and len(ws) == 2 and all(isinstance(x, (int, float)) for x in ws):
        w, h = max(200, min(10000, int(ws[0]))), max(200, min(10000, int(ws[1])))
        d["windowed_size"] = [w, h]
    else:
        d["windowed_size"] = [900, 660]

    m = cfg.setdefault("maze", {})
    m["cols"] = int(max(5, min(201, m.get("cols", 29))))
    m["rows"] = int(max(5, min(201, m.get("rows", 21))))

    for key in ("best_time", "best_escape"):
        try:
            cfg[key] = int(max(0, int(cfg.get(key, 0))))
        except (TypeError, ValueError):
            cfg[key] = 0
    if not isinstance(cfg.get("leaderboard"), list):
        cfg["leaderboard"] = []

    if isinstance(a.get("music"), str):
        a["music"] = _abs(a["music"])
    cfg["config_path"] = str(Path(path or CONFIG_PATH).resolve())
    return cfg

def save_config(partial_cfg: dict, path: str | None = None) -> None:
    path = path or CONFIG_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            base = json.load(f)
        if not isinstance(base, dict): base = {}
    except FileNotFoundError:
        base = {}
    except Exception as exc:
        logger.warning("config %s unreadable, rewriting: %s", path, exc)
        base = {}
    merged = _merge(base, partial_cfg)
    merged.pop("config_path", None)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(merged, f, ensure_ascii=False, indent=2)
    except Exception as exc:
        logger.warning("could not write config %s: %s", path, exc)

def load_config(path: str | None = None) -> dict:
    path = path or CONFIG_PATH
    cfg = _deepcopy(DEFAULT_CFG)
    try:
        with open(path, "r", encoding="utf-8") as f:
            user = json.load(f)
        if isinstance(user, dict):
            _merge(cfg, user)
    except FileNotFoundError:
        save_config(cfg, path)
    except Exception as exc:
        logger.warning("config %s ignored: %s", path, exc)
    return _sanitize_cfg(cfg, path)

def persist_windowed_size(width: int, height: int) -> None:
    save_config({"display": {"windowed_size": [int(width), int(height)]}})

CFG = load_config()
