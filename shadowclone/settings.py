# shadowclone/settings.py
from __future__ import annotations
from typing import Any, Dict

from .config import OBJECTIVES

# ------------- runtime snapshot -------------

def make_runtime_settings(CFG: Dict[str, Any]) -> Dict[str, Any]:
    """Build the settings dict edited by the settings scene (snapshot of CFG)."""
    return {
        "difficulty":    int(CFG["game"]["difficulty"]),
        "objective":     str(CFG["game"]["objective"]),
        "music_enabled": bool(CFG["audio"]["music_enabled"]),
        "sfx_enabled":   bool(CFG["audio"]["sfx_enabled"]),
        "music_volume":  float(CFG["audio"]["music_volume"]),
        "sfx_volume":    float(CFG["audio"]["sfx_volume"]),
        "fullscreen":    bool(CFG["display"]["fullscreen"]),
        "fps":           int(CFG["display"]["fps"]),
        "cols":          int(CFG["maze"]["cols"]),
        "rows":          int(CFG["maze"]["rows"]),
    }

# ------------- live clamp in the UI -------------

def clamp_settings(s: Dict[str, Any]) -> None:
    """Clamp ranges, consistent with _sanitize_cfg() in shadowclone/config.py."""
    s["difficulty"]   = max(0, min(2, int(s.get("difficulty", 1))))
    s["music_volume"] = max(0.0, min(1.0, float(s.get("music_volume", 0.55))))
    s["sfx_volume"]   = max(0.0, min(1.0, float(s.get("sfx_volume",   0.8))))
    s["fps"]          = max(30, min(240, int(s.get("fps", 60))))
    s["cols"]         = max(5, min(201, int(s.get("cols", 29))))
    s["rows"]         = max(5, min(201, int(s.get("rows", 21))))
    obj = str(s.get("objective", "SURVIVAL")).upper()
    s["objective"]    = obj if obj in OBJECTIVES else "SURVIVAL"

def cycle_objective(current: str, delta: int) -> str:
    i = OBJECTIVES.index(current) if current in OBJECTIVES else 0
    return OBJECTIVES[(i + delta) % len(OBJECTIVES)]

# ------------- write back to config.json -------------

def commit_settings(settings: Dict[str, Any], *, CFG: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update CFG in memory and build the payload for save_config().
    """
    clamp_settings(settings)
    s = settings

    CFG["game"].update({"difficulty": int(s["difficulty"]), "objective": str(s["objective"])})
    CFG["audio"].update(
        {
            "music_enabled": bool(s["music_enabled"]),
            "sfx_enabled":   bool(s["sfx_enabled"]),
            "music_volume":  float(s["music_volume"]),
            "sfx_volume":    float(s["sfx_volume"]),
        }
    )
    CFG["display"].update({"fullscreen": bool(s["fullscreen"]), "fps": int(s["fps"])})
    CFG["maze"].update({"cols": int(s["cols"]), "rows": int(s["rows"])})

    # partial payload, merged by save_config
    return {
        "game": dict(CFG["game"]),
        "audio": {
            "music_enabled": CFG["audio"]["music_enabled"],
            "sfx_enabled":   CFG["audio"]["sfx_enabled"],
            "music_volume":  CFG["audio"]["music_volume"],
            "sfx_volume":    CFG["audio"]["sfx_volume"],
        },
        "display": {"fullscreen": CFG["display"]["fullscreen"], "fps": CFG["display"]["fps"]},
        "maze": dict(CFG["maze"]),
    }
