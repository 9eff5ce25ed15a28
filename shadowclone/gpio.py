from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Dict

from .config import CFG
from .input_queue import RELEASE_PREFIX, InputQueue
from .models import Direction


GPIO_AVAILABLE = True
IS_WINDOWS = sys.platform.startswith("win")
try:
    from gpiozero import Button  # type: ignore
except Exception:  # pragma: no cover - gpiozero is optional
    GPIO_AVAILABLE = False
    Button = None  # type: ignore


@dataclass
class Pins:
    UP: int
    DOWN: int
    LEFT: int
    RIGHT: int


PINS = Pins(**CFG["pins"])

GPIO_PULL_UP = True
GPIO_BOUNCE_TIME = 0.05


def pad_pins(pins: Pins = PINS) -> Dict[Direction, int]:
    return {d: int(getattr(pins, d.name)) for d in Direction}


def init_gpio(iq: InputQueue, pins: Pins = PINS) -> Dict[Direction, Button]:
    """
    Wire the arcade stick. A press queues the direction name and a release
    queues it with RELEASE_PREFIX, so a held stick keeps the player walking.
    """
    if IS_WINDOWS or not GPIO_AVAILABLE or Button is None:
        return {}
    buttons = {
        d: Button(pin, pull_up=GPIO_PULL_UP, bounce_time=GPIO_BOUNCE_TIME)
        for d, pin in pad_pins(pins).items()
    }
    for d, btn in buttons.items():
        btn.when_pressed = (lambda n=d.name: iq.push(n))
        btn.when_released = (lambda n=d.name: iq.push(RELEASE_PREFIX + n))
    return buttons


__all__ = [
    "GPIO_AVAILABLE",
    "IS_WINDOWS",
    "Pins",
    "PINS",
    "pad_pins",
    "init_gpio",
]
