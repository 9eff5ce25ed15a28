from __future__ import annotations

from shadowclone import gpio
from shadowclone.input_queue import InputQueue
from shadowclone.models import Direction


class _FakeButton:
    def __init__(self, pin: int, pull_up: bool = True, bounce_time: float = 0.0) -> None:
        self.pin = pin
        self.when_pressed = None
        self.when_released = None


def test_pad_pins_follow_config_names() -> None:
    pins = gpio.Pins(UP=5, DOWN=6, LEFT=13, RIGHT=19)
    assert gpio.pad_pins(pins) == {
        Direction.UP: 5,
        Direction.DOWN: 6,
        Direction.LEFT: 13,
        Direction.RIGHT: 19,
    }


def test_stick_press_and_release_reach_the_queue(monkeypatch) -> None:
    monkeypatch.setattr(gpio, "Button", _FakeButton)
    monkeypatch.setattr(gpio, "GPIO_AVAILABLE", True)
    monkeypatch.setattr(gpio, "IS_WINDOWS", False)
    iq = InputQueue()
    buttons = gpio.init_gpio(iq, gpio.Pins(UP=5, DOWN=6, LEFT=13, RIGHT=19))
    assert buttons[Direction.LEFT].pin == 13

    buttons[Direction.LEFT].when_pressed()
    buttons[Direction.UP].when_pressed()
    buttons[Direction.LEFT].when_released()
    assert iq.pop_directions() == [
        (Direction.LEFT, True),
        (Direction.UP, True),
        (Direction.LEFT, False),
    ]


def test_no_buttons_without_gpiozero(monkeypatch) -> None:
    monkeypatch.setattr(gpio, "GPIO_AVAILABLE", False)
    assert gpio.init_gpio(InputQueue()) == {}
