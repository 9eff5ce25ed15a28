from __future__ import annotations


class InvalidDimensions(ValueError):
    """Maze is too small to carve after forcing odd dimensions."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"maze needs odd dimensions >= 5, got {width}x{height}")
        self.width = width
        self.height = height


class NoSpawnTarget(RuntimeError):
    """No free tile was found for a pickup within the retry budget."""


__all__ = ["InvalidDimensions", "NoSpawnTarget"]
