"""Default settings for the game and its front-ends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# Dimensions of the playfield in cells.
GRID_WIDTH = 10
GRID_HEIGHT = 20

# Size of a single board cell in pixels
BLOCK_SIZE = 32
WINDOW_WIDTH = 500
WINDOW_HEIGHT = 800

# Seconds between forced downward steps
TICKS_PER_SECOND = 1.0
# Minimum seconds between two accepted directional inputs
DEBOUNCE_SECONDS = 0.1
# Frames per second to run the window loop at
FPS = 60


@dataclass(frozen=True)
class GameConfig:
    """Immutable bundle of the tunable game settings."""

    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    tick_interval: float = TICKS_PER_SECOND
    debounce: float = DEBOUNCE_SECONDS
    block_size: int = BLOCK_SIZE
    window_width: int = WINDOW_WIDTH
    window_height: int = WINDOW_HEIGHT

    def __post_init__(self) -> None:
        # The 4x4 spawn pattern has to fit horizontally and vertically.
        if self.width < 4 or self.height < 4:
            raise ValueError(
                f"Board must be at least 4x4, got {self.width}x{self.height}"
            )
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        if self.debounce < 0:
            raise ValueError("debounce must not be negative")

    @property
    def origin(self) -> tuple[float, float]:
        """Return the pixel position of the board's top-left corner.

        The board is centred inside the window.
        """

        x = self.window_width / 2.0 - (self.block_size * self.width) / 2.0
        y = self.window_height / 2.0 - (self.block_size * self.height) / 2.0
        return x, y

    @classmethod
    def from_args(cls, args: Any) -> "GameConfig":
        """Build a config from an ``argparse`` namespace.

        Options missing from ``args`` keep their defaults.
        """

        values = {}
        for name, attr in (("width", "width"), ("height", "height"), ("tick", "tick_interval")):
            value = getattr(args, name, None)
            if value is not None:
                values[attr] = value
        return cls(**values)


__all__ = [
    "GRID_WIDTH",
    "GRID_HEIGHT",
    "BLOCK_SIZE",
    "WINDOW_WIDTH",
    "WINDOW_HEIGHT",
    "TICKS_PER_SECOND",
    "DEBOUNCE_SECONDS",
    "FPS",
    "GameConfig",
]
