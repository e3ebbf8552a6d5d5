"""Simple pygame front-end for the Tetris engine.

Arrow keys move and rotate the piece while human control is active; ``A``
toggles between the placement agent and human control.  The engine itself
never touches pygame: this module samples the keyboard into an
:class:`InputState`, advances :class:`Game` once per frame and draws the
resulting :class:`Frame`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import pygame

from .config import FPS, GameConfig
from .modes import Frame, Game, InputState
from .tetromino import ROTATION_PATTERNS, SHAPE_COLORS


LOGGER = logging.getLogger(__name__)

BACKGROUND = (26, 26, 26)
BORDER = (50, 50, 50)


def read_input() -> InputState:
    """Sample the keys held during this frame."""

    keys = pygame.key.get_pressed()
    return InputState(
        left=bool(keys[pygame.K_LEFT]),
        right=bool(keys[pygame.K_RIGHT]),
        down=bool(keys[pygame.K_DOWN]),
        rotate=bool(keys[pygame.K_UP]),
        toggle_agent=bool(keys[pygame.K_a]),
    )


def draw_frame(screen: pygame.Surface, frame: Frame, config: GameConfig) -> None:
    """Render the board cells, the active tetromino and the next-piece preview."""

    block_size = config.block_size
    for cell in (*frame.cells, *frame.active):
        rect = pygame.Rect(int(cell.x), int(cell.y), block_size, block_size)
        pygame.draw.rect(screen, cell.color, rect)
        pygame.draw.rect(screen, BORDER, rect, 1)

    # Half-size preview in the margin right of the board.
    preview = block_size // 2
    origin_x, origin_y = config.origin
    left = int(origin_x) + config.width * block_size + preview
    top = int(origin_y)
    pattern = ROTATION_PATTERNS[frame.next_shape][0]
    color = SHAPE_COLORS[frame.next_shape]
    for row, col in zip(*pattern.nonzero()):
        rect = pygame.Rect(left + int(col) * preview, top + int(row) * preview, preview, preview)
        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, BORDER, rect, 1)


class GameRunner:
    """Own the pygame window and run the frame loop until it is closed."""

    def __init__(self, config: GameConfig, *, seed: int | None = None, agent: bool = True) -> None:
        self.config = config
        self._seed = seed
        self._agent = agent
        self._running = False
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self.game: Game | None = None

    @staticmethod
    def _now() -> float:
        return pygame.time.get_ticks() / 1000.0

    async def run(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(
            (self.config.window_width, self.config.window_height)
        )
        pygame.display.set_caption("Tetris")
        self._clock = pygame.time.Clock()

        self.game = Game(self.config, seed=self._seed, agent=self._agent, now=self._now())
        LOGGER.info("Game started (%s control)", self.game.mode.name)

        self._running = True
        while self._running:
            self._clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False

            self.game.update(self._now(), read_input())

            self._screen.fill(BACKGROUND)
            draw_frame(self._screen, self.game.draw(), self.config)
            state = self.game.state
            pygame.display.set_caption(
                f"Tetris - {self.game.mode.name} - Lines: {state.lines}"
            )
            pygame.display.flip()

            # Yield to the host event loop once per frame
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--tick", type=float, default=None, help="Seconds between forced drops.")
    parser.add_argument("--human", action="store_true", help="Start under keyboard control.")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    runner = GameRunner(GameConfig.from_args(args), seed=args.seed, agent=not args.human)
    asyncio.run(runner.run())


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
