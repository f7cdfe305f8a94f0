"""Simple pygame front-end for the engine.

The runner only adapts pygame events to engine calls and draws the render
snapshot; every rule lives in :class:`~blockdrop.engine.GameEngine`.

Controls: arrows move, rotate and soft drop, space toggles pause and ``R``
restarts.  Losing window focus or minimising the window pauses the game.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

from .config import EngineConfig
from .engine import GameEngine, InputEvent, RenderState
from .tetromino import PIECE_COLORS

# Size of a single board cell in pixels
CELL_SIZE = 20
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (30, 30, 30)
GRID_LINE = (50, 50, 50)

LOGGER = logging.getLogger(__name__)

KEY_BINDINGS: Dict[int, InputEvent] = {
    pygame.K_LEFT: InputEvent.MOVE_LEFT,
    pygame.K_RIGHT: InputEvent.MOVE_RIGHT,
    pygame.K_DOWN: InputEvent.SOFT_DROP,
    pygame.K_UP: InputEvent.ROTATE_CW,
    pygame.K_SPACE: InputEvent.TOGGLE_PAUSE,
}


def key_to_input(key: int) -> Optional[InputEvent]:
    """Return the engine command bound to ``key``, if any."""

    return KEY_BINDINGS.get(key)


def handle_event(event: pygame.event.Event, engine: GameEngine) -> None:
    """Forward a pygame event to the engine."""

    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_r:
            engine.on_external_reset()
            return
        command = key_to_input(event.key)
        if command is not None:
            engine.apply_input(command)
    elif event.type == pygame.WINDOWFOCUSLOST:
        engine.on_focus_lost()
    elif event.type in (pygame.WINDOWHIDDEN, pygame.WINDOWMINIMIZED):
        engine.on_visibility_changed(False)


def _draw_cells(screen: pygame.Surface, cells, offset_x: int = 0, offset_y: int = 0) -> None:
    rows, cols = cells.shape
    for r in range(rows):
        for c in range(cols):
            value = int(cells[r, c])
            if not value:
                continue
            rect = pygame.Rect(
                (c + offset_x) * CELL_SIZE,
                (r + offset_y) * CELL_SIZE,
                CELL_SIZE,
                CELL_SIZE,
            )
            pygame.draw.rect(screen, pygame.Color(PIECE_COLORS[value]), rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw(screen: pygame.Surface, state: RenderState) -> None:
    """Render the board and the active piece."""

    screen.fill(BACKGROUND)
    _draw_cells(screen, state.board)
    _draw_cells(screen, state.piece, state.piece_x, state.piece_y)


class GameRunner:
    """Own the pygame window and pump events into a :class:`GameEngine`."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.engine = GameEngine(config)
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def run(self) -> None:
        pygame.init()
        board = self.engine.board
        screen = pygame.display.set_mode((board.width * CELL_SIZE, board.height * CELL_SIZE))
        clock = pygame.time.Clock()
        LOGGER.info("Game started")

        self._running = True
        try:
            while self._running:
                clock.tick(FPS)
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    else:
                        handle_event(event, self.engine)

                self.engine.tick(pygame.time.get_ticks())
                state = self.engine.get_render_state()
                draw(screen, state)
                pygame.display.set_caption(
                    f"blockdrop - {'Paused - ' if state.paused else ''}Score: {state.score}"
                )
                pygame.display.flip()
        finally:
            pygame.quit()
            LOGGER.info("Game stopped")


def main(config: Optional[EngineConfig] = None) -> None:
    GameRunner(config).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
