"""Game state machine tying the board, the active piece and gravity together.

A :class:`GameEngine` owns one session.  Hosts translate their own events
(key presses, window focus, visibility changes, reset commands) into calls on
the engine and drive gravity by calling :meth:`GameEngine.tick` with
increasing timestamps.  Drawing is left to the host, which reads a snapshot
from :meth:`GameEngine.get_render_state`.

Filling the board does not end the game.  When a freshly spawned piece
overlaps settled cells the board is wiped, the score returns to zero and play
continues with that piece.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import numpy as np

from .board import Board, Grid
from .config import EngineConfig
from .rotation import player_rotate
from .scoring import sweep_points
from .tetromino import SPAWN_ORDER, Matrix, Tetromino, TetrominoType
from .timing import DropTimer
from .utils import collide


LOGGER = logging.getLogger(__name__)


class Phase(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"


class InputEvent(str, Enum):
    """Player commands accepted by :meth:`GameEngine.apply_input`."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    TOGGLE_PAUSE = "toggle_pause"


@dataclass(frozen=True, eq=False)
class RenderState:
    """Read-only snapshot of everything a renderer needs."""

    board: Grid
    piece: Matrix
    piece_kind: TetrominoType
    piece_x: int
    piece_y: int
    score: int
    phase: Phase

    @property
    def piece_position(self) -> Tuple[int, int]:
        return self.piece_x, self.piece_y

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED


def _frozen_copy(array: np.ndarray) -> np.ndarray:
    copy = array.copy()
    copy.setflags(write=False)
    return copy


class GameEngine:
    """Mutable state and rules for a single game session."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.board = Board(self.config.width, self.config.height)
        self.timer = DropTimer(self.config.drop_interval_ms)
        self.score = 0
        self.phase = Phase.RUNNING
        self.active: Tetromino = self.spawn_tetromino()
        self._inputs: Dict[InputEvent, Callable[[], Any]] = {
            InputEvent.MOVE_LEFT: lambda: self.player_move(-1),
            InputEvent.MOVE_RIGHT: lambda: self.player_move(1),
            InputEvent.SOFT_DROP: self.player_drop,
            InputEvent.ROTATE_CW: lambda: self.player_rotate(1),
            InputEvent.ROTATE_CCW: lambda: self.player_rotate(-1),
            InputEvent.TOGGLE_PAUSE: self.toggle_pause,
        }

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED

    # Piece lifecycle --------------------------------------------------
    def _random_type(self) -> TetrominoType:
        return TetrominoType(self.rng.choice(SPAWN_ORDER))

    def spawn_position(self, piece: Tetromino) -> Tuple[int, int]:
        """Return the ``(x, y)`` a new ``piece`` starts at: top row, centred."""

        return self.board.width // 2 - piece.width // 2, 0

    def spawn_tetromino(self, kind: Optional[TetrominoType] = None) -> Tetromino:
        """Spawn and return a new active piece.

        If the new piece overlaps settled cells the board is full: the board
        is cleared and the score reset, and the new piece stays in place.
        """

        piece = Tetromino(kind or self._random_type())
        piece.x, piece.y = self.spawn_position(piece)
        self.active = piece
        if collide(self.board, piece):
            LOGGER.info("Board full at score %d. Resetting.", self.score)
            self.board.clear_all()
            self.score = 0
            self.phase = Phase.RUNNING
        return piece

    def reset(self) -> None:
        """Start over: empty board, zero score, new piece, running."""

        self.board.clear_all()
        self.score = 0
        self.timer.reset()
        self.phase = Phase.RUNNING
        self.spawn_tetromino()
        LOGGER.info("Game reset")

    # Player actions ---------------------------------------------------
    def player_move(self, direction: int) -> bool:
        """Shift the active piece sideways if the target cells are free."""

        if self.paused:
            return False
        self.active.x += direction
        if collide(self.board, self.active):
            self.active.x -= direction
            return False
        return True

    def player_rotate(self, direction: int = 1) -> bool:
        if self.paused:
            return False
        return player_rotate(self.board, self.active, direction)

    def player_drop(self) -> None:
        """Move the active piece down one row, landing it if it cannot move.

        Landing merges the piece, sweeps full rows, adds their points and
        spawns the next piece.  Every drop step restarts the gravity count.
        """

        if self.paused:
            return
        self.active.y += 1
        if collide(self.board, self.active):
            self.active.y -= 1
            self.board.merge(self.active)
            self._sweep()
            self.spawn_tetromino()
        self.timer.restart_count()

    def _sweep(self) -> None:
        cleared = self.board.sweep()
        if cleared:
            self.score += sweep_points(cleared)
            LOGGER.debug("Cleared %d row(s). Score: %d", cleared, self.score)

    # Phase transitions ------------------------------------------------
    def pause(self) -> None:
        if not self.paused:
            self.phase = Phase.PAUSED
            LOGGER.info("Paused")

    def resume(self) -> None:
        if self.paused:
            self.phase = Phase.RUNNING
            LOGGER.info("Resumed")

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    # Host interface ---------------------------------------------------
    def apply_input(self, event: InputEvent | str) -> None:
        """Apply a player command.

        Everything except ``TOGGLE_PAUSE`` is a no-op while paused.

        Raises:
            ValueError: If ``event`` is not an :class:`InputEvent`.
        """

        self._inputs[InputEvent(event)]()

    def on_external_pause(self) -> None:
        self.pause()

    def on_external_reset(self) -> None:
        self.reset()

    def on_focus_lost(self) -> None:
        self.pause()

    def on_visibility_changed(self, visible: bool) -> None:
        if not visible:
            self.pause()

    def handle_message(self, message: Mapping[str, Any]) -> None:
        """Dispatch a host message such as ``{"command": "pause"}``.

        ``pause`` and ``reset`` are understood; other commands are logged and
        ignored.
        """

        command = message.get("command")
        if command == "pause":
            self.on_external_pause()
        elif command == "reset":
            self.on_external_reset()
        else:
            LOGGER.warning("Ignoring unknown host command: %r", command)

    def tick(self, timestamp_ms: float) -> bool:
        """Advance gravity to ``timestamp_ms``.

        Returns ``True`` if a drop step was performed.
        """

        if self.timer.advance(timestamp_ms, running=not self.paused):
            self.player_drop()
            return True
        return False

    def get_render_state(self) -> RenderState:
        return RenderState(
            board=_frozen_copy(self.board.grid),
            piece=_frozen_copy(self.active.matrix),
            piece_kind=self.active.kind,
            piece_x=self.active.x,
            piece_y=self.active.y,
            score=self.score,
            phase=self.phase,
        )
