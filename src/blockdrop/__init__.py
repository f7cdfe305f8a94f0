"""Falling-block puzzle engine."""

from .board import Board
from .config import ConfigError, EngineConfig
from .engine import GameEngine, InputEvent, Phase, RenderState
from .rotation import player_rotate
from .scoring import sweep_points
from .tetromino import Tetromino, TetrominoType, create_piece, rotate_matrix
from .timing import DropTimer
from .utils import collide, render_grid

__all__ = [
    "Board",
    "ConfigError",
    "DropTimer",
    "EngineConfig",
    "GameEngine",
    "InputEvent",
    "Phase",
    "RenderState",
    "Tetromino",
    "TetrominoType",
    "collide",
    "create_piece",
    "player_rotate",
    "render_grid",
    "rotate_matrix",
    "sweep_points",
]
