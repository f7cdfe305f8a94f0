from __future__ import annotations

import logging
import random

import numpy as np
import pytest

from blockdrop.config import EngineConfig
from blockdrop.engine import GameEngine, InputEvent, Phase
from blockdrop.tetromino import Tetromino, TetrominoType


def _snapshot(engine: GameEngine):
    return (
        engine.board.grid.copy(),
        engine.active.matrix.copy(),
        engine.active.position,
        engine.score,
    )


def _assert_fresh_game(engine: GameEngine) -> None:
    assert not engine.board.grid.any()
    assert engine.score == 0
    assert engine.phase is Phase.RUNNING
    assert engine.active.position == engine.spawn_position(engine.active)


def test_new_engine_spawns_centred_piece() -> None:
    engine = GameEngine(EngineConfig(seed=1))
    _assert_fresh_game(engine)
    assert engine.active.y == 0


@pytest.mark.parametrize(
    "kind, expected_x",
    [(TetrominoType.O, 5), (TetrominoType.T, 5), (TetrominoType.I, 4)],
)
def test_spawn_column(kind: TetrominoType, expected_x: int) -> None:
    engine = GameEngine()
    piece = engine.spawn_tetromino(kind)
    assert piece is engine.active
    assert piece.position == (expected_x, 0)


def test_seeded_engines_spawn_same_sequence() -> None:
    first = GameEngine(EngineConfig(seed=42))
    second = GameEngine(rng=random.Random(42))
    kinds_a = [first.spawn_tetromino().kind for _ in range(10)]
    kinds_b = [second.spawn_tetromino().kind for _ in range(10)]
    assert kinds_a == kinds_b


def test_moves_are_blocked_by_walls() -> None:
    engine = GameEngine()
    engine.spawn_tetromino(TetrominoType.O)
    for _ in range(20):
        engine.apply_input(InputEvent.MOVE_LEFT)
    assert engine.active.x == 0
    for _ in range(20):
        engine.apply_input(InputEvent.MOVE_RIGHT)
    assert engine.active.x == engine.board.width - 2


def test_soft_drop_lands_and_merges_at_floor() -> None:
    engine = GameEngine(EngineConfig(width=6, height=6, seed=0))
    engine.active = Tetromino(TetrominoType.O, x=0, y=4)
    engine.apply_input(InputEvent.SOFT_DROP)
    assert engine.board.rows()[4] == [2, 2, 0, 0, 0, 0]
    assert engine.board.rows()[5] == [2, 2, 0, 0, 0, 0]
    assert engine.active.y == 0


def test_landing_two_rows_scores_thirty() -> None:
    engine = GameEngine(EngineConfig(width=4, height=6, seed=0))
    engine.board.grid[4:6, 2:4] = 1
    engine.active = Tetromino(TetrominoType.O, x=0, y=4)

    engine.player_drop()

    assert engine.score == 30
    assert not engine.board.grid.any()


def test_score_accumulates_across_landings() -> None:
    engine = GameEngine(EngineConfig(width=4, height=6, seed=0))
    engine.score = 30
    engine.board.grid[5, 2:4] = 1
    engine.active = Tetromino(TetrominoType.O, x=0, y=4)
    engine.player_drop()
    assert engine.score == 40
    assert engine.board.rows()[5] == [2, 2, 0, 0]


def test_board_full_at_spawn_resets_board_and_score(caplog) -> None:
    engine = GameEngine(EngineConfig(seed=5))
    engine.board.grid[1:, 1:11] = 1
    engine.score = 70
    engine.active = Tetromino(TetrominoType.I, x=10, y=16)

    with caplog.at_level(logging.INFO, logger="blockdrop.engine"):
        engine.player_drop()

    _assert_fresh_game(engine)
    assert "Board full" in caplog.text


def test_spawn_collision_returns_to_running() -> None:
    engine = GameEngine()
    engine.board.grid[:] = 1
    engine.score = 10
    engine.phase = Phase.PAUSED
    engine.spawn_tetromino()
    _assert_fresh_game(engine)


def test_reset_is_idempotent() -> None:
    engine = GameEngine(EngineConfig(seed=9))
    engine.board.grid[15:] = 3
    engine.score = 120
    engine.apply_input(InputEvent.TOGGLE_PAUSE)
    engine.tick(0)
    engine.tick(400)

    engine.on_external_reset()
    _assert_fresh_game(engine)
    once = (engine.board.grid.copy(), engine.score, engine.phase, engine.timer.accumulated)

    engine.on_external_reset()
    _assert_fresh_game(engine)
    twice = (engine.board.grid.copy(), engine.score, engine.phase, engine.timer.accumulated)

    assert np.array_equal(once[0], twice[0])
    assert once[1:] == twice[1:]
    assert engine.timer.last_ts is None


def test_pause_gates_input_and_gravity() -> None:
    engine = GameEngine(EngineConfig(seed=4))
    engine.tick(0)
    engine.apply_input(InputEvent.TOGGLE_PAUSE)
    assert engine.phase is Phase.PAUSED
    before = _snapshot(engine)

    for ts in range(0, 20_000, 250):
        engine.apply_input(InputEvent.MOVE_LEFT)
        engine.apply_input(InputEvent.MOVE_RIGHT)
        engine.apply_input(InputEvent.ROTATE_CW)
        engine.apply_input(InputEvent.ROTATE_CCW)
        engine.apply_input(InputEvent.SOFT_DROP)
        assert not engine.tick(ts)

    after = _snapshot(engine)
    assert np.array_equal(before[0], after[0])
    assert np.array_equal(before[1], after[1])
    assert before[2:] == after[2:]

    engine.apply_input(InputEvent.TOGGLE_PAUSE)
    assert engine.phase is Phase.RUNNING
    engine.apply_input(InputEvent.SOFT_DROP)
    assert engine.active.y == before[2][1] + 1


def test_external_pause_signals_only_pause() -> None:
    engine = GameEngine()
    engine.on_external_pause()
    assert engine.paused
    engine.on_external_pause()
    assert engine.paused

    engine.resume()
    engine.on_focus_lost()
    assert engine.paused

    engine.resume()
    engine.on_visibility_changed(True)
    assert not engine.paused
    engine.on_visibility_changed(False)
    assert engine.paused


def test_reset_resumes_paused_game() -> None:
    engine = GameEngine()
    engine.on_external_pause()
    engine.on_external_reset()
    assert engine.phase is Phase.RUNNING


def test_handle_message_dispatches_commands(caplog) -> None:
    engine = GameEngine()
    engine.handle_message({"command": "pause"})
    assert engine.paused
    engine.score = 40
    engine.handle_message({"command": "reset"})
    assert not engine.paused
    assert engine.score == 0

    with caplog.at_level(logging.WARNING, logger="blockdrop.engine"):
        engine.handle_message({"command": "explode"})
    assert "explode" in caplog.text
    assert not engine.paused


def test_apply_input_accepts_values_and_rejects_unknown() -> None:
    engine = GameEngine()
    engine.apply_input("toggle_pause")
    assert engine.paused
    with pytest.raises(ValueError):
        engine.apply_input("hard_drop")


def test_render_state_is_read_only_snapshot() -> None:
    engine = GameEngine(EngineConfig(seed=2))
    state = engine.get_render_state()

    assert state.board.shape == (20, 12)
    assert state.piece_position == engine.active.position
    assert state.piece_kind is engine.active.kind
    assert state.score == 0
    assert not state.paused
    with pytest.raises(ValueError):
        state.board[0, 0] = 1
    with pytest.raises(ValueError):
        state.piece[0, 0] = 1

    engine.apply_input(InputEvent.SOFT_DROP)
    engine.board.grid[19] = 1
    assert state.piece_y == 0
    assert not state.board.any()
