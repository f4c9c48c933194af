from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional

from .board import Board
from .events import Signal
from .grid import GameGrid
from .pieces import Piece
from .rules import ScoringRules
from .timer import DescentTimer

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    ROTATE = 3
    NONE = 4


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    rows: int = 20
    cols: int = 10
    preview_rows: int = 4
    preview_cols: int = 4
    spawn_x: int = 3
    spawn_y: int = 0
    tick_interval_ms: int = 1000
    random_seed: Optional[int] = None


class GameController:
    """Turn sequencing on top of a Board.

    The controller owns the descent timer, the "next piece" preview grid and
    the score. Time only passes when the caller reports it via `advance`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.board = Board(self.config.rows, self.config.cols, rng=self.rng)
        self.preview = GameGrid(self.config.preview_rows, self.config.preview_cols)
        self.timer = DescentTimer(self.config.tick_interval_ms, self._on_timer)
        self.score = 0
        self.lines_cleared = 0
        self.state = GameState.IDLE
        self.next_piece: Optional[Piece] = None

        self.score_changed = Signal()
        self.state_changed = Signal()

        self.board.piece_locked.connect(self._on_piece_locked)
        self.board.lines_cleared.connect(self._on_lines_cleared)
        self.board.ready_for_next.connect(self._on_ready_for_next)
        self.board.game_over.connect(self._on_game_over)

    def _set_state(self, state: GameState) -> None:
        if state is self.state:
            return
        logger.debug("state %s -> %s", self.state.value, state.value)
        self.state = state
        self.state_changed.emit(state)

    @property
    def is_running(self) -> bool:
        return self.state is GameState.RUNNING

    def start(self) -> bool:
        if self.state not in (GameState.IDLE, GameState.GAME_OVER):
            return False
        self.timer.stop()
        self.board.clear()
        self.preview.clear()
        self.score = 0
        self.lines_cleared = 0
        self.score_changed.emit(self.score, self.lines_cleared)
        self.next_piece = None
        # Running before spawning so an obstructed spawn can end the game
        self._set_state(GameState.RUNNING)
        if self.board.spawn_piece(x=self.config.spawn_x, y=self.config.spawn_y) is None:
            return False
        self._new_next_piece()
        self.timer.start()
        return True

    def pause(self) -> bool:
        if self.state is not GameState.RUNNING:
            return False
        self.timer.stop()
        self._set_state(GameState.PAUSED)
        return True

    def resume(self) -> bool:
        if self.state is not GameState.PAUSED:
            return False
        self.timer.start()
        self._set_state(GameState.RUNNING)
        return True

    def stop(self) -> None:
        """Abandon the current game and return to IDLE."""
        self.timer.stop()
        self._set_state(GameState.IDLE)

    def toggle(self) -> bool:
        """Single start/pause/resume control."""
        if self.state is GameState.RUNNING:
            return self.pause()
        if self.state is GameState.PAUSED:
            return self.resume()
        return self.start()

    def reseed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def move_left(self) -> bool:
        return self.is_running and self.board.move_left()

    def move_right(self) -> bool:
        return self.is_running and self.board.move_right()

    def rotate(self) -> bool:
        return self.is_running and self.board.rotate()

    def move_down(self) -> bool:
        # Same as a timer tick: a blocked down press locks the piece
        return self.is_running and self.board.tick()

    def step(self, action: Action) -> bool:
        action = Action(action)
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.DOWN:
            return self.move_down()
        if action == Action.ROTATE:
            return self.rotate()
        return False

    def advance(self, elapsed_ms: int) -> int:
        return self.timer.advance(elapsed_ms)

    def tick(self) -> bool:
        return self.move_down()

    def _on_timer(self) -> None:
        if self.is_running:
            self.board.tick()

    def _on_piece_locked(self, piece: Piece) -> None:
        self.timer.stop()

    def _on_lines_cleared(self, count: int) -> None:
        self.score += self.rules.score_for_lines(count)
        self.lines_cleared += count
        logger.debug("score %d after clearing %d line(s)", self.score, count)
        self.score_changed.emit(self.score, self.lines_cleared)

    def _on_ready_for_next(self) -> None:
        if not self.is_running or self.next_piece is None:
            return
        piece = self.next_piece
        piece.hide()
        self.next_piece = None
        if not self.board.place_piece(piece, self.config.spawn_x, self.config.spawn_y):
            return
        self._new_next_piece()
        self.timer.start()

    def _on_game_over(self) -> None:
        self.timer.stop()
        if self.state is GameState.RUNNING:
            logger.info("game over: score=%d lines=%d", self.score, self.lines_cleared)
            self._set_state(GameState.GAME_OVER)

    def _new_next_piece(self) -> None:
        self.next_piece = self.board.new_piece(self.preview, 0, 0)
        self.next_piece.show()

    def snapshot(self) -> Dict[str, Any]:
        current = self.board.current_piece
        return {
            "grid": self.board.to_array(),
            "score": self.score,
            "lines_cleared": self.lines_cleared,
            "state": self.state,
            "current_piece": current.kind if current is not None else None,
            "next_piece": self.next_piece.kind if self.next_piece is not None else None,
        }
