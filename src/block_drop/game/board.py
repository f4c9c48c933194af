from __future__ import annotations

import logging
import random
from typing import Optional

import numpy as np

from .events import Signal
from .grid import GameGrid
from .pieces import Piece, PieceKind

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 20
DEFAULT_COLS = 10
SPAWN_X = 3
SPAWN_Y = 0

# A locked piece spans at most four rows, so the scan never looks further up.
SCAN_DEPTH = 4


class Board(GameGrid):
    """Main playing field: owns the falling piece and clears completed rows.

    Signals, emitted synchronously and in this order when a piece lands:
      piece_locked(piece) -> lines_cleared(n) (only if n > 0) -> ready_for_next()
    game_over() is emitted when a spawned or handed-over piece is obstructed.
    """

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(rows, cols)
        self.rng = rng if rng is not None else random.Random()
        self.current_piece: Optional[Piece] = None
        self.piece_locked = Signal()
        self.lines_cleared = Signal()
        self.ready_for_next = Signal()
        self.game_over = Signal()

    def random_kind(self) -> PieceKind:
        return self.rng.choice(list(PieceKind))

    def new_piece(self, grid: Optional[GameGrid] = None, x: int = 0, y: int = 0,
                  kind: Optional[PieceKind] = None) -> Piece:
        """Create a hidden piece of `kind` (random when None) on `grid`."""
        if kind is None:
            kind = self.random_kind()
        return Piece(kind, grid if grid is not None else self, x, y)

    def spawn_piece(self, kind: Optional[PieceKind] = None, x: int = SPAWN_X,
                    y: int = SPAWN_Y) -> Optional[Piece]:
        piece = self.new_piece(self, x, y, kind)
        if self.place_piece(piece, x, y):
            return piece
        return None

    def place_piece(self, piece: Piece, x: int = SPAWN_X, y: int = SPAWN_Y) -> bool:
        """Make `piece` the current piece at (x, y) if its cells are free."""
        if piece.grid is not self or piece.position != (x, y):
            piece.place_on(self, x, y)
        if not piece.can_show():
            logger.info("%s piece obstructed at (%d, %d)", piece.kind.name, x, y)
            self.game_over.emit()
            return False
        piece.show()
        self.current_piece = piece
        return True

    def move_left(self) -> bool:
        return self.current_piece is not None and self.current_piece.move(-1, 0)

    def move_right(self) -> bool:
        return self.current_piece is not None and self.current_piece.move(1, 0)

    def move_down(self) -> bool:
        return self.current_piece is not None and self.current_piece.move(0, 1)

    def rotate(self) -> bool:
        return self.current_piece is not None and self.current_piece.rotate()

    def tick(self) -> bool:
        """Advance one descent step; return True if the piece moved down."""
        piece = self.current_piece
        if piece is None:
            return False
        if piece.can_descend():
            return piece.move(0, 1)
        logger.debug("%s piece locked at (%d, %d)", piece.kind.name, piece.x, piece.y)
        self.piece_locked.emit(piece)
        self.eliminate_lines(piece.bottom_row())
        self.current_piece = None
        self.ready_for_next.emit()
        return False

    def eliminate_lines(self, start_row: int) -> int:
        """Clear full rows from `start_row` up to three rows above it.

        A cleared row is immediately re-checked since the row above has slid
        into it, and the upper bound of the scan moves down with it.
        """
        if not 0 <= start_row < self.rows:
            raise ValueError(f"start_row {start_row} outside 0..{self.rows - 1}")
        upper = max(start_row - (SCAN_DEPTH - 1), 0)
        row = start_row
        count = 0
        while row >= upper:
            if not self.is_row_full(row):
                row -= 1
                continue
            count += 1
            self._collapse_row(row)
            upper += 1
        if count:
            logger.debug("cleared %d line(s) scanning up from row %d", count, start_row)
            self.lines_cleared.emit(count)
        return count

    def _collapse_row(self, row: int) -> None:
        for k in range(row, 0, -1):
            above = self.cells[k - 1]
            for col, square in enumerate(self.cells[k]):
                square.assign(above[col])
        # The old top row is dropped; fresh squares take its slots
        for col, square in enumerate(self.cells[0]):
            square.clear_listeners()
            fresh = self._new_square(col, 0)
            self.cells[0][col] = fresh
            fresh.clear()

    def clear(self) -> None:
        super().clear()
        self.current_piece = None

    def to_array(self) -> np.ndarray:
        """Occupancy snapshot: 1 locked, -1 falling piece, 0 empty."""
        grid = self.occupancy()
        if self.current_piece is not None and self.current_piece.visible:
            for col, row in self.current_piece.occupied_positions():
                grid[row, col] = -1
        return grid
