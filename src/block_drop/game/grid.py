from __future__ import annotations

from typing import Iterator, List, Optional

import numpy as np

from .events import Signal
from .square import Square, SquareEvent, SquareListener


class GameGrid:
    """Fixed arena of squares addressed by (col, row).

    Row 0 is the top. Every square forwards its notifications to the grid, so
    renderers subscribe once here rather than to individual cells. The slots
    never move: clearing rows copies state between squares.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid dimensions must be positive, got {rows}x{cols}")
        self.rows = int(rows)
        self.cols = int(cols)
        self.square_events = Signal()
        self.cells: List[List[Square]] = [
            [self._new_square(col, row) for col in range(self.cols)] for row in range(self.rows)
        ]

    def _new_square(self, col: int, row: int) -> Square:
        square = Square(col, row)
        square.subscribe(self._forward)
        return square

    def _forward(self, event: SquareEvent) -> None:
        self.square_events.emit(event)

    def subscribe(self, listener: SquareListener) -> None:
        self.square_events.connect(listener)

    def unsubscribe(self, listener: SquareListener) -> None:
        self.square_events.disconnect(listener)

    def is_inside(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def get_square(self, col: int, row: int) -> Optional[Square]:
        if not self.is_inside(col, row):
            return None
        return self.cells[row][col]

    def squares(self) -> Iterator[Square]:
        for row in self.cells:
            yield from row

    def is_row_full(self, row: int) -> bool:
        return all(square.occupied for square in self.cells[row])

    def clear(self) -> None:
        for square in self.squares():
            square.clear()

    def occupancy(self) -> np.ndarray:
        grid = np.zeros((self.rows, self.cols), dtype=np.int8)
        for square in self.squares():
            if square.occupied:
                grid[square.row, square.col] = 1
        return grid
