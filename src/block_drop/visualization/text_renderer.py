from __future__ import annotations

from typing import List, Optional

import numpy as np

from block_drop.game import GameGrid, SquareEvent, SquareEventType

FILLED = "█"
EMPTY = "·"


class TextRenderer:
    """Character buffer kept in sync purely through cell notifications."""

    def __init__(self, grid: Optional[GameGrid] = None, filled: str = FILLED, empty: str = EMPTY) -> None:
        self.filled = filled
        self.empty = empty
        self.grid: Optional[GameGrid] = None
        self.buffer: List[List[str]] = []
        self.events_seen = 0
        if grid is not None:
            self.attach(grid)

    def attach(self, grid: GameGrid) -> None:
        if self.grid is not None:
            self.grid.unsubscribe(self.on_square_event)
        self.grid = grid
        self.buffer = [
            [self.filled if grid.cells[row][col].occupied else self.empty for col in range(grid.cols)]
            for row in range(grid.rows)
        ]
        grid.subscribe(self.on_square_event)

    def detach(self) -> None:
        if self.grid is not None:
            self.grid.unsubscribe(self.on_square_event)
        self.grid = None

    def on_square_event(self, event: SquareEvent) -> None:
        self.events_seen += 1
        glyph = self.filled if event.kind == SquareEventType.SHOWN else self.empty
        self.buffer[event.row][event.col] = glyph

    def render(self) -> str:
        return "\n".join("".join(row) for row in self.buffer)


def grid_to_text(grid: np.ndarray, filled: str = FILLED, empty: str = EMPTY) -> str:
    return "\n".join("".join(filled if cell else empty for cell in row) for row in grid)


def print_grid(grid: np.ndarray) -> None:
    print(grid_to_text(grid))
