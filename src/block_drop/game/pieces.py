from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from .grid import GameGrid
    from .square import Color, Square


class PieceKind(IntEnum):
    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


Offset = Tuple[int, int]
Pattern = Tuple[Offset, Offset, Offset, Offset]

# (dx, dy) offsets from the anchor, one tuple per rotation state.
# O has a single state, I/S/Z two and J/L/T four.
ROTATION_PATTERNS: Dict[PieceKind, Tuple[Pattern, ...]] = {
    PieceKind.T: (
        ((0, 1), (1, 1), (2, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (2, 1), (1, 2)),
    ),
    PieceKind.I: (
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((1, 0), (1, 1), (1, 2), (1, 3)),
    ),
    PieceKind.J: (
        ((1, 0), (1, 1), (1, 2), (0, 2)),
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (2, 2)),
    ),
    PieceKind.L: (
        ((1, 0), (1, 1), (1, 2), (2, 2)),
        ((0, 1), (1, 1), (2, 1), (0, 2)),
        ((0, 0), (1, 0), (1, 1), (1, 2)),
        ((2, 0), (0, 1), (1, 1), (2, 1)),
    ),
    PieceKind.S: (
        ((1, 0), (2, 0), (0, 1), (1, 1)),
        ((1, 0), (1, 1), (2, 1), (2, 2)),
    ),
    PieceKind.Z: (
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, 0), (1, 1), (2, 1), (1, 2)),
    ),
    PieceKind.O: (
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
}

AZURE: "Color" = (240, 255, 255)

PIECE_COLORS: Dict[PieceKind, "Color"] = {
    PieceKind.T: (128, 0, 128),   # purple
    PieceKind.I: (255, 0, 0),     # red
    PieceKind.J: (0, 0, 0),       # black
    PieceKind.L: (255, 0, 255),   # magenta
    PieceKind.S: (0, 128, 0),     # green
    PieceKind.Z: (255, 165, 0),   # orange
    PieceKind.O: (0, 0, 255),     # blue
}


class Piece:
    """A tetromino placed on a grid.

    `cells` always holds the squares resolved from the anchor and the current
    rotation; an entry is None when the offset falls outside the grid, which
    makes that position invalid. The piece marks its squares occupied only
    while shown.
    """

    def __init__(self, kind: PieceKind, grid: "GameGrid", x: int, y: int) -> None:
        self.kind = PieceKind(kind)
        self.grid = grid
        self.x = x
        self.y = y
        self.rotation = 0
        self.visible = False
        self.fore_color = PIECE_COLORS[self.kind]
        self.fill_color = AZURE
        self.cells: List[Optional["Square"]] = self._resolve(x, y, self.rotation)

    @property
    def patterns(self) -> Tuple[Pattern, ...]:
        return ROTATION_PATTERNS.get(self.kind, ())

    @property
    def pattern_count(self) -> int:
        return len(self.patterns)

    @property
    def pattern(self) -> Pattern:
        return self.patterns[self.rotation]

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def _resolve(self, x: int, y: int, rotation: int) -> List[Optional["Square"]]:
        if not self.patterns:
            return []
        return [self.grid.get_square(x + dx, y + dy) for dx, dy in self.patterns[rotation]]

    def _owns(self, square: "Square") -> bool:
        return self.visible and any(square is own for own in self.cells)

    def _fits(self, cells: List[Optional["Square"]]) -> bool:
        if not cells:
            return False
        for square in cells:
            if square is None:
                return False
            if square.occupied and not self._owns(square):
                return False
        return True

    def _commit(self, x: int, y: int, rotation: int, cells: List[Optional["Square"]]) -> None:
        shown = self.visible
        if shown:
            self.hide()
        self.x, self.y, self.rotation = x, y, rotation
        self.cells = cells
        if shown:
            self.show()

    def move(self, dx: int, dy: int) -> bool:
        x, y = self.x + dx, self.y + dy
        dest = self._resolve(x, y, self.rotation)
        if not self._fits(dest):
            return False
        self._commit(x, y, self.rotation, dest)
        return True

    def rotate(self) -> bool:
        if not self.patterns:
            return False
        rotation = (self.rotation + 1) % self.pattern_count
        dest = self._resolve(self.x, self.y, rotation)
        if not self._fits(dest):
            return False
        self._commit(self.x, self.y, rotation, dest)
        return True

    def can_descend(self) -> bool:
        return self._fits(self._resolve(self.x, self.y + 1, self.rotation))

    def can_show(self) -> bool:
        return self._fits(self.cells)

    def bottom_row(self) -> int:
        rows = [square.row for square in self.cells if square is not None]
        if not rows:
            raise ValueError(f"{self.kind.name} piece at {self.position} has no cells on the grid")
        return max(rows)

    def show(self) -> None:
        for square in self.cells:
            if square is not None:
                square.set_occupied(self.fore_color, self.fill_color)
        self.visible = True

    def hide(self) -> None:
        for square in self.cells:
            if square is not None:
                square.clear()
        self.visible = False

    def place_on(self, grid: "GameGrid", x: int, y: int) -> None:
        """Move the piece to another grid (e.g. from the preview to the board)."""
        if self.visible:
            self.hide()
        self.grid = grid
        self.x, self.y = x, y
        self.cells = self._resolve(x, y, self.rotation)

    def occupied_positions(self) -> List[Tuple[int, int]]:
        return [(square.col, square.row) for square in self.cells if square is not None]

    def __repr__(self) -> str:
        return f"Piece({self.kind.name}, x={self.x}, y={self.y}, rotation={self.rotation})"
