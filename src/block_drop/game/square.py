from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Tuple

from .events import Signal

Color = Tuple[int, int, int]


class SquareEventType(IntEnum):
    SHOWN = 1
    HIDDEN = 2


@dataclass(frozen=True)
class SquareEvent:
    kind: SquareEventType
    col: int
    row: int
    fore_color: Optional[Color] = None
    fill_color: Optional[Color] = None


SquareListener = Callable[[SquareEvent], None]


class Square:
    """A single grid cell.

    The engine only reads `occupied`; the colours are carried along so that
    whatever listens to the cell can draw it.
    """

    def __init__(self, col: int, row: int) -> None:
        self.col = col
        self.row = row
        self.occupied = False
        self.fore_color: Optional[Color] = None
        self.fill_color: Optional[Color] = None
        self._changed = Signal()

    def subscribe(self, listener: SquareListener) -> None:
        self._changed.connect(listener)

    def clear_listeners(self) -> None:
        self._changed.clear()

    @property
    def listener_count(self) -> int:
        return len(self._changed)

    def is_occupied(self) -> bool:
        return self.occupied

    def set_occupied(self, fore_color: Optional[Color], fill_color: Optional[Color]) -> None:
        self.fore_color = fore_color
        self.fill_color = fill_color
        self.occupied = True
        self._changed.emit(
            SquareEvent(SquareEventType.SHOWN, self.col, self.row, fore_color, fill_color)
        )

    def clear(self) -> None:
        self.occupied = False
        self._changed.emit(SquareEvent(SquareEventType.HIDDEN, self.col, self.row))

    def assign(self, other: "Square") -> None:
        """Take over the state of `other`; position and listeners stay."""
        if other.occupied:
            self.set_occupied(other.fore_color, other.fill_color)
        else:
            self.fore_color = other.fore_color
            self.fill_color = other.fill_color
            self.clear()

    def __repr__(self) -> str:
        return f"Square(col={self.col}, row={self.row}, occupied={self.occupied})"
