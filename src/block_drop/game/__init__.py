"""Game module for Block Drop.

Exports the falling-block engine and supporting classes:
- Square: one grid cell with shown/hidden notifications
- GameGrid: fixed arena of squares (board and next-piece preview)
- Piece: tetromino with its rotation pattern table
- PieceKind: Enum of available piece kinds
- Board: falling piece, ticks and row elimination
- ScoringRules: points per cleared-line count
- DescentTimer: caller-driven gravity timer
- GameController: start/pause/game-over sequencing and score
"""

from .events import Signal
from .square import Square, SquareEvent, SquareEventType
from .grid import GameGrid
from .pieces import Piece, PieceKind, ROTATION_PATTERNS, PIECE_COLORS
from .board import Board
from .rules import ScoringRules
from .timer import DescentTimer
from .core import Action, GameConfig, GameController, GameState

__all__ = [
    "Signal",
    "Square",
    "SquareEvent",
    "SquareEventType",
    "GameGrid",
    "Piece",
    "PieceKind",
    "ROTATION_PATTERNS",
    "PIECE_COLORS",
    "Board",
    "ScoringRules",
    "DescentTimer",
    "Action",
    "GameConfig",
    "GameController",
    "GameState",
]
