from __future__ import annotations

import random
from typing import Iterable, List

import pytest

from block_drop.game import Board, GameGrid, PieceKind, SquareEvent

RED = (255, 0, 0)
AZURE = (240, 255, 255)


class FixedKinds(random.Random):
    """Random source that always deals the same piece kind."""

    def __init__(self, kind: PieceKind = PieceKind.O) -> None:
        super().__init__(0)
        self.kind = kind

    def choice(self, seq):  # type: ignore[override]
        return self.kind


def fill_row(grid: GameGrid, row: int, skip: Iterable[int] = ()) -> None:
    skipped = set(skip)
    for col in range(grid.cols):
        if col not in skipped:
            grid.get_square(col, row).set_occupied(RED, AZURE)


class Recorder:
    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def __call__(self, *args) -> None:
        self.calls.append(args)

    @property
    def events(self) -> List[SquareEvent]:
        return [call[0] for call in self.calls]


@pytest.fixture
def board() -> Board:
    return Board(20, 10, rng=random.Random(1234))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
