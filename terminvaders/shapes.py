"""
Fixed-size bitmaps for everything that gets drawn
"""

from typing import Iterator, List, Sequence, Tuple

import numpy as np


class Shape:
    """Immutable grid of filled/empty cells, rows x width"""

    def __init__(self, grid: np.ndarray):
        grid = np.array(grid, dtype=bool)
        if grid.ndim != 2 or grid.shape[1] == 0:
            raise ValueError("shape grid must be 2D with at least one column")
        grid.setflags(write=False)
        self.grid = grid

    @classmethod
    def from_rows(cls, rows: Sequence[int], width: int) -> "Shape":
        """Decode integer bit rows, most significant bit = leftmost cell"""
        shifts = np.arange(width - 1, -1, -1)
        grid = (np.array(rows, dtype=np.int64)[:, None] >> shifts) & 1
        return cls(grid)

    @property
    def width(self) -> int:
        return self.grid.shape[1]

    @property
    def height(self) -> int:
        return self.grid.shape[0]

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield (dx, dy) offsets of filled cells, row by row"""
        for dy, dx in zip(*np.nonzero(self.grid)):
            yield int(dx), int(dy)

    def lines(self, fill: str = "█", empty: str = " ") -> List[str]:
        """Render each row as a string of exactly `width` characters"""
        return ["".join(fill if cell else empty for cell in row) for row in self.grid]

    def __eq__(self, other):
        if not isinstance(other, Shape):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    def __hash__(self):
        return hash((self.grid.shape, self.grid.tobytes()))

    def __repr__(self):
        return f"Shape({self.height}x{self.width})"


# Archetype bitmaps
PLAYER = Shape.from_rows([
    0b000010000,
    0b100111001,
    0b111101111,
], 9)

PLAYER_SHOT = Shape.from_rows([
    0b000010000,
    0b100010001,
], 9)

BULLET = Shape.from_rows([0b1], 1)

SCOUT = Shape.from_rows([
    0b0001000,
    0b0111110,
    0b1010101,
], 7)

WEAVER = Shape.from_rows([
    0b0111111110,
    0b1000000001,
    0b1011111101,
    0b0100000010,
], 10)

BRUTE = Shape.from_rows([
    0b0011111100,
    0b0110011010,
    0b1101111011,
    0b1101111011,
    0b0111111110,
    0b0011011000,
    0b0110011010,
    0b1100000011,
], 10)

BOSS = Shape.from_rows([
    0b000000000000000000000000000000000000000000000000000000000111,
    0b000011111110001111111000011111100011111000011111000111111000,
    0b001100000001010000001010000010100000001010000101000000000110,
    0b000011111111110111111011111110111111101111111011111111100000,
    0b000000000001010000001010000010100000001010000101000000000000,
    0b000011111110001111111000011111100011111000011111000111111000,
    0b000000000000000000000000000000000000000000000000000000000111,
], 60)

# Mirror image, used while the boss travels to the right
BOSS_TURNED = Shape.from_rows([
    0b111000000000000000000000000000000000000000000000000000000000,
    0b000111111000111110000111110001111110000111111100011111110000,
    0b011000000000101000010100000001010000010100000010100000001100,
    0b000001111111110111111101111111011111110111111011111111110000,
    0b000000000000101000010100000001010000010100000010100000000000,
    0b000111111000111110000111110001111110000111111100011111110000,
    0b111000000000000000000000000000000000000000000000000000000000,
], 60)
