"""Piece model, shapes, rotation"""
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Optional, Tuple

COLS, ROWS = 10, 20

Shape = Tuple[Tuple[int, ...], ...]

SHAPES = MappingProxyType({
    "I": ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    "J": ((1,0,0),(1,1,1),(0,0,0)),
    "L": ((0,0,1),(1,1,1),(0,0,0)),
    "O": ((1,1),(1,1)),
    "S": ((0,1,1),(1,1,0),(0,0,0)),
    "T": ((0,1,0),(1,1,1),(0,0,0)),
    "Z": ((1,1,0),(0,1,1),(0,0,0)),
})

TAGS = tuple(SHAPES)

# Offsets tried, in order, when a rotation collides in place
WALL_KICKS = (1, -1, 2, -2)

def rotate_cw(m: Shape) -> Shape: return tuple(tuple(r) for r in zip(*m[::-1]))
def rotate_ccw(m: Shape) -> Shape: return tuple(tuple(c) for c in zip(*m))[::-1]

def spawn_x() -> int:
    return COLS // 2 - 2

@dataclass(frozen=True)
class Piece:
    t: Optional[str]
    shape: Shape
    x: int
    y: int
    landed: bool = False

    @staticmethod
    def spawn(t: str) -> "Piece":
        return Piece(t, SHAPES[t], spawn_x(), 0)

    def cells(self):
        """Yield board coordinates of every occupied cell."""
        for y, row in enumerate(self.shape):
            for x, v in enumerate(row):
                if v:
                    yield self.x + x, self.y + y

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self, cw: bool = True) -> "Piece":
        return replace(self, shape=rotate_cw(self.shape) if cw else rotate_ccw(self.shape))
