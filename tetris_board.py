"""Board helpers: collide, merge, sweep, ghost"""
from typing import List, Optional, Tuple
from tetris_piece import Piece, COLS, ROWS

Board = List[List[Optional[str]]]

def new_board() -> Board:
    return [[None] * COLS for _ in range(ROWS)]

def copy_board(board: Board) -> Board:
    return [row[:] for row in board]

def collide(board: Board, piece: Optional[Piece], dx: int = 0, dy: int = 0) -> bool:
    """Return True if piece, offset by (dx, dy), leaves the board or overlaps a locked cell."""
    if piece is None or not piece.t:
        return True
    for x, y in piece.cells():
        bx, by = x + dx, y + dy
        if bx < 0 or bx >= COLS or by < 0 or by >= ROWS:
            return True
        if board[by][bx]:
            return True
    return False

def merge(board: Board, piece: Piece) -> Board:
    """Return a copy of board with the piece stamped in. Out-of-bounds cells are skipped."""
    out = copy_board(board)
    for x, y in piece.cells():
        if 0 <= x < COLS and 0 <= y < ROWS:
            out[y][x] = piece.t
    return out

def sweep(board: Board) -> Tuple[Board, int]:
    """Remove full rows bottom-up and return (new board, rows cleared)."""
    out = copy_board(board)
    cleared = 0
    y = ROWS - 1
    while y >= 0:
        if all(out[y]):
            del out[y]
            out.insert(0, [None] * COLS)
            cleared += 1
        else:
            y -= 1
    return out, cleared

def drop_distance(board: Board, piece: Piece) -> int:
    """Rows the piece can fall before it rests."""
    offset = 0
    while not collide(board, piece, 0, offset + 1):
        offset += 1
    return offset

def ghost_y(board: Board, piece: Piece) -> int:
    """Return the y position where the piece would land if hard-dropped."""
    return piece.y + drop_distance(board, piece)
