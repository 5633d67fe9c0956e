import pytest

from tetris_engine import Game


@pytest.fixture
def game():
    g = Game(seed=1234)
    g.start(now_ms=0)
    return g


def fill_row(board, y, skip=()):
    for x in range(len(board[y])):
        if x not in skip:
            board[y][x] = "Z"
