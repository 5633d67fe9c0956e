import pytest

from tetris_piece import SHAPES, TAGS, Piece, rotate_ccw, rotate_cw, spawn_x


def test_seven_tags_with_square_boxes():
    assert sorted(TAGS) == ["I", "J", "L", "O", "S", "T", "Z"]
    for t, shape in SHAPES.items():
        assert len(shape) in (2, 3, 4), t
        assert all(len(row) == len(shape) for row in shape)


def test_shape_table_is_read_only():
    with pytest.raises(TypeError):
        SHAPES["T"] = ((1,),)
    assert isinstance(SHAPES["I"], tuple)


def test_rotate_cw_matches_index_formula():
    m = SHAPES["L"]
    n = len(m)
    r = rotate_cw(m)
    for i in range(n):
        for j in range(n):
            assert r[i][j] == m[n - 1 - j][i]


def test_rotate_t_clockwise():
    assert rotate_cw(SHAPES["T"]) == ((0, 1, 0), (0, 1, 1), (0, 1, 0))


def test_four_turns_is_identity():
    for t, shape in SHAPES.items():
        s = shape
        for _ in range(4):
            s = rotate_cw(s)
        assert s == shape, t
        assert rotate_ccw(rotate_cw(shape)) == shape


def test_spawn_position():
    p = Piece.spawn("S")
    assert (p.x, p.y) == (3, 0) == (spawn_x(), 0)
    assert p.t == "S" and not p.landed
    assert p.shape is SHAPES["S"]


def test_rotated_leaves_source_alone():
    p = Piece.spawn("J")
    q = p.rotated()
    assert p.shape == SHAPES["J"]
    assert q.shape == rotate_cw(SHAPES["J"])
    assert (q.x, q.y, q.t) == (p.x, p.y, p.t)


def test_cells_are_board_coordinates():
    p = Piece("O", SHAPES["O"], 4, 7)
    assert sorted(p.cells()) == [(4, 7), (4, 8), (5, 7), (5, 8)]
