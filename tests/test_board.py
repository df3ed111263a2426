import math

import pytest

from chessarm.board import (
    PieceStorage,
    Pose,
    chess_frame,
    color_label_matrix,
    deg_to_rad,
    find_in_matrix,
    format_board,
    move_piece,
    piece_label_matrix,
    pose_grid,
    split_move,
    square_label_matrix,
)

START = Pose(-0.200, -0.444, 0.15, 0, 1, 0, 0)


def test_offset_z_moves_only_z():
    moved = START.offset_z(0.15)
    assert moved.z == pytest.approx(0.30)
    assert (moved.x, moved.y, moved.qx, moved.qy, moved.qz, moved.qw) == (
        START.x, START.y, START.qx, START.qy, START.qz, START.qw,
    )
    assert START.z == 0.15


def test_deg_to_rad():
    assert deg_to_rad(180) == pytest.approx(math.pi)
    assert deg_to_rad(0) == 0
    assert deg_to_rad(-90) == pytest.approx(-math.pi / 2)


def test_pose_grid_shape_and_spacing():
    grid = pose_grid(START, 2, 8)
    assert len(grid) == 2
    assert all(len(row) == 8 for row in grid)
    assert grid[0][0] == START
    assert grid[1][0].x - grid[0][0].x == pytest.approx(0.05)
    assert grid[0][0].y - grid[0][1].y == pytest.approx(0.05)
    assert all(pose.z == START.z and pose.qy == START.qy for row in grid for pose in row)


def test_chess_frame_is_eight_by_eight():
    frame = chess_frame(START)
    assert len(frame) == 8
    assert all(len(row) == 8 for row in frame)
    assert frame == pose_grid(START, 8, 8)


def test_piece_label_matrix():
    board = piece_label_matrix()
    assert board[0] == ["r", "n", "b", "q", "k", "b", "n", "r"]
    assert board[7] == board[0]
    assert board[1] == ["p"] * 8
    assert board[6] == ["p"] * 8
    assert all(cell == "" for row in board[2:6] for cell in row)


def test_piece_label_matrix_rows_are_independent():
    board = piece_label_matrix()
    board[0][0] = ""
    assert board[7][0] == "r"


@pytest.mark.parametrize("colour,other", [("w", "b"), ("b", "w")])
def test_color_label_matrix(colour, other):
    board = color_label_matrix(colour)
    assert board[0] == [other] * 8
    assert board[1] == [other] * 8
    assert board[6] == [colour] * 8
    assert board[7] == [colour] * 8
    assert all(cell == "" for row in board[2:6] for cell in row)


def test_color_label_matrix_rejects_unknown_colour():
    with pytest.raises(ValueError):
        color_label_matrix("x")


@pytest.mark.parametrize("white", [True, False])
def test_square_labels_cover_board_once(white):
    labels = square_label_matrix(white)
    flat = [cell for row in labels for cell in row]
    assert len(set(flat)) == 64
    assert all(cell[0] in "abcdefgh" and cell[1] in "12345678" for cell in flat)


def test_square_labels_black_player_origin():
    labels = square_label_matrix(False)
    assert labels[0][0] == "a1"
    assert labels[7][7] == "h8"


def test_square_labels_white_is_rotated_black():
    white = square_label_matrix(True)
    black = square_label_matrix(False)
    assert white == [list(reversed(row)) for row in reversed(black)]


def test_move_piece():
    board = piece_label_matrix()
    move_piece(board, (1, 4), (3, 4))
    assert board[1][4] == ""
    assert board[3][4] == "p"


def test_move_piece_captures():
    board = piece_label_matrix()
    move_piece(board, (0, 3), (6, 3))
    assert board[6][3] == "q"
    assert board[0][3] == ""


def test_split_move_plain():
    assert split_move("e2e4") == ["e2", "e4"]


def test_split_move_promotion():
    assert split_move("e7e8q") == ["e7", "e8", "q"]


def test_split_move_empty():
    assert split_move("") == []


def test_find_in_matrix_round_trip():
    labels = square_label_matrix(True)
    for row_index, row in enumerate(labels):
        for col_index, label in enumerate(row):
            assert find_in_matrix(labels, label) == (row_index, col_index)


def test_find_in_matrix_missing():
    assert find_in_matrix(square_label_matrix(False), "z9") is None


def test_format_board_initial():
    lines = format_board(piece_label_matrix()).splitlines()
    assert len(lines) == 8
    assert lines[0] == "r n b q k b n r"
    assert lines[3] == " ".join(["0"] * 8)


def test_storage_starts_empty():
    storage = PieceStorage(2, 8)
    assert storage.cells == [["0"] * 8, ["0"] * 8]
    assert storage.format() == ("0 " * 7 + "0\n") * 2


def test_storage_store_fills_in_order():
    storage = PieceStorage(2, 2)
    assert storage.store("p") == (0, 0)
    assert storage.store("n") == (0, 1)
    assert storage.store("q") == (1, 0)
    assert storage.cells == [["p", "n"], ["q", "0"]]


def test_storage_store_when_full():
    storage = PieceStorage(1, 1)
    storage.store("p")
    assert storage.store("r") is None
    assert storage.cells == [["p"]]


def test_storage_take_frees_slot():
    storage = PieceStorage(2, 8)
    storage.store("p")
    storage.store("q")
    assert storage.take("q") == (0, 1)
    assert storage.cells[0][:2] == ["p", "0"]
    assert storage.take("q") is None


def test_storage_update_follows_move_length():
    storage = PieceStorage(2, 8)
    assert storage.update("e2e4", "n") == (0, 0)
    assert storage.update("a2a4", "r") == (0, 1)
    assert storage.update("b7b8n", "") == (0, 0)
    assert storage.cells[0][:2] == ["0", "r"]
    assert storage.update("bad", "p") is None


def test_storage_rejects_negative_size():
    with pytest.raises(ValueError):
        PieceStorage(-1, 8)