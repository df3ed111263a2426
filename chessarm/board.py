"""Board geometry, square labels and captured-piece storage for the chess arm."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

BOARD_SIZE = 8
GRID_SPACING = 0.05
EMPTY_SLOT = "0"
FILES = "abcdefgh"

Matrix = list[list[str]]
Cell = tuple[int, int]


@dataclass(frozen=True)
class Pose:
    """A tool position with an orientation quaternion."""

    x: float
    y: float
    z: float
    qx: float = 0.0
    qy: float = 0.0
    qz: float = 0.0
    qw: float = 1.0

    def offset_z(self, offset: float) -> Pose:
        """Return a copy of this pose moved by ``offset`` along z."""
        return replace(self, z=self.z + offset)


def deg_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def pose_grid(start: Pose, rows: int, cols: int) -> list[list[Pose]]:
    """Lay out ``rows`` by ``cols`` poses from ``start``: +x per row, -y per column."""
    return [
        [
            replace(start, x=start.x + row * GRID_SPACING, y=start.y - col * GRID_SPACING)
            for col in range(cols)
        ]
        for row in range(rows)
    ]


def chess_frame(start: Pose) -> list[list[Pose]]:
    """Return the 8 by 8 grid of square poses starting at ``start``."""
    return pose_grid(start, BOARD_SIZE, BOARD_SIZE)


def piece_label_matrix() -> Matrix:
    """Return the starting position as piece letters, empty squares as ''."""
    back_rank = ["r", "n", "b", "q", "k", "b", "n", "r"]
    pawns = ["p"] * BOARD_SIZE
    empty = [[""] * BOARD_SIZE for _ in range(4)]
    return [list(back_rank), list(pawns), *empty, list(pawns), list(back_rank)]


def color_label_matrix(start_color: str) -> Matrix:
    """Return the owner colour of each starting square seen from ``start_color``."""
    if start_color not in ("w", "b"):
        raise ValueError(f"colour must be 'w' or 'b', not {start_color!r}")
    far = "b" if start_color == "w" else "w"
    return (
        [[far] * BOARD_SIZE for _ in range(2)]
        + [[""] * BOARD_SIZE for _ in range(4)]
        + [[start_color] * BOARD_SIZE for _ in range(2)]
    )


def square_label_matrix(is_player_white: bool) -> Matrix:
    """Return the algebraic square name under each grid cell for the player's side."""
    if is_player_white:
        return [
            [f"{file}{BOARD_SIZE - row}" for file in reversed(FILES)]
            for row in range(BOARD_SIZE)
        ]
    return [[f"{file}{row + 1}" for file in FILES] for row in range(BOARD_SIZE)]


def move_piece(board: Matrix, source: Cell, target: Cell) -> None:
    """Move whatever stands on ``source`` to ``target``, leaving ``source`` empty."""
    (from_row, from_col), (to_row, to_col) = source, target
    piece = board[from_row][from_col]
    board[from_row][from_col] = ""
    board[to_row][to_col] = piece


def split_move(text: str) -> list[str]:
    """Split a move such as ``e2e4`` into pieces ending at each digit, plus any rest."""
    parts: list[str] = []
    current = ""
    for char in text:
        if char.isdigit():
            if current:
                parts.append(current + char)
            current = ""
        else:
            current += char
    if current:
        parts.append(current)
    return parts


def find_in_matrix(matrix: Matrix, target: str) -> Cell | None:
    """Return the (row, column) of the first cell equal to ``target``, or None."""
    for row_index, row in enumerate(matrix):
        for col_index, cell in enumerate(row):
            if cell == target:
                return row_index, col_index
    return None


def format_board(board: Matrix) -> str:
    """Render a board one row per line, empty cells shown as ``0``."""
    return "".join(" ".join(cell or EMPTY_SLOT for cell in row) + "\n" for row in board)


class PieceStorage:
    """Slots beside the board that hold captured pieces, ``0`` marking a free slot."""

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 0 or cols < 0:
            raise ValueError("storage size cannot be negative")
        self.rows = rows
        self.cols = cols
        self.cells: Matrix = [[EMPTY_SLOT] * cols for _ in range(rows)]

    def _slots(self):
        for row_index, row in enumerate(self.cells):
            for col_index, cell in enumerate(row):
                yield (row_index, col_index), cell

    def store(self, piece: str) -> Cell | None:
        """Put ``piece`` in the first free slot and return it, or None when full."""
        for (row, col), cell in self._slots():
            if cell == EMPTY_SLOT:
                self.cells[row][col] = piece
                return row, col
        return None

    def take(self, piece: str) -> Cell | None:
        """Free the first slot holding ``piece`` and return it, or None if absent."""
        wanted = piece[:1]
        if not wanted:
            return None
        for (row, col), cell in self._slots():
            if cell[:1] == wanted and cell != EMPTY_SLOT:
                self.cells[row][col] = EMPTY_SLOT
                return row, col
        return None

    def update(self, move: str, piece: str) -> Cell | None:
        """Store ``piece`` for a plain move, or take the promotion piece of a 5-letter one."""
        if len(move) == 4:
            return self.store(piece)
        if len(move) == 5:
            return self.take(move[-1])
        return None

    def format(self) -> str:
        """Render the slots one row per line."""
        return "".join(" ".join(row) + "\n" for row in self.cells)