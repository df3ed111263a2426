"""Turn-by-turn play between a player on the input board and the engine-driven arm."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any, TextIO

from .board import (
    Pose,
    PieceStorage,
    chess_frame,
    deg_to_rad,
    find_in_matrix,
    format_board,
    move_piece,
    piece_label_matrix,
    pose_grid,
    split_move,
    square_label_matrix,
)
from .engine import EngineError

log = logging.getLogger(__name__)

LIFT = 0.15
BOARD_POSE = Pose(-0.200, -0.444, 0.15, 0, 1, 0, 0)
WHITE_STORAGE_POSE = Pose(-0.351, -0.444, 0.151, 0, 1, 0, 0)
BLACK_STORAGE_POSE = Pose(0.300, -0.444, 0.151, 0, 1, 0, 0)
BOARD_ABOVE_POSE = Pose(-0.200, -0.444, 0.15 + LIFT, 0, 1, 0, 0)
WHITE_STORAGE_ABOVE_POSE = Pose(-0.351, -0.444, 0.15 + LIFT, 0, 1, 0, 0)
BLACK_STORAGE_ABOVE_POSE = Pose(0.300, -0.444, 0.15 + LIFT, 0, 1, 0, 0)
STORAGE_ROWS = 2
STORAGE_COLS = 8
HOME_JOINTS = tuple(deg_to_rad(angle) for angle in (95, -82, 111, -120, -90, 326))

COLOR_PROMPT = "Do you wish to play as white or black? <w/b>"
INVALID_COLOR = "Invalid colour choice. Please choose either w or b.\n"


def choose_color(stdin: TextIO | None = None, stdout: TextIO | None = None) -> bool:
    """Ask until the player picks ``w`` or ``b``; return True for white."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    pending: list[str] = []
    while True:
        stdout.write(COLOR_PROMPT)
        stdout.flush()
        while not pending:
            line = stdin.readline()
            if not line:
                raise EOFError("input ended before a colour was chosen")
            pending = line.split()
        color = pending.pop(0)
        if color == "w":
            return True
        if color == "b":
            return False
        stdout.write(INVALID_COLOR)


class ChessGame:
    """Board state, storage and arm motions for a game against the engine."""

    def __init__(
        self,
        engine: Any,
        link: Any,
        is_player_white: bool = True,
        mover: Callable[[Pose], object] | None = None,
    ) -> None:
        self.engine = engine
        self.link = link
        self.is_player_white = is_player_white
        self.players_turn = is_player_white
        self._mover = mover
        self.grid_pick = chess_frame(BOARD_POSE)
        self.grid_move = chess_frame(BOARD_ABOVE_POSE)
        self.labels = square_label_matrix(is_player_white)
        self.pieces = piece_label_matrix()
        self.white_storage_cor = pose_grid(WHITE_STORAGE_POSE, STORAGE_ROWS, STORAGE_COLS)
        self.white_storage_cor_up = pose_grid(
            WHITE_STORAGE_ABOVE_POSE, STORAGE_ROWS, STORAGE_COLS
        )
        self.white_storage = PieceStorage(STORAGE_ROWS, STORAGE_COLS)
        self.black_storage_cor_up = pose_grid(BLACK_STORAGE_POSE, STORAGE_ROWS, STORAGE_COLS)
        self.black_storage_cor = pose_grid(
            BLACK_STORAGE_ABOVE_POSE, STORAGE_ROWS, STORAGE_COLS
        )
        self.black_storage = PieceStorage(STORAGE_ROWS, STORAGE_COLS)

    def next_move(self) -> str:
        """Get the next move from the player's board or the engine, record it and pass the turn."""
        if self.players_turn:
            self.link.send_legal_moves(self.engine.legal_moves())
            move = self.link.move_from_pico().strip()
            log.info("move received from board: %s", move)
        else:
            move = self.engine.best_move()
            if not move:
                raise EngineError("engine gave no move")
            log.info("engine move: %s", move)
        self.engine.append_move(move)
        self.players_turn = not self.players_turn
        return move

    def _square_path(self, row: int, col: int) -> list[Pose]:
        above = self.grid_move[col][row]
        return [above, self.grid_pick[col][row], above]

    @staticmethod
    def _slot_path(up: list[list[Pose]], down: list[list[Pose]], slot: tuple[int, int]) -> list[Pose]:
        row, col = slot
        return [up[row][col], down[row][col], up[row][col]]

    def apply_move(self, move: str) -> list[Pose]:
        """Update the board for a move just made and return the poses the arm visits.

        The arm only moves when the turn has passed to the player, that is, when
        the engine made the move.
        """
        parts = split_move(move)
        if len(parts) < 2:
            raise ValueError(f"not a move: {move!r}")
        source = find_in_matrix(self.labels, parts[0])
        target = find_in_matrix(self.labels, parts[1])
        if source is None or target is None:
            raise ValueError(f"invalid cell: {move!r}")
        (row, col), (row2, col2) = source, target
        captured = self.pieces[row2][col2]
        path: list[Pose] = []

        if self.players_turn:
            if captured:
                log.info("piece already exists in target cell: %s", parts[1])
                path += self._square_path(row2, col2)
                slot = self.white_storage.update(move, captured)
                if slot is not None and len(move) == 4:
                    path += self._slot_path(self.white_storage_cor_up, self.white_storage_cor, slot)
            else:
                log.info("moving piece from %s to %s", parts[0], parts[1])
            move_piece(self.pieces, source, target)
            path += self._square_path(row, col) + self._square_path(row2, col2)
        else:
            log.info("player moved %s to %s, updating board", parts[0], parts[1])
            if captured:
                slot = self.black_storage.update(move, captured)
                if slot is not None and len(move) == 5:
                    path += self._slot_path(self.black_storage_cor_up, self.black_storage_cor, slot)
            move_piece(self.pieces, source, target)

        if self._mover is not None:
            for pose in path:
                self._mover(pose)
        return path

    def play_turn(self) -> str:
        """Play one half-move and return it."""
        log.info("board:\n%s", format_board(self.pieces))
        log.info("squares:\n%s", format_board(self.labels))
        log.info("white storage:\n%s", self.white_storage.format())
        log.info("black storage:\n%s", self.black_storage.format())
        move = self.next_move()
        self.apply_move(move)
        return move