"""A UCI chess engine driven over pipes, with helpers for its output."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from collections.abc import Callable, Sequence

log = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = 3
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
DEPTH_PER_LEVEL = 4
PROMOTION_PIECES = "qrbn"
DEFAULT_PROMOTION = "q"
FILES = "abcdefgh"
RANKS = "12345678"

_MOVE_RE = re.compile(r"[A-Za-z][0-9][A-Za-z][0-9][qrbn]?")


class EngineError(Exception):
    """Raised when the engine cannot be started or stops answering."""


def clamp_difficulty(difficulty: int) -> int:
    """Clamp a difficulty level into the range 1 to 5."""
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, difficulty))


def parse_best_move(output: str) -> str | None:
    """Return the move from the first ``bestmove`` line, or None if there is none."""
    for line in output.splitlines():
        if line.startswith("bestmove"):
            words = line.split()
            return words[1] if len(words) > 1 else ""
    return None


def parse_perft_moves(output: str) -> list[str]:
    """Return the moves listed in ``go perft 1`` output."""
    moves = []
    for line in output.splitlines():
        if ":" in line:
            move = line.split(":", 1)[0]
            if _MOVE_RE.fullmatch(move):
                moves.append(move)
    return moves


def parse_fen(output: str) -> str | None:
    """Return the FEN from the ``Fen:`` line of a board dump, or None."""
    start = output.find("Fen: ")
    if start == -1:
        return None
    end = output.find("\n", start)
    fen = output[start + 5 :] if end == -1 else output[start + 5 : end]
    return fen.rstrip("\r")


def piece_at(fen: str, square: str) -> str | None:
    """Return the piece letter on ``square`` (such as ``e2``) in ``fen``, or None."""
    if len(square) != 2 or square[0] not in FILES or square[1] not in RANKS:
        raise ValueError(f"not a square: {square!r}")
    target = (8 - int(square[1])) * 8 + FILES.index(square[0])
    position = 0
    for char in fen.split(" ", 1)[0]:
        if char.isdigit():
            position += int(char)
        elif char == "/":
            continue
        else:
            if position == target:
                return char
            position += 1
    return None


def is_promotion_move(move: str, piece: str | None) -> bool:
    """Whether ``move`` by ``piece`` is a pawn reaching the last rank."""
    if len(move) != 4 or piece not in ("P", "p"):
        return False
    return (move[1], move[3]) in (("7", "8"), ("2", "1"))


def _ask_promotion(move: str) -> str:
    return input("Pawn promotion detected! Choose piece (q, r, b, n): ")


class StockfishEngine:
    """A running UCI engine that keeps track of the moves played."""

    def __init__(
        self,
        path: str | os.PathLike[str] | Sequence[str],
        difficulty: int = DEFAULT_DIFFICULTY,
        choose_promotion: Callable[[str], str] | None = None,
    ) -> None:
        self.difficulty = clamp_difficulty(difficulty)
        self._choose_promotion = choose_promotion or _ask_promotion
        self._moves: list[str] = []
        self._closed = True
        if isinstance(path, (str, os.PathLike)):
            command = [os.fspath(path)]
        else:
            command = [os.fspath(part) for part in path]
        try:
            self._process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                bufsize=1,
            )
        except OSError as exc:
            raise EngineError(f"cannot start engine {command[0]}: {exc}") from exc
        self._closed = False
        try:
            self._send("uci")
            self._send("isready")
            self._read_until(lambda line: "readyok" in line)
        except EngineError:
            self.close()
            raise

    def _send(self, command: str) -> None:
        if self._closed:
            raise EngineError("engine is closed")
        try:
            self._process.stdin.write(command + "\n")
            self._process.stdin.flush()
        except (OSError, ValueError) as exc:
            raise EngineError(f"cannot write to engine: {exc}") from exc

    def _read_until(self, done: Callable[[str], bool]) -> str:
        lines = []
        while True:
            try:
                line = self._process.stdout.readline()
            except (OSError, ValueError) as exc:
                raise EngineError(f"cannot read from engine: {exc}") from exc
            if not line:
                raise EngineError("engine output ended unexpectedly")
            lines.append(line)
            if done(line):
                return "".join(lines)

    def _set_position(self, moves: Sequence[str]) -> None:
        if moves:
            self._send("position startpos moves " + " ".join(moves))
        else:
            self._send("position startpos")

    def _fen_for(self, moves: Sequence[str]) -> str | None:
        self._set_position(moves)
        self._send("d")
        self._send("isready")
        return parse_fen(self._read_until(lambda line: "readyok" in line))

    def moves_made(self) -> list[str]:
        """The moves played so far, in order."""
        return list(self._moves)

    def append_move(self, move: str) -> str:
        """Record a move and return it as recorded, with any promotion piece."""
        move = move.strip()
        if len(move) == 4:
            move = self._with_promotion(move)
        elif len(move) != 5:
            raise ValueError(f"not a move: {move!r}")
        self._moves.append(move)
        return move

    def _with_promotion(self, move: str) -> str:
        fen = self.fen()
        if not fen:
            return move
        try:
            piece = piece_at(fen, move[:2])
        except ValueError:
            return move
        if not is_promotion_move(move, piece):
            return move
        choice = (self._choose_promotion(move) or "").strip()[:1]
        if len(choice) != 1 or choice not in PROMOTION_PIECES:
            choice = DEFAULT_PROMOTION
        return move + choice

    def fen(self) -> str | None:
        """The FEN of the current position, or None if the engine gave none."""
        return self._fen_for(self._moves)

    def is_occupied(self, move: str) -> bool:
        """Whether the target square of ``move`` holds a piece once it is played."""
        fen = self._fen_for([*self._moves, move])
        if not fen:
            log.error("failed to retrieve FEN from engine")
            return False
        try:
            return piece_at(fen, move[2:4]) is not None
        except ValueError:
            return False

    def best_move(self) -> str | None:
        """Search the current position and return the engine's best move."""
        self._set_position(self._moves)
        self._send(f"go depth {self.difficulty * DEPTH_PER_LEVEL}")
        return parse_best_move(self._read_until(lambda line: line.startswith("bestmove")))

    def legal_moves(self) -> list[str]:
        """Return the legal moves in the current position."""
        self._set_position(self._moves)
        self._send("go perft 1")
        return parse_perft_moves(self._read_until(lambda line: "Nodes searched" in line))

    def close(self) -> None:
        """Tell the engine to quit and wait for it to end."""
        if self._closed:
            return
        try:
            self._send("quit")
        except EngineError:
            pass
        self._closed = True
        try:
            self._process.stdin.close()
        except OSError:
            pass
        self._process.wait()
        self._process.stdout.close()

    def __enter__(self) -> StockfishEngine:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()