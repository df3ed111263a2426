# chessarm

Tools for a chess-playing robot arm. A human plays on a move board that talks
over a serial line. A UCI chess engine such as Stockfish answers the moves. The
package keeps the board state so that the arm knows where each piece stands and
where captured pieces go.

## Modules

- `chessarm.serial_link` provides `SerialLink`, a connection to the move board
  and the gripper controller. The default is 115200 baud, 8N1, with no flow
  control. `open(port)` opens a serial port. `attach(stream)` uses any object
  that has `read`, `write` and `close`. The other methods are as follows:
  - `write` and `read` move raw data. `read` returns at most 256 bytes.
  - `send_legal_moves(moves)` sends the moves space separated with a newline
    at the end. `format_legal_moves` builds the same line.
  - `move_from_pico()` reads packets until one of at least four characters
    arrives.
  - `open_gripper()` sends `0` and `close_gripper()` sends `1`.

  Failures raise `SerialLinkError`. `SerialLink` is a context manager that
  closes the port when the block ends.
- `chessarm.engine` provides `StockfishEngine`, which runs a UCI engine as a
  child process. It keeps the moves played so far (`moves_made`,
  `append_move`) and answers the following queries:
  - `best_move()` searches to depth `difficulty * 4`. The difficulty is clamped
    to the range 1 to 5.
  - `legal_moves()` uses `go perft 1`.
  - `fen()` returns the FEN of the current position.
  - `is_occupied(move)` tells whether the target square holds a piece once the
    move is played.

  A four-letter pawn move to the last rank is completed with a promotion piece.
  The piece comes from the `choose_promotion` callback, or from a prompt on
  standard input when no callback is given. An invalid choice becomes `q`.
  The module also has parsing helpers: `parse_best_move`, `parse_perft_moves`,
  `parse_fen`, `piece_at`, `is_promotion_move` and `clamp_difficulty`. Failures
  raise `EngineError`.
- `chessarm.board` covers board geometry and bookkeeping:
  - `Pose`, a frozen dataclass. `offset_z` returns a copy moved along z.
  - `pose_grid` and `chess_frame` build grids of poses 5 cm apart.
  - `piece_label_matrix`, `color_label_matrix` and `square_label_matrix` build
    matrices of labels.
  - `move_piece`, `split_move`, `find_in_matrix`, `format_board` and
    `deg_to_rad` are helpers.
  - `PieceStorage` models the trays for captured pieces, with the methods
    `store`, `take`, `update` and `format`.
- `chessarm.game` joins the other modules:
  - `choose_color()` asks the player to choose `w` or `b`.
  - `ChessGame(engine, link, is_player_white, mover)` runs the game. On the
    player's turn, `next_move()` sends the legal moves over the link and waits
    for the player's move. On the engine's turn, it asks the engine for its best
    move. In both cases it records the move and passes the turn.
  - `apply_move(move)` updates the board and the storage trays. It returns the
    list of poses the arm should visit, and passes each pose to `mover` when one
    is given. The arm only moves for the engine's moves.
  - `play_turn()` does one half-move: it calls `next_move` and then
    `apply_move`.

## Command-line tools

Both tools talk straight to the serial device and accept `--port` (default
`/dev/ttyACM0`) and `--baudrate`.

```
chessarm-gripper
```

This tool reads `open`, `close` or `exit` at the prompt. It sends `0` to open
the gripper and `1` to close it. The default speed is 9600 baud.

```
chessarm-console
```

This tool accepts `opengripper`, `closegripper`, `read`, `legal` (which sends
the sample moves `e2e4 d2d4 g1f3`), `move` and `exit`. The default speed is
115200 baud.

## Using the library

```python
from chessarm.engine import StockfishEngine
from chessarm.serial_link import SerialLink

with StockfishEngine("/usr/games/stockfish", difficulty=3,
                     choose_promotion=lambda move: "q") as engine, \
     SerialLink(baudrate=115200) as link:
    link.open("/dev/ttyACM0")
    link.send_legal_moves(engine.legal_moves())
    engine.append_move(link.move_from_pico().strip())
    reply = engine.best_move()
    engine.append_move(reply)
```

The board helpers work on their own:

```python
from chessarm.board import find_in_matrix, split_move, square_label_matrix

labels = square_label_matrix(True)
source, target = split_move("e2e4")
row, col = find_in_matrix(labels, source)
```

## What it does not do

The package does not plan or carry out arm motion. `ChessGame` only works out
the poses to visit and hands each one to the `mover` callable you supply. It
has no command that runs a whole game; you drive `ChessGame.play_turn` from your
own code. Castling, en passant and the end of the game get no special handling
on the board model.