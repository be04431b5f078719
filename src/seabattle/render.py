"""Text rendering of a board.

Overview of an empty board:

         A   B   C   D   E   F   G   H   I   J
       -----------------------------------------
    01 |   |   |   |   |   |   |   |   |   |   |
       -----------------------------------------
    ...

Symbols:
    ■ -> boat (own view only)
    O -> missed shot
    X -> hit shot
    # -> destroyed boat

The grid needs a terminal at least 44 columns wide.
"""

from __future__ import annotations

import logging

from .battleship import Board
from .coord_utils import COLUMNS, Position

logger = logging.getLogger(__name__)

BOAT = "■"
MISS = "O"
HIT = "X"
DESTROYED = "#"

OPPONENT_MESSAGE = "Message from your opponent:"


def _header(size: int) -> str:
    return "     " + "   ".join(COLUMNS[:size])


def _separator(size: int) -> str:
    return "   " + "-" * (4 * size + 1)


def render_empty_board(size: int = 10) -> str:
    """Empty grid for the tutorial screen."""
    lines = ["", _header(size)]
    for row in range(1, size + 1):
        lines.append(_separator(size))
        lines.append(f"{row:02d} |" + "   |" * size)
    lines.append(_separator(size))
    return "\n".join(lines) + "\n"


def cell_symbol(board: Board, pos: Position, *, reveal: bool) -> str:
    symbol = " "
    for boat in board.boats:
        if pos in boat.positions:
            if board.destroyed.get(boat.id):
                return DESTROYED
            if reveal:
                symbol = BOAT
            break
    shot = board.shot_at(pos)
    if shot is not None:
        symbol = HIT if shot.hit else MISS
    return symbol


def render_board(board: Board, *, reveal: bool = False, challenge: str | None = None) -> str:
    """Render *board*; boats are only drawn when *reveal* is set.

    With a *challenge* sentence the opponent message footer is appended, which
    is the form served on ``GET /board``.
    """
    size = board.size
    lines = ["", _header(size)]
    for row in range(1, size + 1):
        lines.append(_separator(size))
        cells = "".join(f" {cell_symbol(board, Position(col, row), reveal=reveal)} |" for col in range(1, size + 1))
        lines.append(f"{row:02d} |{cells}")
    lines.append(_separator(size))
    if challenge is not None:
        lines.append(OPPONENT_MESSAGE)
        lines.append(challenge)
    logger.debug("render_board() – reveal=%s shots=%d", reveal, len(board.shots))
    return "\n".join(lines) + "\n"
