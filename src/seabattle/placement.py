"""Random fleet layout.

Boats are laid out once per game and handed to ``Board.initialize``; nothing
mutates them afterwards.
"""

from __future__ import annotations

import logging
import random

from .battleship import Boat
from .coord_utils import Position
from . import config as _cfg

logger = logging.getLogger(__name__)

HORIZONTAL = 0
VERTICAL = 1


def can_place_boat(occupied: set[Position], x: int, y: int, size: int, orientation: int, board_size: int) -> bool:
    """Return `True` if a boat of *size* starting at (*x*,*y*) fits without overlap."""
    cells = _cells(x, y, size, orientation)
    if orientation == HORIZONTAL:
        if x + size - 1 > board_size:
            return False
    else:
        if y + size - 1 > board_size:
            return False
    return not any(cell in occupied for cell in cells)


def _cells(x: int, y: int, size: int, orientation: int) -> tuple[Position, ...]:
    if orientation == HORIZONTAL:
        return tuple(Position(x + i, y) for i in range(size))
    return tuple(Position(x, y + i) for i in range(size))


def random_fleet(
    board_size: int = _cfg.BOARD_SIZE,
    fleet=_cfg.FLEET,
    rng: random.Random | None = None,
) -> list[Boat]:
    """Randomly position every boat of *fleet* on the grid without collisions."""
    rng = rng or random.Random()
    occupied: set[Position] = set()
    boats: list[Boat] = []
    for boat_id, (name, size) in enumerate(fleet):
        while True:
            orientation = rng.randint(HORIZONTAL, VERTICAL)
            x = rng.randint(1, board_size)
            y = rng.randint(1, board_size)
            if can_place_boat(occupied, x, y, size, orientation, board_size):
                cells = _cells(x, y, size, orientation)
                occupied.update(cells)
                boats.append(Boat(id=boat_id, size=size, positions=cells, name=name))
                break
    logger.debug("random_fleet() – placed %d boats", len(boats))
    return boats
