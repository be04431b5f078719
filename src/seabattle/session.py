"""Per-process game session.

The session is the one explicit owner of the local board, the player's
counters and the challenge sentence. The peer server reads and mutates the
board through it and the CLI loop drives it; nothing lives at module level.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable

from .battleship import Board, Boat
from .placement import random_fleet
from .stats import Stats
from . import config as _cfg

logger = logging.getLogger(__name__)


class GameSession:
    """State for a single game against a single peer."""

    def __init__(
        self,
        *,
        challenge: str = _cfg.CHALLENGE,
        board_size: int = _cfg.BOARD_SIZE,
        stats: Stats | None = None,
        rng: random.Random | None = None,
    ):
        self.challenge = challenge
        self.board = Board(board_size)
        self.stats = stats if stats is not None else Stats()
        self._rng = rng
        self.games_started = 0
        # set by the board server when a hit resolves to no boat
        self.corrupted = False

    def new_game(self, boats: Iterable[Boat] | None = None) -> None:
        """Lay out a fleet (random unless *boats* is given) and reset the board."""
        if boats is None:
            boats = random_fleet(self.board.size, _cfg.FLEET, self._rng)
        self.board.initialize(boats)
        self.corrupted = False
        self.games_started += 1
        self.stats.add_game_played()
        logger.info("New game #%d – %d boats afloat", self.games_started, self.board.alive_boat_count())

    @property
    def started(self) -> bool:
        return bool(self.board.boats)

    @property
    def game_lost(self) -> bool:
        """True once every local boat has been destroyed."""
        return self.board.all_boats_destroyed()
