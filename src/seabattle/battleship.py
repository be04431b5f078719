"""
battleship.py

Core data structures for one player's board:
 - Boat: a placed vessel, read-only once the fleet is laid out
 - Shot: one resolved shot and whether it hit
 - Board: the authoritative fleet/shots/destruction state for a single board

Each running process owns exactly one live Board. The remote peer acts on it
through the HTTP endpoints in ``peer_server``, while the local player reads it
for display, so every read-modify-write goes through ``Board._lock``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterable

from .coord_utils import COLUMNS, Position, in_bounds
from . import config as _cfg

logger = logging.getLogger(__name__)


class BoatNotFoundError(LookupError):
    """Raised when no boat occupies the requested cell."""


@dataclass(frozen=True)
class Boat:
    id: int
    size: int
    positions: tuple[Position, ...]
    name: str = ""

    def occupies(self, pos: Position) -> bool:
        return pos in self.positions


@dataclass(frozen=True)
class Shot:
    position: Position
    hit: bool


class Board:
    """
    Represents a single board: its fleet, the shots fired against it and which
    boats are destroyed.

    A boat is destroyed once every one of its cells has a hit Shot. The shot
    list keeps insertion order and holds at most one Shot per Position, so
    firing twice at the same cell reports the same outcome without recording
    a second Shot.
    """

    def __init__(self, size: int = _cfg.BOARD_SIZE):
        """Create an empty *size*×*size* board. Call initialize() before firing at it."""
        if not 1 <= size <= len(COLUMNS):
            raise ValueError(f"board size must be between 1 and {len(COLUMNS)}, got {size}")
        self.size = size
        self.boats: tuple[Boat, ...] = ()
        self.shots: list[Shot] = []
        self.destroyed: dict[int, bool] = {}
        self._lock = threading.Lock()

    def initialize(self, boats: Iterable[Boat]) -> None:
        """Adopt *boats* as the board geometry and wipe all shot history."""
        boats = tuple(boats)
        if len({boat.id for boat in boats}) != len(boats):
            raise ValueError("boat ids must be unique")
        for boat in boats:
            if len(boat.positions) != boat.size:
                raise ValueError(f"boat {boat.id} has {len(boat.positions)} cells but size {boat.size}")
            for pos in boat.positions:
                if not in_bounds(pos, self.size):
                    raise ValueError(f"boat {boat.id} lies outside the grid at {pos}")
        with self._lock:
            self.boats = boats
            self.shots = []
            self.destroyed = {boat.id: False for boat in boats}
        logger.debug("initialize() – %d boats, shots cleared", len(boats))

    def resolve_shot(self, pos: Position) -> bool:
        """Process a shot at *pos* and return True on a hit.

        A repeated shot does not append a second Shot; its outcome is derived
        again from the boats rather than read back from the stored record.
        """
        with self._lock:
            hit = any(boat.occupies(pos) for boat in self.boats)
            if not self._already_shot(pos):
                self.shots.append(Shot(position=pos, hit=hit))
            if hit:
                # boat_at raising here means the fleet is corrupted; let it propagate.
                self._check_destroyed(self.boat_at(pos))
        logger.debug("resolve_shot(%s) – hit=%s shots=%d", pos, hit, len(self.shots))
        return hit

    def boat_at(self, pos: Position) -> Boat:
        """Return the boat occupying *pos* or raise BoatNotFoundError."""
        for boat in self.boats:
            if boat.occupies(pos):
                return boat
        raise BoatNotFoundError(f"position {pos} does not correspond to a boat")

    def alive_boat_count(self) -> int:
        """Return how many boats are not destroyed yet."""
        return sum(1 for boat in self.boats if not self.destroyed.get(boat.id, False))

    def all_boats_destroyed(self) -> bool:
        return bool(self.boats) and self.alive_boat_count() == 0

    def is_destroyed(self, boat_id: int) -> bool:
        return self.destroyed[boat_id]

    def shot_at(self, pos: Position) -> Shot | None:
        for shot in self.shots:
            if shot.position == pos:
                return shot
        return None

    def _already_shot(self, pos: Position) -> bool:
        return self.shot_at(pos) is not None

    def _check_destroyed(self, boat: Boat) -> None:
        hits = sum(1 for cell in boat.positions if any(s.hit and s.position == cell for s in self.shots))
        if hits >= boat.size and not self.destroyed[boat.id]:
            self.destroyed[boat.id] = True
            logger.info("Boat %d (%s) destroyed, %d left", boat.id, boat.name or "unnamed", self.alive_boat_count())
