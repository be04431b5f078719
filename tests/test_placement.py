import random

import pytest

from seabattle.battleship import Board
from seabattle.config import FLEET
from seabattle.coord_utils import Position, in_bounds
from seabattle.placement import HORIZONTAL, VERTICAL, can_place_boat, random_fleet


@pytest.mark.parametrize("seed", range(20))
def test_random_fleet_is_valid(seed):
    boats = random_fleet(rng=random.Random(seed))
    assert [b.id for b in boats] == [0, 1, 2, 3, 4]
    assert [b.size for b in boats] == [size for _, size in FLEET]
    cells = [pos for b in boats for pos in b.positions]
    assert len(cells) == len(set(cells)), "boats must not overlap"
    assert all(in_bounds(pos) for pos in cells)
    for b in boats:
        xs = {p.x for p in b.positions}
        ys = {p.y for p in b.positions}
        assert len(xs) == 1 or len(ys) == 1, "boats are straight"

    board = Board()
    board.initialize(boats)
    assert board.alive_boat_count() == 5


def test_can_place_boat_edges():
    assert can_place_boat(set(), 6, 1, 5, HORIZONTAL, 10)
    assert not can_place_boat(set(), 7, 1, 5, HORIZONTAL, 10)
    assert can_place_boat(set(), 1, 9, 2, VERTICAL, 10)
    assert not can_place_boat(set(), 1, 10, 2, VERTICAL, 10)


def test_can_place_boat_blocks_overlap():
    occupied = {Position(3, 3)}
    assert not can_place_boat(occupied, 1, 3, 3, HORIZONTAL, 10)
    assert can_place_boat(occupied, 1, 4, 3, HORIZONTAL, 10)
