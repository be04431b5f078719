import logging
from urllib.parse import urlsplit

import pytest
import requests

from seabattle.battleship import Board, Boat
from seabattle.coord_utils import Position
from seabattle.peer_server import create_app
from seabattle.session import GameSession
from seabattle.stats import Stats

# Suppress INFO & DEBUG logs from the board server during tests
logging.basicConfig(level=logging.WARNING)


def make_boat(boat_id: int, *cells: tuple[int, int], name: str = "") -> Boat:
    positions = tuple(Position(x, y) for x, y in cells)
    return Boat(id=boat_id, size=len(positions), positions=positions, name=name)


# Fixed five-boat layout used across tests:
#   boat 0 (5) row 1 A..E, boat 1 (4) row 3 A..D, boat 2 (3) column J rows 5..7,
#   boat 3 (3) row 10 F..H, boat 4 (2) column C rows 6..7
FIXED_FLEET = [
    make_boat(0, (1, 1), (2, 1), (3, 1), (4, 1), (5, 1), name="Carrier"),
    make_boat(1, (1, 3), (2, 3), (3, 3), (4, 3), name="Battleship"),
    make_boat(2, (10, 5), (10, 6), (10, 7), name="Cruiser"),
    make_boat(3, (6, 10), (7, 10), (8, 10), name="Submarine"),
    make_boat(4, (3, 6), (3, 7), name="Destroyer"),
]


@pytest.fixture
def fleet() -> list[Boat]:
    return list(FIXED_FLEET)


@pytest.fixture
def board(fleet) -> Board:
    b = Board()
    b.initialize(fleet)
    return b


@pytest.fixture
def session(fleet) -> GameSession:
    sess = GameSession(challenge="Bring it on")
    sess.new_game(fleet)
    return sess


@pytest.fixture
def app_client(session):
    """Flask test client bound to a started session."""
    app = create_app(session)
    app.testing = True
    return app.test_client()


class FakeResponse:
    def __init__(self, status_code: int, content: bytes) -> None:
        self.status_code = status_code
        self.content = content


class FlaskSession:
    """Stand-in for ``requests.Session`` that routes calls into a Flask test client.

    ``fail`` maps a path to an exception raised instead of answering, and
    ``override`` maps a path to a canned (status, body) reply.
    """

    def __init__(self, test_client) -> None:
        self.test_client = test_client
        self.calls: list[tuple[str, str, float]] = []
        self.fail: dict[str, Exception] = {}
        self.override: dict[str, tuple[int, bytes]] = {}

    def request(self, method, url, timeout=None, json=None, **_kwargs):
        path = urlsplit(url).path
        self.calls.append((method, path, timeout))
        if path in self.fail:
            raise self.fail[path]
        if path in self.override:
            status, body = self.override[path]
            return FakeResponse(status, body)
        resp = self.test_client.open(path, method=method, json=json)
        return FakeResponse(resp.status_code, resp.data)


@pytest.fixture
def peer_http(app_client) -> FlaskSession:
    return FlaskSession(app_client)


@pytest.fixture
def stats() -> Stats:
    return Stats()


@pytest.fixture
def unreachable() -> Exception:
    return requests.ConnectionError("connection refused")
