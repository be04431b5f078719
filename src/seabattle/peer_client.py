"""Outbound calls to the opponent's board server.

One shot against the peer goes through these states:

    Idle -> ShotSent -> Failed            peer unreachable, nothing recorded
                     -> Resolved(miss)    miss counter bumped
                     -> Resolved(hit)     hit counter bumped, then GET /boats
                                          0 boats left -> win (once per game)

Fetching the opponent's board is independent and best-effort.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable

import requests

from .coord_utils import Position, format_coord
from .stats import Stats
from . import config as _cfg

logger = logging.getLogger(__name__)

MSG_OPPONENT_LEFT = "It seems your opponent has left, too bad!"
MSG_BOARD_FAILED = "Could not fetch the opponent's board."
MSG_HIT = "Hit!"
MSG_MISS = "Missed!"
MSG_WIN = "Congratulations, you won!"
MSG_PRESS_ENTER = "Press Enter to continue..."


class PeerError(Exception):
    """Base for failures talking to the peer."""


class PeerUnreachableError(PeerError):
    """Connection refused, reset or timed out."""


class PeerResponseError(PeerError):
    """The peer answered with an unreadable or unexpected body."""


class ShotResult(enum.Enum):
    FAILED = "failed"
    MISS = "miss"
    HIT = "hit"
    WIN = "win"


class PeerClient:
    """Drive the request/response exchanges against one remote board."""

    def __init__(
        self,
        host: str = _cfg.DEFAULT_PEER_HOST,
        port: int = _cfg.DEFAULT_PEER_PORT,
        *,
        stats: Stats,
        notify: Callable[[str], None] = print,
        acknowledge: Callable[[], object] | None = None,
        session: requests.Session | None = None,
        board_timeout: float = _cfg.BOARD_TIMEOUT,
        hit_timeout: float = _cfg.HIT_TIMEOUT,
    ):
        self.base_url = f"http://{host}:{port}"
        self.stats = stats
        self.notify = notify
        self.acknowledge = acknowledge
        self.http = session or requests.Session()
        self.board_timeout = board_timeout
        self.hit_timeout = hit_timeout
        self._won = False

    def new_game(self) -> None:
        """Re-arm win detection for the next game."""
        self._won = False

    @property
    def won(self) -> bool:
        return self._won

    # ------------------------------------------------------------------
    # Raw endpoint calls
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, timeout: float, **kwargs) -> str:
        url = self.base_url + path
        try:
            resp = self.http.request(method, url, timeout=timeout, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise PeerUnreachableError(f"{method} {url}: {exc}") from exc
        except requests.RequestException as exc:
            raise PeerResponseError(f"{method} {url}: {exc}") from exc
        if resp.status_code != 200:
            raise PeerResponseError(f"{method} {url}: HTTP {resp.status_code}")
        try:
            return resp.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PeerResponseError(f"{method} {url}: unreadable body") from exc

    def fetch_board_text(self) -> str:
        """GET /board, raising PeerError on failure."""
        return self._request("GET", "/board", self.board_timeout)

    def submit_shot(self, pos: Position) -> bool:
        """POST /hit and return True if the peer reports a hit."""
        body = self._request("POST", "/hit", self.hit_timeout, json=pos.to_json())
        if body == "true\n":
            return True
        if body == "false\n":
            return False
        raise PeerResponseError(f"unexpected /hit response {body!r}")

    def alive_boats(self) -> int:
        """GET /boats and return the peer's alive-boat count."""
        body = self._request("GET", "/boats", self.hit_timeout)
        try:
            count = int(body.strip())
        except ValueError as exc:
            raise PeerResponseError(f"unexpected /boats response {body!r}") from exc
        if count < 0:
            raise PeerResponseError(f"negative alive-boat count {count}")
        return count

    # ------------------------------------------------------------------
    # Gameplay
    # ------------------------------------------------------------------

    def fetch_board(self) -> str | None:
        """Best-effort board snapshot; failures are reported and yield None."""
        try:
            text = self.fetch_board_text()
        except PeerError as exc:
            logger.warning("Board fetch failed: %s", exc)
            self.notify(MSG_BOARD_FAILED)
            return None
        return text

    def fire(self, pos: Position) -> ShotResult:
        """Fire at *pos* on the peer's board and record the outcome locally.

        An unreachable peer yields ShotResult.FAILED with no counter touched.
        An unreadable /hit answer, or any failure of the /boats follow-up,
        raises PeerError for the caller to end the match on.
        """
        label = format_coord(pos)
        logger.debug("fire(%s) – shot sent", label)
        try:
            hit = self.submit_shot(pos)
        except PeerUnreachableError as exc:
            logger.info("fire(%s) – peer unreachable: %s", label, exc)
            self.notify(MSG_OPPONENT_LEFT)
            return ShotResult.FAILED

        if not hit:
            self.notify(MSG_MISS)
            self.stats.add_shot_missed()
            return ShotResult.MISS

        self.notify(MSG_HIT)
        self.stats.add_shot_hit()
        remaining = self.alive_boats()
        logger.debug("fire(%s) – peer has %d boats left", label, remaining)
        if remaining != 0:
            return ShotResult.HIT
        if not self._won:
            self._won = True
            self.notify(MSG_WIN)
            if self.acknowledge is not None:
                self.notify(MSG_PRESS_ENTER)
                self.acknowledge()
            self.stats.add_game_won()
        return ShotResult.WIN
