"""HTTP endpoints exposing the local board to the remote peer.

GET  /board  plain-text rendering of our board as the opponent sees it
POST /hit    JSON {"X": col, "Y": row} -> "true\\n" or "false\\n"
GET  /boats  number of our boats still afloat
"""

from __future__ import annotations

import logging
import threading

from flask import Flask, Response, request
from werkzeug.serving import make_server

from .battleship import BoatNotFoundError
from .coord_utils import CoordinateError, Position, format_coord, in_bounds
from .render import render_board
from .session import GameSession
from . import config as _cfg

logger = logging.getLogger(__name__)


def _text(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def create_app(session: GameSession) -> Flask:
    """Build the Flask app serving *session*'s board."""
    app = Flask(__name__)

    @app.route("/board", methods=["GET"])
    def board():
        return _text(render_board(session.board, reveal=False, challenge=session.challenge))

    @app.route("/hit", methods=["POST"])
    def hit():
        try:
            pos = Position.from_json(request.get_json(force=True, silent=True))
        except CoordinateError as e:
            logger.warning("/hit – rejected body %r: %s", request.get_data()[:64], e)
            return _text(f"{e}\n", 400)
        if not in_bounds(pos, session.board.size):
            return _text(f"position ({pos.x},{pos.y}) is outside the grid\n", 400)
        if not session.started:
            return _text("board not initialized\n", 409)
        result = session.board.resolve_shot(pos)
        logger.info("Opponent fired at %s: %s", format_coord(pos), "hit" if result else "miss")
        return _text("true\n" if result else "false\n")

    @app.errorhandler(BoatNotFoundError)
    def corrupted_board(exc: BoatNotFoundError):
        # A hit with no owning boat means the fleet itself is broken; no shot is answered.
        logger.critical("Board invariant violated, refusing further play: %s", exc, exc_info=exc)
        session.corrupted = True
        return _text("internal error: board corrupted\n", 500)

    @app.before_request
    def refuse_when_corrupted():
        if session.corrupted:
            return _text("internal error: board corrupted\n", 500)

    @app.route("/boats", methods=["GET"])
    def boats():
        return _text(str(session.board.alive_boat_count()))

    return app


class PeerServer:
    """Serve the peer endpoints from a daemon thread so the CLI keeps the main one."""

    def __init__(self, session: GameSession, host: str = _cfg.DEFAULT_HOST, port: int = _cfg.DEFAULT_PORT):
        self.app = create_app(session)
        self._server = make_server(host, port, self.app, threaded=True)
        self.host = host
        self.port = self._server.server_port
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    def start(self) -> None:
        self._thread.start()
        logger.info("Board server listening on %s:%d", self.host, self.port)

    def stop(self) -> None:
        self._server.shutdown()
        self._thread.join(timeout=5)
        logger.debug("Board server on port %d stopped", self.port)

    def __enter__(self) -> "PeerServer":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
