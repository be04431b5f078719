"""Interactive two-player client.

Each player runs one process: it serves its own board to the opponent over
HTTP and fires at the opponent's board from the prompt.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable

from .commands import (
    HELP_TEXT,
    BoardCommand,
    CommandParseError,
    FireCommand,
    HelpCommand,
    OwnBoardCommand,
    QuitCommand,
    StatsCommand,
    parse_command,
)
from .coord_utils import format_coord
from .peer_client import PeerClient, PeerError, ShotResult
from .peer_server import PeerServer
from .render import render_board, render_empty_board
from .session import GameSession
from . import config as _cfg

logger = logging.getLogger(__name__)

MSG_LOST = "All your boats are destroyed, you lost."
MSG_CORRUPTED = "Local board is corrupted, a hit matched no boat."


def _prompt() -> None:
    """Display the user-input prompt."""
    print(">> ", end="", flush=True)


def play(
    session: GameSession,
    peer: PeerClient,
    read_line: Callable[[], str] = input,
    out: Callable[[str], None] = print,
) -> None:
    """Run the command loop until the player quits or a game ends.

    Returns after a win, a loss, a lost peer or QUIT.
    """
    out(HELP_TEXT)
    while True:
        if session.corrupted:
            raise RuntimeError(MSG_CORRUPTED)
        if session.game_lost:
            out(MSG_LOST)
            return
        try:
            line = read_line()
        except EOFError:
            logger.info("Input closed, leaving game")
            return
        try:
            cmd = parse_command(line)
        except CommandParseError as e:
            out(f"[!] {e}")
            continue

        if isinstance(cmd, QuitCommand):
            logger.info("Exiting client per user request.")
            return
        if isinstance(cmd, HelpCommand):
            out(HELP_TEXT)
        elif isinstance(cmd, StatsCommand):
            out(session.stats.summary())
        elif isinstance(cmd, OwnBoardCommand):
            out(render_board(session.board, reveal=True))
        elif isinstance(cmd, BoardCommand):
            text = peer.fetch_board()
            if text is not None:
                out(text)
        elif isinstance(cmd, FireCommand):
            logger.debug("Firing at %s", format_coord(cmd.position))
            try:
                result = peer.fire(cmd.position)
            except PeerError as e:
                logger.error("Peer failed mid-shot: %s", e)
                out(f"[!] Lost track of the opponent ({e}), ending the game.")
                return
            if result is ShotResult.WIN:
                return
            if result is ShotResult.FAILED:
                out("[!] Shot not delivered. Try again or QUIT.")


def main() -> None:  # pragma: no cover – CLI entry
    """Interactive CLI client."""

    parser = argparse.ArgumentParser(description="Two-player sea battle over HTTP")
    parser.add_argument("--host", default=_cfg.DEFAULT_HOST, help="address to serve our board on")
    parser.add_argument("--port", type=int, default=_cfg.DEFAULT_PORT, help="port to serve our board on")
    parser.add_argument("--peer-host", default=_cfg.DEFAULT_PEER_HOST)
    parser.add_argument("--peer-port", type=int, default=_cfg.DEFAULT_PEER_PORT)
    parser.add_argument("--challenge", default=_cfg.CHALLENGE, help="sentence shown under your board")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress log output.",
    )
    args = parser.parse_args()

    if args.debug:
        os.environ["SEABATTLE_DEBUG"] = "1"

    if args.quiet:
        level = logging.ERROR
    elif args.debug or _cfg.DEBUG:
        level = logging.DEBUG
    elif args.verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    # werkzeug logs every request at INFO
    logging.getLogger("werkzeug").setLevel(max(level, logging.WARNING))

    session = GameSession(challenge=args.challenge)
    session.new_game()
    peer = PeerClient(
        args.peer_host,
        args.peer_port,
        stats=session.stats,
        acknowledge=lambda: sys.stdin.readline(),
    )

    try:
        server = PeerServer(session, args.host, args.port)
    except OSError as e:
        logger.error("Cannot listen on %s:%d: %s", args.host, args.port, e)
        sys.exit(1)

    print(render_empty_board(session.board.size))
    print(f"Your board is served on {args.host}:{server.port}, opponent expected at {args.peer_host}:{args.peer_port}")
    print(render_board(session.board, reveal=True))

    def read_line() -> str:
        _prompt()
        return input()

    with server:
        try:
            play(session, peer, read_line=read_line)
        except KeyboardInterrupt:
            logger.info("Client exiting")
    print(session.stats.summary())


if __name__ == "__main__":  # pragma: no cover
    main()
