from dataclasses import dataclass
from typing import Union

from .coord_utils import CoordinateError, Position, parse_coordinate


class CommandParseError(Exception):
    """Raised when a line cannot be parsed as a valid command."""


@dataclass(frozen=True)
class FireCommand:
    position: Position


@dataclass(frozen=True)
class BoardCommand:
    """Show the opponent's board."""


@dataclass(frozen=True)
class OwnBoardCommand:
    """Show our own board with boats revealed."""


@dataclass(frozen=True)
class StatsCommand:
    pass


@dataclass(frozen=True)
class HelpCommand:
    pass


@dataclass(frozen=True)
class QuitCommand:
    pass


Command = Union[FireCommand, BoardCommand, OwnBoardCommand, StatsCommand, HelpCommand, QuitCommand]

_SIMPLE = {
    "BOARD": BoardCommand,
    "ME": OwnBoardCommand,
    "STATS": StatsCommand,
    "HELP": HelpCommand,
    "QUIT": QuitCommand,
}

HELP_TEXT = """Commands:
  <coord> | FIRE <coord>   shoot at a cell, e.g. B7
  BOARD                    show the opponent's board
  ME                       show your own board
  STATS                    show your counters
  QUIT                     leave the game"""


def _fire(text: str) -> FireCommand:
    try:
        return FireCommand(position=parse_coordinate(text))
    except CoordinateError as e:
        raise CommandParseError(str(e)) from e


def parse_command(line: str) -> Command:
    if line is None:
        raise CommandParseError("No command to parse")
    raw = line.strip()
    if not raw:
        raise CommandParseError("Empty command")
    parts = raw.split(maxsplit=1)
    verb = parts[0].upper()
    if verb == "FIRE":
        if len(parts) < 2 or not parts[1].strip():
            raise CommandParseError("FIRE requires a coordinate")
        return _fire(parts[1])
    elif verb in _SIMPLE and len(parts) == 1:
        return _SIMPLE[verb]()
    elif len(parts) == 1 and verb[:1].isalpha() and verb[1:].isdigit():
        return _fire(verb)
    else:
        raise CommandParseError(f"Unknown command: {raw}")
