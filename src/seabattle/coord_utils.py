import re
from dataclasses import dataclass

from . import config as _cfg

# Regex for labels accepted from the keyboard: a column letter then digits.
COORD_RE = re.compile(r"^[A-Ja-j][0-9]+$")

# Row text the lenient codec agrees to read; anything else is row 0.
ROW_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)

COLUMNS = "ABCDEFGHIJ"


class CoordinateError(ValueError):
    """Raised when a label is malformed or points outside the grid."""


@dataclass(frozen=True)
class Position:
    """One grid cell, 1-based. ``x`` is the column (A=1), ``y`` the row."""

    x: int
    y: int

    def to_json(self) -> dict:
        return {"X": self.x, "Y": self.y}

    @classmethod
    def from_json(cls, obj) -> "Position":
        """Build a Position from a wire object ``{"X": col, "Y": row}``.

        Raises CoordinateError unless both fields are plain integers.
        """
        if not isinstance(obj, dict):
            raise CoordinateError("position must be a JSON object {X, Y}")
        x, y = obj.get("X"), obj.get("Y")
        # bool is an int subclass, reject true/false explicitly
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (x, y)):
            raise CoordinateError("X and Y must be integers")
        return cls(x=x, y=y)


def in_bounds(pos: Position, size: int = _cfg.BOARD_SIZE) -> bool:
    return 1 <= pos.x <= size and 1 <= pos.y <= size


def label_to_position(label: str) -> Position:
    """
    Lenient conversion of a label like 'J6' to a Position.

    The column letter is case-insensitive. The rest of the label is read as
    the row without any range check; unreadable row text becomes row 0 and an
    unknown letter becomes column 0. Callers must validate before use.
    """
    col = COLUMNS.find(label[:1].upper()) + 1 if label[:1] else 0
    row_text = label[1:]
    row = int(row_text) if ROW_RE.fullmatch(row_text) else 0
    return Position(x=col, y=row)


def parse_coordinate(label: str, size: int = _cfg.BOARD_SIZE) -> Position:
    """
    Strict conversion of a user label to a Position inside the grid.
    Raises CoordinateError on bad syntax or an out-of-grid cell.
    """
    label = label.strip()
    if not COORD_RE.match(label):
        raise CoordinateError(f"Invalid coordinate: {label!r} (expected e.g. A1 or J10)")
    pos = label_to_position(label)
    if not in_bounds(pos, size):
        raise CoordinateError(f"Coordinate out of grid: {label.upper()}")
    return pos


def format_coord(pos: Position) -> str:
    """
    Convert a Position back to a label like 'A1'.
    Raises CoordinateError for cells outside the lettered grid.
    """
    if not in_bounds(pos, len(COLUMNS)):
        raise CoordinateError(f"no label for position ({pos.x},{pos.y})")
    return f"{COLUMNS[pos.x - 1]}{pos.y}"
