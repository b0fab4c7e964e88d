"""Game piece data models.

Every physical piece has a composite id of the form ``<color>-<size>-<index>``
(e.g. ``"blue-2-0"``). Three pieces exist per color and size, so ids are
globally unique without any central allocator.
"""

from dataclasses import dataclass

from ..utils.constants import COLORS, PIECES_PER_SIZE, SIZES
from .player import other_player, validate_player


def make_piece_id(color: str, size: int, index: int) -> str:
    """Build the composite id for a physical piece."""
    if not (0 <= index < PIECES_PER_SIZE):
        raise ValueError(f"Invalid piece index: {index} (must be 0-{PIECES_PER_SIZE - 1})")
    return f"{color}-{size}-{index}"


def _validate_piece_fields(color: str, size: int, piece_id: str) -> None:
    if color not in COLORS:
        raise ValueError(f"Invalid color: {color} (must be one of {', '.join(COLORS)})")
    if size not in SIZES:
        raise ValueError(f"Invalid size: {size} (must be 1-3)")
    prefix = f"{color}-{size}-"
    if not piece_id.startswith(prefix) or piece_id[len(prefix):] not in {
        str(i) for i in range(PIECES_PER_SIZE)
    }:
        raise ValueError(f"Invalid piece id: {piece_id} (expected {prefix}<0-2>)")


@dataclass(frozen=True)
class Piece:
    """A colored, sized playing piece.

    A piece with no owner is used as a star. Pieces held by the bank are
    also plain pieces.
    """

    color: str  # "yellow", "green", "blue" or "red"
    size: int  # 1 (small), 2 (medium), 3 (large)
    id: str  # e.g. "green-3-1"

    def __post_init__(self):
        """Validate piece data after initialization."""
        _validate_piece_fields(self.color, self.size, self.id)


# Stars are plain pieces
Star = Piece


@dataclass(frozen=True)
class Ship:
    """A piece owned by a player."""

    color: str
    size: int
    id: str
    owner: str  # "player1" or "player2"

    def __post_init__(self):
        """Validate ship data after initialization."""
        _validate_piece_fields(self.color, self.size, self.id)
        validate_player(self.owner)


def piece_to_ship(piece: Piece, owner: str) -> Ship:
    """Give a piece an owner."""
    return Ship(color=piece.color, size=piece.size, id=piece.id, owner=owner)


def ship_to_piece(ship: Ship) -> Piece:
    """Strip ownership from a ship, leaving a bare piece."""
    return Piece(color=ship.color, size=ship.size, id=ship.id)


def switch_ship_owner(ship: Ship) -> Ship:
    """Return the same ship owned by the other player."""
    return Ship(color=ship.color, size=ship.size, id=ship.id, owner=other_player(ship.owner))
