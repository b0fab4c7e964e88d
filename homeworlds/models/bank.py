"""Bank data model: the shared supply of unplaced pieces.

The bank maps color -> size -> ordered tuple of available piece ids.
Pieces returned to the bank are appended to the end of their sequence and
taking a piece always removes the earliest id. All operations are pure and
return a new Bank; "not found" is reported as None, never raised.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..utils.constants import COLORS, PIECES_PER_SIZE, SIZES
from .piece import Piece, make_piece_id


def _empty_sizes() -> dict[int, tuple[str, ...]]:
    return {size: () for size in SIZES}


@dataclass(frozen=True)
class Bank:
    """Pieces not currently placed in any star system."""

    pieces: Mapping[str, Mapping[int, tuple[str, ...]]] = field(
        default_factory=lambda: {color: _empty_sizes() for color in COLORS}
    )  # {"green": {1: ("green-1-0", ...), 2: (...), 3: (...)}, ...}

    def __post_init__(self):
        """Validate bank layout after initialization."""
        if set(self.pieces) != set(COLORS):
            raise ValueError(f"Invalid bank colors: {sorted(self.pieces)}")
        for color, sizes in self.pieces.items():
            if set(sizes) != set(SIZES):
                raise ValueError(f"Invalid bank sizes for {color}: {sorted(sizes)}")
        # Store read-only copies
        object.__setattr__(
            self,
            "pieces",
            MappingProxyType({c: MappingProxyType(dict(s)) for c, s in self.pieces.items()}),
        )

    def __hash__(self):
        return hash(frozenset((c, frozenset(s.items())) for c, s in self.pieces.items()))


def empty() -> Bank:
    """Return a bank with no pieces available."""
    return Bank()


def full() -> Bank:
    """Return a bank holding all 36 pieces."""
    return Bank(
        pieces={
            color: {
                size: tuple(make_piece_id(color, size, i) for i in range(PIECES_PER_SIZE))
                for size in SIZES
            }
            for color in COLORS
        }
    )


def to_list(bank: Bank) -> list[str]:
    """Flatten the bank into a list of piece ids (color, then size order)."""
    return [
        piece_id
        for color in COLORS
        for size in SIZES
        for piece_id in bank.pieces[color][size]
    ]


def size(bank: Bank) -> int:
    """Number of pieces in the bank."""
    return len(to_list(bank))


def _with_sequence(bank: Bank, color: str, size: int, ids: tuple[str, ...]) -> Bank:
    return Bank(pieces={**bank.pieces, color: {**bank.pieces[color], size: ids}})


def add_piece(piece: Piece, bank: Bank) -> Bank:
    """Return a bank with the piece appended to its (color, size) sequence."""
    return _with_sequence(
        bank, piece.color, piece.size, bank.pieces[piece.color][piece.size] + (piece.id,)
    )


def add_pieces(pieces: Iterable[Piece], bank: Bank) -> Bank:
    """Return a bank with every piece appended in order."""
    for piece in pieces:
        bank = add_piece(piece, bank)
    return bank


def has_piece(piece: Piece, bank: Bank) -> bool:
    """Whether this exact piece is in the bank."""
    return piece.id in bank.pieces[piece.color][piece.size]


def has_piece_by_size_and_color(size: int, color: str, bank: Bank) -> bool:
    """Whether any piece of the given size and color is in the bank."""
    return len(bank.pieces[color][size]) > 0


def take_piece_by_size_and_color(size: int, color: str, bank: Bank) -> tuple[Piece | None, Bank]:
    """Remove the earliest piece of the given size and color.

    Returns:
        Tuple of (removed piece, updated bank). If no such piece is available,
        returns (None, bank) with the original bank object.
    """
    available = bank.pieces[color][size]
    if not available:
        return None, bank

    piece = Piece(color=color, size=size, id=available[0])
    return piece, _with_sequence(bank, color, size, available[1:])


def find_smallest_size_for_color(color: str, bank: Bank) -> int | None:
    """Smallest size with at least one available piece of the color."""
    for size in SIZES:
        if bank.pieces[color][size]:
            return size
    return None


def take_smallest_piece_by_color(color: str, bank: Bank) -> tuple[Piece | None, Bank]:
    """Take the smallest available piece of a color, or (None, bank)."""
    size = find_smallest_size_for_color(color, bank)
    if size is None:
        return None, bank
    return take_piece_by_size_and_color(size, color, bank)
