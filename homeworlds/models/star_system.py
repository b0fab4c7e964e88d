"""Star system data model.

A star system groups the stars and ships at one location. Normal systems
have a single star and take that star's piece id as their own id. Home
systems are binary (two stars) and use a fixed per-player id such as
``"player1-home"``.

Functions in this module never cascade cleanup. After removing pieces from
a system, callers must run ``validate`` and return any ``pieces_to_cleanup``
to the bank themselves.
"""

from collections import Counter
from dataclasses import dataclass

from ..utils.constants import COLORS, OVERPOPULATION_THRESHOLD
from .piece import Piece, Ship, Star, ship_to_piece, switch_ship_owner
from .player import validate_player


@dataclass(frozen=True)
class StarSystem:
    """A named collection of stars and ships."""

    id: str  # Star piece id (normal) or "<player>-home" (binary)
    stars: tuple[Star, ...] = ()
    ships: tuple[Ship, ...] = ()


@dataclass(frozen=True)
class SystemValidationResult:
    """Outcome of checking a system's star/ship invariant.

    Attributes:
        valid: True if the system has at least one star and one ship
        pieces_to_cleanup: Bare pieces to return to the bank when invalid
    """

    valid: bool
    pieces_to_cleanup: tuple[Piece, ...] = ()


def home_system_id(player: str) -> str:
    """Fixed id of a player's home system."""
    validate_player(player)
    return f"{player}-home"


def create_normal(star: Star, ships: tuple[Ship, ...] = ()) -> StarSystem:
    """Create a single-star system identified by its star."""
    return StarSystem(id=star.id, stars=(star,), ships=tuple(ships))


def create_binary(player: str, star1: Star, star2: Star, ships: tuple[Ship, ...] = ()) -> StarSystem:
    """Create a two-star home system for a player."""
    return StarSystem(id=home_system_id(player), stars=(star1, star2), ships=tuple(ships))


def create_empty_home_system(player: str) -> StarSystem:
    """Home system before setup has placed any pieces."""
    return StarSystem(id=home_system_id(player))


def validate(system: StarSystem) -> SystemValidationResult:
    """Check that a system has at least one star and at least one ship.

    - No stars: every ship (ownership stripped) must return to the bank.
    - Stars but no ships: every star must return to the bank.
    - Otherwise the system is valid.

    Args:
        system: Star system to check

    Returns:
        SystemValidationResult describing validity and cleanup pieces
    """
    if not system.stars:
        return SystemValidationResult(
            valid=False, pieces_to_cleanup=tuple(ship_to_piece(s) for s in system.ships)
        )
    if not system.ships:
        return SystemValidationResult(valid=False, pieces_to_cleanup=system.stars)
    return SystemValidationResult(valid=True)


def get_ship(ship_id: str, system: StarSystem) -> Ship | None:
    """Find a ship in the system by piece id."""
    for ship in system.ships:
        if ship.id == ship_id:
            return ship
    return None


def has_ship(ship: Ship, system: StarSystem) -> bool:
    return get_ship(ship.id, system) is not None


def add_ship(ship: Ship, system: StarSystem) -> StarSystem:
    return StarSystem(id=system.id, stars=system.stars, ships=system.ships + (ship,))


def add_star(star: Star, system: StarSystem) -> StarSystem:
    # Only setup adds stars to an existing system
    return StarSystem(id=system.id, stars=system.stars + (star,), ships=system.ships)


def get_pieces(system: StarSystem) -> list[Piece]:
    """All stars and ships in the system as bare pieces."""
    return list(system.stars) + [ship_to_piece(s) for s in system.ships]


def remove_ship(ship: Ship, system: StarSystem) -> tuple[Piece | None, StarSystem]:
    """Remove a ship from the system by id.

    Returns:
        Tuple of (removed piece, updated system). If the ship is not in the
        system, returns (None, system) with the original system object.
    """
    remaining = tuple(s for s in system.ships if s.id != ship.id)
    if len(remaining) == len(system.ships):
        return None, system

    return ship_to_piece(ship), StarSystem(id=system.id, stars=system.stars, ships=remaining)


def remove_pieces_of_color(system: StarSystem, color: str) -> tuple[list[Piece], StarSystem]:
    """Strip every star and ship of a color from the system.

    Used when resolving overpopulation. The returned pieces are bare
    (ownership stripped), stars first.
    """
    removed_stars = [s for s in system.stars if s.color == color]
    removed_ships = [ship_to_piece(s) for s in system.ships if s.color == color]

    updated = StarSystem(
        id=system.id,
        stars=tuple(s for s in system.stars if s.color != color),
        ships=tuple(s for s in system.ships if s.color != color),
    )
    return removed_stars + removed_ships, updated


def get_overpopulations(system: StarSystem) -> list[str]:
    """Colors with OVERPOPULATION_THRESHOLD or more pieces in the system."""
    counts = Counter(piece.color for piece in get_pieces(system))
    return [color for color in COLORS if counts[color] >= OVERPOPULATION_THRESHOLD]


def has_overpopulation(system: StarSystem, color: str) -> bool:
    return color in get_overpopulations(system)


def change_ship_owner(ship: Ship, system: StarSystem) -> StarSystem:
    """Hand the matching ship over to the other player."""
    return StarSystem(
        id=system.id,
        stars=system.stars,
        ships=tuple(switch_ship_owner(s) if s.id == ship.id else s for s in system.ships),
    )


def get_player_ships(player: str, system: StarSystem) -> list[Ship]:
    return [s for s in system.ships if s.owner == player]


def get_available_colors(player: str, system: StarSystem) -> set[str]:
    """Colors a player may use for actions at this system.

    This is the union of the player's ship colors and the system's star
    colors.
    """
    return {s.color for s in get_player_ships(player, system)} | {s.color for s in system.stars}


def is_color_available(player: str, color: str, system: StarSystem) -> bool:
    return color in get_available_colors(player, system)
