"""Game state containers and transitions.

The game state is a sum type with one variant per phase:

- ``SetupState``: players are claiming stars and ships for their home systems.
- ``NormalState``: both home systems are settled; in-play systems and the
  winner only exist on this variant.

States are immutable. Every transition returns a new state value, so any two
states can be compared structurally and old states stay valid for replay.
"""

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar

from ..utils.constants import FIRST_PLAYER, PHASE_NORMAL, PHASE_SETUP, PLAYERS, TOTAL_PIECES
from . import bank as bank_ops
from . import star_system as system_ops
from .bank import Bank
from .piece import Piece, Ship, Star
from .player import other_player, validate_player
from .star_system import StarSystem


def _freeze_home_systems(state) -> None:
    if set(state.home_systems) != set(PLAYERS):
        raise ValueError(f"Invalid home systems: {sorted(state.home_systems)}")
    # Frozen dataclasses only block attribute assignment, not item assignment
    object.__setattr__(state, "home_systems", MappingProxyType(dict(state.home_systems)))


@dataclass(frozen=True)
class SetupState:
    """Game state during the setup phase."""

    tag: ClassVar[str] = PHASE_SETUP
    bank: Bank
    active_player: str  # "player1" or "player2"
    home_systems: Mapping[str, StarSystem]  # {"player1": ..., "player2": ...}

    def __post_init__(self):
        """Validate state data after initialization."""
        validate_player(self.active_player)
        _freeze_home_systems(self)

    def __hash__(self):
        return hash((self.bank, self.active_player, frozenset(self.home_systems.items())))


@dataclass(frozen=True)
class NormalState:
    """Game state once both home systems are settled."""

    tag: ClassVar[str] = PHASE_NORMAL
    bank: Bank
    active_player: str
    home_systems: Mapping[str, StarSystem]
    systems: tuple[StarSystem, ...] = ()  # In-play (non-home) systems
    winner: str | None = None  # "player1", "player2", or None

    def __post_init__(self):
        """Validate state data after initialization."""
        validate_player(self.active_player)
        _freeze_home_systems(self)
        if self.winner is not None:
            validate_player(self.winner)

    def __hash__(self):
        return hash(
            (
                self.bank,
                self.active_player,
                frozenset(self.home_systems.items()),
                self.systems,
                self.winner,
            )
        )


GameState = SetupState | NormalState


def initial() -> SetupState:
    """Canonical starting state.

    Full bank, empty home systems, player1 to move.
    """
    return SetupState(
        bank=bank_ops.full(),
        active_player=FIRST_PLAYER,
        home_systems={p: system_ops.create_empty_home_system(p) for p in PLAYERS},
    )


def maybe_to_normal(state: GameState) -> GameState:
    """Switch a setup state to the normal phase if both home systems are valid.

    If the state is already normal, or either home system is still invalid,
    the original state object is returned.
    """
    if not isinstance(state, SetupState):
        return state

    if not all(system_ops.validate(state.home_systems[p]).valid for p in PLAYERS):
        return state

    return NormalState(
        bank=state.bank,
        active_player=state.active_player,
        home_systems=state.home_systems,
        systems=(),
        winner=None,
    )


def switch_active_player(state: GameState) -> GameState:
    """Hand the turn to the other player."""
    return dataclasses.replace(state, active_player=other_player(state.active_player))


def add_piece_to_bank(piece: Piece, state: GameState) -> GameState:
    """Return a piece to the end of its bank sequence."""
    return dataclasses.replace(state, bank=bank_ops.add_piece(piece, state.bank))


def add_pieces_to_bank(pieces: Iterable[Piece], state: GameState) -> GameState:
    """Return several pieces to the bank, in order."""
    return dataclasses.replace(state, bank=bank_ops.add_pieces(pieces, state.bank))


def take_piece_from_bank(size: int, color: str, state: GameState) -> tuple[Piece | None, GameState]:
    """Take a piece from the bank, threading the rest of the state unchanged.

    Returns:
        Tuple of (piece, updated state), or (None, state) with the original
        state object when no such piece is available.
    """
    piece, bank = bank_ops.take_piece_by_size_and_color(size, color, state.bank)
    if piece is None:
        return None, state
    return piece, dataclasses.replace(state, bank=bank)


def get_home_system(player: str, state: GameState) -> StarSystem:
    """A player's home system (always present, possibly empty)."""
    return state.home_systems[player]


def get_all_systems(state: GameState) -> list[StarSystem]:
    """In-play systems (normal phase only) followed by both home systems."""
    home_systems = [state.home_systems[p] for p in PLAYERS]
    if isinstance(state, NormalState):
        return list(state.systems) + home_systems
    return home_systems


def find_system(system_id: str, state: GameState) -> StarSystem | None:
    """Look up any system, home or in-play, by id."""
    for system in get_all_systems(state):
        if system.id == system_id:
            return system
    return None


def has_system(system: StarSystem, state: GameState) -> bool:
    """Whether a system with this id is part of the state."""
    return find_system(system.id, state) is not None


def add_system(system: StarSystem, state: NormalState) -> NormalState:
    """Append a new in-play system."""
    return dataclasses.replace(state, systems=state.systems + (system,))


def create_system(
    state: NormalState, size: int, color: str, ships: tuple[Ship, ...] = ()
) -> tuple[str | None, NormalState]:
    """Take a star from the bank and open a new normal system around it.

    Returns:
        Tuple of (new system id, updated state), or (None, state) with the
        original state object when the star is not in the bank.
    """
    star, updated = take_piece_from_bank(size, color, state)
    if star is None:
        return None, state

    system = system_ops.create_normal(star, ships)
    return system.id, add_system(system, updated)


def _set_home_system(player: str, system: StarSystem, state: GameState) -> GameState:
    return dataclasses.replace(state, home_systems={**state.home_systems, player: system})


def _home_owner(system_id: str) -> str | None:
    for player in PLAYERS:
        if system_id == system_ops.home_system_id(player):
            return player
    return None


def remove_system_by_id(system_id: str, state: GameState) -> GameState:
    """Remove a system without returning its pieces to the bank.

    Home systems are emptied in place (they always exist). Normal systems are
    dropped from the in-play list; during setup there are none, so the
    original state is returned.
    """
    owner = _home_owner(system_id)
    if owner is not None:
        return _set_home_system(owner, system_ops.create_empty_home_system(owner), state)

    if not isinstance(state, NormalState):
        return state

    return dataclasses.replace(state, systems=tuple(s for s in state.systems if s.id != system_id))


def _set_system(system: StarSystem, state: GameState) -> GameState:
    owner = _home_owner(system.id)
    if owner is not None:
        return _set_home_system(owner, system, state)

    if not isinstance(state, NormalState):
        return state

    return dataclasses.replace(
        state, systems=tuple(system if s.id == system.id else s for s in state.systems)
    )


def set_system_with_cleanup(system: StarSystem, state: GameState) -> GameState:
    """Replace a system in the state, dissolving it if it became invalid.

    If the system is not part of the state, the original state is returned.
    If the system fails validation, its remaining pieces go back to the bank
    and the system is removed. Otherwise the system replaces the old one.
    """
    if not has_system(system, state):
        return state

    result = system_ops.validate(system)
    if not result.valid:
        return remove_system_by_id(system.id, add_pieces_to_bank(result.pieces_to_cleanup, state))

    return _set_system(system, state)


def all_piece_ids(state: GameState) -> list[str]:
    """Every piece id in the bank and in every system."""
    ids = bank_ops.to_list(state.bank)
    for system in get_all_systems(state):
        ids.extend(p.id for p in system_ops.get_pieces(system))
    return ids


def is_conserved(state: GameState) -> bool:
    """Whether all 36 pieces are accounted for exactly once."""
    ids = all_piece_ids(state)
    return len(ids) == TOTAL_PIECES and len(set(ids)) == TOTAL_PIECES


def add_star_to_home_system(player: str, star: Star, state: GameState) -> GameState:
    """Place a star in a player's home system."""
    return _set_home_system(player, system_ops.add_star(star, state.home_systems[player]), state)


def add_ship_to_home_system(player: str, ship: Ship, state: GameState) -> GameState:
    """Place a ship in a player's home system."""
    return _set_home_system(player, system_ops.add_ship(ship, state.home_systems[player]), state)
