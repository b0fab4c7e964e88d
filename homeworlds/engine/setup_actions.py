"""Setup phase actions: claiming home system stars and the first ship.

During setup each player alternately takes two stars and then one ship for
their home system. ``validate`` decides whether an action is legal;
``apply`` executes it and trusts that validation already passed. If the
requested piece is missing from the bank, ``apply`` returns the original
state object unchanged and does not switch the active player.
"""

from dataclasses import dataclass
from typing import ClassVar

from ..models import bank as bank_ops
from ..models import game as game_ops
from ..models import validation
from ..models.game import GameState, SetupState
from ..models.piece import piece_to_ship
from ..models.player import validate_player
from ..models.validation import ValidationResult
from ..utils.constants import COLORS, HOME_SYSTEM_STARS, PHASE_SETUP, SIZES


def _validate_action_fields(color: str, size: int, player: str) -> None:
    if color not in COLORS:
        raise ValueError(f"Invalid color: {color} (must be one of {', '.join(COLORS)})")
    if size not in SIZES:
        raise ValueError(f"Invalid size: {size} (must be 1-3)")
    validate_player(player)


@dataclass(frozen=True)
class TakeStar:
    """Take a star from the bank for the player's home system."""

    type: ClassVar[str] = "setup:take_star"
    color: str
    size: int
    player: str

    def __post_init__(self):
        """Validate action data after initialization."""
        _validate_action_fields(self.color, self.size, self.player)


@dataclass(frozen=True)
class TakeShip:
    """Take the player's first ship from the bank into their home system."""

    type: ClassVar[str] = "setup:take_ship"
    color: str
    size: int
    player: str

    def __post_init__(self):
        """Validate action data after initialization."""
        _validate_action_fields(self.color, self.size, self.player)


SetupAction = TakeStar | TakeShip


def validate(state: GameState, action: SetupAction) -> ValidationResult:
    """Validate a setup action against the current game state.

    Checks, in order: phase, turn, bank supply, then the home system star
    count (at most two stars; a ship needs two stars first).

    Args:
        state: Current game state
        action: TakeStar or TakeShip

    Returns:
        ValidationResult, carrying a typed error when invalid
    """
    if not isinstance(state, SetupState):
        return validation.wrong_phase(expected=PHASE_SETUP, actual=state.tag)

    if action.player != state.active_player:
        return validation.wrong_player(expected=state.active_player, actual=action.player)

    if not bank_ops.has_piece_by_size_and_color(action.size, action.color, state.bank):
        return validation.piece_not_in_bank(action.color, action.size)

    home_system = game_ops.get_home_system(action.player, state)
    if isinstance(action, TakeStar) and len(home_system.stars) >= HOME_SYSTEM_STARS:
        return validation.home_system_already_has_two_stars(action.player)

    if isinstance(action, TakeShip) and len(home_system.stars) < HOME_SYSTEM_STARS:
        return validation.home_system_needs_two_stars(action.player)

    # A second ship can't be requested: the turn check or the phase check
    # rejects it first.
    return validation.valid()


def _apply_take_star(state: SetupState, action: TakeStar) -> GameState:
    star, updated = game_ops.take_piece_from_bank(action.size, action.color, state)
    if star is None:
        return state

    updated = game_ops.add_star_to_home_system(action.player, star, updated)
    return game_ops.switch_active_player(updated)


def _apply_take_ship(state: SetupState, action: TakeShip) -> GameState:
    piece, updated = game_ops.take_piece_from_bank(action.size, action.color, state)
    if piece is None:
        return state

    ship = piece_to_ship(piece, action.player)
    updated = game_ops.add_ship_to_home_system(action.player, ship, updated)
    updated = game_ops.switch_active_player(updated)

    # Setup ends once both home systems hold two stars and a ship
    return game_ops.maybe_to_normal(updated)


def apply(state: GameState, action: SetupAction) -> GameState:
    """Apply a setup action, assuming it has been validated.

    Returns the original state object if the state is not in setup or the
    requested piece is not in the bank.
    """
    if not isinstance(state, SetupState):
        return state

    if isinstance(action, TakeStar):
        return _apply_take_star(state, action)
    return _apply_take_ship(state, action)
