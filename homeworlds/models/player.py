"""Player identifiers."""

from ..utils.constants import PLAYERS


def validate_player(player: str) -> None:
    """Raise ValueError if player is not a known player id."""
    if player not in PLAYERS:
        raise ValueError(f"Invalid player: {player} (must be 'player1' or 'player2')")


def other_player(player: str) -> str:
    """Return the opponent of the given player."""
    validate_player(player)
    return "player2" if player == "player1" else "player1"
