"""Action dispatch and wire conversion.

``validate`` and ``apply`` route each action to the rules for its family.
Only the setup family exists today; in-play actions will be added as a
second family once their rules are specified.
"""

from typing import Any

from ..models.game import GameState
from ..models.validation import ValidationResult
from . import setup_actions
from .setup_actions import TakeShip, TakeStar

Action = TakeStar | TakeShip

ACTION_TYPES: dict[str, type] = {
    TakeStar.type: TakeStar,
    TakeShip.type: TakeShip,
}


def take_star(color: str, size: int, player: str) -> TakeStar:
    return TakeStar(color=color, size=size, player=player)


def take_ship(color: str, size: int, player: str) -> TakeShip:
    return TakeShip(color=color, size=size, player=player)


def validate(state: GameState, action: Action) -> ValidationResult:
    """Check whether an action is legal in the given state."""
    if isinstance(action, (TakeStar, TakeShip)):
        return setup_actions.validate(state, action)
    raise TypeError(f"Unknown action: {action!r}")


def apply(state: GameState, action: Action) -> GameState:
    """Apply a validated action. Never raises for illegal game moves."""
    if isinstance(action, (TakeStar, TakeShip)):
        return setup_actions.apply(state, action)
    raise TypeError(f"Unknown action: {action!r}")


def action_to_dict(action: Action) -> dict[str, Any]:
    """Wire form: {"type": ..., "color": ..., "size": ..., "player": ...}."""
    return {
        "type": action.type,
        "color": action.color,
        "size": action.size,
        "player": action.player,
    }


def action_from_dict(data: dict[str, Any]) -> Action:
    """Build an action from its wire form.

    Raises:
        ValueError: If the type is unknown or a field is missing/out of range
    """
    action_type = data.get("type")
    action_cls = ACTION_TYPES.get(action_type)
    if action_cls is None:
        raise ValueError(f"Unknown action type: {action_type!r}")

    try:
        return action_cls(color=data["color"], size=data["size"], player=data["player"])
    except KeyError as e:
        raise ValueError(f"Action {action_type} is missing field {e.args[0]!r}") from e
