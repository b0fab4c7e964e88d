"""Game engine components."""

from .actions import Action, apply, take_ship, take_star, validate
from .game_engine import GameEngine, InvalidActionLogError, replay
from .setup_actions import TakeShip, TakeStar

__all__ = [
    "Action",
    "apply",
    "GameEngine",
    "InvalidActionLogError",
    "replay",
    "take_ship",
    "take_star",
    "TakeShip",
    "TakeStar",
    "validate",
]
