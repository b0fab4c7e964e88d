"""Data models for Binary Homeworlds."""

from .bank import Bank
from .game import GameState, NormalState, SetupState
from .piece import Piece, Ship, Star
from .star_system import StarSystem, SystemValidationResult
from .validation import ValidationError, ValidationResult

__all__ = [
    "Bank",
    "GameState",
    "NormalState",
    "Piece",
    "SetupState",
    "Ship",
    "Star",
    "StarSystem",
    "SystemValidationResult",
    "ValidationError",
    "ValidationResult",
]
