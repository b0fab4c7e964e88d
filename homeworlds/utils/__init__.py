"""Utility functions and constants for Binary Homeworlds."""

from .constants import (
    COLORS,
    FIRST_PLAYER,
    HOME_SYSTEM_STARS,
    OVERPOPULATION_THRESHOLD,
    PHASE_NORMAL,
    PHASE_SETUP,
    PIECES_PER_SIZE,
    PLAYERS,
    SIZES,
    TOTAL_PIECES,
)

__all__ = [
    "COLORS",
    "FIRST_PLAYER",
    "HOME_SYSTEM_STARS",
    "OVERPOPULATION_THRESHOLD",
    "PHASE_NORMAL",
    "PHASE_SETUP",
    "PIECES_PER_SIZE",
    "PLAYERS",
    "SIZES",
    "TOTAL_PIECES",
]
