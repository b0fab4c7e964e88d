"""Validation results and the typed validation error taxonomy.

Rule violations are reported as data, never raised. Each error type is a
small frozen dataclass carrying a ``kind`` discriminator and the fields a
client needs to explain the failure.
"""

from dataclasses import asdict, dataclass
from typing import ClassVar


@dataclass(frozen=True)
class WrongPlayer:
    """Action submitted by the player who is not active."""

    kind: ClassVar[str] = "wrong_player"
    expected: str
    actual: str

    @property
    def message(self) -> str:
        return f"It is {self.expected}'s turn, not {self.actual}'s"


@dataclass(frozen=True)
class WrongPhase:
    """Action submitted outside its legal phase."""

    kind: ClassVar[str] = "wrong_phase"
    expected: str
    actual: str

    @property
    def message(self) -> str:
        return f"Action is only allowed in the {self.expected} phase (current phase: {self.actual})"


@dataclass(frozen=True)
class PieceNotInBank:
    """Requested piece has no remaining supply."""

    kind: ClassVar[str] = "piece_not_in_bank"
    color: str
    size: int

    @property
    def message(self) -> str:
        return f"No {self.color} size-{self.size} piece left in the bank"


@dataclass(frozen=True)
class HomeSystemAlreadyHasTwoStars:
    kind: ClassVar[str] = "home_system_already_has_two_stars"
    player: str

    @property
    def message(self) -> str:
        return f"{self.player}'s home system already has two stars"


@dataclass(frozen=True)
class HomeSystemNeedsTwoStars:
    kind: ClassVar[str] = "home_system_needs_two_stars"
    player: str

    @property
    def message(self) -> str:
        return f"{self.player} must take two stars before taking a ship"


ValidationError = (
    WrongPlayer | WrongPhase | PieceNotInBank | HomeSystemAlreadyHasTwoStars | HomeSystemNeedsTwoStars
)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an action.

    Attributes:
        valid: True if the action may be applied
        error: The reason the action is illegal (None when valid)
    """

    valid: bool
    error: ValidationError | None = None

    def __post_init__(self):
        """Validate result consistency after initialization."""
        if self.valid and self.error is not None:
            raise ValueError("A valid result cannot carry an error")
        if not self.valid and self.error is None:
            raise ValueError("An invalid result must carry an error")

    def to_dict(self) -> dict:
        """Wire form: {"valid": true} or {"valid": false, "error": {...}}."""
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": error_to_dict(self.error)}


def error_to_dict(error: ValidationError) -> dict:
    """Convert an error to {"type": kind, **fields}."""
    return {"type": error.kind, **asdict(error)}


def valid() -> ValidationResult:
    return ValidationResult(valid=True)


def invalid(error: ValidationError) -> ValidationResult:
    return ValidationResult(valid=False, error=error)


def wrong_player(expected: str, actual: str) -> ValidationResult:
    """Invalid because the action is not for the current player."""
    return invalid(WrongPlayer(expected=expected, actual=actual))


def wrong_phase(expected: str, actual: str) -> ValidationResult:
    """Invalid because the action is not in the correct phase."""
    return invalid(WrongPhase(expected=expected, actual=actual))


def piece_not_in_bank(color: str, size: int) -> ValidationResult:
    return invalid(PieceNotInBank(color=color, size=size))


def home_system_already_has_two_stars(player: str) -> ValidationResult:
    return invalid(HomeSystemAlreadyHasTwoStars(player=player))


def home_system_needs_two_stars(player: str) -> ValidationResult:
    """Taking a ship is invalid until the player has taken two stars."""
    return invalid(HomeSystemNeedsTwoStars(player=player))
