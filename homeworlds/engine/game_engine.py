"""Game engine: the validate-then-apply protocol over an action log.

The engine state is fully determined by the ordered list of accepted
actions. ``GameEngine`` keeps that list alongside the current state, which
lets a hosting service persist only the log and rebuild state by replay.
"""

import logging
from collections.abc import Iterable
from functools import reduce

from ..models import game as game_ops
from ..models.game import GameState
from ..models.validation import ValidationError, ValidationResult
from .actions import Action, apply, validate

logger = logging.getLogger(__name__)


class InvalidActionLogError(ValueError):
    """Raised when an action log contains an action the rules reject."""

    def __init__(self, index: int, action: Action, error: ValidationError):
        """Initialize log error.

        Args:
            index: Position of the first rejected action in the log
            action: The rejected action
            error: Why validation rejected it
        """
        self.index = index
        self.action = action
        self.error = error
        super().__init__(f"Action {index} ({action.type}) rejected: {error.message}")


def replay(actions: Iterable[Action], state: GameState | None = None) -> GameState:
    """Fold actions over a state (the initial state by default).

    Actions are applied without validation, exactly as they were recorded.
    """
    return reduce(apply, actions, state if state is not None else game_ops.initial())


class GameEngine:
    """Holds one game's current state and accepted action history.

    The engine is not thread-safe; callers that accept concurrent
    submissions for the same game must serialize calls to ``submit``.
    """

    def __init__(self, actions: Iterable[Action] = ()):
        """Rebuild a game by replaying previously accepted actions.

        The log is trusted and replayed without validation. Use ``from_log``
        for logs that come from outside the engine.

        Args:
            actions: Action log, oldest first
        """
        self._history: list[Action] = list(actions)
        self._state: GameState = replay(self._history)

    @classmethod
    def from_log(cls, actions: Iterable[Action]) -> "GameEngine":
        """Rebuild a game by submitting each logged action in turn.

        Args:
            actions: Untrusted action log, oldest first

        Returns:
            Engine holding every action of the log

        Raises:
            InvalidActionLogError: On the first action validation rejects
        """
        engine = cls()
        for index, action in enumerate(actions):
            result = engine.submit(action)
            if not result.valid:
                raise InvalidActionLogError(index, action, result.error)
        return engine

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def history(self) -> tuple[Action, ...]:
        return tuple(self._history)

    def validate(self, action: Action) -> ValidationResult:
        return validate(self._state, action)

    def submit(self, action: Action) -> ValidationResult:
        """Validate an action and, if legal, apply it and record it.

        Args:
            action: Action requested by a player

        Returns:
            The validation result. The state only changes when it is valid.
        """
        result = validate(self._state, action)
        if not result.valid:
            logger.debug(f"Rejected {action.type} from {action.player}: {result.error.kind}")
            return result

        previous_tag = self._state.tag
        self._state = apply(self._state, action)
        self._history.append(action)

        if self._state.tag != previous_tag:
            logger.info(f"Game phase changed: {previous_tag} -> {self._state.tag}")

        return result
