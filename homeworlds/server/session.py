"""Game session management for hosted games."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field

from fastapi import WebSocket

from ..engine.actions import Action, action_to_dict
from ..engine.game_engine import GameEngine
from ..models.validation import ValidationResult
from ..utils.serialization import state_to_dict

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Manages one hosted game.

    Coordinates the engine, the accepted action log, and WebSocket
    connections. Validate+apply pairs run under a per-session lock so two
    concurrent submissions can never both claim the same piece.
    """

    id: str
    engine: GameEngine = field(default_factory=GameEngine)
    connections: list[WebSocket] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def get_state(self) -> dict:
        """Serialize the current game state for clients."""
        return state_to_dict(self.engine.state)

    def get_action_log(self) -> list[dict]:
        return [action_to_dict(a) for a in self.engine.history]

    async def submit_action(self, action: Action) -> ValidationResult:
        """Validate and apply an action, then broadcast the new state.

        Args:
            action: Action requested by a player

        Returns:
            ValidationResult from the engine
        """
        async with self.lock:
            result = self.engine.submit(action)
            if not result.valid:
                logger.info(
                    f"Game {self.id}: rejected {action.type} from {action.player} "
                    f"({result.error.kind})"
                )
                return result

            logger.info(f"Game {self.id}: applied {action.type} from {action.player}")
            message = {
                "type": "ACTION_APPLIED",
                "action": action_to_dict(action),
                "state": self.get_state(),
            }

        await self.broadcast(message)
        return result

    async def broadcast(self, message: dict):
        """Send message to all connected WebSocket clients.

        Args:
            message: Dictionary to send as JSON
        """
        disconnected = []
        for ws in self.connections:
            try:
                await ws.send_json(message)
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                disconnected.append(ws)

        # Remove disconnected clients
        for ws in disconnected:
            self.connections.remove(ws)

    def add_connection(self, websocket: WebSocket):
        """Add a WebSocket connection to this session."""
        self.connections.append(websocket)
        logger.info(f"WebSocket connected to game {self.id}, total: {len(self.connections)}")

    def remove_connection(self, websocket: WebSocket):
        """Remove a WebSocket connection from this session."""
        if websocket in self.connections:
            self.connections.remove(websocket)
            logger.info(
                f"WebSocket disconnected from game {self.id}, remaining: {len(self.connections)}"
            )


class GameSessionManager:
    """Manages all active game sessions.

    In-memory storage. A persistent store only needs to keep each game's
    action log, since replaying it rebuilds the state.
    """

    def __init__(self):
        self.sessions: dict[str, GameSession] = {}

    def create_session(self, actions: list[Action] | None = None) -> GameSession:
        """Create a new game, optionally restored from an action log.

        Args:
            actions: Action log to restore; every action is validated

        Returns:
            The new session

        Raises:
            InvalidActionLogError: If the log breaks the rules
        """
        game_id = f"game-{uuid.uuid4().hex[:8]}"
        session = GameSession(id=game_id, engine=GameEngine.from_log(actions or []))
        self.sessions[game_id] = session
        logger.info(f"Created game {game_id} ({len(session.engine.history)} actions restored)")
        return session

    def get(self, game_id: str) -> GameSession | None:
        """Get a session by ID.

        Args:
            game_id: Game session ID

        Returns:
            GameSession or None if not found
        """
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Delete a session.

        Args:
            game_id: Game session ID

        Returns:
            True if deleted, False if not found
        """
        if game_id in self.sessions:
            del self.sessions[game_id]
            logger.info(f"Deleted game session {game_id}")
            return True
        return False

    async def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        self.sessions.clear()
