"""FastAPI server for Binary Homeworlds.

Provides an HTTP/WebSocket API that hosts games: clients submit actions,
the server validates then applies them and broadcasts the results.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from ..engine.actions import action_from_dict
from ..engine.game_engine import InvalidActionLogError
from ..models.validation import error_to_dict
from .schemas.requests import ActionRequest, CreateGameRequest
from .schemas.responses import (
    ActionLogResponse,
    CreateGameResponse,
    GameStateResponse,
    SubmitActionResponse,
)
from .session import GameSessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Binary Homeworlds server starting...")
    yield
    logger.info("Binary Homeworlds server shutting down...")
    await sessions.cleanup_all()


app = FastAPI(
    title="Binary Homeworlds API",
    description="Web API for hosting Binary Homeworlds games",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Binary Homeworlds",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest | None = None):
    """Create a new game, optionally restored from an action log.

    Args:
        request: Optional action log to restore

    Returns:
        Game ID and current state

    Raises:
        HTTPException: 422 if an action in the log breaks the rules
    """
    actions = [action_from_dict(a.model_dump()) for a in request.actions] if request else []
    try:
        session = sessions.create_session(actions)
    except InvalidActionLogError as e:
        logger.warning(f"Rejected action log: {e}")
        raise HTTPException(
            status_code=422,
            detail={"index": e.index, "error": error_to_dict(e.error), "message": str(e)},
        )
    return CreateGameResponse(gameId=session.id, state=session.get_state())


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str):
    """Get current game state.

    Example:
        GET /api/games/game-abc123/state
    """
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")

    state = session.engine.state
    return GameStateResponse(
        gameId=game_id,
        phase=state.tag,
        activePlayer=state.active_player,
        winner=getattr(state, "winner", None),
        state=session.get_state(),
    )


@app.post("/api/games/{game_id}/actions", response_model=SubmitActionResponse)
async def submit_action(game_id: str, request: ActionRequest):
    """Validate and apply a player's action.

    Rule violations are not HTTP errors: they come back as
    ``accepted: false`` with the structured validation error.

    Example:
        POST /api/games/game-abc123/actions
        {"type": "setup:take_star", "color": "blue", "size": 3, "player": "player1"}
    """
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")

    action = action_from_dict(request.model_dump())
    result = await session.submit_action(action)

    if not result.valid:
        return SubmitActionResponse(
            accepted=False, error=error_to_dict(result.error), message=result.error.message
        )

    return SubmitActionResponse(accepted=True, state=session.get_state())


@app.get("/api/games/{game_id}/actions", response_model=ActionLogResponse)
async def get_action_log(game_id: str):
    """Get the accepted actions for a game, oldest first."""
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")

    return ActionLogResponse(gameId=game_id, actions=session.get_action_log())


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    else:
        raise HTTPException(status_code=404, detail="Game not found")


# ============================================
# WEBSOCKET ENDPOINT
# ============================================


@app.websocket("/ws/games/{game_id}")
async def websocket_endpoint(websocket: WebSocket, game_id: str):
    """WebSocket connection for real-time game updates.

    Clients receive:
    - CONNECTED: Initial connection confirmation with current state
    - ACTION_APPLIED: An action was accepted, with the new state
    - PONG: Reply to a PING keepalive
    """
    session = sessions.get(game_id)
    if not session:
        await websocket.close(code=1008, reason="Game not found")
        return

    await websocket.accept()
    session.add_connection(websocket)

    try:
        await websocket.send_json(
            {
                "type": "CONNECTED",
                "gameId": game_id,
                "state": session.get_state(),
            }
        )

        while True:
            data = await websocket.receive_json()

            if data.get("type") == "PING":
                await websocket.send_json({"type": "PONG"})

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected from game {game_id}")
    except Exception as e:
        logger.error(f"WebSocket error in game {game_id}: {e}", exc_info=True)
    finally:
        session.remove_connection(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
