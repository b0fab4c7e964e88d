"""Game state and action log serialization to/from JSON.

Game states are plain data, so they convert to JSON-compatible dictionaries
field by field. Games are persisted as their action log: replaying the log
from the initial state reproduces the exact same state.
"""

import json
from pathlib import Path
from typing import Any

from ..engine.actions import Action, action_from_dict, action_to_dict
from ..models.bank import Bank
from ..models.game import GameState, NormalState, SetupState
from ..models.piece import Piece, Ship
from ..models.star_system import StarSystem
from ..utils.constants import COLORS, PHASE_NORMAL, PHASE_SETUP, SIZES


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Convert a game state to a JSON-compatible dictionary.

    Args:
        state: SetupState or NormalState

    Returns:
        Dictionary representation, tagged with the phase
    """
    data = {
        "tag": state.tag,
        "bank": _serialize_bank(state.bank),
        "activePlayer": state.active_player,
        "homeSystems": {
            player: _serialize_system(system) for player, system in state.home_systems.items()
        },
    }
    if isinstance(state, NormalState):
        data["systems"] = [_serialize_system(s) for s in state.systems]
        data["winner"] = state.winner
    return data


def state_from_dict(data: dict[str, Any]) -> GameState:
    """Reconstruct a game state from its dictionary form.

    Raises:
        ValueError: If the tag is unknown or a field is invalid
    """
    bank = _deserialize_bank(data["bank"])
    home_systems = {
        player: _deserialize_system(system) for player, system in data["homeSystems"].items()
    }

    if data["tag"] == PHASE_SETUP:
        return SetupState(bank=bank, active_player=data["activePlayer"], home_systems=home_systems)
    if data["tag"] == PHASE_NORMAL:
        return NormalState(
            bank=bank,
            active_player=data["activePlayer"],
            home_systems=home_systems,
            systems=tuple(_deserialize_system(s) for s in data.get("systems", [])),
            winner=data.get("winner"),
        )
    raise ValueError(f"Invalid game state tag: {data['tag']!r}")


def save_action_log(actions: list[Action], filepath: str) -> None:
    """Save an action log to a JSON file.

    Args:
        actions: Ordered actions applied since the initial state
        filepath: Path to save file (will be created in /state directory if relative)
    """
    path = Path(filepath)
    if not path.is_absolute():
        state_dir = Path(__file__).parent.parent.parent / "state"
        state_dir.mkdir(exist_ok=True)
        path = state_dir / filepath

    with open(path, "w") as f:
        json.dump({"actions": [action_to_dict(a) for a in actions]}, f, indent=2)


def load_action_log(filepath: str) -> list[Action]:
    """Load an action log from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If an action is malformed
    """
    path = Path(filepath)
    if not path.is_absolute():
        state_dir = Path(__file__).parent.parent.parent / "state"
        path = state_dir / filepath

    with open(path) as f:
        data = json.load(f)

    return [action_from_dict(a) for a in data["actions"]]


def _serialize_bank(bank: Bank) -> dict[str, dict[str, list[str]]]:
    # JSON object keys must be strings
    return {
        color: {str(size): list(bank.pieces[color][size]) for size in SIZES} for color in COLORS
    }


def _deserialize_bank(data: dict[str, dict[str, list[str]]]) -> Bank:
    return Bank(
        pieces={
            color: {size: tuple(data[color][str(size)]) for size in SIZES} for color in COLORS
        }
    )


def _serialize_system(system: StarSystem) -> dict[str, Any]:
    """Convert StarSystem to dictionary."""
    return {
        "id": system.id,
        "stars": [_serialize_piece(s) for s in system.stars],
        "ships": [{**_serialize_piece(s), "owner": s.owner} for s in system.ships],
    }


def _deserialize_system(data: dict[str, Any]) -> StarSystem:
    """Reconstruct StarSystem from dictionary."""
    return StarSystem(
        id=data["id"],
        stars=tuple(Piece(color=s["color"], size=s["size"], id=s["id"]) for s in data["stars"]),
        ships=tuple(
            Ship(color=s["color"], size=s["size"], id=s["id"], owner=s["owner"])
            for s in data["ships"]
        ),
    )


def _serialize_piece(piece: Piece | Ship) -> dict[str, Any]:
    return {"color": piece.color, "size": piece.size, "id": piece.id}
