"""Game state codes and the legacy per-user game lists."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.db.repository import ManagerRepository, StoreError, VersionConflictError
from src.utils.constants import (
    ACTION_DECLINED,
    ACTION_LOST,
    ACTION_PLAYED,
    ACTION_WON,
    COLLECTION_MANAGERS,
    MAX_APPEND_RETRIES,
    PLAYER_ONE,
    PLAYER_TWO,
    doc_path,
)

logger = logging.getLogger("friendplay.games")

ACTIONS = {
    ACTION_DECLINED: "declined",
    ACTION_PLAYED: "played",
    ACTION_WON: "won",
    ACTION_LOST: "lost",
}


class MalformedStateError(ValueError):
    """A game state code that no transition is defined for."""


@dataclass(frozen=True)
class GameTransition:
    actor_field: str  # "player1" or "player2"
    target_field: str
    action: str  # one of ACTIONS values


def parse_state(code: str) -> GameTransition:
    """Decode a two-character state code such as "1P" or "2W"."""
    if not isinstance(code, str) or len(code) != 2:
        raise MalformedStateError(f"Invalid state code: {code!r}")

    who, what = code[0], code[1]
    if who == PLAYER_ONE:
        actor, target = "player1", "player2"
    elif who == PLAYER_TWO:
        actor, target = "player2", "player1"
    else:
        raise MalformedStateError(f"Unknown player in state code: {code!r}")

    action = ACTIONS.get(what)
    if action is None:
        raise MalformedStateError(f"Unknown action in state code: {code!r}")
    return GameTransition(actor_field=actor, target_field=target, action=action)


def register_game(
    repo: ManagerRepository,
    user_id: str,
    game_id: str,
    max_retries: int = MAX_APPEND_RETRIES,
) -> bool:
    """Add ``game_id`` to ``managers/{user_id}`` once. Returns True if written."""
    path = doc_path(COLLECTION_MANAGERS, user_id)
    for attempt in range(1, max_retries + 1):
        try:
            doc = repo.get_manager(user_id) or {
                "userId": user_id,
                "games": [],
                "version": 0,
            }
            games = list(doc.get("games", []))
            if game_id in games:
                return False
            games.append(game_id)
            doc["games"] = games
            repo.save_manager(doc)
            return True
        except VersionConflictError:
            logger.info("Concurrent update on %s (attempt %d)", path, attempt)
        except StoreError:
            logger.exception("Update error with %s", path)
            return False

    logger.error("Gave up on %s after %d conflicts", path, max_retries)
    return False
