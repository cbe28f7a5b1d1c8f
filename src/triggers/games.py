"""Triggers for creation and updates of ``games/{gameId}``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.social.games import MalformedStateError, parse_state, register_game
from src.social.models import Delivery, GameRecord
from src.triggers.messages import format_game_update, format_new_game
from src.triggers.notifications import display_name, notify_user

if TYPE_CHECKING:
    from src.triggers.deps import Deps

logger = logging.getLogger("friendplay.games")


def on_game_create(snapshot: dict, game_id: str, deps: Deps) -> Delivery | None:
    """List the game for both players and tell player2 about it."""
    game = GameRecord.from_dict(snapshot, game_id)
    if not game.player1 or not game.player2:
        logger.error("games/%s is missing a player", game_id)
        return None

    for player in (game.player1, game.player2):
        register_game(deps.manager_repo, player, game_id)

    title, body, data = format_new_game(
        game_id, game.name, display_name(game.player1, deps)
    )
    return notify_user(game.player2, title, body, data, deps)


def on_game_update(
    before: dict | None, after: dict | None, game_id: str, deps: Deps
) -> Delivery | None:
    """Notify the other player when the state code changes."""
    if after is None:
        return None
    old_state = (before or {}).get("state")
    new_state = after.get("state")
    if old_state == new_state:
        return None

    game = GameRecord.from_dict(after, game_id)
    try:
        transition = parse_state(game.state)
    except MalformedStateError:
        logger.exception("Unrecognized state on games/%s", game_id)
        return None

    actor = game.player(transition.actor_field)
    target = game.player(transition.target_field)
    if not target:
        logger.error("games/%s has no %s", game_id, transition.target_field)
        return None

    title, body, data = format_game_update(
        game_id, game.name, display_name(actor, deps), transition.action
    )
    return notify_user(target, title, body, data, deps)
