"""Notification texts and data payloads."""

from __future__ import annotations

from src.utils.constants import PUSH_TYPE_GAME, PUSH_TYPE_INVITATION

GAME_ACTION_TEXT = {
    "declined": "{actor} declined your game {game}",
    "played": "{actor} played, it's your turn in {game}",
    "won": "{actor} won {game}",
    "lost": "{actor} lost {game}",
}


def format_invitation(sender_uid: str, sender_name: str) -> tuple[str, str, dict]:
    return (
        "New invitation",
        f"{sender_name} wants to be your friend",
        {"type": PUSH_TYPE_INVITATION, "uid": sender_uid},
    )


def format_new_game(game_id: str, game_name: str, actor_name: str) -> tuple[str, str, dict]:
    return (
        "New game",
        f"{actor_name} challenged you to {game_name or 'a game'}",
        {"type": PUSH_TYPE_GAME, "gameId": game_id},
    )


def format_game_update(
    game_id: str, game_name: str, actor_name: str, action: str
) -> tuple[str, str, dict]:
    body = GAME_ACTION_TEXT[action].format(actor=actor_name, game=game_name or "your game")
    return (
        game_name or "Game update",
        body,
        {"type": PUSH_TYPE_GAME, "gameId": game_id, "action": action},
    )
