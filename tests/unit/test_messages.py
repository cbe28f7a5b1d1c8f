"""Tests for notification texts."""

from src.triggers.messages import format_game_update, format_invitation, format_new_game


class TestFormatInvitation:
    def test_names_sender(self):
        title, body, data = format_invitation("A", "Alice")
        assert title == "New invitation"
        assert "Alice" in body
        assert data == {"type": "invitation", "uid": "A"}


class TestFormatGames:
    def test_new_game_without_name(self):
        _, body, data = format_new_game("g1", "", "Bob")
        assert body == "Bob challenged you to a game"
        assert data["gameId"] == "g1"

    def test_each_action_has_text(self):
        for action in ("declined", "played", "won", "lost"):
            title, body, data = format_game_update("g1", "Duel", "Bob", action)
            assert title == "Duel"
            assert body.startswith("Bob ")
            assert data["action"] == action
