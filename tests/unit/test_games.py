"""Tests for game state codes and game triggers."""

import pytest

from src.social.games import MalformedStateError, parse_state, register_game
from src.social.models import Delivery
from src.triggers.games import on_game_create, on_game_update


def _game(state="1P", name="Chess night"):
    return {"player1": "p1", "player2": "p2", "name": name, "state": state}


@pytest.fixture
def players(user_repo):
    user_repo.save_user({"userId": "p1", "nickname": "Uno", "tokens": {"android": "tok1"}})
    user_repo.save_user({"userId": "p2", "nickname": "Due", "tokens": {"android": "tok2"}})


class TestParseState:
    @pytest.mark.parametrize(
        "code, actor, target, action",
        [
            ("1D", "player1", "player2", "declined"),
            ("1P", "player1", "player2", "played"),
            ("2W", "player2", "player1", "won"),
            ("2L", "player2", "player1", "lost"),
        ],
    )
    def test_valid_codes(self, code, actor, target, action):
        transition = parse_state(code)
        assert transition.actor_field == actor
        assert transition.target_field == target
        assert transition.action == action

    @pytest.mark.parametrize("code", ["1X", "3P", "", "1", "1PW", None])
    def test_malformed(self, code):
        with pytest.raises(MalformedStateError):
            parse_state(code)


class TestRegisterGame:
    def test_creates_list(self, manager_repo):
        assert register_game(manager_repo, "p1", "g1")
        assert manager_repo.get_manager("p1")["games"] == ["g1"]

    def test_set_semantics(self, manager_repo):
        register_game(manager_repo, "p1", "g1")
        assert not register_game(manager_repo, "p1", "g1")
        register_game(manager_repo, "p1", "g2")
        assert manager_repo.get_manager("p1")["games"] == ["g1", "g2"]


class TestOnGameCreate:
    def test_notifies_player2_and_registers(self, deps, players, mock_push, manager_repo):
        status = on_game_create(_game(), "g1", deps)

        assert status == Delivery.SENT
        call = mock_push.calls[0]
        assert call["tokens"] == ["tok2"]
        assert "Uno" in call["body"]
        assert call["data"]["gameId"] == "g1"
        assert manager_repo.get_manager("p1")["games"] == ["g1"]
        assert manager_repo.get_manager("p2")["games"] == ["g1"]

    def test_missing_player(self, deps, mock_push):
        assert on_game_create({"player1": "p1"}, "g1", deps) is None
        assert mock_push.calls == []


class TestOnGameUpdate:
    def test_player1_played_notifies_player2(self, deps, players, mock_push):
        status = on_game_update(_game("2P"), _game("1P"), "g1", deps)

        assert status == Delivery.SENT
        call = mock_push.calls[0]
        assert call["tokens"] == ["tok2"]
        assert "your turn" in call["body"]
        assert call["data"]["action"] == "played"

    def test_player2_won_notifies_player1(self, deps, players, mock_push):
        on_game_update(_game("1P"), _game("2W"), "g1", deps)
        assert mock_push.calls[0]["tokens"] == ["tok1"]
        assert "Due won" in mock_push.calls[0]["body"]

    def test_unchanged_state_is_noop(self, deps, players, mock_push):
        assert on_game_update(_game("1P"), _game("1P", name="Renamed"), "g1", deps) is None
        assert mock_push.calls == []

    def test_malformed_state_aborts_event(self, deps, players, mock_push):
        assert on_game_update(_game("1P"), _game("1Q"), "g1", deps) is None
        assert mock_push.calls == []
