"""Tests for notification dispatch."""

from src.db.memory import InMemoryUserRepository
from src.db.repository import StoreError
from src.social.models import Delivery, UserRecord
from src.triggers.notifications import display_name, notify_user

from tests.conftest import MockPushClient


class FailingUserRepository(InMemoryUserRepository):
    def get_user(self, user_id):
        raise StoreError(f"users/{user_id}", "unavailable")


class TestNotifyUser:
    def test_sends_to_all_platform_tokens(self, deps, user_repo, mock_push):
        user_repo.save_user({
            "userId": "B",
            "tokens": {"android": "tok-a", "ios": "tok-i"},
        })

        status = notify_user("B", "Hi", "Body", {"type": "invitation"}, deps)

        assert status == Delivery.SENT
        assert len(mock_push.calls) == 1
        call = mock_push.calls[0]
        assert sorted(call["tokens"]) == ["tok-a", "tok-i"]
        assert call["title"] == "Hi"
        assert call["data"] == {"type": "invitation"}

    def test_no_token(self, deps, user_repo, mock_push):
        user_repo.save_user({"userId": "B", "tokens": {"android": ""}})
        assert notify_user("B", "Hi", "Body", {}, deps) == Delivery.NO_TOKEN
        assert mock_push.calls == []

    def test_missing_user(self, deps, mock_push):
        assert notify_user("nobody", "Hi", "Body", {}, deps) == Delivery.NOT_FOUND
        assert mock_push.calls == []

    def test_transport_failure_is_swallowed(self, deps, user_repo):
        deps.push = MockPushClient(fail=True)
        user_repo.save_user({"userId": "B", "tokens": ["tok"]})
        assert notify_user("B", "Hi", "Body", {}, deps) == Delivery.FAILED

    def test_store_failure_is_swallowed(self, deps):
        deps.user_repo = FailingUserRepository()
        assert notify_user("B", "Hi", "Body", {}, deps) == Delivery.FAILED


class TestDisplayName:
    def test_prefers_nickname(self, deps, user_repo):
        user_repo.save_user({"userId": "A", "name": "Alice", "nickname": "Ali"})
        assert display_name("A", deps) == "Ali"

    def test_falls_back_to_name_then_uid(self, deps, user_repo):
        user_repo.save_user({"userId": "A", "name": "Alice"})
        assert display_name("A", deps) == "Alice"
        assert display_name("unknown", deps) == "unknown"


class TestDeviceTokens:
    def test_list_tokens_deduplicated(self):
        user = UserRecord.from_dict({"userId": "u", "tokens": ["t1", "t1", "", "t2"]})
        assert user.device_tokens() == ["t1", "t2"]

    def test_platform_map_with_lists(self):
        user = UserRecord.from_dict({"userId": "u", "tokens": {"android": ["a1", "a2"], "web": "w"}})
        assert user.device_tokens() == ["a1", "a2", "w"]

    def test_no_tokens_field(self):
        assert UserRecord.from_dict({"userId": "u"}).device_tokens() == []
