"""In-memory repository implementations for testing and local runs."""

from __future__ import annotations

import copy

from src.db.repository import VersionConflictError
from src.utils.constants import COLLECTION_INVITATIONS, COLLECTION_MANAGERS, doc_path


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: dict[str, dict] = {}

    def get_user(self, user_id: str) -> dict | None:
        user = self._users.get(user_id)
        return copy.deepcopy(user) if user else None

    def save_user(self, user: dict) -> None:
        self._users[user["userId"]] = copy.deepcopy(user)

    def delete_user(self, user_id: str) -> None:
        self._users.pop(user_id, None)

    def find_user_ids_by_name(self, name: str) -> list[str]:
        return [uid for uid, user in self._users.items() if user.get("name") == name]

    def list_user_ids(self) -> set[str]:
        return set(self._users)


class InMemoryFriendsRepository:
    def __init__(self) -> None:
        self._friends: dict[str, list[str]] = {}

    def get_friends(self, user_id: str) -> list[str] | None:
        friends = self._friends.get(user_id)
        return list(friends) if friends is not None else None

    def save_friends(self, user_id: str, friends: list[str]) -> None:
        self._friends[user_id] = list(friends)

    def delete_friends(self, user_id: str) -> None:
        self._friends.pop(user_id, None)


class InMemoryInvitationsRepository:
    def __init__(self) -> None:
        self._invitations: dict[str, dict] = {}

    def get_invitations(self, user_id: str) -> dict | None:
        doc = self._invitations.get(user_id)
        return copy.deepcopy(doc) if doc is not None else None

    def create_invitations(self, user_id: str, invitations: list[str] | None = None) -> None:
        self._invitations[user_id] = {
            "userId": user_id,
            "invitations": list(invitations or []),
            "version": 0,
        }

    def save_invitations(self, doc: dict) -> None:
        user_id = doc["userId"]
        existing = self._invitations.get(user_id)
        expected = doc.get("version", 0)
        if existing is None or existing.get("version", 0) != expected:
            raise VersionConflictError(
                doc_path(COLLECTION_INVITATIONS, user_id),
                f"expected version {expected}",
            )
        saved = copy.deepcopy(doc)
        saved["version"] = expected + 1
        self._invitations[user_id] = saved

    def delete_invitations(self, user_id: str) -> None:
        self._invitations.pop(user_id, None)


class InMemoryManagerRepository:
    def __init__(self) -> None:
        self._managers: dict[str, dict] = {}

    def get_manager(self, user_id: str) -> dict | None:
        doc = self._managers.get(user_id)
        return copy.deepcopy(doc) if doc is not None else None

    def save_manager(self, doc: dict) -> None:
        user_id = doc["userId"]
        existing = self._managers.get(user_id)
        expected = doc.get("version", 0)
        current = existing.get("version", 0) if existing is not None else 0
        if current != expected:
            raise VersionConflictError(
                doc_path(COLLECTION_MANAGERS, user_id),
                f"expected version {expected}",
            )
        saved = copy.deepcopy(doc)
        saved["version"] = expected + 1
        self._managers[user_id] = saved

    def delete_manager(self, user_id: str) -> None:
        self._managers.pop(user_id, None)
