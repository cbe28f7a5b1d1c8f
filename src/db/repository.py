"""Repository protocol interfaces for FriendPlay persistence."""

from __future__ import annotations

from typing import Protocol


class StoreError(Exception):
    """A document store read or write failed."""

    def __init__(self, path: str, message: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if message else path)


class VersionConflictError(StoreError):
    """Conditional write lost against a concurrent writer."""


class UserRepository(Protocol):
    def get_user(self, user_id: str) -> dict | None:
        ...

    def delete_user(self, user_id: str) -> None:
        ...

    def find_user_ids_by_name(self, name: str) -> list[str]:
        ...

    def list_user_ids(self) -> set[str]:
        ...


class FriendsRepository(Protocol):
    def get_friends(self, user_id: str) -> list[str] | None:
        ...

    def delete_friends(self, user_id: str) -> None:
        ...


class InvitationsRepository(Protocol):
    def get_invitations(self, user_id: str) -> dict | None:
        ...

    def save_invitations(self, doc: dict) -> None:
        """Persist ``doc["invitations"]`` if ``doc["version"]`` is current."""
        ...

    def delete_invitations(self, user_id: str) -> None:
        ...


class ManagerRepository(Protocol):
    def get_manager(self, user_id: str) -> dict | None:
        ...

    def save_manager(self, doc: dict) -> None:
        """Persist ``doc["games"]``; creates the document on version 0."""
        ...

    def delete_manager(self, user_id: str) -> None:
        ...
