"""Shared test fixtures for FriendPlay triggers."""

from __future__ import annotations

import pytest

from src.db.memory import (
    InMemoryFriendsRepository,
    InMemoryInvitationsRepository,
    InMemoryManagerRepository,
    InMemoryUserRepository,
)
from src.triggers.deps import Deps
from src.utils.identity import DeleteReport


class MockPushClient:
    """Records all multicast sends for test assertions."""

    def __init__(self, fail: bool = False) -> None:
        self.calls: list[dict] = []
        self.fail = fail

    def send_multicast(
        self,
        tokens: list[str],
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        self.calls.append({
            "tokens": list(tokens),
            "title": title,
            "body": body,
            "data": dict(data or {}),
        })
        if self.fail:
            raise RuntimeError("transport down")
        return {"success": len(tokens), "failure": 0}

    def calls_for(self, token: str) -> list[dict]:
        return [c for c in self.calls if token in c["tokens"]]


class FakeIdentityDirectory:
    """Serves fixed pages of uids; records list and delete calls."""

    def __init__(self, pages: list[list[str]] | None = None, tokens: list | None = None) -> None:
        self.pages = pages or [[]]
        # tokens[i] is the continuation token returned with page i
        self.tokens = tokens or [f"page-{i + 1}" for i in range(len(self.pages) - 1)] + [None]
        self.list_calls: list[str | None] = []
        self.deleted: list[list[str]] = []

    def list_page(self, page_token: str | None = None, max_results: int = 1000):
        self.list_calls.append(page_token)
        index = 0 if page_token is None else int(str(page_token).split("-")[-1])
        return list(self.pages[index]), self.tokens[index]

    def delete(self, uids: list[str]) -> DeleteReport:
        self.deleted.append(list(uids))
        return DeleteReport(success_count=len(uids))

    @property
    def deleted_uids(self) -> list[str]:
        return [uid for batch in self.deleted for uid in batch]


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def friends_repo():
    return InMemoryFriendsRepository()


@pytest.fixture
def invitations_repo():
    return InMemoryInvitationsRepository()


@pytest.fixture
def manager_repo():
    return InMemoryManagerRepository()


@pytest.fixture
def mock_push():
    return MockPushClient()


@pytest.fixture
def identity():
    return FakeIdentityDirectory()


@pytest.fixture
def deps(user_repo, friends_repo, invitations_repo, manager_repo, identity, mock_push):
    return Deps(
        user_repo=user_repo,
        friends_repo=friends_repo,
        invitations_repo=invitations_repo,
        manager_repo=manager_repo,
        identity=identity,
        push=mock_push,
    )
