"""Data models for FriendPlay documents and trigger outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    """Terminal outcome of one guarded step chain."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"
    ALREADY_SATISFIED = "already_satisfied"
    FAILED = "failed"


class Delivery(str, Enum):
    """Result of a single notification dispatch."""

    SENT = "sent"
    NO_TOKEN = "no_token"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass
class PropagationResult:
    owner_uid: str
    peer_uid: str
    outcome: Outcome
    reason: str = ""
    attempts: int = 0

    @property
    def applied(self) -> bool:
        return self.outcome == Outcome.APPLIED


@dataclass
class UserRecord:
    """Profile document from ``users/{uid}``."""

    user_id: str
    name: str = ""
    nickname: str = ""
    tokens: dict | list | None = None

    @classmethod
    def from_dict(cls, d: dict) -> UserRecord:
        return cls(
            user_id=d["userId"],
            name=d.get("name") or "",
            nickname=d.get("nickname") or "",
            tokens=d.get("tokens"),
        )

    @property
    def display_name(self) -> str:
        return self.nickname or self.name or self.user_id

    def device_tokens(self) -> list[str]:
        """Flatten tokens (platform map or plain list), dropping blanks and repeats."""
        raw = self.tokens
        if isinstance(raw, dict):
            values: list = []
            for value in raw.values():
                values.extend(value if isinstance(value, (list, tuple, set)) else [value])
        elif isinstance(raw, (list, tuple, set)):
            values = list(raw)
        elif isinstance(raw, str):
            values = [raw]
        else:
            values = []

        tokens: list[str] = []
        for token in values:
            if isinstance(token, str) and token and token not in tokens:
                tokens.append(token)
        return tokens


@dataclass
class GameRecord:
    """Game document from ``games/{gameId}``."""

    game_id: str
    player1: str
    player2: str
    name: str = ""
    state: str = ""

    @classmethod
    def from_dict(cls, d: dict, game_id: str | None = None) -> GameRecord:
        return cls(
            game_id=game_id or d["gameId"],
            player1=d.get("player1", ""),
            player2=d.get("player2", ""),
            name=d.get("name") or "",
            state=d.get("state") or "",
        )

    def player(self, field_name: str) -> str:
        return getattr(self, field_name)
