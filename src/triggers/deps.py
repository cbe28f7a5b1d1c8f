"""Dependency container for trigger handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.utils.constants import DEFAULT_SYNTHETIC_ACCOUNT_NAME, PROPAGATE_ALL

if TYPE_CHECKING:
    from src.db.repository import (
        FriendsRepository,
        InvitationsRepository,
        ManagerRepository,
        UserRepository,
    )
    from src.utils.identity import IdentityDirectory
    from src.utils.push import PushClient


@dataclass
class Deps:
    """Bundles all dependencies for trigger functions."""

    user_repo: UserRepository
    friends_repo: FriendsRepository
    invitations_repo: InvitationsRepository
    manager_repo: ManagerRepository
    identity: IdentityDirectory
    push: PushClient
    synthetic_name: str = DEFAULT_SYNTHETIC_ACCOUNT_NAME
    propagation: str = PROPAGATE_ALL
