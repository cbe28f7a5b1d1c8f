"""Trigger for updates of ``friends/{uid}``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.social.diff import added_ids, last_added
from src.social.invitations import InvitationPropagator
from src.social.models import PropagationResult
from src.triggers.messages import format_invitation
from src.triggers.notifications import display_name, notify_user
from src.utils.constants import PROPAGATE_LAST

if TYPE_CHECKING:
    from src.triggers.deps import Deps

logger = logging.getLogger("friendplay.friends")


def on_friends_list_update(
    before: dict | None,
    after: dict | None,
    uid: str,
    deps: Deps,
) -> list[PropagationResult]:
    """Invite every peer newly added to ``uid``'s friends list.

    Removals and unchanged lists produce no work.
    """
    previous = (before or {}).get("friends") or []
    current = (after or {}).get("friends") or []

    if deps.propagation == PROPAGATE_LAST:
        last = last_added(previous, current)
        peers = [last] if last is not None else []
    else:
        peers = added_ids(previous, current)

    if not peers:
        return []

    propagator = InvitationPropagator(deps.friends_repo, deps.invitations_repo)
    results = []
    for peer in peers:
        result = propagator.propagate(uid, peer)
        results.append(result)
        if result.applied:
            title, body, data = format_invitation(uid, display_name(uid, deps))
            notify_user(peer, title, body, data, deps)
    return results
