"""Friend-invitation propagation.

When A adds B to A's friends list, B must end up with exactly one pending
invitation from A, unless B already lists A as a friend. Every step is a
guarded read that can end the chain early with an explicit outcome; the
final append is an optimistic, version-checked write retried a bounded
number of times so concurrent inviters cannot overwrite each other.
"""

from __future__ import annotations

import logging

from src.db.repository import (
    FriendsRepository,
    InvitationsRepository,
    StoreError,
    VersionConflictError,
)
from src.social.models import Outcome, PropagationResult
from src.utils.constants import (
    COLLECTION_FRIENDS,
    COLLECTION_INVITATIONS,
    MAX_APPEND_RETRIES,
    doc_path,
)

logger = logging.getLogger("friendplay.invitations")


class InvitationPropagator:
    def __init__(
        self,
        friends_repo: FriendsRepository,
        invitations_repo: InvitationsRepository,
        max_retries: int = MAX_APPEND_RETRIES,
    ) -> None:
        self._friends_repo = friends_repo
        self._invitations_repo = invitations_repo
        self._max_retries = max_retries

    def propagate(self, owner_uid: str, peer_uid: str) -> PropagationResult:
        """Record a pending invitation from ``owner_uid`` on ``peer_uid``."""
        if owner_uid == peer_uid:
            return self._finish(owner_uid, peer_uid, Outcome.ALREADY_SATISFIED, "self")

        friends_path = doc_path(COLLECTION_FRIENDS, peer_uid)
        try:
            peer_friends = self._friends_repo.get_friends(peer_uid)
        except StoreError:
            logger.exception("Access error with %s", friends_path)
            return self._finish(owner_uid, peer_uid, Outcome.FAILED, "friends read")

        if peer_friends is None:
            return self._finish(
                owner_uid, peer_uid, Outcome.NOT_FOUND, "target does not exist"
            )
        if owner_uid in peer_friends:
            return self._finish(
                owner_uid, peer_uid, Outcome.ALREADY_SATISFIED, "already friends"
            )

        return self._append_invitation(owner_uid, peer_uid)

    def _append_invitation(self, owner_uid: str, peer_uid: str) -> PropagationResult:
        path = doc_path(COLLECTION_INVITATIONS, peer_uid)
        for attempt in range(1, self._max_retries + 1):
            try:
                doc = self._invitations_repo.get_invitations(peer_uid)
            except StoreError:
                logger.exception("Access error with %s", path)
                return self._finish(
                    owner_uid, peer_uid, Outcome.FAILED, "invitations read", attempt
                )

            if doc is None:
                return self._finish(
                    owner_uid,
                    peer_uid,
                    Outcome.NOT_FOUND,
                    "target invitations missing",
                    attempt,
                )
            invitations = list(doc.get("invitations", []))
            if owner_uid in invitations:
                return self._finish(
                    owner_uid,
                    peer_uid,
                    Outcome.ALREADY_SATISFIED,
                    "already invited",
                    attempt,
                )

            invitations.append(owner_uid)
            doc["invitations"] = invitations
            try:
                self._invitations_repo.save_invitations(doc)
            except VersionConflictError:
                logger.info("Concurrent update on %s (attempt %d)", path, attempt)
                continue
            except StoreError:
                logger.exception("Update error with %s", path)
                return self._finish(
                    owner_uid, peer_uid, Outcome.FAILED, "invitations write", attempt
                )

            logger.info(
                "Friend added for %s - invitation added for %s", owner_uid, peer_uid
            )
            return self._finish(owner_uid, peer_uid, Outcome.APPLIED, "", attempt)

        logger.error("Gave up on %s after %d conflicts", path, self._max_retries)
        return self._finish(
            owner_uid, peer_uid, Outcome.FAILED, "version conflict", self._max_retries
        )

    @staticmethod
    def _finish(
        owner_uid: str,
        peer_uid: str,
        outcome: Outcome,
        reason: str,
        attempts: int = 0,
    ) -> PropagationResult:
        if outcome in (Outcome.NOT_FOUND, Outcome.ALREADY_SATISFIED):
            logger.info(
                "No invitation from %s to %s: %s", owner_uid, peer_uid, reason
            )
        return PropagationResult(
            owner_uid=owner_uid,
            peer_uid=peer_uid,
            outcome=outcome,
            reason=reason,
            attempts=attempts,
        )
