"""Account cleanup: reconcile identity records against profile documents.

The deletion set D holds every uid that is either marked as a synthetic
account in ``users`` or present in the identity directory without a
profile document. The valid uid set is computed once, before any
deletion, so seeded deletions never change what counts as an orphan.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.db.repository import (
    FriendsRepository,
    InvitationsRepository,
    ManagerRepository,
    StoreError,
    UserRepository,
)
from src.utils.constants import (
    COLLECTION_FRIENDS,
    COLLECTION_INVITATIONS,
    COLLECTION_MANAGERS,
    COLLECTION_USERS,
    IDENTITY_DELETE_BATCH,
    IDENTITY_PAGE_SIZE,
    doc_path,
)
from src.utils.identity import PaginationError

if TYPE_CHECKING:
    from src.utils.identity import IdentityDirectory

logger = logging.getLogger("friendplay.reconciler")


@dataclass
class CleanupResult:
    deleted_uids: list[str] = field(default_factory=list)
    synthetic_uids: list[str] = field(default_factory=list)
    orphaned_uids: list[str] = field(default_factory=list)
    pages: int = 0
    document_failures: int = 0
    identity_failures: int = 0


class AccountReconciler:
    def __init__(
        self,
        user_repo: UserRepository,
        friends_repo: FriendsRepository,
        invitations_repo: InvitationsRepository,
        manager_repo: ManagerRepository,
        identity: IdentityDirectory,
        synthetic_name: str,
        page_size: int = IDENTITY_PAGE_SIZE,
        delete_batch: int = IDENTITY_DELETE_BATCH,
    ) -> None:
        self._user_repo = user_repo
        self._friends_repo = friends_repo
        self._invitations_repo = invitations_repo
        self._manager_repo = manager_repo
        self._identity = identity
        self._synthetic_name = synthetic_name
        self._page_size = page_size
        self._delete_batch = delete_batch

    def run(self) -> CleanupResult:
        """Compute the deletion set and remove documents and identity records.

        Store and directory listing failures propagate; per-document
        deletions are best-effort.
        """
        result = CleanupResult()
        valid = self._user_repo.list_user_ids()

        deletion: list[str] = []
        members: set[str] = set()
        for uid in self._user_repo.find_user_ids_by_name(self._synthetic_name):
            if uid not in members:
                members.add(uid)
                deletion.append(uid)
        result.synthetic_uids = list(deletion)
        for uid in result.synthetic_uids:
            result.document_failures += self._delete_documents(uid)

        result.orphaned_uids, result.pages = self._find_orphans(valid, members)
        deletion.extend(result.orphaned_uids)
        for uid in result.orphaned_uids:
            result.document_failures += self._delete_documents(uid)

        result.identity_failures = self._delete_identities(deletion)
        result.deleted_uids = deletion

        logger.info(
            json.dumps({
                "event": "cleanup_finished",
                "deleted": len(deletion),
                "synthetic": len(result.synthetic_uids),
                "orphaned": len(result.orphaned_uids),
                "pages": result.pages,
                "uids": deletion,
            })
        )
        return result

    def _find_orphans(
        self, valid: set[str], already: set[str]
    ) -> tuple[list[str], int]:
        """Walk the identity directory and collect uids with no profile."""
        orphans: list[str] = []
        known = set(already)
        seen_tokens: set[str] = set()
        token: str | None = None
        pages = 0
        while True:
            uids, token = self._identity.list_page(token, self._page_size)
            pages += 1
            for uid in uids:
                if uid not in valid and uid not in known:
                    known.add(uid)
                    orphans.append(uid)
            if not token:
                return orphans, pages
            if token in seen_tokens:
                raise PaginationError(f"Continuation token repeated after page {pages}")
            seen_tokens.add(token)

    def _delete_documents(self, uid: str) -> int:
        """Delete every document owned by ``uid``. Returns the failure count."""
        deletions = (
            (COLLECTION_USERS, self._user_repo.delete_user),
            (COLLECTION_FRIENDS, self._friends_repo.delete_friends),
            (COLLECTION_INVITATIONS, self._invitations_repo.delete_invitations),
            (COLLECTION_MANAGERS, self._manager_repo.delete_manager),
        )
        failures = 0
        for collection, delete in deletions:
            try:
                delete(uid)
            except StoreError:
                logger.exception("Delete error with %s", doc_path(collection, uid))
                failures += 1
        return failures

    def _delete_identities(self, uids: list[str]) -> int:
        failures = 0
        for start in range(0, len(uids), self._delete_batch):
            batch = uids[start:start + self._delete_batch]
            report = self._identity.delete(batch)
            for uid, reason in report.errors:
                logger.error("Identity delete failed for %s: %s", uid, reason)
            failures += report.failure_count
        return failures
