"""Identity directory client backed by Firebase Authentication."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from firebase_admin import auth, exceptions

from src.utils.constants import IDENTITY_PAGE_SIZE
from src.utils.firebase import get_app

logger = logging.getLogger("friendplay.identity")


class IdentityError(Exception):
    """Listing or deleting identity records failed."""


class PaginationError(IdentityError):
    """The directory handed back a continuation token it already gave."""


@dataclass
class DeleteReport:
    success_count: int = 0
    failure_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)


class IdentityDirectory:
    """Paginated listing and bulk deletion of Firebase Auth users."""

    def __init__(self, app=None) -> None:
        self._app = app

    def _firebase_app(self):
        if self._app is None:
            self._app = get_app()
        return self._app

    def list_page(
        self, page_token: str | None = None, max_results: int = IDENTITY_PAGE_SIZE
    ) -> tuple[list[str], str | None]:
        """Return one page of uids and the next token (None on the last page)."""
        try:
            page = auth.list_users(
                page_token=page_token,
                max_results=max_results,
                app=self._firebase_app(),
            )
        except (exceptions.FirebaseError, ValueError) as e:
            raise IdentityError(f"list_users failed: {e}") from e
        uids = [user.uid for user in page.users]
        return uids, page.next_page_token or None

    def delete(self, uids: list[str]) -> DeleteReport:
        """Delete up to 1000 identity records in one call."""
        if not uids:
            return DeleteReport()
        try:
            result = auth.delete_users(uids, app=self._firebase_app())
        except (exceptions.FirebaseError, ValueError) as e:
            raise IdentityError(f"delete_users failed: {e}") from e
        return DeleteReport(
            success_count=result.success_count,
            failure_count=result.failure_count,
            errors=[(uids[err.index], err.reason) for err in result.errors],
        )
