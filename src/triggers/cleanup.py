"""Operator-triggered account cleanup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.social.reconciler import AccountReconciler

if TYPE_CHECKING:
    from src.triggers.deps import Deps


def run_cleanup(deps: Deps) -> dict:
    reconciler = AccountReconciler(
        deps.user_repo,
        deps.friends_repo,
        deps.invitations_repo,
        deps.manager_repo,
        deps.identity,
        deps.synthetic_name,
    )
    result = reconciler.run()
    return {"deletedUids": result.deleted_uids}
