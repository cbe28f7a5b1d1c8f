"""Notification dispatch: resolve a user's device tokens and push once."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.db.repository import StoreError
from src.social.models import Delivery, UserRecord
from src.utils.constants import COLLECTION_USERS, doc_path

if TYPE_CHECKING:
    from src.triggers.deps import Deps

logger = logging.getLogger("friendplay.notifications")


def display_name(user_id: str, deps: Deps) -> str:
    """Nickname, else name, else the uid itself."""
    try:
        user = deps.user_repo.get_user(user_id)
    except StoreError:
        logger.exception("Access error with %s", doc_path(COLLECTION_USERS, user_id))
        return user_id
    if user is None:
        return user_id
    return UserRecord.from_dict(user).display_name


def notify_user(
    user_id: str,
    title: str,
    body: str,
    data: dict,
    deps: Deps,
) -> Delivery:
    """Send one multicast push to every token of ``user_id``.

    Best-effort: failures are logged and reported, never raised.
    """
    path = doc_path(COLLECTION_USERS, user_id)
    try:
        user = deps.user_repo.get_user(user_id)
    except StoreError:
        logger.exception("Access error with %s", path)
        return Delivery.FAILED

    if user is None:
        logger.error("Cannot notify %s: %s does not exist", user_id, path)
        return Delivery.NOT_FOUND

    tokens = UserRecord.from_dict(user).device_tokens()
    if not tokens:
        logger.info("No device token for %s", user_id)
        return Delivery.NO_TOKEN

    try:
        response = deps.push.send_multicast(tokens, title, body, data)
    except Exception:
        logger.exception("Push to %s failed", user_id)
        return Delivery.FAILED

    if not response.get("success"):
        logger.error("Push to %s not delivered to any device", user_id)
        return Delivery.FAILED
    logger.info("Notification sent to %s", user_id)
    return Delivery.SENT
