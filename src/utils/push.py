"""Push notification client using Firebase Cloud Messaging."""

from __future__ import annotations

import logging
import os

from firebase_admin import messaging

from src.utils.constants import (
    ANDROID_PRIORITY,
    ANDROID_VISIBILITY,
    DEFAULT_CHANNEL_ID,
    DEFAULT_CLICK_ACTION,
)
from src.utils.firebase import get_app

logger = logging.getLogger("friendplay.push")


class PushClient:
    """Multicast sender with a fixed Android delivery policy."""

    def __init__(
        self,
        channel_id: str | None = None,
        click_action: str | None = None,
        app=None,
    ) -> None:
        self._channel_id = channel_id or os.environ.get("FCM_CHANNEL_ID", DEFAULT_CHANNEL_ID)
        self._click_action = click_action or os.environ.get(
            "FCM_CLICK_ACTION", DEFAULT_CLICK_ACTION
        )
        self._app = app

    def build_message(
        self,
        tokens: list[str],
        title: str,
        body: str,
        data: dict | None = None,
    ) -> messaging.MulticastMessage:
        return messaging.MulticastMessage(
            tokens=list(tokens),
            notification=messaging.Notification(title=title, body=body),
            data={key: str(value) for key, value in (data or {}).items()},
            android=messaging.AndroidConfig(
                priority=ANDROID_PRIORITY,
                notification=messaging.AndroidNotification(
                    click_action=self._click_action,
                    channel_id=self._channel_id,
                    default_sound=True,
                    visibility=ANDROID_VISIBILITY,
                ),
            ),
        )

    def send_multicast(
        self,
        tokens: list[str],
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        """Send one notification to every token. Returns success/failure counts."""
        if self._app is None:
            self._app = get_app()
        message = self.build_message(tokens, title, body, data)
        response = messaging.send_each_for_multicast(message, app=self._app)
        if response.failure_count:
            logger.warning(
                "Push delivered to %d of %d tokens",
                response.success_count,
                len(tokens),
            )
        return {
            "success": response.success_count,
            "failure": response.failure_count,
        }
