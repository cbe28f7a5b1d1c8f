"""Firebase Admin SDK app, initialized once per process."""

from __future__ import annotations

import firebase_admin

_app = None


def get_app():
    """Return the default Firebase app, creating it on first use.

    Credentials come from the Admin SDK default chain
    (GOOGLE_APPLICATION_CREDENTIALS or the runtime service account).
    """
    global _app
    if _app is None:
        if firebase_admin._apps:
            _app = firebase_admin.get_app()
        else:
            _app = firebase_admin.initialize_app()
    return _app
