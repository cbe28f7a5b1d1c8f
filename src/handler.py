"""AWS Lambda entry points for FriendPlay triggers.

Thin adapters: ``stream_handler`` receives DynamoDB Streams batches and
routes each change to its trigger, ``cleanup_handler`` serves the
operator cleanup request from API Gateway. All business logic lives in
src/social/ and src/triggers/.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

logger = logging.getLogger("friendplay.handler")
logger.setLevel(logging.INFO)

# Module-level deps for Lambda warm starts
_deps = None


def _init_deps(overrides: dict | None = None):
    """Initialize dependencies (lazily, once per Lambda container)."""
    global _deps

    from src.triggers.deps import Deps

    if overrides:
        _deps = Deps(**overrides)
        return _deps

    from src.db.dynamodb import (
        DynamoDBFriendsRepository,
        DynamoDBInvitationsRepository,
        DynamoDBManagerRepository,
        DynamoDBUserRepository,
    )
    from src.utils.constants import DEFAULT_SYNTHETIC_ACCOUNT_NAME, PROPAGATE_ALL
    from src.utils.identity import IdentityDirectory
    from src.utils.push import PushClient

    _deps = Deps(
        user_repo=DynamoDBUserRepository(),
        friends_repo=DynamoDBFriendsRepository(),
        invitations_repo=DynamoDBInvitationsRepository(),
        manager_repo=DynamoDBManagerRepository(),
        identity=IdentityDirectory(),
        push=PushClient(),
        synthetic_name=os.environ.get(
            "SYNTHETIC_ACCOUNT_NAME", DEFAULT_SYNTHETIC_ACCOUNT_NAME
        ),
        propagation=os.environ.get("FRIENDS_PROPAGATION", PROPAGATE_ALL),
    )
    return _deps


def stream_handler(event: dict, context: Any = None) -> dict:
    """Handle a batch of DynamoDB Streams records.

    Records are independent: a failure is logged and counted, and the
    batch carries on. Nothing is retried.
    """
    from src.db.streams import parse_record
    from src.triggers.router import route_event

    if _deps is None:
        _init_deps()
    assert _deps is not None

    records = event.get("Records", [])
    processed = failed = 0
    for record in records:
        try:
            change = parse_record(record)
            logger.info(
                json.dumps({
                    "event": "change_received",
                    "table": change.table,
                    "eventName": change.event_name,
                    "key": change.key,
                })
            )
            if route_event(change, _deps):
                processed += 1
        except Exception:
            failed += 1
            logger.exception("Error processing record %s", record.get("eventID"))

    return {"processed": processed, "failed": failed}


def cleanup_handler(event: dict, context: Any = None) -> dict:
    """Run account cleanup for an operator request via API Gateway."""
    headers = event.get("headers") or {}
    expected_secret = os.environ.get("CLEANUP_SECRET", "")
    if expected_secret:
        received = headers.get("x-cleanup-secret", "")
        if received != expected_secret:
            logger.warning("Invalid cleanup secret")
            return {"statusCode": 403, "body": "Forbidden"}

    try:
        if _deps is None:
            _init_deps()

        from src.triggers.cleanup import run_cleanup

        assert _deps is not None
        result = run_cleanup(_deps)
    except Exception:
        logger.exception("Error running cleanup")
        return {
            "statusCode": 500,
            "body": json.dumps({"error": "Cleanup failed"}),
        }

    logger.info(
        json.dumps({"event": "cleanup_done", "deleted": len(result["deletedUids"])})
    )
    return {"statusCode": 200, "body": json.dumps(result)}
