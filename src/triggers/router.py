"""Record router: dispatches stream change events to triggers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.db.dynamodb import table_name
from src.db.streams import ChangeEvent
from src.utils.constants import (
    COLLECTION_FRIENDS,
    COLLECTION_GAMES,
    EVENT_INSERT,
    EVENT_MODIFY,
    TABLE_SUFFIXES,
)

if TYPE_CHECKING:
    from src.triggers.deps import Deps

logger = logging.getLogger("friendplay.router")


def _collection_of(table: str) -> str | None:
    for collection in TABLE_SUFFIXES:
        if table == table_name(collection):
            return collection
    return None


def route_event(event: ChangeEvent, deps: Deps) -> bool:
    """Run the trigger for a change event. Returns False if none applies."""
    from src.triggers.friends import on_friends_list_update
    from src.triggers.games import on_game_create, on_game_update

    collection = _collection_of(event.table)

    if collection == COLLECTION_FRIENDS and event.event_name == EVENT_MODIFY:
        on_friends_list_update(event.before, event.after, event.key, deps)
        return True

    if collection == COLLECTION_GAMES:
        if event.event_name == EVENT_INSERT and event.after is not None:
            on_game_create(event.after, event.key, deps)
            return True
        if event.event_name == EVENT_MODIFY:
            on_game_update(event.before, event.after, event.key, deps)
            return True

    logger.debug("Ignoring %s on %s", event.event_name, event.table)
    return False
