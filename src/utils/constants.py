"""Shared constants for FriendPlay triggers."""

# Collections (document path prefixes, also table suffixes)
COLLECTION_USERS = "users"
COLLECTION_FRIENDS = "friends"
COLLECTION_INVITATIONS = "invitations"
COLLECTION_MANAGERS = "managers"
COLLECTION_GAMES = "games"

TABLE_SUFFIXES = {
    COLLECTION_USERS: "Users",
    COLLECTION_FRIENDS: "Friends",
    COLLECTION_INVITATIONS: "Invitations",
    COLLECTION_MANAGERS: "Managers",
    COLLECTION_GAMES: "Games",
}

DEFAULT_TABLE_PREFIX = "FriendPlay"

# Stream event names (DynamoDB Streams)
EVENT_INSERT = "INSERT"
EVENT_MODIFY = "MODIFY"

# Game state codes: first char is the acting player, second the action
PLAYER_ONE = "1"
PLAYER_TWO = "2"
ACTION_DECLINED = "D"
ACTION_PLAYED = "P"
ACTION_WON = "W"
ACTION_LOST = "L"

# Optimistic concurrency
MAX_APPEND_RETRIES = 3

# Identity directory
IDENTITY_PAGE_SIZE = 1000
IDENTITY_DELETE_BATCH = 1000  # Firebase Auth delete_users limit
DEFAULT_SYNTHETIC_ACCOUNT_NAME = "TestAccount"

# Push delivery policy
DEFAULT_CHANNEL_ID = "friendplay_notifications"
DEFAULT_CLICK_ACTION = "FLUTTER_NOTIFICATION_CLICK"
ANDROID_PRIORITY = "high"
ANDROID_VISIBILITY = "public"

# Notification payload types
PUSH_TYPE_INVITATION = "invitation"
PUSH_TYPE_GAME = "game"

# Friends propagation modes
PROPAGATE_ALL = "all"
PROPAGATE_LAST = "last"


def doc_path(collection: str, key: str) -> str:
    """Human-readable document path used in log lines."""
    return f"{collection}/{key}"
