"""DynamoDB repository implementations for production."""

from __future__ import annotations

import os

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.db.repository import StoreError, VersionConflictError
from src.utils.constants import (
    COLLECTION_FRIENDS,
    COLLECTION_INVITATIONS,
    COLLECTION_MANAGERS,
    COLLECTION_USERS,
    DEFAULT_TABLE_PREFIX,
    TABLE_SUFFIXES,
    doc_path,
)


# Initialize DynamoDB resource at module level for Lambda warm starts
_dynamodb = None
_prefix = os.environ.get("DYNAMODB_TABLE_PREFIX", DEFAULT_TABLE_PREFIX)


def _get_dynamodb():
    global _dynamodb
    if _dynamodb is None:
        _dynamodb = boto3.resource("dynamodb")
    return _dynamodb


def table_name(collection: str) -> str:
    return f"{_prefix}_{TABLE_SUFFIXES[collection]}"


def _is_conditional_failure(e: ClientError) -> bool:
    return e.response["Error"]["Code"] == "ConditionalCheckFailedException"


def _version_condition(expected: int, require_item: bool) -> str:
    if expected == 0:
        cond = "(attribute_not_exists(#v) OR #v = :v)"
    else:
        cond = "#v = :v"
    if require_item:
        cond = f"attribute_exists(userId) AND {cond}"
    return cond


class _Repository:
    """Table handle plus error translation shared by all repositories."""

    collection = ""

    def __init__(self, name: str | None = None) -> None:
        self._table_name = name or table_name(self.collection)
        self._table = _get_dynamodb().Table(self._table_name)

    def _path(self, key: str) -> str:
        return doc_path(self.collection, key)

    def _get_item(self, user_id: str) -> dict | None:
        try:
            response = self._table.get_item(Key={"userId": user_id})
        except (BotoCoreError, ClientError) as e:
            raise StoreError(self._path(user_id), str(e)) from e
        return response.get("Item")

    def _delete_item(self, user_id: str) -> None:
        try:
            self._table.delete_item(Key={"userId": user_id})
        except (BotoCoreError, ClientError) as e:
            raise StoreError(self._path(user_id), str(e)) from e

    def _update_list(
        self, user_id: str, attribute: str, values: list[str], expected: int, require_item: bool
    ) -> None:
        try:
            self._table.update_item(
                Key={"userId": user_id},
                UpdateExpression=f"SET {attribute} = :items, #v = :next",
                ConditionExpression=_version_condition(expected, require_item),
                ExpressionAttributeNames={"#v": "version"},
                ExpressionAttributeValues={
                    ":items": values,
                    ":v": expected,
                    ":next": expected + 1,
                },
            )
        except ClientError as e:
            if _is_conditional_failure(e):
                raise VersionConflictError(
                    self._path(user_id), f"expected version {expected}"
                ) from e
            raise StoreError(self._path(user_id), str(e)) from e
        except BotoCoreError as e:
            raise StoreError(self._path(user_id), str(e)) from e

    def _scan_user_ids(self, **kwargs) -> list[str]:
        """Scan the whole table (following LastEvaluatedKey) for userId keys."""
        names = {"#k": "userId", **kwargs.pop("ExpressionAttributeNames", {})}
        params = {"ProjectionExpression": "#k", "ExpressionAttributeNames": names, **kwargs}
        user_ids: list[str] = []
        while True:
            try:
                response = self._table.scan(**params)
            except (BotoCoreError, ClientError) as e:
                raise StoreError(self.collection, str(e)) from e
            user_ids.extend(item["userId"] for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return user_ids
            params["ExclusiveStartKey"] = last_key


class DynamoDBUserRepository(_Repository):
    collection = COLLECTION_USERS

    def get_user(self, user_id: str) -> dict | None:
        return self._get_item(user_id)

    def delete_user(self, user_id: str) -> None:
        self._delete_item(user_id)

    def find_user_ids_by_name(self, name: str) -> list[str]:
        return self._scan_user_ids(
            FilterExpression="#n = :n",
            ExpressionAttributeNames={"#n": "name"},
            ExpressionAttributeValues={":n": name},
        )

    def list_user_ids(self) -> set[str]:
        return set(self._scan_user_ids())


class DynamoDBFriendsRepository(_Repository):
    collection = COLLECTION_FRIENDS

    def get_friends(self, user_id: str) -> list[str] | None:
        item = self._get_item(user_id)
        if item is None:
            return None
        return list(item.get("friends", []))

    def delete_friends(self, user_id: str) -> None:
        self._delete_item(user_id)


class DynamoDBInvitationsRepository(_Repository):
    collection = COLLECTION_INVITATIONS

    def get_invitations(self, user_id: str) -> dict | None:
        item = self._get_item(user_id)
        if item is None:
            return None
        return {
            "userId": user_id,
            "invitations": list(item.get("invitations", [])),
            "version": int(item.get("version", 0)),
        }

    def save_invitations(self, doc: dict) -> None:
        self._update_list(
            doc["userId"],
            "invitations",
            doc["invitations"],
            doc.get("version", 0),
            require_item=True,
        )

    def delete_invitations(self, user_id: str) -> None:
        self._delete_item(user_id)


class DynamoDBManagerRepository(_Repository):
    collection = COLLECTION_MANAGERS

    def get_manager(self, user_id: str) -> dict | None:
        item = self._get_item(user_id)
        if item is None:
            return None
        return {
            "userId": user_id,
            "games": list(item.get("games", [])),
            "version": int(item.get("version", 0)),
        }

    def save_manager(self, doc: dict) -> None:
        self._update_list(
            doc["userId"],
            "games",
            doc["games"],
            doc.get("version", 0),
            require_item=False,
        )

    def delete_manager(self, user_id: str) -> None:
        self._delete_item(user_id)
