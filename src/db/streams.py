"""Decoding of DynamoDB Streams records into change events."""

from __future__ import annotations

from dataclasses import dataclass

from boto3.dynamodb.types import TypeDeserializer

_deserializer = TypeDeserializer()


@dataclass
class ChangeEvent:
    """Before/after snapshots of one document plus its key."""

    table: str
    event_name: str
    key: str
    before: dict | None = None
    after: dict | None = None


def _decode_image(image: dict | None) -> dict | None:
    if not image:
        return None
    return {name: _deserializer.deserialize(value) for name, value in image.items()}


def table_from_arn(arn: str) -> str:
    """arn:aws:dynamodb:<region>:<acct>:table/<name>/stream/<ts> -> <name>"""
    if ":table/" not in arn:
        return ""
    return arn.split(":table/", 1)[1].split("/", 1)[0]


def parse_record(record: dict) -> ChangeEvent:
    """Turn a raw stream record into a ChangeEvent.

    Requires the stream view type NEW_AND_OLD_IMAGES. The document key is
    the single key attribute (``userId`` or ``gameId``).
    """
    data = record.get("dynamodb", {})
    keys = _decode_image(data.get("Keys")) or {}
    if len(keys) != 1:
        raise ValueError(f"Expected a single key attribute, got {sorted(keys)}")
    key = str(next(iter(keys.values())))
    return ChangeEvent(
        table=table_from_arn(record.get("eventSourceARN", "")),
        event_name=record.get("eventName", ""),
        key=key,
        before=_decode_image(data.get("OldImage")),
        after=_decode_image(data.get("NewImage")),
    )
