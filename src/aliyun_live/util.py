"""Formatting helpers shared by request signing and URL generation."""

import uuid
from datetime import datetime, timezone
from urllib.parse import quote

ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def get_iso8601_timestamp(t: datetime) -> str:
    """
    Format a datetime as the UTC ISO 8601 string the API expects.

    Naive datetimes are taken to be UTC already.
    """
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc).strftime(ISO8601_FORMAT)


def percent_encode(value: str) -> str:
    """RFC 3986 encoding: everything except A-Z a-z 0-9 - _ . ~ is escaped."""
    return quote(str(value), safe="~")


def new_nonce() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def unix_timestamp(t: datetime) -> int:
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    return int(t.timestamp())
