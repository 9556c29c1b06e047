"""
Shared value helpers: identifiers, stored list decoding, timestamp rendering.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional


def generate_id() -> str:
    """Random UUID4 string used as the primary key of every new row."""
    return str(uuid.uuid4())


def parse_list(raw: Optional[str]) -> List[str]:
    """
    Decode a stored list of strings.

    Accepted encodings, tried in order:
        '["http://a.jpg", "http://b.jpg"]'   JSON array (non-strings dropped)
        '"http://a.jpg"'                     JSON string
        'http://a.jpg'                       plain string
        'http://a.jpg, http://b.jpg'         comma separated

    Args:
        raw: Stored text, may be None or empty

    Returns:
        Ordered list of strings
    """
    if not raw:
        return []

    trimmed = raw.strip()

    try:
        parsed = json.loads(trimmed)
    except ValueError:
        pass
    else:
        if isinstance(parsed, list):
            return [item for item in parsed if isinstance(item, str)]
        if isinstance(parsed, str):
            return [parsed]

    return [part.strip() for part in trimmed.split(",") if part.strip()]


def coerce_list(raw: Any) -> List[str]:
    """
    Normalize the value a driver returns for a stored list column.

    Depending on the backend and column type this can already be a list,
    raw bytes, a string, or NULL.
    """
    if raw is None:
        return []
    if isinstance(raw, list):
        return [item for item in raw if isinstance(item, str)]
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        return parse_list(raw)
    return []


def encode_list(values: List[str]) -> str:
    return json.dumps(values)


def utcnow() -> datetime:
    # DATETIME columns hold naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """
    Render a timestamp as ISO-8601 UTC with millisecond precision, e.g.
    2024-05-01T08:30:00.000Z. Naive values are taken to be UTC already.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
