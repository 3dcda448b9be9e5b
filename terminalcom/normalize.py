"""Timestamp normalization for decoded API responses.

The service encodes times as ``YYYY-MM-DDTHH:MM:SS.sssZ`` strings. Only
mapping values are converted: sequences are returned untouched, including any
mappings nested inside them.
"""

import re
from datetime import UTC, datetime
from typing import Any

TIMESTAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z")
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def is_timestamp(value: Any) -> bool:
    return isinstance(value, str) and TIMESTAMP_PATTERN.fullmatch(value) is not None


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=UTC)


def normalize_timestamps(value: Any) -> Any:
    if not isinstance(value, dict):
        return value

    normalized: dict[str, Any] = {}
    for key, item in value.items():
        if isinstance(item, dict):
            normalized[key] = normalize_timestamps(item)
        elif is_timestamp(item):
            try:
                normalized[key] = parse_timestamp(item)
            except ValueError:
                # Shaped like a timestamp but not a real date (e.g. month 13).
                normalized[key] = item
        else:
            normalized[key] = item
    return normalized
