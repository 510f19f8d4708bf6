"""Chat message filtering, pagination parameters and relay classification."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from agentcrew.errors import APIError

TYPE_USER_MESSAGE = "user_message"
TYPE_LEADER_RESPONSE = "leader_response"
TYPE_ACTIVITY_EVENT = "activity_event"
TYPE_CONTAINER_VALIDATION = "container_validation"
TYPE_SKILL_STATUS = "skill_status"
TYPE_SYSTEM_COMMAND = "system_command"

# Types shown in the chat history by default. "task_result" is kept so that
# records stored before leader responses were relayed still appear.
CHAT_MESSAGE_TYPES: tuple[str, ...] = (
    TYPE_USER_MESSAGE,
    TYPE_LEADER_RESPONSE,
    "task_result",
)

MESSAGES_DEFAULT_LIMIT = 100
MESSAGES_MAX_LIMIT = 500
ACTIVITY_DEFAULT_LIMIT = 50
ACTIVITY_MAX_LIMIT = 200

INVALID_BEFORE_MESSAGE = "invalid 'before' timestamp, use RFC3339 format"

# Message types the relay saves, mapped to the type stored in the log.
_RELAYED_TYPES = {
    TYPE_LEADER_RESPONSE: TYPE_LEADER_RESPONSE,
    TYPE_ACTIVITY_EVENT: TYPE_ACTIVITY_EVENT,
    TYPE_CONTAINER_VALIDATION: TYPE_CONTAINER_VALIDATION,
    TYPE_SKILL_STATUS: TYPE_SKILL_STATUS,
}

_RFC3339 = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d{1,9}))?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})"
)

_INTEGER = re.compile(r"[+-]?\d+")


def split_csv(s: str) -> list[str]:
    """Split a comma-separated string into trimmed, non-empty parts."""
    return [part.strip() for part in s.split(",") if part.strip()]


def relay_message_type(message_type: str) -> Optional[str]:
    """Return the log type under which a relayed message is saved.

    Returns None for messages the relay does not save, such as user
    messages (saved by the chat endpoint) and internal system commands.
    """
    return _RELAYED_TYPES.get(message_type)


def _parse_zone(zone: str) -> timezone:
    if zone == "Z":
        return timezone.utc
    sign = -1 if zone[0] == "-" else 1
    hours, minutes = int(zone[1:3]), int(zone[4:6])
    if minutes >= 60:
        raise ValueError("zone minutes out of range")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_before(value: str) -> datetime:
    """Parse an RFC 3339 timestamp (with optional fractional seconds).

    Fractions finer than a microsecond are truncated. Raises an APIError
    with status 400 when the value is not a valid timestamp.
    """
    match = _RFC3339.fullmatch(value)
    if match is None:
        raise APIError(400, INVALID_BEFORE_MESSAGE)
    fraction = match.group("fraction") or ""
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    try:
        return datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            microsecond,
            tzinfo=_parse_zone(match.group("zone")),
        )
    except ValueError as exc:
        raise APIError(400, INVALID_BEFORE_MESSAGE) from exc


def message_limit(
    requested: Union[str, int, None],
    default: int = MESSAGES_DEFAULT_LIMIT,
    maximum: int = MESSAGES_MAX_LIMIT,
) -> int:
    """Return the page size for a listing.

    A missing or non-integer value gives the default; anything above the
    maximum is capped to it.
    """
    if isinstance(requested, bool) or requested is None:
        limit = default
    elif isinstance(requested, int):
        limit = requested
    elif _INTEGER.fullmatch(requested):
        limit = int(requested)
    else:
        limit = default
    return min(limit, maximum)