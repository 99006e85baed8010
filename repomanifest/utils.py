"""
Format predicates and timestamp helpers shared by the manifest schema.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

SEMVER_PATTERN = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")

# Seconds are required; fractional seconds and offset are optional parts
# of the grammar, but a zone designator (Z or +HH:MM) must be present.
ISO_DATETIME_PATTERN = re.compile(
    r"^(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})"
    r"T(?P<time>[0-9]{2}:[0-9]{2}:[0-9]{2})"
    r"(?:\.[0-9]+)?"
    r"(?P<zone>Z|[+-][0-9]{2}:[0-9]{2})$"
)

WORKSPACE_PATTERN = re.compile(r"^[a-z0-9-]+(/[a-z0-9-]+)*$")

_URL_ADAPTER = TypeAdapter(AnyUrl)


def is_semver(value: str) -> bool:
    """Check for a MAJOR.MINOR.PATCH version of non-negative integers."""
    return bool(SEMVER_PATTERN.fullmatch(value))


def is_iso_datetime(value: str) -> bool:
    """
    Check for an ISO-8601 datetime with an explicit zone.

    Accepts "2024-05-01T12:30:00Z", "2024-05-01T12:30:00.123Z" and
    "2024-05-01T12:30:00+02:00". Calendar values are checked too, so
    "2024-02-30T00:00:00Z" is rejected.
    """
    match = ISO_DATETIME_PATTERN.fullmatch(value)
    if not match:
        return False
    try:
        datetime.strptime(f"{match.group('date')}T{match.group('time')}", "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return False
    zone = match.group('zone')
    if zone != 'Z':
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours > 23 or minutes > 59:
            return False
    return True


def is_url(value: str) -> bool:
    """
    Check that value is an absolute URL with a scheme and a host.

    Only checks; callers keep the original string, since AnyUrl
    normalizes (e.g. appends a trailing slash to a bare host).
    """
    # The URL parser strips or percent-encodes whitespace instead of refusing it
    if not value or any(c.isspace() for c in value):
        return False
    try:
        url = _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return bool(url.host)


def is_workspace_path(value: str) -> bool:
    """Check for a lowercase relative path without empty segments."""
    return bool(WORKSPACE_PATTERN.fullmatch(value))


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as an ISO-8601 UTC string with millisecond precision.

    Example: "2024-05-01T12:30:00.123Z"
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    millis = moment.microsecond // 1000
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"
