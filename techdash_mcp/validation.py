"""Shared coercion helpers for hours and status values.

Stored data has gone through several spellings of the status taxonomy
("Partially approved", "Awaiting customer contact", boolean ``approved``
flags on tasks). Everything funnels through the normalisers below so the
rest of the package only ever sees the canonical enums.
"""

import math
from typing import Any

from techdash_mcp.enums import RequestStatus, TaskStatus

_TASK_STATUS_ALIASES: dict[str, TaskStatus] = {
    "pending": TaskStatus.PENDING,
    "authorised": TaskStatus.AUTHORISED,
    "authorized": TaskStatus.AUTHORISED,
    "approved": TaskStatus.AUTHORISED,
    "declined": TaskStatus.DECLINED,
    "awaiting customer response": TaskStatus.AWAITING_CUSTOMER_RESPONSE,
    "awaiting customer contact": TaskStatus.AWAITING_CUSTOMER_RESPONSE,
    "awaiting_customer_response": TaskStatus.AWAITING_CUSTOMER_RESPONSE,
}

_REQUEST_STATUS_ALIASES: dict[str, RequestStatus] = {
    **{key: RequestStatus(value.value) for key, value in _TASK_STATUS_ALIASES.items()},
    "partially authorised": RequestStatus.PARTIALLY_AUTHORISED,
    "partially authorized": RequestStatus.PARTIALLY_AUTHORISED,
    "partially approved": RequestStatus.PARTIALLY_AUTHORISED,
    "partially_authorised": RequestStatus.PARTIALLY_AUTHORISED,
}


def coerce_hours(value: Any) -> float:
    """
    Coerce a time estimate to a non-negative float.

    Anything that is not a finite, non-negative number (None, booleans,
    unparseable strings, NaN, negatives) becomes 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(hours) or hours < 0:
        return 0.0
    return hours


def _alias_key(value: str) -> str:
    return " ".join(value.strip().lower().split())


def normalize_task_status(value: Any) -> TaskStatus | str:
    """
    Map a stored task status onto TaskStatus.

    Legacy booleans (the old ``approved`` flag) map to authorised/pending.
    Unrecognised strings are returned unchanged so aggregation can skip them.
    """
    if isinstance(value, TaskStatus):
        return value
    if isinstance(value, bool):
        return TaskStatus.AUTHORISED if value else TaskStatus.PENDING
    if value is None:
        return TaskStatus.PENDING
    if isinstance(value, str):
        return _TASK_STATUS_ALIASES.get(_alias_key(value), value)
    return str(value)


def normalize_request_status(value: Any) -> RequestStatus | str:
    """Map a stored request status onto RequestStatus, keeping unknown strings."""
    if isinstance(value, RequestStatus):
        return value
    if value is None:
        return RequestStatus.PENDING
    if isinstance(value, str):
        return _REQUEST_STATUS_ALIASES.get(_alias_key(value), value)
    return str(value)


def status_label(status: TaskStatus | RequestStatus | str) -> str:
    """Display label for a status, falling back to the raw value."""
    if isinstance(status, (TaskStatus, RequestStatus)):
        return status.label
    return str(status)


def status_value(status: TaskStatus | RequestStatus | str) -> str:
    """Stored form of a status: the enum value, or the raw string."""
    if isinstance(status, (TaskStatus, RequestStatus)):
        return status.value
    return str(status)
