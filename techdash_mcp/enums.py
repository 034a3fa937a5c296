"""Enums for Tech Dash MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # One line per request
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class TaskStatus(str, Enum):
    """Authorisation status of a single billable task."""

    PENDING = "pending"
    AUTHORISED = "authorised"
    DECLINED = "declined"
    AWAITING_CUSTOMER_RESPONSE = "awaiting_customer_response"

    @property
    def label(self) -> str:
        return _LABELS[self.value]


class RequestStatus(str, Enum):
    """Overall authorisation status of a repair request."""

    PENDING = "pending"
    AUTHORISED = "authorised"
    PARTIALLY_AUTHORISED = "partially_authorised"
    DECLINED = "declined"
    AWAITING_CUSTOMER_RESPONSE = "awaiting_customer_response"

    @property
    def label(self) -> str:
        return _LABELS[self.value]


_LABELS = {
    "pending": "Pending",
    "authorised": "Authorised",
    "partially_authorised": "Partially authorised",
    "declined": "Declined",
    "awaiting_customer_response": "Awaiting customer response",
}

# Requests still counted towards "hours requested" on the dashboard.
OPEN_REQUEST_STATUSES = frozenset(
    {
        RequestStatus.PENDING,
        RequestStatus.DECLINED,
        RequestStatus.AWAITING_CUSTOMER_RESPONSE,
        RequestStatus.PARTIALLY_AUTHORISED,
    }
)
