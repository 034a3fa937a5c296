"""Labour-hour aggregation for requests and dashboards."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable
from typing import TYPE_CHECKING

from techdash_mcp.enums import OPEN_REQUEST_STATUSES, RequestStatus, TaskStatus
from techdash_mcp.models.billing import ItemisedBilling
from techdash_mcp.models.report import LabourSummary, RequestLabour
from techdash_mcp.validation import coerce_hours, status_value

if TYPE_CHECKING:
    from techdash_mcp.models.request import RequestModel


def total_hours(request: RequestModel, filter_status: TaskStatus | RequestStatus | None = None) -> float:
    """
    Total labour hours for a request, optionally restricted to one status.

    Itemised requests sum the tasks whose status equals ``filter_status``
    (every task when no filter is given). A flat-rate request has no tasks
    to filter, so its whole figure counts only when the request's own
    status equals ``filter_status``.

    Negative or non-numeric hours count as zero. Statuses are compared by
    value, so unrecognised stored strings never match a filter.

    Args:
        request: The request to total
        filter_status: Optional status to restrict the sum to

    Returns:
        Non-negative number of hours
    """
    wanted = status_value(filter_status) if filter_status is not None else None
    billing = request.billing

    if isinstance(billing, ItemisedBilling):
        return math.fsum(
            coerce_hours(t.estimated_hours)
            for t in billing.tasks
            if wanted is None or status_value(t.status) == wanted
        )

    if wanted is not None and status_value(request.status) != wanted:
        return 0.0
    return coerce_hours(billing.hours)


def approved_hours(requests: Iterable[RequestModel]) -> float:
    """Hours authorised across ``requests``."""
    return math.fsum(total_hours(r, TaskStatus.AUTHORISED) for r in requests)


def is_open(request: RequestModel) -> bool:
    """Whether a request still counts towards requested hours."""
    return status_value(request.status) in {s.value for s in OPEN_REQUEST_STATUSES}


def requested_hours(requests: Iterable[RequestModel]) -> float:
    """
    Hours still awaiting a final decision across ``requests``.

    Fully authorised requests are left out so their hours are not counted
    against both "approved" and "requested".
    """
    return math.fsum(total_hours(r) for r in requests if is_open(r))


def summarize_labour(requests: Iterable[RequestModel]) -> LabourSummary:
    """
    Build dashboard totals, per-request figures and status counts.

    A request that is no longer open shows zero requested hours, so the rows
    add up to the headline figures.
    """
    requests = list(requests)
    rows = [
        RequestLabour(
            request_id=r.id,
            registration=r.registration,
            status=status_value(r.status),
            approved_hours=total_hours(r, TaskStatus.AUTHORISED),
            requested_hours=total_hours(r) if is_open(r) else 0.0,
        )
        for r in requests
    ]
    counts = Counter(status_value(r.status) for r in requests)
    return LabourSummary(
        approved_hours=approved_hours(requests),
        requested_hours=requested_hours(requests),
        request_count=len(requests),
        status_counts=dict(sorted(counts.items())),
        requests=rows,
    )
