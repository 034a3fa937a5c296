"""Status derivation, labour aggregation and request actions."""

from techdash_mcp.engine.actions import (
    approve_request,
    change_task_status,
    decline_request,
    edit_task,
    set_request_status,
    submit_request,
    with_tasks,
)
from techdash_mcp.engine.labour import (
    approved_hours,
    is_open,
    requested_hours,
    summarize_labour,
    total_hours,
)
from techdash_mcp.engine.status import approve_all, decline_all, derive_status, set_task_status

__all__ = [
    # Status derivation
    "derive_status",
    "approve_all",
    "decline_all",
    "set_task_status",
    # Labour aggregation
    "total_hours",
    "approved_hours",
    "requested_hours",
    "is_open",
    "summarize_labour",
    # Request actions
    "submit_request",
    "with_tasks",
    "change_task_status",
    "edit_task",
    "set_request_status",
    "approve_request",
    "decline_request",
]
