"""
MCP Server for Tech Dash vehicle repair authorisation.

This server tracks repair authorisation requests submitted by a workshop:
listing and submitting requests, authorising or declining individual tasks
or whole jobs, and reporting approved and requested labour hours.
"""

# Re-export enums
from techdash_mcp.enums import OPEN_REQUEST_STATUSES, RequestStatus, ResponseFormat, TaskStatus

# Re-export models (before the engine: the request model derives its status through it)
from techdash_mcp.models import (
    ApproveAllInput,
    BillingMode,
    CreateRequestInput,
    DeclineAllInput,
    DeleteRequestInput,
    EditTaskInput,
    FlatRateBilling,
    GetRequestInput,
    ItemisedBilling,
    LabourSummary,
    LabourSummaryInput,
    ListRequestsInput,
    RequestLabour,
    RequestModel,
    SetRequestStatusInput,
    SetTaskStatusInput,
    TaskInput,
    TaskModel,
)

# Re-export the engine
from techdash_mcp.engine import (
    approve_all,
    approve_request,
    approved_hours,
    change_task_status,
    decline_all,
    decline_request,
    derive_status,
    edit_task,
    requested_hours,
    set_request_status,
    set_task_status,
    submit_request,
    summarize_labour,
    total_hours,
    with_tasks,
)
from techdash_mcp.exceptions import InvalidArgumentError, RequestNotFoundError, StoreError, TechDashError

# Re-export MCP server instance
from techdash_mcp.server import mcp

# Re-export tools
from techdash_mcp.tools import (
    techdash_approve_all,
    techdash_create_request,
    techdash_decline_all,
    techdash_delete_request,
    techdash_edit_task,
    techdash_get_request,
    techdash_labour_summary,
    techdash_list_requests,
    techdash_set_request_status,
    techdash_set_task_status,
)

# Re-export utilities (including private functions used by tests)
from techdash_mcp.utils import (
    RequestStore,
    _format_request_concise,
    _format_request_markdown,
    _format_requests_concise,
    _format_requests_markdown,
    _format_summary_concise,
    _format_summary_markdown,
    _parse_request,
    _parse_requests,
    _parse_task,
    get_store,
)

__all__ = [
    # Enums
    "ResponseFormat",
    "TaskStatus",
    "RequestStatus",
    "OPEN_REQUEST_STATUSES",
    # Domain models
    "TaskModel",
    "RequestModel",
    "BillingMode",
    "ItemisedBilling",
    "FlatRateBilling",
    # Input models
    "TaskInput",
    "ListRequestsInput",
    "GetRequestInput",
    "CreateRequestInput",
    "SetTaskStatusInput",
    "EditTaskInput",
    "SetRequestStatusInput",
    "ApproveAllInput",
    "DeclineAllInput",
    "DeleteRequestInput",
    "LabourSummaryInput",
    # Report models
    "RequestLabour",
    "LabourSummary",
    # Engine
    "derive_status",
    "approve_all",
    "decline_all",
    "set_task_status",
    "total_hours",
    "approved_hours",
    "requested_hours",
    "summarize_labour",
    "submit_request",
    "with_tasks",
    "change_task_status",
    "edit_task",
    "set_request_status",
    "approve_request",
    "decline_request",
    # Exceptions
    "TechDashError",
    "InvalidArgumentError",
    "StoreError",
    "RequestNotFoundError",
    # Store
    "RequestStore",
    "get_store",
    # Utility functions
    "_parse_task",
    "_parse_request",
    "_parse_requests",
    "_format_request_concise",
    "_format_request_markdown",
    "_format_requests_concise",
    "_format_requests_markdown",
    "_format_summary_concise",
    "_format_summary_markdown",
    # Request tools
    "techdash_list_requests",
    "techdash_get_request",
    "techdash_create_request",
    "techdash_set_task_status",
    "techdash_edit_task",
    "techdash_set_request_status",
    "techdash_approve_all",
    "techdash_decline_all",
    "techdash_delete_request",
    # Reporting tools
    "techdash_labour_summary",
    # MCP server instance
    "mcp",
]
