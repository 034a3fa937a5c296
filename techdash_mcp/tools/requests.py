"""Request MCP tool definitions for Tech Dash."""

import json
import logging

from mcp.types import ToolAnnotations
from pydantic import ValidationError

from techdash_mcp.engine.actions import (
    approve_request,
    change_task_status,
    decline_request,
    edit_task,
    set_request_status,
    submit_request,
)
from techdash_mcp.enums import ResponseFormat
from techdash_mcp.exceptions import InvalidArgumentError, RequestNotFoundError, TechDashError
from techdash_mcp.models.inputs import (
    ApproveAllInput,
    CreateRequestInput,
    DeclineAllInput,
    DeleteRequestInput,
    EditTaskInput,
    GetRequestInput,
    ListRequestsInput,
    SetRequestStatusInput,
    SetTaskStatusInput,
)
from techdash_mcp.models.request import RequestModel
from techdash_mcp.server import mcp
from techdash_mcp.utils.formatters import (
    _format_request_concise,
    _format_request_markdown,
    _format_requests_concise,
    _format_requests_markdown,
    _request_to_dict,
)
from techdash_mcp.utils.store import get_store
from techdash_mcp.validation import status_label

logger = logging.getLogger(__name__)


def _error_message(e: Exception) -> str:
    """Turn an engine/store/validation error into a tool response."""
    if isinstance(e, RequestNotFoundError):
        return (
            f"Error: Request {e.request_id} not found.\n"
            f"Tip: Use techdash_list_requests to find valid request IDs."
        )
    if isinstance(e, InvalidArgumentError):
        return f"Error: {e}"
    logger.warning("Tool call failed: %s", e)
    return f"Error: {type(e).__name__} - {e}"


def _render_request(request: RequestModel, response_format: ResponseFormat = ResponseFormat.MARKDOWN) -> str:
    if response_format == ResponseFormat.JSON:
        return json.dumps(_request_to_dict(request), indent=2)
    if response_format == ResponseFormat.CONCISE:
        return _format_request_concise(request)
    return _format_request_markdown(request)


def _apply_and_save(request_id: int, action) -> RequestModel:
    """Load a request, apply a pure action to it and persist the result."""
    store = get_store()
    updated = action(store.get(request_id))
    store.save(updated)
    return updated


@mcp.tool(
    name="techdash_list_requests",
    annotations=ToolAnnotations(
        title="List Requests",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def techdash_list_requests(params: ListRequestsInput) -> str:
    """
    List authorisation requests with their status and labour hours.

    USE THIS WHEN:
    - Reviewing which jobs are waiting for a decision
    - Finding the ID of a request before acting on it
    - Filtering requests by status or registration

    DO NOT USE WHEN:
    - You have a specific request ID → use techdash_get_request instead
    - You only need hour totals → use techdash_labour_summary instead

    Args:
        params: ListRequestsInput containing status, registration, limit, and response_format

    Returns:
        Formatted list of requests (markdown, concise or JSON)

    Examples:
        - All requests: params with default values
        - Requests still pending: params with status="pending"
        - One vehicle: params with registration="AB12CDE"
    """
    try:
        requests = get_store().list(params.status)
    except (TechDashError, ValidationError) as e:
        return _error_message(e)

    if params.registration:
        wanted = params.registration.replace(" ", "").upper()
        requests = [r for r in requests if r.registration.replace(" ", "").upper() == wanted]

    total_count = len(requests)
    if params.limit and len(requests) > params.limit:
        requests = requests[: params.limit]

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {"total": total_count, "count": len(requests), "requests": [_request_to_dict(r) for r in requests]},
            indent=2,
        )

    title = "Requests"
    if params.status is not None:
        title = f"{params.status.label} Requests"
    if params.registration:
        title += f" for {params.registration.upper()}"

    if params.response_format == ResponseFormat.CONCISE:
        return _format_requests_concise(requests, params.status.value if params.status else None)

    return _format_requests_markdown(requests, title)


@mcp.tool(
    name="techdash_get_request",
    annotations=ToolAnnotations(
        title="Get Request Details",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def techdash_get_request(params: GetRequestInput) -> str:
    """
    Retrieve one request with its tasks, status and hour totals.

    Task positions shown here (0, 1, 2, ...) are the task_index values
    expected by techdash_set_task_status and techdash_edit_task.

    Args:
        params: GetRequestInput containing request_id and response_format

    Returns:
        Detailed request information (markdown, concise or JSON)

    Examples:
        - Get request #5: params with request_id=5
        - Get request as JSON: params with request_id=5, response_format="json"
    """
    try:
        request = get_store().get(params.request_id)
    except (TechDashError, ValidationError) as e:
        return _error_message(e)

    return _render_request(request, params.response_format)


@mcp.tool(
    name="techdash_create_request",
    annotations=ToolAnnotations(
        title="Submit Request",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def techdash_create_request(params: CreateRequestInput) -> str:
    """
    Submit a new repair authorisation request.

    A request is billed either by its tasks or by one overall labour figure.
    When tasks are given, overall_labour_hours is ignored. New requests and
    all of their tasks always start as pending.

    USE THIS WHEN:
    - A workshop needs approval for work on a vehicle

    DO NOT USE WHEN:
    - Changing an existing request → use techdash_set_task_status or techdash_edit_task

    Args:
        params: CreateRequestInput containing job id, registration, work description, and tasks or overall hours

    Returns:
        Confirmation message with the created request ID

    Examples:
        - Flat-rate job: params with vehicle_job_id="4471", registration="AB12CDE",
          work_description="Annual service", overall_labour_hours=2.0
        - Itemised job: params with tasks=[{"description": "Replace pads", "estimated_hours": 0.5,
          "parts_required": true}, {"description": "Check discs", "estimated_hours": 0.3}]
    """
    try:
        draft = RequestModel.model_validate(
            {
                "vehicle_job_id": params.vehicle_job_id,
                "registration": params.registration,
                "work_description": params.work_description,
                "tasks": [t.model_dump() for t in params.tasks],
                "overall_labour_hours": params.overall_labour_hours,
            }
        )
        created = get_store().create(submit_request(draft))
    except (TechDashError, ValidationError) as e:
        return _error_message(e)

    return f"Request {created.id} created successfully.\n{_format_request_concise(created)}"


@mcp.tool(
    name="techdash_set_task_status",
    annotations=ToolAnnotations(
        title="Set Task Status",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def techdash_set_task_status(params: SetTaskStatusInput) -> str:
    """
    Authorise, decline or park a single task; the request status is re-derived.

    The request becomes declined only when every task is declined, awaiting
    customer response when any task is, authorised when every task is, and
    partially authorised when at least one task is authorised.

    DO NOT USE WHEN:
    - Every task gets the same decision → use techdash_approve_all or techdash_decline_all
    - The request has no tasks → use techdash_set_request_status

    Args:
        params: SetTaskStatusInput containing request_id, task_index, and status

    Returns:
        Confirmation message with the new request status

    Examples:
        - Authorise the first task of #5: params with request_id=5, task_index=0, status="authorised"
        - Wait for the customer: params with request_id=5, task_index=1, status="awaiting_customer_response"
    """
    try:
        updated = _apply_and_save(
            params.request_id, lambda r: change_task_status(r, params.task_index, params.status)
        )
    except (TechDashError, ValidationError) as e:
        return _error_message(e)

    return (
        f"Task {params.task_index} of request {params.request_id} set to {params.status.label}.\n"
        f"Request status: {status_label(updated.status)}"
    )


@mcp.tool(
    name="techdash_edit_task",
    annotations=ToolAnnotations(
        title="Edit Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def techdash_edit_task(params: EditTaskInput) -> str:
    """
    Change a task's description, time estimate or parts flag.

    Negative or non-numeric time estimates are stored as 0.

    Args:
        params: EditTaskInput containing request_id, task_index, and the fields to change

    Returns:
        Confirmation message with the updated request

    Examples:
        - Re-estimate: params with request_id=5, task_index=0, estimated_hours=1.2
        - Flag parts: params with request_id=5, task_index=1, parts_required=true
    """
    try:
        updated = _apply_and_save(
            params.request_id,
            lambda r: edit_task(
                r,
                params.task_index,
                description=params.description,
                estimated_hours=params.estimated_hours,
                parts_required=params.parts_required,
            ),
        )
    except (TechDashError, ValidationError) as e:
        return _error_message(e)

    return f"Task {params.task_index} of request {params.request_id} updated.\n{_format_request_concise(updated)}"


@mcp.tool(
    name="techdash_set_request_status",
    annotations=ToolAnnotations(
        title="Set Request Status",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def techdash_set_request_status(params: SetRequestStatusInput) -> str:
    """
    Set the status of a request billed with an overall labour figure.

    Requests with tasks derive their status from the tasks and are rejected
    here; change their task statuses instead.

    Args:
        params: SetRequestStatusInput containing request_id and status

    Returns:
        Confirmation message

    Examples:
        - Authorise flat-rate #7: params with request_id=7, status="authorised"
    """
    try:
        _apply_and_save(params.request_id, lambda r: set_request_status(r, params.status))
    except (TechDashError, ValidationError) as e:
        return _error_message(e)

    return f"Request {params.request_id} set to {params.status.label}."


@mcp.tool(
    name="techdash_approve_all",
    annotations=ToolAnnotations(
        title="Approve All",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def techdash_approve_all(params: ApproveAllInput) -> str:
    """
    Authorise every task of a request (or its overall figure).

    Args:
        params: ApproveAllInput containing the request_id

    Returns:
        Confirmation message with the new request status

    Examples:
        - Approve request #5: params with request_id=5
    """
    try:
        updated = _apply_and_save(params.request_id, approve_request)
    except (TechDashError, ValidationError) as e:
        return _error_message(e)

    return f"Request {params.request_id} approved.\nRequest status: {status_label(updated.status)}"


@mcp.tool(
    name="techdash_decline_all",
    annotations=ToolAnnotations(
        title="Decline All",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def techdash_decline_all(params: DeclineAllInput) -> str:
    """
    Decline every task of a request (or its overall figure).

    Args:
        params: DeclineAllInput containing the request_id

    Returns:
        Confirmation message with the new request status

    Examples:
        - Decline request #5: params with request_id=5
    """
    try:
        updated = _apply_and_save(params.request_id, decline_request)
    except (TechDashError, ValidationError) as e:
        return _error_message(e)

    return f"Request {params.request_id} declined.\nRequest status: {status_label(updated.status)}"


@mcp.tool(
    name="techdash_delete_request",
    annotations=ToolAnnotations(
        title="Delete Request",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def techdash_delete_request(params: DeleteRequestInput) -> str:
    """
    Delete a request and all of its tasks. This cannot be undone.

    Args:
        params: DeleteRequestInput containing the request_id

    Returns:
        Confirmation message

    Examples:
        - Delete request #5: params with request_id=5
    """
    try:
        get_store().delete(params.request_id)
    except (TechDashError, ValidationError) as e:
        return _error_message(e)

    return f"Request {params.request_id} deleted."
