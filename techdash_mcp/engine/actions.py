"""Authoriser and workshop actions on a request.

Every action returns a new RequestModel; the input is never mutated.
Itemised requests get their status re-derived on the way out.
"""

from collections.abc import Sequence
from typing import Any

from techdash_mcp.engine.status import approve_all, decline_all, set_task_status
from techdash_mcp.enums import RequestStatus, TaskStatus
from techdash_mcp.exceptions import InvalidArgumentError
from techdash_mcp.models.request import RequestModel
from techdash_mcp.models.task import TaskModel


def _identity(request: RequestModel) -> dict[str, Any]:
    return {
        "id": request.id,
        "vehicle_job_id": request.vehicle_job_id,
        "registration": request.registration,
        "work_description": request.work_description,
        "status": request.status,
    }


def with_tasks(request: RequestModel, tasks: Sequence[TaskModel]) -> RequestModel:
    """
    Replace a request's tasks and re-derive its status.

    An empty list drops the request to flat-rate billing with no hours.
    """
    data = _identity(request)
    data["tasks"] = [t.model_dump() for t in tasks]
    return RequestModel.model_validate(data)


def submit_request(request: RequestModel) -> RequestModel:
    """Prepare a new request for storage: no id, everything pending."""
    data = _identity(request)
    data["id"] = None
    data["status"] = RequestStatus.PENDING
    data["tasks"] = [t.model_dump() | {"status": TaskStatus.PENDING} for t in request.tasks]
    data["overall_labour_hours"] = request.overall_labour_hours
    return RequestModel.model_validate(data)


def _require_tasks(request: RequestModel) -> list[TaskModel]:
    if not request.is_itemised:
        raise InvalidArgumentError(
            f"Request {request.id} is billed with an overall labour figure and has no tasks"
        )
    return request.tasks


def change_task_status(request: RequestModel, index: int, status: TaskStatus) -> RequestModel:
    """Set one task's status and re-derive the request status."""
    return with_tasks(request, set_task_status(_require_tasks(request), index, status))


def edit_task(
    request: RequestModel,
    index: int,
    description: str | None = None,
    estimated_hours: float | None = None,
    parts_required: bool | None = None,
) -> RequestModel:
    """Change the fields of one task. None leaves a field as it is."""
    tasks = [t.model_copy() for t in _require_tasks(request)]
    if not 0 <= index < len(tasks):
        raise InvalidArgumentError(f"Task index {index} out of range (request has {len(tasks)} task(s))")

    changes: dict[str, Any] = {}
    if description is not None:
        changes["description"] = description
    if estimated_hours is not None:
        changes["estimated_hours"] = estimated_hours
    if parts_required is not None:
        changes["parts_required"] = parts_required

    # Round-trip through validation so hours get coerced
    tasks[index] = TaskModel.model_validate(tasks[index].model_dump() | changes)
    return with_tasks(request, tasks)


def set_request_status(request: RequestModel, status: RequestStatus) -> RequestModel:
    """
    Set the status of a flat-rate request directly.

    Raises:
        InvalidArgumentError: For itemised requests, whose status is
            derived from their tasks.
    """
    if request.is_itemised:
        raise InvalidArgumentError(
            f"Request {request.id} is itemised; change its task statuses instead"
        )
    return request.model_copy(update={"status": status})


def approve_request(request: RequestModel) -> RequestModel:
    """Authorise every task (or the overall figure) of a request."""
    if request.is_itemised:
        return with_tasks(request, approve_all(request.tasks))
    return set_request_status(request, RequestStatus.AUTHORISED)


def decline_request(request: RequestModel) -> RequestModel:
    """Decline every task (or the overall figure) of a request."""
    if request.is_itemised:
        return with_tasks(request, decline_all(request.tasks))
    return set_request_status(request, RequestStatus.DECLINED)
