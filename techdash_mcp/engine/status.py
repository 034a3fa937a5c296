"""Derivation of a request's overall status from its task statuses."""

from collections.abc import Sequence

from techdash_mcp.enums import RequestStatus, TaskStatus
from techdash_mcp.exceptions import InvalidArgumentError
from techdash_mcp.models.task import TaskModel


def derive_status(tasks: Sequence[TaskModel]) -> RequestStatus:
    """
    Compute a request's status from its tasks.

    Rules are checked in order and the first match wins:
        1. every task declined            -> DECLINED
        2. any task awaiting the customer -> AWAITING_CUSTOMER_RESPONSE
        3. every task authorised          -> AUTHORISED
        4. some task authorised           -> PARTIALLY_AUTHORISED
        5. otherwise                      -> PENDING

    Args:
        tasks: Non-empty sequence of tasks

    Returns:
        The derived RequestStatus

    Raises:
        InvalidArgumentError: If ``tasks`` is empty. Flat-rate requests keep
            their own status and must not be derived.
    """
    if not tasks:
        raise InvalidArgumentError("Cannot derive a status from an empty task list")

    statuses = [t.status for t in tasks]

    if all(s == TaskStatus.DECLINED for s in statuses):
        return RequestStatus.DECLINED
    if any(s == TaskStatus.AWAITING_CUSTOMER_RESPONSE for s in statuses):
        return RequestStatus.AWAITING_CUSTOMER_RESPONSE
    if all(s == TaskStatus.AUTHORISED for s in statuses):
        return RequestStatus.AUTHORISED
    if any(s == TaskStatus.AUTHORISED for s in statuses):
        return RequestStatus.PARTIALLY_AUTHORISED
    return RequestStatus.PENDING


def _with_status(tasks: Sequence[TaskModel], status: TaskStatus) -> list[TaskModel]:
    return [t.model_copy(update={"status": status}) for t in tasks]


def approve_all(tasks: Sequence[TaskModel]) -> list[TaskModel]:
    """Return copies of ``tasks`` with every status set to AUTHORISED."""
    return _with_status(tasks, TaskStatus.AUTHORISED)


def decline_all(tasks: Sequence[TaskModel]) -> list[TaskModel]:
    """Return copies of ``tasks`` with every status set to DECLINED."""
    return _with_status(tasks, TaskStatus.DECLINED)


def set_task_status(tasks: Sequence[TaskModel], index: int, status: TaskStatus) -> list[TaskModel]:
    """Return copies of ``tasks`` with the task at ``index`` set to ``status``."""
    if not 0 <= index < len(tasks):
        raise InvalidArgumentError(f"Task index {index} out of range (request has {len(tasks)} task(s))")
    updated = [t.model_copy() for t in tasks]
    updated[index] = updated[index].model_copy(update={"status": status})
    return updated
