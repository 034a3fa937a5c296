"""Parser helpers for stored request data."""

from typing import Any

from techdash_mcp.models.request import RequestModel
from techdash_mcp.models.task import TaskModel

# Field names used by earlier versions of the dashboard
_LEGACY_REQUEST_FIELDS = {
    "wip": "vehicle_job_id",
    "reg": "registration",
    "work": "work_description",
    "overallLabour": "overall_labour_hours",
}
_LEGACY_TASK_FIELDS = {
    "desc": "description",
    "time": "estimated_hours",
    "parts": "parts_required",
    "approved": "status",
}


def _rename(data: dict[str, Any], mapping: dict[str, str]) -> dict[str, Any]:
    renamed: dict[str, Any] = {}
    for key, value in data.items():
        new_key = mapping.get(key, key)
        # A current-style key wins over its legacy spelling
        if new_key in renamed and key in mapping:
            continue
        renamed[new_key] = value
    return renamed


def _normalize_task_dict(task_dict: dict[str, Any]) -> dict[str, Any]:
    data = dict(task_dict)
    # Legacy rows carry only a boolean "approved" flag; a real status overrides it
    if "status" in data:
        data.pop("approved", None)
    return _rename(data, _LEGACY_TASK_FIELDS)


def _parse_task(task_dict: dict[str, Any]) -> TaskModel:
    """
    Parse a stored task dictionary into a TaskModel.

    Args:
        task_dict: Task dictionary in current or legacy form

    Returns:
        TaskModel instance with validated data
    """
    return TaskModel.model_validate(_normalize_task_dict(task_dict))


def _parse_request(request_dict: dict[str, Any]) -> RequestModel:
    """
    Parse a stored request dictionary into a RequestModel.

    Accepts the legacy field names (wip, reg, work, overallLabour) and legacy
    status spellings; itemised requests get their status re-derived.

    Args:
        request_dict: Request dictionary, e.g. a decoded database row

    Returns:
        RequestModel instance with validated data
    """
    data = _rename(request_dict, _LEGACY_REQUEST_FIELDS)
    tasks = data.get("tasks") or []
    data["tasks"] = [_normalize_task_dict(t) for t in tasks if isinstance(t, dict)]
    return RequestModel.model_validate(data)


def _parse_requests(requests: list[dict[str, Any]]) -> list[RequestModel]:
    """Parse a list of stored request dictionaries."""
    return [_parse_request(r) for r in requests]
