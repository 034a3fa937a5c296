"""Formatting utilities for request output."""

from techdash_mcp.engine.labour import total_hours
from techdash_mcp.enums import TaskStatus
from techdash_mcp.models.report import LabourSummary
from techdash_mcp.models.request import RequestModel
from techdash_mcp.models.task import TaskModel
from techdash_mcp.validation import normalize_request_status, status_label


def _hours(value: float) -> str:
    return f"{value:.1f}"


def _format_request_concise(request: RequestModel) -> str:
    """
    Format a single request in concise format.

    Output: "#5: AB12CDE WIP 4471 (Partially authorised, 0.5/0.8 hrs)"
    """
    request_id = request.id if request.id is not None else "?"
    approved = total_hours(request, TaskStatus.AUTHORISED)
    requested = total_hours(request)
    return (
        f"#{request_id}: {request.registration} WIP {request.vehicle_job_id} "
        f"({status_label(request.status)}, {_hours(approved)}/{_hours(requested)} hrs)"
    )


def _format_requests_concise(requests: list[RequestModel], title: str | None = None) -> str:
    """
    Format a list of requests in concise format.

    Output:
    2 request(s) | pending
    #1: AB12CDE WIP 4471 (Pending, 0.0/1.5 hrs)
    #2: XY34ZZZ WIP 4472 (Pending, 0.0/2.0 hrs)
    """
    if not requests:
        return "0 requests"

    header = f"{len(requests)} request(s)"
    if title:
        header = f"{len(requests)} request(s) | {title}"

    lines = [header]
    lines.extend(_format_request_concise(r) for r in requests)
    return "\n".join(lines)


def _format_task_line(index: int, task: TaskModel) -> str:
    parts = " | parts required" if task.parts_required else ""
    desc = task.description or "No description"
    return f"  {index}. {desc} ({_hours(task.estimated_hours)} hrs{parts}) - {status_label(task.status)}"


def _format_request_markdown(request: RequestModel) -> str:
    """Format a single request as markdown."""
    request_id = request.id if request.id is not None else "?"
    lines = [f"### [{request_id}] {request.registration} - {request.work_description}"]

    details = [
        f"**WIP**: {request.vehicle_job_id}",
        f"**Status**: {status_label(request.status)}",
        f"**Approved**: {_hours(total_hours(request, TaskStatus.AUTHORISED))} hrs",
        f"**Requested**: {_hours(total_hours(request))} hrs",
    ]
    lines.append(" | ".join(details))

    if request.tasks:
        lines.append("**Tasks:**")
        for i, task in enumerate(request.tasks):
            lines.append(_format_task_line(i, task))
    elif request.overall_labour_hours is not None:
        lines.append(f"**Overall labour**: {_hours(request.overall_labour_hours)} hrs")
    else:
        lines.append("**Overall labour**: not specified")

    return "\n".join(lines)


def _format_requests_markdown(requests: list[RequestModel], title: str = "Requests") -> str:
    """Format a list of requests as markdown."""
    if not requests:
        return f"# {title}\n\nNo requests found."

    lines = [f"# {title}", f"*{len(requests)} request(s)*", ""]

    for request in requests:
        lines.append(_format_request_markdown(request))
        lines.append("")

    return "\n".join(lines)


def _format_summary_markdown(summary: LabourSummary, include_requests: bool = True) -> str:
    """Format the labour dashboard as markdown."""
    lines = [
        "# Tech Dash",
        "",
        f"**Hours approved:** {_hours(summary.approved_hours)} hrs | "
        f"**Hours requested:** {_hours(summary.requested_hours)} hrs",
        f"*{summary.request_count} request(s)*",
    ]

    if summary.status_counts:
        lines.append("")
        lines.append("## By Status")
        for status, count in summary.status_counts.items():
            lines.append(f"- **{status_label(normalize_request_status(status))}**: {count}")

    if include_requests and summary.requests:
        lines.extend(["", "## Requests", "", "| ID | Reg | Status | Approved hrs | Requested hrs |", "|---|---|---|---|---|"])
        for row in summary.requests:
            request_id = row.request_id if row.request_id is not None else "?"
            label = status_label(normalize_request_status(row.status))
            lines.append(
                f"| {request_id} | {row.registration} | {label} | "
                f"{_hours(row.approved_hours)} | {_hours(row.requested_hours)} |"
            )

    return "\n".join(lines)


def _format_summary_concise(summary: LabourSummary) -> str:
    """Output: "3 request(s) | approved 0.5 hrs | requested 2.8 hrs" """
    return (
        f"{summary.request_count} request(s) | approved {_hours(summary.approved_hours)} hrs | "
        f"requested {_hours(summary.requested_hours)} hrs"
    )


def _request_to_dict(request: RequestModel) -> dict:
    """JSON-ready request data with its hour totals."""
    data = request.model_dump(mode="json")
    data["approved_hours"] = total_hours(request, TaskStatus.AUTHORISED)
    data["requested_hours"] = total_hours(request)
    return data
