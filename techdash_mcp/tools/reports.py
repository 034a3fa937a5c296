"""Labour reporting MCP tools for Tech Dash."""

import json

from mcp.types import ToolAnnotations
from pydantic import ValidationError

from techdash_mcp.engine.labour import summarize_labour
from techdash_mcp.enums import ResponseFormat
from techdash_mcp.exceptions import TechDashError
from techdash_mcp.models.inputs import LabourSummaryInput
from techdash_mcp.server import mcp
from techdash_mcp.utils.formatters import _format_summary_concise, _format_summary_markdown
from techdash_mcp.utils.store import get_store


@mcp.tool(
    name="techdash_labour_summary",
    annotations=ToolAnnotations(
        title="Labour Summary",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def techdash_labour_summary(params: LabourSummaryInput) -> str:
    """
    Dashboard totals: hours approved and hours still requested.

    Hours approved counts authorised tasks, plus the overall figure of
    authorised flat-rate requests. Hours requested counts every request
    that is not fully authorised yet (pending, declined, awaiting customer
    response or partially authorised).

    USE THIS WHEN:
    - Reporting how much labour has been signed off
    - Checking the workload still waiting for a decision

    DO NOT USE WHEN:
    - You need the tasks of a request → use techdash_get_request

    Args:
        params: LabourSummaryInput with include_requests and response_format

    Returns:
        Labour summary (markdown, concise or JSON)
    """
    try:
        summary = summarize_labour(get_store().list())
    except (TechDashError, ValidationError) as e:
        return f"Error: {type(e).__name__} - {e}"

    if params.response_format == ResponseFormat.JSON:
        exclude = None if params.include_requests else {"requests"}
        return json.dumps(summary.model_dump(exclude=exclude), indent=2)

    if params.response_format == ResponseFormat.CONCISE:
        return _format_summary_concise(summary)

    return _format_summary_markdown(summary, include_requests=params.include_requests)
