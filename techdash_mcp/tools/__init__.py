"""MCP tool definitions for Tech Dash."""

# Import all tools to register them with the MCP server
from techdash_mcp.tools.reports import techdash_labour_summary
from techdash_mcp.tools.requests import (
    techdash_approve_all,
    techdash_create_request,
    techdash_decline_all,
    techdash_delete_request,
    techdash_edit_task,
    techdash_get_request,
    techdash_list_requests,
    techdash_set_request_status,
    techdash_set_task_status,
)

__all__ = [
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
]
