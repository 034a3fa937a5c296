"""Utility functions for Tech Dash MCP."""

from techdash_mcp.utils.formatters import (
    _format_request_concise,
    _format_request_markdown,
    _format_requests_concise,
    _format_requests_markdown,
    _format_summary_concise,
    _format_summary_markdown,
    _request_to_dict,
)
from techdash_mcp.utils.parsers import _parse_request, _parse_requests, _parse_task
from techdash_mcp.utils.store import RequestStore, get_store

__all__ = [
    "RequestStore",
    "get_store",
    "_parse_task",
    "_parse_request",
    "_parse_requests",
    "_format_request_concise",
    "_format_request_markdown",
    "_format_requests_concise",
    "_format_requests_markdown",
    "_format_summary_concise",
    "_format_summary_markdown",
    "_request_to_dict",
]
