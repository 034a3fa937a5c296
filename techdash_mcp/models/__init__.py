"""Pydantic models for Tech Dash MCP."""

from techdash_mcp.models.billing import BillingMode, FlatRateBilling, ItemisedBilling
from techdash_mcp.models.inputs import (
    ApproveAllInput,
    CreateRequestInput,
    DeclineAllInput,
    DeleteRequestInput,
    EditTaskInput,
    GetRequestInput,
    LabourSummaryInput,
    ListRequestsInput,
    SetRequestStatusInput,
    SetTaskStatusInput,
    TaskInput,
)
from techdash_mcp.models.report import LabourSummary, RequestLabour
from techdash_mcp.models.request import RequestModel
from techdash_mcp.models.task import TaskModel

__all__ = [
    # Domain models
    "TaskModel",
    "RequestModel",
    "BillingMode",
    "ItemisedBilling",
    "FlatRateBilling",
    # Tool input models
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
    # Report output models
    "RequestLabour",
    "LabourSummary",
]
