"""Input models for Tech Dash MCP tools."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from techdash_mcp.enums import RequestStatus, ResponseFormat, TaskStatus
from techdash_mcp.validation import coerce_hours

# ============================================================================
# Request Tool Input Models
# ============================================================================


class TaskInput(BaseModel):
    """One task line on a new request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = Field(..., description="What the task involves (required)", min_length=1, max_length=1000)
    estimated_hours: float = Field(default=0.0, description="Estimated labour time in hours")
    parts_required: bool = Field(default=False, description="Whether parts must be ordered for this task")

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def validate_estimated_hours(cls, v: Any) -> float:
        return coerce_hours(v)


class ListRequestsInput(BaseModel):
    """Input model for listing requests."""

    model_config = ConfigDict(str_strip_whitespace=True)

    status: RequestStatus | None = Field(
        default=None,
        description="Only list requests with this status (e.g. 'pending', 'partially_authorised')",
    )
    registration: str | None = Field(default=None, description="Only list requests for this registration")
    limit: int | None = Field(default=50, description="Maximum number of requests to return", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown', 'concise' or 'json'",
    )


class GetRequestInput(BaseModel):
    """Input model for getting a single request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    request_id: int = Field(..., description="ID of the request to retrieve", ge=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown', 'concise' or 'json'",
    )


class CreateRequestInput(BaseModel):
    """Input model for submitting a new authorisation request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    vehicle_job_id: str = Field(..., description="Workshop job (WIP) number", min_length=1, max_length=100)
    registration: str = Field(..., description="Vehicle registration", min_length=1, max_length=20)
    work_description: str = Field(..., description="Summary of the work requested", min_length=1, max_length=2000)
    overall_labour_hours: float | None = Field(
        default=None,
        description="Overall labour time; only used when no tasks are listed",
    )
    tasks: list[TaskInput] = Field(default_factory=list, description="Itemised tasks", max_length=100)

    @field_validator("vehicle_job_id", "registration", "work_description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("registration")
    @classmethod
    def validate_registration(cls, v: str) -> str:
        return v.upper()

    @field_validator("overall_labour_hours", mode="before")
    @classmethod
    def validate_overall_labour_hours(cls, v: Any) -> float | None:
        if v is None or v == "":
            return None
        return coerce_hours(v)


class SetTaskStatusInput(BaseModel):
    """Input model for changing one task's status."""

    model_config = ConfigDict(str_strip_whitespace=True)

    request_id: int = Field(..., description="ID of the request", ge=1)
    task_index: int = Field(..., description="Zero-based position of the task in the request", ge=0)
    status: TaskStatus = Field(..., description="New task status")


class EditTaskInput(BaseModel):
    """Input model for editing one task's fields."""

    model_config = ConfigDict(str_strip_whitespace=True)

    request_id: int = Field(..., description="ID of the request", ge=1)
    task_index: int = Field(..., description="Zero-based position of the task in the request", ge=0)
    description: str | None = Field(default=None, description="New task description", min_length=1)
    estimated_hours: float | None = Field(default=None, description="New labour estimate in hours")
    parts_required: bool | None = Field(default=None, description="New parts-required flag")

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def validate_estimated_hours(cls, v: Any) -> float | None:
        if v is None:
            return None
        return coerce_hours(v)


class SetRequestStatusInput(BaseModel):
    """Input model for setting the status of a flat-rate request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    request_id: int = Field(..., description="ID of the request", ge=1)
    status: RequestStatus = Field(..., description="New request status")


class ApproveAllInput(BaseModel):
    """Input model for authorising a whole request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    request_id: int = Field(..., description="ID of the request to authorise", ge=1)


class DeclineAllInput(BaseModel):
    """Input model for declining a whole request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    request_id: int = Field(..., description="ID of the request to decline", ge=1)


class DeleteRequestInput(BaseModel):
    """Input model for deleting a request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    request_id: int = Field(..., description="ID of the request to delete", ge=1)


# ============================================================================
# Reporting Input Models
# ============================================================================


class LabourSummaryInput(BaseModel):
    """Input model for the labour dashboard."""

    model_config = ConfigDict(str_strip_whitespace=True)

    include_requests: bool = Field(default=True, description="Include the per-request breakdown")
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown', 'concise' or 'json'",
    )
