"""Task model: one billable line item on a repair request."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from techdash_mcp.enums import TaskStatus
from techdash_mcp.validation import coerce_hours, normalize_task_status


class TaskModel(BaseModel):
    """Model representing a billable task with its authorisation status."""

    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = ""
    estimated_hours: float = 0.0
    parts_required: bool = False
    # Unknown stored values are kept as raw strings; see validation.normalize_task_status
    status: TaskStatus | str = Field(default=TaskStatus.PENDING, union_mode="left_to_right")

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def _coerce_hours(cls, v: Any) -> float:
        return coerce_hours(v)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, v: Any) -> TaskStatus | str:
        return normalize_task_status(v)
