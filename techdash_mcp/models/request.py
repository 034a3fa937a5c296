"""Repair authorisation request model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from techdash_mcp.enums import RequestStatus
from techdash_mcp.models.billing import BillingMode, FlatRateBilling, ItemisedBilling, billing_from_fields
from techdash_mcp.models.task import TaskModel
from techdash_mcp.validation import normalize_request_status


class RequestModel(BaseModel):
    """
    A workshop's request to authorise work on a vehicle.

    Accepts either a ``billing`` object or the flat ``tasks`` /
    ``overall_labour_hours`` pair. With itemised billing the status is
    re-derived from the tasks every time the model is validated.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: int | None = None
    vehicle_job_id: str = Field(..., min_length=1)
    registration: str = Field(..., min_length=1)
    work_description: str = Field(..., min_length=1)
    status: RequestStatus | str = Field(default=RequestStatus.PENDING, union_mode="left_to_right")
    billing: BillingMode = Field(default_factory=FlatRateBilling)

    @model_validator(mode="before")
    @classmethod
    def _select_billing_mode(cls, data: Any) -> Any:
        if isinstance(data, dict) and "billing" not in data:
            data = dict(data)
            tasks = data.pop("tasks", None)
            hours = data.pop("overall_labour_hours", None)
            data["billing"] = billing_from_fields(tasks, hours)
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, v: Any) -> RequestStatus | str:
        return normalize_request_status(v)

    @model_validator(mode="after")
    def _derive_itemised_status(self) -> RequestModel:
        from techdash_mcp.engine.status import derive_status

        if isinstance(self.billing, ItemisedBilling):
            self.status = derive_status(self.billing.tasks)
        return self

    @property
    def is_itemised(self) -> bool:
        return isinstance(self.billing, ItemisedBilling)

    @property
    def tasks(self) -> list[TaskModel]:
        """Tasks of an itemised request; empty for flat-rate billing."""
        if isinstance(self.billing, ItemisedBilling):
            return self.billing.tasks
        return []

    @property
    def overall_labour_hours(self) -> float | None:
        """Overall labour figure of a flat-rate request; None when itemised."""
        if isinstance(self.billing, FlatRateBilling):
            return self.billing.hours
        return None
