"""Billing modes for a repair request.

A request is billed either task by task or with a single overall labour
figure, never both. The two are modelled as a tagged union on ``mode``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, field_validator

from techdash_mcp.models.task import TaskModel
from techdash_mcp.validation import coerce_hours


class ItemisedBilling(BaseModel):
    """Labour is the sum of the request's tasks."""

    mode: Literal["itemised"] = "itemised"
    tasks: list[TaskModel] = Field(..., min_length=1)


class FlatRateBilling(BaseModel):
    """Labour is one overall figure, gated by the request's own status."""

    mode: Literal["flat_rate"] = "flat_rate"
    hours: float | None = None

    @field_validator("hours", mode="before")
    @classmethod
    def _coerce_hours(cls, v: Any) -> float | None:
        if v is None or v == "":
            return None
        return coerce_hours(v)


BillingMode = Annotated[Union[ItemisedBilling, FlatRateBilling], Field(discriminator="mode")]


def billing_from_fields(tasks: list[Any] | None, overall_labour_hours: Any = None) -> dict[str, Any]:
    """
    Build billing data from the flat ``tasks`` / ``overall_labour_hours`` pair.

    A non-empty task list always wins; the overall figure is then ignored.
    """
    if tasks:
        return {"mode": "itemised", "tasks": list(tasks)}
    return {"mode": "flat_rate", "hours": overall_labour_hours}
