"""Output models for labour reporting."""

from pydantic import BaseModel, Field


class RequestLabour(BaseModel):
    """Approved and requested hours for one request."""

    request_id: int | None = None
    registration: str
    status: str
    approved_hours: float
    requested_hours: float


class LabourSummary(BaseModel):
    """Dashboard totals across a set of requests."""

    approved_hours: float
    requested_hours: float
    request_count: int
    status_counts: dict[str, int] = Field(default_factory=dict)
    requests: list[RequestLabour] = Field(default_factory=list)
