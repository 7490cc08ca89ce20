"""Response bodies of the HTTP surface."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body shared by the 400, 405 and 500 responses."""

    error: str = Field(description="Fixed error label, e.g. 'Invalid task specified'")
    details: str | None = Field(default=None, description="Underlying failure message (500 only)")


class HealthResponse(BaseModel):
    """Response for the /health endpoint."""

    ok: bool = Field(description="Always true while the service is up")
    version: str = Field(description="Gateway version")
