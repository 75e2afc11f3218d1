from typing import Optional, Union

from pydantic import BaseModel


class ViolationOut(BaseModel):
    """One violation as rendered in API responses."""

    kind: str
    message: str
    template: str
    parameters: dict[str, Union[str, int]] = {}
    code: Optional[int] = None


class ValidationResponse(BaseModel):
    """Response from the /validate endpoint."""

    valid: bool
    filename: Optional[str] = None
    violations: list[ViolationOut] = []


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    error: str
    message: str


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    checks: dict
    version: str
