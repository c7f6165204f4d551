"""
DevConnector Backend: Shared Response Schemas
==============================================

Error envelope, simple message bodies and the health check response.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    msg: str = Field(description="Human-readable error description")
    param: Optional[str] = Field(
        default=None,
        description="Request field or header the error refers to",
    )


class ErrorResponse(BaseModel):
    """
    Standardized error body for every 4xx/5xx answer.

    Example:
        {"errors": [{"msg": "Please include a valid email", "param": "email"}]}
    """
    errors: List[ErrorDetail]


class MessageResponse(BaseModel):
    msg: str


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
