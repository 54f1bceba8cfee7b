"""Pydantic schemas for the diagnostic endpoint."""

from datetime import datetime

from pydantic import BaseModel, Field


class DiagnosticResponse(BaseModel):
    """Response body for GET /api/test."""

    message: str
    time: datetime = Field(description="Current database time (SELECT NOW())")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
