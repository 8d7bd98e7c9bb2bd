"""Common response Pydantic schemas."""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class UpsertResponse(BaseModel):
    """Successful upsert response."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"action": "INSERTED", "affectedRecords": 1}},
    )

    action: str = Field(..., pattern="^(INSERTED|UPDATED)$", description="Action taken")
    affected_records: int = Field(1, alias="affectedRecords", description="Rows affected")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Current server time")
    database: str = Field(..., description="Database connection status")
