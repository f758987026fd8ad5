"""Shared response shapes."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from tenant_admin.shared.utils.datetime import ensure_utc


class EntityResponse(BaseModel):
    """Fields every stored entity carries. Timestamps are always returned as UTC."""

    model_config = ConfigDict(from_attributes=True)

    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @field_validator("created_at", "updated_at", "deleted_at", mode="after")
    @classmethod
    def _as_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class AssignmentResponse(BaseModel):
    """Result of an assign/remove call on an association."""

    changed: bool
