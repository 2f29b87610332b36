"""
Pydantic schemas for update-status reporting.
"""

from enum import Enum

from pydantic import BaseModel, Field


class UpdateStatus(str, Enum):
    """Release status of a project."""

    CURRENT = "current"
    NOT_CURRENT = "not_current"
    NOT_SECURE = "not_secure"
    UNKNOWN = "unknown"


class ProjectUpdateStatus(BaseModel):
    """A project pending update-check presentation."""

    name: str = Field(..., min_length=1, description="Project machine name")
    title: str | None = Field(None, description="Human-readable project title")
    existing_version: str | None = Field(None, description="Installed version")
    latest_version: str | None = Field(None, description="Latest available version")
    status: UpdateStatus = Field(UpdateStatus.UNKNOWN, description="Release status")


class UpdateReportResponse(BaseModel):
    """Update report after excluded projects are removed."""

    projects: list[ProjectUpdateStatus]
    excluded: list[str] = Field(
        default_factory=list,
        description="Projects hidden from the report because they are excluded",
    )
