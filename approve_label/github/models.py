"""Pydantic models for the records returned by the GitHub GraphQL API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TeamMember(BaseModel):
    """Pydantic model for a member of an organization team."""

    login: str
    email: str | None = None
    name: str | None = None


class Label(BaseModel):
    """Pydantic model for a repository label."""

    id: str
    name: str
    color: str
    description: str | None = None


class Comment(BaseModel):
    """Pydantic model for a comment created on a pull request."""

    model_config = ConfigDict(populate_by_name=True)

    created_at: datetime = Field(alias="createdAt")
    body: str
