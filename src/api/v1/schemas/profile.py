"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.profile import Profile


class ProfileUpdate(BaseModel):
    """Schema for updating a Profile. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=100)
    bio: str | None = Field(None, max_length=1000)
    avatar_url: str | None = Field(None, max_length=500)


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Alice",
                "email": "alice@example.com",
                "bio": "Full Stack Developer",
                "avatar_url": None,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    bio: str = ""
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        return cls.model_validate(profile)


class AuthorResponse(BaseModel):
    """Author block embedded in posts and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    bio: str = ""
    avatar_url: str | None = None


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse
