from typing import Optional

from pydantic import Field

from hackhub.models.user import UserRole
from hackhub.schemas.base import CamelModel, OptionalUtcDatetime


class UserRead(CamelModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: UserRole
    created_at: OptionalUtcDatetime = None
    updated_at: OptionalUtcDatetime = None


class UserProfileUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)


class RoleUpdate(CamelModel):
    role: UserRole


class PlatformStats(CamelModel):
    total_events: int
    total_participants: int
    active_events: int
    completed_events: int
