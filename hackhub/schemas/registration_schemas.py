from typing import List, Optional

from pydantic import AnyHttpUrl, EmailStr, Field

from hackhub.models.registration import RegistrationStatus
from hackhub.schemas.base import CamelModel, OptionalUtcDatetime


class TeamMember(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    role: Optional[str] = None


class RegistrationCreate(CamelModel):
    team_name: Optional[str] = Field(default=None, max_length=255)
    team_members: List[TeamMember] = Field(default_factory=list)


class SubmissionUpdate(CamelModel):
    submission_url: AnyHttpUrl
    submission_description: Optional[str] = None


class RegistrationRead(CamelModel):
    id: str
    event_id: str
    user_id: str
    team_name: Optional[str] = None
    team_members: List[TeamMember] = Field(default_factory=list)
    status: RegistrationStatus
    registered_at: OptionalUtcDatetime = None
    submission_url: Optional[str] = None
    submission_description: Optional[str] = None
    submitted_at: OptionalUtcDatetime = None
