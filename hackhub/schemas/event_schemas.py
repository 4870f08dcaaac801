from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from hackhub.models.event import Difficulty, EventStatus
from hackhub.schemas.base import CamelModel, UtcDatetime, OptionalUtcDatetime


class Resource(CamelModel):
    title: str
    url: str
    type: str


class EventBase(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    short_description: Optional[str] = None
    status: EventStatus = EventStatus.DRAFT
    start_date: UtcDatetime
    end_date: UtcDatetime
    registration_deadline: UtcDatetime
    max_participants: Optional[int] = Field(default=None, ge=1)
    prize_pool: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = Field(default=None, max_length=100)
    difficulty: Optional[Difficulty] = None
    requirements: Optional[str] = None
    rules: Optional[str] = None
    judges_criteria: Optional[str] = None
    resources: List[Resource] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    banner_image_url: Optional[str] = Field(default=None, max_length=500)
    is_public: bool = True
    allow_teams: bool = True
    max_team_size: int = Field(default=4, ge=1)


class EventCreate(EventBase):
    @model_validator(mode="after")
    def end_date_after_start_date(self):
        if self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class EventUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    short_description: Optional[str] = None
    status: Optional[EventStatus] = None
    start_date: OptionalUtcDatetime = None
    end_date: OptionalUtcDatetime = None
    registration_deadline: OptionalUtcDatetime = None
    max_participants: Optional[int] = Field(default=None, ge=1)
    prize_pool: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = Field(default=None, max_length=100)
    difficulty: Optional[Difficulty] = None
    requirements: Optional[str] = None
    rules: Optional[str] = None
    judges_criteria: Optional[str] = None
    resources: Optional[List[Resource]] = None
    tags: Optional[List[str]] = None
    banner_image_url: Optional[str] = Field(default=None, max_length=500)
    is_public: Optional[bool] = None
    allow_teams: Optional[bool] = None
    max_team_size: Optional[int] = Field(default=None, ge=1)


class EventRead(EventBase):
    id: str
    organizer_id: str
    current_participants: int
    created_at: OptionalUtcDatetime = None
    updated_at: OptionalUtcDatetime = None


class EventFilters(BaseModel):
    status: Optional[EventStatus] = None
    category: Optional[str] = None
    search: Optional[str] = None
    organizer_id: Optional[str] = None
    start_date: OptionalUtcDatetime = None
    end_date: OptionalUtcDatetime = None

