from typing import Optional

from pydantic import Field

from hackhub.schemas.base import CamelModel, OptionalUtcDatetime


class LeaderboardEntryCreate(CamelModel):
    registration_id: str
    position: int = Field(ge=1)
    score: int = 0
    prize: Optional[str] = Field(default=None, max_length=255)
    judge_feedback: Optional[str] = None


class LeaderboardEntryUpdate(CamelModel):
    position: Optional[int] = Field(default=None, ge=1)
    score: Optional[int] = None
    prize: Optional[str] = Field(default=None, max_length=255)
    judge_feedback: Optional[str] = None


class LeaderboardEntryRead(CamelModel):
    id: str
    event_id: str
    registration_id: str
    position: int
    score: int = 0
    prize: Optional[str] = None
    judge_feedback: Optional[str] = None
    created_at: OptionalUtcDatetime = None
