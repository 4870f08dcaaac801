"""
Result types for the joined reads.

Each query that stitches rows from several tables gets its own model, so
callers never have to guess which nested keys are present.
"""

from typing import List

from pydantic import Field

from hackhub.schemas.event_schemas import EventRead
from hackhub.schemas.leaderboard_schemas import LeaderboardEntryRead
from hackhub.schemas.registration_schemas import RegistrationRead
from hackhub.schemas.user_schemas import UserRead


class EventDetail(EventRead):
    organizer: UserRead
    registrations: List[RegistrationRead] = Field(default_factory=list)


class RegistrationWithUser(RegistrationRead):
    user: UserRead


class RegistrationWithEvent(RegistrationRead):
    event: EventRead


class LeaderboardRow(LeaderboardEntryRead):
    registration: RegistrationWithUser
