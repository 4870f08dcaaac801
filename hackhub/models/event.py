import enum
import uuid

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from hackhub.core.database import Base
from hackhub.core.time_utils import utcnow


class EventStatus(str, enum.Enum):
    DRAFT = "draft"
    UPCOMING = "upcoming"
    LIVE = "live"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Difficulty(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    short_description = Column(Text, nullable=True)
    organizer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), default=EventStatus.DRAFT.value, nullable=False, index=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    registration_deadline = Column(DateTime(timezone=True), nullable=False)
    max_participants = Column(Integer, nullable=True)  # None means unlimited
    # Denormalized count of registrations; only ever changed by relative UPDATEs
    current_participants = Column(Integer, default=0, nullable=False)
    prize_pool = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True, index=True)
    difficulty = Column(String(20), nullable=True)
    requirements = Column(Text, nullable=True)
    rules = Column(Text, nullable=True)
    judges_criteria = Column(Text, nullable=True)
    resources = Column(JSON, default=list)  # [{"title": ..., "url": ..., "type": ...}]
    tags = Column(JSON, default=list)
    banner_image_url = Column(String(500), nullable=True)
    is_public = Column(Boolean, default=True)
    allow_teams = Column(Boolean, default=True)
    max_team_size = Column(Integer, default=4)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    organizer = relationship("User", back_populates="organized_events")
    registrations = relationship(
        "EventRegistration",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    leaderboard_entries = relationship(
        "LeaderboardEntry",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
