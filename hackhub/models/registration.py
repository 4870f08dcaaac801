import enum
import uuid

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from hackhub.core.database import Base
from hackhub.core.time_utils import utcnow


class RegistrationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"  # kept for schema compatibility; cancelling deletes the row


class EventRegistration(Base):
    __tablename__ = "event_registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_registration_event_user"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    team_name = Column(String(255), nullable=True)
    team_members = Column(JSON, default=list)  # [{"name": ..., "email": ..., "role": ...}]
    status = Column(String(20), default=RegistrationStatus.CONFIRMED.value, nullable=False)
    registered_at = Column(DateTime(timezone=True), default=utcnow)
    submission_url = Column(String(500), nullable=True)
    submission_description = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True)

    event = relationship("Event", back_populates="registrations")
    user = relationship("User", back_populates="registrations")
    leaderboard_entry = relationship(
        "LeaderboardEntry",
        back_populates="registration",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
