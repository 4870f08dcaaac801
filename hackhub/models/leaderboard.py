import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from hackhub.core.database import Base
from hackhub.core.time_utils import utcnow


class LeaderboardEntry(Base):
    __tablename__ = "leaderboard"
    __table_args__ = (
        UniqueConstraint("event_id", "position", name="uq_leaderboard_event_position"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    registration_id = Column(
        String(36),
        ForeignKey("event_registrations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    position = Column(Integer, nullable=False)  # 1 = first place
    score = Column(Integer, default=0)
    prize = Column(String(255), nullable=True)
    judge_feedback = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    event = relationship("Event", back_populates="leaderboard_entries")
    registration = relationship("EventRegistration", back_populates="leaderboard_entry")
