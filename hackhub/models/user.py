import enum
import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from hackhub.core.database import Base
from hackhub.core.time_utils import utcnow


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    ORGANIZER = "organizer"
    PARTICIPANT = "participant"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    role = Column(String(20), default=UserRole.PARTICIPANT.value, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    organized_events = relationship("Event", back_populates="organizer")
    # Registrations are looked up through the user, never owned by it.
    registrations = relationship("EventRegistration", back_populates="user", passive_deletes=True)
