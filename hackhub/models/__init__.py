from hackhub.core.database import Base

# Import all models here to ensure they are registered with Base
from .user import User, UserRole
from .event import Event, EventStatus, Difficulty
from .registration import EventRegistration, RegistrationStatus
from .leaderboard import LeaderboardEntry

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Event",
    "EventStatus",
    "Difficulty",
    "EventRegistration",
    "RegistrationStatus",
    "LeaderboardEntry",
]
