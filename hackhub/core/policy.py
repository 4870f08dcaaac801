"""
Route capabilities and the single evaluator that enforces them.

Each route declares what it needs; handlers never compare roles inline.
"""

import enum
from typing import Optional

from hackhub.core.errors import Forbidden, Unauthenticated
from hackhub.models.user import User, UserRole


class Capability(str, enum.Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ORGANIZER = "organizer"          # organizer or admin
    OWNER = "owner"                  # resource owner only
    OWNER_OR_ADMIN = "owner_or_admin"
    ADMIN = "admin"


def is_admin(user: Optional[User]) -> bool:
    return user is not None and user.role == UserRole.ADMIN.value


def check_capability(capability: Capability, user: Optional[User], owner_id: Optional[str] = None) -> None:
    """Raises Unauthenticated/Forbidden unless `user` holds `capability`."""
    if capability == Capability.PUBLIC:
        return
    if user is None:
        raise Unauthenticated()

    if capability == Capability.AUTHENTICATED:
        return
    if capability == Capability.ADMIN:
        allowed = is_admin(user)
    elif capability == Capability.ORGANIZER:
        allowed = user.role in (UserRole.ORGANIZER.value, UserRole.ADMIN.value)
    elif capability == Capability.OWNER:
        allowed = owner_id is not None and owner_id == user.id
    elif capability == Capability.OWNER_OR_ADMIN:
        allowed = is_admin(user) or (owner_id is not None and owner_id == user.id)
    else:
        allowed = False

    if not allowed:
        raise Forbidden()
