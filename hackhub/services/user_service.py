import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hackhub.core.errors import NotFound
from hackhub.core.time_utils import utcnow
from hackhub.models import user as user_model
from hackhub.schemas import auth_schemas, user_schemas

logger = logging.getLogger(__name__)

# Claims copied from the bearer token onto the stored profile
PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


def get_user(db: Session, user_id: str) -> Optional[user_model.User]:
    return db.query(user_model.User).filter(user_model.User.id == user_id).first()


def list_users(db: Session) -> List[user_model.User]:
    return db.query(user_model.User).order_by(user_model.User.created_at.desc()).all()


def _email_taken(db: Session, email: str, user_id: str) -> bool:
    return db.query(user_model.User).filter(
        user_model.User.email == email, user_model.User.id != user_id
    ).first() is not None


def upsert_user(db: Session, token_data: auth_schemas.TokenData) -> user_model.User:
    """
    Returns the stored user for the token subject, creating it on first sight.
    Profile fields present in the token overwrite stale ones; the role is never
    taken from the token.
    """
    user = get_user(db, token_data.sub)
    if user is None:
        user = user_model.User(id=token_data.sub)
        for claim in PROFILE_CLAIMS:
            setattr(user, claim, getattr(token_data, claim))
        if user.email and _email_taken(db, user.email, user.id):
            # Email already linked to another account; keep the account, drop the email
            user.email = None
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Another request for the same subject won the insert
            db.rollback()
            return get_user(db, token_data.sub)
        db.refresh(user)
        logger.info("Created user %s on first authentication", user.id)
        return user

    update_data = {}
    for claim in PROFILE_CLAIMS:
        value = getattr(token_data, claim)
        if value is not None and getattr(user, claim) != value:
            if claim == "email" and _email_taken(db, value, user.id):
                continue
            update_data[claim] = value

    if update_data:
        for key, value in update_data.items():
            setattr(user, key, value)
        user.updated_at = utcnow()
        db.commit()
        db.refresh(user)
    return user


def update_profile(db: Session, user: user_model.User, profile_in: user_schemas.UserProfileUpdate) -> user_model.User:
    update_data = profile_in.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(user, key, value)
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    return user


def set_role(db: Session, user_id: str, role: user_model.UserRole) -> user_model.User:
    user = get_user(db, user_id)
    if not user:
        raise NotFound("User not found")

    previous = user.role
    user.role = role.value
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    logger.info("Changed role of user %s from %s to %s", user.id, previous, user.role)
    return user
