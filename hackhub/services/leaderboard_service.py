import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from hackhub.core.errors import NotFound, ValidationError
from hackhub.models import leaderboard as leaderboard_model
from hackhub.models import registration as registration_model
from hackhub.schemas import joined_schemas, leaderboard_schemas

logger = logging.getLogger(__name__)

LeaderboardEntry = leaderboard_model.LeaderboardEntry


def get_event_leaderboard(db: Session, event_id: str) -> List[joined_schemas.LeaderboardRow]:
    """
    Ranked rows for one event, best position first. Each row carries the
    registration (team info) and its user, so callers need no further lookups.
    An event without entries, or an unknown event id, yields an empty list.
    """
    entries = (
        db.query(LeaderboardEntry)
        .options(
            joinedload(LeaderboardEntry.registration).joinedload(registration_model.EventRegistration.user)
        )
        .filter(LeaderboardEntry.event_id == event_id)
        .order_by(LeaderboardEntry.position.asc())
        .all()
    )
    return [joined_schemas.LeaderboardRow.model_validate(entry) for entry in entries]


def get_leaderboard_entry(db: Session, entry_id: str) -> Optional[LeaderboardEntry]:
    return db.query(LeaderboardEntry).filter(LeaderboardEntry.id == entry_id).first()


def _position_taken(db: Session, event_id: str, position: int, exclude_id: Optional[str] = None) -> bool:
    query = db.query(LeaderboardEntry).filter(
        LeaderboardEntry.event_id == event_id,
        LeaderboardEntry.position == position,
    )
    if exclude_id:
        query = query.filter(LeaderboardEntry.id != exclude_id)
    return query.first() is not None


def _registration_ranked(db: Session, registration_id: str, exclude_id: Optional[str] = None) -> bool:
    query = db.query(LeaderboardEntry).filter(LeaderboardEntry.registration_id == registration_id)
    if exclude_id:
        query = query.filter(LeaderboardEntry.id != exclude_id)
    return query.first() is not None


def _commit_entry(db: Session, entry: LeaderboardEntry) -> LeaderboardEntry:
    entry_id, registration_id, position = entry.id, entry.registration_id, entry.position
    try:
        db.commit()
    except IntegrityError:
        # A concurrent write took the slot; report the constraint that was hit
        db.rollback()
        if _registration_ranked(db, registration_id, exclude_id=entry_id):
            raise ValidationError.for_field("registrationId", "Registration already has a leaderboard entry")
        raise ValidationError.for_field("position", f"Position {position} is already taken")
    db.refresh(entry)
    return entry


def create_leaderboard_entry(
    db: Session, event_id: str, entry_in: leaderboard_schemas.LeaderboardEntryCreate
) -> LeaderboardEntry:
    # Positions are assigned by the caller; nothing is re-ranked here.
    registration = db.query(registration_model.EventRegistration).filter(
        registration_model.EventRegistration.id == entry_in.registration_id
    ).first()
    if not registration or registration.event_id != event_id:
        raise ValidationError.for_field("registrationId", "Registration does not belong to this event")

    if _registration_ranked(db, registration.id):
        raise ValidationError.for_field("registrationId", "Registration already has a leaderboard entry")

    if _position_taken(db, event_id, entry_in.position):
        raise ValidationError.for_field("position", f"Position {entry_in.position} is already taken")

    entry = LeaderboardEntry(event_id=event_id, **entry_in.model_dump())
    db.add(entry)
    entry = _commit_entry(db, entry)
    logger.info("Leaderboard entry %s added to event %s at position %s", entry.id, event_id, entry.position)
    return entry


def update_leaderboard_entry(
    db: Session, entry_id: str, entry_update: leaderboard_schemas.LeaderboardEntryUpdate
) -> LeaderboardEntry:
    entry = get_leaderboard_entry(db, entry_id)
    if not entry:
        raise NotFound("Leaderboard entry not found")

    update_data = entry_update.model_dump(exclude_unset=True)
    if "position" in update_data:
        if update_data["position"] is None:
            raise ValidationError.for_field("position", "Field may not be null")
        if _position_taken(db, entry.event_id, update_data["position"], exclude_id=entry.id):
            raise ValidationError.for_field("position", f"Position {update_data['position']} is already taken")
    if "score" in update_data and update_data["score"] is None:
        update_data["score"] = 0

    for key, value in update_data.items():
        setattr(entry, key, value)
    return _commit_entry(db, entry)
