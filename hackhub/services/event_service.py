import logging
from typing import List, Optional

from pydantic.alias_generators import to_camel
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from hackhub.core.errors import NotFound, ValidationError
from hackhub.core.time_utils import ensure_utc, utcnow
from hackhub.models import event as event_model
from hackhub.models import registration as registration_model
from hackhub.schemas import event_schemas, joined_schemas, user_schemas

logger = logging.getLogger(__name__)

# Patchable fields whose column or read model has no null
NOT_NULL_FIELDS = (
    "title",
    "description",
    "status",
    "start_date",
    "end_date",
    "registration_deadline",
    "resources",
    "tags",
    "is_public",
    "allow_teams",
    "max_team_size",
)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get_event(db: Session, event_id: str) -> Optional[event_model.Event]:
    return db.query(event_model.Event).filter(event_model.Event.id == event_id).first()


def list_events(db: Session, filters: Optional[event_schemas.EventFilters] = None) -> List[event_model.Event]:
    Event = event_model.Event
    query = db.query(Event)

    if filters is not None:
        if filters.status:
            query = query.filter(Event.status == filters.status.value)
        if filters.category:
            query = query.filter(Event.category == filters.category)
        if filters.search:
            pattern = f"%{_escape_like(filters.search)}%"
            query = query.filter(
                or_(
                    Event.title.ilike(pattern, escape="\\"),
                    Event.description.ilike(pattern, escape="\\"),
                )
            )
        if filters.organizer_id:
            query = query.filter(Event.organizer_id == filters.organizer_id)
        if filters.start_date:
            query = query.filter(Event.start_date >= filters.start_date)
        if filters.end_date:
            query = query.filter(Event.end_date <= filters.end_date)

    return query.order_by(Event.created_at.desc()).all()


def get_event_with_details(db: Session, event_id: str) -> Optional[joined_schemas.EventDetail]:
    """Event plus its organizer and every registration, or None."""
    event = (
        db.query(event_model.Event)
        .options(
            joinedload(event_model.Event.organizer),
            selectinload(event_model.Event.registrations),
        )
        .filter(event_model.Event.id == event_id)
        .first()
    )
    if not event:
        return None
    return joined_schemas.EventDetail.model_validate(event)


def create_event(db: Session, event_in: event_schemas.EventCreate, organizer_id: str) -> event_model.Event:
    data = event_in.model_dump(mode="python")
    data["status"] = event_in.status.value
    data["difficulty"] = event_in.difficulty.value if event_in.difficulty else None

    db_event = event_model.Event(
        **data,
        organizer_id=organizer_id,
        current_participants=0,
    )
    db.add(db_event)
    db.commit()
    db.refresh(db_event)
    logger.info("Event %s created by %s", db_event.id, organizer_id)
    return db_event


def update_event(db: Session, event_id: str, event_update: event_schemas.EventUpdate) -> event_model.Event:
    db_event = get_event(db, event_id)
    if not db_event:
        raise NotFound("Event not found")

    update_data = event_update.model_dump(exclude_unset=True)
    if "status" in update_data and update_data["status"] is not None:
        update_data["status"] = update_data["status"].value
    if "difficulty" in update_data and update_data["difficulty"] is not None:
        update_data["difficulty"] = update_data["difficulty"].value

    # Columns that may not be NULL reject an explicit null in the patch
    errors = []
    for field in NOT_NULL_FIELDS:
        if field in update_data and update_data[field] is None:
            errors.append({"field": to_camel(field), "message": "Field may not be null"})
    if errors:
        raise ValidationError(errors)

    start_date = update_data.get("start_date", db_event.start_date)
    end_date = update_data.get("end_date", db_event.end_date)
    if ensure_utc(end_date) < ensure_utc(start_date):
        raise ValidationError.for_field("endDate", "End date must be after start date")

    max_participants = update_data.get("max_participants")
    if max_participants is not None and max_participants < db_event.current_participants:
        raise ValidationError.for_field(
            "maxParticipants",
            f"Cannot be lower than the {db_event.current_participants} participants already registered",
        )

    for key, value in update_data.items():
        setattr(db_event, key, value)
    db_event.updated_at = utcnow()

    db.commit()
    db.refresh(db_event)
    return db_event


def delete_event(db: Session, event_id: str) -> None:
    db_event = get_event(db, event_id)
    if not db_event:
        raise NotFound("Event not found")

    # Registrations and leaderboard rows go with it (ON DELETE CASCADE)
    db.delete(db_event)
    db.commit()
    logger.info("Event %s deleted", event_id)


def get_platform_stats(db: Session) -> user_schemas.PlatformStats:
    Event = event_model.Event
    total_events = db.query(func.count(Event.id)).scalar()
    total_participants = db.query(func.count(registration_model.EventRegistration.id)).scalar()
    active_events = db.query(func.count(Event.id)).filter(
        Event.status == event_model.EventStatus.LIVE.value
    ).scalar()
    completed_events = db.query(func.count(Event.id)).filter(
        Event.status == event_model.EventStatus.COMPLETED.value
    ).scalar()

    return user_schemas.PlatformStats(
        total_events=total_events or 0,
        total_participants=total_participants or 0,
        active_events=active_events or 0,
        completed_events=completed_events or 0,
    )
