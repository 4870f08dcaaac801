"""
Registration workflow.

Capacity is tracked by the denormalized `Event.current_participants`
counter. It is only ever moved by relative UPDATEs issued in the same
transaction as the registration row write, and the increment is guarded by
the capacity condition, so concurrent registrations can neither lose an
update nor push the counter past `max_participants`. Duplicate protection
is the UNIQUE(event_id, user_id) constraint; the lookups done beforehand
only produce a friendlier error on the common path.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from hackhub.core.errors import (
    CapacityExceeded,
    DuplicateRegistration,
    InvalidState,
    NotFound,
    ValidationError,
)
from hackhub.core.policy import Capability, check_capability
from hackhub.core.time_utils import ensure_utc, utcnow
from hackhub.models import event as event_model
from hackhub.models import registration as registration_model
from hackhub.models import user as user_model
from hackhub.schemas import joined_schemas, registration_schemas

logger = logging.getLogger(__name__)

Event = event_model.Event
EventRegistration = registration_model.EventRegistration


def get_registration(db: Session, registration_id: str) -> Optional[EventRegistration]:
    return db.query(EventRegistration).filter(EventRegistration.id == registration_id).first()


def get_registration_for(db: Session, event_id: str, user_id: str) -> Optional[EventRegistration]:
    return db.query(EventRegistration).filter(
        EventRegistration.event_id == event_id,
        EventRegistration.user_id == user_id,
    ).first()


def get_event_registrations(db: Session, event_id: str) -> List[joined_schemas.RegistrationWithUser]:
    registrations = (
        db.query(EventRegistration)
        .options(joinedload(EventRegistration.user))
        .filter(EventRegistration.event_id == event_id)
        .order_by(EventRegistration.registered_at.asc())
        .all()
    )
    return [joined_schemas.RegistrationWithUser.model_validate(r) for r in registrations]


def get_user_registrations(db: Session, user_id: str) -> List[joined_schemas.RegistrationWithEvent]:
    registrations = (
        db.query(EventRegistration)
        .options(joinedload(EventRegistration.event))
        .filter(EventRegistration.user_id == user_id)
        .order_by(EventRegistration.registered_at.desc())
        .all()
    )
    return [joined_schemas.RegistrationWithEvent.model_validate(r) for r in registrations]


def _check_team(event: Event, registration_in: registration_schemas.RegistrationCreate) -> None:
    has_team = bool(registration_in.team_name) or bool(registration_in.team_members)
    if has_team and not event.allow_teams:
        raise ValidationError.for_field("teamName", "This event does not allow teams")

    # The registering user counts as the first team member
    team_size = len(registration_in.team_members) + 1
    if event.max_team_size is not None and team_size > event.max_team_size:
        raise ValidationError.for_field(
            "teamMembers", f"Teams are limited to {event.max_team_size} members"
        )


def register(
    db: Session,
    event_id: str,
    user_id: str,
    registration_in: Optional[registration_schemas.RegistrationCreate] = None,
) -> EventRegistration:
    if registration_in is None:
        registration_in = registration_schemas.RegistrationCreate()

    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFound("Event not found")

    if event.status != event_model.EventStatus.UPCOMING.value:
        logger.warning("Rejected registration of %s for %s: status is %s", user_id, event_id, event.status)
        raise InvalidState("Registration is not open for this event")

    if utcnow() > ensure_utc(event.registration_deadline):
        logger.warning("Rejected registration of %s for %s: deadline passed", user_id, event_id)
        raise InvalidState("Registration deadline has passed")

    if event.max_participants is not None and event.current_participants >= event.max_participants:
        logger.warning("Rejected registration of %s for %s: event full", user_id, event_id)
        raise CapacityExceeded()

    if get_registration_for(db, event_id, user_id) is not None:
        raise DuplicateRegistration()

    _check_team(event, registration_in)

    db_registration = EventRegistration(
        event_id=event_id,
        user_id=user_id,
        team_name=registration_in.team_name,
        team_members=[member.model_dump(exclude_none=True) for member in registration_in.team_members],
        status=registration_model.RegistrationStatus.CONFIRMED.value,
        registered_at=utcnow(),
    )
    db.add(db_registration)
    try:
        db.flush()
    except IntegrityError:
        # Lost the race against a concurrent request for the same pair
        db.rollback()
        raise DuplicateRegistration()

    claim_slot = (
        update(Event)
        .where(
            Event.id == event_id,
            or_(
                Event.max_participants.is_(None),
                Event.current_participants < Event.max_participants,
            ),
        )
        .values(current_participants=Event.current_participants + 1)
        .execution_options(synchronize_session=False)
    )
    result = db.execute(claim_slot)
    if result.rowcount == 0:
        # The last slot went to a concurrent registration after our read
        db.rollback()
        logger.warning("Rejected registration of %s for %s: event full", user_id, event_id)
        raise CapacityExceeded()

    db.commit()
    db.refresh(db_registration)
    logger.info("User %s registered for event %s (registration %s)", user_id, event_id, db_registration.id)
    return db_registration


def cancel(db: Session, registration_id: str, requester: user_model.User) -> None:
    """Deletes the registration and releases its slot. Owner or admin only."""
    registration = get_registration(db, registration_id)
    if not registration:
        raise NotFound("Registration not found")
    check_capability(Capability.OWNER_OR_ADMIN, requester, owner_id=registration.user_id)

    event_id = registration.event_id
    result = db.execute(
        delete(EventRegistration).where(EventRegistration.id == registration_id)
    )
    if result.rowcount == 0:
        # A concurrent cancel removed the row after our read
        db.rollback()
        raise NotFound("Registration not found")
    db.execute(
        update(Event)
        .where(Event.id == event_id)
        .values(current_participants=Event.current_participants - 1)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    logger.info("Registration %s for event %s cancelled by %s", registration_id, event_id, requester.id)


def submit_project(
    db: Session,
    registration_id: str,
    requester: user_model.User,
    submission_in: registration_schemas.SubmissionUpdate,
) -> EventRegistration:
    registration = get_registration(db, registration_id)
    if not registration:
        raise NotFound("Registration not found")
    check_capability(Capability.OWNER, requester, owner_id=registration.user_id)

    open_statuses = (event_model.EventStatus.UPCOMING.value, event_model.EventStatus.LIVE.value)
    if registration.event.status not in open_statuses:
        raise InvalidState("Submissions are closed for this event")

    registration.submission_url = str(submission_in.submission_url)
    registration.submission_description = submission_in.submission_description
    registration.submitted_at = utcnow()
    db.commit()
    db.refresh(registration)
    return registration
