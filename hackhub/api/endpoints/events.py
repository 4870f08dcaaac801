from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hackhub.api.dependencies import get_db
from hackhub.core.errors import NotFound
from hackhub.core.policy import Capability, check_capability
from hackhub.models import event as event_model
from hackhub.models import user as user_model
from hackhub.services import auth_service, event_service
from hackhub.schemas import event_schemas, joined_schemas

router = APIRouter()


def _get_event_or_404(db: Session, event_id: str) -> event_model.Event:
    event = event_service.get_event(db, event_id)
    if not event:
        raise NotFound("Event not found")
    return event


@router.get("", response_model=List[event_schemas.EventRead])
def list_events_endpoint(
    status_filter: Optional[event_model.EventStatus] = Query(default=None, alias="status"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    organizer_id: Optional[str] = Query(default=None, alias="organizerId"),
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
):
    filters = event_schemas.EventFilters(
        status=status_filter,
        category=category,
        search=search,
        organizer_id=organizer_id,
        start_date=start_date,
        end_date=end_date,
    )
    return event_service.list_events(db, filters)


@router.get("/{event_id}", response_model=joined_schemas.EventDetail)
def get_event_endpoint(event_id: str, db: Session = Depends(get_db)):
    event = event_service.get_event_with_details(db, event_id)
    if not event:
        raise NotFound("Event not found")
    return event


@router.post("", response_model=event_schemas.EventRead, status_code=status.HTTP_201_CREATED)
def create_event_endpoint(
    event_in: event_schemas.EventCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    check_capability(Capability.ORGANIZER, current_user)
    return event_service.create_event(db, event_in, organizer_id=current_user.id)


@router.patch("/{event_id}", response_model=event_schemas.EventRead)
def update_event_endpoint(
    event_id: str,
    event_in: event_schemas.EventUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    event = _get_event_or_404(db, event_id)
    check_capability(Capability.OWNER_OR_ADMIN, current_user, owner_id=event.organizer_id)
    return event_service.update_event(db, event_id, event_in)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event_endpoint(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
) -> None:
    event = _get_event_or_404(db, event_id)
    check_capability(Capability.OWNER_OR_ADMIN, current_user, owner_id=event.organizer_id)
    event_service.delete_event(db, event_id)
