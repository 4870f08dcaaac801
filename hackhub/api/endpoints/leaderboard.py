from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hackhub.api.dependencies import get_db
from hackhub.core.errors import NotFound
from hackhub.core.policy import Capability, check_capability
from hackhub.models import user as user_model
from hackhub.services import auth_service, event_service, leaderboard_service
from hackhub.schemas import joined_schemas, leaderboard_schemas

router = APIRouter()


@router.get("/events/{event_id}/leaderboard", response_model=List[joined_schemas.LeaderboardRow])
def get_leaderboard_endpoint(event_id: str, db: Session = Depends(get_db)):
    return leaderboard_service.get_event_leaderboard(db, event_id)


@router.post(
    "/events/{event_id}/leaderboard",
    response_model=leaderboard_schemas.LeaderboardEntryRead,
    status_code=status.HTTP_201_CREATED,
)
def create_leaderboard_entry_endpoint(
    event_id: str,
    entry_in: leaderboard_schemas.LeaderboardEntryCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    event = event_service.get_event(db, event_id)
    if not event:
        raise NotFound("Event not found")
    check_capability(Capability.OWNER_OR_ADMIN, current_user, owner_id=event.organizer_id)
    return leaderboard_service.create_leaderboard_entry(db, event_id, entry_in)


@router.patch("/leaderboard/{entry_id}", response_model=leaderboard_schemas.LeaderboardEntryRead)
def update_leaderboard_entry_endpoint(
    entry_id: str,
    entry_in: leaderboard_schemas.LeaderboardEntryUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    entry = leaderboard_service.get_leaderboard_entry(db, entry_id)
    if not entry:
        raise NotFound("Leaderboard entry not found")
    check_capability(Capability.OWNER_OR_ADMIN, current_user, owner_id=entry.event.organizer_id)
    return leaderboard_service.update_leaderboard_entry(db, entry_id, entry_in)
