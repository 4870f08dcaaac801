from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hackhub.api.dependencies import get_db
from hackhub.core.errors import NotFound
from hackhub.core.policy import Capability, check_capability
from hackhub.models import user as user_model
from hackhub.services import auth_service, event_service, registration_service
from hackhub.schemas import joined_schemas, registration_schemas

router = APIRouter()


@router.post(
    "/events/{event_id}/register",
    response_model=registration_schemas.RegistrationRead,
    status_code=status.HTTP_201_CREATED,
)
def register_for_event_endpoint(
    event_id: str,
    registration_in: Optional[registration_schemas.RegistrationCreate] = None,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    check_capability(Capability.AUTHENTICATED, current_user)
    return registration_service.register(db, event_id, current_user.id, registration_in)


@router.get("/events/{event_id}/registrations", response_model=List[joined_schemas.RegistrationWithUser])
def list_event_registrations_endpoint(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    event = event_service.get_event(db, event_id)
    if not event:
        raise NotFound("Event not found")
    check_capability(Capability.OWNER_OR_ADMIN, current_user, owner_id=event.organizer_id)
    return registration_service.get_event_registrations(db, event_id)


@router.get("/users/{user_id}/registrations", response_model=List[joined_schemas.RegistrationWithEvent])
def list_user_registrations_endpoint(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    check_capability(Capability.OWNER_OR_ADMIN, current_user, owner_id=user_id)
    return registration_service.get_user_registrations(db, user_id)


@router.delete("/registrations/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_registration_endpoint(
    registration_id: str,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
) -> None:
    registration_service.cancel(db, registration_id, current_user)


@router.patch("/registrations/{registration_id}/submission", response_model=registration_schemas.RegistrationRead)
def submit_project_endpoint(
    registration_id: str,
    submission_in: registration_schemas.SubmissionUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    return registration_service.submit_project(db, registration_id, current_user, submission_in)
