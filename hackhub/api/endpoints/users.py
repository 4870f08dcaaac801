from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hackhub.api.dependencies import get_db
from hackhub.core.policy import Capability, check_capability
from hackhub.models import user as user_model
from hackhub.services import auth_service, user_service
from hackhub.schemas import user_schemas

router = APIRouter()


@router.patch("/me", response_model=user_schemas.UserRead)
def update_users_me(
    profile_in: user_schemas.UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    return user_service.update_profile(db, current_user, profile_in)


@router.patch("/{user_id}/role", response_model=user_schemas.UserRead)
def update_user_role(
    user_id: str,
    role_in: user_schemas.RoleUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    check_capability(Capability.ADMIN, current_user)
    return user_service.set_role(db, user_id, role_in.role)
