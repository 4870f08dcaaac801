from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hackhub.api.dependencies import get_db
from hackhub.core.policy import Capability, check_capability
from hackhub.models import user as user_model
from hackhub.services import auth_service, user_service
from hackhub.schemas import user_schemas

router = APIRouter()


@router.get("/users", response_model=List[user_schemas.UserRead])
def list_users_endpoint(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    check_capability(Capability.ADMIN, current_user)
    return user_service.list_users(db)
