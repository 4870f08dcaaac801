from fastapi import APIRouter, Depends

from hackhub.models import user as user_model
from hackhub.services import auth_service
from hackhub.schemas import user_schemas

router = APIRouter()


@router.get("/user", response_model=user_schemas.UserRead)
def read_current_user(
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    return current_user
