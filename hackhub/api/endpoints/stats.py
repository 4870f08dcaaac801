from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hackhub.api.dependencies import get_db
from hackhub.services import event_service
from hackhub.schemas import user_schemas

router = APIRouter()


@router.get("/stats", response_model=user_schemas.PlatformStats)
def get_stats_endpoint(db: Session = Depends(get_db)):
    return event_service.get_platform_stats(db)
