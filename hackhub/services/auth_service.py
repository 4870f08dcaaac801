from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from hackhub.api.dependencies import get_db
from hackhub.core import security
from hackhub.core.errors import Unauthenticated
from hackhub.models import user as user_model
from hackhub.services import user_service


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security.bearer_scheme),
    db: Session = Depends(get_db),
) -> user_model.User:
    """
    Resolves the caller from the bearer token issued by the identity provider.
    The user row is created on first sight and its profile refreshed from the
    token claims on later requests.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthenticated("Not authenticated")

    token_data = security.verify_token(credentials.credentials)
    return user_service.upsert_user(db, token_data)
