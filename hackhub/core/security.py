from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from fastapi.security import HTTPBearer

from hackhub.core.config import settings
from hackhub.core.errors import Unauthenticated
from hackhub.schemas import auth_schemas

# Tokens are issued by the external identity provider; we only verify them.
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> auth_schemas.TokenData:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise Unauthenticated()

    user_id = payload.get("sub")  # 'sub' carries the provider's user id
    if not user_id:
        raise Unauthenticated()
    return auth_schemas.TokenData(
        sub=user_id,
        email=payload.get("email"),
        first_name=payload.get("first_name"),
        last_name=payload.get("last_name"),
        profile_image_url=payload.get("profile_image_url"),
    )
