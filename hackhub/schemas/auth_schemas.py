from pydantic import BaseModel
from typing import Optional


class TokenData(BaseModel):
    # 'sub' is the identity provider's user id; the other claims are profile hints
    sub: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
